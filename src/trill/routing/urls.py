"""Reverse routing — build concrete paths from named-route templates."""

import re
from collections.abc import Mapping
from urllib.parse import quote

from trill.errors import URLBuildError
from trill.routing.table import NamedRoute

_MARKER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def build_url(name: str, route: NamedRoute, values: Mapping[str, object]) -> str:
    """Substitute *values* into *route*'s template.

    Values are percent-quoted, keeping ``/`` so catch-all variables
    survive.  Raises ``URLBuildError`` if a variable has no value.
    Extra values are ignored.
    """
    missing = [var for var in route.variables if var not in values]
    if missing:
        msg = f"Route {name!r} needs a value for: {', '.join(missing)}"
        raise URLBuildError(msg)

    def substitute(match: re.Match[str]) -> str:
        var = match.group(1)
        if var not in route.variables:
            return match.group(0)
        return quote(str(values[var]), safe="/")

    return _MARKER_RE.sub(substitute, route.template)
