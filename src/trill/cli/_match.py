"""``trill match`` and ``trill url`` — query a compiled dispatch table."""

import argparse
import sys

from trill.cli._resolve import resolve_table
from trill.errors import URLBuildError
from trill.routing.matcher import Matcher, MethodNotAllowed
from trill.routing.route import RouteMatch


def run_match(args: argparse.Namespace) -> None:
    """Print what ``args.method`` + ``args.path`` resolve to.

    Exits with status 1 when nothing matches.
    """
    matcher = Matcher(resolve_table(args.table))
    result = matcher.match(args.method, args.path)

    if isinstance(result, RouteMatch):
        print(f"{result.status} {result.callback}")
        for name, value in result.path_params.items():
            print(f"  {name} = {value}")
        return

    print(f"{result.status} {result.detail}")
    if isinstance(result, MethodNotAllowed):
        for header, value in result.headers:
            print(f"  {header}: {value}")
    raise SystemExit(1)


def run_url(args: argparse.Namespace) -> None:
    """Print the path for named route ``args.name`` filled with ``KEY=VALUE`` pairs."""
    values: dict[str, str] = {}
    for pair in args.values:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: expected KEY=VALUE, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        values[key] = value

    matcher = Matcher(resolve_table(args.table))
    try:
        print(matcher.url_for(args.name, **values))
    except URLBuildError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
