"""Variable (pattern) route table.

Each route is turned into one anchored regex built from its tokens.
Entries are grouped by regex in declaration order; all methods that
share a regex share one slot in the compiled chunk.
"""

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from trill._internal.types import Callback
from trill.errors import ConfigurationError, DuplicatePlaceholderError, DuplicateRouteError
from trill.routing.params import DEFAULT_PATTERN
from trill.routing.tokens import Literal, RouteToken


@dataclass(frozen=True, slots=True)
class VariableRouteEntry:
    """One ``(regex, method)`` registration."""

    method: str
    regex: str
    variables: tuple[str, ...]
    callback: Callback
    compiled: re.Pattern[str] = field(compare=False, repr=False)

    def fullmatch(self, path: str) -> bool:
        return self.compiled.fullmatch(path) is not None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Regex, reverse template, and variable names for one route pattern."""

    regex: str
    template: str
    variables: tuple[str, ...]


def compile_pattern(
    tokens: Sequence[RouteToken],
    default_pattern: str = DEFAULT_PATTERN,
    source: str = "",
) -> CompiledPattern:
    """Build the matching regex and reverse template for *tokens*.

    Literal text is escaped into the regex and copied verbatim into the
    template; each placeholder adds one capturing group and a
    ``{name}`` marker.
    """
    regex: list[str] = []
    template: list[str] = []
    variables: list[str] = []

    for token in tokens:
        if isinstance(token, Literal):
            regex.append(re.escape(token.text))
            template.append(token.text)
            continue

        if token.name in variables:
            raise DuplicatePlaceholderError(token.name, source)

        sub_pattern = token.pattern or default_pattern
        _check_sub_pattern(token.name, sub_pattern, source)
        variables.append(token.name)
        regex.append(f"({sub_pattern})")
        template.append(f"{{{token.name}}}")

    joined = "".join(regex)
    try:
        re.compile(joined)
    except re.error as exc:
        msg = f"Route pattern {source!r} does not compile as a whole regex {joined!r}: {exc}"
        raise ConfigurationError(msg) from exc
    return CompiledPattern(joined, "".join(template), tuple(variables))


def _check_sub_pattern(name: str, sub_pattern: str, source: str) -> None:
    try:
        groups = re.compile(sub_pattern).groups
    except re.error as exc:
        msg = f"Placeholder {name!r} in {source!r} has an invalid pattern {sub_pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc
    # Group positions identify the matched route, so sub-patterns may not add groups.
    if groups:
        msg = (
            f"Placeholder {name!r} in {source!r} has a capturing group in {sub_pattern!r}; "
            "use (?:...) instead."
        )
        raise ConfigurationError(msg)


class VariableRouteTable:
    """Pattern routes keyed by ``(regex, method)``, in declaration order."""

    __slots__ = ("_groups",)

    def __init__(self) -> None:
        # regex -> method -> entry
        self._groups: dict[str, dict[str, VariableRouteEntry]] = {}

    def __len__(self) -> int:
        """Number of distinct regexes (chunk slots)."""
        return len(self._groups)

    def add(
        self,
        methods: Sequence[str],
        pattern: CompiledPattern,
        callback: Callback,
    ) -> None:
        """Register *pattern* for every method in *methods*.

        Raises ``DuplicateRouteError`` before inserting anything if any
        ``(regex, method)`` key is already taken.
        """
        existing = self._groups.get(pattern.regex, {})
        for method in methods:
            if method in existing:
                raise DuplicateRouteError(pattern.regex, method)

        compiled = re.compile(pattern.regex)
        group = self._groups.setdefault(pattern.regex, {})
        for method in methods:
            group[method] = VariableRouteEntry(
                method=method,
                regex=pattern.regex,
                variables=pattern.variables,
                callback=callback,
                compiled=compiled,
            )

    def first_match(self, method: str, path: str) -> VariableRouteEntry | None:
        """Return the earliest entry for *method* whose regex matches all of *path*."""
        for group in self._groups.values():
            entry = group.get(method)
            if entry is not None and entry.fullmatch(path):
                return entry
        return None

    def groups(self) -> Iterator[dict[str, VariableRouteEntry]]:
        """Yield each regex's ``method -> entry`` map in declaration order."""
        yield from self._groups.values()
