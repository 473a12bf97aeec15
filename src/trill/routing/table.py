"""The compiled dispatch table.

A ``DispatchTable`` is plain data: literal lookups, chunked regex
sources, and named-route templates.  It is built once by
``RouteCompiler.compile()``, persisted by ``trill.storage``, and read by
``trill.routing.matcher.Matcher``.  Nothing mutates it after creation.
"""

from dataclasses import dataclass
from typing import TypeAlias

from trill._internal.types import Callback

# (callback, ordered variable names)
RouteTarget: TypeAlias = tuple[Callback, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class NamedRoute:
    """Reverse template (``/posts/{year}/{slug}``) and its variable names."""

    template: str
    variables: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Chunk:
    """A group of variable routes combined into one regex.

    ``route_map`` is keyed by the group index of the marker that closes
    each alternative, then by HTTP method.
    """

    regex: str
    route_map: dict[int, dict[str, RouteTarget]]


@dataclass(frozen=True, slots=True)
class DispatchTable:
    """Static, variable, and named route data."""

    static: dict[str, dict[str, Callback]]
    variable: tuple[Chunk, ...]
    named: dict[str, NamedRoute]

    @property
    def static_count(self) -> int:
        """Number of ``(path, method)`` static registrations."""
        return sum(len(methods) for methods in self.static.values())

    @property
    def variable_count(self) -> int:
        """Number of ``(regex, method)`` variable registrations."""
        return sum(
            len(methods) for chunk in self.variable for methods in chunk.route_map.values()
        )
