"""Request matcher over a compiled ``DispatchTable``.

Lookup order:

1. ``static[path][method]`` — exact string lookup.
2. Each chunk's combined regex, in declaration order.  The first chunk
   that matches decides the outcome, even if the method is wrong there.
3. Otherwise ``NotFound``, or ``MethodNotAllowed`` if the literal path
   exists for other methods.

Misses are returned as values rather than raised, so callers can map
them to responses without exception handling on the hot path.  The
matcher never mutates shared state and can be used from any number of
threads.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias

from trill._internal.types import Handler
from trill.errors import URLBuildError
from trill.routing.handlers import HandlerResolver, ImportResolver
from trill.routing.route import RouteMatch
from trill.routing.table import DispatchTable, RouteTarget
from trill.routing.urls import build_url


@dataclass(frozen=True, slots=True)
class NotFound:
    """404 — no route matched the request path."""

    method: str
    path: str
    status: int = 404

    @property
    def detail(self) -> str:
        return f"No route matches {self.method} {self.path!r}"


@dataclass(frozen=True, slots=True)
class MethodNotAllowed:
    """405 — a route matches the path, but not for this HTTP method.

    ``headers`` carries the ``Allow`` header for the response.
    """

    allowed: tuple[str, ...]
    status: int = 405

    @property
    def allow(self) -> str:
        return ", ".join(self.allowed)

    @property
    def detail(self) -> str:
        return f"Method not allowed. Allowed methods: {self.allow}"

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return (("Allow", self.allow),)


MatchResult: TypeAlias = RouteMatch | NotFound | MethodNotAllowed


class Matcher:
    """Matches requests against a compiled dispatch table.

    Usage::

        matcher = Matcher(load_table("routes.json"))
        result = matcher.match("GET", "/users/42")
        if isinstance(result, RouteMatch):
            ...
    """

    __slots__ = ("_chunks", "_resolver", "_table")

    def __init__(self, table: DispatchTable, resolver: HandlerResolver | None = None) -> None:
        self._table = table
        self._chunks: tuple[tuple[re.Pattern[str], Mapping[int, Mapping[str, RouteTarget]]], ...] = tuple(
            (re.compile(chunk.regex), chunk.route_map) for chunk in table.variable
        )
        self._resolver = resolver or ImportResolver()

    @property
    def table(self) -> DispatchTable:
        return self._table

    def match(self, method: str, path: str) -> MatchResult:
        """Match *method* and *path* against the table."""
        method = method.upper()
        static_routes = self._table.static.get(path)
        if static_routes is not None and method in static_routes:
            return RouteMatch(callback=static_routes[method], path_params={})

        for regex, route_map in self._chunks:
            found = regex.fullmatch(path)
            if found is None:
                continue

            # The matched alternative's marker group is always the last one closed.
            position = found.lastindex or 0
            routes = route_map[position]
            target = routes.get(method)
            if target is None:
                return MethodNotAllowed(_allowed(routes, static_routes))

            callback, variables = target
            values = found.groups()[position - 1 - len(variables) : position - 1]
            return RouteMatch(callback=callback, path_params=dict(zip(variables, values, strict=True)))

        if static_routes:
            return MethodNotAllowed(_allowed(static_routes))
        return NotFound(method=method, path=path)

    def resolve(self, method: str, path: str) -> tuple[Handler, dict[str, str]] | NotFound | MethodNotAllowed:
        """Match, then resolve the callback through the handler resolver."""
        result = self.match(method, path)
        if not isinstance(result, RouteMatch):
            return result
        return self._resolver.resolve(result.callback), result.path_params

    def url_for(self, name: str, /, **values: object) -> str:
        """Build the path for the route registered as *name*.

        Raises ``URLBuildError`` for unknown names or missing values.
        """
        route = self._table.named.get(name)
        if route is None:
            msg = f"No route named {name!r}"
            raise URLBuildError(msg)
        return build_url(name, route, values)


def _allowed(*method_maps: Mapping[str, object] | None) -> tuple[str, ...]:
    allowed: set[str] = set()
    for methods in method_maps:
        if methods:
            allowed.update(methods)
    return tuple(sorted(allowed))
