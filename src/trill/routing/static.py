"""Static (exact-match) route table."""

from collections.abc import Sequence

from trill._internal.types import Callback
from trill.errors import DuplicateRouteError, ShadowedRouteError
from trill.routing.variable import VariableRouteTable


class StaticRouteTable:
    """Exact-match routes keyed by literal path, then method.

    Shadowing is checked against the variable routes declared *so far*;
    a variable route declared later may overlap a static route freely.
    """

    __slots__ = ("_routes", "_variable_routes")

    def __init__(self, variable_routes: VariableRouteTable) -> None:
        self._routes: dict[str, dict[str, Callback]] = {}
        self._variable_routes = variable_routes

    def add(self, methods: Sequence[str], path: str, callback: Callback) -> None:
        """Register *path* for every method in *methods*.

        Raises ``DuplicateRouteError`` if ``(path, method)`` is taken, and
        ``ShadowedRouteError`` if an earlier variable route for the same
        method matches *path* in full.
        """
        existing = self._routes.get(path, {})
        for method in methods:
            if method in existing:
                raise DuplicateRouteError(path, method)

        for method in methods:
            shadow = self._variable_routes.first_match(method, path)
            if shadow is not None:
                raise ShadowedRouteError(path, shadow.regex, method)

        routes = self._routes.setdefault(path, {})
        for method in methods:
            routes[method] = callback

    def as_dict(self) -> dict[str, dict[str, Callback]]:
        """Copy of the table: ``path -> method -> callback``."""
        return {path: dict(methods) for path, methods in self._routes.items()}
