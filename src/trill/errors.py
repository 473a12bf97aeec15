"""Trill exception hierarchy.

Shared across the tokenizer, compiler, storage, and matcher so every
module raises and catches the same types.

Compile-time problems are exceptions and abort the compilation pass.
Request-time misses (``NotFound``, ``MethodNotAllowed``) are result
values, see ``trill.routing.matcher``.
"""


class TrillError(Exception):
    """Base for all trill-specific errors."""


class ConfigurationError(TrillError):
    """Raised when route declarations or compiler settings are invalid."""


class RouteError(ConfigurationError):
    """Base for route collisions detected while compiling."""


class DuplicateRouteError(RouteError):
    """Two routes share the same literal path (or regex) and method."""

    def __init__(self, route: str, method: str) -> None:
        self.route = route
        self.method = method
        super().__init__(
            f"Cannot register two routes matching {route!r} for method {method!r}"
        )


class DuplicatePlaceholderError(RouteError):
    """A placeholder name appears twice in one route pattern."""

    def __init__(self, name: str, pattern: str = "") -> None:
        self.name = name
        self.pattern = pattern
        msg = f"Cannot use the same placeholder {name!r} twice"
        if pattern:
            msg = f"{msg} (in {pattern!r})"
        super().__init__(msg)


class ShadowedRouteError(RouteError):
    """A static route is also matched by an earlier variable route."""

    def __init__(self, route: str, regex: str, method: str) -> None:
        self.route = route
        self.regex = regex
        self.method = method
        super().__init__(
            f"Static route {route!r} is shadowed by previously defined "
            f"variable route {regex!r} for method {method!r}"
        )


class URLBuildError(TrillError):
    """A named route cannot be turned back into a concrete path."""


class HandlerResolutionError(TrillError):
    """A handler reference cannot be resolved to a callable."""
