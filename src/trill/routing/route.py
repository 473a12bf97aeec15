"""RouteDefinition, HandlerRef, and RouteMatch frozen dataclasses."""

from collections.abc import Iterable
from dataclasses import dataclass

from trill._internal.types import Callback
from trill.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class HandlerRef:
    """Tagged reference to a handler method.

    ``target`` is an import string for the declaring class
    (``"shop.front.catalog:ProductController"``) and ``method`` the
    action on it.  Resolved to a callable by a ``HandlerResolver``.
    """

    target: str
    method: str

    def __str__(self) -> str:
        return f"{self.target}.{self.method}"


def normalize_methods(methods: str | Iterable[str]) -> tuple[str, ...]:
    """Normalize a verb or collection of verbs to upper-case, de-duplicated.

    Declaration order is kept so compiled tables are reproducible.
    Raises ``ConfigurationError`` if no method is given.
    """
    if isinstance(methods, str):
        methods = [methods]
    normalized = tuple(dict.fromkeys(m.strip().upper() for m in methods if m and m.strip()))
    if not normalized:
        msg = "A route needs at least one HTTP method."
        raise ConfigurationError(msg)
    return normalized


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A declared route. Immutable once created."""

    methods: tuple[str, ...]
    pattern: str
    callback: Callback
    name: str | None = None

    @classmethod
    def create(
        cls,
        methods: str | Iterable[str],
        pattern: str,
        callback: Callback,
        name: str | None = None,
    ) -> "RouteDefinition":
        return cls(normalize_methods(methods), pattern, callback, name)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    callback: Callback
    path_params: dict[str, str]
    status: int = 200
