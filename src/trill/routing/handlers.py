"""Handler lookup — turns stored callbacks into invokable handlers.

The dispatch table stores ``HandlerRef`` values, never live objects.
A ``HandlerResolver`` (usually backed by the application's container)
resolves them at request time.
"""

import importlib
import threading
from collections.abc import Callable
from typing import Any, Protocol

from trill._internal.types import Callback, Handler
from trill.errors import HandlerResolutionError
from trill.routing.route import HandlerRef


class HandlerResolver(Protocol):
    """Anything that can resolve a stored callback to a callable."""

    def resolve(self, callback: Callback) -> Handler: ...


class ImportResolver:
    """Resolve ``HandlerRef("module:Class", "action")`` by importing.

    The class is instantiated through *factory* (default: call it with
    no arguments) and the bound ``action`` method is returned.  A plain
    ``"module:function"`` string resolves to that function.  Results
    are cached per callback.
    """

    __slots__ = ("_cache", "_factory", "_lock")

    def __init__(self, factory: Callable[[type], Any] | None = None) -> None:
        self._factory = factory or (lambda cls: cls())
        self._cache: dict[Callback, Handler] = {}
        self._lock = threading.Lock()

    def resolve(self, callback: Callback) -> Handler:
        cached = self._cache.get(callback)
        if cached is not None:
            return cached
        with self._lock:
            if callback not in self._cache:
                self._cache[callback] = self._load(callback)
            return self._cache[callback]

    def _load(self, callback: Callback) -> Handler:
        if isinstance(callback, HandlerRef):
            owner = _import_object(callback.target)
            try:
                instance = self._factory(owner) if isinstance(owner, type) else owner
            except Exception as exc:
                msg = f"Cannot instantiate {callback.target!r}: {exc}"
                raise HandlerResolutionError(msg) from exc
            handler = getattr(instance, callback.method, None)
            if not callable(handler):
                msg = f"{callback.target!r} has no callable {callback.method!r}"
                raise HandlerResolutionError(msg)
            return handler

        if isinstance(callback, str):
            handler = _import_object(callback)
            if not callable(handler):
                msg = f"{callback!r} resolved to a non-callable {type(handler).__name__}"
                raise HandlerResolutionError(msg)
            return handler

        msg = f"Cannot resolve callback of type {type(callback).__name__}"
        raise HandlerResolutionError(msg)


def _import_object(import_string: str) -> Any:
    """Import ``"package.module:attr.path"``."""
    module_path, _, attr_path = import_string.partition(":")
    if not attr_path:
        msg = f"Handler target {import_string!r} must look like 'module:attribute'"
        raise HandlerResolutionError(msg)
    try:
        obj: Any = importlib.import_module(module_path)
    except ImportError as exc:
        msg = f"Cannot import {module_path!r} for handler {import_string!r}: {exc}"
        raise HandlerResolutionError(msg) from exc
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            msg = f"{import_string!r}: {exc}"
            raise HandlerResolutionError(msg) from exc
    return obj
