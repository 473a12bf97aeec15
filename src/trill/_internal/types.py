"""Shared type aliases used across trill modules."""

from collections.abc import Callable, Hashable
from typing import Any, TypeAlias

# Opaque callback stored in the dispatch table (usually a HandlerRef)
Callback: TypeAlias = Hashable

# Resolved, invokable handler
Handler: TypeAlias = Callable[..., Any]
