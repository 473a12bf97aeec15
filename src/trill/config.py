"""Compiler configuration.

CompilerConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from trill.errors import ConfigurationError
from trill.routing.chunker import APPROX_CHUNK_SIZE
from trill.routing.params import DEFAULT_PATTERN


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Route compiler configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CompilerConfig(approx_chunk_size=20, output="build/routes.json")
    """

    # Target number of regex groups per combined chunk
    approx_chunk_size: int = APPROX_CHUNK_SIZE

    # Regex for placeholders declared without one, e.g. "{id}"
    default_pattern: str = DEFAULT_PATTERN

    # Module mounted at the site root (no URL prefix)
    front_module: str = "front"

    # Where `trill compile` writes the dispatch table
    output: str | Path = "routes.json"

    def __post_init__(self) -> None:
        if self.approx_chunk_size < 1:
            msg = f"approx_chunk_size must be positive, got {self.approx_chunk_size}"
            raise ConfigurationError(msg)
        if not self.default_pattern:
            msg = "default_pattern must not be empty"
            raise ConfigurationError(msg)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, **overrides: Any) -> "CompilerConfig":
        """Build a config from a manifest's ``compiler:`` section.

        *overrides* (e.g. CLI flags) win over file values; ``None``
        overrides are ignored.  Unknown keys raise ``ConfigurationError``.
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown compiler setting(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**data)
        except TypeError as exc:
            msg = f"Invalid compiler settings: {exc}"
            raise ConfigurationError(msg) from exc
