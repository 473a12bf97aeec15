"""Dispatch table persistence.

Tables are stored as JSON so a serving process can load them without
re-running the compiler::

    {
      "format": 1,
      "static": {"/about": {"GET": ["site.pages:Pages", "about"]}},
      "variable": [
        {"regex": "^(?:/users/([^/]+)())$",
         "routeMap": {"2": {"GET": [["site.users:Users", "show"], ["id"]]}}}
      ],
      "named": {"user": ["/users/{id}", ["id"]]}
    }

``HandlerRef`` callbacks are stored as ``[target, method]`` pairs and
plain strings as strings; nothing else can be persisted.  Output is
deterministic, so compiling the same routes twice produces the same
bytes.
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from trill._internal.types import Callback
from trill.errors import ConfigurationError
from trill.routing.route import HandlerRef
from trill.routing.table import Chunk, DispatchTable, NamedRoute, RouteTarget

logger = logging.getLogger("trill.storage")

FORMAT_VERSION = 1


def encode_table(table: DispatchTable) -> str:
    """Serialize *table* to its JSON text."""
    document = {
        "format": FORMAT_VERSION,
        "static": {
            path: {method: _encode_callback(cb) for method, cb in methods.items()}
            for path, methods in table.static.items()
        },
        "variable": [
            {
                "regex": chunk.regex,
                "routeMap": {
                    str(position): {
                        method: [_encode_callback(cb), list(variables)]
                        for method, (cb, variables) in routes.items()
                    }
                    for position, routes in chunk.route_map.items()
                },
            }
            for chunk in table.variable
        ],
        "named": {
            name: [route.template, list(route.variables)] for name, route in table.named.items()
        },
    }
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def decode_table(text: str) -> DispatchTable:
    """Parse JSON text produced by ``encode_table``."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Dispatch table is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc

    if not isinstance(document, dict) or document.get("format") != FORMAT_VERSION:
        found = document.get("format") if isinstance(document, dict) else None
        msg = f"Unsupported dispatch table format {found!r} (expected {FORMAT_VERSION})"
        raise ConfigurationError(msg)

    try:
        static = {
            path: {method: _decode_callback(cb) for method, cb in methods.items()}
            for path, methods in document["static"].items()
        }
        variable = tuple(_decode_chunk(chunk) for chunk in document["variable"])
        named = {
            name: NamedRoute(template, tuple(variables))
            for name, (template, variables) in document["named"].items()
        }
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        msg = f"Malformed dispatch table: {exc!r}"
        raise ConfigurationError(msg) from exc

    return DispatchTable(static=static, variable=variable, named=named)


def dump_table(table: DispatchTable, path: str | Path) -> Path:
    """Atomically write *table* to *path*.

    The data goes to a temporary file in the same directory, which is
    fsynced and renamed over *path*, so readers see either the old table
    or the new one, never a partial write.
    """
    path = Path(path)
    data = encode_table(table).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise

    logger.info("wrote dispatch table to %s (%d bytes)", path, len(data))
    return path


def load_table(path: str | Path) -> DispatchTable:
    """Read a table written by ``dump_table``."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read dispatch table {str(path)!r}: {exc}"
        raise ConfigurationError(msg) from exc
    return decode_table(text)


def _decode_chunk(data: dict[str, Any]) -> Chunk:
    route_map: dict[int, dict[str, RouteTarget]] = {}
    for position, routes in data["routeMap"].items():
        route_map[int(position)] = {
            method: (_decode_callback(cb), tuple(variables)) for method, (cb, variables) in routes.items()
        }
    return Chunk(regex=data["regex"], route_map=route_map)


def _encode_callback(callback: Callback) -> str | list[str]:
    if isinstance(callback, HandlerRef):
        return [callback.target, callback.method]
    if isinstance(callback, str):
        return callback
    msg = (
        f"Cannot persist callback {callback!r}; "
        "use a HandlerRef or an import string ('module:function')"
    )
    raise ConfigurationError(msg)


def _decode_callback(data: Any) -> Callback:
    if isinstance(data, str):
        return data
    target, method = data
    return HandlerRef(str(target), str(method))
