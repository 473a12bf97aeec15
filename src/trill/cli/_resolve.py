"""Dispatch table loading for CLI commands.

Shared utility used by ``trill routes``, ``trill match`` and
``trill url`` to load a table or exit with a readable error.
"""

import sys

from trill.errors import TrillError
from trill.routing.table import DispatchTable
from trill.storage import load_table


def resolve_table(path: str) -> DispatchTable:
    """Load the table at *path*, or print the error and exit with status 1."""
    try:
        return load_table(path)
    except TrillError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
