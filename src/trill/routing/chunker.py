"""Partition variable routes into chunks of combined regexes.

One huge alternation is slow to evaluate and hard on the regex engine,
so variable routes are split into roughly ``APPROX_CHUNK_SIZE``-sized
groups that the matcher tries in order.

Within a chunk every alternative ends in an empty marker group ``()``::

    ^(?:/users/([^/]+)()|/posts/([^/]+)/([^/]+)())$
                  1   2            3       4   5

Only the marker of the alternative that matched can be the last group
closed, so ``match.lastindex`` names the route directly, and the groups
just before it hold its variables.
"""

import math
from collections.abc import Mapping, Sequence

from trill.routing.table import Chunk, RouteTarget
from trill.routing.variable import VariableRouteEntry

APPROX_CHUNK_SIZE = 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return math.floor(value + 0.5)


def chunk_plan(total: int, approx_chunk_size: int = APPROX_CHUNK_SIZE) -> tuple[int, int]:
    """Return ``(target_chunk_count, chunk_size)`` for *total* regex groups.

    Examples::

        chunk_plan(25) -> (3, 9)
        chunk_plan(4)  -> (1, 4)
        chunk_plan(0)  -> (0, 0)
    """
    if total <= 0:
        return 0, 0
    if approx_chunk_size < 1:
        msg = f"approx_chunk_size must be positive, got {approx_chunk_size}"
        raise ValueError(msg)
    count = max(1, round_half_up(total / approx_chunk_size))
    return count, math.ceil(total / count)


def assemble_chunks(
    groups: Sequence[Mapping[str, VariableRouteEntry]],
    approx_chunk_size: int = APPROX_CHUNK_SIZE,
) -> tuple[Chunk, ...]:
    """Split regex groups into contiguous chunks, keeping declaration order."""
    _, size = chunk_plan(len(groups), approx_chunk_size)
    if not size:
        return ()
    return tuple(build_chunk(groups[i : i + size]) for i in range(0, len(groups), size))


def build_chunk(groups: Sequence[Mapping[str, VariableRouteEntry]]) -> Chunk:
    """Combine *groups* into one anchored alternation with marker groups."""
    alternatives: list[str] = []
    route_map: dict[int, dict[str, RouteTarget]] = {}
    group_count = 0

    for group in groups:
        first = next(iter(group.values()))
        group_count += len(first.variables) + 1
        alternatives.append(f"{first.regex}()")
        route_map[group_count] = {
            method: (entry.callback, entry.variables) for method, entry in group.items()
        }

    return Chunk(regex=f"^(?:{'|'.join(alternatives)})$", route_map=route_map)
