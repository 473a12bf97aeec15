"""``trill routes`` — list the routes in a compiled dispatch table.

Prints the static routes, the variable routes chunk by chunk, and the
named-route templates.
"""

import argparse
from collections.abc import Sequence

from trill.cli._resolve import resolve_table


def run_routes(args: argparse.Namespace) -> None:
    """Print the contents of the table at ``args.table``."""
    table = resolve_table(args.table)

    if not table.static and not table.variable:
        print("No routes registered.")
        return

    static_rows = [
        (method, path, str(callback))
        for path, methods in table.static.items()
        for method, callback in methods.items()
    ]
    if static_rows:
        print("Static routes")
        _print_table(("METHOD", "PATH", "HANDLER"), static_rows)

    variable_rows = [
        (f"{index}:{position}", method, str(callback), ", ".join(variables))
        for index, chunk in enumerate(table.variable, start=1)
        for position, routes in chunk.route_map.items()
        for method, (callback, variables) in routes.items()
    ]
    if variable_rows:
        if static_rows:
            print()
        print(f"Variable routes ({len(table.variable)} chunk(s))")
        _print_table(("SLOT", "METHOD", "HANDLER", "VARIABLES"), variable_rows)

    if table.named:
        print()
        print("Named routes")
        _print_table(("NAME", "TEMPLATE"), [(name, route.template) for name, route in table.named.items()])


def _print_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(len(headers))]
    fmt = "  ".join(f"{{:<{width}}}" for width in widths[:-1]) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows:
        print(fmt.format(*row))
