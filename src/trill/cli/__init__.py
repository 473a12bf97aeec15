"""Trill CLI — compile route manifests and inspect dispatch tables.

Entry point registered as ``trill`` in ``pyproject.toml``::

    [project.scripts]
    trill = "trill.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trill`` command."""
    parser = argparse.ArgumentParser(
        prog="trill",
        description="trill — compile HTTP routes into a fast dispatch table.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trill compile ----------------------------------------------------
    compile_parser = subparsers.add_parser("compile", help="Compile a route manifest")
    compile_parser.add_argument("manifest", help="Path to the YAML route manifest")
    compile_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Where to write the dispatch table (default: manifest's compiler.output)",
    )
    compile_parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Approximate number of variable routes per combined regex",
    )

    # -- trill routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in a dispatch table")
    routes_parser.add_argument("table", help="Path to a compiled dispatch table")

    # -- trill match ------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a request against a table")
    match_parser.add_argument("table", help="Path to a compiled dispatch table")
    match_parser.add_argument("method", help="HTTP method (e.g. GET)")
    match_parser.add_argument("path", help="Request path (e.g. /users/42)")

    # -- trill url --------------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Build the path for a named route")
    url_parser.add_argument("table", help="Path to a compiled dispatch table")
    url_parser.add_argument("name", help="Route name")
    url_parser.add_argument(
        "values",
        nargs="*",
        metavar="KEY=VALUE",
        help="Placeholder values",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "compile":
        from trill.cli._compile import run_compile

        run_compile(args)
    elif args.command == "routes":
        from trill.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from trill.cli._match import run_match

        run_match(args)
    elif args.command == "url":
        from trill.cli._match import run_url

        run_url(args)
