"""``trill compile`` — manifest in, dispatch table out."""

import argparse
import sys
from pathlib import Path

from trill.declarations import load_manifest
from trill.errors import TrillError
from trill.routing.compiler import RouteCompiler
from trill.storage import dump_table


def run_compile(args: argparse.Namespace) -> None:
    """Compile ``args.manifest`` and write the table.

    A relative ``compiler.output`` in the manifest is resolved against
    the manifest's directory; ``--output`` is taken as given.
    """
    manifest_path = Path(args.manifest)
    try:
        manifest = load_manifest(manifest_path, approx_chunk_size=args.chunk_size)
        compiler = RouteCompiler(manifest.config)
        compiler.add_declarations(manifest.declarations, manifest.modules)
        table = compiler.compile()

        if args.output:
            output = Path(args.output)
        else:
            output = Path(manifest.config.output)
            if not output.is_absolute():
                output = manifest_path.parent / output
        written = dump_table(table, output)
    except TrillError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(
        f"Compiled {table.static_count} static and {table.variable_count} variable "
        f"route(s) into {len(table.variable)} chunk(s): {written}"
    )
