from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from zip2workspace.models import WorkspaceIngestError
from zip2workspace.services.upload import process_upload
from zip2workspace.utils import display_extraction_result, print_diagnostic


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zip2workspace",
        description="Load a project ZIP archive into a workspace file map.",
    )
    parser.add_argument("archive", type=Path, help="Path to the .zip archive")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the workspace payload as JSON instead of a tree",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print progress diagnostics",
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Run the CLI workflow: read archive → extract → display.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = _build_parser().parse_args(argv)
    archive_path: Path = args.archive

    try:
        archive_bytes = archive_path.read_bytes()
    except OSError as exc:
        print(f"❌ Error: cannot read {archive_path}: {exc}", file=sys.stderr)
        return 1

    diagnostics = None if args.quiet or args.json else print_diagnostic

    try:
        result = process_upload(archive_bytes, archive_path.name, diagnostics=diagnostics)
    except WorkspaceIngestError as exc:
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
    else:
        display_extraction_result(result)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return run_cli(argv)


if __name__ == "__main__":
    sys.exit(main())
