"""Main CLI entry point for bsonwire."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.dump import dump_file, run_demo
from ..exceptions import BsonwireError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the bsonwire CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="bsonwire: Binary Document Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bsonwire --dump documents.bson        Decode and print every document
  bsonwire --demo                        Encode/decode a sample document
  bsonwire --version                     Show version
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode the documents in FILE and print them",
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Round-trip a sample document and show the encoded bytes",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"bsonwire {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Handle --dump
    if args.dump:
        file_path = Path(args.dump)
        if not file_path.is_file():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            dump_file(file_path)
            return 0
        except (BsonwireError, OSError) as e:
            print(f"Error decoding {file_path}: {e}", file=sys.stderr)
            return 1

    # Handle --demo
    if args.demo:
        try:
            run_demo()
            return 0
        except (BsonwireError, RuntimeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
