import argparse
import sys

from infrastructure.logging import setup_logger
from infrastructure.telemetry import setup_opentelemetry

from adapters.clean_cli import CleanCLI


def main() -> int:
    """
    Unified entry point for the `page-cleaner` command.

    Subcommands:
        clean   - Strip boilerplate from a page and normalize paragraphs.
    """
    # Setup shared infrastructure
    setup_logger()
    setup_opentelemetry()

    # Top-level parser only defines subcommands; each subcommand parses its own arguments.
    parser = argparse.ArgumentParser(
        prog="page-cleaner", description="HTML boilerplate removal and paragraph normalization"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("clean", help="Clean an HTML file or URL")

    # Parse only the subcommand name; the remaining args are passed through.
    args, remaining = parser.parse_known_args()

    if args.command == "clean":
        return CleanCLI().run(remaining)
    parser.error(f"Unknown subcommand: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
