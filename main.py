#!/usr/bin/env python3
"""
Main entry point for the page-cleaner command.

Exits the process with the status returned by the selected subcommand.
"""

import sys

from adapters.main_cli import main as unified_main


def main() -> None:
    """Main entry point for the CLI."""
    sys.exit(unified_main())


if __name__ == "__main__":
    main()
