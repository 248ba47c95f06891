"""
Command-line interface adapter.

This module provides the CLI adapter for the document cleaning application.
"""

import argparse
import json
import logging
import os
from typing import List, Optional

from opentelemetry import trace
from requests.exceptions import RequestException

from adapters.http_client import HTTPClientAdapter
from application.document_cleaning_service import DocumentCleaningService
from domain.models import CleanedDocument

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure and return the argument parser."""
    parser = argparse.ArgumentParser(
        description="Strip boilerplate from an HTML page and normalize it into paragraphs."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-in",
        "--input-file",
        dest="input_file",
        help="Path to the input HTML file",
    )
    source.add_argument("--url", help="URL of the page to fetch and clean")
    parser.add_argument(
        "-out",
        "--output-file",
        dest="output_file",
        help="Path to the output HTML file (default: output/<input_name>-clean.html)",
    )
    parser.add_argument(
        "--report-file",
        dest="report_file",
        help="Write the cleaning report as JSON to this path",
    )
    parser.add_argument(
        "--parser",
        default="lxml",
        help="BeautifulSoup tree builder (default: lxml)",
    )
    parser.add_argument(
        "--timeout", type=int, default=30, help="HTTP timeout in seconds"
    )
    parser.add_argument(
        "--user-agent",
        dest="user_agent",
        default="PageCleaner/1.0",
        help="User-Agent header for --url",
    )
    return parser


class CleanCLI:
    """Command-line interface for document cleaning."""

    def __init__(self, service: Optional[DocumentCleaningService] = None) -> None:
        self.parser = setup_argument_parser()
        self.service = service
        self.script_dir = os.path.dirname(os.path.abspath(__file__))

    def build_service(self, args: argparse.Namespace) -> DocumentCleaningService:
        """Return the injected service or wire one from the CLI arguments."""
        if self.service is not None:
            return self.service
        http_client = HTTPClientAdapter(
            timeout=args.timeout, user_agent=args.user_agent
        )
        return DocumentCleaningService(http_client=http_client, parser=args.parser)

    def resolve_output_path(self, source: str, output_file: Optional[str]) -> str:
        """
        Determine the output file path.

        Args:
            source: The input file path or URL
            output_file: Optional explicit output file path

        Returns:
            The resolved output file path
        """
        if output_file:
            logger.debug("Using explicit output file: %s", output_file)
            return output_file

        # Create output filename from the last path segment of the source
        basename = os.path.basename(source.rstrip("/")) or "page"
        name, _ = os.path.splitext(basename)
        output_filename = f"{name or 'page'}-clean.html"

        # Get the project root directory (parent of adapters)
        project_root = os.path.dirname(self.script_dir)
        output_dir = os.path.join(project_root, "output")

        os.makedirs(output_dir, exist_ok=True)
        logger.debug("Created/verified output directory: %s", output_dir)

        output_path = os.path.join(output_dir, output_filename)
        logger.debug("Resolved output path: %s", output_path)
        return output_path

    def save_document(self, document: CleanedDocument, output_path: str) -> None:
        logger.debug("Writing cleaned HTML to file: %s", output_path)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(document.html)

    def save_report(self, document: CleanedDocument, report_path: str) -> None:
        """Save the cleaning report as JSON."""
        logger.debug("Writing report to file: %s", report_path)
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(document.to_dict(), f, ensure_ascii=False, indent=2)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI application.

        Args:
            args: Optional arguments list (defaults to sys.argv)

        Returns:
            Exit code (0 for success, 1 for error)
        """
        with tracer.start_as_current_span("cli.run") as span:
            parsed_args = self.parser.parse_args(args)
            source = parsed_args.input_file or parsed_args.url

            logger.debug(
                "CLI arguments: source=%s, output_file=%s",
                source,
                parsed_args.output_file,
            )
            span.set_attribute("input.source", source)

            try:
                service = self.build_service(parsed_args)
                if parsed_args.url:
                    document = service.clean_url(parsed_args.url)
                else:
                    document = service.clean_file(parsed_args.input_file)

                output_path = self.resolve_output_path(
                    source, parsed_args.output_file
                )
                span.set_attribute("output.resolved_path", output_path)
                self.save_document(document, output_path)

                if parsed_args.report_file:
                    self.save_report(document, parsed_args.report_file)

                logger.info("Cleaned %s to %s", source, output_path)
                span.set_attribute("success", document.success)
                span.set_attribute("exit_code", 0)
                return 0

            except FileNotFoundError:
                logger.error("Input file '%s' not found", parsed_args.input_file)
                span.set_attribute("success", False)
                span.set_attribute("error.type", "FileNotFoundError")
                span.set_attribute("exit_code", 1)
                return 1
            except RequestException as e:
                logger.error("Failed to fetch '%s': %s", parsed_args.url, str(e))
                span.set_attribute("success", False)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("exit_code", 1)
                return 1
            except Exception as e:
                logger.error("Unexpected error: %s", str(e))
                span.set_attribute("success", False)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                span.set_attribute("exit_code", 1)
                return 1
