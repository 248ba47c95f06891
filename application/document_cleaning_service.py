"""
Application services for document cleaning.

This module contains the application layer services that orchestrate domain logic.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup
from opentelemetry import trace

from adapters.http_client import HTTPClientAdapter
from domain.document_cleaner import DocumentCleaner
from domain.models import CleanedDocument

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


class DocumentCleaningService:
    """Service for cleaning HTML pages into paragraph-normalized markup."""

    def __init__(
        self,
        cleaner: Optional[DocumentCleaner] = None,
        http_client: Optional[HTTPClientAdapter] = None,
        parser: str = "lxml",
    ) -> None:
        self.cleaner = cleaner if cleaner is not None else DocumentCleaner()
        self.http_client = http_client
        self.parser = parser

    def clean_html(
        self, html_content: str, source: Optional[str] = None
    ) -> CleanedDocument:
        """
        Parse and clean HTML content.

        Args:
            html_content: The HTML content to clean
            source: Optional file path or URL the content came from

        Returns:
            CleanedDocument with the serialized markup and cleaning report
        """
        with tracer.start_as_current_span("clean_html") as span:
            span.set_attribute("html.content_length", len(html_content))
            logger.debug(
                "Parsing HTML with %s (content length: %d chars)",
                self.parser,
                len(html_content),
            )

            document = BeautifulSoup(html_content, self.parser)
            success = self.cleaner.normalize(document)
            report = self.cleaner.last_report
            cleaned = str(document)

            span.set_attribute("html.cleaned_length", len(cleaned))
            span.set_attribute("success", success)
            span.add_event("cleaning_completed", report.to_dict())

            return CleanedDocument(
                html=cleaned, report=report, source=source, success=success
            )

    def clean_file(self, file_path: str) -> CleanedDocument:
        """
        Clean an HTML file.

        Args:
            file_path: Path to the HTML file

        Returns:
            CleanedDocument for the file content

        Raises:
            FileNotFoundError: If the file doesn't exist
            IOError: If there's an error reading the file
        """
        with tracer.start_as_current_span("read_html_file") as span:
            span.set_attribute("file.path", file_path)
            logger.debug("Reading HTML file: %s", file_path)

            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    html_content = f.read()
            except FileNotFoundError:
                span.set_attribute("error", True)
                span.set_attribute("error.type", "FileNotFoundError")
                raise
            except IOError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", "IOError")
                span.set_attribute("error.message", str(e))
                raise

            span.set_attribute("file.size_bytes", len(html_content))
            return self.clean_html(html_content, source=file_path)

    def clean_url(self, url: str) -> CleanedDocument:
        """
        Fetch a page and clean it.

        Raises:
            ValueError: If the service has no HTTP client
            requests.exceptions.RequestException: If the download fails
        """
        if self.http_client is None:
            raise ValueError("No HTTP client configured for URL cleaning")

        with tracer.start_as_current_span("clean_url") as span:
            span.set_attribute("url", url)
            content, status_code = self.http_client.get(url)
            span.set_attribute("status_code", status_code)
            if status_code >= 400:
                logger.warning("Fetched %s with HTTP status %d", url, status_code)
            return self.clean_html(content, source=url)
