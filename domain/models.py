"""
Domain models for document cleaning.

This module contains the core domain entities.
"""

from typing import Any, Dict, Optional


class CleaningReport:
    """Counters describing what one cleaning run did to a document."""

    def __init__(
        self,
        comments_removed: int = 0,
        elements_removed: int = 0,
        elements_replaced: int = 0,
        containers_replaced: int = 0,
        containers_split: int = 0,
        paragraphs_created: int = 0,
        containers_skipped: int = 0,
        containers_failed: int = 0,
    ):
        self.comments_removed = comments_removed
        self.elements_removed = elements_removed
        self.elements_replaced = elements_replaced
        self.containers_replaced = containers_replaced
        self.containers_split = containers_split
        self.paragraphs_created = paragraphs_created
        self.containers_skipped = containers_skipped
        self.containers_failed = containers_failed

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary representation."""
        return {
            "comments_removed": self.comments_removed,
            "elements_removed": self.elements_removed,
            "elements_replaced": self.elements_replaced,
            "containers_replaced": self.containers_replaced,
            "containers_split": self.containers_split,
            "paragraphs_created": self.paragraphs_created,
            "containers_skipped": self.containers_skipped,
            "containers_failed": self.containers_failed,
        }

    def __repr__(self) -> str:
        return (
            f"CleaningReport(removed={self.elements_removed}, "
            f"replaced={self.elements_replaced}, "
            f"paragraphs={self.paragraphs_created}, "
            f"failed={self.containers_failed})"
        )


class CleanedDocument:
    """Domain model representing the cleaned markup of one page."""

    def __init__(
        self,
        html: str,
        report: CleaningReport,
        source: Optional[str] = None,
        success: bool = True,
    ):
        self.html = html
        self.report = report
        self.source = source
        self.success = success

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "success": self.success,
            "content_size": len(self.html),
            "report": self.report.to_dict(),
        }

    def __repr__(self) -> str:
        return f"CleanedDocument(source={self.source}, success={self.success})"
