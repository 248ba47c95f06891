"""
Document cleaning pipeline.

Strips boilerplate from a parsed page and rewrites the remaining markup into
paragraph-wrapped form for the content-scoring stage.
"""

import logging
from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup
from opentelemetry import trace

from domain.inline_unwrapper import InlineUnwrapper
from domain.models import CleaningReport
from domain.paragraph_normalizer import ParagraphNormalizer
from domain.removal_rules import RemovalRuleTable
from domain.selector_filter import SelectorFilter

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)

Step = Tuple[str, Callable[[BeautifulSoup], int], str]


class DocumentCleaner:
    """Removes junk elements and normalizes containers into paragraphs."""

    def __init__(
        self,
        rules: Optional[RemovalRuleTable] = None,
        selector_filter: Optional[SelectorFilter] = None,
        unwrapper: Optional[InlineUnwrapper] = None,
        normalizer: Optional[ParagraphNormalizer] = None,
    ) -> None:
        self.selector_filter = (
            selector_filter if selector_filter is not None else SelectorFilter(rules)
        )
        self.unwrapper = unwrapper if unwrapper is not None else InlineUnwrapper()
        self.normalizer = (
            normalizer if normalizer is not None else ParagraphNormalizer()
        )
        self.last_report = CleaningReport()

    def removal_steps(self) -> List[Step]:
        """The fixed removal set as (name, step, report counter), in order."""
        return [
            ("remove_comments", self.selector_filter.remove_comments, "comments_removed"),
            ("unwrap_formatting", self.unwrapper.unwrap_formatting, "elements_replaced"),
            ("unwrap_dropcaps", self.unwrapper.unwrap_dropcaps, "elements_replaced"),
            ("remove_scripts", self.selector_filter.remove_scripts, "elements_removed"),
            ("remove_chrome", self.selector_filter.remove_chrome, "elements_removed"),
            ("remove_bad_tags", self.selector_filter.remove_bad_tags, "elements_removed"),
            ("remove_widgets", self.selector_filter.remove_widgets, "elements_removed"),
            (
                "unwrap_paragraph_spans",
                self.unwrapper.unwrap_paragraph_spans,
                "elements_replaced",
            ),
        ]

    def normalize(self, document: BeautifulSoup) -> bool:
        """
        Clean the supplied document in place.

        Every removal step runs to completion before paragraph normalization
        starts. A failing step is logged and the remaining steps still run,
        so the caller always gets a best-effort tree.

        Returns:
            True when every stage completed without error
        """
        report = CleaningReport()
        self.last_report = report
        success = True

        with tracer.start_as_current_span("clean_document") as span:
            for name, step, counter in self.removal_steps():
                try:
                    count = step(document)
                except Exception as e:
                    success = False
                    logger.error("Cleaning step %s failed: %s", name, str(e))
                    span.add_event(
                        "step_failed", {"step.name": name, "error.message": str(e)}
                    )
                    continue
                setattr(report, counter, getattr(report, counter) + count)

            try:
                self.normalizer.run(document, report)
            except Exception as e:
                success = False
                logger.error("Paragraph normalization failed: %s", str(e))
                span.add_event(
                    "step_failed",
                    {"step.name": "convert_to_paragraphs", "error.message": str(e)},
                )

            span.set_attributes({f"report.{k}": v for k, v in report.to_dict().items()})
            span.set_attribute("success", success)

            if report.containers_failed:
                logger.warning(
                    "%d containers could not be normalized", report.containers_failed
                )
            logger.info(
                "Cleaned document: removed=%d replaced=%d paragraphs=%d",
                report.elements_removed + report.comments_removed,
                report.elements_replaced,
                report.paragraphs_created,
            )
            return success
