"""
Rewrite generic containers into paragraph-wrapped form.

Containers holding only flow content become a single <p>. Containers with
block content keep their element, but loose text (together with the links
next to it) is gathered into synthetic paragraphs between the blocks.
"""

import copy
import logging
from typing import Dict, List, Optional, Set, Tuple

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from opentelemetry import trace

from domain.models import CleaningReport
from domain.tree import destroy, is_live, is_tag, is_text

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)

CONTAINER_TAGS = ("div", "span", "article")
STRUCTURAL_TAGS = (
    "a",
    "blockquote",
    "dl",
    "div",
    "img",
    "ol",
    "p",
    "pre",
    "table",
    "ul",
)


class ParagraphNormalizer:
    """Splits container children into synthetic paragraphs and kept blocks."""

    def __init__(
        self,
        container_tags: Tuple[str, ...] = CONTAINER_TAGS,
        structural_tags: Tuple[str, ...] = STRUCTURAL_TAGS,
    ) -> None:
        self.container_tags = container_tags
        self.structural_tags = structural_tags
        # Original container identity -> its copy inside an absorbed clone.
        self._relocated: Dict[int, Tag] = {}

    def run(self, document: BeautifulSoup, report: CleaningReport) -> None:
        """
        Normalize every candidate container in document order.

        The candidate list is selected once up front. Containers that an
        earlier step detached are skipped; a failure in one container is
        logged and counted, and the remaining containers are still processed.
        """
        with tracer.start_as_current_span("paragraph_normalizer") as span:
            containers = document.select(", ".join(self.container_tags))
            span.set_attribute("containers.candidates", len(containers))
            logger.debug("Found %d candidate containers", len(containers))

            self._relocated = {}
            try:
                for container in containers:
                    node = self._resolve(container)
                    if node is None:
                        report.containers_skipped += 1
                        continue

                    try:
                        self.normalize_container(document, node, report)
                    except Exception as e:
                        report.containers_failed += 1
                        logger.warning(
                            "Failed to normalize <%s> container: %s", node.name, str(e)
                        )
                        span.add_event(
                            "container_failed",
                            {"container.tag": node.name, "error.message": str(e)},
                        )
            finally:
                self._relocated = {}

            span.set_attribute("containers.replaced", report.containers_replaced)
            span.set_attribute("containers.split", report.containers_split)
            span.set_attribute("containers.skipped", report.containers_skipped)
            span.set_attribute("containers.failed", report.containers_failed)

    def normalize_container(
        self, document: BeautifulSoup, node: Tag, report: CleaningReport
    ) -> None:
        """Normalize one live container in place."""
        if node.find(list(self.structural_tags)) is None:
            self.replace_with_paragraph(document, node)
            report.containers_replaced += 1
            report.paragraphs_created += 1
            return

        replacements, paragraphs = self.get_replacement_nodes(document, node)
        self._install(node, replacements)
        report.containers_split += 1
        report.paragraphs_created += paragraphs

    def replace_with_paragraph(self, document: BeautifulSoup, node: Tag) -> Tag:
        """Substitute a new <p> carrying the node's children and attributes."""
        paragraph = document.new_tag("p")
        for name, value in node.attrs.items():
            paragraph[name] = list(value) if isinstance(value, list) else value

        # Children move only once the paragraph holds the node's place.
        node.replace_with(paragraph)
        paragraph.extend(node.contents)
        node.decompose()
        return paragraph

    def get_replacement_nodes(
        self, document: BeautifulSoup, node: Tag
    ) -> Tuple[List[PageElement], int]:
        """
        Build the replacement child list for a container with block content.

        Returns the new children in order and the number of synthetic
        paragraphs among them. The container itself is not modified.
        """
        nodes_to_return: List[PageElement] = []
        consumed: Set[int] = set()
        absorbed: Set[int] = set()
        buffer: List[PageElement] = []
        paragraphs = 0

        for child in list(node.contents):
            if id(child) in absorbed:
                continue

            if is_tag(child, "p") and buffer:
                nodes_to_return.append(self._flush(document, buffer))
                paragraphs += 1
                buffer = []
                nodes_to_return.append(child)
            elif is_text(child) and child.strip():
                for sibling in self._sibling_run(child):
                    if sibling is child:
                        buffer.append(NavigableString(str(child)))
                    elif id(sibling) not in absorbed:
                        absorbed.add(id(sibling))
                        buffer.append(self._clone(sibling))
                        consumed.add(id(sibling))

                absorbed.add(id(child))
                consumed.add(id(child))
            else:
                if buffer:
                    nodes_to_return.append(self._flush(document, buffer))
                    paragraphs += 1
                    buffer = []
                nodes_to_return.append(child)

        if buffer:
            nodes_to_return.append(self._flush(document, buffer))
            paragraphs += 1

        # A sibling swept into a later run must not also appear raw.
        replacements = [n for n in nodes_to_return if id(n) not in consumed]
        return replacements, paragraphs

    def _resolve(self, container: Tag) -> Optional[Tag]:
        node = container
        while not is_live(node):
            relocated = self._relocated.get(id(node))
            if relocated is None:
                return None
            node = relocated
        return node

    def _sibling_run(self, child: PageElement) -> List[PageElement]:
        """Return the text/anchor siblings adjacent to child, in order."""
        preceding: List[PageElement] = []
        sibling = child.previous_sibling
        while sibling is not None and self._is_run_member(sibling):
            preceding.append(sibling)
            sibling = sibling.previous_sibling

        following: List[PageElement] = []
        sibling = child.next_sibling
        while sibling is not None and self._is_run_member(sibling):
            following.append(sibling)
            sibling = sibling.next_sibling

        preceding.reverse()
        return preceding + [child] + following

    @staticmethod
    def _is_run_member(node: PageElement) -> bool:
        return is_text(node) or is_tag(node, "a")

    def _clone(self, node: PageElement) -> PageElement:
        clone = copy.copy(node)
        if isinstance(node, Tag) and isinstance(clone, Tag):
            originals = node.find_all(list(self.container_tags))
            copies = clone.find_all(list(self.container_tags))
            for original, duplicate in zip(originals, copies):
                self._relocated[id(original)] = duplicate
        return clone

    @staticmethod
    def _flush(document: BeautifulSoup, buffer: List[PageElement]) -> Tag:
        """Wrap the buffered nodes in a new <p>."""
        paragraph = document.new_tag("p")
        for item in buffer:
            paragraph.append(item)
        return paragraph

    @staticmethod
    def _install(node: Tag, replacements: List[PageElement]) -> None:
        """Swap the container's children for the replacement list."""
        keep = {id(item) for item in replacements}
        previous = list(node.contents)
        node.clear()
        for child in previous:
            if id(child) not in keep:
                destroy(child)
        for item in replacements:
            node.append(item)
