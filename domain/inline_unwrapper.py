"""
Replace inline formatting elements with their flattened text.

The predicates here look at structure (descendant images, parent tag)
rather than attribute values.
"""

import logging
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from domain.tree import is_live, is_tag, replace_with_text

# Get logger for this module
logger = logging.getLogger(__name__)

FORMATTING_SELECTOR = "em, strong, b, i, strike, del, ins"
DROPCAP_SELECTOR = "[class~=dropcap], [class~=drop_cap]"


class InlineUnwrapper:
    """Flatten formatting wrappers so later stages see plain text."""

    def replace(
        self,
        document: BeautifulSoup,
        selector: str,
        predicate: Optional[Callable[[Tag], bool]] = None,
    ) -> int:
        """
        Replace every match of the selector with a text node.

        The predicate is evaluated when each node is visited, so it sees the
        effect of earlier replacements in the same query.
        """
        replaced = 0
        for node in document.select(selector):
            if not is_live(node):
                continue
            if predicate is None or predicate(node):
                replace_with_text(node)
                replaced += 1
        logger.debug("Replaced %d elements matching '%s'", replaced, selector)
        return replaced

    def unwrap_formatting(self, document: BeautifulSoup) -> int:
        """Flatten formatting elements that do not wrap an image."""
        return self.replace(
            document, FORMATTING_SELECTOR, lambda node: node.find("img") is None
        )

    def unwrap_dropcaps(self, document: BeautifulSoup) -> int:
        return self.replace(document, DROPCAP_SELECTOR)

    def unwrap_paragraph_spans(self, document: BeautifulSoup) -> int:
        """Flatten spans sitting directly inside a paragraph."""
        return self.replace(
            document, "span", lambda node: is_tag(node.parent, "p")
        )
