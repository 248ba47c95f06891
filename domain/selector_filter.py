"""
Declarative removal of boilerplate and chrome elements.

Every rule is a CSS selector evaluated against the live tree; matches are
removed outright. No state is carried between rules.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Comment
from opentelemetry import trace

from domain.removal_rules import DEFAULT_RULES, RemovalRuleTable
from domain.tree import destroy, is_live

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)

SCRIPT_SELECTOR = "script, style"
CHROME_SELECTOR = "header, footer, input, form, button, aside"
CAPTION_SELECTOR = "[id='caption'],[class='caption']"
GOOGLE_SELECTOR = "[id*=' google '],[class*=' google ']"
MORE_SELECTOR = (
    "[id*='more']:not([id^='entry-']),[class*='more']:not([class^='entry-'])"
)
FACEBOOK_SELECTOR = (
    "[id*='facebook']:not([id*='-facebook']),"
    "[class*='facebook']:not([class*='-facebook'])"
)
FACEBOOK_BROADCASTING_SELECTOR = (
    "[id*='facebook-broadcasting'],[class*='facebook-broadcasting']"
)
TWITTER_SELECTOR = (
    "[id*='twitter']:not([id*='-twitter']),"
    "[class*='twitter']:not([class*='-twitter'])"
)

# Widget rules applied after the table, in this order.
WIDGET_SELECTORS = (
    CAPTION_SELECTOR,
    GOOGLE_SELECTOR,
    MORE_SELECTOR,
    FACEBOOK_SELECTOR,
    FACEBOOK_BROADCASTING_SELECTOR,
    TWITTER_SELECTOR,
)


class SelectorFilter:
    """Removes elements matched by fixed selectors and the rule table."""

    def __init__(self, rules: Optional[RemovalRuleTable] = None) -> None:
        self.rules = rules if rules is not None else DEFAULT_RULES

    def remove(self, document: BeautifulSoup, selector: str) -> int:
        """Remove every live element matching the selector."""
        removed = 0
        for node in document.select(selector):
            # Nested matches are freed together with their ancestor.
            if not is_live(node):
                continue
            node.decompose()
            removed += 1
        if removed:
            logger.debug("Removed %d elements matching '%s'", removed, selector)
        return removed

    def remove_comments(self, document: BeautifulSoup) -> int:
        """Extract all HTML comments."""
        comments = document.find_all(string=lambda text: isinstance(text, Comment))
        for comment in comments:
            destroy(comment)
        logger.debug("Removed %d comments", len(comments))
        return len(comments)

    def remove_scripts(self, document: BeautifulSoup) -> int:
        return self.remove(document, SCRIPT_SELECTOR)

    def remove_chrome(self, document: BeautifulSoup) -> int:
        """Remove page chrome: headers, footers, forms and their controls."""
        return self.remove(document, CHROME_SELECTOR)

    def remove_bad_tags(self, document: BeautifulSoup) -> int:
        """
        Remove elements whose id, class or name matches the rule table.

        Each (list, pattern, attribute) combination is queried fresh against
        the live tree. Removal is monotonic, so the combination order does
        not change which elements survive.
        """
        with tracer.start_as_current_span("selector_filter") as span:
            span.set_attribute("selector_filter.step", "remove_bad_tags")
            removed = 0
            queries = 0
            for selector in self.rules.selectors():
                queries += 1
                removed += self.remove(document, selector)

            span.set_attribute("rules.queries", queries)
            span.set_attribute("elements.removed", removed)
            logger.debug(
                "Rule table removed %d elements over %d queries", removed, queries
            )
            return removed

    def remove_widgets(self, document: BeautifulSoup) -> int:
        """Remove captions, google/more/facebook/twitter widgets."""
        return sum(self.remove(document, selector) for selector in WIDGET_SELECTORS)
