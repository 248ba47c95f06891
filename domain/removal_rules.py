"""
Attribute-pattern tables for boilerplate removal.

Each pattern is matched against the id, class and name attributes of every
element whose tag is not in the exception set.
"""

from enum import Enum
from typing import Iterable, Iterator, Tuple


class MatchMode(Enum):
    """How a pattern is compared against an attribute value."""

    PREFIX = "^="
    SUBSTRING = "*="
    SUFFIX = "$="
    EXACT = "="

    def selector(self, attribute: str, pattern: str) -> str:
        """Build the CSS attribute selector for this mode."""
        return f"[{attribute}{self.value}'{pattern}']"


class RemovalRuleTable:
    """Immutable pattern lists keyed by match mode."""

    def __init__(
        self,
        prefix: Iterable[str] = (),
        substring: Iterable[str] = (),
        suffix: Iterable[str] = (),
        exact: Iterable[str] = (),
        attributes: Iterable[str] = ("id", "class", "name"),
        exceptions: Iterable[str] = ("html", "body"),
    ):
        self.prefix: Tuple[str, ...] = tuple(prefix)
        self.substring: Tuple[str, ...] = tuple(substring)
        self.suffix: Tuple[str, ...] = tuple(suffix)
        self.exact: Tuple[str, ...] = tuple(exact)
        self.attributes: Tuple[str, ...] = tuple(attributes)
        self.exceptions: Tuple[str, ...] = tuple(exceptions)

    def lists(self) -> Iterator[Tuple[MatchMode, Tuple[str, ...]]]:
        """Yield (mode, patterns) pairs in evaluation order."""
        yield MatchMode.PREFIX, self.prefix
        yield MatchMode.SUBSTRING, self.substring
        yield MatchMode.SUFFIX, self.suffix
        yield MatchMode.EXACT, self.exact

    def exception_clause(self) -> str:
        return "".join(f":not({tag})" for tag in self.exceptions)

    def selectors(self) -> Iterator[str]:
        """
        Yield one CSS selector per (list, pattern, attribute) combination.

        The exception set is appended to every selector so that root-level
        tags never match.
        """
        exceptions = self.exception_clause()
        for mode, patterns in self.lists():
            for pattern in patterns:
                for attribute in self.attributes:
                    yield mode.selector(attribute, pattern) + exceptions

    def __len__(self) -> int:
        return len(self.prefix) + len(self.substring) + len(self.suffix) + len(
            self.exact
        )

    def __repr__(self) -> str:
        return (
            f"RemovalRuleTable(prefix={len(self.prefix)}, "
            f"substring={len(self.substring)}, suffix={len(self.suffix)}, "
            f"exact={len(self.exact)})"
        )


DEFAULT_RULES = RemovalRuleTable(
    prefix=(
        "adspot",
        "conditionalAd-",
        "hidden-",
        "social-",
        "publication",
        "share-",
        "hp-",
        "ad-",
        "recommended-",
    ),
    substring=(
        "combx",
        "retweet",
        "mediaarticlerelated",
        "menucontainer",
        "navbar",
        "storytopbar-bucket",
        "utility-bar",
        "inline-share-tools",
        "comment",
        "PopularQuestions",
        "contact",
        "foot",
        "footer",
        "Footer",
        "footnote",
        "cnn_strycaptiontxt",
        "cnn_html_slideshow",
        "cnn_strylftcntnt",
        "shoutbox",
        "sponsor",
        "tags",
        "socialnetworking",
        "socialNetworking",
        "scroll",
        "cnnStryHghLght",
        "cnn_stryspcvbx",
        "pagetools",
        "post-attributes",
        "welcome_form",
        "contentTools2",
        "the_answers",
        "communitypromo",
        "promo_holder",
        "runaroundLeft",
        "subscribe",
        "vcard",
        "articleheadings",
        "date",
        "popup",
        "author-dropdown",
        "tools",
        "socialtools",
        "byline",
        "konafilter",
        "KonaFilter",
        "breadcrumbs",
        "wp-caption-text",
        "source",
        "legende",
        "ajoutVideo",
        "timestamp",
        "js_replies",
        "creative_commons",
        "topics",
        "pagination",
        "mtl",
        "author",
        "credit",
        "toc_container",
        "sharedaddy",
    ),
    suffix=("meta",),
    exact=("side", "links", "inset", "print", "fn", "ad"),
)
