"""
Small helpers over the BeautifulSoup tree.

Node liveness, text discrimination and the remove/replace primitives shared
by the cleaning stages.
"""

from bs4 import NavigableString, PageElement, Tag
from bs4.element import PreformattedString


def is_live(node: PageElement) -> bool:
    """Return True while the node is still attached to a tree."""
    if getattr(node, "decomposed", False):
        return False
    return node.parent is not None


def is_text(node: PageElement) -> bool:
    """Plain text nodes only; comments, CDATA and doctypes are excluded."""
    return isinstance(node, NavigableString) and not isinstance(
        node, PreformattedString
    )


def is_tag(node: PageElement, *names: str) -> bool:
    return isinstance(node, Tag) and node.name in names


def destroy(node: PageElement) -> None:
    """Detach the node and free its subtree."""
    if isinstance(node, Tag):
        node.decompose()
    else:
        node.extract()


def replace_with_text(node: Tag) -> NavigableString:
    """
    Substitute the element's flattened text for the element itself.

    The element and all its descendants are freed; only the text remains in
    its slot.
    """
    text = NavigableString(node.get_text())
    node.replace_with(text)
    node.decompose()
    return text
