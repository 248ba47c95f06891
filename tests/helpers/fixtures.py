from pathlib import Path
from typing import List

from bs4 import BeautifulSoup, NavigableString, Tag


def load_html_fixture(fixture_name: str, fixtures_dir: Path) -> str:
    """
    Load HTML fixture content from the fixtures directory.

    Args:
        fixture_name: Name of the HTML fixture file
        fixtures_dir: Path to the fixtures directory

    Returns:
        HTML content as string

    Raises:
        FileNotFoundError: If fixture doesn't exist
    """
    fixture_path = fixtures_dir / "html" / fixture_name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text(encoding="utf-8")


def parse(html: str) -> BeautifulSoup:
    """Parse markup the way the cleaning service does."""
    return BeautifulSoup(html, "lxml")


def child_kinds(tag: Tag) -> List[str]:
    """Describe direct children as tag names, or '#text' for strings."""
    return [
        "#text" if isinstance(child, NavigableString) else child.name
        for child in tag.contents
    ]


def collapse(text: str) -> str:
    """Collapse whitespace runs for content comparisons."""
    return " ".join(text.split())
