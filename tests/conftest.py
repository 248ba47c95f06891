import pytest
from pathlib import Path

from tests.helpers.fixtures import load_html_fixture


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir(project_root: Path) -> Path:
    """Return the fixtures directory path."""
    return project_root / "tests" / "fixtures"


@pytest.fixture
def sample_article_html(fixtures_dir: Path) -> str:
    """A news page with chrome, widgets and loose text around blocks."""
    return load_html_fixture("article.html", fixtures_dir)


@pytest.fixture
def anchor_html() -> str:
    """Inline link between two text fragments."""
    return '<div>see <a href="x">this</a> now</div>'
