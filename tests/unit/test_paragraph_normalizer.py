from unittest.mock import patch

import pytest
from bs4 import NavigableString, Tag

from domain.models import CleaningReport
from domain.paragraph_normalizer import ParagraphNormalizer
from tests.helpers.fixtures import child_kinds, collapse, parse


def run_normalizer(html: str):  # type: ignore
    soup = parse(html)
    report = CleaningReport()
    ParagraphNormalizer().run(soup, report)
    return soup, report


class TestWholeContainerReplacement:
    """Containers without block content become a single paragraph."""

    @pytest.mark.unit
    def test_flow_only_div_becomes_paragraph(self) -> None:
        soup, report = run_normalizer(
            '<div id="lead" class="story intro">Hello <em>big</em> world</div>'
        )

        assert soup.find("div") is None
        p = soup.body.find("p", recursive=False)
        assert p is not None
        assert p["id"] == "lead"
        assert p["class"] == ["story", "intro"]
        assert p.get_text() == "Hello big world"
        # Children are moved, not flattened
        assert p.find("em") is not None
        assert report.containers_replaced == 1
        assert report.paragraphs_created == 1

    @pytest.mark.unit
    def test_children_are_moved_not_copied(self) -> None:
        soup = parse("<div>one <em>two</em></div>")
        em = soup.find("em")

        ParagraphNormalizer().run(soup, CleaningReport())

        assert soup.find("em") is em
        assert em.parent.name == "p"

    @pytest.mark.unit
    def test_content_is_preserved(self) -> None:
        html = "<article>First line <b>bold</b>\n and   <code>code</code> end</article>"
        before = collapse(parse(html).body.get_text())

        soup, _ = run_normalizer(html)

        assert collapse(soup.body.get_text()) == before
        assert soup.find("article") is None

    @pytest.mark.unit
    def test_nested_spans_are_each_replaced(self) -> None:
        soup, report = run_normalizer("<div>a <span>b</span></div>")

        outer = soup.body.find("p", recursive=False)
        assert outer is not None
        assert soup.find("span") is None
        assert child_kinds(outer) == ["#text", "p"]
        assert report.containers_replaced == 2


class TestChildNormalization:
    """Containers with block content keep their element and split children."""

    @pytest.mark.unit
    def test_anchor_stays_with_surrounding_text(self, anchor_html: str) -> None:
        soup, report = run_normalizer(anchor_html)

        div = soup.find("div")
        assert div is not None
        assert child_kinds(div) == ["p"]

        p = div.p
        assert child_kinds(p) == ["#text", "a", "#text"]
        assert p.contents[0] == "see "
        assert p.contents[1]["href"] == "x"
        assert p.contents[1].get_text() == "this"
        assert p.contents[2] == " now"
        assert report.containers_split == 1
        assert report.paragraphs_created == 1

    @pytest.mark.unit
    def test_buffer_flushes_around_existing_paragraph(self) -> None:
        soup = parse(
            "<div>text1<p>existing</p>text2"
            "<table><tr><td>cell</td></tr></table></div>"
        )
        existing = soup.find("p")

        ParagraphNormalizer().run(soup, CleaningReport())

        div = soup.find("div")
        assert child_kinds(div) == ["p", "p", "p", "table"]
        assert [c.get_text() for c in div.contents[:3]] == [
            "text1",
            "existing",
            "text2",
        ]
        assert div.contents[1] is existing

    @pytest.mark.unit
    def test_anchor_before_text_is_not_duplicated(self) -> None:
        soup, _ = run_normalizer(
            '<div><a href="/a">first</a> middle <a href="/b">second</a>'
            "<ul><li>item</li></ul></div>"
        )

        div = soup.find("div")
        assert child_kinds(div) == ["p", "ul"]
        assert len(div.find_all("a")) == 2
        assert [a["href"] for a in div.p.find_all("a")] == ["/a", "/b"]
        assert div.p.get_text() == "first middle second"

    @pytest.mark.unit
    def test_whitespace_and_blocks_are_kept_in_place(self) -> None:
        soup = parse("<div><img src='a.png'/> <br/>caption text<ol><li>x</li></ol></div>")
        img = soup.find("img")

        ParagraphNormalizer().run(soup, CleaningReport())

        div = soup.find("div")
        assert child_kinds(div) == ["img", "#text", "br", "p", "ol"]
        assert div.contents[0] is img
        assert div.contents[3].get_text() == "caption text"

    @pytest.mark.unit
    def test_separate_runs_make_separate_paragraphs(self) -> None:
        soup, report = run_normalizer(
            "<div>alpha<blockquote>quote</blockquote>beta <a href='/b'>link</a></div>"
        )

        div = soup.find("div")
        assert child_kinds(div) == ["p", "blockquote", "p"]
        assert div.contents[0].get_text() == "alpha"
        assert div.contents[2].get_text() == "beta link"
        assert report.paragraphs_created == 2

    @pytest.mark.unit
    def test_replacement_nodes_do_not_touch_container(self, anchor_html: str) -> None:
        soup = parse(anchor_html)
        div = soup.find("div")
        before = str(div)

        replacements, paragraphs = ParagraphNormalizer().get_replacement_nodes(
            soup, div
        )

        assert str(div) == before
        assert paragraphs == 1
        assert len(replacements) == 1
        assert isinstance(replacements[0], Tag)
        assert replacements[0].parent is None

    @pytest.mark.unit
    def test_trigger_text_becomes_new_node(self) -> None:
        soup = parse("<div>alone<pre>code</pre></div>")
        original = soup.find("div").contents[0]

        replacements, _ = ParagraphNormalizer().get_replacement_nodes(
            soup, soup.find("div")
        )

        text = replacements[0].contents[0]
        assert isinstance(text, NavigableString)
        assert text == "alone"
        assert text is not original


class TestContainerLifecycle:
    """Candidate snapshot, stale containers and failures."""

    @pytest.mark.unit
    def test_container_inside_absorbed_anchor_is_processed_once(self) -> None:
        html = (
            '<div>intro <a href="/x"><span>inner</span></a>'
            "<table><tr><td>t</td></tr></table></div>"
        )
        soup, report = run_normalizer(html)

        anchor = soup.find("a")
        assert soup.find("span") is None
        assert anchor.parent.name == "p"
        assert child_kinds(anchor) == ["p"]
        assert report.containers_skipped == 0

        second = CleaningReport()
        before = str(soup)
        ParagraphNormalizer().run(soup, second)
        assert str(soup) == before

    @pytest.mark.unit
    def test_stale_container_is_skipped(self) -> None:
        soup = parse("<div>keep<table></table></div><span>gone</span>")
        div = soup.find("div")
        span = soup.find("span")
        span.decompose()

        report = CleaningReport()
        with patch.object(soup, "select", return_value=[div, span]):
            ParagraphNormalizer().run(soup, report)

        assert report.containers_skipped == 1
        assert report.containers_split == 1

    @pytest.mark.unit
    def test_failure_leaves_container_and_continues(self) -> None:
        soup = parse(
            "<div id='broken'>text<table></table></div><div id='fine'>plain</div>"
        )
        report = CleaningReport()

        with patch.object(
            ParagraphNormalizer,
            "get_replacement_nodes",
            side_effect=RuntimeError("boom"),
        ):
            ParagraphNormalizer().run(soup, report)

        broken = soup.find(id="broken")
        assert broken.name == "div"
        assert child_kinds(broken) == ["#text", "table"]
        assert soup.find(id="fine").name == "p"
        assert report.containers_failed == 1
        assert report.containers_replaced == 1

    @pytest.mark.unit
    def test_failed_substitution_leaves_container_intact(self) -> None:
        soup = parse("<div id='lead'>plain <b>text</b></div>")
        report = CleaningReport()

        with patch.object(Tag, "replace_with", side_effect=RuntimeError("boom")):
            ParagraphNormalizer().run(soup, report)

        div = soup.find(id="lead")
        assert div.name == "div"
        assert child_kinds(div) == ["#text", "b"]
        assert div.get_text() == "plain text"
        assert soup.find("p") is None
        assert report.containers_failed == 1
        assert report.containers_replaced == 0

    @pytest.mark.unit
    def test_second_run_changes_nothing(self) -> None:
        html = (
            "<div>lead <a href='/1'>one</a> tail<p>para</p>"
            "<div>inner <b>bold</b></div>after</div>"
        )
        soup, _ = run_normalizer(html)
        once = str(soup)

        ParagraphNormalizer().run(soup, CleaningReport())

        assert str(soup) == once
