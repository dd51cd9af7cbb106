"""Tests for the load-time taxon and title passes and their host.

Each test builds a small page with BeautifulSoup, runs a pass on the parsed
document, and inspects the mutated tree. Unmatched entries must be skipped
with a logged warning by default and must raise under the abort policy.
"""

from __future__ import annotations

import logging

import pytest
from bs4 import BeautifulSoup

from kodama_meta.config import KodamaConfig, MissingPolicy, Selectors
from kodama_meta.errors import SyncError
from kodama_meta.sync import (
    DocumentHost,
    heading_text,
    standard_host,
    sync_taxa,
    sync_title,
    synchronize,
)

PAGE = """
<html><head><title></title></head><body>
<div id="grid-wrapper">
<article>
  <section><h1 id="intro"><span class="taxon"></span>Intro<sup>note</sup></h1></section>
  <section><h2 id="sec-2"><span class="taxon"></span>Result</h2></section>
  <section><h2 id="sec-3"><span class="taxon">old</span>Proof</h2></section>
</article>
<nav id="toc">
  <li><a class="bullet" href="sec-2.html">&#9632;</a>
    <span class="link"><a href="#sec-2"><span class="taxon">Theorem</span>Result</a></span></li>
  <li><a class="bullet" href="sec-3.html">&#9632;</a>
    <span class="link"><a href="page.html#sec-3"><span class="taxon">Lemma <b>1.2</b></span>Proof</a></span></li>
</nav>
</div>
</body></html>
"""


def _soup(html: str = PAGE) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_taxon_is_copied_from_contents_to_heading() -> None:
    """The heading label takes the label of its contents entry."""
    soup = _soup()
    report = sync_taxa(soup)
    label = soup.find(id="sec-2").select_one("span.taxon")
    assert label.get_text() == "Theorem", f"expected Theorem, got {label!r}"
    assert report.updated == ["sec-2", "sec-3"], (
        f"expected both entries in contents order, got {report.updated!r}"
    )
    assert report.missing == [], f"expected no misses, got {report.missing!r}"


def test_taxon_markup_replaces_existing_label() -> None:
    """Label markup is copied and any previous label content is dropped."""
    soup = _soup()
    sync_taxa(soup)
    label = soup.find(id="sec-3").select_one("span.taxon")
    assert label.decode_contents() == "Lemma <b>1.2</b>", (
        f"unexpected label content {label.decode_contents()!r}"
    )
    source = soup.find(id="toc").select_one('a[href="page.html#sec-3"] span.taxon')
    assert source.decode_contents() == "Lemma <b>1.2</b>", (
        "expected the contents label to be left in place"
    )


def test_unmatched_entry_is_skipped_with_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Missing headings are skipped and reported under the skip policy."""
    html = PAGE.replace('id="sec-2"', 'id="renamed"')
    soup = _soup(html)
    with caplog.at_level(logging.WARNING, logger="kodama_meta.sync.taxon"):
        report = sync_taxa(soup)
    assert report.updated == ["sec-3"], f"expected sec-3 only, got {report.updated!r}"
    assert len(report.missing) == 1, f"expected one miss, got {report.missing!r}"
    assert "sec-2" in caplog.text, "expected the miss to be logged"


def test_unmatched_entry_aborts_under_abort_policy() -> None:
    """The abort policy raises on the first unmatched entry."""
    soup = _soup(PAGE.replace('id="sec-2"', 'id="renamed"'))
    with pytest.raises(SyncError, match="sec-2"):
        sync_taxa(soup, policy=MissingPolicy.ABORT)


def test_missing_containers_are_reported() -> None:
    """A page without the contents container records a single miss."""
    report = sync_taxa(_soup("<article><h1>Only</h1></article>"))
    assert report.updated == [] and len(report.missing) == 1, (
        f"expected one container miss, got {report!r}"
    )


def test_custom_selectors_are_honoured() -> None:
    """Selectors from configuration replace the default names."""
    html = (
        '<main><h2 id="a"><span class="kind"></span>A</h2></main>'
        '<div id="side"><a class="dot" href="#a">*</a>'
        '<a href="#a"><span class="kind">Definition</span>A</a></div>'
    )
    soup = _soup(html)
    selectors = Selectors(
        toc_id="side", article="main", taxon_class="kind", bullet_class="dot"
    )
    report = sync_taxa(soup, selectors=selectors)
    label = soup.find(id="a").select_one("span.kind")
    assert label.get_text() == "Definition", f"unexpected label {label!r}"
    assert report.missing == [], "expected the bullet anchor to be excluded"


def test_title_uses_first_heading_text_only() -> None:
    """Markup children of the heading do not contribute to the title."""
    soup = _soup()
    title = sync_title(soup)
    assert title == "Intro", f"expected Intro, got {title!r}"
    assert soup.title.get_text() == "Intro", "expected <title> to be updated"


def test_title_skips_whitespace_and_label_children() -> None:
    """Leading whitespace and taxon labels are ignored; text is trimmed."""
    heading = _soup(
        '<h1>\n  <span class="taxon">Definition. </span>  Groups  <a href="#">#</a></h1>'
    ).h1
    assert heading_text(heading) == "Groups"


def test_title_element_is_created_when_missing() -> None:
    """A page without ``<title>`` gains one."""
    soup = _soup("<html><body><article><h1>Alone</h1></article></body></html>")
    sync_title(soup)
    assert soup.head is not None and soup.head.title.get_text() == "Alone", (
        f"expected a created head/title, got {soup!s}"
    )


def test_inline_svg_title_is_not_mistaken_for_the_page_title() -> None:
    """Only a ``<title>`` inside ``<head>`` is the document title."""
    soup = _soup(
        "<html><body><svg><title>icon</title></svg>"
        "<article><h1>Real</h1></article></body></html>"
    )
    sync_title(soup)
    assert soup.svg.title.get_text() == "icon", "expected the SVG title untouched"
    assert soup.head is not None and soup.head.title.get_text() == "Real", (
        f"expected a created head/title, got {soup!s}"
    )


def test_missing_heading_keeps_title_under_skip_policy() -> None:
    """Without a heading the title is left untouched."""
    soup = _soup("<html><head><title>Keep</title></head><article></article></html>")
    assert sync_title(soup) is None
    assert soup.title.get_text() == "Keep", "expected the title to be unchanged"


def test_missing_heading_text_aborts_under_abort_policy() -> None:
    """Headings without text raise under the abort policy."""
    soup = _soup("<article><h1><span>icon</span></h1></article>")
    with pytest.raises(SyncError, match="no text content"):
        sync_title(soup, policy=MissingPolicy.ABORT)


def test_host_runs_passes_once_in_order() -> None:
    """The ready signal runs every pass once, in registration order."""
    calls: list[str] = []
    host = DocumentHost(_soup())
    host.register("first", lambda soup: calls.append("first"))
    host.register("second", lambda soup: calls.append("second"))
    host.ready()
    assert calls == ["first", "second"], f"unexpected call order {calls!r}"
    assert host.delivered, "expected the host to record delivery"
    with pytest.raises(RuntimeError, match="already delivered"):
        host.ready()
    with pytest.raises(RuntimeError, match="already delivered"):
        host.register("late", lambda soup: None)


def test_host_rejects_duplicate_pass_names() -> None:
    """Pass names identify results and must be unique."""
    host = DocumentHost(_soup())
    host.register("title", sync_title)
    with pytest.raises(ValueError, match="already registered"):
        host.register("title", sync_title)


def test_standard_host_results() -> None:
    """The standard host reports the title and the taxon report."""
    results = standard_host(_soup()).ready()
    assert results["title"] == "Intro", f"unexpected title {results['title']!r}"
    assert results["taxon"].updated == ["sec-2", "sec-3"]


def test_synchronize_prerenders_markup() -> None:
    """``synchronize`` returns markup with both passes applied."""
    html = synchronize(PAGE, KodamaConfig())
    soup = _soup(html)
    assert soup.title.get_text() == "Intro"
    assert soup.find(id="sec-2").select_one("span.taxon").get_text() == "Theorem"
