"""Tests for the document root wrapper and the page shell."""

from __future__ import annotations

from bs4 import BeautifulSoup

from kodama_meta.elements import Annotation, emit
from kodama_meta.generator import render_page, wrap_document
from kodama_meta.reader import read_metadata


def test_wrap_adds_only_the_root_element() -> None:
    """Wrapping must add the document element and nothing else."""
    html = str(wrap_document("<p>hi</p>"))
    assert html == '<!DOCTYPE html>\n<html lang="en-US"><p>hi</p></html>', (
        f"unexpected wrapped document {html!r}"
    )


def test_wrap_keeps_metadata_nodes_intact() -> None:
    """Metadata nodes inside the fragment survive wrapping unchanged."""
    node = emit(Annotation("sha", "abc123"))
    html = str(wrap_document(str(node), lang="fr"))
    assert str(node) in html, "expected the metadata node to be embedded verbatim"
    assert read_metadata(html) == [Annotation("sha", "abc123")]
    soup = BeautifulSoup(html, "html.parser")
    assert soup.find("html").get("lang") == "fr", "expected the lang attribute"


def test_page_shell_provides_containers_and_scripts() -> None:
    """The page shell exposes the article, contents and load-time scripts."""
    html = str(
        render_page(
            '<h1 id="intro">Intro</h1>',
            '<a href="#intro"><span class="taxon">Note</span>Intro</a>',
        )
    )
    soup = BeautifulSoup(html, "html.parser")
    article = soup.find("article")
    assert article is not None and article.find("h1") is not None, (
        "expected the article to contain the heading"
    )
    toc = soup.find(id="toc")
    assert toc is not None and toc.name == "nav", "expected nav#toc container"
    script = soup.find("script")
    assert script is not None, "expected inline load-time scripts"
    assert "DOMContentLoaded" in script.get_text(), "expected ready listeners"
    assert "span.taxon" in script.get_text(), "expected the taxon script"
    assert soup.find("title") is not None, "expected an empty title element"


def test_page_shell_can_omit_scripts() -> None:
    """Scripts are optional for prerendered pages."""
    html = str(render_page("<h1>Intro</h1>", include_scripts=False, title="Intro"))
    soup = BeautifulSoup(html, "html.parser")
    assert soup.find("script") is None, "expected no scripts"
    assert soup.find("title").get_text() == "Intro", "expected the given title"
