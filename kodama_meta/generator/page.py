"""Wrap rendered fragments into standalone documents.

:func:`wrap_document` is the minimal root wrapper: it puts a fragment inside
a single ``<html>`` element and does nothing else. :func:`render_page` builds
the full page shell the load-time passes expect, with the article container,
the ``#toc`` navigation container, and the inline scripts that keep the title
and section taxa in sync in the browser.

Wrapping is not idempotent; call it once per document.

Example
-------
>>> from kodama_meta.generator.page import wrap_document
>>> str(wrap_document("<p>hi</p>"))
'<!DOCTYPE html>\\n<html lang="en-US"><p>hi</p></html>'
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from kodama_meta._constants import DEFAULT_LANG


class DocumentBuilder:
    """Render document templates from the package template directory."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``document.jinja`` and ``page.jinja``.
            Defaults to ``kodama_meta/templates``.
        """
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def wrap(self, fragment: str, *, lang: str = DEFAULT_LANG) -> Markup:
        """Return ``fragment`` wrapped in a top-level document element."""
        template = self.env.get_template("document.jinja")
        return Markup(template.render(content=Markup(fragment), lang=lang))

    def page(
        self,
        article_html: str,
        toc_html: str = "",
        *,
        title: str = "",
        lang: str = DEFAULT_LANG,
        include_scripts: bool = True,
    ) -> Markup:
        """Return the full page shell around an article and its contents list.

        Parameters
        ----------
        article_html : str
            Rendered article body.
        toc_html : str, optional
            Rendered table of contents placed in ``nav#toc``.
        title : str, optional
            Initial document title; normally left empty and filled in from
            the first heading at load time.
        lang : str, optional
            Value of the root ``lang`` attribute.
        include_scripts : bool, optional
            Inline the browser-side synchronization scripts.
        """
        template = self.env.get_template("page.jinja")
        html = template.render(
            article=Markup(article_html),
            toc=Markup(toc_html),
            title=title,
            lang=lang,
            include_scripts=include_scripts,
        )
        if not html.endswith("\n"):
            html += "\n"
        return Markup(html)


_DEFAULT_BUILDER: DocumentBuilder | None = None


def _builder() -> DocumentBuilder:
    global _DEFAULT_BUILDER  # noqa: PLW0603
    if _DEFAULT_BUILDER is None:
        _DEFAULT_BUILDER = DocumentBuilder()
    return _DEFAULT_BUILDER


def wrap_document(fragment: str, *, lang: str = DEFAULT_LANG) -> Markup:
    """Wrap ``fragment`` with the default builder."""
    return _builder().wrap(fragment, lang=lang)


def render_page(
    article_html: str,
    toc_html: str = "",
    *,
    title: str = "",
    lang: str = DEFAULT_LANG,
    include_scripts: bool = True,
) -> Markup:
    """Render the page shell with the default builder."""
    return _builder().page(
        article_html,
        toc_html,
        title=title,
        lang=lang,
        include_scripts=include_scripts,
    )


__all__ = ["DocumentBuilder", "render_page", "wrap_document"]
