"""Render markdown into structured content usable as a metadata value."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown
from markupsafe import Markup

from kodama_meta.elements import Encoding
from kodama_meta.generator.link_rewriter import LocalLinkExtension
from kodama_meta.values import StructuredContent

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

SINGLE_PARAGRAPH_PATTERN = re.compile(r"\A<p>(.*)</p>\Z", re.DOTALL)


class MarkdownRenderer:
    """Render markdown snippets with local-link rewriting applied."""

    def __init__(
        self,
        *,
        local_links: bool = True,
        encoding: Encoding = Encoding.SELECTIVE,
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        local_links : bool, optional
            Rewrite links to workspace pages into local reference nodes.
            Defaults to ``True``.
        encoding : Encoding, optional
            Encoding used for the generated local reference nodes.
        """
        self._link_extension = LocalLinkExtension(encoding) if local_links else None

    def html(self, text: str) -> str:
        """Render markdown into an HTML string."""
        if not text.strip():
            return ""
        extensions: list[Extension | str] = ["fenced_code", "tables", "sane_lists"]
        if self._link_extension:
            extensions.append(self._link_extension)
        md = Markdown(extensions=extensions)
        return md.convert(text)

    def render(self, text: str, *, inline: bool = False) -> StructuredContent:
        """Render ``text`` as structured content.

        With ``inline=True`` a lone wrapping paragraph is dropped so that the
        result can sit inside headings and titles.
        """
        html = self.html(text)
        if inline:
            html = self._unwrap_paragraph(html)
        return StructuredContent(Markup(html))

    @staticmethod
    def _unwrap_paragraph(html: str) -> str:
        match = SINGLE_PARAGRAPH_PATTERN.match(html.strip())
        if match is None or "<p>" in match.group(1):
            return html
        return match.group(1)


__all__ = ["SINGLE_PARAGRAPH_PATTERN", "MarkdownRenderer"]
