"""Markdown extension turning workspace links into local reference nodes."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit
from xml.etree import ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup

from kodama_meta.elements import Encoding, LocalReference, layout
from kodama_meta.values import ScalarValue, StructuredContent

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

MARKDOWN_SUFFIX = ".md"


def local_slug(target: str | None) -> str | None:
    """Return the workspace slug ``target`` points at, or None for other links.

    Links with a scheme, host, query, fragment or absolute path are left
    alone, as are links to files other than Markdown sources.

    >>> local_slug("./notes/intro.md")
    'notes/intro'
    >>> local_slug("https://example.com") is None
    True
    """
    if not target:
        return None
    if target.startswith(("#", "/")) or "://" in target:
        return None

    parsed = urlsplit(target)
    if parsed.scheme or parsed.netloc or parsed.query or parsed.fragment:
        return None

    path = posixpath.normpath(parsed.path)
    if path in (".", "") or path.startswith("../"):
        return None
    stem, suffix = posixpath.splitext(path)
    if suffix == MARKDOWN_SUFFIX:
        return stem
    if suffix:
        return None
    return path


class LocalLinkExtension(Extension):
    """Rewrite links to workspace pages into local reference nodes.

    Register this extension on a ``markdown.Markdown`` instance so that
    ``[text](notes/intro)`` is emitted as a ``type="local"`` metadata node
    instead of a plain anchor. It is the inverse of
    :func:`~kodama_meta.elements.local_in_meta`.
    """

    def __init__(self, encoding: Encoding = Encoding.SELECTIVE) -> None:
        super().__init__()
        self.encoding = encoding

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the local-link treeprocessor on the Markdown instance."""
        processor = LocalLinkTreeprocessor(md, self.encoding)
        md.treeprocessors.register(processor, "kodama_local_links", 15)


class LocalLinkTreeprocessor(Treeprocessor):
    """Replace anchors with workspace targets by local reference nodes."""

    def __init__(self, md: Markdown, encoding: Encoding) -> None:
        super().__init__(md)
        self.encoding = encoding

    def run(self, root: Element) -> Element:
        """Swap each qualifying anchor for a metadata node in place."""
        for parent in list(root.iter()):
            for index, child in enumerate(list(parent)):
                if child.tag != "a":
                    continue
                slug = local_slug(child.get("href"))
                if slug is None:
                    continue
                parent[index] = self._local_node(child, slug)
        return root

    def _local_node(self, anchor: Element, slug: str) -> Element:
        """Build the metadata node replacing ``anchor``."""
        structured = len(anchor) > 0
        if structured:
            reference = LocalReference(slug, StructuredContent(Markup("")))
        else:
            reference = LocalReference(slug, ScalarValue(anchor.text or ""))
        node_layout = layout(reference, self.encoding)
        node = etree.Element(node_layout.tag, dict(node_layout.attrs))
        if structured:
            node.text = anchor.text
            node.extend(list(anchor))
        node.tail = anchor.tail
        return node


__all__ = ["LocalLinkExtension", "LocalLinkTreeprocessor", "local_slug"]
