"""Derive the document title from the article's first heading."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from kodama_meta.config.models import MissingPolicy, Selectors
from kodama_meta.sync.models import record_miss

logger = logging.getLogger(__name__)


def heading_text(heading: Tag) -> str | None:
    """Return the first non-blank direct text child of ``heading``, trimmed.

    Markup children such as taxon labels, superscripts or links are ignored.
    """
    for child in heading.children:
        if isinstance(child, NavigableString) and not isinstance(
            child, PreformattedString
        ):
            text = str(child).strip()
            if text:
                return text
    return None


def _title_tag(soup: BeautifulSoup) -> Tag:
    # Inline SVG <title> elements sit outside <head> and are left alone.
    head = soup.find("head")
    if isinstance(head, Tag):
        title = head.find("title")
        if isinstance(title, Tag):
            return title
    else:
        head = soup.new_tag("head")
        root = soup.find("html")
        (root if isinstance(root, Tag) else soup).insert(0, head)
    title = soup.new_tag("title")
    head.append(title)
    return title


def sync_title(
    soup: BeautifulSoup,
    *,
    selectors: Selectors | None = None,
    policy: MissingPolicy = MissingPolicy.SKIP,
) -> str | None:
    """Set ``<title>`` from the text of the article's first heading.

    Returns
    -------
    str or None
        The title that was set, or ``None`` when the heading or its text is
        missing and ``policy`` is ``SKIP``; the existing title is kept then.

    Raises
    ------
    SyncError
        If the heading or its text is missing and ``policy`` is ``ABORT``.
    """
    sel = selectors or Selectors()
    article = soup.find(sel.article)
    heading = article.find(sel.heading) if isinstance(article, Tag) else None
    if not isinstance(heading, Tag):
        record_miss(logger, policy, f"no <{sel.heading}> inside <{sel.article}>")
        return None
    text = heading_text(heading)
    if text is None:
        record_miss(logger, policy, f"<{sel.heading}> has no text content")
        return None
    _title_tag(soup).string = text
    return text


__all__ = ["heading_text", "sync_title"]
