"""Copy section taxa from the table of contents onto article headings.

Every non-bullet anchor in the contents container names a heading by its
``#fragment`` and carries the heading's taxon label (``Theorem``,
``Definition 2.1``...) in a ``span.taxon``. The pass overwrites the matching
heading's own ``span.taxon`` with that label so numbering computed for the
contents shows up in the body as well. Entries are independent and handled
in contents order.
"""

from __future__ import annotations

import copy
import logging

from bs4 import BeautifulSoup, Tag

from kodama_meta.config.models import MissingPolicy, Selectors
from kodama_meta.sync.models import SyncReport, record_miss

logger = logging.getLogger(__name__)


def _fragment(href: str) -> str:
    _, sep, fragment = href.rpartition("#")
    return fragment if sep else ""


def _replace_contents(target: Tag, source: Tag) -> None:
    target.clear()
    for child in list(source.contents):
        target.append(copy.copy(child))


def sync_taxa(
    soup: BeautifulSoup,
    *,
    selectors: Selectors | None = None,
    policy: MissingPolicy = MissingPolicy.SKIP,
) -> SyncReport:
    """Overwrite heading taxa in the article with the labels from the contents.

    Parameters
    ----------
    soup : BeautifulSoup
        Parsed document; modified in place.
    selectors : Selectors, optional
        Container ids and class names; defaults to the standard page shell.
    policy : MissingPolicy, optional
        ``SKIP`` logs and continues past unmatched entries, ``ABORT`` raises.

    Returns
    -------
    SyncReport
        Updated heading ids and diagnostics for skipped entries.

    Raises
    ------
    SyncError
        If an entry cannot be matched and ``policy`` is ``ABORT``.
    """
    sel = selectors or Selectors()
    report = SyncReport()
    toc = soup.find(id=sel.toc_id)
    article = soup.find(sel.article)
    if not isinstance(toc, Tag) or not isinstance(article, Tag):
        record_miss(
            logger,
            policy,
            f"contents container #{sel.toc_id} or <{sel.article}> not found",
            report,
        )
        return report

    label_selector = f"span.{sel.taxon_class}"
    for anchor in toc.select(f"a:not(.{sel.bullet_class})"):
        href = str(anchor.get("href") or "")
        target_id = _fragment(href)
        source = anchor.select_one(label_selector)
        if not target_id or source is None:
            record_miss(logger, policy, f"contents entry {href!r} has no taxon target", report)
            continue
        target = article.find(id=target_id)
        label = target.select_one(label_selector) if isinstance(target, Tag) else None
        if label is None:
            record_miss(
                logger, policy, f"no taxon label for heading #{target_id}", report
            )
            continue
        _replace_contents(label, source)
        report.updated.append(target_id)
    return report


__all__ = ["sync_taxa"]
