"""One-shot host that delivers the document-ready signal to load-time passes.

The host owns a parsed document and a list of passes. :meth:`DocumentHost.ready`
runs every registered pass exactly once, synchronously and in registration
order; the host cannot be re-entered or reset afterwards. This mirrors the
browser's single ``DOMContentLoaded`` delivery while keeping the DOM handle
explicit for build-time prerendering and tests.

Example
-------
>>> from bs4 import BeautifulSoup
>>> from kodama_meta.sync import standard_host
>>> soup = BeautifulSoup("<article><h1>Intro</h1></article>", "html.parser")
>>> standard_host(soup).ready()["title"]
'Intro'
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import logging
import typing as typ

from bs4 import BeautifulSoup

from kodama_meta.config.models import KodamaConfig
from kodama_meta.sync.taxon import sync_taxa
from kodama_meta.sync.title import sync_title

logger = logging.getLogger(__name__)

DocumentPass = cabc.Callable[[BeautifulSoup], typ.Any]


class DocumentHost:
    """Run registered passes against ``soup`` once the document is ready."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup
        self._passes: list[tuple[str, DocumentPass]] = []
        self._delivered = False

    @property
    def delivered(self) -> bool:
        """Return True once :meth:`ready` has run."""
        return self._delivered

    def register(self, name: str, document_pass: DocumentPass) -> None:
        """Add a pass to run on :meth:`ready`.

        Raises
        ------
        RuntimeError
            If the ready signal was already delivered.
        ValueError
            If a pass named ``name`` is already registered.
        """
        if self._delivered:
            msg = f"cannot register {name!r}: document ready already delivered"
            raise RuntimeError(msg)
        if any(existing == name for existing, _ in self._passes):
            msg = f"pass {name!r} is already registered"
            raise ValueError(msg)
        self._passes.append((name, document_pass))

    def ready(self) -> dict[str, typ.Any]:
        """Deliver the ready signal, returning each pass's result by name.

        Raises
        ------
        RuntimeError
            If called more than once.
        """
        if self._delivered:
            msg = "document ready signal already delivered"
            raise RuntimeError(msg)
        self._delivered = True
        results: dict[str, typ.Any] = {}
        for name, document_pass in self._passes:
            logger.debug("running load-time pass %s", name)
            results[name] = document_pass(self.soup)
        return results


def standard_host(
    soup: BeautifulSoup, config: KodamaConfig | None = None
) -> DocumentHost:
    """Return a host with the title and taxon passes registered."""
    cfg = config or KodamaConfig()
    host = DocumentHost(soup)
    host.register(
        "title",
        functools.partial(sync_title, selectors=cfg.selectors, policy=cfg.missing),
    )
    host.register(
        "taxon",
        functools.partial(sync_taxa, selectors=cfg.selectors, policy=cfg.missing),
    )
    return host


def synchronize(html: str, config: KodamaConfig | None = None) -> str:
    """Parse ``html``, run the standard passes, and return the updated markup."""
    soup = BeautifulSoup(html, "html.parser")
    standard_host(soup, config).ready()
    return str(soup)


__all__ = ["DocumentHost", "DocumentPass", "standard_host", "synchronize"]
