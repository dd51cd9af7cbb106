"""Typed dataclasses describing kodama_meta configuration."""

from __future__ import annotations

import dataclasses as dc
import enum

from kodama_meta._constants import (
    ARTICLE_TAG,
    BULLET_CLASS,
    DEFAULT_LANG,
    HEADING_TAG,
    TAXON_CLASS,
    TOC_ID,
)
from kodama_meta.elements import Encoding


class MissingPolicy(enum.StrEnum):
    """What a load-time pass does when an expected element is absent."""

    SKIP = "skip"
    ABORT = "abort"


@dc.dataclass(slots=True)
class Selectors:
    """Element names, ids, and classes the load-time passes select on."""

    toc_id: str = TOC_ID
    article: str = ARTICLE_TAG
    heading: str = HEADING_TAG
    taxon_class: str = TAXON_CLASS
    bullet_class: str = BULLET_CLASS


@dc.dataclass(slots=True)
class KodamaConfig:
    """Resolved configuration shared by the emitter, wrapper, and passes."""

    encoding: Encoding = Encoding.SELECTIVE
    lang: str = DEFAULT_LANG
    missing: MissingPolicy = MissingPolicy.SKIP
    selectors: Selectors = dc.field(default_factory=Selectors)


__all__ = ["KodamaConfig", "MissingPolicy", "Selectors"]
