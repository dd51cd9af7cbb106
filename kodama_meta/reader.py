"""Recover metadata elements from rendered markup.

The reader walks a fragment with BeautifulSoup and rebuilds
:class:`~kodama_meta.elements.Annotation`,
:class:`~kodama_meta.elements.EmbedDirective` and
:class:`~kodama_meta.elements.LocalReference` instances from every metadata
node it finds. All encodings in circulation are accepted: the single
``<kodama type="...">`` tag, the older per-kind ``<kodamameta>`` style tags,
and, when the caller passes ``Encoding.UNIFORM_REPR``, identifiers written
in quoted debug form. Canonical identifiers are read verbatim, so a key that
really starts and ends with a quote survives a round trip.

A node carrying a ``value`` attribute decodes to a scalar; otherwise its
trimmed inner markup decodes to structured content. Metadata nodes nested
inside another node's body stay part of that body.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from bs4 import BeautifulSoup, Tag
from markupsafe import Markup

from kodama_meta._constants import (
    LEGACY_TAG_PREFIX,
    LEGACY_TAGS,
    META_TAG,
    TYPE_ATTR,
    VALUE_ATTR,
)
from kodama_meta.elements import (
    DEFAULT_CATALOG,
    DEFAULT_NUMBERING,
    DEFAULT_OPEN,
    Annotation,
    Element,
    ElementKind,
    EmbedDirective,
    Encoding,
    LocalReference,
)
from kodama_meta.errors import MarkupDecodeError
from kodama_meta.values import (
    MetadataValue,
    ScalarValue,
    StructuredContent,
    parse_flag,
    unquote_repr,
)

logger = logging.getLogger(__name__)

TAXON_KEY = "taxon"


def is_metadata_node(tag: Tag) -> bool:
    """Return True when ``tag`` is a metadata node in any encoding."""
    return tag.name == META_TAG or tag.name in LEGACY_TAGS


def _node_kind(tag: Tag) -> ElementKind:
    if tag.name == META_TAG:
        raw = tag.get(TYPE_ATTR)
        try:
            return ElementKind(raw)
        except ValueError as exc:
            msg = f"unknown metadata node type {raw!r}"
            raise MarkupDecodeError(msg) from exc
    return ElementKind(tag.name.removeprefix(LEGACY_TAG_PREFIX))


def _attribute(tag: Tag, name: str, encoding: Encoding) -> str:
    value = typ.cast("str | None", tag.get(name))
    if value is None:
        msg = f"missing attribute `{name}` in <{tag.name}> metadata node"
        raise MarkupDecodeError(msg)
    if encoding is Encoding.UNIFORM_REPR and tag.name == META_TAG:
        return unquote_repr(value)
    return value


def _primary(tag: Tag, *, empty_as_scalar: bool) -> MetadataValue:
    scalar = tag.get(VALUE_ATTR)
    if scalar is not None:
        return ScalarValue(typ.cast("str", scalar))
    body = tag.decode_contents().strip()
    if not body and empty_as_scalar:
        return ScalarValue("")
    return StructuredContent(Markup(body))


def decode_node(tag: Tag, encoding: Encoding = Encoding.SELECTIVE) -> Element:
    """Decode one metadata node into its element.

    Parameters
    ----------
    tag : Tag
        A metadata node in any encoding.
    encoding : Encoding, optional
        Encoding the page was emitted with. Identifiers of single-tag nodes
        are unquoted only for ``UNIFORM_REPR``; per-kind tags are always read
        verbatim.

    Raises
    ------
    MarkupDecodeError
        If the node type is unknown or a required attribute is missing.
    """
    kind = _node_kind(tag)
    match kind:
        case ElementKind.META:
            return Annotation(
                key=_attribute(tag, "key", encoding),
                value=_primary(tag, empty_as_scalar=False),
            )
        case ElementKind.EMBED:
            return EmbedDirective(
                url=_attribute(tag, "url", encoding),
                title=_primary(tag, empty_as_scalar=True),
                numbering=parse_flag(
                    typ.cast("str | None", tag.get("numbering")), DEFAULT_NUMBERING
                ),
                open=parse_flag(typ.cast("str | None", tag.get("open")), DEFAULT_OPEN),
                catalog=parse_flag(
                    typ.cast("str | None", tag.get("catalog")), DEFAULT_CATALOG
                ),
            )
        case ElementKind.LOCAL:
            return LocalReference(
                slug=_attribute(tag, "slug", encoding),
                text=_primary(tag, empty_as_scalar=True),
            )


def iter_elements(
    markup: str | BeautifulSoup, encoding: Encoding = Encoding.SELECTIVE
) -> cabc.Iterator[Element]:
    """Yield every top-level metadata element in ``markup`` in document order."""
    soup = (
        markup
        if isinstance(markup, BeautifulSoup)
        else BeautifulSoup(markup, "html.parser")
    )
    for tag in soup.find_all(is_metadata_node):
        if tag.find_parent(is_metadata_node) is not None:
            continue
        yield decode_node(tag, encoding)


def read_metadata(
    markup: str | BeautifulSoup, encoding: Encoding = Encoding.SELECTIVE
) -> list[Annotation]:
    """Return the annotations in ``markup`` in emission order."""
    return [
        el for el in iter_elements(markup, encoding) if isinstance(el, Annotation)
    ]


def display_taxon(text: str) -> str:
    """Capitalize a taxon and add the trailing separator used in headings.

    >>> display_taxon("theorem")
    'Theorem. '
    """
    if not text:
        return text
    return f"{text[0].upper()}{text[1:]}. "


def collect_metadata(
    markup: str | BeautifulSoup, encoding: Encoding = Encoding.SELECTIVE
) -> dict[str, MetadataValue]:
    """Fold annotations into a mapping; later keys replace earlier ones.

    Scalar ``taxon`` values are normalized with :func:`display_taxon`.
    """
    collected: dict[str, MetadataValue] = {}
    for annotation in read_metadata(markup, encoding):
        value = annotation.value
        if annotation.key == TAXON_KEY and isinstance(value, ScalarValue):
            value = ScalarValue(display_taxon(str(value.value)))
        if annotation.key in collected:
            logger.debug("annotation %r repeated; keeping the later value", annotation.key)
        collected[annotation.key] = value
    return collected


__all__ = [
    "TAXON_KEY",
    "collect_metadata",
    "decode_node",
    "display_taxon",
    "is_metadata_node",
    "iter_elements",
    "read_metadata",
]
