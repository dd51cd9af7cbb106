"""Metadata element kinds and their markup serializers.

Three element kinds share one wire tag and are told apart by a ``type``
discriminator:

* :class:`Annotation` – a named fact about the page (``type="meta"``).
* :class:`EmbedDirective` – another page to inline or list (``type="embed"``).
* :class:`LocalReference` – an in-workspace link by slug (``type="local"``).

Each kind has its own attribute serializer; :func:`emit` dispatches on the
element and applies the value-attribute rule: a scalar primary value lands in
``value=""`` with an empty body, structured content becomes the body and no
``value`` attribute is written.

Two older encodings are still produced on request through :class:`Encoding`
so pages built for earlier readers keep working.

Examples
--------
>>> from kodama_meta.elements import Annotation, emit
>>> str(emit(Annotation("sha", "abc123")))
'<kodama type="meta" key="sha" value="abc123"></kodama>'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

from markupsafe import Markup, escape

from kodama_meta._constants import LEGACY_TAG_PREFIX, META_TAG, TYPE_ATTR, VALUE_ATTR
from kodama_meta.values import (
    MetadataValue,
    ScalarValue,
    as_value,
    debug_repr,
    encode,
    stringify,
    text_of,
)

DEFAULT_NUMBERING = False
DEFAULT_OPEN = True
DEFAULT_CATALOG = True


class ElementKind(enum.StrEnum):
    """Closed set of metadata node kinds, valued by their wire discriminator."""

    META = "meta"
    EMBED = "embed"
    LOCAL = "local"


class Encoding(enum.StrEnum):
    """Markup encodings of the same element information.

    ``SELECTIVE`` is the canonical form. ``PER_KIND_TAGS`` writes
    ``kodamameta``/``kodamaembed``/``kodamalocal`` tags without a ``type``
    attribute. ``UNIFORM_REPR`` keeps the single tag but writes every
    non-primary field through :func:`~kodama_meta.values.debug_repr`.
    """

    SELECTIVE = "selective"
    PER_KIND_TAGS = "per-kind-tags"
    UNIFORM_REPR = "uniform-repr"


def _lift(instance: object, name: str) -> None:
    object.__setattr__(instance, name, as_value(getattr(instance, name)))


@dc.dataclass(frozen=True, slots=True)
class Annotation:
    """A single named fact attached to the page.

    Attributes
    ----------
    key : str
        Annotation name; duplicates are allowed.
    value : MetadataValue
        Structured content or scalar. Raw values are lifted on construction.
    """

    key: str
    value: MetadataValue
    kind: typ.ClassVar[ElementKind] = ElementKind.META

    def __post_init__(self) -> None:
        _lift(self, "value")


@dc.dataclass(frozen=True, slots=True)
class EmbedDirective:
    """Reference to another page that is inlined or listed in place.

    Attributes
    ----------
    url : str
        Target of the embed.
    title : MetadataValue
        Title override; an empty scalar means "use the target's title".
    numbering : bool
        Whether the embedded section takes part in numbering.
    open : bool
        Whether the embedded section is expanded initially.
    catalog : bool
        Whether the embedded section is listed in the table of contents.
    """

    url: str
    title: MetadataValue = dc.field(default_factory=lambda: ScalarValue(""))
    numbering: bool = DEFAULT_NUMBERING
    open: bool = DEFAULT_OPEN
    catalog: bool = DEFAULT_CATALOG
    kind: typ.ClassVar[ElementKind] = ElementKind.EMBED

    def __post_init__(self) -> None:
        _lift(self, "title")


@dc.dataclass(frozen=True, slots=True)
class LocalReference:
    """In-workspace cross-reference identified by a slug."""

    slug: str
    text: MetadataValue = dc.field(default_factory=lambda: ScalarValue(""))
    kind: typ.ClassVar[ElementKind] = ElementKind.LOCAL

    def __post_init__(self) -> None:
        _lift(self, "text")


Element = Annotation | EmbedDirective | LocalReference


@dc.dataclass(frozen=True, slots=True)
class NodeLayout:
    """Tag, ordered attributes, and body of a serialized element."""

    tag: str
    attrs: list[tuple[str, str]]
    body: Markup


def _identifier(text: str, encoding: Encoding) -> str:
    if encoding is Encoding.UNIFORM_REPR:
        return debug_repr(text)
    return stringify(text)


def _annotation_attrs(
    element: Annotation, encoding: Encoding
) -> tuple[list[tuple[str, str]], MetadataValue]:
    return [("key", _identifier(element.key, encoding))], element.value


def _embed_attrs(
    element: EmbedDirective, encoding: Encoding
) -> tuple[list[tuple[str, str]], MetadataValue]:
    attrs = [
        ("url", _identifier(element.url, encoding)),
        ("numbering", stringify(element.numbering)),
        ("open", stringify(element.open)),
        ("catalog", stringify(element.catalog)),
    ]
    return attrs, element.title


def _local_attrs(
    element: LocalReference, encoding: Encoding
) -> tuple[list[tuple[str, str]], MetadataValue]:
    return [("slug", _identifier(element.slug, encoding))], element.text


_Serializer = cabc.Callable[
    [typ.Any, Encoding], tuple[list[tuple[str, str]], MetadataValue]
]
SERIALIZERS: dict[ElementKind, _Serializer] = {
    ElementKind.META: _annotation_attrs,
    ElementKind.EMBED: _embed_attrs,
    ElementKind.LOCAL: _local_attrs,
}


def layout(element: Element, encoding: Encoding = Encoding.SELECTIVE) -> NodeLayout:
    """Return the tag, attributes, and body ``element`` serializes to.

    Raises
    ------
    TypeError
        If ``element`` is not one of the three element kinds.
    """
    match element:
        case Annotation() | EmbedDirective() | LocalReference():
            attrs, primary = SERIALIZERS[element.kind](element, encoding)
        case _:
            msg = f"expected a metadata element, got {type(element).__name__!r}"
            raise TypeError(msg)

    if encoding is Encoding.PER_KIND_TAGS:
        tag = f"{LEGACY_TAG_PREFIX}{element.kind}"
    else:
        tag = META_TAG
        attrs.insert(0, (TYPE_ATTR, str(element.kind)))

    encoded = encode(primary)
    if encoded.scalar is not None:
        attrs.append((VALUE_ATTR, encoded.scalar))
        return NodeLayout(tag=tag, attrs=attrs, body=Markup(""))
    return NodeLayout(tag=tag, attrs=attrs, body=Markup(encoded.body))


def emit(element: Element, encoding: Encoding = Encoding.SELECTIVE) -> Markup:
    """Serialize ``element`` into a single metadata node."""
    node = layout(element, encoding)
    rendered = "".join(f' {name}="{escape(value)}"' for name, value in node.attrs)
    return Markup(f"<{node.tag}{rendered}>{node.body}</{node.tag}>")


def emit_all(
    elements: cabc.Iterable[Element], encoding: Encoding = Encoding.SELECTIVE
) -> Markup:
    """Serialize several elements back to back, preserving their order."""
    return Markup("").join(emit(element, encoding) for element in elements)


def local_in_meta(reference: LocalReference) -> str:
    """Render ``reference`` as a ``[text](slug)`` literal for text-only contexts."""
    return f"[{text_of(reference.text)}]({reference.slug})"


def to_builtins(element: Element) -> dict[str, typ.Any]:
    """Return a JSON-ready mapping describing ``element``."""
    match element:
        case Annotation(key=key, value=value):
            payload: dict[str, typ.Any] = {"type": str(element.kind), "key": key}
            primary = value
        case EmbedDirective():
            payload = {
                "type": str(element.kind),
                "url": element.url,
                "numbering": element.numbering,
                "open": element.open,
                "catalog": element.catalog,
            }
            primary = element.title
        case LocalReference(slug=slug, text=text):
            payload = {"type": str(element.kind), "slug": slug}
            primary = text
        case _:
            msg = f"expected a metadata element, got {type(element).__name__!r}"
            raise TypeError(msg)
    encoded = encode(primary)
    payload["value"] = text_of(primary)
    payload["structured"] = encoded.structured
    return payload


__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_NUMBERING",
    "DEFAULT_OPEN",
    "SERIALIZERS",
    "Annotation",
    "Element",
    "ElementKind",
    "EmbedDirective",
    "Encoding",
    "LocalReference",
    "NodeLayout",
    "emit",
    "emit_all",
    "layout",
    "local_in_meta",
    "to_builtins",
]
