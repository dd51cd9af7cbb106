r"""Encode metadata values as structured content or canonical strings.

Every value attached to a metadata node is either renderable markup, which
must stay a live subtree so it renders and picks up theme rules, or an opaque
scalar that is flattened into one canonical string. :func:`encode` makes that
decision and guarantees exactly one of the two outputs is present, which is
what lets a reader recover the case from the markup alone.

The canonical string format is fixed:

* text is passed through unchanged;
* booleans become ``true`` / ``false`` and ``None`` becomes ``none``;
* integers use their decimal form, floats their ``repr``;
* sequences render as ``(a, b)`` with text items quoted.

Examples
--------
>>> from kodama_meta.values import ScalarValue, StructuredContent, encode
>>> encode(ScalarValue(True)).scalar
'true'
>>> encode(StructuredContent("Hello <b>World</b>")).body
Markup('Hello <b>World</b>')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup

Scalar = typ.Union[str, bool, int, float, None, "list[Scalar]", "tuple[Scalar, ...]"]


@dc.dataclass(frozen=True, slots=True)
class StructuredContent:
    """Renderable markup embedded verbatim as a node body.

    Attributes
    ----------
    html : Markup
        Markup owned by the compiler; never inspected or rewritten here.
    """

    html: Markup

    def __post_init__(self) -> None:
        object.__setattr__(self, "html", Markup(self.html))

    def __html__(self) -> Markup:
        return self.html


@dc.dataclass(frozen=True, slots=True)
class ScalarValue:
    """A non-structured value that is always serialized as text."""

    value: Scalar


MetadataValue = StructuredContent | ScalarValue


@dc.dataclass(frozen=True, slots=True)
class Encoded:
    """Result of :func:`encode`; exactly one field is populated."""

    body: Markup | None
    scalar: str | None

    @property
    def structured(self) -> bool:
        """Return True when the value travels as a node body."""
        return self.body is not None


def as_value(raw: object) -> MetadataValue:
    """Lift a raw compiler value into the two-variant value type.

    ``Markup`` instances are structured content; everything else is a scalar.
    Other objects that can render themselves as HTML must be wrapped in
    :class:`StructuredContent` by the caller. Values that are already a
    :data:`MetadataValue` are returned as-is.
    """
    match raw:
        case StructuredContent() | ScalarValue():
            return raw
        case Markup():
            return StructuredContent(raw)
        case _:
            return ScalarValue(typ.cast("Scalar", raw))


def stringify(raw: Scalar) -> str:
    """Return the canonical string form of a scalar.

    Raises
    ------
    TypeError
        If ``raw`` is not a supported scalar type.
    """
    match raw:
        case str():
            return str(raw)
        case bool():
            return "true" if raw else "false"
        case None:
            return "none"
        case int():
            return str(raw)
        case float():
            return repr(raw)
        case list() | tuple():
            items = [debug_repr(item) for item in raw]
            if len(items) == 1:
                return f"({items[0]},)"
            return "(" + ", ".join(items) + ")"
        case _:
            msg = f"cannot stringify value of type {type(raw).__name__!r}"
            raise TypeError(msg)


def debug_repr(raw: Scalar) -> str:
    """Return the quoted debug form used by the uniform-repr encoding."""
    if isinstance(raw, str):
        escaped = raw.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return stringify(raw)


def unquote_repr(text: str) -> str:
    """Undo :func:`debug_repr` for text; other strings are returned unchanged."""
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):  # noqa: PLR2004
        inner = text[1:-1]
        return inner.replace('\\"', '"').replace("\\\\", "\\")
    return text


def encode(value: MetadataValue) -> Encoded:
    """Decide between node body and scalar string for ``value``.

    Parameters
    ----------
    value : MetadataValue
        Structured content or a scalar.

    Returns
    -------
    Encoded
        ``body`` set for structured content, ``scalar`` set otherwise.

    Raises
    ------
    TypeError
        If ``value`` is neither variant, or wraps an unsupported scalar.
    """
    match value:
        case StructuredContent(html=html):
            return Encoded(body=html, scalar=None)
        case ScalarValue(value=raw):
            return Encoded(body=None, scalar=stringify(raw))
        case _:
            msg = f"expected a MetadataValue, got {type(value).__name__!r}"
            raise TypeError(msg)


def decode(encoded: Encoded) -> MetadataValue:
    """Rebuild a value from its encoded form; scalars come back as text."""
    if encoded.body is not None:
        return StructuredContent(encoded.body)
    return ScalarValue(encoded.scalar or "")


def text_of(value: MetadataValue) -> str:
    """Return the markup source or canonical string for ``value``."""
    encoded = encode(value)
    if encoded.body is not None:
        return str(encoded.body)
    return typ.cast("str", encoded.scalar)


def parse_flag(text: str | None, default: bool) -> bool:
    """Read a boolean flag attribute back from its canonical string.

    ``None`` and ``"auto"`` yield ``default``; ``"false"``, ``"0"`` and
    ``"none"`` are false; anything else is true.
    """
    if text is None or text == "auto":
        return default
    return text not in ("false", "0", "none")


__all__ = [
    "Encoded",
    "MetadataValue",
    "Scalar",
    "ScalarValue",
    "StructuredContent",
    "as_value",
    "debug_repr",
    "decode",
    "encode",
    "parse_flag",
    "stringify",
    "text_of",
    "unquote_repr",
]
