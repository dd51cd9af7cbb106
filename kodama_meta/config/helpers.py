"""Utility helpers shared by the kodama_meta configuration loader."""

from __future__ import annotations

import enum
import typing as typ

from kodama_meta.errors import KodamaConfigError

from .models import Selectors

_E = typ.TypeVar("_E", bound=enum.StrEnum)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_choice(enum_type: type[_E], value: object | None, default: _E) -> _E:
    """Return the enum member named by ``value``, or ``default`` when unset."""
    text = _optional_str(value)
    if text is None:
        return default
    try:
        return enum_type(text.lower().replace("_", "-"))
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_type)
        msg = f"Invalid value {text!r}; expected one of: {choices}."
        raise KodamaConfigError(msg) from exc


def _build_selectors(payload: typ.Mapping[str, typ.Any] | None) -> Selectors:
    """Build Selectors from a mapping, keeping defaults for missing keys."""
    base = Selectors()
    if not payload:
        return base
    if not isinstance(payload, dict):
        msg = "'selectors' must be a mapping."
        raise KodamaConfigError(msg)
    return Selectors(
        toc_id=_optional_str(payload.get("toc_id")) or base.toc_id,
        article=_optional_str(payload.get("article")) or base.article,
        heading=_optional_str(payload.get("heading")) or base.heading,
        taxon_class=_optional_str(payload.get("taxon_class")) or base.taxon_class,
        bullet_class=_optional_str(payload.get("bullet_class")) or base.bullet_class,
    )


__all__ = ["_build_selectors", "_optional_str", "_parse_choice"]
