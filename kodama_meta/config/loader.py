"""Load kodama_meta configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from kodama_meta._constants import DEFAULT_LANG
from kodama_meta.elements import Encoding

from .helpers import _build_selectors, _optional_str, _parse_choice
from .models import KodamaConfig, MissingPolicy

DEFAULT_CONFIG_PATH = Path("kodama-meta.yaml")


def default_config() -> KodamaConfig:
    """Return the configuration used when no file is supplied."""
    return KodamaConfig()


def load_config(path: Path) -> KodamaConfig:
    """Load the YAML file describing encoding and load-time pass choices.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``kodama-meta.yaml``).

    Returns
    -------
    KodamaConfig
        Parsed configuration with defaults applied for omitted keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    KodamaConfigError
        If ``encoding``, ``missing`` or ``selectors`` hold invalid values.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from kodama_meta.config import load_config
    >>> config = load_config(Path("kodama-meta.yaml"))  # doctest: +SKIP
    >>> config.missing  # doctest: +SKIP
    <MissingPolicy.SKIP: 'skip'>
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    return KodamaConfig(
        encoding=_parse_choice(Encoding, raw.get("encoding"), Encoding.SELECTIVE),
        lang=_optional_str(raw.get("lang")) or DEFAULT_LANG,
        missing=_parse_choice(MissingPolicy, raw.get("missing"), MissingPolicy.SKIP),
        selectors=_build_selectors(raw.get("selectors")),
    )


__all__ = ["DEFAULT_CONFIG_PATH", "default_config", "load_config"]
