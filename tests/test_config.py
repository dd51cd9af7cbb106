"""Unit tests for loading ``kodama-meta.yaml``."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from kodama_meta.config import (
    KodamaConfig,
    KodamaConfigError,
    MissingPolicy,
    Selectors,
    default_config,
    load_config,
)
from kodama_meta.elements import Encoding

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "kodama-meta.yaml"
    path.write_text(dedent(text).strip() + "\n", encoding="utf-8")
    return path


def test_full_config_is_parsed(tmp_path: Path) -> None:
    """Every documented key should be read into the dataclasses."""
    path = _write(
        tmp_path,
        """
        encoding: per_kind_tags
        lang: fr-FR
        missing: abort
        selectors:
          toc_id: side
          article: main
          heading: h2
          taxon_class: kind
          bullet_class: dot
        """,
    )
    config = load_config(path)
    assert config == KodamaConfig(
        encoding=Encoding.PER_KIND_TAGS,
        lang="fr-FR",
        missing=MissingPolicy.ABORT,
        selectors=Selectors(
            toc_id="side",
            article="main",
            heading="h2",
            taxon_class="kind",
            bullet_class="dot",
        ),
    ), f"unexpected config {config!r}"


def test_omitted_keys_use_defaults(tmp_path: Path) -> None:
    """An empty file yields the default configuration."""
    path = _write(tmp_path, "selectors:\n  toc_id: side\n")
    config = load_config(path)
    assert config.encoding is Encoding.SELECTIVE
    assert config.missing is MissingPolicy.SKIP
    assert config.selectors == Selectors(toc_id="side"), (
        f"expected other selectors to keep defaults, got {config.selectors!r}"
    )
    assert load_config(_write(tmp_path, "")) == default_config()


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing configuration file is reported clearly."""
    with pytest.raises(FileNotFoundError, match="not found"):
        load_config(tmp_path / "absent.yaml")


def test_non_mapping_top_level_raises(tmp_path: Path) -> None:
    """The YAML document must be a mapping."""
    with pytest.raises(TypeError, match="mapping"):
        load_config(_write(tmp_path, "- a\n- b\n"))


@pytest.mark.parametrize(
    "text",
    ["encoding: fancy\n", "missing: explode\n", "selectors: [toc]\n"],
)
def test_invalid_values_raise_config_error(tmp_path: Path, text: str) -> None:
    """Unknown choices and malformed selectors are configuration errors."""
    with pytest.raises(KodamaConfigError):
        load_config(_write(tmp_path, text))
