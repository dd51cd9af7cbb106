"""Cyclopts CLI entrypoint for emitting and inspecting kodama metadata markup.

The ``kodama-meta`` console script prints single metadata nodes for use from
document sources and build scripts, wraps fragments into standalone pages,
prerenders the load-time title and taxon passes into static HTML, and dumps
the metadata nodes of a page as JSON.

Examples
--------
Emit an annotation node:

>>> from kodama_meta.cli import meta
>>> meta(key="sha", value="abc123")
<kodama type="meta" key="sha" value="abc123"></kodama>

Prerender a page in place:

>>> from kodama_meta.cli import app
>>> app(["sync", "public/index.html"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import DEFAULT_CONFIG_PATH, KodamaConfig, default_config, load_config
from .elements import (
    Annotation,
    EmbedDirective,
    Encoding,
    LocalReference,
    emit,
    local_in_meta,
    to_builtins,
)
from .generator import MarkdownRenderer, wrap_document
from .reader import iter_elements
from .sync import synchronize
from .values import MetadataValue, ScalarValue, StructuredContent

app = App(name="kodama-meta", config=cyclopts.config.Env("KODAMA_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config(path: Path | None) -> KodamaConfig:
    """Load ``path``, or the default config file when present, or defaults."""
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _resolve_encoding(encoding: Encoding | None, config: Path | None) -> Encoding:
    """Return ``encoding`` when given, otherwise the configured encoding."""
    if encoding is not None:
        return encoding
    return _resolve_config(config).encoding


def _primary_value(
    value: str | None,
    html: str | None,
    markdown: str | None,
    encoding: Encoding = Encoding.SELECTIVE,
) -> MetadataValue:
    """Return the single primary value selected by the emit options."""
    given = [option for option in (value, html, markdown) if option is not None]
    if len(given) > 1:
        msg = "Pass at most one of --value, --html and --markdown."
        raise ValueError(msg)
    if html is not None:
        return StructuredContent(html)
    if markdown is not None:
        return MarkdownRenderer(encoding=encoding).render(markdown, inline=True)
    return ScalarValue(value or "")


@app.command(help="Print an annotation node.")
def meta(
    *,
    key: typ.Annotated[str, Parameter(help="Annotation key")],
    value: typ.Annotated[str | None, Parameter(help="Scalar value")] = None,
    html: typ.Annotated[
        str | None, Parameter(help="Structured value given as HTML")
    ] = None,
    markdown: typ.Annotated[
        str | None, Parameter(help="Structured value given as Markdown")
    ] = None,
    encoding: typ.Annotated[
        Encoding | None,
        Parameter(help="Markup encoding to emit; defaults to the configured one"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to kodama-meta.yaml")
    ] = None,
) -> None:
    """Print a ``type="meta"`` node for ``key``.

    Raises
    ------
    ValueError
        If more than one of ``value``, ``html`` and ``markdown`` is given.
    """
    chosen = _resolve_encoding(encoding, config)
    primary = _primary_value(value, html, markdown, chosen)
    print(emit(Annotation(key, primary), chosen))


@app.command(help="Print an embed directive node.")
def embed(
    *,
    url: typ.Annotated[str, Parameter(help="Embedded page URL")],
    title: typ.Annotated[str | None, Parameter(help="Scalar title")] = None,
    html: typ.Annotated[
        str | None, Parameter(help="Structured title given as HTML")
    ] = None,
    markdown: typ.Annotated[
        str | None, Parameter(help="Structured title given as Markdown")
    ] = None,
    numbering: typ.Annotated[bool, Parameter(help="Number the section")] = False,
    open_section: typ.Annotated[
        bool, Parameter(name="--open", help="Expand the section initially")
    ] = True,
    catalog: typ.Annotated[
        bool, Parameter(help="List the section in the contents")
    ] = True,
    encoding: typ.Annotated[
        Encoding | None,
        Parameter(help="Markup encoding to emit; defaults to the configured one"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to kodama-meta.yaml")
    ] = None,
) -> None:
    """Print a ``type="embed"`` node for ``url``."""
    chosen = _resolve_encoding(encoding, config)
    directive = EmbedDirective(
        url,
        _primary_value(title, html, markdown, chosen),
        numbering=numbering,
        open=open_section,
        catalog=catalog,
    )
    print(emit(directive, chosen))


@app.command(help="Print a local reference node.")
def local(
    *,
    slug: typ.Annotated[str, Parameter(help="Target slug")],
    text: typ.Annotated[str | None, Parameter(help="Link text")] = None,
    inline: typ.Annotated[
        bool, Parameter(help="Print the [text](slug) literal instead of a node")
    ] = False,
    encoding: typ.Annotated[
        Encoding | None,
        Parameter(help="Markup encoding to emit; defaults to the configured one"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to kodama-meta.yaml")
    ] = None,
) -> None:
    """Print a ``type="local"`` node, or its text-only form with ``inline``."""
    reference = LocalReference(slug, ScalarValue(text or ""))
    if inline:
        print(local_in_meta(reference))
        return
    print(emit(reference, _resolve_encoding(encoding, config)))


@app.command(help="Wrap an HTML fragment into a standalone document.")
def wrap(
    file: typ.Annotated[Path, Parameter(help="Fragment to wrap")],
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write here instead of stdout")
    ] = None,
    lang: typ.Annotated[str | None, Parameter(help="Document language")] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to kodama-meta.yaml")
    ] = None,
) -> None:
    """Wrap the fragment in ``file`` with the document root element."""
    cfg = _resolve_config(config)
    fragment = file.read_text(encoding="utf-8")
    html = str(wrap_document(fragment, lang=lang or cfg.lang))
    if output is None:
        print(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html + "\n", encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Prerender the page title and section taxa into an HTML file.")
def sync(
    file: typ.Annotated[Path, Parameter(help="HTML page to update")],
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write here instead of updating in place")
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to kodama-meta.yaml")
    ] = None,
) -> None:
    """Run the title and taxon passes on ``file`` and write the result.

    Raises
    ------
    SyncError
        If the configuration selects the abort policy and a pass cannot find
        an expected element.
    """
    cfg = _resolve_config(config)
    html = synchronize(file.read_text(encoding="utf-8"), cfg)
    target = output or file
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(target)}")


@app.command(help="Print the metadata nodes of an HTML file as JSON.")
def scan(
    file: typ.Annotated[Path, Parameter(help="HTML file to scan")],
    *,
    encoding: typ.Annotated[
        Encoding | None,
        Parameter(help="Encoding the page uses; defaults to the configured one"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to kodama-meta.yaml")
    ] = None,
) -> None:
    """Decode every top-level metadata node in ``file`` and print them as JSON.

    Raises
    ------
    MarkupDecodeError
        If a node has an unknown type or lacks a required attribute.
    """
    markup = file.read_text(encoding="utf-8")
    chosen = _resolve_encoding(encoding, config)
    elements = [to_builtins(el) for el in iter_elements(markup, chosen)]
    print(msgspec_json.encode(elements).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application behind the ``kodama-meta`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
