"""Encode page metadata into markup and recover it at load time.

This package defines how a single metadata value is represented in HTML
(annotations, embed directives and local references sharing one
``<kodama>`` tag), wraps fragments into standalone documents, and ships the
two load-time passes that copy section taxa and derive the page title.

Exports
-------
- ``Annotation``, ``EmbedDirective``, ``LocalReference``: element kinds.
- ``ScalarValue``, ``StructuredContent``: the two value variants.
- ``emit``, ``encode``: serializers.
- ``app``, ``main``: the ``kodama-meta`` command line.

Examples
--------
>>> from kodama_meta import Annotation, emit
>>> str(emit(Annotation("sha", "abc123")))
'<kodama type="meta" key="sha" value="abc123"></kodama>'
"""

from __future__ import annotations

from .cli import app, main
from .elements import Annotation, EmbedDirective, Encoding, LocalReference, emit
from .values import ScalarValue, StructuredContent, encode

__all__ = [
    "Annotation",
    "EmbedDirective",
    "Encoding",
    "LocalReference",
    "ScalarValue",
    "StructuredContent",
    "app",
    "emit",
    "encode",
    "main",
]
