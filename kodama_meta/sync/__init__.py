"""Load-time passes that propagate metadata through a rendered page."""

from .host import DocumentHost, standard_host, synchronize
from .models import SyncReport
from .taxon import sync_taxa
from .title import heading_text, sync_title

__all__ = [
    "DocumentHost",
    "SyncReport",
    "heading_text",
    "standard_host",
    "sync_taxa",
    "sync_title",
    "synchronize",
]
