"""Common literal values shared by the encoder, reader, and synchronizers.

These constants pin down the markup contract: the tag that marks metadata
nodes, the legacy per-kind tag names still accepted on read, and the ids and
class names the load-time passes select on.

Examples
--------
>>> from kodama_meta import _constants
>>> _constants.META_TAG
'kodama'
>>> sorted(_constants.LEGACY_TAGS)
['kodamaembed', 'kodamalocal', 'kodamameta']
"""

META_TAG = "kodama"
LEGACY_TAG_PREFIX = "kodama"
LEGACY_TAGS = frozenset(
    f"{LEGACY_TAG_PREFIX}{kind}" for kind in ("meta", "embed", "local")
)

TYPE_ATTR = "type"
VALUE_ATTR = "value"

TOC_ID = "toc"
ARTICLE_TAG = "article"
HEADING_TAG = "h1"
TAXON_CLASS = "taxon"
BULLET_CLASS = "bullet"

DEFAULT_LANG = "en-US"
