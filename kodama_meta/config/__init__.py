"""Load and validate kodama_meta configuration YAML.

This subpackage parses ``kodama-meta.yaml``, applies defaults for omitted
keys, and produces the :class:`KodamaConfig` dataclass consumed by the
emitter commands and the load-time passes. The primary entry point is
:func:`load_config`.

Examples
--------
>>> from kodama_meta.config import default_config
>>> default_config().selectors.toc_id
'toc'
"""

from kodama_meta.errors import KodamaConfigError

from .loader import DEFAULT_CONFIG_PATH, default_config, load_config
from .models import KodamaConfig, MissingPolicy, Selectors

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "KodamaConfig",
    "KodamaConfigError",
    "MissingPolicy",
    "Selectors",
    "default_config",
    "load_config",
]
