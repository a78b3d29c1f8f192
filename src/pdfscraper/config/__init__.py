"""Option models and configuration loading.

Precedence of configuration sources for :func:`load_config`:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. ``PDFSCRAPER_ENGINE_VERSION`` and ``PDFSCRAPER_MAX_PAGES``

Options passed directly to :func:`pdfscraper.parse` go through
:func:`resolve_options` instead, which never raises.
"""

from .schema import ParseOptions, TextSettings, load_config, resolve_options

__all__ = ["ParseOptions", "TextSettings", "load_config", "resolve_options"]
