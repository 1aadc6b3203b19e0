"""Seeding option stores from YAML files.

- One YAML mapping per file; top-level keys become option names.
- Strict ${ENV_VAR} expansion (missing/empty env vars are errors).
"""

from __future__ import annotations

from typed_options.config.loader import LOG_LEVEL_ENV, default_log_level, load_config, load_options
from typed_options.errors import ConfigError

__all__ = ["ConfigError", "LOG_LEVEL_ENV", "default_log_level", "load_config", "load_options"]
