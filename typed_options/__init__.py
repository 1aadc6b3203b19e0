"""Named parameters with exact-type access."""

from __future__ import annotations

from typed_options.config import load_config, load_options
from typed_options.errors import ConfigError, MissingOptionError, OptionsError, OptionTypeError
from typed_options.store import Options, Value

__all__ = [
    "ConfigError",
    "MissingOptionError",
    "OptionTypeError",
    "Options",
    "OptionsError",
    "Value",
    "__version__",
    "load_config",
    "load_options",
]

__version__ = "0.1.0"
