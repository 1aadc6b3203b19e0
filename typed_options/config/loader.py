from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from typed_options.errors import ConfigError
from typed_options.store import Options


LOG_LEVEL_ENV = "TYPED_OPTIONS_LOG_LEVEL"

_ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True, slots=True)
class _UnresolvedEnvRef:
    """Tracks an unresolved ${ENV_VAR} reference for better error messages."""

    var_name: str
    key_path: str
    reason: str  # "missing" | "empty"


def _load_yaml(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    return yaml.safe_load(text)


def _expand_env_in_obj(obj: Any, *, key_path: str, unresolved: list[_UnresolvedEnvRef]) -> Any:
    if isinstance(obj, str):
        def repl(match: re.Match[str]) -> str:
            name = match.group(1)
            value = os.getenv(name)
            if value is None or value == "":
                unresolved.append(
                    _UnresolvedEnvRef(
                        var_name=name,
                        key_path=key_path,
                        reason="missing" if value is None else "empty",
                    )
                )
                return match.group(0)
            return value

        return _ENV_PLACEHOLDER_RE.sub(repl, obj)

    if isinstance(obj, Mapping):
        out: dict[Any, Any] = {}
        for k, v in obj.items():
            child_path = f"{key_path}.{k}" if key_path else str(k)
            out[k] = _expand_env_in_obj(v, key_path=child_path, unresolved=unresolved)
        return out

    if isinstance(obj, list):
        return [
            _expand_env_in_obj(v, key_path=f"{key_path}[{i}]", unresolved=unresolved)
            for i, v in enumerate(obj)
        ]

    return obj


def load_config(
    path: str | Path,
    *,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> dict[str, Any]:
    """Load a YAML file with strict ${ENV_VAR} expansion.

    Args:
        path: Path to a YAML file whose root is a mapping.
        load_dotenv_file: Whether to load a .env file before expansion.
        dotenv_path: Optional explicit .env path. When omitted, attempts to load
            a `.env` in the current working directory.

    Raises:
        ConfigError: If the file is missing, YAML is invalid, the root is not a
            mapping, or env expansion is unresolved.
    """

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ConfigError("Config file not found", path=str(config_path))

    if load_dotenv_file:
        # Never override variables that are already set.
        load_dotenv(dotenv_path or Path.cwd() / ".env", override=False)

    try:
        raw = _load_yaml(config_path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read YAML config: {e}", path=str(config_path)) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError("Top-level YAML must be a mapping/dict", path=str(config_path))

    unresolved: list[_UnresolvedEnvRef] = []
    expanded = _expand_env_in_obj(raw, key_path="", unresolved=unresolved)

    if unresolved:
        lines: list[str] = ["Unresolved environment variables in config:"]
        for ref in unresolved:
            lines.append(f"- {ref.var_name} ({ref.reason}) at {ref.key_path or '<root>'}")
        raise ConfigError("\n".join(lines), path=str(config_path))

    return expanded


def load_options(
    path: str | Path,
    *,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> Options:
    """Load a YAML file into an ``Options`` store.

    Each top-level key becomes an option holding the value YAML produced for it
    (``int``, ``float``, ``str``, ``bool``, ``list``, ``dict`` or ``None``).
    """

    raw = load_config(path, load_dotenv_file=load_dotenv_file, dotenv_path=dotenv_path)

    bad = [k for k in raw if not isinstance(k, str)]
    if bad:
        raise ConfigError(f"Option names must be strings, got {bad!r}", path=str(path))

    return Options.from_mapping(raw)


def default_log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV) or "INFO"
