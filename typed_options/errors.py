from __future__ import annotations


class OptionsError(Exception):
    """Base exception for this project."""


class MissingOptionError(OptionsError, KeyError):
    """Raised by ``Options.require`` when no option is stored under a name."""

    def __init__(self, name: str):
        super().__init__(f"No option named {name!r}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise.
        return str(self.args[0])


class OptionTypeError(OptionsError, TypeError):
    """Raised by ``Options.require`` when the stored type differs from the requested one."""

    def __init__(self, name: str, *, expected: type, actual: type):
        super().__init__(
            f"Option {name!r} holds {actual.__qualname__}, not {expected.__qualname__}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class ConfigError(OptionsError):
    """Raised when an options file cannot be loaded."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
