"""Named-parameter store with exact-type access.

An ``Options`` maps names to ``Value`` cells. Each cell remembers the runtime
type of whatever was stored in it, and every read names the type it expects:

    options = Options()
    options.set("retries", 3).set("label", "prod")
    options.get("retries", int)   # -> 3
    options.get("retries", str)   # -> None

Type matching is exact (``type(payload) is kind``). Subclasses never match
their base: ``True`` is a ``bool`` and is not returned for ``int``.

A missing name and a type mismatch look the same to the caller: both yield
``None``. Use ``Options.require`` to turn that into an exception.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Iterator, Mapping, TypeVar

from typed_options.errors import MissingOptionError, OptionTypeError


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_kind(kind: Any) -> None:
    if not isinstance(kind, type):
        raise TypeError(f"Expected a class to match against, got {kind!r}")


class Value:
    """A single type-tagged cell."""

    __slots__ = ("_kind", "_payload")

    def __init__(self, payload: Any) -> None:
        self._kind: type = type(payload)
        self._payload = payload

    @property
    def kind(self) -> type:
        return self._kind

    def matches(self, kind: type) -> bool:
        _check_kind(kind)
        return self._kind is kind

    def get(self, kind: type[T]) -> T | None:
        """Return a deep copy of the payload if it is exactly a ``kind``.

        Payloads that ``copy.deepcopy`` cannot handle (locks, sockets) make this
        raise ``TypeError``; read those with ``get_ref``.
        """

        if not self.matches(kind):
            return None
        return copy.deepcopy(self._payload)

    def get_ref(self, kind: type[T]) -> T | None:
        """Return the stored payload itself if it is exactly a ``kind``.

        Callers should treat the result as read-only; use ``get_mut`` when the
        intent is to modify the stored object.
        """

        if not self.matches(kind):
            return None
        return self._payload

    def get_mut(self, kind: type[T]) -> T | None:
        """Return the stored payload for in-place mutation.

        Only mutable payloads (lists, dicts, user objects) can be changed this
        way. Immutable payloads need ``update``.
        """

        if not self.matches(kind):
            return None
        return self._payload

    def update(self, kind: type[T], fn: Callable[[T], T]) -> bool:
        """Replace the payload with ``fn(payload)`` if it is exactly a ``kind``.

        The cell is retagged with the type of the new payload. Returns whether
        ``fn`` was applied.
        """

        if not self.matches(kind):
            return False
        self.set(fn(self._payload))
        return True

    def set(self, payload: Any) -> None:
        """Replace payload and type tag unconditionally."""

        self._kind = type(payload)
        self._payload = payload

    def __repr__(self) -> str:
        return f"Value({self._kind.__qualname__}, {self._payload!r})"


class Options:
    """A collection of named parameters.

    Adding or removing names while a ``names``/``iter`` iterator is live is
    rejected by ``dict`` with ``RuntimeError``. Overwriting an existing name,
    or rewriting cells through ``iter_mut``, leaves the key set alone and is
    allowed.
    """

    def __init__(self) -> None:
        self._values: dict[str, Value] = {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Options:
        """Build a store from a flat mapping; each value keeps its own type."""

        options = cls()
        for name, payload in mapping.items():
            options.set(name, payload)
        return options

    def set(self, name: str, value: Any) -> Options:
        """Store ``value`` under ``name`` and return ``self`` for chaining."""

        previous = self._values.get(name)
        if previous is not None:
            logger.debug(
                "option_overwritten",
                extra={
                    "option": name,
                    "old_kind": previous.kind.__qualname__,
                    "new_kind": type(value).__qualname__,
                },
            )
        self._values[name] = Value(value)
        return self

    def _lookup(self, name: str, kind: type) -> Value | None:
        cell = self._values.get(name)
        if cell is None:
            return None
        if not cell.matches(kind):
            logger.debug(
                "option_type_mismatch",
                extra={
                    "option": name,
                    "stored_kind": cell.kind.__qualname__,
                    "requested_kind": kind.__qualname__,
                },
            )
            return None
        return cell

    def get(self, name: str, kind: type[T]) -> T | None:
        """Return a copy of the option if it is stored as exactly ``kind``."""

        _check_kind(kind)
        cell = self._lookup(name, kind)
        return None if cell is None else cell.get(kind)

    def get_ref(self, name: str, kind: type[T]) -> T | None:
        _check_kind(kind)
        cell = self._lookup(name, kind)
        return None if cell is None else cell.get_ref(kind)

    def get_mut(self, name: str, kind: type[T]) -> T | None:
        _check_kind(kind)
        cell = self._lookup(name, kind)
        return None if cell is None else cell.get_mut(kind)

    def update(self, name: str, kind: type[T], fn: Callable[[T], T]) -> bool:
        """Apply ``fn`` to the option in place; see ``Value.update``."""

        _check_kind(kind)
        cell = self._lookup(name, kind)
        return False if cell is None else cell.update(kind, fn)

    def require(self, name: str, kind: type[T]) -> T:
        """Like ``get`` but raise instead of returning ``None``.

        The result is a deep copy, so uncopyable payloads fail here as in ``get``.

        Raises:
            MissingOptionError: If nothing is stored under ``name``.
            OptionTypeError: If the stored value is not exactly a ``kind``.
        """

        _check_kind(kind)
        cell = self._values.get(name)
        if cell is None:
            raise MissingOptionError(name)
        if not cell.matches(kind):
            raise OptionTypeError(name, expected=kind, actual=cell.kind)
        return cell.get(kind)  # type: ignore[return-value]

    def has(self, name: str) -> bool:
        return name in self._values

    def kind_of(self, name: str) -> type | None:
        cell = self._values.get(name)
        return None if cell is None else cell.kind

    def remove(self, name: str) -> bool:
        """Drop the option stored under ``name``. Returns whether one existed."""

        return self._values.pop(name, None) is not None

    def names(self) -> Iterator[str]:
        for name in self._values:
            yield name

    def iter(self) -> Iterator[tuple[str, Value]]:
        for name, cell in self._values.items():
            yield name, cell

    def iter_mut(self) -> Iterator[tuple[str, Value]]:
        # Same cells as iter(); callers may Value.set() each one.
        for name, cell in self._values.items():
            yield name, cell

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return self.names()

    def __repr__(self) -> str:
        inner = ", ".join(f"{name!r}: {cell!r}" for name, cell in self._values.items())
        return f"Options({{{inner}}})"
