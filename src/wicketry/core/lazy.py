"""Thread-safe write-once cell for lazily computed shared state."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET: object = object()


class OnceCell(Generic[T]):
    """Holds a value that is computed at most once and then read lock-free.

    Readers that find the cell populated never take the lock. The value is
    published with a single attribute assignment after the factory returns,
    so no thread can observe a partially built value. A factory that raises
    leaves the cell empty and the next caller retries.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self) -> None:
        self._value: object = _UNSET
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get(self, default: T | None = None) -> T | None:
        value = self._value
        if value is _UNSET:
            return default
        return value  # type: ignore[return-value]

    def get_or_init(self, factory: Callable[[], T]) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = factory()
            return self._value  # type: ignore[return-value]

    def set_if_absent(self, value: T) -> bool:
        """Publish ``value`` unless the cell is already populated.

        Returns True when this call populated the cell.
        """
        if self._value is not _UNSET:
            return False
        with self._lock:
            if self._value is not _UNSET:
                return False
            self._value = value
            return True
