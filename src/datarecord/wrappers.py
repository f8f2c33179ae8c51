import threading
from typing import Any, Iterator
from .record import DynamicRecord, Value


class SynchronizedRecord(DynamicRecord):
    """
    DynamicRecord guarded by a reentrant lock.

    Every read and write of the underlying dict holds the lock, and iteration
    walks a snapshot taken under it. Nested records built at construction
    are SynchronizedRecords as well. Data stored under "_lock" is only
    reachable as record["_lock"].
    """

    __slots__ = ("_lock",)
    _reserved_names = ("_data", "_lock")

    def __init__(self, source: Any = None, recursive: bool = False):
        object.__setattr__(self, "_lock", threading.RLock())
        super().__init__(source, recursive)

    def __setstate__(self, state: dict[str, Value]) -> None:
        # locks don't copy, a restored record gets a fresh one
        object.__setattr__(self, "_lock", threading.RLock())
        super().__setstate__(state)

    def _get(self, name: str) -> Value:
        with self._lock:
            return super()._get(name)

    def _set(self, name: str, value: Value) -> None:
        with self._lock:
            super()._set(name, value)

    def _exists(self, name: str) -> bool:
        with self._lock:
            return super()._exists(name)

    def _delete(self, name: str) -> None:
        with self._lock:
            super()._delete(name)

    def _count(self) -> int:
        with self._lock:
            return super()._count()

    def _pairs(self) -> Iterator[tuple[str, Value]]:
        with self._lock:
            snapshot = list(self._data.items())
        yield from snapshot
