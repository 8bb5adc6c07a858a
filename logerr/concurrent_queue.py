"""A thread-safe first-in, first-out queue guarded by a readers-writer lock."""

from __future__ import annotations

import threading
import time
from collections import deque
from contextlib import ExitStack, contextmanager
from queue import Empty
from typing import Any, ContextManager, Generic, Iterable, Iterator, TypeVar

from .rwlock import SharedLock

__all__ = ["ConcurrentQueue", "Empty"]

T = TypeVar("T")


class ConcurrentQueue(Generic[T]):
    """A FIFO queue that is safe to push to and pop from concurrently.

    Readers (``empty``, ``len``, comparison, copying) share the lock; writers
    (``push``, the pops, ``clear``, ``assign``, ``swap``) take it exclusively.
    Pops raise :class:`queue.Empty` when no item could be taken.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._lock = SharedLock()
        self._items: deque[T] = deque(() if items is None else items)
        # Bumped on every change that may add items, so waiters never miss one.
        self._changed = threading.Condition(threading.Lock())
        self._generation = 0

    def _notify(self) -> None:
        with self._changed:
            self._generation += 1
            self._changed.notify_all()

    def _current_generation(self) -> int:
        with self._changed:
            return self._generation

    # ------------------------------------------------------------------
    # thread-safe operations
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Remove every item."""
        with self._lock.write_locked():
            self._items.clear()

    def push(self, value: T) -> None:
        """Append ``value`` at the tail and wake one waiting consumer."""
        with self._lock.write_locked():
            self._items.append(value)
            self._notify()

    def empty(self) -> bool:
        """Whether the queue was empty at the moment of the call."""
        with self._lock.read_locked():
            return not self._items

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._items)

    def try_pop(self) -> T:
        """Take the head item without blocking.

        Raises :class:`queue.Empty` if the queue is empty or the lock is busy;
        so a failure does not necessarily mean the queue is empty.
        """
        if not self._lock.acquire_write(blocking=False):
            raise Empty
        try:
            if not self._items:
                raise Empty
            return self._items.popleft()
        finally:
            self._lock.release_write()

    def try_pop_for(self, timeout: float) -> T:
        """Take the head item, waiting up to ``timeout`` seconds for one.

        Raises :class:`queue.Empty` if nothing could be taken in time.
        """
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining < 0 or not self._lock.acquire_write(timeout=max(remaining, 0.0)):
                raise Empty
            try:
                if self._items:
                    return self._items.popleft()
                seen = self._current_generation()
            finally:
                self._lock.release_write()

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise Empty
            with self._changed:
                if not self._changed.wait_for(lambda: self._generation != seen, remaining):
                    raise Empty

    # ------------------------------------------------------------------
    # explicit locking and iteration (for tests and debugging)
    # ------------------------------------------------------------------

    def read_lock(self) -> ContextManager[SharedLock]:
        """Context manager holding the queue's lock shared, e.g. to iterate safely."""
        return self._lock.read_locked()

    def write_lock(self) -> ContextManager[SharedLock]:
        """Context manager holding the queue's lock exclusively."""
        return self._lock.write_locked()

    def __iter__(self) -> Iterator[T]:
        """Iterate from head to tail. Not thread-safe; hold ``read_lock()`` meanwhile."""
        return iter(self._items)

    # ------------------------------------------------------------------
    # whole-queue operations
    # ------------------------------------------------------------------

    @contextmanager
    def _locked_with(self, other: ConcurrentQueue[Any], self_write: bool, other_write: bool):
        # Take both locks in a fixed order so that two threads working on the
        # same pair of queues from opposite ends cannot deadlock.
        wanted = [(self._lock, self_write), (other._lock, other_write)]
        wanted.sort(key=lambda entry: id(entry[0]))
        with ExitStack() as stack:
            for lock, write in wanted:
                stack.enter_context(lock.write_locked() if write else lock.read_locked())
            yield

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConcurrentQueue):
            return NotImplemented
        if other is self:
            return True
        with self._locked_with(other, self_write=False, other_write=False):
            return self._items == other._items

    def copy(self) -> ConcurrentQueue[T]:
        """A new queue holding the same items in the same order."""
        with self._lock.read_locked():
            return ConcurrentQueue(self._items)

    def assign(self, other: ConcurrentQueue[T]) -> None:
        """Replace this queue's contents with a copy of ``other``'s."""
        if other is self:
            return
        with self._locked_with(other, self_write=True, other_write=False):
            self._items = deque(other._items)
            self._notify()

    def swap(self, other: ConcurrentQueue[T]) -> None:
        """Exchange contents with ``other``."""
        if other is self:
            return
        with self._locked_with(other, self_write=True, other_write=True):
            self._items, other._items = other._items, self._items
            self._notify()
            other._notify()

    def __repr__(self) -> str:
        with self._lock.read_locked():
            return f"ConcurrentQueue({list(self._items)!r})"