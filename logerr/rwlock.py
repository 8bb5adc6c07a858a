"""A readers-writer lock: many concurrent readers or a single writer."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class SharedLock:
    """A lock held either shared by any number of readers or exclusively by one writer.

    Readers that arrive while a writer is waiting queue behind it, so a steady
    stream of readers cannot starve writers.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        """Block until shared (read) ownership is obtained."""
        with self._cond:
            self._cond.wait_for(lambda: not self._writer and self._waiting_writers == 0)
            self._readers += 1

    def release_read(self) -> None:
        """Give up shared ownership."""
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read() called on a lock not held for reading")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, blocking: bool = True, timeout: float | None = None) -> bool:
        """Obtain exclusive ownership.

        With ``blocking`` false, return at once: True if the lock was free.
        Otherwise wait, at most ``timeout`` seconds when one is given, and
        return whether the lock was obtained.
        """
        with self._cond:
            if not blocking:
                if self._writer or self._readers:
                    return False
                self._writer = True
                return True

            self._waiting_writers += 1
            acquired = False
            try:
                acquired = self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0, timeout
                )
                if acquired:
                    self._writer = True
                return acquired
            finally:
                self._waiting_writers -= 1
                if not acquired:
                    # readers may have been held back only by this writer
                    self._cond.notify_all()

    def release_write(self) -> None:
        """Give up exclusive ownership."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called on a lock not held for writing")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[SharedLock]:
        """Hold the lock for reading for the duration of a ``with`` block."""
        self.acquire_read()
        try:
            yield self
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[SharedLock]:
        """Hold the lock for writing for the duration of a ``with`` block."""
        self.acquire_write()
        try:
            yield self
        finally:
            self.release_write()