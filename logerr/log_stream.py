"""A text stream that hands each completed line to registered callbacks."""

from __future__ import annotations

import sys
import threading
from typing import Callable, TextIO

__all__ = ["LogStream"]

_REDIRECTABLE = ("stdout", "stderr")


def _current(name: str) -> TextIO:
    return sys.stdout if name == "stdout" else sys.stderr


def _replace(name: str, stream: object) -> None:
    if name == "stdout":
        sys.stdout = stream  # type: ignore[assignment]
    else:
        sys.stderr = stream  # type: ignore[assignment]


class LogStream:
    """Collects written text per thread and passes every finished line on.

    Text accumulates until a write ends with a newline; the whole buffered
    text is then given to every registered callback and the buffer cleared.
    With ``stream`` set to ``"stdout"`` or ``"stderr"`` the object replaces
    that ``sys`` stream until it is closed.
    """

    def __init__(self, stream: str | None = None) -> None:
        if stream is not None and stream not in _REDIRECTABLE:
            raise ValueError(f"stream must be one of {_REDIRECTABLE} or None, not {stream!r}")
        self._local = threading.local()
        self._callbacks: dict[str, Callable[[str], object]] = {}
        self._callback_lock = threading.Lock()
        self._stream_name = stream
        self._previous: TextIO | None = None
        self.closed = False
        if stream is not None:
            self._previous = _current(stream)
            _replace(stream, self)

    @property
    def _buffer(self) -> str:
        return getattr(self._local, "text", "")

    @_buffer.setter
    def _buffer(self, value: str) -> None:
        self._local.text = value

    def _log(self) -> None:
        text = self._buffer
        with self._callback_lock:
            for callback in self._callbacks.values():
                callback(text)
        self._buffer = ""

    def write(self, text: str) -> int:
        """Buffer ``text``; emit the buffer if it now ends a line."""
        if not text:
            return 0
        self._buffer = self._buffer + text
        if text.endswith("\n"):
            self._log()
        return len(text)

    def flush(self) -> None:
        """Nothing to do: lines are emitted as soon as they are complete."""

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return False

    def register_log_function(self, name: str, callback: Callable[[str], object]) -> None:
        """Register (or replace) the callback stored under ``name``."""
        with self._callback_lock:
            self._callbacks[name] = callback

    def unregister_log_function(self, name: str = "") -> None:
        """Remove the callback called ``name``, or every callback if ``name`` is empty."""
        with self._callback_lock:
            if not name:
                self._callbacks.clear()
            else:
                self._callbacks.pop(name, None)

    def close(self) -> None:
        """Emit this thread's unfinished text and restore any replaced stream."""
        if self.closed:
            return
        if self._buffer:
            self._log()
        name = self._stream_name
        if name is not None and _current(name) is self:
            _replace(name, self._previous)
        self.closed = True

    def __enter__(self) -> LogStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()