"""Write log entries to a file from a dedicated background thread."""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from pathlib import Path
from queue import Empty
from typing import TextIO

from .concurrent_queue import ConcurrentQueue
from .timestamp import Timestamp, file_safe_utc

__all__ = ["LogFileWriter", "default_log_file_name"]

_POLL_SECONDS = 0.1
_DEFAULT_LOG_DIR = "logs"


def default_log_file_name(
    log_dir: str | Path,
    repo: str,
    name: str,
    now: datetime | None = None,
) -> Path:
    """The path of a log file named after the repository, application and UTC time.

    The base is ``repo``; when ``name`` differs from it, ``_name`` is appended.
    """
    base = repo
    if repo != name:
        base = f"{base}_{name}"
    return Path(log_dir) / f"{base}_{file_safe_utc(now)}.log.txt"


def _report(message: str) -> None:
    print(f"[{Timestamp()}] [ERROR]    {message}", file=sys.stderr, flush=True)


class LogFileWriter:
    """Appends queued text to a log file from a background thread.

    The constructor returns only once the file has been opened (or opening it
    has failed), so the writer behaves as if it were not threaded. If the log
    directory cannot be created or the file cannot be opened, a message goes
    to standard error, ``failed`` is set and nothing is ever written.
    """

    def __init__(
        self,
        log_file_path: str | Path = "",
        log_dir: str | Path | None = None,
        name: str = "",
        repo: str = "",
    ) -> None:
        if log_dir is None:
            log_dir = Path(log_file_path).parent if log_file_path else Path(_DEFAULT_LOG_DIR)
        self.log_dir = Path(log_dir)
        if log_file_path:
            self.path = Path(log_file_path)
        else:
            self.path = default_log_file_name(self.log_dir, repo, name)

        self.failed = False
        self.closed = False
        self._queue: ConcurrentQueue[str] = ConcurrentQueue()
        self._stop = threading.Event()
        self._ready = threading.Event()
        self._thread = threading.Thread(target=self._run, name="LogFileWriter", daemon=True)
        self._thread.start()
        self._ready.wait()

    def _open(self) -> TextIO | None:
        error = False
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            _report(
                f"Failed to `mkpath` to the log directory: {self.log_dir}. Details: {exc}"
            )
            error = True

        log_file = None
        try:
            log_file = open(self.path, "a", encoding="utf-8")
        except OSError:
            _report(f"Failed to open the log file for writing: {self.path}")
            error = True

        if error and log_file is not None:
            log_file.close()
            log_file = None
        return log_file

    def _drain(self, log_file: TextIO) -> None:
        while True:
            try:
                entry = self._queue.try_pop_for(_POLL_SECONDS)
            except Empty:
                return
            log_file.write(entry)
            log_file.flush()

    def _run(self) -> None:
        log_file = self._open()
        self.failed = log_file is None
        self._ready.set()
        if log_file is None:
            return

        with log_file:
            while not self._stop.is_set():
                self._drain(log_file)
            # pick up anything queued just before the stop request
            while True:
                try:
                    entry = self._queue.try_pop()
                except Empty:
                    if self._queue.empty():
                        break
                    continue
                log_file.write(entry)
            log_file.flush()

    def write(self, text: str) -> None:
        """Queue ``text`` to be appended to the log file. Thread-safe."""
        if self.closed:
            raise ValueError("write to a closed LogFileWriter")
        self._queue.push(text)

    def close(self) -> None:
        """Write out everything queued, stop the thread and close the file."""
        if self.closed:
            return
        self.closed = True
        self._stop.set()
        self._thread.join()

    def __enter__(self) -> LogFileWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LogFileWriter({str(self.path)!r})"