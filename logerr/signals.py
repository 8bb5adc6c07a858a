"""Signal handling: graceful termination and crash reports."""

from __future__ import annotations

import faulthandler
import signal
import sys
from datetime import datetime
from pathlib import Path
from types import FrameType

from .stacktrace import StackTrace
from .timestamp import Timestamp, file_safe_utc

__all__ = [
    "TerminateException",
    "sigterm_handler",
    "crash_report",
    "write_crash_dump",
    "install_handlers",
]


class TerminateException(Exception):
    """Raised from the SIGTERM handler so the program can unwind and exit cleanly."""


def sigterm_handler(signum: int, frame: FrameType | None) -> None:
    """Turn a termination signal into a :class:`TerminateException`."""
    raise TerminateException()


def crash_report(
    app_name: str,
    start_time: str,
    system_details: str = "",
    trace: str | None = None,
) -> str:
    """The text describing a crash: times, system details and the stack trace.

    Without ``trace`` the stack is captured at the caller.
    """
    if trace is None:
        trace = str(StackTrace(1))
    times = (
        "\n\nTIME:\n\n"
        f"    Start Time   : {start_time}\n"
        f"    Crash Time   : {Timestamp()}\n"
        "\n"
    )
    return f"{app_name} Crashed! :'({times}{system_details}STACK TRACE:\n\n{trace}"


def write_crash_dump(
    crash_dump_dir: str | Path,
    app_name: str,
    details: str,
    now: datetime | None = None,
) -> Path:
    """Write ``details`` to a dated crash dump file, creating the directory; return its path."""
    directory = Path(crash_dump_dir)
    directory.mkdir(parents=True, exist_ok=True)
    file_name = f"crashdump-{file_safe_utc(now)}.txt"
    if app_name:
        file_name = f"{app_name}-{file_name}"
    path = directory / file_name
    path.write_text(details, encoding="utf-8")
    return path


def install_handlers():
    """Install the SIGTERM handler and enable fatal-error tracebacks.

    Returns the SIGTERM handler that was in place before.
    """
    previous = signal.signal(signal.SIGTERM, sigterm_handler)
    try:
        faulthandler.enable()
    except (AttributeError, ValueError, OSError):
        faulthandler.enable(file=sys.__stderr__)
    return previous