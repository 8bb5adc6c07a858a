"""An exception that records where it was raised and the call stack at that point."""

from __future__ import annotations

from .stacktrace import StackTrace

__all__ = ["StackTraceException"]


class StackTraceException(Exception):
    """An error carrying its source location, a stack trace and system details.

    The trace is captured when the exception is constructed, so construct it
    where the error happens, not in the handler that catches it.
    """

    def __init__(
        self,
        error_message: str,
        filename: str = "",
        function: str = "",
        line: int = 0,
        fatal: bool = False,
        system_details: str = "",
    ) -> None:
        self.error_message = error_message
        self.filename = filename
        self.function = function
        self.line = line
        self.fatal = fatal
        self.system_details = system_details
        # leave out this constructor as well as the one inside StackTrace
        self.trace = str(StackTrace(1))

        details = (
            f"{error_message}\n"
            f"in `{function}` at `{filename}:{line}`\n"
            f"\n"
            f"{system_details}"
            f"STACK TRACE:\n"
            f"\n"
            f"{self.trace}"
        )
        if fatal:
            details = "FATAL " + details
        self.error_details = details
        super().__init__(details)

    def __str__(self) -> str:
        return self.error_details