"""Capture and format the call stack at the point of construction."""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass
from types import FrameType
from typing import Iterable, Iterator, Sequence

__all__ = ["StackTrace", "Symbol", "backtrace_symbols", "format_trace"]

_UNKNOWN_LOCATION = "??:0"
_NO_SYMBOL = "<no symbol found>"
_EMPTY_TRACE = "<empty, possibly corrupt>\n"


@dataclass(frozen=True)
class Symbol:
    """One resolved stack frame.

    ``location`` is ``file:line`` with the directory stripped, and ``function``
    the qualified name of the code running in that frame.
    """

    address: int
    location: str
    function: str


def _walk(frame: FrameType | None) -> Iterator[FrameType]:
    while frame is not None:
        yield frame
        frame = frame.f_back


def _function_name(frame: FrameType) -> str:
    code = frame.f_code
    return getattr(code, "co_qualname", code.co_name)


def backtrace_symbols(frames: Iterable[FrameType]) -> list[Symbol]:
    """Resolve frames, innermost first, into symbols in the same order."""
    symbols = []
    for frame in frames:
        filename = frame.f_code.co_filename
        lineno = frame.f_lineno
        address = id(frame.f_code)
        if filename:
            location = f"{os.path.basename(filename)}:{lineno or 0}"
            function = _function_name(frame) or "??"
        else:
            location = _UNKNOWN_LOCATION
            function = f"[0x{address:x}]"
        symbols.append(Symbol(address, location, function))
    return symbols


def format_trace(symbols: Sequence[Symbol], ignore: int = 0) -> str:
    """Render symbols as a numbered table, one frame per line.

    The first symbol (the frame doing the capturing) is always left out, and
    ``ignore`` more after it. Numbering starts at 1 with the first frame shown.
    """
    if ignore < 0:
        raise ValueError("ignore must not be negative")
    symbols = list(symbols)
    if not symbols:
        return ""

    index_width = len(symbols) // 10 + 1
    location_width = 0
    for symbol in symbols:
        if len(symbol.location) > location_width:
            location_width = len(symbol.location) + 1

    lines = []
    for number, symbol in enumerate(symbols[1 + ignore:], start=1):
        location = symbol.location or _UNKNOWN_LOCATION
        function = symbol.function or _NO_SYMBOL
        lines.append(
            f"{'[':>5}{number:>{index_width}}{']':<4}"
            f"0x{symbol.address:016x}: "
            f"{location:<{location_width}}| {function}\n"
        )
    return "".join(lines)


class StackTrace:
    """The call stack as text, captured where the object is constructed.

    ``ignore`` is the number of innermost callers to leave out beyond this
    constructor itself; a wrapper that builds a trace should pass 1.
    """

    def __init__(self, ignore: int = 0) -> None:
        if ignore < 0:
            raise ValueError("ignore must not be negative")
        frame = inspect.currentframe()
        try:
            frames = list(_walk(frame))
            if not frames:
                self.value = _EMPTY_TRACE
            else:
                self.value = format_trace(backtrace_symbols(frames), ignore)
        finally:
            del frame
            frames = []

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"StackTrace({self.value!r})"