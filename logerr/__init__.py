"""Thread-safe logging helpers: a readers-writer lock, a concurrent queue, timestamps, stack traces, a line-based log stream, a background log file writer and crash dumps."""

__version__ = "0.1.0"

__all__ = [
    "concurrent_queue",
    "exception",
    "log_file_writer",
    "log_stream",
    "rwlock",
    "signals",
    "stacktrace",
    "timestamp",
]