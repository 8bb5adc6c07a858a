# logerr

Small, thread-safe building blocks for application logging and crash
reporting. The package has no dependencies beyond the standard library.

## Modules

- `logerr.rwlock.SharedLock`: a readers-writer lock. `acquire_read` /
  `release_read` give shared ownership, `acquire_write(blocking=True,
  timeout=None)` / `release_write` exclusive ownership; `read_locked()` and
  `write_locked()` are context managers. Waiting writers hold back new
  readers, so writers are not starved.
- `logerr.concurrent_queue.ConcurrentQueue`: a FIFO queue guarded by a
  `SharedLock`. `push`, `clear`, `empty`, `len()`, `copy`, `assign`, `swap`
  and `==` are all thread-safe. `try_pop()` takes the head without blocking
  and `try_pop_for(timeout)` waits up to `timeout` seconds; both raise
  `queue.Empty` when nothing could be taken (for `try_pop` that includes the
  lock being busy). Iterating is not thread-safe on its own; hold
  `read_lock()` while doing it.
- `logerr.timestamp`: `Timestamp(now=None)` holds nanoseconds since the
  epoch; `str()` gives local time as `YYYY-MM-DD HH:MM:SS.nnnnnnnnn TZ`,
  `int()` whole seconds. `file_safe_utc(now=None)` gives an ISO 8601 UTC time
  with milliseconds and the colons removed, for use in file names.
- `logerr.stacktrace`: `StackTrace(ignore=0)` captures the call stack where
  it is constructed and renders it as a numbered table of address,
  `file:line` and function name. `backtrace_symbols(frames)` and
  `format_trace(symbols, ignore=0)` are the two steps it is built from.
- `logerr.exception.StackTraceException`: an exception carrying
  `error_message`, `filename`, `function`, `line`, `fatal`,
  `system_details` and the `trace` captured at construction. Its text
  (`error_details`, also `str()`) is prefixed with `FATAL ` when `fatal` is
  true. Construct it where the error happens, not in the handler.
- `logerr.log_stream.LogStream`: a writable text stream that buffers text
  per thread and, whenever a write ends with a newline, passes the buffered
  text to every callback registered with `register_log_function(name,
  callback)`. `unregister_log_function(name)` removes one callback, or all of
  them when `name` is empty. With `LogStream("stdout")` or
  `LogStream("stderr")` it replaces that `sys` stream until `close()`, which
  also emits any unfinished text.
- `logerr.log_file_writer`: `LogFileWriter(log_file_path="", log_dir=None,
  name="", repo="")` appends queued text to a file from a background thread.
  Without a path, the file is named by `default_log_file_name(log_dir, repo,
  name)`, i.e. `<repo>[_<name>]_<UTC time>.log.txt`, in `log_dir` (default
  `logs`). If the directory or file cannot be opened, an error goes to
  standard error and `failed` is set. `close()` writes out everything queued
  and stops the thread.
- `logerr.signals`: `sigterm_handler` raises `TerminateException`;
  `install_handlers()` installs it for SIGTERM, enables `faulthandler` and
  returns the previous handler. `crash_report(app_name, start_time,
  system_details="", trace=None)` builds a crash report text and
  `write_crash_dump(crash_dump_dir, app_name, details, now=None)` writes it
  to `[<app_name>-]crashdump-<UTC time>.txt`, returning the path.

## Example

```python
from logerr.log_file_writer import LogFileWriter
from logerr.log_stream import LogStream

with LogFileWriter(log_dir="logs", name="myapp", repo="myapp") as writer:
    with LogStream() as stream:
        stream.register_log_function("file", writer.write)
        stream.write("application started\n")
```

Every completed line written to the stream is passed to `writer.write`,
and the background thread appends it to `logs/myapp_<time>.log.txt`.

## What it does not do

There are no log levels, logging macros or message formatting, and nothing
gathers application or system information: system details, start times and
application names are passed in by the caller. There is no command-line
tool and no graphical log viewer.

## Running the tests

```
pip install .[test]
pytest
```