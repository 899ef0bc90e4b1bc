"""
Structured console logging for site analyses.

Emits coloured, timestamped lines on stderr, keeps an ANSI-stripped
copy of every line for the current analysis, and optionally mirrors
output to a per-site log file when the caller enables it
(``EngineSettings.write_to_file``).

Timers, the line buffer and the open log file live in
``contextvars.ContextVar`` slots, so analyses driven concurrently by an
async collaborator each see only their own state.
"""

from __future__ import annotations

import contextvars
import io
import pathlib
import re
import sys
import time
from datetime import UTC, datetime

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")

# ============================================================================
# Per-analysis state
# ============================================================================

_timers_var: contextvars.ContextVar[dict[str, tuple[float, str]]] = contextvars.ContextVar("_timers_var")
_buffer_var: contextvars.ContextVar[list[str]] = contextvars.ContextVar("_buffer_var")
_file_var: contextvars.ContextVar[io.TextIOWrapper | None] = contextvars.ContextVar("_file_var", default=None)


def _timers() -> dict[str, tuple[float, str]]:
    try:
        return _timers_var.get()
    except LookupError:
        timers: dict[str, tuple[float, str]] = {}
        _timers_var.set(timers)
        return timers


def _buffer() -> list[str]:
    try:
        return _buffer_var.get()
    except LookupError:
        lines: list[str] = []
        _buffer_var.set(lines)
        return lines


def get_log_buffer() -> list[str]:
    """Return a copy of the lines logged in this context (ANSI-stripped)."""
    return list(_buffer())


def clear_log_buffer() -> None:
    """Reset the line buffer and timers before the next analysis."""
    _buffer().clear()
    _timers().clear()


# ============================================================================
# File mirroring
# ============================================================================


def _safe_name(website: str) -> str:
    host = re.sub(r"^https?://", "", website).removeprefix("www.")
    return "".join(c if c.isalnum() or c in ".-" else "_" for c in host)[:50]


def start_log_file(website: str, enabled: bool) -> str | None:
    """Open a log file for *website* under ``.logs/``.

    Returns:
        The path being written, or ``None`` when file logging is off
        or the file could not be opened.
    """
    if not enabled:
        return None

    end_log_file()

    logs_dir = pathlib.Path.cwd() / ".logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    now = datetime.now(UTC)
    path = logs_dir / f"{_safe_name(website)}_{now.strftime('%Y-%m-%d_%H-%M-%S')}.log"

    try:
        stream = open(path, "a", encoding="utf-8")  # noqa: SIM115
    except OSError as exc:
        print(f"\033[31m✗ [Logger] Could not open log file: {exc}\033[0m", file=sys.stderr)
        return None

    _file_var.set(stream)
    stream.write(f"\n{'=' * 80}\n  Tag audit - {website}\n  Started: {now.isoformat()}\n{'=' * 80}\n")
    return str(path)


def end_log_file() -> None:
    """Flush and close the log file opened for this context, if any."""
    stream = _file_var.get(None)
    if stream is None:
        return
    try:
        stream.flush()
        stream.close()
    except OSError:
        print("\033[33m⚠ [Logger] Could not close log file\033[0m", file=sys.stderr)
    _file_var.set(None)


def _emit(line: str) -> None:
    print(line, file=sys.stderr)
    clean = _ANSI_RE.sub("", line)
    _buffer().append(clean)
    stream = _file_var.get(None)
    if stream is not None:
        stream.write(clean + "\n")
        stream.flush()


# ============================================================================
# Formatting
# ============================================================================

_C = {
    "reset": "\033[0m",
    "bright": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "magenta": "\033[35m",
    "blue": "\033[34m",
    "gray": "\033[90m",
}

_LEVELS: dict[str, tuple[str, str]] = {
    "info": (_C["cyan"], "ℹ"),
    "success": (_C["green"], "✓"),
    "warn": (_C["yellow"], "⚠"),
    "error": (_C["red"], "✗"),
    "debug": (_C["gray"], "•"),
    "timing": (_C["magenta"], "⏱"),
}


def _timestamp() -> str:
    now = datetime.now(UTC)
    return now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"


def _format_duration(ms: float) -> str:
    """Format a duration in milliseconds for display."""
    if ms < 1000:
        return f"{int(ms)}ms"
    if ms < 60000:
        return f"{ms / 1000:.2f}s"
    return f"{int(ms // 60000)}m {(ms % 60000) / 1000:.1f}s"


def _format_value(value: object) -> str:
    if value is None:
        return f"{_C['dim']}None{_C['reset']}"
    if isinstance(value, bool):
        colour = _C["green"] if value else _C["red"]
        return f"{colour}{value}{_C['reset']}"
    if isinstance(value, (int, float)):
        return f"{_C['yellow']}{value}{_C['reset']}"
    if isinstance(value, str):
        shown = value[:297] + "..." if len(value) > 300 else value
        return f'{_C["green"]}"{shown}"{_C["reset"]}'
    if isinstance(value, (list, tuple, set)):
        return f"{_C['cyan']}[{len(value)} items]{_C['reset']}"
    if isinstance(value, dict):
        return f"{_C['cyan']}{{{len(value)} keys}}{_C['reset']}"
    return str(value)


# ============================================================================
# Logger
# ============================================================================


class Logger:
    """Context-prefixed logger with timing support."""

    def __init__(self, context: str = "TagAudit") -> None:
        self._context = context

    def _log(self, level: str, message: str, data: dict[str, object] | None = None) -> None:
        colour, symbol = _LEVELS.get(level, _LEVELS["info"])
        line = (
            f"{_C['gray']}[{_timestamp()}]{_C['reset']} {colour}{symbol}{_C['reset']} "
            f"{_C['bright']}[{self._context}]{_C['reset']} {message}"
        )
        if data:
            line += " " + " ".join(f"{_C['dim']}{k}={_C['reset']}{_format_value(v)}" for k, v in data.items())
        _emit(line)

    def info(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log an informational message."""
        self._log("info", message, data)

    def success(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a success message."""
        self._log("success", message, data)

    def warn(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a warning."""
        self._log("warn", message, data)

    def error(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log an error."""
        self._log("error", message, data)

    def debug(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a debug-level message."""
        self._log("debug", message, data)

    def start_timer(self, label: str) -> None:
        """Start a named timer."""
        _timers()[f"{self._context}:{label}"] = (time.monotonic() * 1000, _timestamp())
        self._log("timing", f"Starting: {label}")

    def end_timer(self, label: str, message: str | None = None) -> float:
        """Stop a named timer, log the elapsed time and return it in ms."""
        entry = _timers().pop(f"{self._context}:{label}", None)
        if entry is None:
            self.warn(f'Timer "{label}" was not started')
            return 0.0

        started_ms, started_at = entry
        duration = time.monotonic() * 1000 - started_ms
        self._log(
            "timing",
            f"{message or f'Completed: {label}'} {_C['dim']}took{_C['reset']} "
            f"{_C['magenta']}{_format_duration(duration)}{_C['reset']} {_C['dim']}(started {started_at}){_C['reset']}",
        )
        return duration

    def section(self, title: str) -> None:
        """Print a prominent section divider."""
        rule = "─" * 60
        for line in ("", f"{_C['blue']}{rule}{_C['reset']}", f"{_C['blue']}{_C['bright']}  {title}{_C['reset']}", f"{_C['blue']}{rule}{_C['reset']}", ""):
            _emit(line)


def create_logger(context: str) -> Logger:
    """Create a logger for a specific module."""
    return Logger(context)
