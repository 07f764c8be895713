"""Structured logging for task runs.

Each task invocation gets its own PipelineLogger, which narrates the run:

    RANK_CANDIDATES (documents=3)
      Done: extract: resumes extracted | usable=2, skipped=1 | [0.1s]
      Done: invoke: model answered | provider=gemini, attempts=2 | [1.8s]
      rank_candidates COMPLETE [2.0s] | ranked=2

Phases are extract, compile, invoke, decode, validate and correlate. Modules
log their own details through logging.getLogger(__name__); both end up on the
shared "kazehire" logger handlers, plus an optional log file.

The console handler belongs to the process: every PipelineLogger reuses it,
so set_verbose() changes console output for all tasks running at once. Log
files belong to the task: start_task() opens one named after the task and
end_task() closes it. While tasks overlap, module records reach every open
file, since they carry no task identity.
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any

_MAX_VALUE_CHARS = 50
_MAX_LIST_ITEMS = 5


class PipelineLogger:
    """Narrates one task invocation."""

    def __init__(self, name: str = "kazehire", verbose: bool = False, log_dir: str | Path | None = None):
        """Create a task logger.

        Args:
            name: Underlying logger name; the console handler is attached here once.
            verbose: Show DEBUG records on the console.
            log_dir: Where start_task() opens a log file. None disables files.
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.verbose = verbose
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_file: Path | None = None
        self._file_handler: logging.FileHandler | None = None

        self._task = ""
        self._task_started = 0.0
        self._phase = ""
        self._phase_started = 0.0

        if not any(_is_console(h) for h in self.logger.handlers):
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(ConsoleFormatter())
            self.logger.addHandler(console)
        self.set_verbose(verbose)

    def set_verbose(self, verbose: bool):
        """Switch the shared console handler between INFO and DEBUG."""
        self.verbose = verbose
        level = logging.DEBUG if verbose else logging.INFO
        for handler in self.logger.handlers:
            if _is_console(handler):
                handler.setLevel(level)

    # -------------------------------------------------------------------------
    # Task and phase tracking
    # -------------------------------------------------------------------------

    def start_task(self, task: str, **data):
        """Begin a task, opening its own log file when log_dir is set."""
        self._task = task
        self._task_started = time.time()
        self._attach_file(task)
        headline = task.upper()
        if data:
            headline = f"{headline} ({_format_data(data)})"
        self._emit(logging.INFO, headline, stamp=True)

    def end_task(self, success: bool = True, **data):
        """Finish the current task with its outcome."""
        outcome = "COMPLETE" if success else "FAILED"
        message = f"  {self._task or 'task'} {outcome} [{_since(self._task_started)}]"
        self._emit(logging.INFO if success else logging.ERROR, message, data)
        self._task = ""
        self._detach_file()

    def start_phase(self, phase: str):
        """Begin a phase of the current task."""
        self._phase = phase
        self._phase_started = time.time()
        self._emit(logging.DEBUG, phase, stamp=True)

    def phase_result(self, result: str, **metrics):
        """Close the current phase with its headline result and metrics."""
        parts = [f"{self._phase}: {result}" if self._phase else result]
        if metrics:
            parts.append(", ".join(f"{key}={value}" for key, value in metrics.items()))
        if self._phase_started:
            parts.append(f"[{_since(self._phase_started)}]")
        self.logger.info("  Done: " + " | ".join(parts))
        self._phase = ""

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def debug(self, message: str, **data):
        self._emit(logging.DEBUG, message, data, stamp=True)

    def info(self, message: str, **data):
        self._emit(logging.INFO, f"  {message}", data)

    def warning(self, message: str, **data):
        self._emit(logging.WARNING, f"WARN: {message}", data, stamp=True)

    def error(self, message: str, exc: Exception | None = None, **data):
        """Log an error, appending the exception type and text when given."""
        if data:
            message = f"{message} | {_format_data(data)}"
        if exc is not None:
            message = f"{message} | {type(exc).__name__}: {exc}"
        self._emit(logging.ERROR, f"ERROR: {message}", stamp=True)

    def _emit(self, level: int, message: str, data: dict[str, Any] | None = None, stamp: bool = False):
        if data:
            message = f"{message} | {_format_data(data)}"
        if stamp:
            message = f"[{datetime.now():%H:%M:%S}] {message}"
        self.logger.log(level, message)

    def _attach_file(self, task: str):
        self._detach_file()
        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / f"{task}_{datetime.now():%Y%m%d_%H%M%S_%f}.log"
        handler = logging.FileHandler(self.log_file, encoding="utf-8")
        handler.setFormatter(FileFormatter())
        handler.setLevel(logging.DEBUG)
        self.logger.addHandler(handler)
        self._file_handler = handler

    def _detach_file(self):
        if self._file_handler is None:
            return
        self.logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None


class ConsoleFormatter(logging.Formatter):
    """Message only."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class FileFormatter(logging.Formatter):
    """Record time, level and source logger, for reading logs after the fact."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created)
        return f"{created:%Y-%m-%d %H:%M:%S}.{int(record.msecs):03d} [{record.levelname:<7}] {record.name}: {record.getMessage()}"


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


def _since(started: float) -> str:
    return f"{time.time() - started:.1f}s" if started else ""


def _format_data(data: dict[str, Any]) -> str:
    """Render key=value pairs, shortening long strings and lists."""
    rendered = []
    for key, value in data.items():
        if isinstance(value, str) and len(value) > _MAX_VALUE_CHARS:
            value = value[:_MAX_VALUE_CHARS - 3] + "..."
        elif isinstance(value, list) and len(value) > _MAX_LIST_ITEMS:
            value = f"[{len(value)} items]"
        rendered.append(f"{key}={value}")
    return ", ".join(rendered)


def reset_logger(name: str = "kazehire"):
    """Close and detach any file handlers left open, e.g. between tests."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
            logger.removeHandler(handler)
