"""
Process-wide logger writing leveled messages to daily log and report files.
"""

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import colorlog

from helperkit.config import Config

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
CALLER_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(caller)s: %(message)s"
REPORT_FORMAT = "[%(asctime)s] %(message)s"


@dataclass(frozen=True)
class LevelSpec:
    """One row of the level table."""
    name: str
    levelno: int
    on_console: bool
    report: bool

    @property
    def tag(self) -> str:
        return f"[{logging.getLevelName(self.levelno)}]"


@dataclass(frozen=True)
class LogDestination:
    path: Path
    on_console: bool


LEVELS: Dict[str, LevelSpec] = {
    "info": LevelSpec("info", logging.INFO, on_console=False, report=False),
    "warning": LevelSpec("warning", logging.WARNING, on_console=False, report=False),
    "error": LevelSpec("error", logging.ERROR, on_console=True, report=False),
    "report": LevelSpec("report", logging.INFO, on_console=False, report=True),
}

LEVEL_ALIASES = {"i": "info", "w": "warning", "e": "error", "r": "report"}


def resolve_level(level: Optional[str]) -> LevelSpec:
    """
    Map a level name (case-insensitive, single-letter aliases accepted) to its LevelSpec.

    Unknown or empty levels fall back to info.
    """
    key = str(level or "info").strip().lower()
    key = LEVEL_ALIASES.get(key, key)
    return LEVELS.get(key, LEVELS["info"])


def _iso_timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _single_line(message) -> str:
    return " ".join(str(message).splitlines())


class IsoFormatter(logging.Formatter):
    """Plain formatter rendering asctime as ISO-8601 UTC."""

    def formatTime(self, record, datefmt=None):
        return _iso_timestamp(record.created)


class ColoredIsoFormatter(colorlog.ColoredFormatter):
    """Colored console formatter rendering asctime as ISO-8601 UTC."""

    def formatTime(self, record, datefmt=None):
        return _iso_timestamp(record.created)


class StdoutHandler(logging.StreamHandler):
    """Console handler writing to whatever sys.stdout is when a record is emitted."""

    def __init__(self):
        super().__init__(sys.stdout)

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value):
        # Always follows sys.stdout
        pass


def _caller_label(frame) -> str:
    if frame is None:
        return "Global"
    return f"{Path(frame.f_code.co_filename).stem}.{frame.f_code.co_name}"


class Logger:
    """
    Routes messages to the daily log file, the daily report file and stdout.

    Destination paths are fixed at construction from the local calendar date,
    so a process running past midnight keeps writing to the same files.
    Constructing a Logger takes over the "helperkit" and "helperkit.report"
    logging channels; the most recently built instance owns them.
    If the log files cannot be created the logger falls back to console only.
    """

    def __init__(self, log_dir: Optional[Union[str, Path]] = None):
        self.log_dir = Path(log_dir) if log_dir else Path(os.getcwd()) / Config.LOG_DIR_NAME

        date_string = datetime.now().strftime(Config.LOG_DATE_FORMAT)
        self.log_file = self.log_dir / f"{Config.LOG_FILE_PREFIX}_{date_string}.txt"
        self.report_file = self.log_dir / f"{Config.REPORT_FILE_PREFIX}_{date_string}.txt"

        self._log = self._prepare_logger("helperkit")
        self._report = self._prepare_logger("helperkit.report")
        self._handlers: List[Tuple[logging.Logger, logging.Handler]] = []

        log_format = CALLER_LOG_FORMAT if Config.LOG_CALLER else LOG_FORMAT
        self.file_error: Optional[OSError] = None
        try:
            self.ensure_log_files_exist()
            self._attach(self._log, self._file_handler(self.log_file, log_format))
            self._attach(self._report, self._file_handler(self.report_file, REPORT_FORMAT))
        except OSError as e:
            self.file_error = e
            print(f"Could not open log files under {self.log_dir}: {e}. Logging to console only.",
                  file=sys.stderr)

        self._attach(self._log, self._console_handler(log_format))

    def ensure_log_files_exist(self) -> None:
        """Create the log directory and both daily files if they are missing."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        for path in (self.log_file, self.report_file):
            if not path.exists():
                path.touch()

    @staticmethod
    def _prepare_logger(name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(logging.getLevelName(Config.LOG_LEVEL))
        logger.propagate = False

        # Remove existing handlers if any (channel configured by an earlier instance)
        if logger.handlers:
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)
        return logger

    @staticmethod
    def _file_handler(file_path: Path, log_format: str) -> logging.Handler:
        file_handler = logging.FileHandler(file_path, mode="a", encoding=Config.FILE_ENCODING)
        file_handler.setFormatter(IsoFormatter(log_format))
        return file_handler

    @staticmethod
    def _console_handler(log_format: str) -> logging.Handler:
        # Only levels flagged on_console reach this handler
        console_handler = StdoutHandler()
        console_handler.setLevel(Config.CONSOLE_LOG_LEVEL)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredIsoFormatter(
                "%(log_color)s" + log_format + "%(reset)s",
                log_colors={
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                },
            ))
        else:
            console_handler.setFormatter(IsoFormatter(log_format))
        return console_handler

    def _attach(self, logger: logging.Logger, handler: logging.Handler) -> None:
        logger.addHandler(handler)
        self._handlers.append((logger, handler))

    def destination(self, level: Optional[str] = "info") -> LogDestination:
        level_spec = resolve_level(level)
        path = self.report_file if level_spec.report else self.log_file
        return LogDestination(path=path, on_console=level_spec.on_console)

    def _write(self, message, level: Optional[str], caller=None) -> None:
        level_spec = resolve_level(level)
        target = self._report if level_spec.report else self._log
        target.log(level_spec.levelno, _single_line(message), extra={"caller": _caller_label(caller)})

    def log(self, message, level: Optional[str] = "info") -> None:
        """
        Log a message at the given level.

        Args:
            message: Text to log. Newlines are folded so each call writes one line.
            level (str): info, warning, error or report (or i, w, e, r). Defaults to info.
        """
        self._write(message, level, sys._getframe(1))

    def info(self, message) -> None:
        self._write(message, "info", sys._getframe(1))

    def warning(self, message) -> None:
        """Log to the log file only."""
        self._write(message, "warning", sys._getframe(1))

    def error(self, message) -> None:
        """Log to the log file and echo to stdout."""
        self._write(message, "error", sys._getframe(1))

    def report(self, message) -> None:
        """Append to the report file, mirrored as an info line in the log file."""
        caller = sys._getframe(1)
        self._write(message, "report", caller)
        self._write(message, "info", caller)

    def close(self) -> None:
        """Detach and close the handlers this instance attached."""
        for logger, handler in self._handlers:
            handler.close()
            logger.removeHandler(handler)
        self._handlers.clear()


# Shared instance, built on first use
_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """
    Return the process-wide Logger, creating it on first use.

    Returns:
        Logger: The shared logger writing under <cwd>/logs
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def reset_logger() -> None:
    """
    Close and forget the shared Logger.
    Useful for testing or when a long-running process needs fresh daily files.
    """
    global _logger
    if _logger is not None:
        _logger.close()
    _logger = None
