"""
Tests for the daily-file Logger.

Covers:
  - Creation of the log directory and both daily files.
  - Line format and level routing (log file, report file, stdout).
  - Level aliases and fallback.
  - The shared instance returned by get_logger().
"""

import io
import logging
import re
import sys
from pathlib import Path
from datetime import datetime

import pytest

from helperkit.config import Config
from helperkit.utils.logger import Logger, get_logger, reset_logger, resolve_level

ISO = r"\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\]"


@pytest.fixture
def logger(tmp_path, capsys):
    instance = Logger(tmp_path / "logs")
    yield instance
    instance.close()


def read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_creates_directory_and_daily_files(tmp_path):
    instance = Logger(tmp_path / "nested" / "logs")
    try:
        date_string = datetime.now().strftime("%Y%m%d")
        assert instance.log_file == tmp_path / "nested" / "logs" / f"log_{date_string}.txt"
        assert instance.report_file == tmp_path / "nested" / "logs" / f"report_{date_string}.txt"
        assert instance.log_file.is_file()
        assert instance.report_file.is_file()
    finally:
        instance.close()


def test_existing_files_are_kept(tmp_path):
    first = Logger(tmp_path)
    first.log("kept")
    first.close()

    second = Logger(tmp_path)
    try:
        assert read_lines(second.log_file)[0].endswith("[INFO] kept")
    finally:
        second.close()


def test_error_appends_one_line_and_echoes_to_stdout(logger, capsys):
    logger.error("boom")

    lines = read_lines(logger.log_file)
    assert len(lines) == 1
    assert re.fullmatch(ISO + r" \[ERROR\] boom", lines[0])
    assert "[ERROR] boom" in capsys.readouterr().out


def test_warning_is_file_only(logger, capsys):
    logger.warning("careful")

    lines = read_lines(logger.log_file)
    assert re.fullmatch(ISO + r" \[WARNING\] careful", lines[0])
    assert capsys.readouterr().out == ""


def test_info_is_default_level(logger, capsys):
    logger.log("hello")

    assert re.fullmatch(ISO + r" \[INFO\] hello", read_lines(logger.log_file)[0])
    assert capsys.readouterr().out == ""


def test_report_goes_to_report_file_without_tag(logger, capsys):
    logger.report("daily total: 3")

    report_lines = read_lines(logger.report_file)
    assert len(report_lines) == 1
    assert re.fullmatch(ISO + r" daily total: 3", report_lines[0])
    # Mirrored as info in the general log
    assert read_lines(logger.log_file)[0].endswith("[INFO] daily total: 3")
    assert capsys.readouterr().out == ""


def test_log_with_report_level_only_touches_report_file(logger):
    logger.log("only here", "report")

    assert len(read_lines(logger.report_file)) == 1
    assert read_lines(logger.log_file) == []


@pytest.mark.parametrize("level, tag", [
    ("E", "[ERROR]"),
    ("Error", "[ERROR]"),
    ("w", "[WARNING]"),
    ("i", "[INFO]"),
    ("something-else", "[INFO]"),
    (None, "[INFO]"),
])
def test_level_aliases(logger, level, tag):
    logger.log("msg", level)

    assert read_lines(logger.log_file)[0].endswith(f"{tag} msg")


def test_resolve_level_table():
    assert resolve_level("error").on_console is True
    assert resolve_level("warning").on_console is False
    assert resolve_level("r").report is True
    assert resolve_level("report").tag == "[INFO]"


def test_destination(logger):
    assert logger.destination("report").path == logger.report_file
    assert logger.destination("report").on_console is False
    assert logger.destination("e").path == logger.log_file
    assert logger.destination("e").on_console is True


def test_multiline_message_is_folded(logger):
    logger.log("first\nsecond")

    lines = read_lines(logger.log_file)
    assert len(lines) == 1
    assert lines[0].endswith("[INFO] first second")


def log_from_helper(instance):
    instance.warning("from helper")


def test_caller_label(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "LOG_CALLER", True)
    instance = Logger(tmp_path)
    try:
        instance.warning("labelled")
        log_from_helper(instance)
        instance.report("tallied")

        lines = read_lines(instance.log_file)
        assert re.fullmatch(ISO + r" \[WARNING\] test_logger\.test_caller_label: labelled", lines[0])
        assert lines[1].endswith("[WARNING] test_logger.log_from_helper: from helper")
        assert lines[2].endswith("[INFO] test_logger.test_caller_label: tallied")
        # Report lines never carry a label
        assert re.fullmatch(ISO + r" tallied", read_lines(instance.report_file)[0])
    finally:
        instance.close()


# ============================================================================
# Console stream, channels and fallback
# ============================================================================

def test_console_follows_current_stdout(tmp_path, monkeypatch):
    instance = Logger(tmp_path)
    try:
        replacement = io.StringIO()
        monkeypatch.setattr(sys, "stdout", replacement)

        instance.error("after swap")

        assert "[ERROR] after swap" in replacement.getvalue()
    finally:
        instance.close()


def test_latest_instance_owns_the_channels(tmp_path):
    first = Logger(tmp_path / "first")
    second = Logger(tmp_path / "second")
    try:
        # Closing the older instance must not detach the newer one's handlers
        first.close()
        second.log("kept")

        assert read_lines(second.log_file)[0].endswith("[INFO] kept")
        assert read_lines(first.log_file) == []
        assert len(logging.getLogger("helperkit").handlers) == 2
        assert len(logging.getLogger("helperkit.report").handlers) == 1
    finally:
        second.close()

    assert logging.getLogger("helperkit").handlers == []


def test_unwritable_log_dir_falls_back_to_console(tmp_path, capsys):
    blocker = tmp_path / "logs"
    blocker.write_text("not a directory", encoding="utf-8")

    instance = Logger(blocker)
    try:
        assert isinstance(instance.file_error, OSError)

        instance.error("still visible")
        instance.warning("dropped quietly")
        instance.report("dropped quietly")

        captured = capsys.readouterr()
        assert "[ERROR] still visible" in captured.out
        assert "dropped quietly" not in captured.out
        assert "Logging to console only" in captured.err
    finally:
        instance.close()


def test_shared_logger_never_raises_when_logs_is_a_file(workspace, capsys):
    (workspace / "logs").write_text("x", encoding="utf-8")

    get_logger().error("no files today")

    assert "[ERROR] no files today" in capsys.readouterr().out


def test_shared_instance_lives_under_cwd(workspace):
    shared = get_logger()

    assert shared is get_logger()
    assert shared.log_dir == Path.cwd() / "logs"
    assert shared.log_file.is_file()


def test_reset_logger_builds_a_new_instance(workspace):
    first = get_logger()
    reset_logger()

    assert get_logger() is not first
