"""
Shared fixtures: every test runs in its own working directory with a fresh shared logger.
"""

import pytest

from helperkit.utils.logger import get_logger, reset_logger


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Change into a temporary directory so logs/ lands there."""
    monkeypatch.chdir(tmp_path)
    reset_logger()
    yield tmp_path
    reset_logger()


@pytest.fixture
def log_lines():
    """Return a reader for the shared logger's daily log file."""
    def _read():
        return get_logger().log_file.read_text(encoding="utf-8").splitlines()
    return _read
