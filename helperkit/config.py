# helperkit/config.py
import logging


class Config:
    """Stores configuration settings for the helpers."""

    # --- Logging ---
    # Directory is resolved against the working directory when the logger is built
    LOG_DIR_NAME = "logs"
    LOG_FILE_PREFIX = "log"
    REPORT_FILE_PREFIX = "report"
    LOG_DATE_FORMAT = "%Y%m%d"
    LOG_LEVEL = "INFO"
    CONSOLE_LOG_LEVEL = logging.ERROR
    # Prefix log lines with "module.function: " of the caller
    LOG_CALLER = False

    # --- File Handling ---
    DEFAULT_MAX_AGE_SECONDS = 604800  # one week
    FILE_ENCODING = "utf-8"

    # Symbolic name -> (directory relative to cwd, file name)
    NAMED_FILES = {
        "log": ("../logs", "log"),
    }
