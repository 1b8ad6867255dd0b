"""
File handling, logging and timing helpers.
"""

from helperkit.utils.file_handling import (
    add_property, get_named_path, named_paths,
    does_file_exist, read_file_content, get_file_stats,
    remove_file, write_to_file, update_file
)
from helperkit.utils.helpers import sleep, get_random_int
from helperkit.utils.logger import Logger, get_logger, reset_logger

__all__ = [
    # Named paths
    'add_property',
    'get_named_path',
    'named_paths',

    # File operations
    'does_file_exist',
    'read_file_content',
    'get_file_stats',
    'remove_file',
    'write_to_file',
    'update_file',

    # Timing / randomness
    'sleep',
    'get_random_int',

    # Logging
    'Logger',
    'get_logger',
    'reset_logger'
]
