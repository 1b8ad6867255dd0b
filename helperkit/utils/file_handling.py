# helperkit/utils/file_handling.py
"""
Async wrappers for file operations, reporting through the shared logger.

Blocking calls run on a worker thread so callers are only suspended, never blocked.
"""

import asyncio
import inspect
import os
import time
from pathlib import Path
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from helperkit.config import Config
from helperkit.utils.logger import get_logger

PathLike = Union[str, Path]

# Symbolic name -> absolute path. Entries are never rebound once registered.
_named_paths: Dict[str, str] = {}


def add_property(name: str, dir_path: Optional[str], file_name: str) -> str:
    """
    Register a named file path resolved against the working directory.

    Args:
        name (str): Symbolic name for the path
        dir_path (Optional[str]): Directory relative to the working directory, may be empty
        file_name (str): File name inside that directory

    Returns:
        str: The registered absolute path

    Raises:
        ValueError: If the name is already registered
    """
    if name in _named_paths:
        raise ValueError(f"Named path '{name}' is already defined as {_named_paths[name]}")

    root_dir = os.getcwd()
    parts = (root_dir, dir_path, file_name) if dir_path else (root_dir, file_name)
    full_path = os.path.normpath(os.path.join(*parts))
    _named_paths[name] = full_path
    return full_path


def get_named_path(name: str) -> str:
    """Look up a registered path. Raises KeyError for unknown names."""
    return _named_paths[name]


def named_paths() -> Mapping[str, str]:
    """Read-only view of every registered path."""
    return MappingProxyType(_named_paths)


async def does_file_exist(file_path: PathLike) -> bool:
    """
    Check whether a path is accessible.

    Missing paths and paths we cannot access both yield False.
    """
    try:
        return await asyncio.to_thread(os.access, file_path, os.F_OK)
    except (OSError, ValueError, TypeError):
        return False


def _read_text(file_path: PathLike) -> str:
    with open(file_path, "r", encoding=Config.FILE_ENCODING) as f:
        return f.read()


async def read_file_content(file_path: PathLike) -> Optional[str]:
    """
    Read a text file.

    Args:
        file_path (PathLike): Path to the file

    Returns:
        Optional[str]: The content of the file, or None if it could not be read
    """
    try:
        return await asyncio.to_thread(_read_text, file_path)
    except (OSError, UnicodeDecodeError) as e:
        get_logger().error(f"{file_path}: {e}")
        return None


async def get_file_stats(file_path: PathLike) -> os.stat_result:
    """
    Stat a file. Failures are raised to the caller.

    Raises:
        OSError: If the path cannot be stat'ed
    """
    return await asyncio.to_thread(os.stat, file_path)


async def remove_file(file_path: PathLike) -> None:
    """Delete a file, logging the outcome instead of raising."""
    try:
        await asyncio.to_thread(os.remove, file_path)
    except OSError as e:
        get_logger().error(f"Removing {file_path}: {e}")
        return
    get_logger().log(f"{file_path} removed successfully")


def _write_text(content: str, file_path: PathLike) -> None:
    with open(file_path, "w", encoding=Config.FILE_ENCODING) as f:
        f.write(content)


async def write_to_file(content: str, file_path: PathLike) -> None:
    """
    Overwrite a file with the given text. Parent directories must already exist.

    Args:
        content (str): Text to write
        file_path (PathLike): Path to the file
    """
    if not isinstance(content, str):
        # Checked before opening, "w" would already have truncated the file
        get_logger().error(f"{file_path}: content must be str, not {type(content).__name__}")
        return

    try:
        await asyncio.to_thread(_write_text, content, file_path)
    except OSError as e:
        get_logger().error(f"{file_path}: {e}")
        return
    get_logger().log(f"New data has been written to {file_path}")


async def update_file(
        file_path: PathLike,
        max_age_seconds: Optional[float] = Config.DEFAULT_MAX_AGE_SECONDS,
        generator: Optional[Callable[[], Union[str, Awaitable[str]]]] = None
) -> None:
    """
    Regenerate a file's content when it is missing or older than max_age_seconds.

    Args:
        file_path (PathLike): Path to the file
        max_age_seconds (Optional[float]): Age below which the file is left alone.
            None means the default of one week.
        generator (Optional[Callable]): Produces the new content, sync or async.
            Without one the file is truncated to an empty string.
    """
    if max_age_seconds is None:
        max_age_seconds = Config.DEFAULT_MAX_AGE_SECONDS

    try:
        if await does_file_exist(file_path):
            stats = await get_file_stats(file_path)
            if time.time() - stats.st_mtime < max_age_seconds:
                get_logger().log(f"File content '{file_path}' is young enough to skip.")
                return

        get_logger().log(f"File '{file_path}' is missing or was modified more than {max_age_seconds} seconds ago.")

        new_data: Any = ""
        if generator is not None:
            new_data = generator()
            if inspect.isawaitable(new_data):
                new_data = await new_data

        await write_to_file(new_data, file_path)
    except Exception as e:
        # Generator is arbitrary caller code
        get_logger().error(f"{file_path}: {e}")


for _name, (_dir_path, _file_name) in Config.NAMED_FILES.items():
    add_property(_name, _dir_path, _file_name)
