"""Filesystem helpers for outer-indent."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH

MAX_FILE_SIZE_ENV_VAR = "OUTER_INDENT_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "OUTER_INDENT_MAX_LINE_LENGTH"


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{name} must be a positive integer, got {value}."
        raise ValueError(error_message)

    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["OUTER_INDENT_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def resolve_outline_path(raw_path: str, base_dir: Path) -> Path:
    """Resolve a user-supplied outline path.

    The path must name an existing regular file inside `base_dir` and must not
    pass through a symlink.

    Raises:
        ValueError: If the path breaks any of those rules.

    Examples:
        resolve_outline_path("notes/todo.org", Path.cwd())
    """
    path = Path(raw_path).expanduser()
    if any(candidate.is_symlink() for candidate in (path, *path.parents)):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")
    return resolved


def check_file_size(filepath: Path, max_size: int) -> int:
    """Return the size of a regular file, refusing files above `max_size` bytes.

    Symlinks are not followed, so a link is reported as not a regular file.

    Raises:
        IOError: If the file is inaccessible, not a regular file, or too large.
    """
    try:
        file_stat = os.lstat(filepath)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if not stat.S_ISREG(file_stat.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    if file_stat.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")
    return file_stat.st_size


def read_outline(filepath: Path) -> str:
    """Read an outline file as UTF-8 with its line endings untouched.

    Raises:
        IOError: If the file cannot be opened.
        UnicodeDecodeError: If the content is not valid UTF-8.
    """
    try:
        with open(filepath, encoding="UTF-8", newline="") as handle:
            return handle.read()
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
