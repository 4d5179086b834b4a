"""Reading source files and rewriting them in place."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, MAX_FILE_SIZE_ENV_VAR
from .exceptions import InputTooLargeError


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the input size limit, preferring `JS_REINDENT_MAX_FILE_SIZE`.

    Args:
        default: Limit in bytes used when the environment variable is unset.

    Returns:
        int: Maximum accepted input size in bytes.

    Raises:
        ValueError: If the environment variable holds anything but a positive
            integer.

    Examples:
        os.environ["JS_REINDENT_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    raw_limit = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_limit is None:
        return default

    try:
        limit = int(raw_limit)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {raw_limit} (expected positive integer)"
        ) from error

    if limit <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {limit}.")
    return limit


def contains_symlink(path: Path) -> bool:
    """Return True if `path` or one of its parents is a symbolic link."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path, writable: bool = False) -> Path:
    """Resolve a source path given on the command line.

    Files that are only read may live anywhere and may be reached through
    symlinks. Files rewritten in place must sit under `base_dir` and be
    reached without symlinks, because the atomic replace would swap the link
    itself for a regular file.

    Args:
        raw_path: User-supplied path (absolute or relative).
        base_dir: Working directory that constrains rewritten files.
        writable: Apply the rewrite restrictions.

    Returns:
        Path: Absolute, symlink-free path to a regular file.

    Raises:
        ValueError: If the path does not exist or is not a regular file, or,
            when `writable`, goes through a symlink or leaves `base_dir`.

    Examples:
        normalize_filepath("/tmp/snippet.js", Path.cwd())
        normalize_filepath("src/app.tsx", Path.cwd(), writable=True)
    """
    path = Path(raw_path).expanduser()

    if writable and contains_symlink(path):
        raise ValueError(f"Symlinks are not supported with --write: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    if writable and not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Snapshot a regular file's metadata without following symlinks.

    Raises:
        IOError: If the file cannot be inspected or is not a regular file.
    """
    try:
        snapshot = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if not stat.S_ISREG(snapshot.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return snapshot


def enforce_size(size: int, max_size: int):
    """Reject inputs larger than `max_size` bytes.

    Raises:
        InputTooLargeError: If `size` exceeds `max_size`.

    Examples:
        enforce_size(os.stat("app.js").st_size, 102400)
    """
    if size > max_size:
        raise InputTooLargeError(size, max_size)


def _fingerprint(snapshot: os.stat_result) -> tuple:
    return (
        getattr(snapshot, "st_ino", None),
        getattr(snapshot, "st_dev", None),
        snapshot.st_size,
        snapshot.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Compare two snapshots of the same file.

    Raises:
        IOError: If inode, device, size or modification time differ.
    """
    if _fingerprint(expected_stat) != _fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def safe_read(filepath: Path) -> TextIO:
    """Open a source file as UTF-8 text, keeping its line endings.

    Raises:
        IOError: If the file cannot be opened.

    Examples:
        with safe_read(Path("app.js")) as handle:
            source = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error


def _copy_ownership(
    target: str, snapshot: os.stat_result, filepath: Path, warn: Callable[[str], None] | None
):
    uid = getattr(snapshot, "st_uid", None)
    gid = getattr(snapshot, "st_gid", None)
    if uid is None or gid is None or not hasattr(os, "chown"):
        return

    try:
        os.chown(target, uid, gid)
    except PermissionError:
        if warn is not None:
            warn(
                f"Warning: Could not preserve file ownership for {filepath.name} "
                "(requires elevated privileges)"
            )


def write_formatted(
    filepath: Path,
    text: str,
    expected_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Atomically replace a file's content with formatted text.

    The text goes to a temporary file next to the original, which receives the
    original mode (and owner, when permitted) before being moved into place.
    The access time of the original is kept; the modification time is new.

    Args:
        filepath: File to rewrite.
        text: New content.
        expected_stat: Snapshot taken before reading, used to detect races.
        warn: Optional callback for non-fatal warnings.

    Raises:
        IOError: If the file changed since `expected_stat` or cannot be replaced.

    Examples:
        write_formatted(Path("app.js"), formatted, initial_stat)
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, newline=""
        ) as handle:
            temp_name = handle.name
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
            os.chmod(temp_name, stat.S_IMODE(expected_stat.st_mode))
            _copy_ownership(temp_name, expected_stat, filepath, warn)

        os.replace(temp_name, filepath)
        temp_name = None

        os.utime(filepath, ns=(expected_stat.st_atime_ns, filepath.stat().st_mtime_ns))
    except OSError as error:
        raise IOError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_name is not None:
            Path(temp_name).unlink(missing_ok=True)
