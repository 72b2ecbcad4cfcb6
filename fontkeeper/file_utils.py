"""Filesystem helpers used when installing and removing fonts."""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import time

try:
    import fcntl
except ImportError:  # pragma: no cover - platforms without fcntl
    fcntl = None

_COPY_CHUNK = 1024 * 20
_log = logging.getLogger(__name__)


def _validate(path: str) -> None:
    if not path or "/." in path or "./" in path:
        raise ValueError(f"invalid path: {path!r}")


def _drop_others_write(path: str) -> None:
    mode = stat.S_IMODE(os.stat(path).st_mode)
    os.chmod(path, mode & ~stat.S_IWOTH)


def _remove_all(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def check_path_exist(path) -> bool:
    """Return True if the path names an existing file or directory."""
    path = os.fspath(path)
    if not path:
        _log.error("path to check is empty")
        return False
    return os.path.exists(path)


def create_dir_with_permission(path) -> None:
    """Create a directory (if missing) and deny write access to others."""
    path = os.fspath(path)
    _validate(path)
    try:
        os.mkdir(path)
    except FileExistsError:
        if not os.path.isdir(path):
            raise
    _drop_others_write(path)


def create_file_with_permission(path, content: str = "") -> None:
    """Create or truncate a file, write content and deny write access to others."""
    path = os.fspath(path)
    _validate(path)
    with open(path, "w", encoding="utf-8") as handle:
        if content:
            handle.write(content)
    _drop_others_write(path)


def get_file_name(path: str) -> str:
    """Return the part of the path after its last slash."""
    return path.rpartition("/")[2]


def copy_file(source_fd: int, path) -> None:
    """Copy the whole content behind an open descriptor into a file."""
    if source_fd < 0:
        raise ValueError(f"invalid source descriptor: {source_fd}")
    os.fstat(source_fd)
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_SYNC", 0)
    target_fd = os.open(os.fspath(path), flags, 0o644)
    try:
        os.lseek(source_fd, 0, os.SEEK_SET)
        while chunk := os.read(source_fd, _COPY_CHUNK):
            written = os.write(target_fd, chunk)
            if written != len(chunk):
                raise OSError(errno.EIO, f"short write to {path}")
    finally:
        os.close(target_fd)


def get_file_path_by_fd(fd: int) -> str:
    """Return the path of the file an open descriptor refers to."""
    os.fstat(fd)
    fd_dir = f"/proc/{os.getpid()}/fd"
    if os.path.isdir(fd_dir):
        return os.readlink(f"{fd_dir}/{fd}")
    if fcntl is not None and hasattr(fcntl, "F_GETPATH"):
        raw = fcntl.fcntl(fd, fcntl.F_GETPATH, bytes(os.pathconf("/", "PC_PATH_MAX")))
        return os.fsdecode(raw.split(b"\0", 1)[0])
    raise OSError(errno.ENOTSUP, "cannot resolve a path from a file descriptor here")


def rename_file(src, dest) -> None:
    """Move src to dest, replacing dest if it exists."""
    if not check_path_exist(src):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(src))
    os.replace(src, dest)


def get_file_time() -> str:
    """Return the local time as YYYYMMDD-HHMMSS."""
    return time.strftime("%Y%m%d-%H%M%S", time.localtime())


def remove_file(path) -> None:
    """Remove a file or a whole directory tree; a missing path is not an error."""
    path = os.fspath(path)
    if not check_path_exist(path):
        _log.info("file %s does not exist", path)
        return
    _remove_all(path)


def delete_dir(root_path, delete_root: bool) -> None:
    """Empty a directory, and remove the directory itself if delete_root is set."""
    root_path = os.fspath(root_path)
    if not check_path_exist(root_path):
        _log.info("dir %s does not exist", root_path)
        return
    if delete_root:
        _remove_all(root_path)
        return
    with os.scandir(root_path) as entries:
        paths = [entry.path for entry in entries]
    for entry_path in paths:
        _remove_all(entry_path)