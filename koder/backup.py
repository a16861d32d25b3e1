"""Backup copies around file saves, and write-permission helpers."""

from __future__ import annotations

import errno
import os
import shutil
import stat
from pathlib import Path
from typing import Optional

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


class BackupFileGuard:
    """Keep a ``<path>~`` copy of a file until a save is known to have worked.

    If ``save_successful`` is not called before the guard is closed (for
    example because an exception escaped), the backup is left in place.
    An empty or non-existent path makes the guard do nothing.
    """

    def __init__(self, path: "str | os.PathLike[str] | None") -> None:
        self._path = os.fspath(path) if path else ""
        self._success = False
        self._closed = False
        if not self._path:
            return
        if not os.path.exists(self._path):
            self._path = ""
            return
        backup = self._path + "~"
        if os.path.isdir(self._path):
            shutil.copytree(self._path, backup, dirs_exist_ok=True)
        else:
            shutil.copy2(self._path, backup)

    @property
    def backup_path(self) -> Optional[Path]:
        """Where the backup lives, or None when no backup was made."""
        return Path(self._path + "~") if self._path else None

    def save_successful(self) -> None:
        """Mark the save as done so the backup is removed on close."""
        self._success = True

    def close(self) -> None:
        """Remove the backup if the save succeeded; safe to call twice."""
        if self._closed:
            return
        self._closed = True
        backup = self.backup_path
        if backup is None or not self._success:
            return
        if backup.is_dir():
            shutil.rmtree(backup, ignore_errors=True)
        else:
            backup.unlink(missing_ok=True)

    def __enter__(self) -> "BackupFileGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


def _volume_is_read_only(path: "str | os.PathLike[str]") -> bool:
    if not hasattr(os, "statvfs"):
        return False
    return bool(os.statvfs(path).f_flag & os.ST_RDONLY)


def can_write(path: "str | os.PathLike[str]") -> bool:
    """Whether the file has any write bit set and lives on a writable volume."""
    try:
        mode = os.stat(path).st_mode
        if _volume_is_read_only(path):
            return False
    except OSError:
        return False
    return bool(mode & _WRITE_BITS)


def set_writable(path: "str | os.PathLike[str]", writable: bool) -> None:
    """Grant write bits (as the umask allows, always for the owner) or drop them all.

    Raises OSError when the file is missing or its volume is read-only.
    """
    mode = os.stat(path).st_mode
    if _volume_is_read_only(path):
        raise OSError(errno.EROFS, os.strerror(errno.EROFS), os.fspath(path))

    permissions = stat.S_IMODE(mode)
    if writable:
        mask = os.umask(0)
        os.umask(mask)
        permissions |= _WRITE_BITS & ~mask
        permissions |= stat.S_IWUSR
    else:
        permissions &= ~_WRITE_BITS
    os.chmod(path, permissions)