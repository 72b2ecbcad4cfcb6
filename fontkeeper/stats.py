"""Statistics on the disk space used by installed fonts."""

from __future__ import annotations

import logging
import os
import shutil

DATA_PARTITION = "/data"
DEFAULT_INSTALL_PATH = "/data/service/el1/public/for-all-app/fonts/"
COMPONENT_NAME = "font_manager"
_MEBIBYTE = 1024 * 1024

_log = logging.getLogger(__name__)


def folder_size(path) -> int:
    """Total size in bytes of the files under path; 0 if it does not exist."""
    path = os.fspath(path)
    if os.path.isfile(path):
        return os.lstat(path).st_size
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, name)).st_size
            except OSError:
                continue
    return total


class UserDataStats:
    """Collects the user-data-size statistic for the font install directory."""

    def __init__(self, install_path=DEFAULT_INSTALL_PATH, partition=DATA_PARTITION) -> None:
        self.install_path = os.fspath(install_path)
        self.partition = os.fspath(partition)

    def data_partition_remain_size(self) -> int | None:
        """Free space on the partition in whole MiB, or None if it cannot be read."""
        try:
            if hasattr(os, "statvfs"):
                info = os.statvfs(self.partition)
                free = info.f_bfree * info.f_frsize
            else:
                free = shutil.disk_usage(self.partition).free
        except OSError:
            return None
        return free // _MEBIBYTE

    def file_or_folder_paths(self) -> list[str]:
        """The paths whose sizes are reported."""
        return [self.install_path]

    def file_or_folder_sizes(self) -> list[int]:
        """The sizes of the reported paths, in bytes."""
        return [folder_size(self.install_path)]

    def collect_user_data_size(self) -> dict:
        """Build and log the USER_DATA_SIZE statistic and return it."""
        record = {
            "domain": "FILEMANAGEMENT",
            "name": "USER_DATA_SIZE",
            "type": "STATISTIC",
            "COMPONENT_NAME": COMPONENT_NAME,
            "PARTITION_NAME": self.partition,
            "REMAIN_PARTITION_SIZE": self.data_partition_remain_size(),
            "FILE_OR_FOLDER_PATH": self.file_or_folder_paths(),
            "FILE_OR_FOLDER_SIZE": self.file_or_folder_sizes(),
        }
        _log.info("user data size: %s", record)
        return record