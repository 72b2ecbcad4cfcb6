"""Installing font files into the shared font directory and removing them."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from fontkeeper.errors import FontError, FontErrorCode
from fontkeeper.events import FontEventPublisher, FontEventType
from fontkeeper.file_utils import (
    check_path_exist,
    copy_file,
    create_dir_with_permission,
    create_file_with_permission,
    get_file_name,
    get_file_path_by_fd,
    get_file_time,
    remove_file,
    rename_file,
)
from fontkeeper.font_config import FontConfig
from fontkeeper.font_names import read_full_names
from fontkeeper.stats import DEFAULT_INSTALL_PATH, UserDataStats

CONFIG_FILE_NAME = "install_fontconfig.json"
TEMP_DIR_NAME = "temp"
MAX_INSTALL_NUM = 200
_EMPTY_CONFIG = '{\n        "fontlist": []\n    }'

_log = logging.getLogger(__name__)


def format_full_name(full_names: Iterable[str]) -> str:
    """Join full names with commas, as carried in update events."""
    return ",".join(full_names)


class FontManager:
    """Installs and uninstalls fonts under one install directory."""

    def __init__(self, install_path=DEFAULT_INSTALL_PATH, publisher=None, stats=None) -> None:
        self.install_path = os.fspath(install_path)
        self.temp_path = os.path.join(self.install_path, TEMP_DIR_NAME)
        self.config_file = os.path.join(self.install_path, CONFIG_FILE_NAME)
        self.publisher = publisher if publisher is not None else FontEventPublisher()
        self.stats = stats if stats is not None else UserDataStats(self.install_path)

    def check_install_path(self) -> bool:
        """True if the install directory exists and its temp directory is ready."""
        if not check_path_exist(self.install_path):
            return False
        if check_path_exist(self.temp_path):
            return True
        try:
            create_dir_with_permission(self.temp_path)
        except (OSError, ValueError) as exc:
            _log.error("cannot create %s: %s", self.temp_path, exc)
            return False
        return True

    def check_font_config_path(self) -> bool:
        """True if the config file exists or could be created empty."""
        if check_path_exist(self.config_file):
            return True
        try:
            create_file_with_permission(self.config_file, _EMPTY_CONFIG)
        except (OSError, ValueError) as exc:
            _log.error("cannot create %s: %s", self.config_file, exc)
            return False
        return True

    def _copy_into_place(self, source_path: str, fd: int) -> str:
        file_name = get_file_name(source_path)
        temp_path = os.path.join(self.temp_path, file_name)
        try:
            copy_file(fd, temp_path)
        except (OSError, ValueError) as exc:
            _log.error("copy to %s failed: %s", temp_path, exc)
            raise FontError(FontErrorCode.COPY_FAIL) from exc
        dest_path = os.path.join(self.install_path, file_name)
        if check_path_exist(dest_path):
            dest_path = os.path.join(self.install_path, f"{get_file_time()}_{file_name}")
            _log.info("target name taken, storing the font as %s", dest_path)
        try:
            rename_file(temp_path, dest_path)
        except OSError as exc:
            _log.error("rename of %s failed: %s", source_path, exc)
            remove_file(temp_path)
            raise FontError(FontErrorCode.COPY_FAIL) from exc
        return dest_path

    def install_font(self, fd: int) -> str:
        """Install the font behind an open descriptor and return its installed path.

        Raises FontError with the code that describes the failure.
        """
        if not (self.check_install_path() and self.check_font_config_path()):
            raise FontError(FontErrorCode.FILE_NOT_EXISTS)
        try:
            full_names = read_full_names(fd)
        except (OSError, ValueError) as exc:
            _log.error("font file verification failed: %s", exc)
            raise FontError(FontErrorCode.FILE_VERIFY_FAIL) from exc

        config = FontConfig(self.config_file)
        if any(config.get_font_file_by_name(name) is not None for name in full_names):
            _log.info("font already installed")
            raise FontError(FontErrorCode.INSTALLED_ALREADY)
        if config.installed_fonts_count() >= MAX_INSTALL_NUM:
            _log.info("installed fonts reach %d, no more allowed", MAX_INSTALL_NUM)
            raise FontError(FontErrorCode.MAX_FILE_COUNT)

        try:
            source_path = get_file_path_by_fd(fd)
        except OSError as exc:
            raise FontError(FontErrorCode.COPY_FAIL) from exc
        dest_path = self._copy_into_place(source_path, fd)

        self.stats.collect_user_data_size()
        try:
            config.insert_font_record(dest_path, full_names)
        except (OSError, ValueError) as exc:
            _log.error("recording %s failed: %s", dest_path, exc)
            raise FontError(FontErrorCode.INSTALL_FAIL) from exc
        self.publisher.publish_font_update(FontEventType.INSTALL, format_full_name(full_names))
        return dest_path

    def uninstall_font(self, full_name: str) -> str:
        """Remove the installed file that provides full_name and return its path.

        Raises FontError with the code that describes the failure.
        """
        _log.info("uninstalling font %s", full_name)
        if not full_name:
            raise FontError(FontErrorCode.UNINSTALL_FILE_NOT_EXISTS)
        config = FontConfig(self.config_file)
        path = config.get_font_file_by_name(full_name)
        if path is None:
            _log.error("cannot find font %s", full_name)
            raise FontError(FontErrorCode.UNINSTALL_FILE_NOT_EXISTS)
        self.stats.collect_user_data_size()
        try:
            remove_file(path)
        except OSError as exc:
            raise FontError(FontErrorCode.UNINSTALL_REMOVE_FAIL) from exc
        try:
            config.delete_font_record(path)
        except (KeyError, OSError) as exc:
            _log.error("updating the font config failed: %s", exc)
            raise FontError(FontErrorCode.UNINSTALL_FAIL) from exc
        self.publisher.publish_font_update(FontEventType.UNINSTALL, full_name)
        return path