"""Front end for installing and removing fonts by file path or full name."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from fontkeeper.errors import FontError, FontErrorCode
from fontkeeper.manager import FontManager
from fontkeeper.stats import DEFAULT_INSTALL_PATH

_PATH_MAX = 4096
_INVALID_PARAM = "invalid param"
_OTHER_ERROR = "Other error."

_COMMON_MESSAGES = {
    FontErrorCode.NO_PERMISSION: "Permission denied.",
    FontErrorCode.NOT_SYSTEM_APP: "Non-system application.",
}

_INSTALL_MESSAGES = {
    **_COMMON_MESSAGES,
    FontErrorCode.FILE_NOT_EXISTS: "Font does not exist.",
    FontErrorCode.FILE_VERIFY_FAIL: "Font is not supported.",
    FontErrorCode.COPY_FAIL: "Font file copy failed.",
    FontErrorCode.INSTALLED_ALREADY: "Font file installed.",
    FontErrorCode.MAX_FILE_COUNT: "Exceeded maximum number of installed files.",
}

_UNINSTALL_MESSAGES = {
    **_COMMON_MESSAGES,
    FontErrorCode.UNINSTALL_FILE_NOT_EXISTS: "Font file does not exist.",
    FontErrorCode.UNINSTALL_REMOVE_FAIL: "Font file delete error.",
}

_log = logging.getLogger(__name__)


def real_path(path) -> str:
    """Resolve a path to its canonical absolute form.

    Raises ValueError for an empty or overlong path and FileNotFoundError
    when the path does not resolve to an existing file.
    """
    path = os.fspath(path)
    if not path:
        raise ValueError("path is empty")
    if len(path) >= _PATH_MAX:
        raise ValueError(f"path is too long: {len(path)} characters")
    resolved = os.path.realpath(path)
    if not os.path.exists(resolved):
        raise FileNotFoundError(2, "No such file or directory", path)
    return resolved


def install_error_message(code: int) -> str:
    """The user-facing message for an installation error code."""
    try:
        return _INSTALL_MESSAGES.get(FontErrorCode(code), _OTHER_ERROR)
    except ValueError:
        return _OTHER_ERROR


def uninstall_error_message(code: int) -> str:
    """The user-facing message for an uninstallation error code."""
    try:
        return _UNINSTALL_MESSAGES.get(FontErrorCode(code), _OTHER_ERROR)
    except ValueError:
        return _OTHER_ERROR


def install_font(font_path, manager: FontManager | None = None) -> str:
    """Install the font file at font_path and return where it was installed.

    Raises FontError carrying the code and its user-facing message.
    """
    font_path = os.fspath(font_path) if font_path is not None else ""
    if not font_path:
        raise FontError(FontErrorCode.FILE_NOT_EXISTS, _INVALID_PARAM)
    manager = manager if manager is not None else FontManager()
    not_found = FontError(
        FontErrorCode.FILE_NOT_EXISTS, install_error_message(FontErrorCode.FILE_NOT_EXISTS)
    )
    try:
        resolved = real_path(font_path)
    except (OSError, ValueError) as exc:
        _log.error("cannot resolve %s: %s", font_path, exc)
        raise not_found from exc
    try:
        fd = os.open(resolved, os.O_RDONLY)
    except OSError as exc:
        _log.error("cannot open font file %s: %s", resolved, exc)
        raise not_found from exc
    try:
        return manager.install_font(fd)
    except FontError as exc:
        raise FontError(exc.code, install_error_message(exc.code)) from exc
    except OSError as exc:
        raise FontError(FontErrorCode.INSTALL_FAIL, _OTHER_ERROR) from exc
    finally:
        os.close(fd)


def uninstall_font(font_name: str, manager: FontManager | None = None) -> str:
    """Remove the installed font with the given full name and return its file path.

    Raises FontError carrying the code and its user-facing message.
    """
    if not font_name:
        raise FontError(FontErrorCode.UNINSTALL_FILE_NOT_EXISTS, _INVALID_PARAM)
    manager = manager if manager is not None else FontManager()
    try:
        return manager.uninstall_font(font_name)
    except FontError as exc:
        raise FontError(exc.code, uninstall_error_message(exc.code)) from exc
    except OSError as exc:
        raise FontError(FontErrorCode.UNINSTALL_FAIL, _OTHER_ERROR) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fontkeeper", description="Install or remove shared fonts.")
    parser.add_argument(
        "--install-path",
        default=DEFAULT_INSTALL_PATH,
        help="directory that holds installed fonts",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    install = commands.add_parser("install", help="install a font file")
    install.add_argument("font_path")
    uninstall = commands.add_parser("uninstall", help="remove an installed font by full name")
    uninstall.add_argument("font_name")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns 0 on success and 1 on a font error."""
    args = _build_parser().parse_args(argv)
    manager = FontManager(args.install_path)
    try:
        if args.command == "install":
            print(install_font(args.font_path, manager))
        else:
            print(uninstall_font(args.font_name, manager))
    except FontError as exc:
        print(f"fontkeeper: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())