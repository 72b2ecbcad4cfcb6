"""Error codes reported by font installation and removal."""

from __future__ import annotations

from enum import IntEnum


class FontErrorCode(IntEnum):
    """Result codes of font operations."""

    SUCCESS = 0
    NO_PERMISSION = 201
    NOT_SYSTEM_APP = 202

    FILE_NOT_EXISTS = 31100101
    FILE_VERIFY_FAIL = 31100102
    COPY_FAIL = 31100103
    INSTALLED_ALREADY = 31100104
    MAX_FILE_COUNT = 31100105
    INSTALL_FAIL = 31100106
    UNINSTALL_FILE_NOT_EXISTS = 31100107
    UNINSTALL_REMOVE_FAIL = 31100108
    UNINSTALL_FAIL = 31100109


class FontError(Exception):
    """A font operation failed with one of the FontErrorCode values."""

    def __init__(self, code: int, message: str | None = None) -> None:
        code = FontErrorCode(code)
        if code is FontErrorCode.SUCCESS:
            raise ValueError("FontError cannot carry the SUCCESS code")
        self.code = code
        self.message = message if message is not None else code.name.replace("_", " ").lower()
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message} (code {int(self.code)})"