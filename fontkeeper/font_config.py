"""The JSON record of installed fonts and the full names each one provides."""

from __future__ import annotations

import json
import os
import threading
from typing import Iterable

FONT_LIST_KEY = "fontlist"
FONT_PATH_KEY = "fontfullpath"
FULL_NAME_KEY = "fullname"


def _parse_font_list(document) -> dict[str, list[str]]:
    if not isinstance(document, dict):
        return {}
    font_list = document.get(FONT_LIST_KEY)
    if not isinstance(font_list, list):
        return {}
    fonts: dict[str, list[str]] = {}
    for entry in font_list:
        if not isinstance(entry, dict):
            continue
        names = entry.get(FULL_NAME_KEY)
        full_names = [name for name in names if isinstance(name, str)] if isinstance(names, list) else []
        path = entry.get(FONT_PATH_KEY)
        if isinstance(path, str):
            fonts.setdefault(path, full_names)
    return fonts


class FontConfig:
    """Reads and updates the installed-fonts record stored at config_path."""

    def __init__(self, config_path) -> None:
        self.config_path = os.fspath(config_path)
        self._fonts: dict[str, list[str]] = {}
        self._config_lock = threading.Lock()
        self._fonts_lock = threading.Lock()

    def _read_text(self) -> str:
        with self._config_lock, open(self.config_path, encoding="utf-8") as handle:
            return handle.read()

    def _write(self, document) -> None:
        text = json.dumps(document, indent="\t", ensure_ascii=False)
        with self._config_lock, open(self.config_path, "w", encoding="utf-8") as handle:
            handle.write(text)

    def _cached_fonts(self) -> dict[str, list[str]]:
        # Caller holds _fonts_lock.
        if not self._fonts:
            self._fonts = self.fonts_map()
        return self._fonts

    def fonts_map(self) -> dict[str, list[str]]:
        """Read the record afresh; a missing or unreadable record gives an empty map."""
        try:
            document = json.loads(self._read_text())
        except (OSError, ValueError):
            return {}
        return _parse_font_list(document)

    def insert_font_record(self, font_path: str, full_names: Iterable[str]) -> None:
        """Append a font file and its full names to the record.

        Raises OSError if the record cannot be read or written and ValueError
        if it is not a JSON object holding a font list.
        """
        document = json.loads(self._read_text())
        font_list = document.get(FONT_LIST_KEY) if isinstance(document, dict) else None
        if not isinstance(font_list, list):
            raise ValueError(f"font config {self.config_path} has no font list")
        font_list.append({FONT_PATH_KEY: font_path, FULL_NAME_KEY: list(full_names)})
        self._write(document)
        with self._fonts_lock:
            self._fonts = {}

    def delete_font_record(self, font_path: str) -> None:
        """Remove a font file from the record; KeyError if it is not recorded."""
        with self._fonts_lock:
            fonts = self._cached_fonts()
            if font_path not in fonts:
                raise KeyError(font_path)
            del fonts[font_path]
            self._write(
                {
                    FONT_LIST_KEY: [
                        {FONT_PATH_KEY: path, FULL_NAME_KEY: list(names)}
                        for path, names in fonts.items()
                    ]
                }
            )

    def installed_fonts_count(self) -> int:
        """Number of font files in the record."""
        with self._fonts_lock:
            return len(self._cached_fonts())

    def get_font_file_by_name(self, full_name: str) -> str | None:
        """Path of the installed file providing full_name, or None."""
        with self._fonts_lock:
            fonts = self._cached_fonts()
            return next((path for path, names in fonts.items() if full_name in names), None)