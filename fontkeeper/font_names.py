"""Reading the full names that a TrueType, OpenType or collection file declares."""

from __future__ import annotations

import os
import struct
from functools import partial
from operator import itemgetter

_SFNT_VERSIONS = frozenset({b"\x00\x01\x00\x00", b"OTTO", b"true"})
_COLLECTION_TAG = b"ttcf"
_NAME_TABLE = b"name"
_FULL_NAME_ID = 4
_PLATFORM_UNICODE = 0
_PLATFORM_WINDOWS = 3
_LANGUAGE_ENGLISH_US = 0x0409
_READ_CHUNK = 64 * 1024


def decode_utf16be(data: bytes) -> str:
    """Decode big-endian UTF-16 text; a trailing odd byte is ignored."""
    even = bytes(data[: len(data) // 2 * 2])
    return even.decode("utf-16-be", errors="replace")


def _face_offsets(data: bytes) -> list[int]:
    tag = data[:4]
    if tag == _COLLECTION_TAG:
        (count,) = struct.unpack_from(">I", data, 8)
        if 12 + 4 * count > len(data):
            raise ValueError("font collection header is truncated")
        return list(struct.unpack_from(f">{count}I", data, 12))
    if tag in _SFNT_VERSIONS:
        return [0]
    raise ValueError("not a TrueType or OpenType font")


def _find_table(data: bytes, face_offset: int, wanted: bytes) -> tuple[int, int]:
    if data[face_offset : face_offset + 4] not in _SFNT_VERSIONS:
        raise ValueError(f"no font face at offset {face_offset}")
    (num_tables,) = struct.unpack_from(">H", data, face_offset + 4)
    start = face_offset + 12
    directory = data[start : start + 16 * num_tables]
    if len(directory) != 16 * num_tables:
        raise ValueError("table directory is truncated")
    for tag, _checksum, offset, length in struct.iter_unpack(">4sIII", directory):
        if tag == wanted:
            if offset + length > len(data):
                raise ValueError(f"table {wanted!r} runs past the end of the data")
            return offset, length
    raise ValueError(f"font face has no {wanted.decode()} table")


def _face_full_name(data: bytes, face_offset: int) -> str:
    table_offset, _length = _find_table(data, face_offset, _NAME_TABLE)
    _format, count, string_offset = struct.unpack_from(">HHH", data, table_offset)
    records_start = table_offset + 6
    records = data[records_start : records_start + 12 * count]
    if len(records) != 12 * count:
        raise ValueError("name table records are truncated")
    candidates = []
    for platform, _encoding, language, name_id, length, offset in struct.iter_unpack(">6H", records):
        if name_id != _FULL_NAME_ID or platform not in (_PLATFORM_UNICODE, _PLATFORM_WINDOWS):
            continue
        start = table_offset + string_offset + offset
        raw = data[start : start + length]
        if len(raw) != length:
            raise ValueError("name string runs past the end of the data")
        if platform == _PLATFORM_WINDOWS:
            rank = 0 if language == _LANGUAGE_ENGLISH_US else 1
        else:
            rank = 2
        candidates.append((rank, raw))
    if not candidates:
        return ""
    return decode_utf16be(min(candidates, key=itemgetter(0))[1])


def font_full_names(data: bytes) -> list[str]:
    """Return the full name of every face in a font file's data.

    Raises ValueError when the data is not a font or declares no full name.
    """
    data = bytes(data)
    try:
        names = [name for name in (_face_full_name(data, offset) for offset in _face_offsets(data)) if name]
    except struct.error as exc:
        raise ValueError("font data is truncated") from exc
    if not names:
        raise ValueError("font data declares no full name")
    return names


def read_full_names(fd: int) -> list[str]:
    """Read the whole file behind a descriptor and return its faces' full names."""
    os.lseek(fd, 0, os.SEEK_SET)
    data = b"".join(iter(partial(os.read, fd, _READ_CHUNK), b""))
    return font_full_names(data)