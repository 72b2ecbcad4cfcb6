import os
import struct

import pytest

from fontkeeper.font_names import decode_utf16be, font_full_names, read_full_names

TTC_NAMES = [
    "Noto Sans CJK JP",
    "Noto Sans CJK KR",
    "Noto Sans CJK SC",
    "Noto Sans CJK TC",
    "Noto Sans CJK HK",
    "Noto Sans Mono CJK JP",
    "Noto Sans Mono CJK KR",
    "Noto Sans Mono CJK SC",
    "Noto Sans Mono CJK TC",
    "Noto Sans Mono CJK HK",
]


def _name_table(records):
    header_size = 6 + 12 * len(records)
    header = struct.pack(">HHH", 0, len(records), header_size)
    entries = b""
    strings = b""
    for platform, language, name_id, text in records:
        raw = text.encode("utf-16-be")
        entries += struct.pack(">6H", platform, 1, language, name_id, len(raw), len(strings))
        strings += raw
    return header + entries + strings


def _face(tables, base=0):
    header = struct.pack(">IHHHH", 0x00010000, len(tables), 0, 0, 0)
    offset = base + 12 + 16 * len(tables)
    directory = b""
    body = b""
    for tag, data in tables.items():
        directory += struct.pack(">4sIII", tag, 0, offset, len(data))
        body += data
        offset += len(data)
    return header + directory + body


def make_ttf(name, platform=3, language=0x409):
    return _face({b"name": _name_table([(platform, language, 4, name)])})


def make_ttc(names):
    offset = 12 + 4 * len(names)
    offsets = []
    faces = []
    for name in names:
        offsets.append(offset)
        face = _face({b"name": _name_table([(3, 0x409, 4, name)])}, base=offset)
        faces.append(face)
        offset += len(face)
    header = struct.pack(">4sII", b"ttcf", 0x00010000, len(names))
    return header + struct.pack(f">{len(names)}I", *offsets) + b"".join(faces)


def test_decode_round_trip():
    assert decode_utf16be("HarmonyOS Sans".encode("utf-16-be")) == "HarmonyOS Sans"


def test_decode_ignores_trailing_odd_byte():
    raw = "Noto Sans CJK JP".encode("utf-16-be")
    assert decode_utf16be(raw + b"\x00") == "Noto Sans CJK JP"


def test_decode_handles_surrogate_pairs():
    text = "Font \U0001F600"
    assert decode_utf16be(text.encode("utf-16-be")) == text


def test_single_font_full_name():
    assert font_full_names(make_ttf("HarmonyOS Sans")) == ["HarmonyOS Sans"]


def test_collection_full_names():
    assert sorted(font_full_names(make_ttc(TTC_NAMES))) == sorted(TTC_NAMES)


def test_windows_english_name_preferred():
    table = _name_table([(0, 0, 4, "Unicode Name"), (3, 0x411, 4, "Other Name"), (3, 0x409, 4, "English Name")])
    assert font_full_names(_face({b"name": table})) == ["English Name"]


def test_unicode_platform_used_as_fallback():
    assert font_full_names(make_ttf("Fallback Face", platform=0, language=0)) == ["Fallback Face"]


def test_other_name_ids_are_ignored():
    table = _name_table([(3, 0x409, 1, "Family Only")])
    with pytest.raises(ValueError):
        font_full_names(_face({b"name": table}))


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"this is a text file, not a font\n",
        make_ttf("HarmonyOS Sans")[:30],
        make_ttc(TTC_NAMES)[:40],
        struct.pack(">4sII", b"ttcf", 0x00010000, 0),
        _face({b"head": b"\x00" * 8}),
    ],
)
def test_invalid_data_is_rejected(data):
    with pytest.raises(ValueError):
        font_full_names(data)


def test_read_full_names_from_descriptor(tmp_path):
    path = tmp_path / "HarmonyOS_Sans.ttf"
    path.write_bytes(make_ttf("HarmonyOS Sans"))
    fd = os.open(path, os.O_RDONLY)
    try:
        os.read(fd, 5)
        assert read_full_names(fd) == ["HarmonyOS Sans"]
    finally:
        os.close(fd)


def test_read_full_names_rejects_empty_file(tmp_path):
    path = tmp_path / "emptyTTF.ttf"
    path.write_bytes(b"")
    fd = os.open(path, os.O_RDONLY)
    try:
        with pytest.raises(ValueError):
            read_full_names(fd)
    finally:
        os.close(fd)