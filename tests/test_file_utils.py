import os
import stat
from datetime import datetime, timedelta

import pytest

from fontkeeper import file_utils


@pytest.fixture
def open_umask():
    previous = os.umask(0)
    try:
        yield
    finally:
        os.umask(previous)


def test_check_path_exist(tmp_path):
    existing = tmp_path / "a.ttf"
    existing.write_bytes(b"x")
    assert file_utils.check_path_exist(str(existing)) is True
    assert file_utils.check_path_exist(str(tmp_path)) is True
    assert file_utils.check_path_exist(str(tmp_path / "missing")) is False
    assert file_utils.check_path_exist("") is False


def test_create_dir_with_permission(tmp_path, open_umask):
    target = tmp_path / "fonts"
    file_utils.create_dir_with_permission(str(target))
    assert target.is_dir()
    assert os.stat(target).st_mode & stat.S_IWOTH == 0
    # creating again is fine
    file_utils.create_dir_with_permission(str(target))
    assert target.is_dir()


def test_create_dir_requires_parent(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_utils.create_dir_with_permission(str(tmp_path / "no" / "such"))


@pytest.mark.parametrize("bad", ["", "/tmp/./x", "/tmp/.hidden", "../x"])
def test_create_dir_rejects_invalid_paths(bad):
    with pytest.raises(ValueError):
        file_utils.create_dir_with_permission(bad)


@pytest.mark.parametrize("bad", ["", "/tmp/./x.json", "a/.b"])
def test_create_file_rejects_invalid_paths(bad):
    with pytest.raises(ValueError):
        file_utils.create_file_with_permission(bad, "data")


def test_create_file_with_permission(tmp_path, open_umask):
    target = tmp_path / "config.json"
    file_utils.create_file_with_permission(str(target), '{"fontlist": []}')
    assert target.read_text() == '{"fontlist": []}'
    assert os.stat(target).st_mode & stat.S_IWOTH == 0


def test_create_file_truncates(tmp_path):
    target = tmp_path / "config.json"
    target.write_text("old content that is long")
    file_utils.create_file_with_permission(str(target))
    assert target.read_text() == ""


def test_get_file_name():
    assert file_utils.get_file_name("/data/test/HarmonyOS_Sans.ttf") == "HarmonyOS_Sans.ttf"
    assert file_utils.get_file_name("plain.ttf") == "plain.ttf"
    assert file_utils.get_file_name("/data/test/") == ""


def test_copy_file(tmp_path):
    source = tmp_path / "source.ttf"
    payload = bytes(range(256)) * 200
    source.write_bytes(payload)
    target = tmp_path / "target.ttf"
    fd = os.open(source, os.O_RDONLY)
    try:
        os.read(fd, 10)  # copying starts from the beginning regardless
        file_utils.copy_file(fd, str(target))
    finally:
        os.close(fd)
    assert target.read_bytes() == payload


def test_copy_file_replaces_longer_target(tmp_path):
    source = tmp_path / "source.json"
    source.write_bytes(b"short")
    target = tmp_path / "target.json"
    target.write_bytes(b"much longer previous content")
    fd = os.open(source, os.O_RDONLY)
    try:
        file_utils.copy_file(fd, str(target))
    finally:
        os.close(fd)
    assert target.read_bytes() == b"short"


def test_copy_file_rejects_negative_fd(tmp_path):
    with pytest.raises(ValueError):
        file_utils.copy_file(-1, str(tmp_path / "t"))
    assert not (tmp_path / "t").exists()


def test_get_file_path_by_fd(tmp_path):
    source = tmp_path / "font.ttf"
    source.write_bytes(b"data")
    fd = os.open(source, os.O_RDONLY)
    try:
        assert file_utils.get_file_path_by_fd(fd) == os.path.realpath(source)
    finally:
        os.close(fd)


def test_rename_file(tmp_path):
    src = tmp_path / "a.ttf"
    src.write_bytes(b"font")
    dest = tmp_path / "b.ttf"
    file_utils.rename_file(str(src), str(dest))
    assert not src.exists()
    assert dest.read_bytes() == b"font"


def test_rename_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_utils.rename_file(str(tmp_path / "nope"), str(tmp_path / "dest"))


def test_get_file_time_format():
    value = file_utils.get_file_time()
    assert len(value) == 15
    assert value[8] == "-"
    parsed = datetime.strptime(value, "%Y%m%d-%H%M%S")
    assert abs(datetime.now() - parsed) < timedelta(minutes=1)


def test_remove_file_and_tree(tmp_path):
    single = tmp_path / "f.ttf"
    single.write_bytes(b"x")
    file_utils.remove_file(str(single))
    assert not single.exists()

    tree = tmp_path / "tree"
    (tree / "sub").mkdir(parents=True)
    (tree / "sub" / "g.ttf").write_bytes(b"y")
    file_utils.remove_file(str(tree))
    assert not tree.exists()


def test_remove_missing_file_is_quiet(tmp_path):
    file_utils.remove_file(str(tmp_path / "missing"))
    assert list(tmp_path.iterdir()) == []


def test_delete_dir_keep_root(tmp_path):
    root = tmp_path / "fonts"
    (root / "temp").mkdir(parents=True)
    (root / "a.ttf").write_bytes(b"a")
    (root / "temp" / "b.ttf").write_bytes(b"b")
    file_utils.delete_dir(str(root), False)
    assert root.is_dir()
    assert list(root.iterdir()) == []


def test_delete_dir_with_root(tmp_path):
    root = tmp_path / "fonts"
    root.mkdir()
    (root / "a.ttf").write_bytes(b"a")
    file_utils.delete_dir(str(root), True)
    assert not root.exists()


def test_delete_missing_dir_is_quiet(tmp_path):
    file_utils.delete_dir(str(tmp_path / "missing"), True)
    assert list(tmp_path.iterdir()) == []