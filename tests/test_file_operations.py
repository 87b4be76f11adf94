import os

import pytest

from fenris.file_operations import (
    FileOperationError,
    FileOperationResult,
    append_file,
    change_directory,
    copy_file,
    create_directories,
    create_directory,
    create_file,
    delete_directory,
    delete_file,
    file_exists,
    get_current_directory,
    get_file_info,
    get_file_size,
    list_directory,
    read_file,
    rename_path,
    write_file,
)


def _expect(result, func, *args):
    with pytest.raises(FileOperationError) as info:
        func(*args)
    assert info.value.result is result


def test_result_descriptions():
    assert str(FileOperationResult.IO_ERROR) == "i/o error"
    assert str(FileOperationResult.FILE_NOT_FOUND) == "file not found"
    assert str(FileOperationError(FileOperationResult.INVALID_PATH)) == "invalid path"


def test_write_then_read_round_trip(tmp_path):
    path = tmp_path / "data.bin"
    payload = bytes(range(256)) * 4
    write_file(path, payload)
    assert read_file(path) == payload


def test_write_accepts_text_and_truncates(tmp_path):
    path = tmp_path / "t.txt"
    write_file(path, "first version, long")
    write_file(path, "short")
    assert read_file(path) == b"short"


def test_read_missing_file(tmp_path):
    with pytest.raises(FileOperationError) as info:
        read_file(tmp_path / "missing")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_write_read_only_file_denied(tmp_path):
    path = tmp_path / "ro.txt"
    write_file(path, b"keep")
    os.chmod(path, 0o444)
    try:
        _expect(FileOperationResult.PERMISSION_DENIED, write_file, path, b"new")
        _expect(FileOperationResult.PERMISSION_DENIED, append_file, path, b"new")
    finally:
        os.chmod(path, 0o644)
    assert read_file(path) == b"keep"


def test_append_file(tmp_path):
    path = tmp_path / "log.txt"
    write_file(path, b"one\n")
    append_file(path, b"two\n")
    assert read_file(path) == b"one\ntwo\n"


def test_append_missing_file(tmp_path):
    with pytest.raises(FileOperationError) as info:
        append_file(tmp_path / "nope", b"x")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_create_file(tmp_path):
    path = tmp_path / "new.txt"
    create_file(path)
    assert file_exists(path)
    assert get_file_size(path) == 0
    _expect(FileOperationResult.FILE_ALREADY_EXISTS, create_file, path)


def test_create_file_missing_parent(tmp_path):
    with pytest.raises(FileOperationError) as info:
        create_file(tmp_path / "no" / "f.txt")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_create_file_in_read_only_directory(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    os.chmod(locked, 0o555)
    try:
        _expect(FileOperationResult.PERMISSION_DENIED, create_file, locked / "f.txt")
    finally:
        os.chmod(locked, 0o755)
    assert not file_exists(locked / "f.txt")


def test_delete_file(tmp_path):
    path = tmp_path / "gone.txt"
    write_file(path, b"x")
    delete_file(path)
    assert not file_exists(path)
    _expect(FileOperationResult.FILE_NOT_FOUND, delete_file, path)


def test_delete_file_on_directory_is_invalid(tmp_path):
    with pytest.raises(FileOperationError) as info:
        delete_file(tmp_path)
    assert info.value.result is FileOperationResult.INVALID_PATH


def test_get_file_info_for_file(tmp_path):
    path = tmp_path / "info.txt"
    write_file(path, b"12345")
    os.chmod(path, 0o640)
    info = get_file_info(path)
    assert info.name == str(path)
    assert info.size == 5
    assert info.is_directory is False
    assert info.permissions == 0o640
    assert info.modified_time == int(os.stat(path).st_mtime)


def test_get_file_info_for_directory(tmp_path):
    info = get_file_info(tmp_path)
    assert info.is_directory is True
    assert info.size == 0


def test_get_file_info_missing(tmp_path):
    with pytest.raises(FileOperationError) as info:
        get_file_info(tmp_path / "x")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_create_directory(tmp_path):
    path = tmp_path / "sub"
    create_directory(path)
    assert get_file_info(path).is_directory
    _expect(FileOperationResult.DIRECTORY_ALREADY_EXISTS, create_directory, path)


def test_create_directory_over_file_is_invalid(tmp_path):
    path = tmp_path / "f"
    write_file(path, b"")
    _expect(FileOperationResult.INVALID_PATH, create_directory, path)


def test_create_directory_without_parent(tmp_path):
    with pytest.raises(FileOperationError) as info:
        create_directory(tmp_path / "a" / "b")
    assert info.value.result is FileOperationResult.FILE_NOT_FOUND


def test_create_directories_nested_and_existing(tmp_path):
    path = tmp_path / "a" / "b" / "c"
    create_directories(path)
    create_directories(path)
    assert file_exists(path)
    assert get_file_info(path).is_directory is True
    assert get_file_info(tmp_path / "a" / "b").is_directory is True


def test_delete_directory_non_recursive(tmp_path):
    path = tmp_path / "d"
    create_directory(path)
    write_file(path / "f", b"x")
    _expect(FileOperationResult.DIRECTORY_NOT_EMPTY, delete_directory, path, False)
    delete_file(path / "f")
    delete_directory(path)
    assert not file_exists(path)


def test_delete_directory_recursive(tmp_path):
    path = tmp_path / "tree"
    create_directories(path / "x" / "y")
    write_file(path / "x" / "y" / "f", b"x")
    delete_directory(path, True)
    assert not file_exists(path)


def test_delete_directory_errors(tmp_path):
    _expect(FileOperationResult.FILE_NOT_FOUND, delete_directory, tmp_path / "no", False)
    write_file(tmp_path / "f", b"")
    _expect(FileOperationResult.INVALID_PATH, delete_directory, tmp_path / "f", True)


def test_list_directory(tmp_path):
    write_file(tmp_path / "a.txt", b"abc")
    create_directory(tmp_path / "sub")
    entries = {os.path.basename(e.name): e for e in list_directory(tmp_path)}
    assert set(entries) == {"a.txt", "sub"}
    assert entries["a.txt"].size == 3
    assert entries["sub"].is_directory
    assert entries["a.txt"].name == os.path.join(str(tmp_path), "a.txt")


def test_list_directory_errors(tmp_path):
    _expect(FileOperationResult.FILE_NOT_FOUND, list_directory, tmp_path / "no")
    write_file(tmp_path / "f", b"")
    _expect(FileOperationResult.INVALID_PATH, list_directory, tmp_path / "f")


def test_change_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sub = tmp_path / "inner"
    create_directory(sub)
    change_directory(sub)
    assert os.path.realpath(get_current_directory()) == os.path.realpath(sub)


def test_change_directory_errors(tmp_path):
    _expect(FileOperationResult.FILE_NOT_FOUND, change_directory, tmp_path / "no")
    write_file(tmp_path / "f", b"")
    _expect(FileOperationResult.INVALID_PATH, change_directory, tmp_path / "f")


def test_rename_path(tmp_path):
    old, new = tmp_path / "old", tmp_path / "new"
    write_file(old, b"content")
    rename_path(old, new)
    assert not file_exists(old)
    assert read_file(new) == b"content"


def test_rename_path_errors(tmp_path):
    _expect(FileOperationResult.FILE_NOT_FOUND, rename_path, tmp_path / "a", tmp_path / "b")
    write_file(tmp_path / "a", b"1")
    write_file(tmp_path / "b", b"2")
    _expect(FileOperationResult.FILE_ALREADY_EXISTS, rename_path, tmp_path / "a", tmp_path / "b")
    assert read_file(tmp_path / "b") == b"2"


def test_copy_file_overwrites(tmp_path):
    src, dst = tmp_path / "src", tmp_path / "dst"
    write_file(src, b"fresh")
    write_file(dst, b"stale data")
    copy_file(src, dst)
    assert read_file(dst) == b"fresh"
    assert read_file(src) == b"fresh"


def test_copy_file_requires_regular_source(tmp_path):
    with pytest.raises(FileOperationError) as missing:
        copy_file(tmp_path / "none", tmp_path / "d")
    assert missing.value.result is FileOperationResult.FILE_NOT_FOUND
    with pytest.raises(FileOperationError) as directory:
        copy_file(tmp_path, tmp_path / "d")
    assert directory.value.result is FileOperationResult.FILE_NOT_FOUND


def test_get_file_size(tmp_path):
    path = tmp_path / "sz"
    write_file(path, b"x" * 1000)
    assert get_file_size(path) == 1000
    _expect(FileOperationResult.INVALID_PATH, get_file_size, tmp_path)
    _expect(FileOperationResult.FILE_NOT_FOUND, get_file_size, tmp_path / "none")