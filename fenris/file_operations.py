"""Filesystem helpers that raise FileOperationError with a categorised result."""

from __future__ import annotations

import enum
import errno
import os
import shutil
import stat
from typing import Union

from fenris.messages import FileInfo

__all__ = [
    "FileOperationResult",
    "FileOperationError",
    "read_file",
    "write_file",
    "append_file",
    "create_file",
    "delete_file",
    "get_file_info",
    "file_exists",
    "create_directory",
    "create_directories",
    "delete_directory",
    "list_directory",
    "change_directory",
    "get_current_directory",
    "rename_path",
    "copy_file",
    "get_file_size",
]

PathType = Union[str, "os.PathLike[str]"]


class FileOperationResult(enum.Enum):
    """Outcome of a filesystem operation; the value is its description."""

    SUCCESS = "success"
    FILE_NOT_FOUND = "file not found"
    PERMISSION_DENIED = "permission denied"
    PATH_NOT_EXIST = "path does not exist"
    FILE_ALREADY_EXISTS = "file already exists"
    DIRECTORY_NOT_EMPTY = "directory not empty"
    IO_ERROR = "i/o error"
    INVALID_PATH = "invalid path"
    DIRECTORY_ALREADY_EXISTS = "directory already exists"
    UNKNOWN_ERROR = "unknown error"

    def __str__(self) -> str:
        return self.value


class FileOperationError(Exception):
    """Raised when a filesystem operation fails."""

    def __init__(self, result: FileOperationResult) -> None:
        super().__init__(result.value)
        self.result = result


_ERRNO_RESULTS = {
    errno.ENOENT: FileOperationResult.FILE_NOT_FOUND,
    errno.EACCES: FileOperationResult.PERMISSION_DENIED,
    errno.EEXIST: FileOperationResult.FILE_ALREADY_EXISTS,
    errno.ENOTEMPTY: FileOperationResult.DIRECTORY_NOT_EMPTY,
    errno.EINVAL: FileOperationResult.INVALID_PATH,
    errno.ENAMETOOLONG: FileOperationResult.INVALID_PATH,
    errno.EIO: FileOperationResult.IO_ERROR,
}


def _error_from_os(exc: OSError) -> FileOperationError:
    result = _ERRNO_RESULTS.get(exc.errno, FileOperationResult.UNKNOWN_ERROR)
    return FileOperationError(result)


def _fail(result: FileOperationResult) -> FileOperationError:
    return FileOperationError(result)


def _as_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _require_owner_writable(path: str) -> None:
    try:
        mode = os.stat(path).st_mode
    except OSError as exc:
        raise _error_from_os(exc) from exc
    if not mode & stat.S_IWUSR:
        raise _fail(FileOperationResult.PERMISSION_DENIED)


def _write(path: str, mode: str, data: bytes) -> None:
    try:
        handle = open(path, mode)
    except PermissionError as exc:
        raise _fail(FileOperationResult.PERMISSION_DENIED) from exc
    except OSError as exc:
        raise _fail(FileOperationResult.IO_ERROR) from exc
    with handle:
        try:
            handle.write(data)
        except OSError as exc:
            raise _fail(FileOperationResult.IO_ERROR) from exc


def read_file(filepath: PathType) -> bytes:
    """Return the whole contents of a file."""
    path = os.fspath(filepath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise _fail(FileOperationResult.IO_ERROR) from exc


def write_file(filepath: PathType, data: Union[bytes, str]) -> None:
    """Write ``data`` to a file, creating or truncating it."""
    path = os.fspath(filepath)
    if os.path.exists(path):
        _require_owner_writable(path)
    else:
        parent = os.path.dirname(path)
        if parent and os.path.exists(parent):
            _require_owner_writable(parent)
    _write(path, "wb", _as_bytes(data))


def append_file(filepath: PathType, data: Union[bytes, str]) -> None:
    """Append ``data`` to an existing file."""
    path = os.fspath(filepath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    _require_owner_writable(path)
    _write(path, "ab", _as_bytes(data))


def create_file(filepath: PathType) -> None:
    """Create a new empty file; the file must not exist yet."""
    path = os.fspath(filepath)
    if os.path.exists(path):
        raise _fail(FileOperationResult.FILE_ALREADY_EXISTS)
    parent = os.path.dirname(path)
    if parent:
        if not os.path.exists(parent):
            raise _fail(FileOperationResult.FILE_NOT_FOUND)
        _require_owner_writable(parent)
    _write(path, "wb", b"")
    if not os.path.exists(path):
        raise _fail(FileOperationResult.UNKNOWN_ERROR)


def delete_file(filepath: PathType) -> None:
    """Remove a regular file."""
    path = os.fspath(filepath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    if not os.path.isfile(path):
        raise _fail(FileOperationResult.INVALID_PATH)
    try:
        os.remove(path)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def get_file_info(filepath: PathType) -> FileInfo:
    """Describe a file or directory: name, size, type, mtime and permissions."""
    path = os.fspath(filepath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    try:
        status = os.stat(path)
    except OSError as exc:
        raise _error_from_os(exc) from exc
    is_regular = stat.S_ISREG(status.st_mode)
    return FileInfo(
        name=path,
        size=status.st_size if is_regular else 0,
        is_directory=stat.S_ISDIR(status.st_mode),
        modified_time=int(status.st_mtime),
        permissions=status.st_mode & 0o777,
    )


def file_exists(filepath: PathType) -> bool:
    """Return whether the path exists."""
    return os.path.exists(os.fspath(filepath))


def create_directory(dirpath: PathType) -> None:
    """Create a single directory whose parent already exists."""
    path = os.fspath(dirpath)
    if os.path.exists(path):
        if os.path.isdir(path):
            raise _fail(FileOperationResult.DIRECTORY_ALREADY_EXISTS)
        raise _fail(FileOperationResult.INVALID_PATH)
    try:
        os.mkdir(path)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def create_directories(dirpath: PathType) -> None:
    """Create a directory and any missing parents; an existing directory is fine."""
    try:
        os.makedirs(os.fspath(dirpath), exist_ok=True)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def delete_directory(dirpath: PathType, recursive: bool = False) -> None:
    """Remove a directory, with its contents when ``recursive`` is true."""
    path = os.fspath(dirpath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    if not os.path.isdir(path):
        raise _fail(FileOperationResult.INVALID_PATH)
    try:
        if recursive:
            shutil.rmtree(path)
        else:
            os.rmdir(path)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def list_directory(dirpath: PathType) -> list[FileInfo]:
    """Return information on every entry of a directory."""
    path = os.fspath(dirpath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    if not os.path.isdir(path):
        raise _fail(FileOperationResult.INVALID_PATH)
    try:
        names = os.listdir(path)
    except OSError:
        names = []
    return [get_file_info(os.path.normpath(os.path.join(path, name))) for name in names]


def change_directory(dirpath: PathType) -> None:
    """Make ``dirpath`` the current working directory."""
    path = os.fspath(dirpath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    if not os.path.isdir(path):
        raise _fail(FileOperationResult.INVALID_PATH)
    try:
        os.chdir(path)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def get_current_directory() -> str:
    """Return the current working directory."""
    try:
        return os.getcwd()
    except OSError as exc:
        raise _error_from_os(exc) from exc


def rename_path(oldpath: PathType, newpath: PathType) -> None:
    """Rename a file or directory; the destination must not exist."""
    old, new = os.fspath(oldpath), os.fspath(newpath)
    if not os.path.exists(old):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    if os.path.exists(new):
        raise _fail(FileOperationResult.FILE_ALREADY_EXISTS)
    try:
        os.rename(old, new)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def copy_file(source: PathType, destination: PathType) -> None:
    """Copy a regular file, overwriting the destination."""
    src, dst = os.fspath(source), os.fspath(destination)
    if not os.path.exists(src) or not os.path.isfile(src):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    try:
        shutil.copyfile(src, dst)
        shutil.copymode(src, dst)
    except OSError as exc:
        raise _error_from_os(exc) from exc


def get_file_size(filepath: PathType) -> int:
    """Return the size of a regular file in bytes."""
    path = os.fspath(filepath)
    if not os.path.exists(path):
        raise _fail(FileOperationResult.FILE_NOT_FOUND)
    if not os.path.isfile(path):
        raise _fail(FileOperationResult.INVALID_PATH)
    try:
        return os.path.getsize(path)
    except OSError as exc:
        raise _error_from_os(exc) from exc