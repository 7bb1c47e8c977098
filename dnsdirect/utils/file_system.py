"""Whole-file file system abstraction used by the direct DNS manager.

The manager needs only six operations, which keeps the boundary small enough
to implement over something other than the local OS. All names passed in
are absolute paths.
"""
import os
import stat as stat_module
from typing import Protocol


class WholeFileFS(Protocol):
    """Protocol for the file operations the direct manager performs."""

    def stat(self, name: str) -> bool:
        """Return whether name is a regular file. Raises FileNotFoundError if absent."""
        ...

    def read_file(self, name: str) -> bytes:
        ...

    def write_file(self, name: str, contents: bytes, perm: int) -> None:
        ...

    def rename(self, old_name: str, new_name: str) -> None:
        ...

    def remove(self, name: str) -> None:
        ...

    def truncate(self, name: str) -> None:
        """Truncate name to zero length."""
        ...


class DirectFS:
    """WholeFileFS implemented directly on the local OS."""

    def stat(self, name: str) -> bool:
        return stat_module.S_ISREG(os.stat(name).st_mode)

    def read_file(self, name: str) -> bytes:
        with open(name, "rb") as f:
            return f.read()

    def write_file(self, name: str, contents: bytes, perm: int = 0o644) -> None:
        # perm only applies when the file is created, like open(2)
        fd = os.open(name, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as f:
            f.write(contents)

    def rename(self, old_name: str, new_name: str) -> None:
        os.rename(old_name, new_name)

    def remove(self, name: str) -> None:
        os.remove(name)

    def truncate(self, name: str) -> None:
        os.truncate(name, 0)


class RootedFS:
    """
    Decorator that maps every absolute path under a private root.

    Used to exercise the manager against a scratch directory instead of /etc.
    Errors raised by the wrapped file system keep the rooted path.
    """

    def __init__(self, fs: WholeFileFS, root: str):
        self.fs = fs
        self.root = root

    def path(self, name: str) -> str:
        return os.path.join(self.root, name.lstrip("/"))

    def stat(self, name: str) -> bool:
        return self.fs.stat(self.path(name))

    def read_file(self, name: str) -> bytes:
        return self.fs.read_file(self.path(name))

    def write_file(self, name: str, contents: bytes, perm: int = 0o644) -> None:
        self.fs.write_file(self.path(name), contents, perm)

    def rename(self, old_name: str, new_name: str) -> None:
        self.fs.rename(self.path(old_name), self.path(new_name))

    def remove(self, name: str) -> None:
        self.fs.remove(self.path(name))

    def truncate(self, name: str) -> None:
        self.fs.truncate(self.path(name))
