"""Thin filesystem seam so scans, manifests and report writes can be tested in memory."""

from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    is_dir: bool
    size: int
    # Symlink whose target is a directory; is_dir stays False because the link is not followed.
    links_to_dir: bool = False


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    # None when the entry could not be stat'ed.
    stat: StatResult | None


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def absolute(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def stat(self, path: str) -> StatResult: ...

    def scandir(self, path: str) -> list[DirEntry]: ...

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, text: str) -> None: ...

    def replace(self, src: str, dst: str) -> None: ...

    def remove(self, path: str) -> None: ...


def _to_stat(st: os.stat_result, links_to_dir: bool = False) -> StatResult:
    is_dir = statmod.S_ISDIR(st.st_mode)
    return StatResult(is_dir=is_dir, size=0 if is_dir else st.st_size, links_to_dir=links_to_dir)


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return os.path.expanduser(path)

    def absolute(self, path: str) -> str:
        return os.path.abspath(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def stat(self, path: str) -> StatResult:
        return _to_stat(os.stat(path))

    def scandir(self, path: str) -> list[DirEntry]:
        entries: list[DirEntry] = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    lst = entry.stat(follow_symlinks=False)
                    st = _to_stat(lst, statmod.S_ISLNK(lst.st_mode) and entry.is_dir())
                except OSError:
                    st = None
                entries.append(DirEntry(path=entry.path, name=entry.name, stat=st))
        return entries

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as fh:
            return fh.read()

    def write_text(self, path: str, text: str) -> None:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)

    def replace(self, src: str, dst: str) -> None:
        os.replace(src, dst)

    def remove(self, path: str) -> None:
        os.remove(path)


DEFAULT_FS: FileSystem = OsFileSystem()
