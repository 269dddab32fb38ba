from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    # Symlink to a directory.  Sized by the link itself and never descended into.
    DIR_LINK = "dir_link"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        return f"{self.value.title()} Priority"

    @property
    def icon(self) -> str:
        return _PRIORITY_ICONS[self]


_PRIORITY_ICONS: dict[Priority, str] = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}
