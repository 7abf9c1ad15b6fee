"""Directory entries and transfer types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EntryType(Enum):
    """The kind of a directory entry."""

    FILE = 0
    FOLDER = 1
    LINK = 2

    def __str__(self):
        return self.name.lower()


class TransferType(str, Enum):
    """Representation types for file transfers."""

    BINARY = "I"
    ASCII = "A"


@dataclass
class Entry:
    """A file, folder or link as described by a directory listing."""

    name: str = ""
    target: str = ""
    type: EntryType = EntryType.FILE
    size: int = 0
    time: datetime | None = None