"""Depth-first traversal of a remote directory tree."""

import posixpath
from dataclasses import dataclass

from .entry import Entry, EntryType


@dataclass
class _Item:
    path: str
    entry: Entry
    error: Exception | None = None


class Walker:
    """Walks the tree below ``root`` using the ``list`` method of ``conn``."""

    def __init__(self, conn, root):
        if not root.endswith("/"):
            root += "/"
        self.conn = conn
        self.root = root
        self._cur = None
        self._stack = []
        self._descend = True

    def next(self):
        """Advance to the next file or directory; return False at the end."""
        if self._cur is None:
            self._cur = _Item(self.root, Entry(type=EntryType.FOLDER))

        if self._descend and self._cur.entry.type is EntryType.FOLDER:
            try:
                entries = self.conn.list(self._cur.path)
            except Exception as error:  # noqa: BLE001 - reported through err()
                self._cur.error = error
                return False
            for entry in entries:
                if entry.name in (".", ".."):
                    continue
                path = posixpath.normpath(posixpath.join(self._cur.path, entry.name))
                self._stack.append(_Item(path, entry))

        if not self._stack:
            return False
        self._cur = self._stack.pop()
        self._descend = True
        return True

    def skip_dir(self):
        """Do not descend into the directory visited last."""
        self._descend = False

    def path(self):
        """Return the path of the item visited last."""
        return self._cur.path

    def stat(self):
        """Return the entry of the item visited last."""
        return self._cur.entry

    def err(self):
        """Return the error met while listing the item visited last, if any."""
        return self._cur.error if self._cur is not None else None

    def __iter__(self):
        """Yield ``(path, entry)`` pairs; raise the listing error that ended the walk."""
        while self.next():
            yield self.path(), self.stat()
        error = self.err()
        if error is not None:
            raise error