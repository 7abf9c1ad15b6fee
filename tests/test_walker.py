import pytest

from ftpwire.entry import Entry, EntryType
from ftpwire.walker import Walker


class FakeConn:
    def __init__(self, tree, fail=None):
        self.tree = tree
        self.fail = fail
        self.calls = []

    def list(self, path):
        self.calls.append(path)
        if self.fail is not None:
            raise self.fail
        return self.tree.get(path, [])


def test_root_gets_trailing_slash():
    w = Walker(FakeConn({}), "root")
    assert w.root == "root/"


def test_cur_init_single_file():
    conn = FakeConn({"/root/": [Entry(name="lo")]})
    w = Walker(conn, "/root")
    assert w.next() is True
    assert w.path() == "/root/lo"
    assert w.stat().name == "lo"
    assert w.next() is False


def test_depth_first_order_and_dots_skipped():
    tree = {
        "/root/": [
            Entry(name="."),
            Entry(name=".."),
            Entry(name="a"),
            Entry(name="d", type=EntryType.FOLDER),
        ],
        "/root/d": [Entry(name="x")],
    }
    paths = [path for path, _ in Walker(FakeConn(tree), "/root")]
    assert paths == ["/root/d", "/root/d/x", "/root/a"]


def test_skip_dir_prevents_listing():
    tree = {"/root/": [Entry(name="d", type=EntryType.FOLDER)]}
    conn = FakeConn(tree)
    w = Walker(conn, "/root")
    assert w.next() is True
    w.skip_dir()
    assert w.next() is False
    assert conn.calls == ["/root/"]


def test_list_error_stops_walk():
    failure = OSError("this is an error")
    w = Walker(FakeConn({}, fail=failure), "/root")
    assert w.next() is False
    assert w.err() is failure
    assert w.path() == "/root/"


def test_iteration_raises_list_error():
    with pytest.raises(OSError, match="this is an error"):
        list(Walker(FakeConn({}, fail=OSError("this is an error")), "/root"))