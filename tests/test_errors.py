import pytest

from ftpwire.errors import (
    ErrorCollector,
    FTPError,
    MultiError,
    ProtocolError,
    UnknownEntryTypeError,
    UnsupportedListDateError,
    UnsupportedListLineError,
)


def test_protocol_error_fields():
    error = ProtocolError(550, "No such file")
    assert error.code == 550
    assert error.message == "No such file"
    assert str(error) == "550 No such file"
    assert isinstance(error, FTPError)


def test_list_errors_default_messages():
    assert str(UnsupportedListLineError()) == "unsupported LIST line"
    assert str(UnsupportedListDateError()) == "unsupported LIST date"
    assert str(UnknownEntryTypeError()) == "unknown entry type"


def test_list_error_explicit_message():
    assert str(UnsupportedListLineError("custom")) == "custom"


def test_multi_error_single():
    error = MultiError([ValueError("boom")])
    assert str(error) == "1 error occurred:\n\t* boom\n\n"
    assert len(error.errors) == 1


def test_multi_error_several():
    first, second = ValueError("a"), OSError("b")
    error = MultiError([first, second])
    assert error.errors == [first, second]
    assert str(error).startswith("2 errors occurred:")
    assert "* a" in str(error) and "* b" in str(error)


def test_collector_empty_returns():
    collector = ErrorCollector()
    assert collector.raise_if_any() is None
    assert collector.errors == []


def test_collector_call_returns_result():
    collector = ErrorCollector()
    assert collector.call(lambda x, y: x + y, 2, 3) == 5
    assert collector.errors == []


def test_collector_call_records_exception():
    collector = ErrorCollector()

    def fail():
        raise OSError("closed")

    assert collector.call(fail) is None
    assert len(collector.errors) == 1
    with pytest.raises(OSError, match="closed"):
        collector.raise_if_any()


def test_collector_several_errors():
    collector = ErrorCollector()
    first = ProtocolError(426, "aborted")
    second = OSError("reset")
    collector.add(first)
    collector.add(second)
    with pytest.raises(MultiError) as info:
        collector.raise_if_any()
    assert info.value.errors == [first, second]
    assert info.value.__cause__ is first