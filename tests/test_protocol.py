import pytest

from ftpwire.errors import FTPError, ProtocolError
from ftpwire.protocol import ControlConnection


class _FakeSocket:
    def __init__(self, *chunks):
        self.chunks = list(chunks)
        self.sent = bytearray()
        self.closed = False

    def recv(self, size):
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if len(chunk) > size:
            self.chunks.insert(0, chunk[size:])
            chunk = chunk[:size]
        return chunk

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        self.closed = True


def test_send_command_appends_crlf():
    sock = _FakeSocket()
    ControlConnection(sock).send_command("NOOP")
    assert bytes(sock.sent) == b"NOOP\r\n"


def test_single_line_reply():
    conn = ControlConnection(_FakeSocket(b"200 NOOP ok.\r\n"))
    assert conn.read_response(200) == (200, "NOOP ok.")


def test_multi_line_reply_with_uncoded_lines():
    sock = _FakeSocket(b"230-Hey,\r\nWelcome to my FTP\r\n230 Access granted\r\n")
    code, message = ControlConnection(sock).read_response(230)
    assert code == 230
    assert message == "Hey,\nWelcome to my FTP\nAccess granted"


def test_multi_line_reply_keeps_indented_lines():
    sock = _FakeSocket(
        b"250-File data\r\n Type=file;Size=42;Modify=20201213202400; magic-file\r\n \r\n250 End\r\n"
    )
    _, message = ControlConnection(sock).read_response(250)
    assert message.split("\n") == [
        "File data",
        " Type=file;Size=42;Modify=20201213202400; magic-file",
        " ",
        "End",
    ]


def test_feature_list_lines():
    sock = _FakeSocket(b"211-Features:\r\n FEAT\r\n PASV\r\n211 End\r\n")
    code, message = ControlConnection(sock).read_response(None)
    assert code == 211
    assert message.split("\n") == ["Features:", " FEAT", " PASV", "End"]


def test_unexpected_code_raises_protocol_error():
    sock = _FakeSocket(b"550 Could not get file size.\r\n")
    with pytest.raises(ProtocolError) as info:
        ControlConnection(sock).read_response(213)
    assert info.value.code == 550
    assert info.value.message == "Could not get file size."


def test_any_code_accepted_without_expectation():
    sock = _FakeSocket(b"530 This FTP server is anonymous only\r\n")
    assert ControlConnection(sock).read_response(-1) == (530, "This FTP server is anonymous only")


def test_code_class_expectation():
    sock = _FakeSocket(b"226 Transfer complete\r\n", b"331 Please send your password\r\n")
    conn = ControlConnection(sock)
    assert conn.read_response(2)[0] == 226
    with pytest.raises(ProtocolError):
        conn.read_response(2)


def test_short_reply_is_rejected():
    with pytest.raises(FTPError, match="short response"):
        ControlConnection(_FakeSocket(b"20\r\n")).read_response(None)


def test_invalid_code_is_rejected():
    with pytest.raises(FTPError, match="invalid response code"):
        ControlConnection(_FakeSocket(b"abc text\r\n")).read_response(None)


def test_end_of_stream_raises_eof():
    with pytest.raises(EOFError):
        ControlConnection(_FakeSocket()).read_response(None)


def test_reply_split_across_reads_and_consecutive_replies():
    sock = _FakeSocket(b"220 FTP Ser", b"ver ready.\r\n200 Ty", b"pe set ok\r\n")
    conn = ControlConnection(sock)
    assert conn.read_response(220) == (220, "FTP Server ready.")
    assert conn.read_response(200) == (200, "Type set ok")


def test_close_closes_socket():
    sock = _FakeSocket()
    ControlConnection(sock).close()
    assert sock.closed is True