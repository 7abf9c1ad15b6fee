"""The line-based control connection of an FTP session."""

from .errors import FTPError, ProtocolError

_ENCODING = "utf-8"
_DECODE_ERRORS = "surrogateescape"
_CHUNK_SIZE = 4096


def _code_mismatch(expected, code):
    """Tell whether ``code`` fails to match the expected code or code class."""
    if expected is None:
        return False
    if 1 <= expected < 10:
        return code // 100 != expected
    if 10 <= expected < 100:
        return code // 10 != expected
    if 100 <= expected < 1000:
        return code != expected
    return False


def _parse_code_line(line):
    """Split a reply line into its code, continuation flag and text."""
    if len(line) < 4 or line[3] not in " -":
        raise FTPError(f"short response: {line}")
    digits = line[:3]
    if not (digits.isascii() and digits.isdigit()) or int(digits) < 100:
        raise FTPError(f"invalid response code: {line}")
    return int(digits), line[3] == "-", line[4:]


class ControlConnection:
    """Sends commands and reads numbered replies over a socket-like object.

    The wrapped object needs ``recv``, ``sendall`` and ``close`` methods.
    """

    def __init__(self, conn):
        self._conn = conn
        self._buffer = bytearray()

    def send_command(self, line):
        """Send one command line, terminated by CRLF."""
        self._conn.sendall(line.encode(_ENCODING, _DECODE_ERRORS) + b"\r\n")

    def _read_line(self):
        while True:
            newline = self._buffer.find(b"\n")
            if newline >= 0:
                raw = bytes(self._buffer[:newline])
                del self._buffer[:newline + 1]
                if raw.endswith(b"\r"):
                    raw = raw[:-1]
                return raw.decode(_ENCODING, _DECODE_ERRORS)
            chunk = self._conn.recv(_CHUNK_SIZE)
            if not chunk:
                if self._buffer:
                    raw = bytes(self._buffer)
                    self._buffer.clear()
                    return raw.decode(_ENCODING, _DECODE_ERRORS)
                raise EOFError("control connection closed")
            self._buffer.extend(chunk)

    def read_response(self, expected=None):
        """Read one reply and return its code and text.

        The text of a multi-line reply has its lines joined with ``\\n``.
        ``expected`` may be a full code, a two-digit or one-digit code class,
        or ``None`` (or any value outside 1..999) to accept every code; a reply
        that does not match raises :class:`ProtocolError`.
        """
        code, continued, message = _parse_code_line(self._read_line())
        parts = [message]
        while continued:
            line = self._read_line()
            try:
                next_code, continued, more = _parse_code_line(line)
            except FTPError:
                parts.append(line)
                continued = True
                continue
            if next_code != code:
                parts.append(line)
                continued = True
                continue
            parts.append(more)
        text = "\n".join(parts)
        if _code_mismatch(expected, code):
            raise ProtocolError(code, text)
        return code, text

    def close(self):
        """Close the underlying connection."""
        self._conn.close()