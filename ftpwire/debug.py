"""Wrappers that copy traffic to a debug output."""


class DebugConnection:
    """A socket wrapper copying everything received and sent to ``output``."""

    def __init__(self, conn, output):
        self._conn = conn
        self._output = output

    def recv(self, size):
        """Receive up to ``size`` bytes and copy them to the output."""
        data = self._conn.recv(size)
        if data:
            self._output.write(data)
        return data

    def sendall(self, data):
        """Copy ``data`` to the output, then send all of it."""
        self._output.write(data)
        self._conn.sendall(data)

    def close(self):
        """Close the wrapped connection."""
        self._conn.close()


class DebugStream:
    """A readable stream wrapper copying everything read to ``output``."""

    def __init__(self, stream, output):
        self._stream = stream
        self._output = output

    def read(self, size=-1):
        """Read up to ``size`` bytes and copy them to the output."""
        data = self._stream.read(size)
        if data:
            self._output.write(data)
        return data

    def readline(self):
        """Read one line and copy it to the output."""
        data = self._stream.readline()
        if data:
            self._output.write(data)
        return data

    def close(self):
        """Close the wrapped stream."""
        self._stream.close()