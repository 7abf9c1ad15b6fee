"""Settings used when connecting to an FTP server."""

from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Any, Callable

from .debug import DebugConnection, DebugStream

DEFAULT_DIAL_TIMEOUT = 30.0
"""Seconds allowed for establishing the control connection by default."""


@dataclass
class DialOptions:
    """Options controlling how a connection is made and used.

    ``timeout`` bounds each connection attempt in seconds. ``shut_timeout``,
    when set, bounds the wait for the end-of-transfer reply. ``dial_func``
    takes a ``(host, port)`` pair and returns a connected socket; it is used
    for control and data connections alike. ``tls_context`` is an
    ``ssl.SSLContext``: with ``explicit_tls`` the control connection is
    upgraded with AUTH TLS, otherwise TLS is used from the start.
    ``location`` is the time zone of the dates the server lists.
    ``debug_output`` receives a copy of all traffic, as bytes.
    """

    timeout: float | None = None
    shut_timeout: float | None = None
    dial_func: Callable[[tuple[str, int]], Any] | None = None
    source_address: tuple[str, int] | None = None
    tls_context: Any = None
    explicit_tls: bool = False
    disable_epsv: bool = False
    disable_utf8: bool = False
    disable_mlsd: bool = False
    writing_mdtm: bool = False
    force_list_hidden: bool = False
    location: tzinfo | None = field(default=timezone.utc)
    debug_output: Any = None

    def __post_init__(self):
        if self.location is None:
            self.location = timezone.utc
        if self.explicit_tls and self.tls_context is None:
            raise ValueError("explicit TLS requires a TLS context")

    def wrap_connection(self, conn):
        """Return ``conn``, wrapped to copy its traffic when debugging."""
        if self.debug_output is None:
            return conn
        return DebugConnection(conn, self.debug_output)

    def wrap_stream(self, stream):
        """Return ``stream``, wrapped to copy what is read when debugging."""
        if self.debug_output is None:
            return stream
        return DebugStream(stream, self.debug_output)