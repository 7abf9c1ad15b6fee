"""An FTP client as described in RFC 959."""

import ipaddress
import socket
from datetime import datetime, timezone

from .entry import EntryType, TransferType
from .errors import ErrorCollector, FTPError, ProtocolError
from .options import DEFAULT_DIAL_TIMEOUT, DialOptions
from .parse import parse_list_line, parse_next_rfc3659_list_line, parse_rfc3659_list_line
from .protocol import ControlConnection
from .status import (
    STATUS_ABOUT_TO_SEND,
    STATUS_ALREADY_OPEN,
    STATUS_AUTH_OK,
    STATUS_BAD_ARGUMENTS,
    STATUS_CLOSING_DATA_CONNECTION,
    STATUS_COMMAND_NOT_IMPLEMENTED,
    STATUS_COMMAND_OK,
    STATUS_EXTENDED_PASSIVE_MODE,
    STATUS_FILE,
    STATUS_LOGGED_IN,
    STATUS_NOT_IMPLEMENTED,
    STATUS_NOT_IMPLEMENTED_PARAMETER,
    STATUS_PASSIVE_MODE,
    STATUS_PATH_CREATED,
    STATUS_READY,
    STATUS_REQUEST_FILE_PENDING,
    STATUS_REQUESTED_FILE_ACTION_OK,
    STATUS_SYSTEM,
    STATUS_USER_OK,
    status_text,
)
from .walker import Walker

_TIME_FORMAT = "%Y%m%d%H%M%S"
_COPY_CHUNK = 32 * 1024
_PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(net)
    for net in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16", "fc00::/7")
)


def _split_address(address):
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        port = rest.lstrip(":")
    else:
        host, _, port = address.rpartition(":")
    if not port.isdigit():
        raise ValueError(f"invalid address {address!r}")
    return host, int(port)


def _ip(value):
    ip = ipaddress.ip_address(value) if not isinstance(value, ipaddress._BaseAddress) else value
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def _is_private(ip):
    return any(ip.version == net.version and ip in net for net in _PRIVATE_NETWORKS)


def is_bogus_data_ip(cmd_ip, data_ip):
    """Tell whether a PASV address is unlikely to be reachable from the control address."""
    cmd, data = _ip(cmd_ip), _ip(data_ip)
    return (
        data.is_multicast
        or _is_private(cmd) != _is_private(data)
        or cmd.is_loopback != data.is_loopback
    )


def dial(address, options=None):
    """Connect to ``address`` ("host:port") and read the server greeting."""
    options = options if options is not None else DialOptions()
    hostname, port = _split_address(address)

    if options.dial_func is not None:
        sock = options.dial_func((hostname, port))
    else:
        timeout = options.timeout if options.timeout else DEFAULT_DIAL_TIMEOUT
        sock = socket.create_connection(
            (hostname, port), timeout=timeout, source_address=options.source_address
        )
        sock.settimeout(None)
        if options.tls_context is not None and not options.explicit_tls:
            sock = options.tls_context.wrap_socket(sock, server_hostname=hostname)

    try:
        host = sock.getpeername()[0]
    except (AttributeError, OSError):
        host = hostname

    conn = ServerConn(options, sock, host, hostname)
    try:
        conn._control.read_response(STATUS_READY)
        if options.explicit_tls:
            conn._cmd(STATUS_AUTH_OK, "AUTH TLS")
            conn._sock = options.tls_context.wrap_socket(sock, server_hostname=hostname)
            conn._control = ControlConnection(options.wrap_connection(conn._sock))
    except BaseException:
        try:
            conn.quit()
        except Exception:  # noqa: BLE001 - the original failure matters
            pass
        raise
    return conn


def connect(address):
    """Connect to ``address`` with default options."""
    return dial(address)


def dial_timeout(address, timeout):
    """Connect to ``address``, allowing ``timeout`` seconds for the connection."""
    return dial(address, DialOptions(timeout=timeout))


class Response:
    """A data connection carrying a file being downloaded."""

    def __init__(self, sock, server):
        self._sock = sock
        self._file = sock.makefile("rb")
        self._server = server
        self._closed = False

    def read(self, size=-1):
        """Read up to ``size`` bytes, or everything when ``size`` is negative."""
        return self._file.read(size)

    def readline(self):
        """Read one line, including its terminator."""
        return self._file.readline()

    def close(self):
        """Close the data connection and read the end-of-transfer reply, once."""
        if self._closed:
            return
        errors = ErrorCollector()
        errors.call(self._file.close)
        errors.call(self._sock.close)
        errors.call(self._server._check_data_shut)
        self._closed = True
        errors.raise_if_any()

    def set_timeout(self, timeout):
        """Set the timeout, in seconds, for reads on the data connection."""
        self._sock.settimeout(timeout)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class ServerConn:
    """A connection to an FTP server; one data transfer at a time, not thread-safe."""

    def __init__(self, options, sock, host, hostname):
        self._options = options
        self._sock = sock
        self._control = ControlConnection(options.wrap_connection(sock))
        self._host = host
        self._hostname = hostname
        self.features = {}
        self._skip_epsv = False
        self._mlst_supported = False
        self._mfmt_supported = False
        self._mdtm_supported = False
        self._mdtm_can_write = False
        self._use_pret = False

    @property
    def options(self):
        return self._options

    def _cmd(self, expected, line):
        self._control.send_command(line)
        return self._control.read_response(expected)

    def login(self, user, password):
        """Authenticate, probe the server features and set binary mode."""
        code, message = self._cmd(None, f"USER {user}")
        if code == STATUS_USER_OK:
            self._cmd(STATUS_LOGGED_IN, f"PASS {password}")
        elif code != STATUS_LOGGED_IN:
            raise FTPError(message)

        self._feat()
        self._mlst_supported = "MLST" in self.features and not self._options.disable_mlsd
        self._use_pret = "PRET" in self.features
        self._mfmt_supported = "MFMT" in self.features
        self._mdtm_supported = "MDTM" in self.features
        self._mdtm_can_write = self._mdtm_supported and self._options.writing_mdtm

        self.type(TransferType.BINARY)

        utf8_error = None
        if not self._options.disable_utf8:
            try:
                self._set_utf8()
            except FTPError as error:
                utf8_error = error

        if self._options.tls_context is not None:
            self._cmd(STATUS_COMMAND_OK, "PBSZ 0")
            self._cmd(STATUS_COMMAND_OK, "PROT P")
            return
        if utf8_error is not None:
            raise utf8_error

    def _feat(self):
        code, message = self._cmd(None, "FEAT")
        if code != STATUS_SYSTEM:
            return
        for line in message.split("\n"):
            if not line.startswith(" "):
                continue
            command, _, description = line.strip().partition(" ")
            self.features[command] = description

    def _set_utf8(self):
        if "UTF8" not in self.features:
            return
        code, message = self._cmd(None, "OPTS UTF8 ON")
        if code in (
            STATUS_BAD_ARGUMENTS,
            STATUS_NOT_IMPLEMENTED_PARAMETER,
            STATUS_COMMAND_NOT_IMPLEMENTED,
        ):
            return
        if code != STATUS_COMMAND_OK:
            raise FTPError(message)

    def _epsv(self):
        _, line = self._cmd(STATUS_EXTENDED_PASSIVE_MODE, "EPSV")
        start = line.find("|||")
        end = line.rfind("|")
        if start == -1 or end == -1:
            raise FTPError("invalid EPSV response format")
        return int(line[start + 3:end])

    def _pasv(self):
        _, line = self._cmd(STATUS_PASSIVE_MODE, "PASV")
        start = line.find("(")
        end = line.rfind(")")
        if start == -1 or end == -1:
            raise FTPError("invalid PASV response format")
        parts = line[start + 1:end].split(",")
        if len(parts) < 6:
            raise FTPError("invalid PASV response format")
        port = int(parts[4]) * 256 + int(parts[5])
        host = ".".join(parts[:4])
        if self._host != host:
            try:
                if is_bogus_data_ip(self._host, host):
                    return self._host, port
            except ValueError:
                pass
        return host, port

    def _data_conn_port(self):
        if not self._options.disable_epsv and not self._skip_epsv:
            try:
                return self._host, self._epsv()
            except (FTPError, ValueError, OSError):
                self._skip_epsv = True
        return self._pasv()

    def _open_data_conn(self):
        address = self._data_conn_port()
        if self._options.dial_func is not None:
            return self._options.dial_func(address)
        sock = socket.create_connection(
            address, timeout=self._options.timeout, source_address=self._options.source_address
        )
        if self._options.tls_context is not None:
            # The handshake is left to the first read or write; some servers
            # hang when it is done straight away.
            sock = self._options.tls_context.wrap_socket(
                sock, server_hostname=self._hostname, do_handshake_on_connect=False
            )
        return sock

    def _cmd_data_conn_from(self, offset, command):
        if self._use_pret:
            self._cmd(None, f"PRET {command}")
        conn = self._open_data_conn()
        try:
            if offset:
                self._cmd(STATUS_REQUEST_FILE_PENDING, f"REST {offset}")
            self._control.send_command(command)
            code, message = self._control.read_response(None)
            if code not in (STATUS_ALREADY_OPEN, STATUS_ABOUT_TO_SEND):
                raise ProtocolError(code, message)
        except BaseException:
            conn.close()
            raise
        return conn

    def _check_data_shut(self):
        if self._options.shut_timeout:
            self._sock.settimeout(self._options.shut_timeout)
        self._control.read_response(STATUS_CLOSING_DATA_CONNECTION)

    def type(self, transfer_type):
        """Switch the representation type used for transfers."""
        self._cmd(STATUS_COMMAND_OK, f"TYPE {TransferType(transfer_type).value}")

    def _data_lines(self, command):
        response = Response(self._cmd_data_conn_from(0, command), self)
        stream = self._options.wrap_stream(response)
        errors = ErrorCollector()
        lines = []
        try:
            while raw := stream.readline():
                lines.append(raw.rstrip(b"\n").rstrip(b"\r").decode("utf-8", "surrogateescape"))
        except Exception as error:  # noqa: BLE001 - the reply must still be read
            errors.add(error)
        errors.call(response.close)
        errors.raise_if_any()
        return lines

    def name_list(self, path=""):
        """Return the names listed by NLST."""
        return self._data_lines(f"NLST {path}" if path else "NLST")

    def list(self, path=""):
        """Return the entries of a directory, skipping lines that cannot be parsed."""
        if self._mlst_supported and not self._options.force_list_hidden:
            command, parser = "MLSD", parse_rfc3659_list_line
        else:
            command = "LIST -a" if self._options.force_list_hidden else "LIST"
            parser = parse_list_line
        lines = self._data_lines(f"{command} {path}" if path else command)
        location = self._options.location
        now = datetime.now(location)
        entries = []
        for line in lines:
            try:
                entries.append(parser(line, now, location))
            except (FTPError, ValueError):
                continue
        return entries

    def get_entry(self, path=""):
        """Describe one path, or the current directory, with MLST."""
        if not self._mlst_supported:
            raise ProtocolError(STATUS_NOT_IMPLEMENTED, status_text(STATUS_NOT_IMPLEMENTED))
        _, message = self._cmd(STATUS_REQUESTED_FILE_ACTION_OK, f"MLST {path}" if path else "MLST")
        lines = message.split("\n")
        if len(lines) < 3:
            raise FTPError("invalid response")
        from .entry import Entry

        entry = Entry()
        for line in lines[1:-1]:
            if line.startswith(" "):
                line = line[1:]
            if not line:
                continue
            entry = parse_next_rfc3659_list_line(line, self._options.location, entry)
        return entry

    def is_time_precise_in_list(self):
        """Tell whether listings carry times precise to the second."""
        return self._mlst_supported

    def change_dir(self, path):
        self._cmd(STATUS_REQUESTED_FILE_ACTION_OK, f"CWD {path}")

    def change_dir_to_parent(self):
        self._cmd(STATUS_REQUESTED_FILE_ACTION_OK, "CDUP")

    def current_dir(self):
        """Return the current directory reported by PWD."""
        _, message = self._cmd(STATUS_PATH_CREATED, "PWD")
        start = message.find('"')
        end = message.rfind('"')
        if start == -1 or end == -1:
            raise FTPError("unsupported PWD response format")
        return message[start + 1:end]

    def file_size(self, path):
        """Return the size of a file as reported by SIZE."""
        _, message = self._cmd(STATUS_FILE, f"SIZE {path}")
        return int(message)

    def get_time(self, path):
        """Return the modification time of a file, in UTC."""
        if not self._mdtm_supported:
            raise FTPError("GetTime is not supported")
        _, message = self._cmd(STATUS_FILE, f"MDTM {path}")
        return datetime.strptime(message, _TIME_FORMAT).replace(tzinfo=timezone.utc)

    def is_get_time_supported(self):
        return self._mdtm_supported

    def set_time(self, path, when):
        """Set the modification time of a file with MFMT, or MDTM where allowed."""
        stamp = when.astimezone(timezone.utc).strftime(_TIME_FORMAT)
        if self._mfmt_supported:
            self._cmd(STATUS_FILE, f"MFMT {stamp} {path}")
        elif self._mdtm_can_write:
            self._cmd(STATUS_FILE, f"MDTM {stamp} {path}")
        else:
            raise FTPError("SetTime is not supported")

    def is_set_time_supported(self):
        return self._mfmt_supported or self._mdtm_can_write

    def retr(self, path):
        """Start downloading a file; the returned Response must be closed."""
        return self.retr_from(path, 0)

    def retr_from(self, path, offset):
        """Start downloading a file from byte ``offset``."""
        return Response(self._cmd_data_conn_from(offset, f"RETR {path}"), self)

    def stor(self, path, reader):
        """Upload the content of the binary stream ``reader`` to ``path``."""
        self.stor_from(path, reader, 0)

    def _upload(self, conn, reader):
        errors = ErrorCollector()
        sent = 0
        try:
            while chunk := reader.read(_COPY_CHUNK):
                conn.sendall(chunk)
                sent += len(chunk)
        except Exception as error:  # noqa: BLE001 - the reply must still be read
            errors.add(error)
        else:
            handshake = getattr(conn, "do_handshake", None)
            if sent == 0 and handshake is not None:
                errors.call(handshake)
        errors.call(conn.close)
        errors.call(self._check_data_shut)
        errors.raise_if_any()

    def stor_from(self, path, reader, offset):
        """Upload ``reader`` to ``path``, writing from byte ``offset``."""
        self._upload(self._cmd_data_conn_from(offset, f"STOR {path}"), reader)

    def append(self, path, reader):
        """Append the content of ``reader`` to ``path``, creating it if needed."""
        self._upload(self._cmd_data_conn_from(0, f"APPE {path}"), reader)

    def rename(self, source, target):
        self._cmd(STATUS_REQUEST_FILE_PENDING, f"RNFR {source}")
        self._cmd(STATUS_REQUESTED_FILE_ACTION_OK, f"RNTO {target}")

    def delete(self, path):
        self._cmd(STATUS_REQUESTED_FILE_ACTION_OK, f"DELE {path}")

    def remove_dir_recur(self, path):
        """Delete a directory and everything in it."""
        self.change_dir(path)
        current = self.current_dir()
        for entry in self.list(current):
            if entry.name in ("..", "."):
                continue
            if entry.type is EntryType.FOLDER:
                self.remove_dir_recur(f"{current}/{entry.name}")
            else:
                self.delete(entry.name)
        self.change_dir_to_parent()
        self.remove_dir(current)

    def make_dir(self, path):
        self._cmd(STATUS_PATH_CREATED, f"MKD {path}")

    def remove_dir(self, path):
        self._cmd(STATUS_REQUESTED_FILE_ACTION_OK, f"RMD {path}")

    def change_permission(self, permissions, path):
        self._cmd(STATUS_COMMAND_OK, f"SITE CHMOD {permissions} {path}")

    def walk(self, root):
        """Return a Walker over the tree below ``root``."""
        return Walker(self, root)

    def noop(self):
        self._cmd(STATUS_COMMAND_OK, "NOOP")

    def logout(self):
        """Log the current user out with REIN."""
        self._cmd(STATUS_READY, "REIN")

    def quit(self):
        """Send QUIT and close the control connection."""
        errors = ErrorCollector()
        errors.call(self._control.send_command, "QUIT")
        errors.call(self._control.close)
        errors.raise_if_any()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.quit()