# ftpwire

A client library for FTP servers (RFC 959). It supports the extensions
that real servers use: FEAT, EPSV/PASV, MLSD/MLST (RFC 3659), MDTM/MFMT,
REST offsets, PRET, UTF-8 and TLS.

It also parses the directory listing formats that FTP servers produce:
Unix `ls -l` output, MS-DOS `DIR` output, RFC 3659 machine listings and
a few server-specific variants.

Only the standard library is needed.

## Connecting and logging in

```python
from ftpwire.client import connect

password = "password"

with connect("ftp.example.com:21") as conn:
    conn.login("anonymous", password)
    print(conn.current_dir())
```

Addresses are written `"host:port"`, or `"[ipv6]:port"`. Leaving the
`with` block sends `QUIT` and closes the control connection;
`conn.quit()` does the same explicitly.

`login` sends `USER` and, when asked for one, `PASS`. It then reads the
server's `FEAT` reply into `conn.features` (a dict of feature name to
description), switches to binary mode, turns on UTF-8 when the server
offers it, and, with TLS, sends `PBSZ 0` and `PROT P`.

`dial_timeout(address, timeout)` connects with a limit, in seconds, on
how long the connection may take (30 seconds by default). For finer
control, `dial(address, options)` takes a `ftpwire.options.DialOptions`:

```python
from ftpwire.client import dial
from ftpwire.options import DialOptions

conn = dial("ftp.example.com:21", DialOptions(timeout=10, disable_epsv=True))
```

| Field | Meaning |
| --- | --- |
| `timeout` | seconds allowed for each connection attempt |
| `shut_timeout` | seconds allowed for the end-of-transfer reply |
| `dial_func` | callable taking a `(host, port)` pair and returning a connected socket, used for control and data connections |
| `source_address` | local `(host, port)` to connect from |
| `tls_context` | an `ssl.SSLContext`; TLS from the start unless `explicit_tls` is set |
| `explicit_tls` | upgrade the control connection with `AUTH TLS` (requires `tls_context`, else `ValueError`) |
| `disable_epsv` | always use `PASV` |
| `disable_utf8` | do not send `OPTS UTF8 ON` |
| `disable_mlsd` | do not use `MLSD`/`MLST` even when advertised |
| `writing_mdtm` | allow `MDTM` to set file times (for servers without `MFMT`) |
| `force_list_hidden` | list directories with `LIST -a` |
| `location` | time zone of dates in listings (UTC by default) |
| `debug_output` | binary writable that receives a copy of the traffic sent and received |

EPSV is tried first; after it fails once, PASV is used for the rest of the
session. A PASV address that looks unreachable from the control
connection's address (see `ftpwire.client.is_bogus_data_ip`) is replaced
by the control connection's address.

## Listing directories

```python
for entry in conn.list("/pub"):
    print(entry.name, entry.type, entry.size, entry.time)

names = conn.name_list("/pub")
```

`list` uses `MLSD` when the server advertises `MLST`, and `LIST`
otherwise; lines that cannot be parsed are skipped.
`is_time_precise_in_list()` tells whether `MLSD` is in use.
`get_entry(path)` describes a single path over the control connection
with `MLST`, and raises `ProtocolError` (code 502) when `MLST` is not
available.

Each result is a `ftpwire.entry.Entry` with `name`, `target` (of a
symbolic link), `type`, `size` and `time` fields. `type` is an
`EntryType` — `FILE`, `FOLDER` or `LINK` — whose `str()` is `"file"`,
`"folder"` or `"link"`.

## Downloading and uploading

```python
with conn.retr("pub/readme.txt") as response:
    data = response.read(-1)

with open("local.bin", "rb") as source:
    conn.stor("incoming/local.bin", source)
```

`retr_from(path, offset)` and `stor_from(path, reader, offset)` start at a
byte offset (with `REST`); `append(path, reader)` appends to a file,
creating it if needed. Uploads read binary chunks from any object with a
`read` method.

A `Response` offers `read(size)`, `readline()` and `set_timeout(seconds)`.
It must be closed, or used as a context manager, so that the server's
end-of-transfer reply is read before the next command; closing twice is
harmless.

## Other operations

| Method | FTP command |
| --- | --- |
| `change_dir(path)` / `change_dir_to_parent()` | `CWD` / `CDUP` |
| `current_dir()` | `PWD` |
| `make_dir(path)` / `remove_dir(path)` | `MKD` / `RMD` |
| `remove_dir_recur(path)` | recursive delete |
| `delete(path)` | `DELE` |
| `rename(source, target)` | `RNFR` + `RNTO` |
| `file_size(path)` | `SIZE` |
| `get_time(path)` / `set_time(path, when)` | `MDTM` / `MFMT` (or `MDTM` with `writing_mdtm`) |
| `type(transfer_type)` | `TYPE` (`TransferType.BINARY` or `TransferType.ASCII`) |
| `change_permission(permissions, path)` | `SITE CHMOD` |
| `noop()` / `logout()` | `NOOP` / `REIN` |

`is_get_time_supported()` and `is_set_time_supported()` report in advance
whether reading and writing modification times will work; otherwise
`get_time` and `set_time` raise `FTPError`. `get_time` returns a UTC
`datetime`.

## Walking a remote tree

```python
walker = conn.walk("/pub")
for path, entry in walker:
    print(path, entry.type)
    if entry.name == "archive":
        walker.skip_dir()
```

The walk is depth first. Iterating yields `(path, entry)` pairs and
raises the listing error, if any, that ended the walk. The same can be
done step by step with `next()`, `path()`, `stat()` and `err()`.

## Parsing listing lines yourself

```python
from datetime import datetime, timezone
from ftpwire.parse import parse_list_line

entry = parse_list_line(
    "drwxr-xr-x    3 110      1002            3 Dec 02  2009 pub",
    datetime.now(timezone.utc),
    timezone.utc,
)
print(entry.name, entry.type)  # pub folder
```

Times without a year are placed in the year of `now`, or the year before
when they would otherwise fall six months or more after `now`. Lines that
no parser recognises raise `UnsupportedListLineError`; an unreadable year
raises `UnsupportedListDateError` and an unknown entry type
`UnknownEntryTypeError`. The single-format parsers (`parse_ls_list_line`,
`parse_dir_list_line`, `parse_rfc3659_list_line`, `parse_hosted_ftp_line`)
are available as well.

## Errors

All errors of this package derive from `ftpwire.errors.FTPError`. Replies
with an unexpected status code raise `ProtocolError`, which carries the
server's `code` and `message`. `ftpwire.status.status_text(code)` gives
the standard text for a status code. When several steps of one operation
fail (for example the data transfer and the closing reply), they are
raised together as a `MultiError` whose `errors` lists them.

## What it does not do

This is a client library only: there is no FTP server and no
command-line program. Data connections are always passive (EPSV or PASV);
active mode (`PORT`/`EPRT`) is not supported.