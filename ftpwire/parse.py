"""Parsing of the directory listing formats sent by FTP servers."""

import re
from datetime import datetime, timedelta, timezone

from .entry import Entry, EntryType
from .errors import (
    UnknownEntryTypeError,
    UnsupportedListDateError,
    UnsupportedListLineError,
)
from .scanner import FieldScanner

_MAX_UINT64 = 2**64 - 1
_SIZE_TEXT = re.compile(r"[0-9A-Za-z_]+")
_DECIMAL = re.compile(r"[0-9]+")

_MONTHS = {
    name: number
    for number, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun",
         "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}

_MODIFY = re.compile(r"(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})(?:[.,](\d+))?")
_CLOCK = re.compile(r"(\d\d?):(\d\d)")
_DAY = re.compile(r"\d\d?")
_YEAR = re.compile(r"\d{4}")

_SPACES = r"[ \t\n\v\f\r]+"
_DIR_TIME_FORMATS = (
    (17, re.compile(
        r"(?P<month>\d\d)-(?P<day>\d\d)-(?P<yy>\d\d)" + _SPACES
        + r"(?P<hour>\d\d):(?P<minute>\d\d)(?P<ampm>AM|PM)"
    )),
    (17, re.compile(
        r"(?P<year>\d{4})-(?P<month>\d\d)-(?P<day>\d\d)" + _SPACES
        + r"(?P<hour>\d\d?):(?P<minute>\d\d)"
    )),
    (19, re.compile(
        r"(?P<month>\d\d)-(?P<day>\d\d)-(?P<year>\d{4})" + _SPACES
        + r"(?P<hour>\d\d):(?P<minute>\d\d)(?P<ampm>AM|PM)"
    )),
    (17, re.compile(
        r"(?P<month>\d\d)-(?P<day>\d\d)-(?P<year>\d{4})" + _SPACES
        + r"(?P<hour>\d\d?):(?P<minute>\d\d)"
    )),
)


def parse_size(text):
    """Parse an unsigned 64-bit size, honouring 0x, 0o, 0b and leading-zero octal."""
    if not _SIZE_TEXT.fullmatch(text):
        raise ValueError(f"invalid size {text!r}")
    try:
        if len(text) > 1 and text[0] == "0" and (text[1].isdigit() or text[1] == "_"):
            value = int(text, 8)
        else:
            value = int(text, 0)
    except ValueError:
        raise ValueError(f"invalid size {text!r}") from None
    if value > _MAX_UINT64:
        raise ValueError(f"size {text!r} out of range")
    return value


def _parse_decimal_size(text):
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid size {text!r}")
    value = int(text)
    if value > _MAX_UINT64:
        raise ValueError(f"size {text!r} out of range")
    return value


def _add_date(moment, years, months):
    """Shift by whole years and months, letting day overflow roll into the next month."""
    month_index = moment.month - 1 + months
    year = moment.year + years + month_index // 12
    month = month_index % 12 + 1
    return moment.replace(year=year, month=month, day=1) + timedelta(days=moment.day - 1)


def _parse_modify_time(value, tz):
    match = _MODIFY.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid modification time {value!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int((fraction + "000000")[:6])
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)


def _ls_datetime(day, month, year, hour, minute, tz):
    if not _DAY.fullmatch(day):
        raise ValueError(f"invalid day {day!r}")
    month_number = _MONTHS.get(month.lower()) if len(month) == 3 else None
    if month_number is None:
        raise ValueError(f"invalid month {month!r}")
    return datetime(year, month_number, int(day), hour, minute, tzinfo=tz)


def parse_ls_time(fields, now, tz):
    """Parse the month, day and year-or-time fields of an ls-style line.

    Times without a year are placed in the year of ``now``, or the year before
    when that would put them six months or more after ``now``.
    """
    month, day, last = fields[0], fields[1], fields[2]
    if ":" in last:
        clock = _CLOCK.fullmatch(last)
        if clock is None:
            raise ValueError(f"invalid time {last!r}")
        when = _ls_datetime(day, month, now.year, int(clock.group(1)), int(clock.group(2)), tz)
        if not when < _add_date(now, 0, 6):
            when = _add_date(when, -1, 0)
        return when
    if len(last) != 4:
        raise UnsupportedListDateError()
    if not _YEAR.fullmatch(last):
        raise ValueError(f"invalid year {last!r}")
    return _ls_datetime(day, month, int(last), 0, 0, tz)


def parse_rfc3659_list_line(line, now, tz):
    """Parse a machine-readable listing line as defined in RFC 3659."""
    return parse_next_rfc3659_list_line(line, tz, Entry())


def parse_next_rfc3659_list_line(line, tz, entry):
    """Merge the facts of one RFC 3659 line into ``entry`` and return it.

    Every line merged into the same entry must name the same path.
    """
    semicolon = line.find(";")
    space = line.find(" ")
    if semicolon < 0 or semicolon > space:
        raise UnsupportedListLineError()

    name = line[space + 1:]
    if entry.name == "":
        entry.name = name
    elif entry.name != name:
        raise UnsupportedListLineError()

    for fact in line[:space - 1].split(";"):
        equals = fact.find("=")
        if equals < 1:
            raise UnsupportedListLineError()
        key = fact[:equals].lower()
        value = fact[equals + 1:]
        if key == "modify":
            entry.time = _parse_modify_time(value, tz)
        elif key == "type":
            if value in ("dir", "cdir", "pdir"):
                entry.type = EntryType.FOLDER
            elif value == "file":
                entry.type = EntryType.FILE
        elif key == "size":
            entry.size = parse_size(value)
    return entry


def parse_ls_list_line(line, now, tz):
    """Parse a line in the style of the output of ``ls -l``."""
    first_space = line.find(" ")
    if not (first_space == 10 or (first_space == 11 and line[10] == "+")):
        raise UnsupportedListLineError()

    scanner = FieldScanner(line)
    fields = scanner.next_fields(6)
    if len(fields) < 6:
        raise UnsupportedListLineError()

    if fields[1] == "folder" and fields[2] == "0":
        return Entry(
            name=scanner.remaining(),
            type=EntryType.FOLDER,
            time=parse_ls_time(fields[3:6], now, tz),
        )

    if fields[1] == "0":
        fields.append(scanner.next())
        name = scanner.remaining()
        try:
            size = parse_size(fields[2])
        except ValueError as error:
            raise UnsupportedListLineError() from error
        return Entry(
            name=name,
            type=EntryType.FILE,
            size=size,
            time=parse_ls_time(fields[4:7], now, tz),
        )

    fields.extend(scanner.next_fields(2))
    if len(fields) < 8:
        raise UnsupportedListLineError()

    entry = Entry(name=scanner.remaining())
    kind = fields[0][0]
    if kind == "-":
        entry.type = EntryType.FILE
        entry.size = parse_size(fields[4])
    elif kind == "d":
        entry.type = EntryType.FOLDER
    elif kind == "l":
        entry.type = EntryType.LINK
        arrow = entry.name.find(" -> ")
        if arrow > 0:
            entry.name, entry.target = entry.name[:arrow], entry.name[arrow + 4:]
    else:
        raise UnknownEntryTypeError()

    entry.time = parse_ls_time(fields[5:8], now, tz)
    return entry


def _parse_dir_time(text, pattern, tz):
    match = pattern.fullmatch(text)
    if match is None:
        return None
    parts = match.groupdict()
    if parts.get("yy") is not None:
        short_year = int(parts["yy"])
        year = short_year + (1900 if short_year >= 69 else 2000)
    else:
        year = int(parts["year"])
    hour = int(parts["hour"])
    half = parts.get("ampm")
    if half is not None:
        if hour > 12:
            return None
        if half == "PM" and hour < 12:
            hour += 12
        elif half == "AM" and hour == 12:
            hour = 0
    try:
        return datetime(year, int(parts["month"]), int(parts["day"]), hour,
                        int(parts["minute"]), tzinfo=tz)
    except ValueError:
        return None


def parse_dir_list_line(line, now, tz):
    """Parse a line in the style of the MS-DOS ``DIR`` command."""
    entry = Entry()
    failed = False
    for width, pattern in _DIR_TIME_FORMATS:
        if len(line) > width:
            when = _parse_dir_time(line[:width], pattern, tz)
            if when is not None:
                entry.time = when
                line = line[width:]
                failed = False
                break
            failed = True
    if failed:
        raise UnsupportedListLineError()

    line = line.lstrip(" ")
    if line.startswith("<DIR>"):
        entry.type = EntryType.FOLDER
        line = line[len("<DIR>"):]
    else:
        space = line.find(" ")
        if space == -1:
            raise UnsupportedListLineError()
        try:
            entry.size = _parse_decimal_size(line[:space])
        except ValueError as error:
            raise UnsupportedListLineError() from error
        entry.type = EntryType.FILE
        line = line[space:]

    entry.name = line.lstrip(" ")
    return entry


def parse_hosted_ftp_line(line, now, tz):
    """Parse an ls-style line whose link count is always 0."""
    if line.find(" ") != 10:
        raise UnsupportedListLineError()
    scanner = FieldScanner(line)
    fields = scanner.next_fields(2)
    if len(fields) < 2 or fields[1] != "0":
        raise UnsupportedListLineError()
    return parse_ls_list_line(f"{fields[0]} 1 {scanner.remaining()}", now, tz)


_LIST_LINE_PARSERS = (
    parse_rfc3659_list_line,
    parse_ls_list_line,
    parse_dir_list_line,
    parse_hosted_ftp_line,
)


def parse_list_line(line, now, tz=timezone.utc):
    """Parse a LIST line in whichever of the known formats it is written."""
    for parser in _LIST_LINE_PARSERS:
        try:
            return parser(line, now, tz)
        except UnsupportedListLineError:
            continue
    raise UnsupportedListLineError()