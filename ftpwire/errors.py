"""Exceptions raised by the FTP client."""


class FTPError(Exception):
    """Base class for errors raised by this package."""

    message = "FTP error"

    def __str__(self):
        if self.args:
            return str(self.args[0])
        return self.message


class ProtocolError(FTPError):
    """An unexpected reply from the server, carrying its code and text."""

    def __init__(self, code, message):
        super().__init__(f"{code} {message}")
        self.code = code
        self.message = message


class MultiError(FTPError):
    """Several errors that happened during one operation."""

    def __init__(self, errors):
        self.errors = list(errors)
        if len(self.errors) == 1:
            text = f"1 error occurred:\n\t* {self.errors[0]}\n\n"
        else:
            points = "\n\t".join(f"* {error}" for error in self.errors)
            text = f"{len(self.errors)} errors occurred:\n\t{points}\n\n"
        super().__init__(text)


class ErrorCollector:
    """Gathers errors from steps that must all run, raising them at the end."""

    def __init__(self):
        self.errors = []

    def add(self, error):
        """Record an error."""
        self.errors.append(error)

    def call(self, func, *args):
        """Call ``func``; record any exception it raises and return its result."""
        try:
            return func(*args)
        except Exception as error:  # noqa: BLE001 - every failure is collected
            self.add(error)
            return None

    def raise_if_any(self):
        """Raise the recorded error, or a MultiError if there are several."""
        if not self.errors:
            return
        if len(self.errors) == 1:
            raise self.errors[0]
        raise MultiError(self.errors) from self.errors[0]


class UnsupportedListLineError(FTPError):
    """A directory listing line in an unknown format."""

    message = "unsupported LIST line"


class UnsupportedListDateError(FTPError):
    """A directory listing line whose date cannot be read."""

    message = "unsupported LIST date"


class UnknownEntryTypeError(FTPError):
    """A directory listing line with an unknown entry type."""

    message = "unknown entry type"