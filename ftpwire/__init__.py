"""FTP client with directory listing parsers and a remote tree walker."""

__version__ = "0.1.0"

__all__ = [
    "client",
    "debug",
    "entry",
    "errors",
    "options",
    "parse",
    "protocol",
    "scanner",
    "status",
    "walker",
]