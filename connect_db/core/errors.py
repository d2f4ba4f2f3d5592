"""Exception taxonomy for the connect-db pipeline.

Every error is terminal: the CLI prints the message and exits non-zero.
Messages never contain secret values.
"""

from pathlib import Path

from connect_db.utils.redaction import redact_url


class ConnectDbError(Exception):
    """Base exception for connect-db failures."""

    pass


class ConfigReadError(ConnectDbError):
    """Raised when a secret file cannot be opened or read."""

    def __init__(self, path: Path, reason: str, *, kind: str = "config") -> None:
        self.path = path
        self.reason = reason
        self.kind = kind
        super().__init__(f"Failed to read {kind} file: {path} ({reason})")


class ConfigParseError(ConnectDbError):
    """
    Raised when a secret file is not well-formed JSON of the expected shape.

    Covers invalid JSON, wrong field types and missing required fields.
    """

    def __init__(self, path: Path, reason: str, *, kind: str = "config") -> None:
        self.path = path
        self.reason = reason
        self.kind = kind
        super().__init__(f"Failed to parse {kind} file: {path} ({reason})")


class UrlFormatError(ConnectDbError):
    """
    Raised when a resolved connection URL violates the fixed grammar.

    ``reason`` names the violated split, e.g. ``"missing @ separator"``.
    ``url`` holds the offending URL with its credentials masked.
    """

    def __init__(self, reason: str, url: str | None = None) -> None:
        self.reason = reason
        self.url = redact_url(url) if url is not None else None
        message = f"Invalid URL format: {reason}"
        if self.url:
            message = f"{message} ({self.url})"
        super().__init__(message)


class ExecError(ConnectDbError):
    """Raised when the OS could not replace the process with the client binary."""

    def __init__(self, binary: str, os_error: OSError) -> None:
        self.binary = binary
        self.os_error = os_error
        super().__init__(f"Failed to exec {binary}: {os_error}")
