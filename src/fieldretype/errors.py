"""Error types raised by the selection, rewrite and printing steps."""

from __future__ import annotations


class FieldRetypeError(Exception):
    """Base class for every error the tool reports to the user."""


class ConfigurationError(FieldRetypeError):
    """Raised when the command-line options are missing or contradict each other."""


class ParseError(FieldRetypeError):
    """Raised when user input or the Go source cannot be parsed."""


class LineParseError(ParseError):
    """Raised when a ``--line`` value is not ``N`` or ``N,M``."""


class SourceParseError(ParseError):
    """Raised when the Go source contains syntax errors."""


class NotFoundError(FieldRetypeError):
    """Raised when the requested struct or field is not declared in the file."""


class RecordNotFoundError(NotFoundError):
    def __init__(self, record: str) -> None:
        super().__init__("struct name does not exist")
        self.record = record


class FieldNotFoundError(NotFoundError):
    def __init__(self, record: str, field: str) -> None:
        super().__init__(f'struct "{record}" doesn\'t have field name "{field}"')
        self.record = record
        self.field = field


class InvalidRangeError(FieldRetypeError):
    """Raised when a line range starts after it ends."""


class FormatError(FieldRetypeError):
    """Raised when the rewritten source cannot be serialized."""
