"""Custom exceptions for mdlv3000."""

from __future__ import annotations


class ChemError(Exception):
    """Base exception for chemistry-related errors."""
    pass


class MolfileError(ChemError):
    """Error while reading a V3000 connection table.
    
    Attributes:
        message: Human readable cause.
        line_number: Physical line number the reader had reached, if known.
        line: Offending logical command or raw line, if known.
    """
    
    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        
        text = message
        if line_number is not None:
            text = f"{text} (line {line_number})"
        if line is not None:
            text = f"{text}: {line}"
        super().__init__(text)


class FormatError(MolfileError):
    """Input does not follow the record prefix, block nesting or field layout."""
    pass


class FieldParseError(MolfileError):
    """A recognized field could not be converted to its expected type."""
    
    def __init__(
        self,
        message: str,
        key: str | None = None,
        value: str | None = None,
        line_number: int | None = None,
        line: str | None = None,
    ):
        self.key = key
        self.value = value
        if key is not None:
            message = f"{message} {key}={value}"
        super().__init__(message, line_number, line)


class MolfileIOError(MolfileError):
    """The underlying line source failed."""
    pass


class ConfigurationError(ChemError):
    """Invalid reader configuration."""
    pass


class UnsupportedConstructWarning(UserWarning):
    """A recognized construct the reader does not model; it was skipped."""
    pass
