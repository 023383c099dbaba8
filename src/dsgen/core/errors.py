"""
Error types for dsgen header parsing, resolution, and emission.

Only header parse failures and configuration problems are raised as
exceptions. Everything that happens while resolving and emitting a
component is recorded in a :class:`dsgen.core.diagnostics.Diagnostics`
collector instead, so one bad clause never hides the output of the rest.
"""

from dataclasses import dataclass
from typing import Optional


class DsgenError(Exception):
    """Base exception for all dsgen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class ParseError(DsgenError):
    """
    Raised when a Service-Component header cannot be parsed.

    Examples:
    - Unterminated quoted value
    - Empty clause name or attribute key
    - Duplicate clause or attribute
    """

    pass


class ConfigError(DsgenError):
    """
    Raised when a project manifest or class catalog cannot be loaded.

    Examples:
    - Missing dsgen.toml
    - Invalid TOML syntax
    - Catalog entry without a class name
    """

    pass


class AnnotationReadError(DsgenError):
    """
    Raised by an annotation reader when component metadata cannot be
    extracted from a class.
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of a parse failure inside a header value.

    Attributes:
        header: The full header text being parsed
        line: Line number (1-indexed) of the offending character
        column: Column number (1-indexed) within that line
    """

    header: str
    line: int
    column: int

    def format(self) -> str:
        """
        Format the header with a marker under the failing column.

        Returns:
            Two lines: the failing header line and a ``^`` marker
        """
        lines = self.header.split("\n")
        line = lines[min(self.line, len(lines)) - 1]
        marker = " " * max(self.column - 1, 0) + "^"
        return f"  {line}\n  {marker}"


def make_parse_error(message: str, header: str, position: int) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        header: Header text being parsed
        position: 0-indexed offset of the failure

    Returns:
        ParseError with context attached
    """
    line = header.count("\n", 0, position) + 1
    column = position - (header.rfind("\n", 0, position) + 1) + 1
    context = ErrorContext(header=header, line=line, column=column)
    if line > 1:
        return ParseError(f"{message} (line {line}, column {column})", context)
    return ParseError(f"{message} (column {column})", context)
