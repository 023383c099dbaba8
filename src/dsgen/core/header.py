"""
Parser and printer for the Service-Component manifest header.

Grammar::

    header := clause (',' clause)*
    clause := name (';' attr)*
    attr   := key '=' value | key ':=' value | key

A ``key:=value`` directive is stored under ``key:`` so directives stay
distinguishable from reference attributes. A bare ``key`` is a directive
flag: it is stored under ``key:`` with the value ``"true"``. Values may be
double-quoted, in which case ``,`` and ``;`` lose their meaning and ``\\``
escapes the next character.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from .errors import make_parse_error
from .ir import ComponentClause

logger = logging.getLogger(__name__)

CLAUSE_SEPARATOR = ","
ATTRIBUTE_SEPARATOR = ";"
QUOTE = '"'
DIRECTIVE_MARKER = ":"
ESCAPE = "\\"

_NEEDS_QUOTES = re.compile(r'[,;="\\\s]')


class HeaderScanner:
    """
    Character scanner for one header value.

    Tracks the position of every token so parse errors can point at the
    offending column.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def advance(self) -> None:
        self.pos += 1

    def skip_whitespace(self) -> None:
        while (char := self.current_char()) is not None and char.isspace():
            self.advance()

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def read_token(self, stops: str) -> str:
        """Read an unquoted token up to any character in ``stops``."""
        start = self.pos
        while (char := self.current_char()) is not None and char not in stops:
            if char == QUOTE:
                raise make_parse_error("Unexpected quote inside token", self.text, self.pos)
            self.advance()
        return self.text[start : self.pos].strip()

    def read_quoted(self) -> str:
        """Read a double-quoted value, honouring backslash escapes."""
        start = self.pos
        self.advance()  # skip opening quote

        chars: list[str] = []
        while True:
            char = self.current_char()
            if char is None:
                raise make_parse_error("Unterminated quoted value", self.text, start)
            if char == QUOTE:
                break
            if char == ESCAPE:
                self.advance()
                escaped = self.current_char()
                if escaped is None:
                    raise make_parse_error("Unterminated quoted value", self.text, start)
                chars.append(escaped)
            else:
                chars.append(char)
            self.advance()

        self.advance()  # skip closing quote
        self.skip_whitespace()
        char = self.current_char()
        if char is not None and char not in (CLAUSE_SEPARATOR, ATTRIBUTE_SEPARATOR):
            raise make_parse_error(
                "Unexpected characters after quoted value", self.text, self.pos
            )
        return "".join(chars)

    def read_value(self) -> str:
        self.skip_whitespace()
        if self.current_char() == QUOTE:
            return self.read_quoted()
        return self.read_token(CLAUSE_SEPARATOR + ATTRIBUTE_SEPARATOR)


class HeaderParser:
    """
    Parses a header value into ordered clauses.

    The whole header is rejected on the first syntax problem; there is no
    partial recovery.
    """

    def __init__(self, text: str):
        self.text = text
        self.scanner = HeaderScanner(text)

    def parse(self) -> list[ComponentClause]:
        clauses: list[ComponentClause] = []
        seen: set[str] = set()

        if not self.text.strip():
            return clauses

        while True:
            start = self.scanner.pos
            clause = self._parse_clause()
            if clause.key in seen:
                raise make_parse_error(
                    f"Duplicate clause '{clause.key}' in header", self.text, start
                )
            seen.add(clause.key)
            clauses.append(clause)

            if self.scanner.at_end():
                break
            self.scanner.advance()  # skip ','

        logger.debug("Parsed %d clause(s) from header", len(clauses))
        return clauses

    def _parse_clause(self) -> ComponentClause:
        scanner = self.scanner
        clause_start = scanner.pos
        scanner.skip_whitespace()
        start = scanner.pos
        name = scanner.read_token(CLAUSE_SEPARATOR + ATTRIBUTE_SEPARATOR)
        if not name:
            raise make_parse_error("Expected a clause name", self.text, start)
        if "=" in name:
            raise make_parse_error(
                f"Clause '{name}' starts with an attribute instead of a name",
                self.text,
                start,
            )

        attributes: dict[str, str] = {}
        while scanner.current_char() == ATTRIBUTE_SEPARATOR:
            scanner.advance()
            scanner.skip_whitespace()
            key_start = scanner.pos
            key = scanner.read_token("=" + CLAUSE_SEPARATOR + ATTRIBUTE_SEPARATOR)
            if not key:
                raise make_parse_error(
                    f"Empty attribute key in clause '{name}'", self.text, key_start
                )
            is_flag = scanner.current_char() != "="
            if is_flag and not key.endswith(DIRECTIVE_MARKER):
                key += DIRECTIVE_MARKER
            if key in attributes:
                raise make_parse_error(
                    f"Duplicate attribute '{key}' in clause '{name}'", self.text, key_start
                )

            if is_flag:
                attributes[key] = "true"
            else:
                scanner.advance()
                attributes[key] = scanner.read_value()

        text = self.text[clause_start : scanner.pos].strip()
        return ComponentClause(key=name, attributes=attributes, text=text)


def parse_header(header: str) -> dict[str, dict[str, str]]:
    """
    Parse a Service-Component header.

    Args:
        header: Raw header value

    Returns:
        Ordered mapping of clause name to its attribute map

    Raises:
        ParseError: If the header is malformed
    """
    return {clause.key: dict(clause.attributes) for clause in parse_clauses(header)}


def parse_clauses(header: str) -> list[ComponentClause]:
    """Parse a header into :class:`ComponentClause` objects."""
    return HeaderParser(header).parse()


def _quote(value: str) -> str:
    if value and not _NEEDS_QUOTES.search(value):
        return value
    escaped = value.replace(ESCAPE, ESCAPE * 2).replace(QUOTE, ESCAPE + QUOTE)
    return f"{QUOTE}{escaped}{QUOTE}"


def print_clauses(clauses: Mapping[str, Mapping[str, str]]) -> str:
    """
    Print clauses back into header syntax.

    Directive keys already carry their ``:`` so they print as ``key:=value``.
    """
    parts = []
    for name, attributes in clauses.items():
        segments = [name]
        segments.extend(f"{key}={_quote(value)}" for key, value in attributes.items())
        parts.append(ATTRIBUTE_SEPARATOR.join(segments))
    return CLAUSE_SEPARATOR.join(parts)
