"""
Parsing of the ``properties:`` directive.

The directive holds a comma separated list of ``name=value`` entries. A type
can be given as ``Type@name=value`` or ``name:Type=value``, and ``|`` or a
newline separates the lines of a multi-valued property.
"""

from __future__ import annotations

import re

from . import directives
from .diagnostics import Diagnostics
from .ir import PropertyEntry

VALID_PROPERTY_TYPES = frozenset(
    {"String", "Long", "Double", "Float", "Integer", "Byte", "Character", "Boolean", "Short"}
)

_VALUE_SEPARATOR = re.compile(r"\s*(?:\||\n)\s*")


def split_name_and_type(name: str) -> tuple[str, str | None]:
    if "@" in name:
        type_, _, name = name.partition("@")
        return name, type_
    if ":" in name:
        name, _, type_ = name.partition(":")
        return name, type_
    return name, None


def parse_properties(value: str | None, diagnostics: Diagnostics) -> list[PropertyEntry]:
    """
    Parse a ``properties:`` value into property entries.

    Entries without a name are reported and skipped; unknown type tokens are
    reported as warnings and dropped from the entry.
    """
    entries: list[PropertyEntry] = []
    for clause in directives.split_list(value):
        key, sep, raw = clause.partition("=")
        if not sep or not key.strip():
            diagnostics.validation_error("Not a valid property in service component: %s", clause)
            continue

        name, type_ = split_name_and_type(key.strip())
        if type_ is not None and type_ not in VALID_PROPERTY_TYPES:
            diagnostics.warning("Invalid property type '%s' for property %s", type_, name)
            type_ = None

        values = _VALUE_SEPARATOR.split(raw.strip())
        # Trailing separators do not add empty lines
        while len(values) > 1 and not values[-1]:
            values.pop()
        entries.append(PropertyEntry(name=name, type=type_, values=tuple(values)))
    return entries
