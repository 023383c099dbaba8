"""
Namespace (schema version) selection for component descriptors.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from . import directives
from .diagnostics import Diagnostics

NAMESPACE_STEM = "http://www.osgi.org/xmlns/scr"
NAMESPACE_1_1 = f"{NAMESPACE_STEM}/v1.1.0"

# major[.minor[.micro[.qualifier]]]
VERSION_PATTERN = re.compile(r"^\d+(\.\d+(\.\d+(\.[\w-]+)?)?)?$")


def is_valid_version(token: str) -> bool:
    return VERSION_PATTERN.match(token) is not None


def namespace_for(attributes: Mapping[str, str], diagnostics: Diagnostics) -> str | None:
    """
    Decide the descriptor namespace for a component.

    An explicit ``version:`` wins. Otherwise any directive introduced by the
    1.1.0 schema selects it. ``None`` leaves the runtime default in place.
    """
    version = attributes.get(directives.VERSION)
    if version is not None:
        token = version.strip()
        if not is_valid_version(token):
            diagnostics.resolution_error(
                "version: specified on component header but not a valid version: %s", version
            )
            return None
        return f"{NAMESPACE_STEM}/v{token}"

    if any(key in directives.COMPONENT_DIRECTIVES_1_1 for key in attributes):
        return NAMESPACE_1_1
    return None
