"""
dsgen - Service-Component descriptor generator.

Compiles the compact Service-Component header syntax into Declarative
Services component descriptors, discovering annotated implementation
classes for wildcard clauses.
"""

from __future__ import annotations

from ._version import __version__
from .core import ir
from .core.builder import BuildResult, build_components
from .core.errors import ConfigError, DsgenError, ParseError

__all__ = [
    "__version__",
    "ir",
    "build_components",
    "BuildResult",
    "DsgenError",
    "ParseError",
    "ConfigError",
]
