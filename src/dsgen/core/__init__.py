"""Core dsgen functionality: header parsing, resolution, reference interpretation, emission."""

from . import ir
from .builder import BuildResult, build_components
from .catalog import CatalogClassIndex, load_catalog
from .diagnostics import Diagnostics
from .emitter import DescriptorEmitter, emit_descriptor
from .errors import (
    AnnotationReadError,
    ConfigError,
    DsgenError,
    ErrorContext,
    ParseError,
)
from .header import parse_clauses, parse_header, print_clauses
from .manifest import ProjectManifest, load_manifest
from .output import write_resources
from .references import ReferenceInterpreter, derive_bind_methods, interpret_references
from .resolver import ComponentResolver, Resolution, resolve_clauses
from .sources import (
    AnnotationReader,
    AnnotationSource,
    ClassIndex,
    ManifestSource,
    MetadataSource,
    merge_sources,
)
from .versioning import namespace_for

__all__ = [
    "ir",
    "DsgenError",
    "ParseError",
    "ConfigError",
    "AnnotationReadError",
    "ErrorContext",
    "Diagnostics",
    "parse_header",
    "parse_clauses",
    "print_clauses",
    "namespace_for",
    "derive_bind_methods",
    "interpret_references",
    "ReferenceInterpreter",
    "ClassIndex",
    "AnnotationReader",
    "MetadataSource",
    "ManifestSource",
    "AnnotationSource",
    "merge_sources",
    "ComponentResolver",
    "Resolution",
    "resolve_clauses",
    "DescriptorEmitter",
    "emit_descriptor",
    "BuildResult",
    "build_components",
    "CatalogClassIndex",
    "load_catalog",
    "ProjectManifest",
    "load_manifest",
    "write_resources",
]
