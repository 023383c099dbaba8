"""
dsgen Internal Representation (IR) types.

The IR carries a Service-Component header from parsed clauses through
resolution to the reference and property models the emitter renders.

All types are immutable (frozen=True) so a resolved component can be
emitted any number of times with identical results.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

# Shared read-only "no attributes" value used for generated header clauses
EMPTY_ATTRIBUTES: Mapping[str, str] = MappingProxyType({})


# =============================================================================
# Header Clauses
# =============================================================================


class ComponentClause(BaseModel):
    """
    One clause of a Service-Component header.

    Attributes:
        key: Resource path, explicit component name or class-name pattern
        attributes: Ordered attribute map; directive keys end with ``:``
        text: Clause text as written in the header, empty when built in code
    """

    key: str
    attributes: dict[str, str] = Field(default_factory=dict)
    text: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def is_resource_reference(self) -> bool:
        """Whether the clause points at an existing descriptor file."""
        return "/" in self.key or self.key.endswith(".xml")


# =============================================================================
# Class Metadata
# =============================================================================


class ClassDescriptor(BaseModel):
    """
    A class known to the class index.

    Attributes:
        name: Fully-qualified class name
        methods: Method names declared by the class
        component: Component metadata attached to the class, using the same
            key vocabulary as the header. ``None`` for plain classes.
    """

    name: str
    methods: frozenset[str] = frozenset()
    component: dict[str, str] | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_annotated(self) -> bool:
        """Check if the class carries component metadata."""
        return self.component is not None

    @property
    def package(self) -> str:
        """Package part of the class name."""
        return self.name.rpartition(".")[0]


class ComponentOrigin(str, Enum):
    """Where a resolved component's attributes came from."""

    MANIFEST = "manifest"
    ANNOTATION = "annotation"


# =============================================================================
# Properties
# =============================================================================


class PropertyEntry(BaseModel):
    """
    A single component property.

    Attributes:
        name: Property name
        type: Optional type token (``Integer``, ``String``...)
        values: One value for scalar properties, several for multi-line ones
    """

    name: str
    type: str | None = None
    values: tuple[str, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def is_multi_line(self) -> bool:
        return len(self.values) > 1


# =============================================================================
# References
# =============================================================================


class UnbindOrigin(str, Enum):
    """Provenance of an unbind method name."""

    CALCULATED = "calculated"
    EXPLICIT = "explicit"


class BindMethods(BaseModel):
    """
    Reference name plus the bind/unbind methods derived from a header key.

    A calculated unbind method is silently dropped when the class does not
    declare it; a missing explicit one is an error.
    """

    name: str
    bind: str | None = None
    unbind: str | None = None
    unbind_origin: UnbindOrigin | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def unbind_calculated(self) -> bool:
        return self.unbind_origin == UnbindOrigin.CALCULATED


class Cardinality(str, Enum):
    """Reference cardinality as written in a descriptor."""

    OPTIONAL_UNARY = "0..1"
    MANDATORY_UNARY = "1..1"
    OPTIONAL_MULTIPLE = "0..n"
    MANDATORY_MULTIPLE = "1..n"

    @classmethod
    def of(cls, optional: bool, multiple: bool) -> Cardinality:
        lower = "0" if optional else "1"
        upper = "n" if multiple else "1"
        return cls(f"{lower}..{upper}")


class ReferenceDescriptor(BaseModel):
    """
    A service reference declared by a component.

    Attributes:
        name: Reference name
        interface: Referenced service interface
        bind: Bind method name, if any
        unbind: Unbind method name, if any
        unbind_origin: Whether the unbind name was calculated or given
        cardinality: Minimum/maximum bound instance count
        dynamic: Dynamic binding policy
        target: Optional target filter, parentheses included
    """

    name: str
    interface: str
    bind: str | None = None
    unbind: str | None = None
    unbind_origin: UnbindOrigin | None = None
    cardinality: Cardinality = Cardinality.MANDATORY_UNARY
    dynamic: bool = False
    target: str | None = None

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Resolved Components
# =============================================================================


class ResolvedComponent(BaseModel):
    """
    A component ready for emission.

    Attributes:
        name: Final component name (also the resource file name)
        implementation: Implementation class name
        attributes: Final attribute map after merging all metadata sources
        methods: Methods discovered on the implementation class. Empty means
            bind/unbind checks are skipped.
        origin: Whether annotations contributed to the attributes
    """

    name: str
    implementation: str
    attributes: dict[str, str] = Field(default_factory=dict)
    methods: frozenset[str] = frozenset()
    origin: ComponentOrigin = ComponentOrigin.MANIFEST

    model_config = ConfigDict(frozen=True)

    @property
    def resource_path(self) -> str:
        return f"OSGI-INF/{self.name}.xml"

    def get(self, key: str) -> str | None:
        """Look up an attribute value."""
        return self.attributes.get(key)


# =============================================================================
# Diagnostics
# =============================================================================


class DiagnosticKind(str, Enum):
    """Non-fatal diagnostic categories."""

    RESOLUTION = "resolution"
    VALIDATION = "validation"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """
    A recorded, non-fatal problem.

    Attributes:
        kind: Diagnostic category
        message: Human readable description
        component: Component or clause the problem belongs to
    """

    kind: DiagnosticKind
    message: str
    component: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        return self.kind != DiagnosticKind.WARNING

    def format(self) -> str:
        if self.component:
            return f"{self.component}: {self.message}"
        return self.message
