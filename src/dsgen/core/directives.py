"""
Service-Component header vocabulary.

Directive keys keep the trailing ``:`` of the ``key:=value`` header syntax,
which is how they are told apart from reference attributes.
"""

DIRECTIVE_MARKER = ":"

NAME = "name:"
FACTORY = "factory:"
SERVICEFACTORY = "servicefactory:"
IMMEDIATE = "immediate:"
ENABLED = "enabled:"
DYNAMIC = "dynamic:"
MULTIPLE = "multiple:"
PROVIDE = "provide:"
OPTIONAL = "optional:"
PROPERTIES = "properties:"
IMPLEMENTATION = "implementation:"
DESCRIPTORS = ".descriptors:"
NOANNOTATIONS = "noannotations:"

# Schema 1.1.0 additions
VERSION = "version:"
CONFIGURATION_POLICY = "configuration-policy:"
MODIFIED = "modified:"
ACTIVATE = "activate:"
DEACTIVATE = "deactivate:"

COMPONENT_DIRECTIVES = frozenset(
    {
        FACTORY,
        IMMEDIATE,
        ENABLED,
        DYNAMIC,
        MULTIPLE,
        PROVIDE,
        OPTIONAL,
        PROPERTIES,
        IMPLEMENTATION,
        SERVICEFACTORY,
        VERSION,
        CONFIGURATION_POLICY,
        MODIFIED,
        ACTIVATE,
        DEACTIVATE,
        NAME,
        DESCRIPTORS,
        NOANNOTATIONS,
    }
)

COMPONENT_DIRECTIVES_1_1 = frozenset(
    {
        VERSION,
        CONFIGURATION_POLICY,
        MODIFIED,
        ACTIVATE,
        DEACTIVATE,
    }
)

# Component element attributes, in emission order, with their allowed values.
# ``None`` means any value; IDENTIFIER means a bare method name.
IDENTIFIER = "<<identifier>>"

COMPONENT_ATTRIBUTES: tuple[tuple[str, str, tuple[str, ...] | None], ...] = (
    (FACTORY, "factory", None),
    (IMMEDIATE, "immediate", ("false", "true")),
    (ENABLED, "enabled", ("true", "false")),
    (CONFIGURATION_POLICY, "configuration-policy", ("optional", "require", "ignore")),
    (ACTIVATE, "activate", (IDENTIFIER,)),
    (DEACTIVATE, "deactivate", (IDENTIFIER,)),
    (MODIFIED, "modified", (IDENTIFIER,)),
)


def is_directive(key: str) -> bool:
    """Check if a header key is a directive rather than a reference."""
    return key.endswith(DIRECTIVE_MARKER)


def is_true(value: str | None) -> bool:
    """Interpret a header flag value."""
    return value is not None and value.strip().lower() in ("true", "yes", "1")


def split_list(value: str | None) -> list[str]:
    """Split a comma separated directive value, dropping empty entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
