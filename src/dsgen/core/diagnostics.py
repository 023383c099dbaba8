"""
Diagnostic collector shared by the resolver, reference interpreter and
emitter.

Each stage records problems here and keeps going; the caller gets the
accumulated list alongside whatever output was produced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .ir import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    """
    Ordered list of recorded diagnostics.

    ``scope`` names the component currently being processed and is attached
    to every diagnostic recorded while it is set.
    """

    items: list[Diagnostic] = field(default_factory=list)
    scope: str | None = None

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def errors(self) -> list[Diagnostic]:
        """Resolution and validation errors."""
        return [d for d in self.items if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.items if not d.is_error]

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.items)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    @contextmanager
    def scoped(self, name: str) -> Iterator[Diagnostics]:
        """Attach ``name`` to diagnostics recorded inside the block."""
        previous = self.scope
        self.scope = name
        try:
            yield self
        finally:
            self.scope = previous

    def resolution_error(self, message: str, *args: object) -> None:
        """Record an unresolved class, bad directive or bad reference."""
        self._record(DiagnosticKind.RESOLUTION, message, args)

    def validation_error(self, message: str, *args: object) -> None:
        """Record an invalid attribute value found during emission."""
        self._record(DiagnosticKind.VALIDATION, message, args)

    def warning(self, message: str, *args: object) -> None:
        """Record an advisory problem."""
        self._record(DiagnosticKind.WARNING, message, args)

    def _record(self, kind: DiagnosticKind, message: str, args: tuple[object, ...]) -> None:
        text = message % args if args else message
        diagnostic = Diagnostic(kind=kind, message=text, component=self.scope)
        self.items.append(diagnostic)
        # Callers report diagnostics themselves; the log only traces them
        logger.debug("Recorded %s diagnostic: %s", kind.value, diagnostic.format())
