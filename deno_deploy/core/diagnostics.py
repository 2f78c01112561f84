"""Diagnostics returned from resource operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic with a short summary and a detailed body."""

    severity: Severity
    summary: str
    detail: str = ""

    @classmethod
    def error(cls, summary: str, detail: str = "") -> "Diagnostic":
        """Create an error diagnostic."""
        return cls(Severity.ERROR, summary, detail)

    @classmethod
    def warning(cls, summary: str, detail: str = "") -> "Diagnostic":
        """Create a warning diagnostic."""
        return cls(Severity.WARNING, summary, detail)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.severity.value}: {self.summary}\n\n{self.detail}"
        return f"{self.severity.value}: {self.summary}"


class Diagnostics:
    """Ordered accumulator of diagnostics for one operation."""

    def __init__(self, items: Iterable[Diagnostic] | None = None):
        self._items: list[Diagnostic] = list(items or [])

    def append(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._items.extend(diagnostics)

    def add_error(self, summary: str, detail: str = "") -> None:
        self._items.append(Diagnostic.error(summary, detail))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self._items.append(Diagnostic.warning(summary, detail))

    def has_error(self) -> bool:
        """Check if any diagnostic is an error."""
        return any(d.severity == Severity.ERROR for d in self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
