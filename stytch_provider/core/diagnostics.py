"""Operator-facing diagnostics.

A diagnostic is a (severity, summary, detail) triple, optionally pinned to an
attribute. Validation accumulates several of them in a ``Diagnostics`` list;
operations that stop at the first failure raise ``DiagnosticError``.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    severity: str
    summary: str
    detail: str = ""
    attribute: Optional[str] = None
    
    def __str__(self) -> str:
        prefix = f"{self.severity.capitalize()}: {self.summary}"
        if self.attribute:
            prefix = f"{prefix} [{self.attribute}]"
        return f"{prefix}\n  {self.detail}" if self.detail else prefix


class Diagnostics(list):
    """List of Diagnostic with error/warning helpers."""
    
    def add_error(self, summary: str, detail: str = "", attribute: Optional[str] = None) -> None:
        self.append(Diagnostic(SEVERITY_ERROR, summary, detail, attribute))
    
    def add_warning(self, summary: str, detail: str = "", attribute: Optional[str] = None) -> None:
        self.append(Diagnostic(SEVERITY_WARNING, summary, detail, attribute))
    
    def has_error(self) -> bool:
        return any(d.severity == SEVERITY_ERROR for d in self)
    
    def errors(self) -> list:
        return [d for d in self if d.severity == SEVERITY_ERROR]


class DiagnosticError(Exception):
    """Terminal failure carrying diagnostics for the operator.
    
    Built from a summary and detail (the common case) or from an already
    accumulated ``Diagnostics`` list.
    """
    
    def __init__(self, summary: str, detail: str = "", diagnostics: Optional[Iterable[Diagnostic]] = None):
        self.summary = summary
        self.detail = detail
        self.diagnostics = Diagnostics(diagnostics or [])
        if not self.diagnostics:
            self.diagnostics.add_error(summary, detail)
        super().__init__(f"{summary}: {detail}" if detail else summary)
