"""Diagnostic messages raised while scripts run.

A pod keeps one ``DiagnosticContext`` and records a diagnostic whenever a
script is skipped or halted, so a driver can keep scheduling the other
scripts and still report what went wrong for each resource/script pair.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DiagnosticLevel(Enum):
    """Severity level for diagnostic messages."""
    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    level: DiagnosticLevel
    message: str
    resource: str
    script: Optional[int] = None
    block: Optional[int] = None
    block_kind: Optional[str] = None

    def __str__(self) -> str:
        loc = f"Resource '{self.resource}'"
        if self.script is not None:
            loc += f" Script {self.script}"
        if self.block is not None:
            loc += f" Block {self.block}"
        result = f"{self.level.value}: {self.message}: {loc}"
        if self.block_kind:
            result += f"\n  -> {self.block_kind}"
        return result


@dataclass
class DiagnosticContext:
    """Diagnostics collected for one pod."""
    pod_name: str = "pod"
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add(
        self,
        level: DiagnosticLevel,
        message: str,
        resource: str,
        script: Optional[int] = None,
        block: Optional[int] = None,
        block_kind: Optional[str] = None,
    ) -> Diagnostic:
        """Add a diagnostic message and return it."""
        diagnostic = Diagnostic(
            level=level,
            message=message,
            resource=resource,
            script=script,
            block=block,
            block_kind=block_kind,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def error(self, message: str, resource: str, script: Optional[int] = None,
              block: Optional[int] = None, block_kind: Optional[str] = None) -> Diagnostic:
        """Add an error diagnostic."""
        return self.add(DiagnosticLevel.ERROR, message, resource, script, block, block_kind)

    def warning(self, message: str, resource: str, script: Optional[int] = None,
                block: Optional[int] = None, block_kind: Optional[str] = None) -> Diagnostic:
        """Add a warning diagnostic."""
        return self.add(DiagnosticLevel.WARNING, message, resource, script, block, block_kind)

    def info(self, message: str, resource: str, script: Optional[int] = None) -> Diagnostic:
        """Add an info diagnostic."""
        return self.add(DiagnosticLevel.INFO, message, resource, script)

    def has_errors(self) -> bool:
        """Check if any script of this pod has been halted by an error."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    def has_warnings(self) -> bool:
        """Check if any warning diagnostics have been recorded."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.diagnostics)

    def get_errors(self) -> List[Diagnostic]:
        """Get all error diagnostics, oldest first."""
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.ERROR]

    def get_warnings(self) -> List[Diagnostic]:
        """Get all warning diagnostics."""
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.WARNING]

    def clear(self) -> None:
        """Forget every recorded diagnostic."""
        self.diagnostics.clear()

    def summary(self) -> str:
        """Return a one-line count of errors and warnings."""
        return _summarize(self.diagnostics)


class DiagnosticCollector:
    """Collects diagnostics across every pod of an environment."""

    def __init__(self) -> None:
        self.all_diagnostics: List[Diagnostic] = []

    def add_context_diagnostics(self, ctx: DiagnosticContext) -> None:
        """Add all diagnostics recorded by one pod."""
        self.all_diagnostics.extend(ctx.diagnostics)

    def has_errors(self) -> bool:
        """Check if any pod recorded an error."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.all_diagnostics)

    def has_warnings(self) -> bool:
        """Check if any pod recorded a warning."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.all_diagnostics)

    def print_all(self) -> None:
        """Print all diagnostics to stdout."""
        for diag in self.all_diagnostics:
            print(diag)

    def summary(self) -> str:
        """Return a one-line count of errors and warnings."""
        return _summarize(self.all_diagnostics)


def _summarize(diagnostics: List[Diagnostic]) -> str:
    errors = sum(1 for d in diagnostics if d.level == DiagnosticLevel.ERROR)
    warnings = sum(1 for d in diagnostics if d.level == DiagnosticLevel.WARNING)
    parts = []
    if errors:
        parts.append(f"{errors} error{'s' if errors != 1 else ''}")
    if warnings:
        parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
    return ", ".join(parts) if parts else "No issues"
