"""Per-run validation state.

The context is created at the start of a run and threaded through every
engine call. It owns the append-only findings list, so validating twice
with two fresh contexts never shares state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from core.domain.models import ROOT_LOCATION, Finding
from core.domain.rules import RuleId
from core.services.schema_registry import SchemaRegistry


@dataclass
class ValidationHooks:
    """Optional callbacks for UI layers (interactive trace)."""

    finding: Callable[[Finding], None] | None = None
    type_seen: Callable[[str, str], None] | None = None
    type_passed: Callable[[str, str], None] | None = None


@dataclass
class ValidationContext:
    registry: SchemaRegistry
    dynamic: bool = False
    hooks: ValidationHooks = field(default_factory=ValidationHooks)
    findings: list[Finding] = field(default_factory=list)

    @staticmethod
    def location(path: str) -> str:
        return path or ROOT_LOCATION

    def emit(self, rule_id: RuleId, message: str, path: str) -> Finding:
        finding = Finding(
            rule_id=rule_id,
            severity=rule_id.severity,
            message=message,
            location=self.location(path),
        )
        self.findings.append(finding)
        if self.hooks.finding:
            self.hooks.finding(finding)
        return finding

    def fresh(self) -> "ValidationContext":
        """Same configuration, empty findings."""

        return ValidationContext(registry=self.registry, dynamic=self.dynamic, hooks=self.hooks)
