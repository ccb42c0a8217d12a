"""Diagnostics reporting: exit status, interactive lines and SARIF reports.

The exit status follows the *last* finding of the run (not the most severe
one); a run without findings exits 0.
"""

from __future__ import annotations

from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from typing import Sequence

from core.domain.models import Finding
from core.domain.rules import RuleId, Severity, exit_code_for
from core.domain.sarif import (
    SarifArtifactLocation,
    SarifDriver,
    SarifLocation,
    SarifLog,
    SarifMessage,
    SarifPhysicalLocation,
    SarifResult,
    SarifRule,
    SarifRun,
    SarifTool,
)

TOOL_NAME = "Schema.org Validator"
TOOL_INFORMATION_URI = "https://schema.org"
SUCCESS_EXIT_CODE = 0

_GLYPHS = {Severity.ERROR: "✗", Severity.WARNING: "⚠"}


class ReportMode(str, Enum):
    INTERACTIVE = "interactive"
    STRUCTURED = "structured"


def tool_version() -> str:
    try:
        return version("schema-validator")
    except PackageNotFoundError:
        return "0.1.0"


def exit_status(findings: Sequence[Finding]) -> int:
    if not findings:
        return SUCCESS_EXIT_CODE
    return exit_code_for(findings[-1].rule_id.value)


def indent_for(depth: int) -> str:
    return " " * (depth * 2)


def format_finding_line(finding: Finding) -> str:
    """`<indent><glyph> [RULE] message (at path)`."""

    glyph = _GLYPHS.get(finding.severity, "✗")
    return f"{indent_for(finding.depth)}{glyph} [{finding.rule_id.value}] {finding.message}"


def rule_catalogue() -> list[SarifRule]:
    return [SarifRule(id=rule.value, name=rule.display_name) for rule in RuleId]


def build_sarif_report(findings: Sequence[Finding], artifact_uri: str) -> SarifLog:
    """Un resultado por hallazgo, nivel fijo `error`, ubicado en el artefacto de entrada."""

    results = [
        SarifResult(
            rule_id=finding.rule_id.value,
            level="error",
            message=SarifMessage(text=finding.message),
            locations=[
                SarifLocation(
                    physical_location=SarifPhysicalLocation(
                        artifact_location=SarifArtifactLocation(uri=artifact_uri),
                    )
                )
            ],
        )
        for finding in findings
    ]
    driver = SarifDriver(
        name=TOOL_NAME,
        information_uri=TOOL_INFORMATION_URI,
        version=tool_version(),
        rules=rule_catalogue(),
    )
    return SarifLog(runs=[SarifRun(tool=SarifTool(driver=driver), results=results)])


def report(
    findings: Sequence[Finding],
    mode: ReportMode,
    artifact_uri: str,
) -> tuple[list[str] | SarifLog, int]:
    """Payload for the chosen mode plus the derived exit status."""

    status = exit_status(findings)
    if mode is ReportMode.STRUCTURED:
        return build_sarif_report(findings, artifact_uri), status
    return [format_finding_line(finding) for finding in findings], status
