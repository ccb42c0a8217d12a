"""Rule catalogue for the validator.

Every finding the engine emits is keyed by one of these rule ids. The
catalogue also carries the human name published in SARIF reports and the
process exit code derived from the last finding of a run.
"""

from __future__ import annotations

from enum import Enum

UNMAPPED_EXIT_CODE = 99


class Severity(str, Enum):
    """Severity attached to a finding (interactive rendering)."""

    ERROR = "error"
    WARNING = "warning"


class RuleId(str, Enum):
    """Closed set of diagnostic rules."""

    MISSING_TYPE = "SCHEMA000"
    MISSING_REQUIRED = "SCHEMA001"
    UNKNOWN_TYPE = "SCHEMA002"
    INVALID_FORMAT = "SCHEMA003"
    UNEXPECTED_ENUM_VALUE = "SCHEMA004"
    INVALID_PERFORMER_TYPE = "SCHEMA005"
    NO_DYNAMIC_DEFINITION = "SCHEMA_DYN0"
    NESTED_TYPE_MISSING = "SCHEMA_DYN1"
    NESTED_TYPE_UNRECOGNIZED = "SCHEMA_DYN2"
    FORMAT_MISMATCH = "SCHEMA_DYNFMT"
    INVALID_COUNTRY = "SCHEMA_CTRY"

    @property
    def display_name(self) -> str:
        """Human readable rule name (SARIF `name`)."""

        return _TITLES[self]

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]

    @property
    def severity(self) -> Severity:
        if self in (RuleId.UNKNOWN_TYPE, RuleId.NO_DYNAMIC_DEFINITION):
            return Severity.WARNING
        return Severity.ERROR


_TITLES: dict[RuleId, str] = {
    RuleId.MISSING_TYPE: "Missing @type",
    RuleId.MISSING_REQUIRED: "Missing required property",
    RuleId.UNKNOWN_TYPE: "Unknown type",
    RuleId.INVALID_FORMAT: "Invalid property format",
    RuleId.UNEXPECTED_ENUM_VALUE: "Unexpected enumerated value",
    RuleId.INVALID_PERFORMER_TYPE: "Invalid performer type",
    RuleId.NO_DYNAMIC_DEFINITION: "No dynamic definition for type",
    RuleId.NESTED_TYPE_MISSING: "Nested object missing @type",
    RuleId.NESTED_TYPE_UNRECOGNIZED: "Nested object has unrecognized type",
    RuleId.FORMAT_MISMATCH: "Dynamic property format mismatch",
    RuleId.INVALID_COUNTRY: "Invalid country code",
}

_EXIT_CODES: dict[RuleId, int] = {
    RuleId.MISSING_TYPE: 2,
    RuleId.MISSING_REQUIRED: 3,
    RuleId.UNKNOWN_TYPE: 4,
    RuleId.INVALID_FORMAT: 5,
    RuleId.UNEXPECTED_ENUM_VALUE: 6,
    RuleId.INVALID_PERFORMER_TYPE: 7,
    RuleId.NO_DYNAMIC_DEFINITION: 10,
    RuleId.NESTED_TYPE_MISSING: 11,
    RuleId.NESTED_TYPE_UNRECOGNIZED: 12,
    RuleId.FORMAT_MISMATCH: 13,
    RuleId.INVALID_COUNTRY: 20,
}


def exit_code_for(rule_id: str) -> int:
    """Exit code for a raw rule id; unknown ids map to 99."""

    try:
        return RuleId(rule_id).exit_code
    except ValueError:
        return UNMAPPED_EXIT_CODE
