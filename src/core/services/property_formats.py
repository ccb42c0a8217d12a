"""Registry of named value-format predicates.

Each semantic format (Text, URL, Date, ...) maps to a predicate over the
string form of a scalar. Built-in rules reference these by name, and the
dynamic checker walks a property's `rangeIncludes` through them in a fixed
priority order. New formats only need a registry entry.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping
from urllib.parse import urlsplit

import pycountry
from dateutil.parser import isoparse

from core.domain.models import PropertyDefinition
from core.domain.rules import RuleId
from core.services.validation_context import ValidationContext

logger = logging.getLogger(__name__)

FormatPredicate = Callable[[str], bool]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2})?)?$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}(?::\d{2})?$")
_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")
_BOOLEAN_RE = re.compile(r"^(?:true|false)$", re.IGNORECASE)
_POSTAL_CODE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]{1,9}$")


def is_text(value: str) -> bool:
    return True


def is_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.hostname)


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def is_iso8601_date(value: str) -> bool:
    """Full ISO-8601 grammar (calendar and week dates, optional time part)."""

    if not value:
        return False
    try:
        isoparse(value)
    except (ValueError, OverflowError):
        return False
    return True


def is_datetime(value: str) -> bool:
    """`YYYY-MM-DD` or `YYYY-MM-DD[T ]HH:MM[:SS]`."""

    return bool(_DATETIME_RE.match(value))


def is_time(value: str) -> bool:
    return bool(_TIME_RE.match(value))


def is_number(value: str) -> bool:
    return bool(_NUMBER_RE.match(value))


def is_boolean(value: str) -> bool:
    return bool(_BOOLEAN_RE.match(value))


def is_country_code(value: str) -> bool:
    """ISO 3166-1 alpha-2 / alpha-3 code, case-insensitive."""

    code = value.strip().upper()
    if len(code) == 2:
        return pycountry.countries.get(alpha_2=code) is not None
    if len(code) == 3:
        return pycountry.countries.get(alpha_3=code) is not None
    return False


def is_gender(value: str) -> bool:
    return value in ("Male", "Female")


def is_postal_code(value: str) -> bool:
    return bool(_POSTAL_CODE_RE.match(value))


FORMAT_PREDICATES: Mapping[str, FormatPredicate] = {
    "Text": is_text,
    "URL": is_url,
    "Email": is_email,
    "Date": is_iso8601_date,
    "DateTime": is_datetime,
    "Time": is_time,
    "Number": is_number,
    "Integer": is_number,
    "Boolean": is_boolean,
    "Country": is_country_code,
    "Gender": is_gender,
    "PostalCode": is_postal_code,
}

# Orden de prueba para rangeIncludes: el primer tipo satisfecho gana.
FORMAT_PRIORITY: tuple[str, ...] = (
    "Text",
    "URL",
    "Email",
    "Date",
    "DateTime",
    "Time",
    "Number",
    "Integer",
    "Boolean",
    "Country",
    "Gender",
)


def scalar_to_text(value: Any) -> str:
    """String form of a JSON scalar as it appeared in the document."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def matches_format(format_name: str, value: Any) -> bool:
    """Evaluate one registered predicate; unknown names raise KeyError."""

    return FORMAT_PREDICATES[format_name](scalar_to_text(value))


def _ordered_expected_types(expected: tuple[str, ...]) -> tuple[list[str], list[str]]:
    known = [name for name in FORMAT_PRIORITY if name in expected]
    unmodeled = [name for name in expected if name not in FORMAT_PRIORITY]
    return known, unmodeled


def check_format(
    property_name: str,
    value: Any,
    definition: PropertyDefinition,
    path: str,
    context: ValidationContext,
) -> None:
    """Check a scalar against the property's expected range types.

    Emits a single `SCHEMA_DYNFMT` finding when no expected type is satisfied.
    Types without a predicate make the value unverifiable (no finding).
    """

    expected = definition.range_includes
    if not expected:
        return

    text = scalar_to_text(value)
    known, unmodeled = _ordered_expected_types(expected)
    for name in known:
        if FORMAT_PREDICATES[name](text):
            return

    if unmodeled:
        logger.info(
            "Format check for %s not implemented (expected %s); value treated as unverifiable",
            property_name,
            ", ".join(unmodeled),
        )
        return

    location = context.location(path)
    types = ", ".join(expected)
    if text.strip() == "":
        message = f"Empty value for property '{property_name}' at {location}; expected one of: {types}"
    else:
        message = (
            f"Value '{text}' for property '{property_name}' at {location} "
            f"does not match expected types: {types}"
        )
    context.emit(RuleId.FORMAT_MISMATCH, message, path)
