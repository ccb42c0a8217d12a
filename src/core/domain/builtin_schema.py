"""Built-in type rules.

A minimal local schema covering the event pages this tool was written for:
a MusicEvent must have a name, a start date and a location of type
PostalAddress; performers are PerformingGroup or Person entities.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.domain.models import PropertyValidation, TypeRule
from core.domain.rules import RuleId

PERFORMER_TYPES: frozenset[str] = frozenset({"PerformingGroup", "Person"})

_EVENT_STATUSES = (
    "EventScheduled",
    "EventCancelled",
    "EventMovedOnline",
    "EventPostponed",
    "EventRescheduled",
)

ALLOWED_ADDRESS_COUNTRIES: frozenset[str] = frozenset(
    {
        "United_States",
        "Canada",
        "United_Kingdom",
        "Australia",
        "New_Zealand",
        "Ireland",
    }
)


def _build_rules() -> dict[str, TypeRule]:
    rules = [
        TypeRule(
            name="MusicEvent",
            required=("name", "startdate", "location"),
            nested={"location": "PostalAddress"},
            enum={
                "eventStatus": frozenset(
                    [*_EVENT_STATUSES, *(f"https://schema.org/{s}" for s in _EVENT_STATUSES)]
                ),
            },
            property_validations={
                "startdate": PropertyValidation(format_name="DateTime"),
                "enddate": PropertyValidation(format_name="DateTime"),
                "url": PropertyValidation(format_name="URL"),
            },
        ),
        TypeRule(
            name="PostalAddress",
            required=("addressCountry", "addressLocality"),
            enum={"addressCountry": ALLOWED_ADDRESS_COUNTRIES},
            property_validations={
                "postalCode": PropertyValidation(format_name="PostalCode"),
            },
        ),
        TypeRule(
            name="PerformingGroup",
            required=("name",),
            nested={"member": "Person"},
            property_validations={
                "url": PropertyValidation(format_name="URL"),
            },
        ),
        TypeRule(
            name="Person",
            required=("name",),
            nested={"address": "PostalAddress"},
            enum={"gender": frozenset({"Male", "Female"})},
            property_validations={
                "birthDate": PropertyValidation(format_name="Date"),
                "email": PropertyValidation(format_name="Email"),
                "url": PropertyValidation(format_name="URL"),
                "nationality": PropertyValidation(format_name="Country", rule_id=RuleId.INVALID_COUNTRY),
            },
        ),
    ]
    return {rule.name: rule for rule in rules}


BUILTIN_RULES: Mapping[str, TypeRule] = MappingProxyType(_build_rules())
