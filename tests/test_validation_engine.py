"""Validation engine: built-in rules, cross-field checks, dynamic checks, ordering."""

from __future__ import annotations

import copy

import pytest

from core.domain.rules import RuleId
from core.services.schema_registry import SchemaRegistry
from core.services.validation_context import ValidationContext, ValidationHooks
from core.services.validation_engine import child_path, validate_document, validate_entity


def _valid_address() -> dict:
    return {"@type": "PostalAddress", "addressCountry": "Canada", "addressLocality": "Toronto"}


def _valid_event(**overrides) -> dict:
    event = {
        "@type": "MusicEvent",
        "name": "Concert",
        "startdate": "2024-06-01T20:00",
        "location": _valid_address(),
    }
    event.update(overrides)
    return event


def _rules(context: ValidationContext) -> list[RuleId]:
    return [finding.rule_id for finding in context.findings]


class TestPaths:
    def test_child_path_formats(self):
        assert child_path("", "location") == "location"
        assert child_path("location", "geo") == "location->geo"
        assert child_path("", "performer", 2) == "performer[2]"
        assert child_path("a->b", "c", 0) == "a->b->c[0]"


class TestStructural:
    @pytest.mark.parametrize("entity", [{"name": "x"}, "plain string", 42, None, {"@type": ""}, {"@type": ["A"]}])
    def test_missing_or_invalid_type(self, static_context, entity):
        validate_entity(entity, static_context, "")

        assert _rules(static_context) == [RuleId.MISSING_TYPE]
        assert static_context.findings[0].location == "root"

    def test_no_descent_without_type(self, static_context):
        entity = {"location": {"name": "no type here either"}, "performer": {"@type": "Organization"}}

        validate_entity(entity, static_context, "location")

        assert len(static_context.findings) == 1
        assert static_context.findings[0].location == "location"


class TestBuiltinRules:
    def test_valid_event_has_no_findings(self, static_context):
        validate_entity(_valid_event(), static_context)

        assert static_context.findings == []

    @pytest.mark.parametrize(
        "type_name, entity",
        [
            ("MusicEvent", _valid_event()),
            ("PostalAddress", _valid_address()),
            ("PerformingGroup", {"@type": "PerformingGroup", "name": "Band"}),
            ("Person", {"@type": "Person", "name": "X"}),
        ],
    )
    def test_each_required_property_is_reported(self, type_name, entity):
        registry = SchemaRegistry()
        for prop in registry.lookup_type(type_name).required:
            context = ValidationContext(registry=registry)
            broken = {k: v for k, v in entity.items() if k != prop}

            validate_entity(broken, context)

            assert _rules(context) == [RuleId.MISSING_REQUIRED]
            message = context.findings[0].message
            assert f"'{prop}'" in message
            assert f"'{type_name}'" in message

    def test_enum_violation(self, static_context):
        address = dict(_valid_address(), addressCountry="France")

        validate_entity(address, static_context)

        assert _rules(static_context) == [RuleId.UNEXPECTED_ENUM_VALUE]
        assert "France" in static_context.findings[0].message

    def test_enum_allowed_value(self, static_context):
        validate_entity(dict(_valid_address(), addressCountry="Canada"), static_context)

        assert static_context.findings == []

    def test_invalid_startdate_format(self, static_context):
        validate_entity(_valid_event(startdate="31-02-2024"), static_context)

        assert _rules(static_context) == [RuleId.INVALID_FORMAT]
        assert "startdate" in static_context.findings[0].message

    def test_invalid_nationality_uses_country_rule(self, static_context):
        validate_entity({"@type": "Person", "name": "X", "nationality": "Atlantis"}, static_context)

        assert _rules(static_context) == [RuleId.INVALID_COUNTRY]

    def test_non_scalar_enum_value_is_rejected(self, static_context):
        validate_entity({"@type": "Person", "name": "X", "gender": ["Male"]}, static_context)

        assert _rules(static_context) == [RuleId.UNEXPECTED_ENUM_VALUE]

    def test_nested_object_is_validated_with_path(self, static_context):
        event = _valid_event(location={"@type": "PostalAddress", "addressLocality": "Austin"})

        validate_entity(event, static_context)

        assert _rules(static_context) == [RuleId.MISSING_REQUIRED]
        assert static_context.findings[0].location == "location"

    def test_nested_array_elements_get_index_suffix(self, static_context):
        event = _valid_event(location=[_valid_address(), {"addressLocality": "Nowhere"}])

        validate_entity(event, static_context)

        assert _rules(static_context) == [RuleId.MISSING_TYPE]
        assert static_context.findings[0].location == "location[1]"

    def test_deep_paths_chain_with_arrows(self, static_context):
        member = {"@type": "Person", "name": "Drummer", "address": {"@type": "PostalAddress"}}
        group = {"@type": "PerformingGroup", "name": "Band", "member": [member]}

        validate_entity(group, static_context)

        assert static_context.findings[0].location == "member[0]->address"
        assert static_context.findings[0].depth == 2

    def test_required_checks_precede_nested_descent(self, static_context):
        event = {"@type": "MusicEvent", "name": "Gig", "location": {"@type": "PostalAddress"}}

        validate_entity(event, static_context)

        assert [(f.rule_id, f.location) for f in static_context.findings] == [
            (RuleId.MISSING_REQUIRED, "root"),
            (RuleId.MISSING_REQUIRED, "location"),
            (RuleId.MISSING_REQUIRED, "location"),
        ]

    def test_unknown_type_without_dynamic_mode(self, static_context):
        validate_entity({"@type": "FooBar"}, static_context)

        assert _rules(static_context) == [RuleId.UNKNOWN_TYPE]


class TestPerformerRule:
    def test_organization_performer_is_rejected(self, static_context):
        validate_entity(_valid_event(performer={"@type": "Organization"}), static_context)

        assert [(f.rule_id, f.location) for f in static_context.findings] == [
            (RuleId.INVALID_PERFORMER_TYPE, "performer"),
        ]

    def test_bad_performer_is_reported_once(self, static_context):
        validate_entity(_valid_event(performer=["Band A", {"@type": "FooBar"}]), static_context)

        assert [(f.rule_id, f.location) for f in static_context.findings] == [
            (RuleId.INVALID_PERFORMER_TYPE, "performer[0]"),
            (RuleId.INVALID_PERFORMER_TYPE, "performer[1]"),
        ]

    def test_performer_contents_are_not_descended(self, static_context):
        validate_entity(_valid_event(performer={"@type": "PerformingGroup"}), static_context)

        assert static_context.findings == []

    def test_person_performer_is_accepted(self, static_context):
        validate_entity(_valid_event(performer={"@type": "Person", "name": "X"}), static_context)

        assert static_context.findings == []

    def test_each_array_element_is_checked(self, static_context):
        performers = [
            {"@type": "PerformingGroup", "name": "Band"},
            "Just a name",
            {"@type": "Person", "name": "Solo"},
            {"name": "untyped"},
        ]

        validate_entity(_valid_event(performer=performers), static_context)

        performer_findings = [f for f in static_context.findings if f.rule_id is RuleId.INVALID_PERFORMER_TYPE]
        assert [f.location for f in performer_findings] == ["performer[1]", "performer[3]"]


class TestDynamicMode:
    def test_builtin_type_without_dynamic_class(self, vocabulary):
        vocabulary.classes.pop("PostalAddress")
        context = ValidationContext(registry=SchemaRegistry.with_vocabulary(vocabulary), dynamic=True)

        validate_entity(_valid_address(), context)

        assert _rules(context) == [RuleId.NO_DYNAMIC_DEFINITION]

    def test_failed_vocabulary_degrades_to_no_definition(self):
        context = ValidationContext(registry=SchemaRegistry(), dynamic=True)

        validate_entity(_valid_address(), context)
        validate_entity({"@type": "Event"}, context)

        assert _rules(context) == [RuleId.NO_DYNAMIC_DEFINITION, RuleId.UNKNOWN_TYPE]

    def test_dynamic_only_type_skips_builtin_checks(self, dynamic_context):
        validate_entity({"@type": "Event", "name": "Fair", "startDate": "2024-06-01"}, dynamic_context)

        assert dynamic_context.findings == []

    def test_dynamic_checks_supplement_builtin(self, dynamic_context):
        event = _valid_event(url="not a url", location={"@type": "Venue"})

        validate_entity(event, dynamic_context)

        assert _rules(dynamic_context) == [
            RuleId.INVALID_FORMAT,
            RuleId.UNKNOWN_TYPE,
            RuleId.NESTED_TYPE_UNRECOGNIZED,
            RuleId.FORMAT_MISMATCH,
        ]

    def test_nested_type_missing_and_unrecognized(self, dynamic_context):
        entity = {
            "@type": "Event",
            "location": {"name": "hall"},
            "organizer": [{"@type": "Organization"}, {"@type": "Guild"}],
        }

        validate_entity(entity, dynamic_context)

        assert [(f.rule_id, f.location) for f in dynamic_context.findings] == [
            (RuleId.NESTED_TYPE_MISSING, "location"),
            (RuleId.NESTED_TYPE_UNRECOGNIZED, "organizer[1]"),
        ]

    def test_array_scalars_are_format_checked(self, dynamic_context):
        entity = {"@type": "Event", "keywords": ["https://example.com/a", "jazz"]}

        validate_entity(entity, dynamic_context)

        assert [(f.rule_id, f.location) for f in dynamic_context.findings] == [
            (RuleId.FORMAT_MISMATCH, "keywords[1]"),
        ]

    def test_properties_without_definition_are_accepted(self, dynamic_context):
        validate_entity({"@type": "Event", "customThing": "x", "@id": "urn:1", "@context": "x"}, dynamic_context)

        assert dynamic_context.findings == []

    def test_dynamic_properties_iterate_lexicographically(self, dynamic_context):
        entity = {
            "@type": "Event",
            "url": "bad",
            "isAccessibleForFree": "maybe",
            "maximumAttendeeCapacity": "lots",
            "doorTime": "soon",
        }

        validate_entity(entity, dynamic_context)

        assert [f.location for f in dynamic_context.findings] == [
            "doorTime",
            "isAccessibleForFree",
            "maximumAttendeeCapacity",
            "url",
        ]

    def test_dynamic_format_check_on_types_and_countries(self, dynamic_context):
        entity = {"@type": "Person", "name": "X", "contactEmail": "nobody", "sex": "Other", "nationality": "FR"}

        validate_entity(entity, dynamic_context)

        assert _rules(dynamic_context) == [RuleId.FORMAT_MISMATCH, RuleId.FORMAT_MISMATCH]


class TestDeterminism:
    def test_validation_is_idempotent(self, dynamic_context):
        event = _valid_event(
            startdate="tomorrow",
            performer=[{"@type": "Organization"}, {"@type": "Person"}],
            location={"@type": "PostalAddress", "addressCountry": "France"},
        )
        snapshot = copy.deepcopy(event)

        first = dynamic_context.fresh()
        second = dynamic_context.fresh()
        validate_entity(event, first)
        validate_entity(event, second)

        assert first.findings == second.findings
        assert len(first.findings) > 0
        assert event == snapshot

    def test_document_arrays_validate_each_entity(self, static_context):
        validate_document([{"@type": "FooBar"}, _valid_event(), {"no": "type"}], static_context)

        assert _rules(static_context) == [RuleId.UNKNOWN_TYPE, RuleId.MISSING_TYPE]


class TestHooks:
    def test_type_passed_fires_only_for_clean_entities(self):
        seen: list[tuple[str, str]] = []
        passed: list[tuple[str, str]] = []
        emitted = []
        hooks = ValidationHooks(
            finding=emitted.append,
            type_seen=lambda t, loc: seen.append((t, loc)),
            type_passed=lambda t, loc: passed.append((t, loc)),
        )
        context = ValidationContext(registry=SchemaRegistry(), hooks=hooks)
        event = _valid_event(location={"@type": "PostalAddress", "addressLocality": "Austin"})

        validate_entity(event, context)

        assert seen == [("MusicEvent", "root"), ("PostalAddress", "location")]
        assert passed == [("MusicEvent", "root")]
        assert emitted == context.findings
