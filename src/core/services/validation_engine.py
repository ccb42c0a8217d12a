"""Recursive JSON-LD entity validation.

The walk is pre-order: an entity's own checks (required, enum, format) run
before descending into its nested objects, and findings are appended to the
context in exactly that order. Built-in rules always win over the dynamic
vocabulary; dynamic checks only add findings.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from core.domain.builtin_schema import PERFORMER_TYPES
from core.domain.models import TypeRule
from core.domain.rules import RuleId
from core.services.property_formats import check_format, matches_format, scalar_to_text
from core.services.validation_context import ValidationContext

logger = logging.getLogger(__name__)

_RESERVED_KEYS = frozenset({"@type", "@context", "@id"})


def child_path(path: str, prop: str, index: int | None = None) -> str:
    base = f"{path}->{prop}" if path else prop
    if index is None:
        return base
    return f"{base}[{index}]"


def entity_type(entity: Any) -> str | None:
    """`@type` of a mapping when it is a usable (non-empty string) value."""

    if not isinstance(entity, Mapping):
        return None
    value = entity.get("@type")
    if isinstance(value, str) and value.strip():
        return value
    return None


def validate_entity(entity: Any, context: ValidationContext, path: str = "") -> None:
    """Validate one entity (and its nested objects) into `context.findings`."""

    type_name = entity_type(entity)
    if type_name is None:
        context.emit(
            RuleId.MISSING_TYPE,
            f"Missing or invalid @type at {context.location(path)}",
            path,
        )
        return

    if context.hooks.type_seen:
        context.hooks.type_seen(type_name, context.location(path))

    rule = context.registry.lookup_type(type_name)
    if rule is not None:
        _validate_builtin(entity, rule, context, path)
        return

    if context.dynamic and context.registry.lookup_dynamic_class(type_name) is not None:
        validate_dynamic(entity, context, path)
        return

    context.emit(
        RuleId.UNKNOWN_TYPE,
        f"Unknown type '{type_name}' at {context.location(path)}. Skipping detailed rules check.",
        path,
    )


def validate_document(data: Any, context: ValidationContext) -> None:
    """Validate a parsed JSON-LD block: a single entity or a top-level array."""

    logger.debug("Validating JSON-LD block (%s)", type(data).__name__)
    if isinstance(data, list):
        for entity in data:
            validate_entity(entity, context, "")
    else:
        validate_entity(data, context, "")


def _validate_builtin(
    entity: Mapping[str, Any],
    rule: TypeRule,
    context: ValidationContext,
    path: str,
) -> None:
    location = context.location(path)
    own_findings = 0

    for prop in rule.required:
        if prop not in entity:
            context.emit(
                RuleId.MISSING_REQUIRED,
                f"Missing required property '{prop}' for type '{rule.name}' at {location}",
                path,
            )
            own_findings += 1

    for prop, allowed in rule.enum.items():
        if prop not in entity:
            continue
        value = entity[prop]
        if not _is_scalar(value) or scalar_to_text(value) not in allowed:
            context.emit(
                RuleId.UNEXPECTED_ENUM_VALUE,
                f"Unexpected value '{_describe(value)}' for property '{prop}' of type "
                f"'{rule.name}' at {location}; allowed: {', '.join(sorted(allowed))}",
                path,
            )
            own_findings += 1

    for prop, validation in rule.property_validations.items():
        if prop not in entity:
            continue
        value = entity[prop]
        if not _is_scalar(value) or not matches_format(validation.format_name, value):
            context.emit(
                validation.rule_id,
                f"Invalid format for property '{prop}' of type '{rule.name}' at {location}: "
                f"'{_describe(value)}' is not a valid {validation.format_name}",
                path,
            )
            own_findings += 1

    for prop in rule.nested:
        if prop not in entity:
            continue
        child = entity[prop]
        if isinstance(child, list):
            for index, item in enumerate(child):
                validate_entity(item, context, child_path(path, prop, index))
        elif isinstance(child, Mapping):
            validate_entity(child, context, child_path(path, prop))

    if rule.name == "MusicEvent":
        own_findings += _check_performers(entity, context, path)

    if own_findings == 0 and context.hooks.type_passed:
        context.hooks.type_passed(rule.name, location)

    if context.dynamic:
        if context.registry.lookup_dynamic_class(rule.name) is not None:
            validate_dynamic(entity, context, path)
        else:
            context.emit(
                RuleId.NO_DYNAMIC_DEFINITION,
                f"No dynamic definition found for type '{rule.name}' at {location}",
                path,
            )


def _check_performers(entity: Mapping[str, Any], context: ValidationContext, path: str) -> int:
    if "performer" not in entity:
        return 0
    performers = entity["performer"]
    items = performers if isinstance(performers, list) else [performers]
    emitted = 0
    for index, item in enumerate(items):
        if entity_type(item) in PERFORMER_TYPES:
            continue
        item_path = child_path(path, "performer", index if isinstance(performers, list) else None)
        context.emit(
            RuleId.INVALID_PERFORMER_TYPE,
            f"Invalid performer at {context.location(item_path)}: expected an object of type "
            f"{' or '.join(sorted(PERFORMER_TYPES))}, got {_describe_type(item)}",
            item_path,
        )
        emitted += 1
    return emitted


def validate_dynamic(entity: Mapping[str, Any], context: ValidationContext, path: str) -> None:
    """Vocabulary-backed checks over every property, in lexicographic order.

    Properties without a dynamic definition are accepted silently.
    """

    registry = context.registry
    for prop in sorted(key for key in entity if key not in _RESERVED_KEYS):
        value = entity[prop]
        prop_path = child_path(path, prop)
        if isinstance(value, Mapping):
            _check_nested_dynamic_type(prop, value, context, prop_path)
        elif isinstance(value, list):
            definition = registry.lookup_dynamic_property(prop)
            for index, item in enumerate(value):
                item_path = child_path(path, prop, index)
                if isinstance(item, Mapping):
                    _check_nested_dynamic_type(prop, item, context, item_path)
                elif definition is not None:
                    check_format(prop, item, definition, item_path, context)
        else:
            definition = registry.lookup_dynamic_property(prop)
            if definition is not None:
                check_format(prop, value, definition, prop_path, context)


def _check_nested_dynamic_type(
    prop: str,
    value: Mapping[str, Any],
    context: ValidationContext,
    path: str,
) -> None:
    location = context.location(path)
    if "@type" not in value:
        context.emit(
            RuleId.NESTED_TYPE_MISSING,
            f"Nested object for property '{prop}' is missing @type at {location}",
            path,
        )
        return
    nested_type = value["@type"]
    if not isinstance(nested_type, str) or context.registry.lookup_dynamic_class(nested_type) is None:
        context.emit(
            RuleId.NESTED_TYPE_UNRECOGNIZED,
            f"Nested object for property '{prop}' has unrecognized type "
            f"'{_describe(nested_type)}' at {location}",
            path,
        )


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (Mapping, list))


def _describe(value: Any) -> str:
    if _is_scalar(value):
        return scalar_to_text(value)
    return type(value).__name__


def _describe_type(value: Any) -> str:
    if not isinstance(value, Mapping):
        return f"a {type(value).__name__} value"
    if "@type" not in value:
        return "an object without @type"
    return f"'{_describe(value['@type'])}'"
