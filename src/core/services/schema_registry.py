"""Schema registry: built-in type rules plus optional dynamic vocabulary."""

from __future__ import annotations

from typing import Mapping

from core.domain.builtin_schema import BUILTIN_RULES
from core.domain.models import ClassDefinition, PropertyDefinition, TypeRule, Vocabulary


class SchemaRegistry:
    """Read-only lookups over built-in rules and dynamic definitions.

    Dynamic definitions arrive already indexed under both their label and
    their short identifier (see `core.resources_loader.parse_vocabulary`),
    so either form resolves.
    """

    def __init__(
        self,
        builtin: Mapping[str, TypeRule] | None = None,
        vocabulary: Vocabulary | None = None,
    ) -> None:
        self._builtin = builtin if builtin is not None else BUILTIN_RULES
        self._vocabulary = vocabulary or Vocabulary()

    @classmethod
    def with_vocabulary(cls, vocabulary: Vocabulary | None) -> "SchemaRegistry":
        return cls(vocabulary=vocabulary)

    @property
    def has_dynamic(self) -> bool:
        return not self._vocabulary.is_empty

    @property
    def builtin_types(self) -> tuple[str, ...]:
        return tuple(self._builtin)

    def lookup_type(self, name: str) -> TypeRule | None:
        return self._builtin.get(name)

    def lookup_dynamic_class(self, name: str) -> ClassDefinition | None:
        return self._vocabulary.classes.get(name)

    def lookup_dynamic_property(self, name: str) -> PropertyDefinition | None:
        return self._vocabulary.properties.get(name)
