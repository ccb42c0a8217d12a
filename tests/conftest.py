"""Shared fixtures: a tiny Schema.org-shaped vocabulary and settings bound to tmp dirs."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.config import AppSettings
from core.resources_loader import parse_vocabulary
from core.services.schema_registry import SchemaRegistry
from core.services.validation_context import ValidationContext


def _cls(name: str, comment: str = "", parent: str | None = None) -> dict:
    item = {
        "@id": f"schema:{name}",
        "@type": "rdfs:Class",
        "rdfs:label": name,
        "rdfs:comment": comment or f"A {name}.",
    }
    if parent:
        item["rdfs:subClassOf"] = {"@id": f"schema:{parent}"}
    return item


def _prop(name: str, *ranges: str) -> dict:
    return {
        "@id": f"schema:{name}",
        "@type": "rdf:Property",
        "rdfs:label": name,
        "schema:rangeIncludes": [{"@id": f"schema:{r}"} for r in ranges],
    }


VOCABULARY_DOCUMENT: dict = {
    "@context": {"schema": "https://schema.org/"},
    "@graph": [
        _cls("Thing"),
        _cls("Event", parent="Thing"),
        _cls("MusicEvent", parent="Event"),
        _cls("Place", parent="Thing"),
        _cls("PostalAddress", parent="Thing"),
        _cls("Person", parent="Thing"),
        _cls("Organization", parent="Thing"),
        {
            "@id": "schema:Text",
            "@type": ["schema:DataType", "rdfs:Class"],
            "rdfs:label": "Text",
        },
        _prop("name", "Text"),
        _prop("url", "URL"),
        _prop("startDate", "Date", "DateTime"),
        _prop("doorTime", "DateTime", "Time"),
        _prop("isAccessibleForFree", "Boolean"),
        _prop("maximumAttendeeCapacity", "Integer"),
        _prop("email", "Text"),
        _prop("contactEmail", "Email"),
        _prop("nationality", "Country"),
        _prop("gender", "GenderType", "Text"),
        _prop("sex", "Gender"),
        _prop("duration", "Duration"),
        _prop("keywords", "URL"),
        _prop("location", "Place", "PostalAddress", "Text"),
    ],
}


@pytest.fixture
def vocabulary_document() -> dict:
    return json.loads(json.dumps(VOCABULARY_DOCUMENT))


@pytest.fixture
def vocabulary(vocabulary_document):
    parsed = parse_vocabulary(vocabulary_document)
    assert parsed is not None
    return parsed


@pytest.fixture
def static_context() -> ValidationContext:
    return ValidationContext(registry=SchemaRegistry(), dynamic=False)


@pytest.fixture
def dynamic_context(vocabulary) -> ValidationContext:
    return ValidationContext(registry=SchemaRegistry.with_vocabulary(vocabulary), dynamic=True)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        cache_dir=tmp_path / "cache",
        vocabulary_url="https://schema.example/vocab.jsonld",
        sarif_output_path=tmp_path / "schema_validation.sarif",
    )
