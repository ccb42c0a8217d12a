"""Validation run orchestration.

This module ties one run together: the optional vocabulary load, registry
construction, JSON parsing of every extracted block and sequential
validation into a single findings list. Side-effects such as printing stay
in the CLI layer, wired in through hooks.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from core.config import AppSettings
from core.domain.models import Finding
from core.interfaces.vocabulary import VocabularySource
from core.resources_loader import CachedVocabularySource, VocabularyLoadResult
from core.services.diagnostics import exit_status
from core.services.schema_registry import SchemaRegistry
from core.services.validation_context import ValidationContext, ValidationHooks
from core.services.validation_engine import validate_document

logger = logging.getLogger(__name__)


@dataclass
class ValidationRequest:
    """Parameters that control a validation run."""

    blocks: Sequence[str] = ()
    dynamic: bool = False


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (block banners, warnings, trace)."""

    warning: Callable[[str], None] | None = None
    block_found: Callable[[int], None] | None = None
    validation: ValidationHooks = field(default_factory=ValidationHooks)


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    findings: list[Finding]
    blocks_total: int
    blocks_skipped: int = 0
    vocabulary: VocabularyLoadResult | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def exit_status(self) -> int:
        return exit_status(self.findings)


def parse_block(text: str) -> tuple[Any, str | None]:
    """JSON-decode one block; returns (data, error)."""

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return None, f"Invalid JSON: {exc}"
    if not data and not isinstance(data, (dict, list)):
        return None, "Invalid JSON: empty document"
    return data, None


def build_registry(
    *,
    settings: AppSettings,
    dynamic: bool,
    vocabulary_source: VocabularySource | None,
    warn: Callable[[str], None],
) -> tuple[SchemaRegistry, VocabularyLoadResult | None]:
    """Built-in rules always; dynamic definitions only when requested and loaded."""

    if not dynamic:
        return SchemaRegistry(), None

    source = vocabulary_source or CachedVocabularySource(settings)
    loaded = source.load()
    if not loaded.ok:
        warn(f"Dynamic vocabulary unavailable ({loaded.error}); dynamic checks degraded")
        return SchemaRegistry(), loaded
    logger.info(
        "Loaded dynamic vocabulary (%d class keys, %d property keys, cached=%s)",
        len(loaded.vocabulary.classes),
        len(loaded.vocabulary.properties),
        loaded.from_cache,
    )
    return SchemaRegistry.with_vocabulary(loaded.vocabulary), loaded


def run(
    *,
    settings: AppSettings,
    request: ValidationRequest,
    vocabulary_source: VocabularySource | None = None,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        logger.warning("%s", message)
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    registry, loaded = build_registry(
        settings=settings,
        dynamic=request.dynamic,
        vocabulary_source=vocabulary_source,
        warn=warn,
    )
    context = ValidationContext(registry=registry, dynamic=request.dynamic, hooks=hooks.validation)

    skipped = 0
    for index, text in enumerate(request.blocks):
        data, error = parse_block(text)
        if error is not None:
            skipped += 1
            warn(f"Skipping JSON-LD block #{index + 1}: {error}")
            continue
        if hooks.block_found:
            hooks.block_found(index)
        validate_document(data, context)

    return PipelineResult(
        findings=context.findings,
        blocks_total=len(request.blocks),
        blocks_skipped=skipped,
        vocabulary=loaded,
        warnings=warnings,
    )
