"""Data model for performance audit reports (Lighthouse results)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class AuditDetails(BaseModel):
    model_config = ConfigDict(extra="allow")
    items: list[dict[str, Any]] | None = None


class AuditResult(BaseModel):
    """One audit's output inside one report."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    score: float | None = None
    score_display_mode: str | None = Field(None, alias="scoreDisplayMode")
    numeric_value: float | None = Field(None, alias="numericValue")
    details: AuditDetails | None = None
    title: str | None = None
    description: str | None = None


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")
    score: float | None = None


class Report(BaseModel):
    """One full audit run for one URL attempt."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    final_url: str = Field("", alias="finalUrl")
    categories: dict[str, Category] = {}
    audits: dict[str, AuditResult] = {}

    def audit(self, audit_id: str) -> AuditResult | None:
        return self.audits.get(audit_id)


def coerce_reports(items: Iterable[Report | dict[str, Any]]) -> list[Report]:
    """Validate plain dicts into ``Report`` models, passing models through."""
    return [
        item if isinstance(item, Report) else Report.model_validate(item)
        for item in items
    ]


def load_report(path: Path) -> Report:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return Report.model_validate(raw)


def load_reports(directory: Path, pattern: str = "lhr-*.json") -> list[Report]:
    """Load every report in *directory* matching *pattern*, in sorted order."""
    paths = sorted(directory.glob(pattern))
    logger.debug(f"Loading {len(paths)} report(s) from {directory}")
    return [load_report(p) for p in paths]
