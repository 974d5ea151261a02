from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssertionLevel(str, Enum):
    OFF = "off"
    WARN = "warn"
    ERROR = "error"


class AggregationMethod(str, Enum):
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"
    MEDIAN = "median"
    MEDIAN_RUN = "median-run"


class AssertionOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    min_score: float | None = Field(None, alias="minScore")
    max_length: float | None = Field(None, alias="maxLength")
    max_numeric_value: float | None = Field(None, alias="maxNumericValue")
    aggregation_method: AggregationMethod | None = Field(
        None, alias="aggregationMethod"
    )


AssertionValue = Union[AssertionLevel, tuple[AssertionLevel, AssertionOptions]]


class AssertConfig(BaseModel):
    """Assertion configuration, either flat or as an ``assertMatrix``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    assertions: dict[str, AssertionValue] | None = None
    preset: str | None = None
    matching_url_pattern: str | None = Field(None, alias="matchingUrlPattern")
    aggregation_method: AggregationMethod | None = Field(
        None, alias="aggregationMethod"
    )
    budgets_file: str | None = Field(None, alias="budgetsFile")
    assert_matrix: list[AssertConfig] | None = Field(None, alias="assertMatrix")

    @field_validator("assertions", mode="before")
    @classmethod
    def yaml_off_is_a_level(cls, v: Any) -> Any:
        # YAML 1.1 reads a bare `off` as false
        if isinstance(v, dict):
            return {
                key: "off" if value is False else value for key, value in v.items()
            }
        return v

    def dump(self) -> dict[str, Any]:
        """Return the explicitly set fields in their camelCase config form."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def normalize_assertion(
    assertion: AssertionValue | None,
) -> tuple[AssertionLevel, AssertionOptions]:
    if not assertion:
        return AssertionLevel.OFF, AssertionOptions()
    if isinstance(assertion, AssertionLevel):
        return assertion, AssertionOptions()
    level, options = assertion
    return level, options


def load_config(path: Path) -> AssertConfig:
    """Load and validate an assert config from a YAML or JSON file.

    Accepts either a bare assert config or a CI rc file with the config
    nested under ``ci.assert``.
    """
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if isinstance(raw, dict) and isinstance(raw.get("ci"), dict):
        raw = raw["ci"].get("assert") or {}

    config = AssertConfig.model_validate(raw)

    # Resolve a relative budgets file against the config file location
    if config.budgets_file and not Path(config.budgets_file).is_absolute():
        config.budgets_file = str((config_dir / config.budgets_file).resolve())

    return config
