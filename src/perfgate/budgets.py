"""Convert a Lighthouse budgets file into an assert config."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from perfgate.config import AssertConfig


def convert_path_expression_to_regexp(path: str | None) -> str:
    """Translate a budget ``path`` (``*`` wildcards, optional ``$``) to a regex.

    The pattern matches the path portion of a full URL.
    """
    if not path or path == "/":
        return ".*"

    anchored = path.endswith("$")
    if anchored:
        path = path[:-1]
    body = ".*".join(re.escape(part) for part in path.split("*"))
    return rf"^https?://[^/]+{body}" + ("$" if anchored else "")


def _budget_to_assertions(budget: dict[str, Any]) -> dict[str, Any]:
    assertions: dict[str, Any] = {}
    for entry in budget.get("resourceSizes", []):
        assertions[f"resource-summary.{entry['resourceType']}.size"] = [
            "error",
            {"maxNumericValue": entry["budget"] * 1024},
        ]
    for entry in budget.get("resourceCounts", []):
        assertions[f"resource-summary.{entry['resourceType']}.count"] = [
            "error",
            {"maxNumericValue": entry["budget"]},
        ]
    for entry in budget.get("timings", []):
        assertions[entry["metric"]] = ["error", {"maxNumericValue": entry["budget"]}]
    return assertions


def convert_budgets_to_assertions(budgets: list[dict[str, Any]]) -> AssertConfig:
    """Build an ``assertMatrix`` config with one entry per budget."""
    return AssertConfig.model_validate(
        {
            "assertMatrix": [
                {
                    "matchingUrlPattern": convert_path_expression_to_regexp(
                        budget.get("path")
                    ),
                    "assertions": _budget_to_assertions(budget),
                }
                for budget in budgets
            ]
        }
    )


def load_budgets_config(path: Path) -> AssertConfig:
    with open(path) as f:
        budgets = json.load(f)
    if not isinstance(budgets, list):
        raise ValueError(f"Budgets file {path} must contain a list of budgets")
    return convert_budgets_to_assertions(budgets)


def resolve_budgets_file(config: AssertConfig) -> AssertConfig:
    """Replace a config that names a ``budgetsFile`` with the converted budgets."""
    if not config.budgets_file:
        return config
    if config.assertions or config.preset or config.assert_matrix:
        raise ValueError("Cannot use budgets file with other assertion options")
    return load_budgets_config(Path(config.budgets_file))
