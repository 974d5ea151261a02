"""Tests for budgets file conversion."""

import json
import re
from pathlib import Path

import pytest

from perfgate.budgets import (
    convert_budgets_to_assertions,
    convert_path_expression_to_regexp,
    load_budgets_config,
    resolve_budgets_file,
)
from perfgate.config import AssertConfig, normalize_assertion

EXAMPLE_BUDGETS = Path(__file__).resolve().parents[1] / "examples" / "budgets.json"


@pytest.mark.parametrize("path", [None, "", "/"])
def test_root_or_missing_path_matches_everything(path):
    assert convert_path_expression_to_regexp(path) == ".*"


def test_wildcard_path():
    pattern = re.compile(convert_path_expression_to_regexp("/blog/*"))
    assert pattern.search("https://example.com/blog/post-1")
    assert not pattern.search("https://example.com/about")


def test_anchored_path():
    pattern = re.compile(convert_path_expression_to_regexp("/checkout$"))
    assert pattern.search("https://example.com/checkout")
    assert not pattern.search("https://example.com/checkout/step-2")


def test_convert_budgets_to_assertions():
    config = convert_budgets_to_assertions(
        [
            {
                "path": "/",
                "resourceSizes": [{"resourceType": "script", "budget": 300}],
                "resourceCounts": [{"resourceType": "third-party", "budget": 10}],
                "timings": [{"metric": "interactive", "budget": 5000}],
            }
        ]
    )
    [entry] = config.assert_matrix
    assert entry.matching_url_pattern == ".*"
    size = normalize_assertion(entry.assertions["resource-summary.script.size"])
    assert size[0] == "error"
    assert size[1].max_numeric_value == 300 * 1024
    count = normalize_assertion(entry.assertions["resource-summary.third-party.count"])
    assert count[1].max_numeric_value == 10
    timing = normalize_assertion(entry.assertions["interactive"])
    assert timing[1].max_numeric_value == 5000


def test_load_example_budgets():
    config = load_budgets_config(EXAMPLE_BUDGETS)
    assert len(config.assert_matrix) == 2


def test_budgets_file_must_be_a_list(tmp_path):
    path = tmp_path / "budgets.json"
    path.write_text(json.dumps({"resourceSizes": []}))
    with pytest.raises(ValueError, match="list of budgets"):
        load_budgets_config(path)


def test_resolve_budgets_file_replaces_config():
    config = resolve_budgets_file(AssertConfig(budgetsFile=str(EXAMPLE_BUDGETS)))
    assert config.budgets_file is None
    assert len(config.assert_matrix) == 2


def test_resolve_without_budgets_file_is_noop():
    config = AssertConfig(preset="lighthouse:recommended")
    assert resolve_budgets_file(config) is config


def test_budgets_file_cannot_combine_with_assertions():
    config = AssertConfig.model_validate(
        {"budgetsFile": str(EXAMPLE_BUDGETS), "assertions": {"dom-size": "error"}}
    )
    with pytest.raises(ValueError, match="Cannot use budgets file"):
        resolve_budgets_file(config)


def test_converted_budgets_assert_resource_summary(make_report):
    from perfgate.runner import evaluate

    report = make_report(
        {
            "resource-summary": {
                "details": {
                    "items": [
                        {"resourceType": "script", "size": 400 * 1024, "requestCount": 5},
                        {"resourceType": "total", "size": 500 * 1024, "requestCount": 20},
                        {"resourceType": "third-party", "size": 0, "requestCount": 3},
                    ]
                }
            },
            "interactive": {"numericValue": 4000},
        },
        url="https://example.com/",
    )
    results = evaluate(load_budgets_config(EXAMPLE_BUDGETS), [report])
    assert [(r.audit_id, r.audit_property) for r in results] == [
        ("resource-summary", "script.size")
    ]
