"""Tests for the routing rules JSON loader."""

import json
from pathlib import Path

import pytest

from routedesk.application.use_cases.manage_rules import validate_rule
from routedesk.domain.entities.routing_rule import DEFAULT_RULE_ORDER
from routedesk.domain.exceptions import InvalidRule
from routedesk.tools.seed_rules import load_rules_file

SAMPLE_RULES = Path(__file__).resolve().parents[3] / "data" / "routing_rules.json"


def _write(tmp_path, payload) -> Path:
    path = tmp_path / "rules.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


def test_load_rules_with_defaults(tmp_path):
    path = _write(tmp_path, [
        {"predicate": {"requestType": "coa"}, "assignees": ["coa-team"], "order": 5},
        {"assignees": ["customer-service"]},
    ])
    rules = load_rules_file(path)

    assert len(rules) == 2
    assert rules[0].predicate == {"requestType": "coa"}
    assert rules[0].order == 5
    assert rules[1].predicate == {}
    assert rules[1].active is True
    assert rules[1].order == DEFAULT_RULE_ORDER
    assert all(r.id is None for r in rules)


def test_sample_rules_file_is_valid():
    rules = load_rules_file(SAMPLE_RULES)
    assert rules
    for rule in rules:
        validate_rule(rule)


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        {"assignees": ["sales-team"]},
        [{"predicate": {}}],
        ["sales-team"],
        [{"predicate": {"requestType": "quote"}, "assignees": "Lori"}],
        [{"assignees": ["Lori"], "active": "false"}],
        [{"assignees": ["Lori"], "order": "5"}],
        [{"predicate": {"data.": "acid"}, "assignees": ["Lori"]}],
    ],
)
def test_malformed_files_rejected(tmp_path, payload):
    with pytest.raises(InvalidRule):
        load_rules_file(_write(tmp_path, payload))


def test_error_names_offending_rule(tmp_path):
    path = _write(tmp_path, [
        {"assignees": ["sales-team"]},
        {"predicate": {"requestType": "quote"}, "assignees": "Lori"},
    ])
    with pytest.raises(InvalidRule, match="rule #1"):
        load_rules_file(path)
