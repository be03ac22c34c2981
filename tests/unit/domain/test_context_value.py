"""Tests for typed path resolution over ticket context."""

from routedesk.domain.value_objects.context_value import (
    ABSENT,
    resolve_path,
    strict_equals,
)

ROOT = {
    "requestType": "quote",
    "data": {
        "productFamily": "acid",
        "customer": {"tier": "gold", "region": None},
        "lines": [{"sku": "H2SO4-20"}, {"sku": "HCL-5"}],
        "hazmat": False,
    },
}


def test_top_level_field():
    assert resolve_path(ROOT, "requestType") == "quote"


def test_nested_field():
    assert resolve_path(ROOT, "data.productFamily") == "acid"
    assert resolve_path(ROOT, "data.customer.tier") == "gold"


def test_missing_segment_is_absent():
    assert resolve_path(ROOT, "data.grade") is ABSENT
    assert resolve_path(ROOT, "missing.field") is ABSENT
    assert resolve_path(ROOT, "data.customer.tier.code") is ABSENT


def test_explicit_null_is_not_absent():
    assert resolve_path(ROOT, "data.customer.region") is None


def test_walking_through_null_is_absent():
    assert resolve_path(ROOT, "data.customer.region.name") is ABSENT


def test_false_value_is_returned():
    assert resolve_path(ROOT, "data.hazmat") is False


def test_sequence_index():
    assert resolve_path(ROOT, "data.lines.1.sku") == "HCL-5"
    assert resolve_path(ROOT, "data.lines.5.sku") is ABSENT
    assert resolve_path(ROOT, "data.lines.first") is ABSENT


def test_string_is_not_indexed():
    assert resolve_path(ROOT, "requestType.0") is ABSENT


def test_absent_is_falsy_singleton():
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert type(ABSENT)() is ABSENT


def test_strict_equals_no_coercion():
    assert strict_equals("acid", "acid")
    assert not strict_equals("Acid", "acid")
    assert not strict_equals("1", 1)
    assert not strict_equals(True, 1)
    assert not strict_equals(0, False)
    assert not strict_equals(None, "")
    assert strict_equals(None, None)
    assert strict_equals(False, False)
    assert strict_equals(2, 2.0)
