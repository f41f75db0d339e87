"""Tests for the weight-map parse step and faction policy"""

import pytest

from progression.overrides.schema import (
    FactionPolicy,
    ShapeMismatch,
    WeightMap,
    parse_weight_map,
)

ITEM = "5447a9cd4bdc2dbd208b4567"


def test_valid_map():
    """Ids and weights are echoed verbatim"""
    parsed = parse_weight_map("Holster", {ITEM: 5, "5A7AE0C351DFBA0017554310": 0.5})
    assert isinstance(parsed, WeightMap)
    assert parsed.weights == {ITEM: 5, "5A7AE0C351DFBA0017554310": 0.5}


def test_zero_weight_is_valid():
    """Zero means never selected, not invalid"""
    assert isinstance(parse_weight_map("Holster", {ITEM: 0}), WeightMap)


def test_empty_map_is_valid():
    """An empty map clears the pool"""
    parsed = parse_weight_map("Holster", {})
    assert isinstance(parsed, WeightMap)
    assert parsed.weights == {}


@pytest.mark.parametrize(
    "value",
    [
        [ITEM],
        5,
        "weights",
        {"not-an-id": 1},
        {ITEM[:-1]: 1},
        {ITEM: -1},
        {ITEM: "5"},
        {ITEM: True},
        {ITEM: None},
        {ITEM: float("nan")},
        {ITEM: float("inf")},
        {ITEM: float("-inf")},
    ],
)
def test_shape_mismatch(value):
    """Anything that is not id -> non-negative number is rejected"""
    parsed = parse_weight_map("Holster", value)
    assert isinstance(parsed, ShapeMismatch)
    assert parsed.key == "Holster"
    assert parsed.reason


def test_faction_policy_targets():
    """Policies expand to the faction keys they touch"""
    assert FactionPolicy.USEC.targets() == ["usec"]
    assert FactionPolicy.BEAR.targets() == ["bear"]
    assert FactionPolicy.BOTH.targets() == ["usec", "bear"]
    assert FactionPolicy("both") is FactionPolicy.BOTH


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
