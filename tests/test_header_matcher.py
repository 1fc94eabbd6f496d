"""
Tests for header matching and skip/feature classification.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from header_matcher import (
    DEFAULT_MATCHER,
    HeaderMatcher,
    auto_detect_mapping,
    is_feature_column,
    is_skippable,
    match_header,
    might_be_combined_column,
    normalize_header,
    score_synonym,
)


@pytest.mark.parametrize("header,expected", [
    ("VIN", "vin"),
    ("Ext.Color", "color"),
    ("Colour", "color"),
    ("Brand", "make"),
    ("Model Year", "year"),
    ("Milage（KM)", "mileage"),
    ("CIF Cost", "price"),
    ("Chassis No", "vin"),
    ("Gearbox", "transmission"),
    ("  PRICE  ", "price"),
])
def test_match_header_known_headers(header, expected):
    assert match_header(header) == expected


def test_match_header_unknown_returns_none():
    assert match_header("Zzqx") is None
    assert match_header("") is None
    assert match_header(None) is None


def test_match_header_is_deterministic():
    headers = ["VIN", "Ext.Color", "MODEL NAME", "Selling Price", "Engine CC"]
    first = [match_header(h) for h in headers]
    for _ in range(3):
        assert [match_header(h) for h in headers] == first


def test_score_rules_in_order():
    assert score_synonym("vin", "vin") == 100
    assert score_synonym("ext-color", "ext.color") == 85
    assert score_synonym("model", "model year") == 80
    assert score_synonym("price usd", "price") == 75
    assert score_synonym("pricing", "price") == 70
    assert score_synonym("car price", "price") == 50 + len("price")
    assert score_synonym("odo", "odometer") == 30 + len("odo")
    assert score_synonym("xyz", "price") == 0


def test_normalize_header():
    assert normalize_header("  Ext.Color ") == "ext.color"
    assert normalize_header(None) == ""
    assert normalize_header(2021) == "2021"


def test_auto_detect_claims_fields_left_to_right():
    mapping = auto_detect_mapping(["Color", "Exterior Color", "VIN"])
    assert mapping["Color"] == "color"
    assert mapping["VIN"] == "vin"
    # "color" is already claimed, so the second column must go elsewhere
    assert mapping.get("Exterior Color") != "color"


def test_auto_detect_is_call_local():
    first = auto_detect_mapping(["VIN"])
    second = auto_detect_mapping(["VIN"])
    assert first == second == {"VIN": "vin"}


def test_with_synonyms_returns_new_matcher():
    extended = DEFAULT_MATCHER.add_synonym("vin", "frame number")
    assert extended.match_header("Frame Number") == "vin"
    assert DEFAULT_MATCHER.match_header("Frame Number") != "vin"
    assert "frame number" not in DEFAULT_MATCHER.synonyms["vin"]


def test_with_synonyms_unknown_field():
    with pytest.raises(KeyError):
        DEFAULT_MATCHER.with_synonyms({"not_a_field": ["x"]})


def test_synonym_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_MATCHER.synonyms["vin"] = ("x",)


def test_custom_table():
    matcher = HeaderMatcher({"price": ["Tag"]})
    assert matcher.match_header("tag") == "price"
    assert matcher.match_header("VIN") is None
    assert matcher.is_exact_synonym("TAG")


@pytest.mark.parametrize("header", ["No", "Sr. No", "S.No", "#", "ID", "Row", "serial number", "Stock No"])
def test_is_skippable(header):
    assert is_skippable(header)


@pytest.mark.parametrize("header", ["VIN", "Notes", "Model", "Brand"])
def test_is_not_skippable(header):
    assert not is_skippable(header)


def test_is_feature_column():
    assert is_feature_column("Feature 1")
    assert is_feature_column("feature")
    assert is_feature_column("Option 12")
    assert is_feature_column("Equipment")
    assert not is_feature_column("Features list")
    assert not is_feature_column("Model")


def test_might_be_combined_column():
    assert might_be_combined_column("MODEL NAME")
    assert might_be_combined_column("Vehicle")
    assert might_be_combined_column("车型")
    assert not might_be_combined_column("Price")
