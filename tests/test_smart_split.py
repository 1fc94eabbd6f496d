"""
Tests for make/model/year splitting and column split analysis.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from models import SplitResult
from smart_split import (
    analyze_column_for_smart_split,
    canonical_make,
    extract_color_from_description,
    extract_year,
    find_known_make,
    get_sample_values,
    is_blank,
    split_make_model,
)


def test_split_simple_value():
    result = split_make_model("Toyota Camry 2023 XLE")
    assert result == SplitResult(make="Toyota", model="Camry", variant="XLE", year="2023")


def test_split_parent_company_prefix():
    result = split_make_model("GAC Honda Crider 180Turbo CVT Comfort")
    assert result.make == "Honda"
    assert result.model == "Crider"
    assert "180Turbo CVT Comfort" in result.variant
    assert result.year == ""


def test_split_parent_company_without_joint_venture_make():
    result = split_make_model("BYD Song Plus DM-i")
    assert result.make == "BYD"
    assert result.model == "Song"
    assert result.variant == "Plus DM-i"


def test_split_dongfeng_nissan():
    result = split_make_model("Dongfeng Nissan Sylphy 1.6L XL CVT")
    assert (result.make, result.model, result.variant) == ("Nissan", "Sylphy", "1.6L XL CVT")


def test_split_longest_make_wins():
    result = split_make_model("Land Rover Defender 110 2022")
    assert result.make == "Land Rover"
    assert result.model == "Defender"
    assert result.year == "2022"


def test_split_alias_and_acronym():
    assert split_make_model("VW Tiguan L 2017 330TSI").make == "Volkswagen"
    assert split_make_model("bmw X5 xDrive40i").make == "BMW"
    assert split_make_model("Chevy Tahoe LT").make == "Chevrolet"


def test_split_make_in_middle_keeps_leading_year():
    result = split_make_model("2019 Toyota Corolla Altis")
    assert result.make == "Toyota"
    assert result.model == "Corolla"
    assert result.variant == "Altis"
    assert result.year == "2019"


def test_split_chinese_year_marker():
    result = split_make_model("Honda Accord 2020年 Sport")
    assert result.year == "2020"
    assert result.model == "Accord"
    assert result.variant == "Sport"


def test_split_decimal_year():
    result = split_make_model("Nissan Patrol 2021.5 LE")
    assert result.year == "2021"
    assert result.model == "Patrol"
    assert result.variant == "LE"


def test_split_without_make():
    result = split_make_model("Unknown Thing 2020")
    assert result.make == ""
    assert result.model == "Unknown"
    assert result.year == "2020"


@pytest.mark.parametrize("value", ["", "   ", None, 2021])
def test_split_empty_or_non_string(value):
    assert split_make_model(value) == SplitResult()


def test_split_is_deterministic():
    value = "GAC Honda Crider 180Turbo CVT Comfort"
    assert split_make_model(value) == split_make_model(value)


@pytest.mark.parametrize("value,expected", [
    (2021, "2021"),
    ("2021年", "2021"),
    ("2021 Model", "2021"),
    ("2021.5", "2021"),
    ("2021.0", "2021"),
    ("1989", None),
    ("A2021", None),
    ("20215", None),
    ("", None),
    (None, None),
])
def test_extract_year(value, expected):
    assert extract_year(value) == expected


def test_canonical_make():
    assert canonical_make("HONDA") == "Honda"
    assert canonical_make("vw") == "Volkswagen"
    assert canonical_make("byd") == "BYD"
    assert canonical_make("Mercedes-Benz") == "Mercedes"


def test_find_known_make():
    assert find_known_make("GAC Honda Crider") == "Honda"
    assert find_known_make("Some Truck") is None
    assert find_known_make("   ") is None


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("  ")
    assert not is_blank(0)
    assert not is_blank("x")


def test_get_sample_values_skips_blanks():
    rows = [{"a": ""}, {"a": "x"}, {"a": None}, {"a": "  "}, {"a": "y"}, {"a": "z"}]
    assert get_sample_values(rows, "a", sample_size=2) == ["x", "y"]
    assert get_sample_values(rows, "missing") == []


def test_analyze_full_description_column():
    samples = [
        "GAC Honda Crider 180Turbo CVT Comfort",
        "GAC Honda Crider 180Turbo CVT Luxury",
        "Dongfeng Nissan Sylphy 1.6L XL CVT",
    ]
    analysis = analyze_column_for_smart_split(samples)
    assert analysis.should_split
    assert analysis.confidence == 80
    assert analysis.detected_makes == ["Honda", "Nissan"]
    assert not analysis.has_year_in_values
    assert analysis.data_type == "full_description"
    assert analysis.has_variant
    assert analysis.variant_confidence == 100
    assert len(analysis.previews) == 3
    assert analysis.previews[0]["make"] == "Honda"


def test_analyze_clean_make_model_column():
    analysis = analyze_column_for_smart_split(["HONDA Crider", "NISSAN Sylphy", "Toyota Camry 2020"])
    assert analysis.should_split
    assert analysis.data_type == "clean_make_model"
    assert analysis.has_year_in_values
    assert not analysis.has_variant


def test_analyze_non_vehicle_column():
    analysis = analyze_column_for_smart_split(["White", "Silver", "Black"])
    assert not analysis.should_split
    assert analysis.detected_makes == []
    assert analysis.data_type == ""


def test_analyze_empty_samples():
    analysis = analyze_column_for_smart_split([])
    assert not analysis.should_split
    assert analysis.confidence == 0


def test_extract_color_from_description():
    assert extract_color_from_description("Clean car, black leather, white paint") == "Black"
    assert extract_color_from_description("no colour named") == ""
    assert extract_color_from_description(None) == ""


def test_percentages_round_halves_up():
    samples = ["Honda Crider Comfort"] + ["Honda Crider"] * 7
    analysis = analyze_column_for_smart_split(samples)
    # 1 of 8 samples has a variant: 12.5%
    assert analysis.variant_confidence == 13
    assert analysis.confidence == 80
