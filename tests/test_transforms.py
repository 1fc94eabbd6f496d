"""
Tests for the vehicle transformer.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from schema import COMBINED_MAKE_MODEL
from transforms import (
    clean_mileage,
    clean_year,
    parse_number,
    transform_row,
    transform_to_vehicles,
)


@pytest.mark.parametrize("value,expected", [
    (450, 450000),
    ("450", 450000),
    (45000, 45000),
    ("45,000", 45000),
    ("12 500 km", 12500),
    ("0.5", 500),
    ("8", 8000),
    (499.5, 499500),
    (500, 500),
    ("2e5", 200000),
    ("1.5E3 km", 1500),
    ("n/a", "n/a"),
    ("", ""),
    (None, None),
])
def test_clean_mileage(value, expected):
    assert clean_mileage(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("2021年", "2021"),
    ("2021.0", "2021"),
    (2021, "2021"),
    (" 2019 ", "2019"),
    ("unknown", "unknown"),
    (None, None),
])
def test_clean_year(value, expected):
    assert clean_year(value) == expected


def test_parse_number():
    assert parse_number("45,000 km") == 45000
    assert parse_number("1.5") == 1.5
    assert parse_number("2e5") == 200000
    assert parse_number("2.5e-1") == 0.25
    assert parse_number("12e") == 12
    assert parse_number(True) is None
    assert parse_number("abc") is None
    assert parse_number(float("nan")) is None


def test_direct_mapping_copies_values():
    row = {"Brand": "Toyota", "VIN": "JT123", "Notes": "ignored"}
    vehicle = transform_row(row, {"Brand": "make", "VIN": "vin", "Notes": None})
    assert vehicle == {"make": "Toyota", "vin": "JT123"}


def test_blank_values_are_left_out():
    vehicle = transform_row({"Brand": "  ", "VIN": None}, {"Brand": "make", "VIN": "vin"})
    assert vehicle == {}


def test_split_fills_fields():
    row = {"Vehicle": "Toyota Camry 2023 XLE"}
    vehicle = transform_row(row, {"Vehicle": COMBINED_MAKE_MODEL})
    assert vehicle == {"make": "Toyota", "model": "Camry", "variant": "XLE", "year": "2023"}


def test_direct_make_beats_split_make():
    row = {"Brand": "Honda", "Description": "Toyota Camry 2023 XLE"}
    mapping = {"Description": COMBINED_MAKE_MODEL, "Brand": "make"}
    vehicle = transform_row(row, mapping)
    assert vehicle["make"] == "Honda"
    assert vehicle["model"] == "Camry"


def test_direct_year_beats_split_year():
    row = {"Year": "2021年", "MODEL NAME": "Honda Crider 2019 Comfort"}
    vehicle = transform_row(row, {"MODEL NAME": COMBINED_MAKE_MODEL, "Year": "year"})
    assert vehicle["year"] == "2021"


def test_last_direct_column_with_value_wins():
    mapping = {"Color": "color", "Ext Color": "color", "Body Color": "color"}
    assert transform_row({"Color": "", "Ext Color": "Silver", "Body Color": "Red"}, mapping)["color"] == "Red"
    assert transform_row({"Color": "White", "Ext Color": "Silver", "Body Color": ""}, mapping)["color"] == "Silver"
    assert transform_row({"Color": "White", "Ext Color": None, "Body Color": "  "}, mapping)["color"] == "White"


def test_first_combined_column_wins():
    row = {"A": "Honda Crider Comfort", "B": "Nissan Sylphy XL"}
    vehicle = transform_row(row, {"A": COMBINED_MAKE_MODEL, "B": COMBINED_MAKE_MODEL})
    assert (vehicle["make"], vehicle["model"]) == ("Honda", "Crider")


def test_unsplittable_value_adds_nothing():
    vehicle = transform_row({"Vehicle": "   "}, {"Vehicle": COMBINED_MAKE_MODEL})
    assert vehicle == {}


def test_default_incoterm():
    mapping = {"Terms": "incoterm"}
    assert transform_row({"Terms": ""}, mapping, default_incoterm="FOB")["incoterm"] == "FOB"
    assert transform_row({"Terms": "CIF"}, mapping, default_incoterm="FOB")["incoterm"] == "CIF"
    assert "incoterm" not in transform_row({"Terms": ""}, mapping)


def test_color_from_description_is_optional():
    row = {"Notes": "Pearl white, one owner"}
    mapping = {"Notes": "description"}
    assert "color" not in transform_row(row, mapping)
    assert transform_row(row, mapping, color_from_description=True)["color"] == "White"


def test_transform_keeps_every_row():
    rows = [{"Mileage": "abc"}, {}, {"Mileage": "450"}]
    vehicles = transform_to_vehicles(rows, {"Mileage": "mileage"})
    assert len(vehicles) == 3
    assert vehicles[0]["mileage"] == "abc"
    assert vehicles[1] == {}
    assert vehicles[2]["mileage"] == 450000


def test_transform_is_deterministic():
    rows = [{"Vehicle": "GAC Honda Crider 180Turbo CVT Comfort", "Milage": "8"}]
    mapping = {"Vehicle": COMBINED_MAKE_MODEL, "Milage": "mileage"}
    assert transform_to_vehicles(rows, mapping) == transform_to_vehicles(rows, mapping)
