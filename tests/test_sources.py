"""
Tests for reading dealer sheets and exporting listings.
"""

import sys
import json
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from grouping import group_vehicles_into_listings
from sources import (
    SourceType,
    detect_source_type,
    export_listings,
    flatten_listings,
    list_sheets,
    read_table,
)

FIXTURE = ROOT / "tests" / "listings" / "structured" / "dealer_stock_sheet.csv"


def test_detect_source_type():
    assert detect_source_type("stock.XLSX") is SourceType.XLSX
    assert detect_source_type("stock.csv") is SourceType.CSV
    assert detect_source_type(Path("stock.json")) is SourceType.JSON
    assert detect_source_type("stock.pdf") is SourceType.UNKNOWN


def test_read_csv_fixture():
    table = read_table(FIXTURE)
    assert table.columns == [
        "No", "MODEL NAME", "Brand", "Year", "Ext.Color", "VIN",
        "Milage（KM)", "CIF Cost", "Feature 1",
    ]
    assert table.row_count == 12
    first = table.rows[0]
    assert first["MODEL NAME"] == "GAC Honda Crider 180Turbo CVT Comfort"
    assert first["Year"] == "2021年"
    assert first["Milage（KM)"] == "12,500"
    # Empty CSV cells stay empty strings
    assert table.rows[2]["Feature 1"] == ""
    assert table.rows[2]["Ext.Color"] == "white "


def test_read_xlsx(tmp_path):
    path = tmp_path / "stock.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame({"Brand": ["Honda", None], "Year": [2021, 2020]}).to_excel(
            writer, sheet_name="Cover", index=False
        )
        pd.DataFrame({"VIN": ["V1", "V2"], "Mileage": [450, None]}).to_excel(
            writer, sheet_name="Stock", index=False
        )

    assert list_sheets(path) == ["Cover", "Stock"]

    first = read_table(path)
    assert first.sheet_name == "Cover"
    assert first.columns == ["Brand", "Year"]
    assert first.rows[1]["Brand"] is None
    assert first.rows[0]["Year"] == 2021

    stock = read_table(path, sheet_name="Stock")
    assert stock.sheet_name == "Stock"
    assert stock.rows[0] == {"VIN": "V1", "Mileage": 450}
    assert stock.rows[1]["Mileage"] is None


def test_read_json_records(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text(json.dumps({"records": [
        {"id": "rec1", "fields": {"Brand": "Honda", "VIN": "V1"}},
        {"id": "rec2", "fields": {"Brand": "Nissan", "Color": "White"}},
    ]}), encoding="utf-8")

    table = read_table(path)
    assert table.columns == ["Brand", "VIN", "Color"]
    assert table.rows[1] == {"Brand": "Nissan", "Color": "White"}


def test_read_json_list(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text(json.dumps([{"Brand": "Honda"}]), encoding="utf-8")
    assert read_table(path).rows == [{"Brand": "Honda"}]


def test_read_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_table(tmp_path / "missing.csv")

    unknown = tmp_path / "stock.pdf"
    unknown.write_bytes(b"%PDF")
    with pytest.raises(ValueError):
        read_table(unknown)

    bad_json = tmp_path / "bad.json"
    bad_json.write_text('"just a string"', encoding="utf-8")
    with pytest.raises(ValueError):
        read_table(bad_json)


def make_listings():
    return group_vehicles_into_listings([
        {"make": "Honda", "model": "Crider", "year": "2021", "color": "White", "vin": "V1"},
        {"make": "Honda", "model": "Crider", "year": "2021", "color": "White", "vin": "V2"},
        {"make": "Nissan", "model": "Sylphy", "year": "2021", "color": "White", "vin": "V3"},
    ])


def test_flatten_listings():
    rows = flatten_listings(make_listings())
    assert [r["vin"] for r in rows] == ["V1", "V2", "V3"]
    assert rows[0]["listing_id"] == "honda_crider_2021_white"
    assert rows[2]["make"] == "Nissan"
    assert rows[0]["status"] == "draft"


def test_export_csv_and_xlsx(tmp_path):
    listings = make_listings()

    csv_path = export_listings(listings, tmp_path / "out.csv")
    exported = read_table(csv_path)
    assert exported.row_count == 3
    assert exported.columns[:5] == ["listing_id", "make", "model", "year", "color"]
    assert [r["vin"] for r in exported.rows] == ["V1", "V2", "V3"]

    xlsx_path = export_listings(listings, tmp_path / "out.xlsx")
    assert list_sheets(xlsx_path) == ["Listings"]
    assert read_table(xlsx_path).rows[2]["make"] == "Nissan"

    with pytest.raises(ValueError):
        export_listings(listings, tmp_path / "out.txt")
