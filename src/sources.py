"""
Source detection and tabular data extraction.

Reads dealer stock sheets (XLSX, CSV, JSON exports) into an ordered list of
column names and a list of row dictionaries, and writes listings back out.
"""

from typing import Any, Dict, List, Optional, Sequence, Union
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging
import json

import pandas as pd
from openpyxl import load_workbook

from schema import GROUPING_FIELDS, LISTING_FIELDS, VEHICLE_FIELDS

logger = logging.getLogger(__name__)


class SourceType(Enum):
    """Supported data source types."""
    XLSX = "xlsx_file"
    CSV = "csv"
    JSON = "json"
    UNKNOWN = "unknown"


@dataclass
class TabularData:
    """
    A fully materialized sheet.

    Attributes:
        columns: Column names in source order
        rows: One dict per data row, keyed by column name
        sheet_name: Sheet the data came from (XLSX only)
    """
    columns: List[str] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)
    sheet_name: Optional[str] = None

    @property
    def row_count(self) -> int:
        return len(self.rows)


def detect_source_type(source: Union[str, Path]) -> SourceType:
    """
    Detect the type of a data source from its file extension.

    Args:
        source: File path

    Returns:
        SourceType enum value
    """
    suffix = Path(source).suffix.lower()
    if suffix in (".xlsx", ".xlsm"):
        return SourceType.XLSX
    elif suffix == ".csv":
        return SourceType.CSV
    elif suffix == ".json":
        return SourceType.JSON
    return SourceType.UNKNOWN


def _clean_cell(value: Any) -> Any:
    """Convert pandas cell values to plain Python values; NaN becomes None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime().isoformat()
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "item"):
        # numpy scalar
        return value.item()
    return value


def _frame_to_table(df: "pd.DataFrame", sheet_name: Optional[str] = None) -> TabularData:
    columns = [str(col) for col in df.columns]
    rows = []
    for record in df.itertuples(index=False, name=None):
        rows.append({col: _clean_cell(val) for col, val in zip(columns, record)})
    return TabularData(columns=columns, rows=rows, sheet_name=sheet_name)


def _read_json(file_path: Path) -> TabularData:
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Airtable-style export: {"records": [{"fields": {...}}, ...]}
    if isinstance(data, dict) and "records" in data:
        records = [r.get("fields", {}) for r in data["records"] if isinstance(r, dict)]
    elif isinstance(data, dict) and "rows" in data:
        records = data["rows"]
    elif isinstance(data, list):
        records = data
    else:
        raise ValueError(f"Unexpected JSON layout in {file_path}")

    columns: List[str] = []
    rows = []
    for record in records:
        if not isinstance(record, dict):
            continue
        for key in record:
            if key not in columns:
                columns.append(key)
        rows.append(dict(record))
    return TabularData(columns=columns, rows=rows)


def read_table(
    source: Union[str, Path],
    source_type: Optional[SourceType] = None,
    sheet_name: Optional[Union[str, int]] = None,
) -> TabularData:
    """
    Read a sheet into columns and rows.

    CSV cells are read as strings (empty cells as ""); XLSX cells keep their
    types with empty cells as None.

    Args:
        source: File path
        source_type: Optional explicit source type (auto-detected if not provided)
        sheet_name: XLSX sheet name or index (first sheet by default)

    Returns:
        TabularData

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the source type is not supported
    """
    file_path = Path(source)
    if not file_path.exists():
        raise FileNotFoundError(f"Source file not found: {file_path}")

    if source_type is None:
        source_type = detect_source_type(file_path)

    logger.debug(f"[Sources] Reading {file_path} as {source_type.value}")

    if source_type == SourceType.CSV:
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        return _frame_to_table(df)

    elif source_type == SourceType.XLSX:
        sheet = 0 if sheet_name is None else sheet_name
        df = pd.read_excel(file_path, sheet_name=sheet, dtype=object, engine="openpyxl")
        label = sheet if isinstance(sheet, str) else list_sheets(file_path)[sheet]
        return _frame_to_table(df, sheet_name=label)

    elif source_type == SourceType.JSON:
        return _read_json(file_path)

    raise ValueError(f"Unsupported source type for {file_path}")


def list_sheets(source: Union[str, Path]) -> List[str]:
    """List the sheet names of an XLSX workbook."""
    workbook = load_workbook(Path(source), read_only=True)
    try:
        return list(workbook.sheetnames)
    finally:
        workbook.close()


def flatten_listings(listings: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One row per vehicle, carrying its listing's shared fields."""
    rows = []
    for listing in listings:
        shared = {"listing_id": listing.get("id")}
        for key in GROUPING_FIELDS + LISTING_FIELDS:
            shared[key] = listing.get(key)
        shared["status"] = listing.get("status")
        for vehicle in listing.get("vehicles", []):
            row = dict(shared)
            for key in VEHICLE_FIELDS:
                row[key] = vehicle.get(key)
            rows.append(row)
    return rows


def export_listings(listings: Sequence[Dict[str, Any]], destination: Union[str, Path]) -> Path:
    """
    Write listings to XLSX or CSV, one row per vehicle.

    Raises:
        ValueError: If the destination extension is not .xlsx or .csv
    """
    path = Path(destination)
    df = pd.DataFrame(
        flatten_listings(listings),
        columns=["listing_id", *GROUPING_FIELDS, *LISTING_FIELDS, "status", *VEHICLE_FIELDS],
    )

    destination_type = detect_source_type(path)
    if destination_type == SourceType.XLSX:
        df.to_excel(path, index=False, sheet_name="Listings", engine="openpyxl")
    elif destination_type == SourceType.CSV:
        df.to_csv(path, index=False, encoding="utf-8")
    else:
        raise ValueError(f"Unsupported export format: {path.suffix}")

    logger.debug(f"[Sources] Exported {len(df)} vehicle rows to {path}")
    return path
