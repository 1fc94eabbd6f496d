"""
Vehicle transformer: applies a confirmed column mapping to raw sheet rows.

PRECEDENCE: direct column mappings always win over split-extracted values.
If "Brand" is mapped to make, it wins over the make split out of a combined
"MODEL NAME" column. Later steps only fill fields that are still empty.
"""

import re
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from schema import COMBINED_SPLITS_TO, is_combined_field
from smart_split import (
    CHINESE_YEAR_MARKER,
    extract_color_from_description,
    extract_year,
    is_blank,
    split_make_model,
)

logger = logging.getLogger(__name__)

# Mileage below this is assumed to be recorded in thousands of km
MILEAGE_THOUSANDS_THRESHOLD = 500

_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_MILEAGE_NOISE_RE = re.compile(r"[,\s]")


def clean_year(value: Any) -> Any:
    """
    Normalize a year value to a 4-digit string.

    Removes the Chinese year marker and re-extracts the year; values with no
    recognizable year are returned unchanged.
    """
    if is_blank(value):
        return value
    year = extract_year(str(value).replace(CHINESE_YEAR_MARKER, ""))
    return year if year else value


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """
    Parse the leading number of a value ("45,000 km" -> 45000, "2e5" -> 200000).

    Returns:
        int for integral values, float otherwise, None if not numeric
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        text = _MILEAGE_NOISE_RE.sub("", str(value))
        match = _LEADING_NUMBER_RE.match(text)
        if not match:
            return None
        try:
            number = float(match.group(0))
        except ValueError:
            return None
    if isinstance(number, float):
        if number != number or number in (float("inf"), float("-inf")):
            return None
        if number.is_integer():
            return int(number)
    return number


def clean_mileage(value: Any) -> Any:
    """
    Normalize mileage to a number of km.

    Thousands separators and whitespace are stripped. Values below 500 are
    taken to be in thousands of km and multiplied by 1000. Non-numeric
    values are returned unchanged.
    """
    if is_blank(value):
        return value
    number = parse_number(value)
    if number is None:
        return value
    if number < MILEAGE_THOUSANDS_THRESHOLD:
        number = number * 1000
        if isinstance(number, float) and number.is_integer():
            number = int(number)
    return number


def transform_row(
    row: Mapping[str, Any],
    mapping: Mapping[str, Optional[str]],
    default_incoterm: Optional[str] = None,
    color_from_description: bool = False,
) -> Dict[str, Any]:
    """
    Transform one raw row into a vehicle record.

    Steps, in order:
    1. Direct mappings copy non-empty values verbatim; when several columns
       feed one field, the last one with a value wins
    2. Combined columns are split; split values fill only empty fields
    3. Year cleanup
    4. Mileage normalization
    5. Default incoterm
    6. Color from description (optional)
    """
    vehicle: Dict[str, Any] = {}

    # STEP 1: direct mappings (last column with a value wins per field)
    for column, field_key in mapping.items():
        if not field_key or is_combined_field(field_key):
            continue
        value = row.get(column)
        if is_blank(value):
            continue
        vehicle[field_key] = value

    # STEP 2: split fields, only where nothing is set yet
    for column, field_key in mapping.items():
        if not is_combined_field(field_key):
            continue
        value = row.get(column)
        if is_blank(value):
            continue
        split = split_make_model(str(value))
        for target in COMBINED_SPLITS_TO:
            split_value = getattr(split, target)
            if split_value and target not in vehicle:
                vehicle[target] = split_value

    # STEP 3: year cleanup ("2021年", "2021.0")
    if "year" in vehicle:
        vehicle["year"] = clean_year(vehicle["year"])

    # STEP 4: mileage
    if "mileage" in vehicle:
        vehicle["mileage"] = clean_mileage(vehicle["mileage"])

    # STEP 5: default incoterm
    if "incoterm" not in vehicle and default_incoterm:
        vehicle["incoterm"] = default_incoterm

    # STEP 6: color from description
    if color_from_description and "color" not in vehicle:
        color = extract_color_from_description(vehicle.get("description"))
        if color:
            vehicle["color"] = color

    return vehicle


def transform_to_vehicles(
    rows: Sequence[Mapping[str, Any]],
    mapping: Mapping[str, Optional[str]],
    default_incoterm: Optional[str] = None,
    color_from_description: bool = False,
) -> List[Dict[str, Any]]:
    """
    Transform raw rows into vehicle records using a column mapping.

    Never rejects a row: malformed values are kept as-is or left out, and
    every input row yields exactly one record.

    Args:
        rows: Raw row dictionaries keyed by column name
        mapping: Column -> canonical field key or combined marker
        default_incoterm: Incoterm for rows with no incoterm value
        color_from_description: Fill a missing color from the description

    Returns:
        List of vehicle records, same order as rows
    """
    vehicles = [
        transform_row(row, mapping, default_incoterm, color_from_description)
        for row in rows
    ]
    logger.debug(f"[Transform] {len(vehicles)} rows transformed")
    return vehicles
