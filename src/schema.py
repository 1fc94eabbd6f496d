"""
Listing schema definitions and mapping validation.

Defines the canonical vehicle fields, the role each one plays in a listing,
and validates user-confirmed column mappings against the required fields.
"""

from typing import Any, Dict, List, Mapping, Optional
from enum import Enum
import logging

from models import ColumnAnalysis, MappingValidation

logger = logging.getLogger(__name__)


class FieldRole(Enum):
    """Where a canonical field lives in a listing."""
    GROUPING = "grouping"
    LISTING = "listing"
    VEHICLE = "vehicle"


# Virtual field: the column is split into make/model/variant/year
COMBINED_MAKE_MODEL = "combined_make_model"

# Fields a combined column can fill, in split order
COMBINED_SPLITS_TO = ("make", "model", "variant", "year")


# Order determines display order
FIELD_DEFINITIONS = (
    # Grouping fields (define listing identity)
    {"key": "make", "label": "Make / Brand", "role": FieldRole.GROUPING},
    {"key": "model", "label": "Model", "role": FieldRole.GROUPING},
    {"key": "year", "label": "Year", "role": FieldRole.GROUPING},
    {"key": "color", "label": "Color", "role": FieldRole.GROUPING},

    # Listing-level fields (shared across grouped vehicles)
    {"key": "variant", "label": "Variant / Trim", "role": FieldRole.LISTING},
    {"key": "body_type", "label": "Body Type", "role": FieldRole.LISTING},
    {"key": "fuel_type", "label": "Fuel Type", "role": FieldRole.LISTING},
    {"key": "transmission", "label": "Transmission", "role": FieldRole.LISTING},
    {"key": "drivetrain", "label": "Drivetrain", "role": FieldRole.LISTING},
    {"key": "engine_size", "label": "Engine Size", "role": FieldRole.LISTING},
    {"key": "cylinders", "label": "Cylinders", "role": FieldRole.LISTING},
    {"key": "horsepower", "label": "Horsepower", "role": FieldRole.LISTING},
    {"key": "seating_capacity", "label": "Seating Capacity", "role": FieldRole.LISTING},
    {"key": "doors", "label": "Number of Doors", "role": FieldRole.LISTING},
    {"key": "condition", "label": "Condition", "role": FieldRole.LISTING},
    {"key": "regional_specs", "label": "Regional Specs", "role": FieldRole.LISTING},
    {"key": "city", "label": "City", "role": FieldRole.LISTING},
    {"key": "country", "label": "Country", "role": FieldRole.LISTING},
    {"key": "description", "label": "Description", "role": FieldRole.LISTING},

    # Vehicle-specific fields (different for each physical unit)
    {"key": "vin", "label": "VIN", "role": FieldRole.VEHICLE},
    {"key": "registration_number", "label": "Registration Number", "role": FieldRole.VEHICLE},
    {"key": "mileage", "label": "Mileage", "role": FieldRole.VEHICLE},
    {"key": "owners", "label": "Number of Owners", "role": FieldRole.VEHICLE},
    {"key": "warranty", "label": "Warranty", "role": FieldRole.VEHICLE},
    {"key": "price", "label": "Price", "role": FieldRole.VEHICLE},
    {"key": "incoterm", "label": "Incoterm", "role": FieldRole.VEHICLE},
    {"key": "inspection_report_link", "label": "Inspection Report Link", "role": FieldRole.VEHICLE},
)

_FIELD_ROLES = {definition["key"]: definition["role"] for definition in FIELD_DEFINITIONS}


def _keys_with_role(role: FieldRole) -> tuple:
    return tuple(d["key"] for d in FIELD_DEFINITIONS if d["role"] is role)


GROUPING_FIELDS = _keys_with_role(FieldRole.GROUPING)
LISTING_FIELDS = _keys_with_role(FieldRole.LISTING)
VEHICLE_FIELDS = _keys_with_role(FieldRole.VEHICLE)


def get_field_role(field_key: str) -> Optional[FieldRole]:
    """Return the role of a canonical field, or None for unknown keys."""
    return _FIELD_ROLES.get(field_key)


def get_field_label(field_key: str) -> str:
    for definition in FIELD_DEFINITIONS:
        if definition["key"] == field_key:
            return definition["label"]
    if field_key == COMBINED_MAKE_MODEL:
        return "Split Combined Column"
    return field_key


def is_canonical_field(field_key: Any) -> bool:
    return field_key in _FIELD_ROLES


def is_combined_field(field_key: Any) -> bool:
    return field_key == COMBINED_MAKE_MODEL


def get_required_field_keys() -> List[str]:
    """Required fields are exactly the grouping fields."""
    return list(GROUPING_FIELDS)


def validate_mapping(
    mapping: Mapping[str, Optional[str]],
    analysis: Optional[ColumnAnalysis] = None,
) -> MappingValidation:
    """
    Validate a column mapping against the required fields.

    A required field is fulfilled when a column maps to it directly, or when
    a combined column will produce it on split. Combined columns always
    fulfill make and model; they fulfill year only when the column analysis
    saw a year in the column's samples. Variant fulfillment is reported but
    never required.

    Args:
        mapping: Column -> canonical field key, combined marker, or None
        analysis: Optional column analysis used to check for years in samples

    Returns:
        MappingValidation (no side effects)
    """
    fulfilled_by: Dict[str, str] = {}
    direct_fields = set()

    for column, field_key in mapping.items():
        if not field_key:
            continue
        if is_combined_field(field_key):
            fulfilled = ["make", "model", "variant"]
            split_analysis = analysis.split_analysis.get(column) if analysis else None
            if split_analysis is not None and split_analysis.has_year_in_values:
                fulfilled.append("year")
            for target in fulfilled:
                fulfilled_by.setdefault(target, column)
        else:
            direct_fields.add(field_key)

    missing_required = [
        f for f in get_required_field_keys()
        if f not in direct_fields and f not in fulfilled_by
    ]

    # One warning per canonical field that more than one column feeds
    field_counts: Dict[str, int] = {}
    for field_key in mapping.values():
        if field_key and not is_combined_field(field_key):
            field_counts[field_key] = field_counts.get(field_key, 0) + 1
    warnings = [
        f'Field "{field_key}" is mapped to multiple columns'
        for field_key, count in field_counts.items()
        if count > 1
    ]

    if missing_required:
        logger.debug(f"[Validate] Missing required fields: {missing_required}")

    return MappingValidation(
        is_valid=not missing_required,
        missing_required=missing_required,
        warnings=warnings,
        fulfilled_by=fulfilled_by,
    )


def get_unmapped_columns(
    columns: List[str],
    mapping: Mapping[str, Optional[str]],
    skip_columns: Optional[List[str]] = None,
    feature_columns: Optional[List[str]] = None,
) -> List[str]:
    """Columns that are neither mapped nor classified as skip/feature."""
    mapped = {col for col, field_key in mapping.items() if field_key}
    excluded = set(skip_columns or []) | set(feature_columns or [])
    return [col for col in columns if col not in mapped and col not in excluded]


def invert_mapping(mapping: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Invert { column: field } to { field: column }; the last column wins."""
    inverted = {}
    for column, field_key in mapping.items():
        if field_key:
            inverted[field_key] = column
    return inverted
