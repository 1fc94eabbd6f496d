"""
Mappings module - Contains the header synonym and vehicle make tables
"""

from .vehicles_mappings import (
    COLUMN_SYNONYMS,
    SKIP_PATTERNS,
    FEATURE_COLUMN_PATTERNS,
    COMBINED_COLUMN_HINTS,
    SAMPLE_COLOR_NAMES,
)
from .makes_mappings import (
    KNOWN_MAKES,
    MAKE_ALIASES,
    ACRONYM_FIXUPS,
    PARENT_COMPANIES,
    DESCRIPTION_COLORS,
)


def get_synonyms(field_key: str):
    """
    Get the header synonyms for a canonical field.

    Args:
        field_key: Canonical field key (e.g., "mileage")

    Returns:
        Tuple of lowercase header variants
    """
    if field_key not in COLUMN_SYNONYMS:
        raise KeyError(f"Field '{field_key}' not found.")
    return COLUMN_SYNONYMS[field_key]

