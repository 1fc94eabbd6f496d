"""
Import pipeline for dealer stock sheets.

Analyzes the columns, builds or accepts a column mapping, validates it,
transforms every row into a vehicle record and groups the vehicles into
listings. Optionally persists the result to a listing store.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from pathlib import Path
import logging

from analyzer import analyze_columns, generate_initial_mapping
from grouping import group_vehicles_into_listings
from header_matcher import HeaderMatcher
from models import ColumnAnalysis, ImportResult
from schema import get_field_label, is_canonical_field, is_combined_field, validate_mapping
from sources import read_table
from storage import ListingStore
from transforms import transform_to_vehicles
import config

logger = logging.getLogger(__name__)


class NormalizationError(Exception):
    """Raised when normalization fails."""
    pass


def build_mapping(
    analysis: ColumnAnalysis,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
) -> Dict[str, Optional[str]]:
    """
    Build the column mapping for an import.

    Starts from the analysis' initial mapping and applies user overrides on
    top. An override of None (or "") unmaps the column. A field claimed by an
    override is taken away from the auto-detected columns that had it.

    Raises:
        NormalizationError: If an override names an unknown field
    """
    overrides = overrides or {}
    for column, field_key in overrides.items():
        if field_key and not (is_canonical_field(field_key) or is_combined_field(field_key)):
            raise NormalizationError(f"Unknown field '{field_key}' for column '{column}'")

    claimed = {f for f in overrides.values() if f and not is_combined_field(f)}
    mapping: Dict[str, Optional[str]] = {
        column: field_key
        for column, field_key in generate_initial_mapping(analysis).items()
        if column in overrides or field_key not in claimed
    }
    for column, field_key in overrides.items():
        if not field_key:
            mapping.pop(column, None)
            continue
        mapping[column] = field_key
    return mapping


def _describe_missing(missing: List[str]) -> str:
    return ", ".join(get_field_label(field_key) for field_key in missing)


def import_listings(
    columns: Sequence[str],
    rows: Sequence[Dict[str, Any]],
    mapping: Optional[Mapping[str, Optional[str]]] = None,
    default_incoterm: Optional[str] = None,
    matcher: Optional[HeaderMatcher] = None,
    store: Optional[ListingStore] = None,
    sample_size: Optional[int] = None,
    color_from_description: bool = False,
    source: Optional[str] = None,
) -> ImportResult:
    """
    Run the full import over already-read sheet data.

    Args:
        columns: Column names in source order
        rows: Row dictionaries keyed by column name
        mapping: Mapping overrides on top of the auto-detected mapping
        default_incoterm: Incoterm for rows without one (config default if None)
        matcher: Header matcher (default synonym table if None)
        store: Listing store to save the listings and last import to
        sample_size: Sample values per column (config default if None)
        color_from_description: Fill a missing color from the description
        source: File name or label recorded with the import

    Returns:
        ImportResult

    Raises:
        NormalizationError: If the mapping leaves required fields unfulfilled
    """
    if default_incoterm is None:
        default_incoterm = config.DEFAULT_INCOTERM
    if sample_size is None:
        sample_size = config.SAMPLE_SIZE

    analysis = analyze_columns(columns, rows, matcher=matcher, sample_size=sample_size)
    final_mapping = build_mapping(analysis, mapping)

    validation = validate_mapping(final_mapping, analysis)
    for warning in validation.warnings:
        logger.warning(f"[Import] {warning}")
    if not validation.is_valid:
        raise NormalizationError(
            f"Missing required fields: {_describe_missing(validation.missing_required)}"
        )

    vehicles = transform_to_vehicles(
        rows,
        final_mapping,
        default_incoterm=default_incoterm,
        color_from_description=color_from_description,
    )
    listings = group_vehicles_into_listings(vehicles)

    logger.debug(
        f"[Import] {len(rows)} rows -> {len(vehicles)} vehicles -> {len(listings)} listings"
    )

    if store is not None:
        if not store.save_listings(listings):
            logger.warning(f"[Import] Listings could not be saved to {store.path}")
        store.save_last_import({
            "file_name": source,
            "columns": list(columns),
            "mapping": final_mapping,
            "row_count": len(rows),
        })

    return ImportResult(
        listings=listings,
        vehicles=vehicles,
        mapping=final_mapping,
        analysis=analysis,
        validation=validation,
        source=source,
    )


def import_file(
    path: Union[str, Path],
    mapping: Optional[Mapping[str, Optional[str]]] = None,
    default_incoterm: Optional[str] = None,
    sheet_name: Optional[Union[str, int]] = None,
    **kwargs: Any,
) -> ImportResult:
    """
    Read a sheet file and import it.

    Extra keyword arguments are passed to import_listings.

    Raises:
        FileNotFoundError: If the file does not exist
        NormalizationError: If the file cannot be read or the mapping is invalid
    """
    try:
        table = read_table(path, sheet_name=sheet_name)
    except ValueError as e:
        raise NormalizationError(f"Cannot read {path}: {e}") from e

    if not table.rows:
        raise NormalizationError(f"No data rows in {path}")

    return import_listings(
        table.columns,
        table.rows,
        mapping=mapping,
        default_incoterm=default_incoterm,
        source=Path(path).name,
        **kwargs,
    )
