"""
Grouping logic for vehicle listings.

Groups individual vehicles into listings by (make, model, year, color).
Listing-level attributes are stored once per listing; vehicle-specific
attributes are kept per unit.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence

from schema import GROUPING_FIELDS, LISTING_FIELDS, VEHICLE_FIELDS

logger = logging.getLogger(__name__)


def generate_listing_key(vehicle: Mapping[str, Any]) -> str:
    """
    Build the grouping key: lower-cased, trimmed grouping values joined by "_".

    Missing values count as empty strings.
    """
    parts = []
    for key in GROUPING_FIELDS:
        value = vehicle.get(key)
        parts.append("" if value is None else str(value).lower().strip())
    return "_".join(parts)


def new_listing(listing_id: str, vehicle: Mapping[str, Any]) -> Dict[str, Any]:
    """Create an empty listing seeded from the first vehicle of its group."""
    listing: Dict[str, Any] = {"id": listing_id}
    for key in GROUPING_FIELDS:
        listing[key] = vehicle.get(key)
    for key in LISTING_FIELDS:
        listing[key] = vehicle.get(key)
    listing.update({
        "vehicles": [],
        "count": 0,
        # Edit-only fields
        "features": [],
        "images": [],
        "allow_negotiations": False,
        "status": "draft",
    })
    return listing


def group_vehicles_into_listings(vehicles: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Group vehicle records into listings.

    The first vehicle of a group decides its grouping and listing-level
    values; later vehicles only add their vehicle-specific fields. Listings
    come out in the order their key was first seen.

    Args:
        vehicles: Vehicle records from transform_to_vehicles

    Returns:
        List of listing dicts with nested vehicles and count
    """
    groups: Dict[str, Dict[str, Any]] = {}

    for vehicle in vehicles:
        key = generate_listing_key(vehicle)
        listing = groups.get(key)
        if listing is None:
            listing = new_listing(key, vehicle)
            groups[key] = listing

        listing["vehicles"].append({k: vehicle.get(k) for k in VEHICLE_FIELDS})
        listing["count"] += 1

    logger.debug(f"[Grouping] {len(vehicles)} vehicles -> {len(groups)} listings")
    return list(groups.values())


def get_listings_stats(listings: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Summary statistics for a listing collection."""
    total_vehicles = sum(listing.get("count", 0) for listing in listings)
    makes = {listing.get("make") for listing in listings if listing.get("make")}
    return {
        "total_listings": len(listings),
        "total_vehicles": total_vehicles,
        "avg_vehicles_per_listing": round(total_vehicles / len(listings), 1) if listings else 0,
        "unique_makes": len(makes),
        "drafts_count": sum(1 for l in listings if l.get("status") == "draft"),
        "published_count": sum(1 for l in listings if l.get("status") == "published"),
    }


def filter_listings(
    listings: Sequence[Mapping[str, Any]],
    filters: Mapping[str, Any],
) -> List[Mapping[str, Any]]:
    """
    Keep listings whose values equal every filter value (case-insensitive).

    Filters with an empty value are ignored.
    """
    active = {key: str(value).lower() for key, value in filters.items() if value}
    return [
        listing for listing in listings
        if all(str(listing.get(key)).lower() == value for key, value in active.items())
    ]


def get_filter_options(listings: Sequence[Mapping[str, Any]]) -> Dict[str, List[Any]]:
    """Distinct non-empty values per filterable field; years newest first."""
    options = {}
    for key in ("make", "model", "year", "color", "body_type", "fuel_type", "transmission", "status"):
        values = {str(listing.get(key)) for listing in listings if listing.get(key)}
        options[key] = sorted(values, reverse=(key == "year"))
    return options
