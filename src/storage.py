"""
Listing store backed by a JSON file.

Saves and retrieves the listing collection and the last import. Replacing
the whole collection and upserting by id are both idempotent.
"""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from datetime import datetime, timezone
import threading
import logging
import json

logger = logging.getLogger(__name__)

LISTINGS_KEY = "listings"
LAST_IMPORT_KEY = "last_import"

LISTING_STATUSES = ("draft", "published")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ListingStore:
    """
    JSON file store for listings.

    Writes are serialized with a lock. Read failures (missing or corrupt
    file) yield empty data; write failures are logged and reported as False.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"[Storage] Error reading {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2, default=str)
            tmp_path.replace(self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"[Storage] Error saving {self.path}: {e}")
            return False

    def _update(self, key: str, value: Any) -> bool:
        with self._lock:
            data = self._load()
            data[key] = value
            return self._write(data)

    # Listings

    def save_listings(self, listings: List[Dict[str, Any]]) -> bool:
        """Replace the whole listing collection."""
        return self._update(LISTINGS_KEY, list(listings))

    def get_listings(self) -> List[Dict[str, Any]]:
        listings = self._load().get(LISTINGS_KEY, [])
        return listings if isinstance(listings, list) else []

    def save_listing(self, listing: Dict[str, Any]) -> bool:
        """Insert or replace one listing by id, stamping created_at/updated_at."""
        with self._lock:
            data = self._load()
            listings = data.get(LISTINGS_KEY, [])
            now = _now()
            for index, existing in enumerate(listings):
                if existing.get("id") == listing.get("id"):
                    listings[index] = {
                        **listing,
                        "created_at": existing.get("created_at", listing.get("created_at", now)),
                        "updated_at": now,
                    }
                    break
            else:
                listings.append({**listing, "created_at": now, "updated_at": now})
            data[LISTINGS_KEY] = listings
            return self._write(data)

    def get_listing_by_id(self, listing_id: str) -> Optional[Dict[str, Any]]:
        for listing in self.get_listings():
            if listing.get("id") == listing_id:
                return listing
        return None

    def delete_listing(self, listing_id: str) -> bool:
        with self._lock:
            data = self._load()
            data[LISTINGS_KEY] = [
                l for l in data.get(LISTINGS_KEY, []) if l.get("id") != listing_id
            ]
            return self._write(data)

    def get_drafts(self) -> List[Dict[str, Any]]:
        return [l for l in self.get_listings() if l.get("status") == "draft"]

    def get_published(self) -> List[Dict[str, Any]]:
        return [l for l in self.get_listings() if l.get("status") == "published"]

    def update_listing_status(self, listing_id: str, status: str) -> bool:
        if status not in LISTING_STATUSES:
            raise ValueError(f"Invalid listing status '{status}'")
        listing = self.get_listing_by_id(listing_id)
        if listing is None:
            return False
        listing["status"] = status
        return self.save_listing(listing)

    # Last import

    def save_last_import(self, import_data: Dict[str, Any]) -> bool:
        """Save the raw columns, mapping and file name of the last import."""
        return self._update(LAST_IMPORT_KEY, import_data)

    def get_last_import(self) -> Optional[Dict[str, Any]]:
        return self._load().get(LAST_IMPORT_KEY)

    def clear_all(self) -> bool:
        with self._lock:
            try:
                self.path.unlink(missing_ok=True)
                return True
            except OSError as e:
                logger.error(f"[Storage] Error clearing {self.path}: {e}")
                return False

    def get_storage_info(self) -> Dict[str, Any]:
        used_bytes = self.path.stat().st_size if self.path.exists() else 0
        listings = self.get_listings()
        return {
            "used_bytes": used_bytes,
            "used_kb": round(used_bytes / 1024, 2),
            "listings_count": len(listings),
            "drafts_count": sum(1 for l in listings if l.get("status") == "draft"),
            "published_count": sum(1 for l in listings if l.get("status") == "published"),
        }
