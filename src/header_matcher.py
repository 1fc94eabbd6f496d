"""
Header matching for dealer spreadsheets.

Scores column headers against the canonical field synonym table and
classifies serial/index and repeating feature columns.
"""

import re
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from mappings import (
    COLUMN_SYNONYMS,
    SKIP_PATTERNS,
    FEATURE_COLUMN_PATTERNS,
    COMBINED_COLUMN_HINTS,
)

logger = logging.getLogger(__name__)

# Single-column lookups only accept matches stronger than a loose substring hit
SINGLE_COLUMN_MIN_SCORE = 30

_FEATURE_RES = tuple(re.compile(p, re.IGNORECASE) for p in FEATURE_COLUMN_PATTERNS)
_PUNCTUATION_RE = re.compile(r"[\W_]+")


def normalize_header(header: Any) -> str:
    """Lowercase and trim a header; None becomes an empty string."""
    if header is None:
        return ""
    return str(header).lower().strip()


def _strip_punctuation(text: str) -> str:
    return _PUNCTUATION_RE.sub("", text)


def score_synonym(header: str, synonym: str) -> int:
    """
    Score a normalized header against one synonym.

    Rules are checked in order and the first that applies gives the score:
    exact (100), punctuation-insensitive (85), header is the first word of
    the synonym (80), synonym is the first word of the header (75), header
    starts with synonym (70), header contains synonym (50 + len), synonym
    contains header (30 + len).
    """
    if not header or not synonym:
        return 0
    if header == synonym:
        return 100
    stripped = _strip_punctuation(header)
    if stripped and stripped == _strip_punctuation(synonym):
        return 85
    if " " in synonym and header == synonym.split(" ")[0]:
        return 80
    if " " in header and len(synonym) > 2 and synonym == header.split(" ")[0]:
        return 75
    if len(synonym) > 2 and header.startswith(synonym):
        return 70
    if len(synonym) > 2 and synonym in header:
        return 50 + len(synonym)
    if len(header) > 2 and header in synonym:
        return 30 + len(header)
    return 0


class HeaderMatcher:
    """
    Matches headers against an immutable synonym table.

    The table is copied on construction and never mutated. Extending it
    (``with_synonyms`` / ``add_synonym``) returns a new matcher, so one
    instance can be shared freely between analysis runs.
    """

    def __init__(self, synonyms: Optional[Mapping[str, Sequence[str]]] = None):
        source = COLUMN_SYNONYMS if synonyms is None else synonyms
        table = {}
        for field_key, variants in source.items():
            normalized = []
            for variant in variants:
                variant = normalize_header(variant)
                if variant and variant not in normalized:
                    normalized.append(variant)
            table[field_key] = tuple(normalized)
        self._synonyms = MappingProxyType(table)

    @property
    def synonyms(self) -> Mapping[str, Tuple[str, ...]]:
        return self._synonyms

    def with_synonyms(self, extra: Mapping[str, Iterable[str]]) -> "HeaderMatcher":
        """Build a new matcher from this table plus extra synonyms per field."""
        table = {field_key: list(variants) for field_key, variants in self._synonyms.items()}
        for field_key, variants in extra.items():
            if field_key not in table:
                raise KeyError(f"Field '{field_key}' not found.")
            table[field_key].extend(variants)
        return HeaderMatcher(table)

    def add_synonym(self, field_key: str, synonym: str) -> "HeaderMatcher":
        return self.with_synonyms({field_key: [synonym]})

    def best_match(self, header: Any, exclude: Iterable[str] = ()) -> Tuple[Optional[str], int]:
        """
        Find the highest-scoring field for a header.

        Args:
            header: Raw column header
            exclude: Field keys already claimed by other columns

        Returns:
            Tuple of (field_key, score); (None, 0) when nothing scores
        """
        normalized = normalize_header(header)
        excluded = set(exclude)
        best_field = None
        best_score = 0

        for field_key, variants in self._synonyms.items():
            if field_key in excluded or field_key.startswith("_"):
                continue
            for synonym in variants:
                score = score_synonym(normalized, synonym)
                # Strictly greater: ties keep the first found
                if score > best_score:
                    best_score = score
                    best_field = field_key

        return best_field, best_score

    def match_header(self, header: Any) -> Optional[str]:
        """Single-column lookup: the best field if it scores above 30."""
        field_key, score = self.best_match(header)
        return field_key if score > SINGLE_COLUMN_MIN_SCORE else None

    def auto_detect_mapping(self, columns: Sequence[Any]) -> Dict[Any, str]:
        """
        Bulk auto-detect: map each column left to right to its best field.

        A field claimed by an earlier column is unavailable to later ones.
        Any positive score is accepted.
        """
        mapping = {}
        claimed = set()
        for column in columns:
            field_key, score = self.best_match(column, exclude=claimed)
            if field_key and score > 0:
                mapping[column] = field_key
                claimed.add(field_key)
                logger.debug(f"[AutoDetect] '{column}' -> {field_key} (score {score})")
        return mapping

    def is_exact_synonym(self, header: Any) -> bool:
        normalized = normalize_header(header)
        return any(normalized in variants for variants in self._synonyms.values())


DEFAULT_MATCHER = HeaderMatcher()


def match_header(header: Any) -> Optional[str]:
    return DEFAULT_MATCHER.match_header(header)


def auto_detect_mapping(columns: Sequence[Any]) -> Dict[Any, str]:
    return DEFAULT_MATCHER.auto_detect_mapping(columns)


def is_skippable(header: Any) -> bool:
    """
    Check if a column holds serial numbers, row indexes or IDs.

    True when the normalized header equals a skip pattern, starts with
    "<pattern> " or ends with " <pattern>".
    """
    normalized = normalize_header(header)
    return any(
        normalized == pattern
        or normalized.startswith(pattern + " ")
        or normalized.endswith(" " + pattern)
        for pattern in SKIP_PATTERNS
    )


def is_feature_column(header: Any) -> bool:
    """Check if a header names a repeating feature column ("Feature 3")."""
    normalized = normalize_header(header)
    return any(regex.match(normalized) for regex in _FEATURE_RES)


def might_be_combined_column(header: Any) -> bool:
    """Check if a header name suggests combined Make+Model data."""
    normalized = normalize_header(header)
    return any(hint in normalized for hint in COMBINED_COLUMN_HINTS)
