"""
Smart split for combined vehicle columns.

Detects and splits values that pack several fields into one string, like
"Volkswagen Tiguan L 2017 330TSI" or "GAC Honda Crider 180Turbo CVT Comfort",
into make, model, variant and year.
"""

import re
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from mappings import (
    KNOWN_MAKES,
    MAKE_ALIASES,
    ACRONYM_FIXUPS,
    PARENT_COMPANIES,
    DESCRIPTION_COLORS,
)
from models import SplitAnalysis, SplitResult

logger = logging.getLogger(__name__)

# Year pattern: 1990-2039, not glued to letters/digits, optional Chinese year marker.
# A trailing ".5" is left to the decimal pattern below.
YEAR_PATTERN = re.compile(r"(?<![0-9A-Za-z_])(199\d|20[0-3]\d)(?:年|(?![0-9A-Za-z_]|\.\d))")

# Legacy decimal model year ("2021.5")
DECIMAL_YEAR_PATTERN = re.compile(r"(?<![0-9A-Za-z_])(199\d|20[0-3]\d)\.\d+")

CHINESE_YEAR_MARKER = "年"

# Longest first so "Land Rover" wins over "Rover" and "GAC Trumpchi" over "GAC"
_SORTED_MAKES = sorted(KNOWN_MAKES, key=len, reverse=True)

_MAKE_FLAGS = re.IGNORECASE | re.ASCII
_START_PATTERNS = [(make, re.compile("^" + re.escape(make) + r"\b", _MAKE_FLAGS)) for make in _SORTED_MAKES]
_ANYWHERE_PATTERNS = [(make, re.compile(r"\b" + re.escape(make) + r"\b", _MAKE_FLAGS)) for make in _SORTED_MAKES]
_DETECT_PATTERNS = [(make, re.compile(r"\b" + re.escape(make) + r"\b", _MAKE_FLAGS)) for make in KNOWN_MAKES]

_PARENT_COMPANIES = {p.lower() for p in PARENT_COMPANIES}


def is_blank(value: Any) -> bool:
    """None, empty and whitespace-only strings carry no value."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def canonical_make(matched: str) -> str:
    """
    Normalize a matched make: alias table, then first-letter capitalization
    of each word, then acronym fixups ("Bmw" -> "BMW").
    """
    make = MAKE_ALIASES.get(matched.lower(), matched)
    make = " ".join(word[:1].upper() + word[1:].lower() for word in make.split())
    return ACRONYM_FIXUPS.get(make, make)


def _match_make_at_start(text: str) -> Tuple[str, str]:
    for _, pattern in _START_PATTERNS:
        match = pattern.match(text)
        if match:
            return canonical_make(match.group(0)), text[match.end():].strip()
    return "", text


def _take_year(text: str) -> Tuple[str, str]:
    """Extract the first year from text and remove every year token from it."""
    match = YEAR_PATTERN.search(text)
    if match:
        return match.group(1), YEAR_PATTERN.sub(" ", text)

    decimal_match = DECIMAL_YEAR_PATTERN.search(text)
    if decimal_match:
        rest = text[:decimal_match.start()] + " " + text[decimal_match.end():]
        return decimal_match.group(1), rest

    return "", text


def extract_year(value: Any) -> Optional[str]:
    """
    Extract a 4-digit year from values like 2021, "2021年", "2021 Model"
    or the legacy "2021.5".

    Returns:
        Year string or None if no year is found
    """
    if value is None:
        return None
    year, _ = _take_year(str(value))
    return year or None


def find_known_make(value: Any) -> Optional[str]:
    """Return the first known make (list order) that appears in the value."""
    if is_blank(value):
        return None
    text = str(value).strip()
    for make, pattern in _DETECT_PATTERNS:
        if pattern.search(text):
            return make
    return None


def split_make_model(value: Any) -> SplitResult:
    """
    Split a combined value into make, model, variant and year.

    Make is found, in order of preference:
    1. after a Chinese joint-venture parent company ("GAC Honda" -> Honda)
    2. at the start of the string
    3. anywhere in the string; text before it is dropped, except a year

    The year is then taken out of the remainder, the next token is the
    model and everything after it is the variant.

    Args:
        value: The combined value, e.g. "Toyota Camry 2023 XLE"

    Returns:
        SplitResult; every field is a string, empty when not found
    """
    if not isinstance(value, str) or not value.strip():
        return SplitResult()

    trimmed = value.strip()
    make = ""
    remainder = trimmed
    leading = ""

    first_word = trimmed.split()[0]
    if first_word.lower() in _PARENT_COMPANIES:
        make, after_parent = _match_make_at_start(trimmed[len(first_word):].strip())
        if make:
            remainder = after_parent

    if not make:
        make, remainder = _match_make_at_start(trimmed)

    if not make:
        for _, pattern in _ANYWHERE_PATTERNS:
            match = pattern.search(trimmed)
            if match:
                make = canonical_make(match.group(0))
                leading = trimmed[:match.start()]
                remainder = trimmed[match.end():].strip()
                break

    year, remainder = _take_year(remainder)
    if not year and leading:
        year, _ = _take_year(leading)

    parts = remainder.split()
    result = SplitResult(
        make=make,
        model=parts[0] if parts else "",
        variant=" ".join(parts[1:]),
        year=year,
    )
    logger.debug(f"[Smart Split] '{trimmed}' -> {result}")
    return result


def extract_color_from_description(description: Any) -> str:
    """Return the first known color named in a description, or ""."""
    if not isinstance(description, str) or not description:
        return ""
    text = description.lower()
    for color in DESCRIPTION_COLORS:
        if color.lower() in text:
            return color
    return ""


def get_sample_values(rows: Sequence[Dict[str, Any]], column: Any, sample_size: int = 10) -> List[Any]:
    """
    Collect up to sample_size non-empty values of a column, in row order.
    """
    samples = []
    for row in rows:
        value = row.get(column)
        if is_blank(value):
            continue
        samples.append(value)
        if len(samples) >= sample_size:
            break
    return samples


def _percent(ratio: float) -> int:
    """Ratio as a whole percent, halves rounded up."""
    return int(ratio * 100 + 0.5)


def analyze_column_for_smart_split(sample_values: Sequence[Any]) -> SplitAnalysis:
    """
    Score how likely a column holds combined Make+Model data.

    Combinability = 0.5 x (share of samples naming a known make)
                  + 0.3 x (share of samples with two or more words)
                  + 0.2 x (share of samples containing a year)

    The column should be split when the score exceeds 0.3 and at least one
    sample named a known make.
    """
    valid = [str(v).strip() for v in (sample_values or []) if not is_blank(v)]
    if not valid:
        return SplitAnalysis()

    detected_makes: List[str] = []
    make_count = 0
    year_count = 0
    multi_word_count = 0
    variant_count = 0
    total_words = 0
    previews = []

    for sample in valid:
        make = find_known_make(sample)
        if make:
            make_count += 1
            if make not in detected_makes:
                detected_makes.append(make)

        if extract_year(sample):
            year_count += 1

        words = sample.split()
        total_words += len(words)
        if len(words) >= 2:
            multi_word_count += 1

        split = split_make_model(sample)
        if split.variant:
            variant_count += 1
        if (split.make or split.model) and len(previews) < 3:
            original = sample if len(sample) <= 50 else sample[:50] + "..."
            previews.append({"original": original, **split.to_dict()})

    total = len(valid)
    score = (
        (make_count / total) * 0.5
        + (multi_word_count / total) * 0.3
        + (year_count / total) * 0.2
    )
    should_split = score > 0.3 and make_count > 0
    avg_word_count = total_words / total
    variant_ratio = variant_count / total

    data_type = ""
    if should_split:
        if 1.5 <= avg_word_count <= 2.5:
            data_type = "clean_make_model"
        elif avg_word_count > 2.5:
            data_type = "full_description"

    return SplitAnalysis(
        should_split=should_split,
        confidence=_percent(score),
        detected_makes=detected_makes,
        has_year_in_values=year_count > 0,
        previews=previews,
        avg_word_count=avg_word_count,
        data_type=data_type,
        has_variant=variant_ratio >= 0.5,
        variant_confidence=_percent(variant_ratio),
    )
