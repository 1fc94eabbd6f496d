"""
Column analyzer for uploaded dealer sheets.

Runs skip/feature classification, header matching and smart split detection
over every column, and optionally ranks cross-column relationships to
recommend the best mapping for combined make/model columns.
"""

import re
import logging
from typing import Any, Dict, List, Optional, Sequence

from header_matcher import (
    DEFAULT_MATCHER,
    HeaderMatcher,
    is_feature_column,
    is_skippable,
)
from mappings import SAMPLE_COLOR_NAMES
from models import ColumnAnalysis, SplitAnalysis, SplitCandidate
from schema import COMBINED_MAKE_MODEL
from smart_split import (
    CHINESE_YEAR_MARKER,
    analyze_column_for_smart_split,
    extract_year,
    find_known_make,
    get_sample_values,
)

logger = logging.getLogger(__name__)

_COMPLEX_DATA_RE = re.compile(r"[(),\-/]")
_DIGIT_RE = re.compile(r"\d")
_LETTERS_ONLY_RE = re.compile(r"^[a-zA-Z\s]+$")

# Share of samples that must look like the suggested field
MIN_SAMPLE_FIT = 0.3


def _looks_numeric(sample: str) -> bool:
    return bool(_DIGIT_RE.search(sample)) and not _LETTERS_ONLY_RE.match(sample)


def sample_fit_ratio(field_key: str, samples: Sequence[Any]) -> float:
    """
    Share of samples that look like values of a field (0.0-1.0).

    Only make, year, price, mileage and color are checked; every other field
    fits by its header alone and scores 1.0.
    """
    if not samples:
        return 0.0

    values = [str(s) for s in samples]
    if field_key == "make":
        matches = sum(1 for v in values if find_known_make(v))
    elif field_key == "year":
        matches = sum(1 for v in values if extract_year(v.replace(CHINESE_YEAR_MARKER, "")))
    elif field_key in ("price", "mileage"):
        matches = sum(1 for v in values if _looks_numeric(v))
    elif field_key == "color":
        matches = sum(1 for v in values if any(c in v.lower() for c in SAMPLE_COLOR_NAMES))
    else:
        return 1.0
    return matches / len(values)


def analyze_columns(
    columns: Sequence[Any],
    rows: Sequence[Dict[str, Any]],
    matcher: Optional[HeaderMatcher] = None,
    sample_size: int = 10,
    include_relationships: bool = True,
) -> ColumnAnalysis:
    """
    Analyze all columns of a sheet.

    Args:
        columns: Column names in source order (duplicates are kept)
        rows: Row dictionaries keyed by column name
        matcher: Header matcher to use (default synonym table if None)
        sample_size: Number of non-empty sample values per column
        include_relationships: Run the cross-column relationship post-pass

    Returns:
        ColumnAnalysis with skip/feature columns, split candidates,
        direct mapping suggestions and sample data
    """
    matcher = matcher or DEFAULT_MATCHER
    result = ColumnAnalysis()

    for column in columns:
        samples = get_sample_values(rows, column, sample_size)
        result.sample_data[column] = samples

        if is_skippable(column) and not matcher.is_exact_synonym(column):
            result.skip_columns.append(column)
            continue

        if is_feature_column(column):
            result.feature_columns.append(column)
            continue

        split_analysis = analyze_column_for_smart_split([str(s) for s in samples])
        result.split_analysis[column] = split_analysis
        result.data_quality[column] = assess_data_quality(samples)

        if split_analysis.should_split:
            result.smart_split_candidates.append(
                SplitCandidate(column_name=column, analysis=split_analysis)
            )

        # Empty columns get no suggestion
        suggested = matcher.match_header(column) if samples else None
        if suggested and sample_fit_ratio(suggested, samples) < MIN_SAMPLE_FIT:
            logger.debug(f"[Analyzer] '{column}' -> {suggested} rejected: samples do not fit")
            suggested = None
        if suggested:
            result.mapping_suggestions[column] = suggested

    logger.debug(
        f"[Analyzer] {len(columns)} columns: {len(result.skip_columns)} skipped, "
        f"{len(result.feature_columns)} feature, "
        f"{len(result.smart_split_candidates)} split candidates, "
        f"{len(result.mapping_suggestions)} suggestions"
    )

    if include_relationships:
        insights = analyze_column_relationships(result.split_analysis)
        result.column_relationships = insights["relationships"]
        result.recommendations = insights["recommendations"]

    return result


def assess_data_quality(samples: Sequence[Any]) -> Dict[str, Any]:
    """
    Assess how clean a column's sample data is.

    Penalizes repetitive values, very short or very long values, and values
    that look like several fields packed together.
    """
    if not samples:
        return {"score": 0, "issues": ["No data"], "is_clean": False}

    issues = []
    score = 100
    values = [str(s) for s in samples]

    duplicate_ratio = (len(values) - len(set(values))) / len(values)
    if duplicate_ratio > 0.8:
        issues.append("Very repetitive data")
        score -= 30
    elif duplicate_ratio > 0.5:
        issues.append("Somewhat repetitive data")
        score -= 15

    avg_length = sum(len(v) for v in values) / len(values)
    if avg_length < 3:
        issues.append("Very short values")
        score -= 10
    elif avg_length > 100:
        issues.append("Very long values")
        score -= 10

    if any("  " in v or _COMPLEX_DATA_RE.search(v) for v in values):
        issues.append("Contains complex combined data")
        score -= 20

    score = max(0, score)
    return {
        "score": score,
        "issues": issues,
        "is_clean": score > 70,
        "avg_length": avg_length,
        "duplicate_ratio": duplicate_ratio,
    }


def analyze_column_relationships(split_analysis: Dict[Any, SplitAnalysis]) -> Dict[str, Any]:
    """
    Find columns that work well together for combined make/model data.

    A column of short "HONDA Crider" values is a clean make/model source; a
    column of long "GAC Honda Crider 180Turbo CVT Comfort" values is the
    better source for variants. When both exist the pair is recommended
    together, clean source first so its split claims make and model.

    Returns:
        Dict with relationships, recommendations, variant_sources and
        clean_make_model_sources
    """
    relationships = {}
    recommendations: List[Dict[str, Any]] = []
    clean_columns = []
    full_columns = []

    for column, analysis in split_analysis.items():
        if not analysis.should_split:
            continue

        avg_words = analysis.avg_word_count

        if analysis.data_type == "clean_make_model":
            clean_columns.append(column)
            relationships[column] = {
                "type": "clean_make_model",
                "description": "Contains clean Make + Model data",
            }
            recommendations.append({
                "type": "prefer_clean_source",
                "column_name": column,
                "message": (
                    f'"{column}" contains clean Make + Model data. '
                    f"Consider using this instead of smart split on complex columns."
                ),
                "suggested_mapping": COMBINED_MAKE_MODEL,
                "priority": "high",
            })

        if (analysis.data_type == "full_description" or analysis.has_variant) and avg_words > 2.5:
            full_columns.append(column)
            relationships[column] = {
                "type": "full_description_with_variant",
                "description": "Contains Make + Model + Variant data",
            }
            recommendations.append({
                "type": "extract_variant_source",
                "column_name": column,
                "message": (
                    f'"{column}" contains detailed variant information '
                    f"({analysis.variant_confidence}% confidence). "
                    f"Use this for extracting variant/trim data."
                ),
                "suggested_mapping": COMBINED_MAKE_MODEL,
                "priority": "high",
                "has_variant": True,
                "variant_confidence": analysis.variant_confidence,
            })

    if clean_columns and full_columns and clean_columns[0] != full_columns[0]:
        best_clean, best_full = clean_columns[0], full_columns[0]
        recommendations.insert(0, {
            "type": "optimal_combination",
            "column_name": best_clean,
            "related_column": best_full,
            "message": (
                f'Best mapping: Use "{best_clean}" for Make/Model, '
                f'and "{best_full}" for Variant extraction.'
            ),
            "suggested_mapping": COMBINED_MAKE_MODEL,
            "priority": "high",
            "combination": {
                "make_model_source": best_clean,
                "variant_source": best_full,
            },
        })

    return {
        "relationships": relationships,
        "recommendations": recommendations,
        "variant_sources": full_columns,
        "clean_make_model_sources": clean_columns,
    }


def generate_initial_mapping(analysis: ColumnAnalysis) -> Dict[Any, str]:
    """
    Build a starting mapping from an analysis.

    High-priority recommendations are applied first, then direct suggestions
    whose field and column are both still free.
    """
    mapping: Dict[Any, str] = {}
    used_fields = set()
    used_columns = set(analysis.skip_columns) | set(analysis.feature_columns)

    high_priority = [r for r in analysis.recommendations if r.get("priority") == "high"]
    for rec in high_priority:
        column = rec["column_name"]
        suggested = rec.get("suggested_mapping")
        if not suggested or column in used_columns:
            continue
        mapping[column] = suggested
        used_columns.add(column)
        if suggested == COMBINED_MAKE_MODEL:
            used_fields.update(("make", "model"))
            if rec.get("has_variant"):
                used_fields.add("variant")

    recommended_columns = {r["column_name"] for r in high_priority}
    for column, field_key in analysis.mapping_suggestions.items():
        if field_key in used_fields or column in used_columns or column in recommended_columns:
            continue
        mapping[column] = field_key
        used_fields.add(field_key)
        used_columns.add(column)

    return mapping
