"""
Data models for the column analysis and import pipeline.

Defines the structure for split results, per-column split analysis,
whole-sheet column analysis and mapping validation results used
throughout the import process.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field, asdict


@dataclass(frozen=True)
class SplitResult:
    """
    Make/model/variant/year extracted from one combined value.

    Attributes:
        make: Normalized vehicle make ("Honda", "BMW")
        model: First token after the make
        variant: Remaining tokens joined by single spaces
        year: 4-digit year string
    """
    make: str = ""
    model: str = ""
    variant: str = ""
    year: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class SplitAnalysis:
    """
    Smart split assessment of a column's sample values.

    Attributes:
        should_split: Whether the column looks like combined Make+Model data
        confidence: Combinability score as a rounded percent (0-100)
        detected_makes: Known makes found in the samples, first-seen order
        has_year_in_values: Whether any sample contains an extractable year
        previews: Up to three split previews for display
        avg_word_count: Mean number of whitespace-separated tokens per sample
        data_type: "clean_make_model", "full_description" or "" when unclassified
        has_variant: Whether at least half the samples split with a variant
        variant_confidence: Percent of samples that split with a variant
    """
    should_split: bool = False
    confidence: int = 0
    detected_makes: List[str] = field(default_factory=list)
    has_year_in_values: bool = False
    previews: List[Dict[str, str]] = field(default_factory=list)
    avg_word_count: float = 0.0
    data_type: str = ""
    has_variant: bool = False
    variant_confidence: int = 0


@dataclass
class SplitCandidate:
    """A column flagged for smart split, with the analysis that flagged it."""
    column_name: str
    analysis: SplitAnalysis


@dataclass
class ColumnAnalysis:
    """
    Result of analyzing every column of an uploaded sheet.

    Attributes:
        skip_columns: Serial/index columns excluded from mapping
        feature_columns: Repeating feature/option columns
        smart_split_candidates: Columns that look like combined Make+Model data
        mapping_suggestions: Column -> suggested canonical field
        sample_data: Column -> up to N non-empty sample values
        split_analysis: Column -> split analysis, for every analyzed column
        data_quality: Column -> data quality assessment
        column_relationships: Column -> cross-column relationship description
        recommendations: Ranked cross-column mapping recommendations
    """
    skip_columns: List[str] = field(default_factory=list)
    feature_columns: List[str] = field(default_factory=list)
    smart_split_candidates: List[SplitCandidate] = field(default_factory=list)
    mapping_suggestions: Dict[str, str] = field(default_factory=dict)
    sample_data: Dict[str, List[Any]] = field(default_factory=dict)
    split_analysis: Dict[str, SplitAnalysis] = field(default_factory=dict)
    data_quality: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    column_relationships: Dict[str, Dict[str, str]] = field(default_factory=dict)
    recommendations: List[Dict[str, Any]] = field(default_factory=list)

    def candidate_columns(self) -> List[str]:
        return [candidate.column_name for candidate in self.smart_split_candidates]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MappingValidation:
    """
    Required-field coverage of a column mapping.

    Attributes:
        is_valid: True when no required field is missing
        missing_required: Required fields neither mapped nor fulfilled by a split
        warnings: Non-fatal messages (duplicate field mappings)
        fulfilled_by: Field -> combined column credited with filling it
    """
    is_valid: bool
    missing_required: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    fulfilled_by: Dict[str, str] = field(default_factory=dict)


@dataclass
class ImportResult:
    """
    Outcome of a full import run.

    Attributes:
        listings: Grouped listings, first-seen key order
        vehicles: Normalized vehicle records, one per input row
        mapping: The column mapping that was applied
        analysis: Column analysis of the source sheet
        validation: Validation result of the applied mapping
        source: File path or label of the imported data
    """
    listings: List[Dict[str, Any]]
    vehicles: List[Dict[str, Any]]
    mapping: Dict[str, Optional[str]]
    analysis: ColumnAnalysis
    validation: MappingValidation
    source: Optional[str] = None
