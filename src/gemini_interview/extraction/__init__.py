"""
Structured-data extraction from free-form model responses
"""

from .extractor import (
    ExtractorConfig,
    JsonExtractor,
    extract,
    extract_array,
    extract_object,
)
from .fences import FencedText, strip_fences
from .repair import DEFAULT_REPAIR_RULES, RepairRule, apply_repairs, parse_repaired
from .salvage import DEFAULT_SALVAGE_FIELDS, SalvageFieldSpec, salvage
from .scanner import SpanLocator, find_balanced_span
from .strict import parse_strict
from .types import (
    ARRAY,
    OBJECT,
    DelimiterPair,
    ExtractionDiagnostics,
    ExtractionResult,
    Failure,
    FailureReason,
    ParseOutcome,
    RepairedSuccess,
    SalvagePartial,
    ScanMode,
    Span,
    StrictSuccess,
)

__all__ = [
    # Central interface
    "JsonExtractor",
    "ExtractorConfig",
    "extract",
    "extract_array",
    "extract_object",
    # Result types
    "ExtractionResult",
    "ExtractionDiagnostics",
    "ParseOutcome",
    "StrictSuccess",
    "RepairedSuccess",
    "SalvagePartial",
    "Failure",
    "FailureReason",
    # Building blocks
    "ARRAY",
    "OBJECT",
    "DelimiterPair",
    "ScanMode",
    "Span",
    "SpanLocator",
    "find_balanced_span",
    "FencedText",
    "strip_fences",
    "parse_strict",
    "RepairRule",
    "DEFAULT_REPAIR_RULES",
    "apply_repairs",
    "parse_repaired",
    "SalvageFieldSpec",
    "DEFAULT_SALVAGE_FIELDS",
    "salvage",
]
