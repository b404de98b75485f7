"""Collate front sides and reverse sides scanned on a single-sided feeder."""
from collate_sides.collate import (
    CollationError,
    CollationResult,
    CountCheck,
    Move,
    PageCountMismatch,
    Status,
    collate,
    interleave,
    plan_moves,
    rollback,
    validate_counts,
)
from collate_sides.pages import PageSequence, PdfPageSequence, ReverseSource

__version__ = "2.0.0"

__all__ = [
    "CollationError",
    "CollationResult",
    "CountCheck",
    "Move",
    "PageCountMismatch",
    "PageSequence",
    "PdfPageSequence",
    "ReverseSource",
    "Status",
    "collate",
    "interleave",
    "plan_moves",
    "rollback",
    "validate_counts",
]
