"""Module de rapprochement de noms."""

from concordnoms.matching.matcher import ColumnSelection, NameMatcher, match_names
from concordnoms.matching.schema import (
    STRONG_MATCH_SCORE,
    MatchCandidate,
    MatchResult,
    MatchSession,
    NameRecord,
    grade_score,
)

__all__ = [
    "STRONG_MATCH_SCORE",
    "ColumnSelection",
    "MatchCandidate",
    "MatchResult",
    "MatchSession",
    "NameMatcher",
    "NameRecord",
    "grade_score",
    "match_names",
]
