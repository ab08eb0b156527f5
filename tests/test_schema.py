"""Tests des niveaux de confiance des résultats."""

import pytest

from concordnoms.config import MatchConfig
from concordnoms.matching import STRONG_MATCH_SCORE, match_names
from concordnoms.matching.schema import MatchCandidate, MatchResult, MatchSession, grade_score


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (1.0, "Strong Match"),
        (0.97, "Strong Match"),
        (0.9699, "Possible"),
        (0.8, "Possible"),
        (0.7999, "No Match"),
        (0.0, "No Match"),
    ],
)
def test_grade_score_boundaries(score: float, expected: str) -> None:
    assert grade_score(score, 0.8) == expected


def test_grade_score_strong_before_threshold() -> None:
    """Le palier 0.97 prime, même avec un seuil supérieur."""
    assert grade_score(0.98, 1.0) == "Strong Match"


def test_candidate_quality() -> None:
    assert MatchCandidate("Jane Doe", STRONG_MATCH_SCORE).match_quality == "Strong Match"
    assert MatchCandidate("Jane Doh", 0.9699).match_quality == "Possible"


def test_result_quality() -> None:
    assert MatchResult("Jane Doe", 0, {}, "Jane Doe", 0.97).match_quality == "Strong Match"
    assert MatchResult("Jane Doe", 0, {}, "Jane Doh", 0.875).match_quality == "Possible"
    assert MatchResult("Al", 1, {}, None, 0.0).match_quality == "No Match"


def test_session_quality_counts() -> None:
    session = match_names(
        ["Tan Ah Kow", "Jane Doe", "Al"],
        ["Kow Ah Tan", "Jane Doh", "Albert"],
        MatchConfig(threshold=0.85),
    )
    assert [r.match_quality for r in session] == ["Strong Match", "Possible", "No Match"]
    assert session.n_strong == 1
    assert session.n_possible == 1
    assert session.n_unmatched == 1


def test_empty_session_counts() -> None:
    session = MatchSession(results=[])
    assert session.n_strong == 0
    assert session.n_possible == 0
