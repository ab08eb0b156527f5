"""Schémas et types pour le rapprochement de noms."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from concordnoms.config import MatchConfig

STRONG_MATCH_SCORE = 0.97

STRONG_MATCH = "Strong Match"
POSSIBLE_MATCH = "Possible"
NO_MATCH = "No Match"


def grade_score(score: float, threshold: float) -> str:
    """Niveau de confiance : Strong Match (>= 0.97), Possible (>= seuil), sinon No Match."""
    if score >= STRONG_MATCH_SCORE:
        return STRONG_MATCH
    if score >= threshold:
        return POSSIBLE_MATCH
    return NO_MATCH


@dataclass(frozen=True)
class NameRecord:
    """Une ligne de tableau réduite au nom et aux colonnes d'intérêt."""

    raw_name: str
    row_index: int
    auxiliary: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MatchCandidate:
    """Un nom cible retenu pour un nom source."""

    target_name: str
    score: float
    target_row_id: int = -1

    def __repr__(self) -> str:
        return f"MatchCandidate({self.target_name!r}, score={self.score:.3f})"

    @property
    def match_quality(self) -> str:
        """Strong Match ou Possible : un candidat a toujours passé le seuil."""
        return STRONG_MATCH if self.score >= STRONG_MATCH_SCORE else POSSIBLE_MATCH


@dataclass
class MatchResult:
    """Résultat du rapprochement pour une ligne source."""

    source_name: str
    source_row_id: int
    auxiliary: dict[str, str]
    best_match: str | None
    best_score: float
    all_candidates: list[MatchCandidate] = field(default_factory=list)

    @property
    def is_matched(self) -> bool:
        return self.best_match is not None

    @property
    def match_quality(self) -> str:
        if not self.is_matched:
            return NO_MATCH
        return STRONG_MATCH if self.best_score >= STRONG_MATCH_SCORE else POSSIBLE_MATCH


@dataclass
class MatchSession:
    """
    Résultats d'une exécution complète, dans l'ordre des lignes source.

    Une nouvelle exécution produit une nouvelle session : rien n'est fusionné.
    """

    results: list[MatchResult]
    auxiliary_columns: list[str] = field(default_factory=list)
    config: MatchConfig = field(default_factory=MatchConfig)

    def __iter__(self) -> Iterator[MatchResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index: int) -> MatchResult:
        return self.results[index]

    @property
    def n_matched(self) -> int:
        return sum(1 for r in self.results if r.is_matched)

    @property
    def n_unmatched(self) -> int:
        return len(self.results) - self.n_matched

    @property
    def n_strong(self) -> int:
        return sum(1 for r in self.results if r.match_quality == STRONG_MATCH)

    @property
    def n_possible(self) -> int:
        return sum(1 for r in self.results if r.match_quality == POSSIBLE_MATCH)

    @property
    def mean_best_score(self) -> float:
        matched = [r.best_score for r in self.results if r.is_matched]
        if not matched:
            return 0.0
        return sum(matched) / len(matched)
