"""Moteur de rapprochement : sélection des meilleurs noms cibles par ligne source."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

from concordnoms.config import ConfigError, MatchCancelled, MatchConfig
from concordnoms.matching.distance import distance_row
from concordnoms.matching.schema import MatchCandidate, MatchResult, MatchSession, NameRecord
from concordnoms.matching.scorers import score_normalized
from concordnoms.normalize import normalize_name
from concordnoms.tables import LabeledTable

logger = logging.getLogger(__name__)


def build_records(table: LabeledTable, name_col: str, aux_cols: Sequence[str] = ()) -> list[NameRecord]:
    """
    Une NameRecord par ligne, avec les colonnes d'intérêt dans l'ordre demandé.

    Les colonnes absentes du tableau sont ignorées.
    """
    kept = [c for c in aux_cols if table.has_column(c)]
    return [
        NameRecord(
            raw_name=table.cell(i, name_col),
            row_index=i,
            auxiliary={c: table.cell(i, c) for c in kept},
        )
        for i in range(len(table))
    ]


@dataclass
class ColumnSelection:
    """Colonnes choisies par l'utilisateur pour une exécution."""

    source_name_col: str = ""
    target_name_col: str = ""
    columns_of_interest: list[str] = field(default_factory=list)

    def is_ready(self, source: LabeledTable, target: LabeledTable) -> bool:
        """Vrai si les deux colonnes de noms sont choisies et présentes."""
        return source.has_column(self.source_name_col) and target.has_column(self.target_name_col)

    def auxiliary_columns(self, source: LabeledTable) -> list[str]:
        """Colonnes d'intérêt existantes, hors colonne de noms, sans doublon."""
        kept: list[str] = []
        for col in self.columns_of_interest:
            if col == self.source_name_col or col in kept or not source.has_column(col):
                continue
            kept.append(col)
        return kept


class NameMatcher:
    """Rapproche chaque nom source des noms cibles selon une MatchConfig."""

    def __init__(self, config: MatchConfig | None = None, *, workers: int = 1) -> None:
        if workers == 0 or workers < -1:
            raise ConfigError(f"workers doit être >= 1 ou -1 (got {workers})")
        self.config = config or MatchConfig()
        self.threshold = self.config.threshold
        self.workers = workers

    def select(
        self,
        source_name: str,
        target_names: Sequence[str],
        target_norms: Sequence[str] | None = None,
    ) -> list[MatchCandidate]:
        """
        Candidats au-dessus du seuil, triés par score décroissant.

        Le tri est stable : à score égal, l'ordre de la liste cible est conservé.

        Args:
            source_name: Nom source brut.
            target_names: Noms cibles bruts.
            target_norms: Noms cibles déjà normalisés (même ordre), si disponibles.
        """
        if target_norms is None:
            target_norms = [normalize_name(t) for t in target_names]
        source_norm = normalize_name(source_name)
        distances = distance_row(source_norm, target_norms, workers=self.workers)

        candidates: list[MatchCandidate] = []
        for idx, (name, norm, dist) in enumerate(zip(target_names, target_norms, distances)):
            score = score_normalized(source_norm, norm, self.config, dist)
            if score >= self.threshold:
                candidates.append(MatchCandidate(target_name=name, score=score, target_row_id=idx))

        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates

    @staticmethod
    def best(candidates: Sequence[MatchCandidate]) -> tuple[str | None, float]:
        """Meilleur candidat, ou (None, 0.0) si aucun ne passe le seuil."""
        if not candidates:
            return None, 0.0
        return candidates[0].target_name, candidates[0].score

    def iter_results(
        self,
        source: LabeledTable,
        target: LabeledTable,
        selection: ColumnSelection,
    ) -> Iterator[MatchResult]:
        """
        Génère les résultats ligne source par ligne source, à la demande.

        Chaque appel repart de la première ligne ; le consommateur peut
        s'arrêter à tout moment (pagination, annulation).
        """
        aux_cols = selection.auxiliary_columns(source)
        target_names = target.column_values(selection.target_name_col)
        target_norms = [normalize_name(t) for t in target_names]

        for record in build_records(source, selection.source_name_col, aux_cols):
            candidates = self.select(record.raw_name, target_names, target_norms)
            best_match, best_score = self.best(candidates)
            yield MatchResult(
                source_name=record.raw_name,
                source_row_id=record.row_index,
                auxiliary=dict(record.auxiliary),
                best_match=best_match,
                best_score=best_score,
                all_candidates=candidates if self.config.return_all_matches else [],
            )

    def run(
        self,
        source: LabeledTable,
        target: LabeledTable,
        selection: ColumnSelection,
        *,
        should_cancel: Callable[[], bool] | None = None,
    ) -> MatchSession | None:
        """
        Exécute le rapprochement pour toutes les lignes source.

        Returns:
            Nouvelle MatchSession, ou None si les colonnes de noms ne sont pas
            prêtes (aucune exception dans ce cas).

        Raises:
            MatchCancelled: Si should_cancel() devient vrai entre deux lignes.
        """
        if not selection.is_ready(source, target):
            logger.info(
                "Rapprochement ignoré : colonnes de noms non prêtes (source=%r, cible=%r)",
                selection.source_name_col,
                selection.target_name_col,
            )
            return None

        logger.info(
            "Rapprochement de %d noms source avec %d noms cible (seuil=%.2f)",
            len(source),
            len(target),
            self.threshold,
        )
        results: list[MatchResult] = []
        for result in self.iter_results(source, target, selection):
            if should_cancel is not None and should_cancel():
                logger.info("Rapprochement annulé après %d lignes", len(results))
                raise MatchCancelled(f"Annulation demandée après {len(results)} lignes")
            results.append(result)

        session = MatchSession(
            results=results,
            auxiliary_columns=selection.auxiliary_columns(source),
            config=self.config,
        )
        logger.info("Rapprochement terminé : %d/%d noms appariés", session.n_matched, len(session))
        return session


def match_names(
    sources: Sequence[str],
    targets: Sequence[str],
    config: MatchConfig | None = None,
    *,
    workers: int = 1,
) -> MatchSession:
    """Rapproche deux simples listes de noms (sans colonnes d'intérêt)."""
    matcher = NameMatcher(config, workers=workers)
    source = LabeledTable(columns=["name"], rows=[[s] for s in sources])
    target = LabeledTable(columns=["name"], rows=[[t] for t in targets])
    return MatchSession(
        results=list(matcher.iter_results(source, target, ColumnSelection("name", "name"))),
        config=matcher.config,
    )
