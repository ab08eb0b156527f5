"""Export d'une session de rapprochement (CSV, xlsx)."""

from __future__ import annotations

import csv
import logging
import math
from datetime import date
from pathlib import Path

import pandas as pd

from concordnoms.io_tables import TableFileError, save_xlsx
from concordnoms.matching.schema import MatchSession
from concordnoms.report import build_report_df

logger = logging.getLogger(__name__)

SOURCE_NAME_HEADER = "SourceName"
BEST_MATCH_HEADER = "BestMatch"
SCORE_HEADER = "SimilarityScorePercent"
QUALITY_HEADER = "MatchQuality"


def score_percent(score: float) -> int:
    """Score 0-1 arrondi au pourcentage entier le plus proche (0.5 vers le haut)."""
    return int(math.floor(score * 100 + 0.5))


def session_to_dataframe(session: MatchSession) -> pd.DataFrame:
    """
    Une ligne par nom source : nom, colonnes d'intérêt, meilleur nom cible, score (%).

    Sans correspondance, la colonne BestMatch est vide et le score vaut 0.
    """
    header = [SOURCE_NAME_HEADER, *session.auxiliary_columns, BEST_MATCH_HEADER, SCORE_HEADER]
    rows = [
        [
            r.source_name,
            *(r.auxiliary.get(col, "") for col in session.auxiliary_columns),
            r.best_match or "",
            score_percent(r.best_score),
        ]
        for r in session
    ]
    return pd.DataFrame(rows, columns=header)


def candidates_to_dataframe(session: MatchSession) -> pd.DataFrame:
    """Forme longue de tous les candidats retenus (rang 1 = meilleur), avec leur niveau de confiance."""
    rows = [
        [r.source_name, rank, c.target_name, score_percent(c.score), c.match_quality]
        for r in session
        for rank, c in enumerate(r.all_candidates, start=1)
    ]
    return pd.DataFrame(
        rows,
        columns=[SOURCE_NAME_HEADER, "Rank", "Candidate", SCORE_HEADER, QUALITY_HEADER],
    )


def session_to_csv(session: MatchSession, *, delimiter: str = ",") -> str:
    """
    Rend la session en texte délimité.

    Les champs contenant le séparateur, un guillemet ou un saut de ligne sont
    entourés de guillemets, les guillemets internes doublés.
    """
    df = session_to_dataframe(session)
    return df.to_csv(
        index=False,
        sep=delimiter,
        quoting=csv.QUOTE_MINIMAL,
        quotechar='"',
        doublequote=True,
        lineterminator="\n",
    )


def default_export_name(today: date | None = None) -> str:
    return f"name-matcher-results-{(today or date.today()).isoformat()}.csv"


def export_session(
    session: MatchSession,
    path: str | Path,
    *,
    delimiter: str = ",",
) -> Path | None:
    """
    Écrit la session dans un fichier .csv ou .xlsx.

    Une session vide n'est pas exportée : rien n'est écrit et None est retourné.

    Raises:
        TableFileError: Si l'extension n'est pas prise en charge ou l'écriture échoue.
    """
    if not len(session):
        logger.info("Export ignoré : aucune ligne de résultat")
        return None

    path = Path(path)
    suffix = path.suffix.lower()
    try:
        if suffix in (".csv", ".txt"):
            path.write_text(session_to_csv(session, delimiter=delimiter), encoding="utf-8")
        elif suffix == ".xlsx":
            sheets = {"Results": session_to_dataframe(session)}
            if session.config.return_all_matches:
                sheets["Candidates"] = candidates_to_dataframe(session)
            sheets["REPORT"] = build_report_df(session)
            save_xlsx(path, sheets)
        else:
            raise TableFileError(f"Format de sortie non supporté: {suffix}")
    except OSError as e:
        raise TableFileError(f"Impossible d'écrire {path}: {e}") from e

    logger.info("Export de %d lignes vers %s", len(session), path)
    return path
