"""Génération du rapport et onglet REPORT."""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from concordnoms import __version__
from concordnoms.matching.schema import MatchSession


def build_report_df(session: MatchSession) -> pd.DataFrame:
    """
    Construit le DataFrame pour l'onglet REPORT.

    Contient : nb lignes source, nb appariés, nb sans correspondance, score
    moyen, répartition par niveau de confiance, paramètres, colonnes d'intérêt, horodatage, version.
    """
    config = session.config
    rows = [
        ("Metric", "Value"),
        ("nb_source_rows", len(session)),
        ("nb_matched", session.n_matched),
        ("nb_unmatched", session.n_unmatched),
        ("nb_strong_match", session.n_strong),
        ("nb_possible_match", session.n_possible),
        ("mean_best_score", round(session.mean_best_score, 4)),
        ("", ""),
        ("Parameters", ""),
        ("threshold", config.threshold),
        ("require_same_word_count", config.require_same_word_count),
        ("strict_short_names", config.strict_short_names),
        ("return_all_matches", config.return_all_matches),
        ("", ""),
        ("Columns of interest", ", ".join(session.auxiliary_columns)),
        ("", ""),
        ("timestamp", datetime.now().isoformat()),
        ("version", __version__),
    ]
    return pd.DataFrame(rows, columns=["Key", "Value"])


def print_report_console(session: MatchSession) -> None:
    """Affiche un résumé du rapport en console."""
    print("\n=== ConcordNoms Report ===")
    print(f"  Noms source:         {len(session)}")
    print(f"  Appariés:            {session.n_matched}")
    print(f"  Forts (>= 97%):      {session.n_strong}")
    print(f"  Possibles:           {session.n_possible}")
    print(f"  Sans correspondance: {session.n_unmatched}")
    print(f"  Score moyen:         {session.mean_best_score * 100:.1f}%")
    print(f"  Seuil:               {session.config.threshold:.2f}")
    print(f"  Version:             {__version__}")
    print(f"  Timestamp:           {datetime.now().isoformat()}")
    print("==========================\n")
