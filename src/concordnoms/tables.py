"""Tableaux étiquetés : liste de colonnes + matrice de chaînes ligne par ligne."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import pandas as pd

from concordnoms.normalize import safe_str


@dataclass
class LabeledTable:
    """
    Tableau générique dont le schéma n'est connu qu'à l'exécution.

    Les lignes plus courtes que l'en-tête sont acceptées : les cellules
    manquantes valent "".
    """

    columns: list[str]
    rows: list[list[str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def has_column(self, col: str) -> bool:
        return bool(col) and col in self.columns

    def column_index(self, col: str) -> int:
        """Indice de la colonne, -1 si absente."""
        try:
            return self.columns.index(col)
        except ValueError:
            return -1

    def cell(self, row: int, col: str) -> str:
        idx = self.column_index(col)
        if idx == -1 or not 0 <= row < len(self.rows):
            return ""
        values = self.rows[row]
        return values[idx] if idx < len(values) else ""

    def column_values(self, col: str) -> list[str]:
        return [self.cell(i, col) for i in range(len(self.rows))]

    def preview(self, col: str, n: int = 5) -> list[str]:
        """Premières valeurs d'une colonne (aperçu avant sélection)."""
        if self.column_index(col) == -1:
            return []
        return [self.cell(i, col) for i in range(min(n, len(self.rows)))]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[object]]) -> LabeledTable:
        """Construit un tableau dont la première ligne est l'en-tête."""
        materialized = [[safe_str(v) for v in row] for row in rows]
        if not materialized:
            return cls(columns=[], rows=[])
        return cls(columns=materialized[0], rows=materialized[1:])

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> LabeledTable:
        columns = [safe_str(c) for c in df.columns]
        rows = [[safe_str(v) for v in values] for values in df.itertuples(index=False, name=None)]
        return cls(columns=columns, rows=rows)

    def to_dataframe(self) -> pd.DataFrame:
        width = len(self.columns)
        padded = [(list(r) + [""] * width)[:width] for r in self.rows]
        return pd.DataFrame(padded, columns=self.columns, dtype=str)
