"""Distance d'édition (Levenshtein) entre noms normalisés."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """
    Distance de Levenshtein (insertion, suppression, substitution à coût 1).

    Calculée caractère par caractère sur la chaîne entière, espaces compris.
    """
    return int(Levenshtein.distance(a, b))


def distance_row(source: str, targets: Sequence[str], *, workers: int = 1) -> list[int]:
    """
    Distances entre un nom source et chaque nom cible, dans l'ordre des cibles.

    Args:
        source: Nom source normalisé.
        targets: Noms cibles normalisés.
        workers: Nombre de threads rapidfuzz (-1 = tous les cœurs).

    Returns:
        Liste d'entiers, vide si aucune cible.
    """
    if not targets:
        return []
    matrix = process.cdist(
        [source],
        list(targets),
        scorer=Levenshtein.distance,
        dtype=np.int32,
        workers=workers,
    )
    return [int(d) for d in matrix[0]]
