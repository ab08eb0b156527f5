"""Normalisation des noms avant comparaison."""

from __future__ import annotations

import math
from typing import Any


def _is_missing(val: Any) -> bool:
    """Cellule vide : None ou NaN (cellule vide lue par pandas)."""
    return val is None or (isinstance(val, float) and math.isnan(val))


def safe_str(val: Any) -> str:
    """Convertit une valeur en chaîne pour affichage/stockage."""
    if _is_missing(val):
        return ""
    return str(val)


def normalize_name(name: str | float | int | None) -> str:
    """
    Normalise un nom : découpe sur les blancs, minuscules, mots triés.

    "Tan Ah Kow" et "kow  AH tan" donnent tous deux "ah kow tan".
    La ponctuation et les accents sont conservés tels quels.

    Args:
        name: Nom brut (converti en str si numérique).

    Returns:
        Nom normalisé, ou chaîne vide si le nom est vide ou absent.
    """
    tokens = [w.strip().lower() for w in safe_str(name).split()]
    return " ".join(sorted(w for w in tokens if w))


def name_tokens(normalized: str) -> list[str]:
    """Mots d'un nom déjà normalisé."""
    return normalized.split()


def token_count(normalized: str) -> int:
    return len(name_tokens(normalized))
