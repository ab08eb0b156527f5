"""Calcul du score de similarité entre deux noms."""

from __future__ import annotations

from concordnoms.config import MatchConfig
from concordnoms.matching.distance import edit_distance
from concordnoms.normalize import normalize_name, token_count

SHORT_NAME_MAX_LEN = 4  # un nom d'un seul mot de moins de 5 caractères est "court"


def base_similarity(a: str, b: str, distance: int | None = None) -> float:
    """
    Score 0-1 : 1 - distance / longueur max. Deux chaînes vides valent 1.0.

    Args:
        a: Nom normalisé.
        b: Nom normalisé.
        distance: Distance déjà calculée (évite un second calcul).
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    if distance is None:
        distance = edit_distance(a, b)
    return 1 - distance / max_len


def is_short_name(normalized: str) -> bool:
    return token_count(normalized) == 1 and len(normalized) <= SHORT_NAME_MAX_LEN


def apply_overrides(
    score: float,
    source_norm: str,
    target_norm: str,
    config: MatchConfig,
) -> float:
    """
    Applique les règles de sévérité au score de base, dans cet ordre :

    1. nom source court (strict_short_names) : égalité exacte ou rien ;
    2. nombre de mots différent (require_same_word_count) : 0.0,
       même si la règle 1 a donné 1.0.
    """
    if config.strict_short_names and is_short_name(source_norm):
        score = 1.0 if source_norm == target_norm else 0.0
    if config.require_same_word_count and token_count(source_norm) != token_count(target_norm):
        score = 0.0
    return score


def score_normalized(
    source_norm: str,
    target_norm: str,
    config: MatchConfig,
    distance: int | None = None,
) -> float:
    """Score final entre deux noms déjà normalisés."""
    score = base_similarity(source_norm, target_norm, distance)
    return apply_overrides(score, source_norm, target_norm, config)


def score_names(source: str, target: str, config: MatchConfig | None = None) -> float:
    """Score final (0-1) entre deux noms bruts."""
    return score_normalized(normalize_name(source), normalize_name(target), config or MatchConfig())
