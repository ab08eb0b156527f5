"""Configuration du rapprochement et chargement du fichier config JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

MIN_THRESHOLD = 0.5
MAX_THRESHOLD = 1.0
DEFAULT_THRESHOLD = 0.8


class ConcordNomsError(Exception):
    """Exception de base pour ConcordNoms."""


class ConfigError(ConcordNomsError, ValueError):
    """Erreur de validation de la configuration."""


class ConfigFileError(ConcordNomsError):
    """Erreur de chargement du fichier de configuration (fichier absent, JSON invalide)."""


class MatchCancelled(ConcordNomsError):
    """Le rapprochement a été interrompu avant la fin."""


def _as_bool(d: dict[str, Any], key: str, default: bool) -> bool:
    value = d.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} doit être un booléen (got {value!r})")
    return value


@dataclass(frozen=True)
class MatchConfig:
    """Paramètres d'un rapprochement, immuables pendant une exécution."""

    threshold: float = DEFAULT_THRESHOLD
    require_same_word_count: bool = False
    strict_short_names: bool = True
    return_all_matches: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise ConfigError(f"threshold doit être un nombre (got {self.threshold!r})")
        if not MIN_THRESHOLD <= self.threshold <= MAX_THRESHOLD:
            raise ConfigError(
                f"threshold doit être entre {MIN_THRESHOLD} et {MAX_THRESHOLD} (got {self.threshold})"
            )
        for name in ("require_same_word_count", "strict_short_names", "return_all_matches"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} doit être un booléen (got {getattr(self, name)!r})")
        # Seuil toujours stocké en float (0.8 et 4/5 doivent comparer à l'identique)
        object.__setattr__(self, "threshold", float(self.threshold))

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MatchConfig:
        threshold = d.get("threshold", DEFAULT_THRESHOLD)
        if isinstance(threshold, str):
            try:
                threshold = float(threshold)
            except ValueError as e:
                raise ConfigError(f"threshold invalide: {threshold!r}") from e
        return cls(
            threshold=threshold,
            require_same_word_count=_as_bool(d, "require_same_word_count", False),
            strict_short_names=_as_bool(d, "strict_short_names", True),
            return_all_matches=_as_bool(d, "return_all_matches", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "threshold": self.threshold,
            "require_same_word_count": self.require_same_word_count,
            "strict_short_names": self.strict_short_names,
            "return_all_matches": self.return_all_matches,
        }


@dataclass
class ProjectConfig:
    """Configuration d'un projet : fichiers, colonnes choisies et paramètres."""

    source_file: str = ""
    target_file: str = ""
    source_sheet: str | None = None  # None = première feuille
    target_sheet: str | None = None
    source_header_row: int = 1
    target_header_row: int = 1

    source_name_col: str = ""
    target_name_col: str = ""
    columns_of_interest: list[str] = field(default_factory=list)

    workers: int = 1
    match: MatchConfig = field(default_factory=MatchConfig)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ProjectConfig:
        source_file = d.get("source_file", "")
        target_file = d.get("target_file", "")
        if not source_file or not target_file:
            raise ConfigError("source_file et target_file requis")

        columns_of_interest = d.get("columns_of_interest", [])
        if not isinstance(columns_of_interest, list):
            raise ConfigError(f"columns_of_interest doit être une liste (got {columns_of_interest!r})")

        source_header_row = int(d.get("source_header_row", 1))
        target_header_row = int(d.get("target_header_row", 1))
        if source_header_row < 1 or target_header_row < 1:
            raise ConfigError("source_header_row et target_header_row doivent être >= 1")

        workers = int(d.get("workers", 1))
        if workers == 0 or workers < -1:
            raise ConfigError(f"workers doit être >= 1 ou -1 (got {workers})")

        match_dict = d.get("match", {})
        if not isinstance(match_dict, dict):
            raise ConfigError(f"match doit être un objet (got {match_dict!r})")

        return cls(
            source_file=source_file,
            target_file=target_file,
            source_sheet=d.get("source_sheet"),
            target_sheet=d.get("target_sheet"),
            source_header_row=source_header_row,
            target_header_row=target_header_row,
            source_name_col=d.get("source_name_col", "") or "",
            target_name_col=d.get("target_name_col", "") or "",
            columns_of_interest=[str(c) for c in columns_of_interest],
            workers=workers,
            match=MatchConfig.from_dict(match_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "target_file": self.target_file,
            "source_sheet": self.source_sheet,
            "target_sheet": self.target_sheet,
            "source_header_row": self.source_header_row,
            "target_header_row": self.target_header_row,
            "source_name_col": self.source_name_col,
            "target_name_col": self.target_name_col,
            "columns_of_interest": list(self.columns_of_interest),
            "workers": self.workers,
            "match": self.match.to_dict(),
        }

    @classmethod
    def load(cls, path: str | Path) -> ProjectConfig:
        """
        Charge la configuration depuis un fichier JSON.

        Raises:
            ConfigFileError: Si le fichier est absent ou le JSON invalide.
            ConfigError: Si la configuration est invalide.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigFileError(f"Fichier de configuration introuvable: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"JSON invalide dans {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Impossible de lire {path}: {e}") from e

        if not isinstance(d, dict):
            raise ConfigFileError(f"Fichier de configuration invalide: {path} doit contenir un objet JSON")

        config = cls.from_dict(d)
        config.resolve_paths(path.parent)
        return config

    def save(self, path: str | Path) -> None:
        """Écrit la configuration au format JSON (UTF-8)."""
        path = Path(path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise ConfigFileError(f"Impossible d'écrire {path}: {e}") from e

    def resolve_paths(self, base_dir: Path) -> None:
        """
        Résout les chemins relatifs par rapport au répertoire de base (ex. dossier du fichier config).

        Modifie source_file et target_file en place.
        """
        base = Path(base_dir)
        if self.source_file and not Path(self.source_file).is_absolute():
            self.source_file = str((base / self.source_file).resolve())
        if self.target_file and not Path(self.target_file).is_absolute():
            self.target_file = str((base / self.target_file).resolve())
