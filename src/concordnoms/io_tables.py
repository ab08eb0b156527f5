"""I/O tableurs : chargement des listes de noms et sauvegarde (Excel, ODS, CSV)."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import pandas as pd

from concordnoms.config import ConcordNomsError, ProjectConfig
from concordnoms.tables import LabeledTable

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_EXTENSIONS = (".xlsx", ".xls", ".ods", ".csv", ".txt")
CSV_DELIMITERS = [",", ";", "\t", "|"]


class TableFileError(ConcordNomsError):
    """Erreur de chargement d'un fichier (fichier absent, feuille inexistante)."""


def _get_engine(path: Path) -> str | None:
    """Retourne le moteur pandas selon l'extension, ou None pour auto."""
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        return "openpyxl"
    if suffix == ".xls":
        return "xlrd"
    if suffix in (".ods", ".odt"):
        return "odf"
    return None


def _is_csv(path: Path) -> bool:
    return path.suffix.lower() in (".csv", ".txt")


def _detect_csv_delimiter(path: Path, encoding: str, *, skip_rows: int = 0) -> str | None:
    try:
        with path.open("r", encoding=encoding, errors="replace") as f:
            for _ in range(skip_rows):
                if f.readline() == "":
                    return None
            sample_lines: list[str] = []
            for line in f:
                if line.strip() == "":
                    continue
                sample_lines.append(line)
                if len(sample_lines) >= 5:
                    break
    except OSError:
        return None
    if not sample_lines:
        return None
    sample = "".join(sample_lines)
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        first = sample_lines[0]
        counts = {d: first.count(d) for d in CSV_DELIMITERS}
        best = max(counts, key=lambda d: counts[d])
        return best if counts[best] > 0 else None


def _read_csv(path: Path, header_idx: int) -> pd.DataFrame:
    """
    Lit un CSV en texte : utf-8 puis latin-1.

    Les lignes plus longues que l'en-tête sont conservées, tronquées à la
    largeur de l'en-tête (un avertissement est journalisé).
    """
    last_error: Exception | None = None
    for encoding in ("utf-8-sig", "latin-1"):
        delimiter = _detect_csv_delimiter(path, encoding, skip_rows=header_idx) or ","
        options = dict(
            dtype=str,
            encoding=encoding,
            header=0,
            skiprows=range(header_idx) if header_idx > 0 else None,
            sep=delimiter,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            index_col=False,
        )
        try:
            width = len(pd.read_csv(path, nrows=0, **options).columns)

            def _truncate_long_row(bad_line: list[str]) -> list[str]:
                logger.warning(
                    "%s : ligne tronquée à %d colonnes (%d champs): %r",
                    path.name,
                    width,
                    len(bad_line),
                    bad_line,
                )
                return bad_line[:width]

            return pd.read_csv(path, on_bad_lines=_truncate_long_row, **options)
        except UnicodeDecodeError as e:
            last_error = e
            continue
        except pd.errors.EmptyDataError:
            return pd.DataFrame(dtype=str)
        except (pd.errors.ParserError, ValueError) as e:
            raise TableFileError(
                f"Erreur CSV {path}: {e}. Vérifiez la ligne d'en-tête et le séparateur."
            ) from e
    raise TableFileError(f"Erreur CSV {path}: {last_error}")


def list_sheets(filepath: str | Path) -> list[str]:
    """
    Liste les noms des feuilles d'un fichier tableur.

    Formats supportés : .xlsx, .xls, .ods, .csv (une seule "feuille" pour CSV).

    Raises:
        TableFileError: Si le fichier est absent ou illisible.
    """
    path = Path(filepath)
    if not path.exists():
        raise TableFileError(f"Fichier introuvable: {path}")
    if _is_csv(path):
        return ["(données)"]
    try:
        engine = _get_engine(path)
        with pd.ExcelFile(path, engine=engine) as xl:
            return [str(s) for s in xl.sheet_names]
    except ImportError as e:
        raise TableFileError(f"Format {path.suffix.lower()} non pris en charge: {e}") from e
    except Exception as e:
        raise TableFileError(f"Impossible de lire le fichier {path}: {e}") from e


def load_sheet(
    filepath: str | Path,
    sheet_name: str | None = None,
    *,
    header_row: int = 1,
) -> pd.DataFrame:
    """
    Charge une feuille dans un DataFrame en préservant le texte.

    Args:
        filepath: Chemin vers le fichier.
        sheet_name: Nom de la feuille (None = première). Ignoré pour CSV.
        header_row: Numéro de ligne (1-based) contenant les en-têtes.

    Returns:
        DataFrame chargé, toutes les cellules en texte.

    Raises:
        TableFileError: Si le fichier est absent, illisible ou si la feuille n'existe pas.
    """
    path = Path(filepath)
    if not path.exists():
        raise TableFileError(f"Fichier introuvable: {path}")

    header_idx = max(header_row - 1, 0)
    if _is_csv(path):
        return _read_csv(path, header_idx)

    try:
        engine = _get_engine(path)
        xl = pd.ExcelFile(path, engine=engine)
    except ImportError as e:
        raise TableFileError(f"Format {path.suffix.lower()} non pris en charge: {e}") from e
    except Exception as e:
        raise TableFileError(f"Impossible de lire le fichier {path}: {e}") from e

    with xl:
        if sheet_name is None:
            sheet_name = str(xl.sheet_names[0])
        elif sheet_name not in xl.sheet_names:
            sheets = [str(s) for s in xl.sheet_names]
            raise TableFileError(
                f"Feuille '{sheet_name}' introuvable dans {path}. Feuilles: {', '.join(sheets)}"
            )
        try:
            return pd.read_excel(
                xl,
                sheet_name=sheet_name,
                dtype=str,
                header=header_idx,
                keep_default_na=False,
            )
        except Exception as e:
            raise TableFileError(f"Erreur feuille '{sheet_name}' dans {path}: {e}") from e


def load_table(
    filepath: str | Path,
    sheet_name: str | None = None,
    *,
    header_row: int = 1,
) -> LabeledTable:
    """Charge une feuille sous forme de LabeledTable."""
    return LabeledTable.from_dataframe(load_sheet(filepath, sheet_name, header_row=header_row))


def load_source_target(config: ProjectConfig) -> tuple[LabeledTable, LabeledTable]:
    """
    Charge les tableaux source et cible selon la configuration.

    Returns:
        (source, target)
    """
    source = load_table(config.source_file, config.source_sheet, header_row=config.source_header_row)
    target = load_table(config.target_file, config.target_sheet, header_row=config.target_header_row)
    return source, target


def save_xlsx(
    filepath: str | Path,
    dataframes: dict[str, pd.DataFrame],
    *,
    index: bool = False,
) -> None:
    """
    Sauvegarde plusieurs DataFrames dans un fichier xlsx (une feuille par DataFrame).

    Args:
        filepath: Chemin de sortie.
        dataframes: Dict {nom_feuille: DataFrame}, dans l'ordre des feuilles.
    """
    with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
        for sheet_name, df in dataframes.items():
            # Excel limite les noms de feuille à 31 caractères
            safe_name = str(sheet_name)[:31]
            df.to_excel(writer, sheet_name=safe_name, index=index)
