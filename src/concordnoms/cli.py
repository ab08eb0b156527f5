"""Interface en ligne de commande ConcordNoms."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from concordnoms import __version__
from concordnoms.config import ConcordNomsError, MatchConfig, ProjectConfig
from concordnoms.export import default_export_name, export_session
from concordnoms.io_tables import list_sheets, load_source_target, load_table
from concordnoms.matching.matcher import ColumnSelection, NameMatcher
from concordnoms.report import print_report_console

logger = logging.getLogger("concordnoms")

EXIT_NOT_READY = 2


def setup_logging(level: int = logging.WARNING, log_file: str | Path | None = None) -> None:
    """Configure le logger du paquet : console, et fichier UTF-8 si demandé."""
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    logger.handlers = handlers
    logger.setLevel(level)


def _project_from_args(args: argparse.Namespace) -> ProjectConfig:
    """Construit la configuration : fichier JSON éventuel, puis options de la ligne de commande."""
    if args.config:
        project = ProjectConfig.load(args.config)
    else:
        project = ProjectConfig(source_file=args.source or "", target_file=args.target or "")
        if not project.source_file or not project.target_file:
            raise ConcordNomsError("--source et --target requis (ou --config)")

    if args.source_sheet:
        project.source_sheet = args.source_sheet
    if args.target_sheet:
        project.target_sheet = args.target_sheet
    if args.source_col:
        project.source_name_col = args.source_col
    if args.target_col:
        project.target_name_col = args.target_col
    if args.col:
        project.columns_of_interest = list(args.col)
    if args.workers is not None:
        project.workers = args.workers

    match = project.match.to_dict()
    if args.threshold is not None:
        match["threshold"] = args.threshold
    if args.require_same_word_count:
        match["require_same_word_count"] = True
    if args.no_strict_short_names:
        match["strict_short_names"] = False
    if args.all_matches:
        match["return_all_matches"] = True
    project.match = MatchConfig.from_dict(match)
    return project


def cmd_list_sheets(filepath: str) -> int:
    """Liste les feuilles d'un fichier tableur."""
    sheets = list_sheets(filepath)
    print(f"Feuilles dans {filepath}:")
    for s in sheets:
        print(f"  - {s}")
    return 0


def cmd_list_columns(filepath: str, sheet: str | None = None, preview: int = 5) -> int:
    """Liste les colonnes d'un fichier avec un aperçu des premières valeurs."""
    table = load_table(filepath, sheet)
    print(f"Colonnes dans {filepath} ({len(table)} lignes):")
    for col in table.columns:
        sample = ", ".join(v for v in table.preview(col, preview) if v)
        print(f"  - {col}: {sample}")
    return 0


def cmd_run(
    project: ProjectConfig,
    output_path: str | None,
    *,
    dry_run: bool = False,
) -> int:
    """Exécute le rapprochement et écrit le résultat."""
    source, target = load_source_target(project)
    selection = ColumnSelection(
        source_name_col=project.source_name_col,
        target_name_col=project.target_name_col,
        columns_of_interest=project.columns_of_interest,
    )
    missing = [c for c in project.columns_of_interest if not source.has_column(c)]
    if missing:
        print(f"Avertissement: colonnes d'intérêt absentes (ignorées): {', '.join(missing)}")

    matcher = NameMatcher(project.match, workers=project.workers)
    session = matcher.run(source, target, selection)
    if session is None:
        print(
            "Erreur: choisissez une colonne de noms présente dans chaque fichier "
            f"(source: {', '.join(source.columns)}; cible: {', '.join(target.columns)})"
        )
        return EXIT_NOT_READY

    print_report_console(session)

    if dry_run:
        print("Mode dry-run: pas d'écriture du fichier de sortie.")
        return 0

    if not output_path:
        print("Erreur: --output requis en mode non dry-run.")
        return 1

    written = export_session(session, output_path)
    if written is None:
        print("Aucun résultat à exporter.")
    else:
        print(f"Fichier de sortie: {written}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="concordnoms",
        description="Rapprochement approximatif de noms entre deux tableurs (Levenshtein)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée")
    parser.add_argument("--log-file", help="Fichier de journal (UTF-8)")

    subparsers = parser.add_subparsers(dest="command", help="Commandes")

    # list-sheets
    p_list = subparsers.add_parser("list-sheets", help="Lister les feuilles d'un tableur")
    p_list.add_argument("file", help="Fichier xlsx/ods/csv")

    # list-columns
    p_cols = subparsers.add_parser("list-columns", help="Lister les colonnes d'un tableur")
    p_cols.add_argument("file", help="Fichier xlsx/ods/csv")
    p_cols.add_argument("--sheet", help="Feuille (défaut: première)")

    # run
    p_run = subparsers.add_parser("run", help="Exécuter le rapprochement")
    p_run.add_argument("--config", "-c", help="Fichier config JSON")
    p_run.add_argument("--source", "-s", help="Tableur source (noms à rapprocher)")
    p_run.add_argument("--target", "-t", help="Tableur cible (noms de référence)")
    p_run.add_argument("--source-sheet", help="Feuille source")
    p_run.add_argument("--target-sheet", help="Feuille cible")
    p_run.add_argument("--source-col", help="Colonne de noms source")
    p_run.add_argument("--target-col", help="Colonne de noms cible")
    p_run.add_argument("--col", action="append", help="Colonne d'intérêt à reporter (répétable)")
    p_run.add_argument("--threshold", type=float, help="Score minimal 0.5-1.0 (défaut 0.8)")
    p_run.add_argument("--require-same-word-count", action="store_true", help="Même nombre de mots exigé")
    p_run.add_argument("--no-strict-short-names", action="store_true", help="Noms courts comparés en approximatif")
    p_run.add_argument("--all-matches", action="store_true", help="Conserver tous les candidats")
    p_run.add_argument("--workers", type=int, help="Threads de calcul (-1 = tous les cœurs)")
    p_run.add_argument("--output", "-o", help=f"Fichier .csv ou .xlsx (ex. {default_export_name()})")
    p_run.add_argument("--dry-run", action="store_true", help="Ne pas écrire le fichier de sortie")

    args = parser.parse_args(argv)
    setup_logging(logging.INFO if args.verbose else logging.WARNING, args.log_file)

    try:
        if args.command == "list-sheets":
            return cmd_list_sheets(args.file)

        if args.command == "list-columns":
            return cmd_list_columns(args.file, args.sheet)

        if args.command == "run":
            if not args.dry_run and not args.output:
                parser.error("--output requis sauf en --dry-run")
            project = _project_from_args(args)
            return cmd_run(project, args.output, dry_run=args.dry_run)
    except ConcordNomsError as e:
        print(f"Erreur: {e}")
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
