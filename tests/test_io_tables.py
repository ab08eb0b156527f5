"""Tests du module I/O tableurs."""

import logging
from pathlib import Path

import pandas as pd
import pytest

from concordnoms.config import ProjectConfig
from concordnoms.io_tables import list_sheets, load_sheet, load_source_target, load_table, save_xlsx
from concordnoms.matching.matcher import ColumnSelection, NameMatcher


def test_list_sheets(tmp_path: Path) -> None:
    path = tmp_path / "test.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as w:
        pd.DataFrame({"a": [1]}).to_excel(w, sheet_name="Feuille1", index=False)
        pd.DataFrame({"x": [1]}).to_excel(w, sheet_name="Feuille2", index=False)
    assert list_sheets(path) == ["Feuille1", "Feuille2"]


def test_list_sheets_csv(tmp_path: Path) -> None:
    path = tmp_path / "noms.csv"
    path.write_text("nom\nJane\n", encoding="utf-8")
    assert list_sheets(path) == ["(données)"]


def test_load_sheet_default_first(tmp_path: Path) -> None:
    path = tmp_path / "test.xlsx"
    pd.DataFrame({"col": ["a", "b"]}).to_excel(path, index=False, engine="openpyxl")
    df = load_sheet(path)
    assert len(df) == 2
    assert "col" in df.columns


def test_load_table_csv_semicolon(tmp_path: Path) -> None:
    path = tmp_path / "noms.csv"
    path.write_text("nom;service\nTan Ah Kow;Compta\nJane Doe;RH\n", encoding="utf-8")
    table = load_table(path)
    assert table.columns == ["nom", "service"]
    assert table.column_values("nom") == ["Tan Ah Kow", "Jane Doe"]


def test_load_table_csv_short_row(tmp_path: Path) -> None:
    path = tmp_path / "noms.csv"
    path.write_text("nom,service,email\nTan Ah Kow,Compta,tan@example.org\nJane Doe,RH\n", encoding="utf-8")
    table = load_table(path)
    assert len(table) == 2
    assert table.cell(1, "email") == ""


def test_load_table_csv_long_row_truncated(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Une ligne plus longue que l'en-tête est conservée, tronquée."""
    path = tmp_path / "noms.csv"
    path.write_text("nom,service\nTan Ah Kow,Compta\nJane Doe,RH,extra\nAl,IT\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="concordnoms.io_tables"):
        table = load_table(path)
    assert table.columns == ["nom", "service"]
    assert table.column_values("nom") == ["Tan Ah Kow", "Jane Doe", "Al"]
    assert table.cell(1, "service") == "RH"
    assert "tronquée" in caplog.text

    session = NameMatcher().run(table, table, ColumnSelection("nom", "nom"))
    assert session is not None
    assert len(session) == 3
    assert [r.best_match for r in session] == ["Tan Ah Kow", "Jane Doe", "Al"]


def test_load_table_csv_latin1(tmp_path: Path) -> None:
    path = tmp_path / "noms.csv"
    path.write_bytes("nom,ville\nJérôme,Orléans\n".encode("latin-1"))
    table = load_table(path)
    assert table.cell(0, "nom") == "Jérôme"


def test_load_table_header_row(tmp_path: Path) -> None:
    path = tmp_path / "noms.csv"
    path.write_text("Export du 01/02\nnom,service\nJane Doe,RH\n", encoding="utf-8")
    table = load_table(path, header_row=2)
    assert table.columns == ["nom", "service"]
    assert table.cell(0, "nom") == "Jane Doe"


def test_save_xlsx(tmp_path: Path) -> None:
    path = tmp_path / "out.xlsx"
    save_xlsx(path, {"Sheet1": pd.DataFrame({"a": [1]}), "Sheet2": pd.DataFrame({"b": [2]})})
    with pd.ExcelFile(path, engine="openpyxl") as xl:
        assert xl.sheet_names == ["Sheet1", "Sheet2"]


def test_load_source_target_two_files(tmp_path: Path) -> None:
    src = tmp_path / "source.xlsx"
    tgt = tmp_path / "target.csv"
    pd.DataFrame({"nom": ["Jane Doe"]}).to_excel(src, index=False, engine="openpyxl")
    tgt.write_text("name\nJane Doh\n", encoding="utf-8")
    config = ProjectConfig(source_file=str(src), target_file=str(tgt))
    source, target = load_source_target(config)
    assert source.columns == ["nom"]
    assert target.column_values("name") == ["Jane Doh"]
