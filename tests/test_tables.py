"""Tests des tableaux étiquetés."""

import pandas as pd

from concordnoms.tables import LabeledTable


def test_from_rows_header_first() -> None:
    table = LabeledTable.from_rows([["nom", "service"], ["Jane Doe", "RH"], ["Al"]])
    assert table.columns == ["nom", "service"]
    assert len(table) == 2
    assert table.cell(1, "service") == ""


def test_from_rows_empty() -> None:
    table = LabeledTable.from_rows([])
    assert table.columns == []
    assert len(table) == 0


def test_cell_out_of_range_is_empty() -> None:
    table = LabeledTable(columns=["nom"], rows=[["Jane"]])
    assert table.cell(5, "nom") == ""
    assert table.cell(0, "inconnue") == ""


def test_has_column() -> None:
    table = LabeledTable(columns=["nom"], rows=[])
    assert table.has_column("nom")
    assert not table.has_column("")
    assert not table.has_column("name")


def test_column_values_and_preview() -> None:
    table = LabeledTable(columns=["nom"], rows=[[str(i)] for i in range(8)])
    assert table.column_values("nom") == [str(i) for i in range(8)]
    assert table.preview("nom") == ["0", "1", "2", "3", "4"]
    assert table.preview("inconnue") == []


def test_from_dataframe_nan_to_empty() -> None:
    df = pd.DataFrame({"nom": ["Jane", None], "age": [30, float("nan")]})
    table = LabeledTable.from_dataframe(df)
    assert table.columns == ["nom", "age"]
    assert table.rows[1] == ["", ""]
    assert table.cell(0, "age") in ("30", "30.0")


def test_to_dataframe_pads_short_rows() -> None:
    table = LabeledTable(columns=["a", "b"], rows=[["1"], ["2", "3"]])
    df = table.to_dataframe()
    assert list(df.columns) == ["a", "b"]
    assert df.iloc[0]["b"] == ""
