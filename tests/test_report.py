"""Tests du module report."""

import pytest

from concordnoms.config import MatchConfig
from concordnoms.matching.schema import MatchResult, MatchSession
from concordnoms.report import build_report_df, print_report_console


@pytest.fixture
def sample_session() -> MatchSession:
    return MatchSession(
        results=[
            MatchResult("Tan Ah Kow", 0, {}, "Kow Ah Tan", 1.0),
            MatchResult("Jane Doe", 1, {}, "Jane Doh", 0.875),
            MatchResult("Al", 2, {}, None, 0.0),
        ],
        auxiliary_columns=["service", "email"],
        config=MatchConfig(threshold=0.85),
    )


def _value(df, key):  # type: ignore[no-untyped-def]
    return df[df["Key"] == key]["Value"].values[0]


def test_build_report_df_counts(sample_session: MatchSession) -> None:
    df = build_report_df(sample_session)
    assert _value(df, "nb_source_rows") == 3
    assert _value(df, "nb_matched") == 2
    assert _value(df, "nb_unmatched") == 1
    assert _value(df, "nb_strong_match") == 1
    assert _value(df, "nb_possible_match") == 1
    assert _value(df, "mean_best_score") == 0.9375


def test_build_report_df_contains_params(sample_session: MatchSession) -> None:
    df = build_report_df(sample_session)
    keys = df["Key"].tolist()
    assert "threshold" in keys
    assert "strict_short_names" in keys
    assert "version" in keys
    assert "timestamp" in keys
    assert _value(df, "threshold") == 0.85
    assert _value(df, "Columns of interest") == "service, email"


def test_print_report_console_no_error(sample_session: MatchSession, capsys: pytest.CaptureFixture) -> None:
    print_report_console(sample_session)
    out = capsys.readouterr().out
    assert "ConcordNoms Report" in out
    assert "Noms source" in out
    assert "93.8%" in out
    assert "Forts (>= 97%):      1" in out
    assert "Possibles:           1" in out


def test_report_empty_session() -> None:
    df = build_report_df(MatchSession(results=[]))
    assert _value(df, "nb_source_rows") == 0
    assert _value(df, "mean_best_score") == 0.0
