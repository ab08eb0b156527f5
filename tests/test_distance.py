"""Tests de la distance d'édition."""

import pytest

from concordnoms.matching.distance import distance_row, edit_distance


def test_edit_distance_classic() -> None:
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("flaw", "lawn") == 2


def test_edit_distance_identical() -> None:
    assert edit_distance("doe jane", "doe jane") == 0
    assert edit_distance("", "") == 0


def test_edit_distance_one_side_empty() -> None:
    assert edit_distance("", "abc") == 3
    assert edit_distance("abcd", "") == 4


def test_edit_distance_counts_space() -> None:
    # L'espace entre les mots est un caractère comme un autre
    assert edit_distance("ab cd", "abcd") == 1


@pytest.mark.parametrize(
    ("a", "b"),
    [("doe jane", "doh jane"), ("ah kow tan", "jane"), ("", "x"), ("abc", "yabd")],
)
def test_edit_distance_symmetric(a: str, b: str) -> None:
    assert edit_distance(a, b) == edit_distance(b, a)


def test_distance_row_order() -> None:
    assert distance_row("doe jane", ["doh jane", "doe jane", ""]) == [1, 0, 8]


def test_distance_row_empty_targets() -> None:
    assert distance_row("doe jane", []) == []


def test_distance_row_workers() -> None:
    targets = ["doh jane", "ah kow tan", "jane", "doe jon"]
    assert distance_row("doe jane", targets, workers=2) == distance_row("doe jane", targets)
    assert distance_row("doe jane", targets) == [edit_distance("doe jane", t) for t in targets]
