import pandas as pd
import pytest

from condcollapse.errors import UnknownLiteralError
from condcollapse.forms.predicates import (
    FALSE,
    TRUE,
    clause_predicate,
    group_predicate,
    literal_predicate,
)


@pytest.fixture
def cfg_df():
    return pd.DataFrame({
        "os":   ["win", "win", "mac", "linux"],
        "bits": [32, 64, 64, 64],
        "e10s": [True, False, True, False],
    })


def test_equality_literals(cfg_df):
    assert literal_predicate('(os == "win")').mask(cfg_df).tolist() == [True, True, False, False]
    assert literal_predicate("(bits == 64)").mask(cfg_df).tolist() == [False, True, True, True]


def test_flag_and_negation(cfg_df):
    assert literal_predicate("e10s").mask(cfg_df).tolist() == [True, False, True, False]
    assert literal_predicate("not e10s").mask(cfg_df).tolist() == [False, True, False, True]
    assert repr(literal_predicate("not e10s")) == "not e10s"


def test_clause_and_group(cfg_df):
    c = clause_predicate(['(os == "win")', "e10s"])
    assert c.mask(cfg_df).tolist() == [True, False, False, False]
    g = group_predicate([['(os == "mac")'], ['(os == "linux")']])
    assert g.mask(cfg_df).tolist() == [False, False, True, True]


def test_empty_clause_and_group(cfg_df):
    assert clause_predicate([]) is TRUE
    assert group_predicate([]) is FALSE
    assert TRUE.mask(cfg_df).all()
    assert not FALSE.mask(cfg_df).any()


def test_operators_compose(cfg_df):
    p = literal_predicate('(os == "win")') & ~literal_predicate("e10s")
    assert p.mask(cfg_df).tolist() == [False, True, False, False]


def test_unknown_axis_raises(cfg_df):
    with pytest.raises(UnknownLiteralError):
        literal_predicate("webrender").mask(cfg_df)
    with pytest.raises(UnknownLiteralError):
        literal_predicate('(processor == "x86")').mask(cfg_df)


def test_flag_on_value_axis_raises(cfg_df):
    with pytest.raises(UnknownLiteralError) as ei:
        literal_predicate("os").mask(cfg_df)
    assert ei.value.literal == "os"
