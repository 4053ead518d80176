import pandas as pd
import pytest

from condcollapse.errors import UnknownLiteralError
from condcollapse.forms.predicates import literal_predicate
from condcollapse.relations.catalog import build_collapse_rules
from condcollapse.relations.space import ConfigSpace, Vocabulary


def test_default_space_shape(space):
    assert len(space) == 20
    assert space.axes == ["os", "version", "processor", "bits", "e10s", "webrender", "debug"]
    assert set(space.flag_axes) == {"e10s", "webrender", "debug"}
    assert space.value_axes == ["os", "version", "processor", "bits"]
    assert space.values("os") == ["mac", "win", "linux", "android"]


def test_support_counts(space):
    assert space.support(literal_predicate('(os == "win")')) == 6
    assert space.support(literal_predicate("webrender")) == 4
    assert space.support(literal_predicate("debug")) == 10


def test_from_axes_is_full_product(small_space):
    assert len(small_space) == 6
    assert small_space.row_literals(0) == ('(os == "win")', "e10s")
    assert small_space.row_literals(1) == ('(os == "win")', "not e10s")
    assert small_space.row_literals(1, axes=["e10s"]) == ("not e10s",)


def test_row_literals_render_numbers_bare(space):
    lits = space.row_literals(0)
    assert "(bits == 64)" in lits
    assert '(os == "mac")' in lits


def test_duplicates_are_dropped():
    sp = ConfigSpace(pd.DataFrame({"os": ["win", "win", "mac"]}))
    assert len(sp) == 2


def test_constructor_validation():
    with pytest.raises(TypeError):
        ConfigSpace({"os": ["win"]})
    with pytest.raises(ValueError):
        ConfigSpace(pd.DataFrame({"os": []}))
    with pytest.raises(ValueError):
        ConfigSpace.from_axes()
    with pytest.raises(KeyError):
        ConfigSpace.from_axes(os=["win"]).values("bits")


def test_space_vocabulary(space):
    voc = space.vocabulary()
    assert '(os == "android")' in voc
    assert "(bits == 32)" in voc
    assert "debug" in voc and "not debug" in voc
    assert '(os == "beos")' not in voc


def test_vocabulary_tolerates_equality_spacing():
    voc = Vocabulary(['(bits == 64)', 'e10s'])
    assert "(bits==64)" in voc
    assert "( bits == 64 )" in voc
    assert "not e10s" not in voc
    assert 64 not in voc


def test_vocabulary_from_catalog_adds_flips():
    voc = Vocabulary.from_catalog(build_collapse_rules())
    assert "webrender" in voc and "not webrender" in voc
    assert "e10s" in voc and "not e10s" in voc
    assert "debug" not in voc
    assert "debug" not in Vocabulary.from_catalog(build_collapse_rules(), include_flips=False)


def test_vocabulary_union_unknown_require(space):
    voc = Vocabulary.from_catalog(build_collapse_rules()) | space.vocabulary()
    assert voc.unknown(["debug", "fission", '(os == "win")', "asan"]) == ["fission", "asan"]
    assert voc.require("debug") == "debug"
    with pytest.raises(UnknownLiteralError):
        voc.require("fission")


def test_summary(small_space):
    s = small_space.summary()
    assert s == {"rows": 6, "flag_axes": ["e10s"], "value_axes": ["os"]}
