import pytest

from condcollapse.errors import UnknownLiteralError
from condcollapse.forms.clauses import ClauseGroup
from condcollapse.processing.coverage import (
    complement_group,
    coverage_mask,
    equivalent,
    inverted_coverage_count,
    uncovered,
)

WIN, MAC, LINUX = '(os == "win")', '(os == "mac")', '(os == "linux")'


def test_coverage_mask(small_space):
    m = coverage_mask([[WIN, "e10s"], [MAC]], small_space)
    assert m.tolist() == [True, False, True, True, False, False]


def test_equivalent(small_space):
    assert equivalent([[WIN, "e10s"], [WIN, "not e10s"]], [[WIN]], small_space)
    assert not equivalent([[WIN, "e10s"]], [[WIN]], small_space)
    assert equivalent([], [[WIN, "e10s", "not e10s"]], small_space)


def test_uncovered_rows(small_space):
    rest = uncovered([[WIN], [MAC, "e10s"]], small_space)
    assert len(rest) == 3
    assert set(rest["os"]) == {"mac", "linux"}


def test_complement_group(small_space):
    g = ClauseGroup.from_literals([[WIN]], prefix="if ", suffix=": FAIL")
    comp = complement_group(g, small_space)
    assert len(comp) == 4
    assert list(comp.clauses[0]) == [MAC, "e10s"]
    assert (comp.prefix, comp.suffix) == ("if ", ": FAIL")


def test_inverted_coverage_count(small_space, empty_catalog):
    g = ClauseGroup.from_literals([[WIN]])
    assert inverted_coverage_count(g, empty_catalog, small_space) == 2
    # the input is never touched
    assert [list(c) for c in g] == [[WIN]]


def test_inverted_count_suggests_flip(small_space, empty_catalog):
    g = ClauseGroup.from_literals([[WIN, "e10s"], [MAC, "e10s"], [LINUX, "e10s"], [WIN, "not e10s"]])
    # the complement is mac/linux without e10s
    assert inverted_coverage_count(g, empty_catalog, small_space) == 2


def test_inverted_count_of_everything_is_zero(small_space, empty_catalog):
    g = ClauseGroup.from_literals([[WIN], [MAC], [LINUX]])
    assert inverted_coverage_count(g, empty_catalog, small_space) == 0


def test_unknown_literal_raises(small_space, empty_catalog):
    with pytest.raises(UnknownLiteralError):
        inverted_coverage_count(ClauseGroup.from_literals([["webrender"]]), empty_catalog, small_space)
