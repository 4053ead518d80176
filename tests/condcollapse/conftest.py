import os, sys
import pytest

# Ensure `src/` is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from condcollapse.relations.catalog import WIN, WIN7, WIN10, build_collapse_rules
from condcollapse.relations.rules import CollapseRule, RuleCatalog
from condcollapse.relations.space import ConfigSpace, default_space


@pytest.fixture
def space():
    # 10 platforms x debug on/off
    return default_space()


@pytest.fixture
def catalog():
    return build_collapse_rules()


@pytest.fixture
def small_space():
    # os x e10s full product, 6 rows
    return ConfigSpace.from_axes(os=["win", "mac", "linux"], e10s=[True, False])


@pytest.fixture
def win_catalog():
    # the two Windows rules of the motivating example
    return RuleCatalog([
        CollapseRule.new([WIN, WIN7], ["not webrender"]),
        CollapseRule.new([WIN], [WIN7, WIN10]),
    ], name="win")


@pytest.fixture
def empty_catalog():
    return RuleCatalog([], name="empty")
