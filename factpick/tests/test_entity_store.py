"""
Tests for the entity pool and attribute resolution.

Tests:
- Fact pool deduplication
- Random draws and empty-pool signals
- Filtered lookups
- Common property resolution
"""

import random

from ..engine_core.attributes import (
    common_properties,
    greater_than,
    is_greater,
    max_magnitude_holders,
)
from ..engine_core.entities import DatasetMode, Fact, Pick
from ..engine_core.entity_store import EntityPool, build_fact_pool
from .conftest import make_fact


class TestFactPool:
    """Tests for the global fact list."""

    def test_duplicate_descriptions_collapse(self, abc_pool):
        """F1 appears on two picks but once in the pool."""
        descriptions = [f.description for f in abc_pool.facts]
        assert sorted(descriptions) == ["F1", "F2"]

    def test_larger_quantity_is_canonical(self):
        """The occurrence with the larger quantity wins."""
        picks = [
            Pick(id="a", name="A", facts=(make_fact("HOTDOGS", 5),)),
            Pick(id="b", name="B", facts=(make_fact("HOTDOGS", 10),)),
            Pick(id="c", name="C", facts=(make_fact("HOTDOGS", 7),)),
        ]
        facts = build_fact_pool(picks)

        assert len(facts) == 1
        assert facts[0].quantity == 10

    def test_unset_quantity_counts_as_one(self):
        """A fact without a quantity outranks a fractional duplicate."""
        picks = [
            Pick(id="a", name="A", facts=(make_fact("F", category="FIRST"),)),
            Pick(id="b", name="B", facts=(make_fact("F", 0.5, category="SECOND"),)),
        ]
        facts = build_fact_pool(picks)

        assert len(facts) == 1
        assert facts[0].category == "FIRST"
        assert facts[0].quantity is None

    def test_numeric_pool_has_no_facts(self, txy_pool):
        assert txy_pool.facts == ()
        assert txy_pool.random_fact() is None


class TestRandomDraws:
    """Tests for uniform draws."""

    def test_empty_pool_returns_none(self):
        pool = EntityPool([], mode=DatasetMode.DISCRETE)

        assert pool.random_entity() is None
        assert pool.random_fact() is None

    def test_random_entity_comes_from_pool(self, abc_pool):
        ids = {abc_pool.random_entity().id for _ in range(50)}
        assert ids <= {"A", "B", "C"}
        assert len(ids) > 1

    def test_random_subset_is_capped(self, abc_pool):
        subset = abc_pool.random_subset(list(abc_pool.picks), 10)
        assert len(subset) == 3
        assert len({p.id for p in subset}) == 3

    def test_random_subset_of_nothing(self, abc_pool):
        assert abc_pool.random_subset([], 2) == []

    def test_seeded_pools_draw_the_same(self, abc_pool):
        first = abc_pool.with_rng(random.Random(7))
        second = abc_pool.with_rng(random.Random(7))

        assert [first.random_entity().id for _ in range(10)] == [
            second.random_entity().id for _ in range(10)
        ]

    def test_with_rng_shares_picks(self, abc_pool):
        view = abc_pool.with_rng(random.Random(1))
        assert view.picks is abc_pool.picks
        assert view.facts is abc_pool.facts
        assert view.rng is not abc_pool.rng


class TestLookups:
    """Tests for filtered lookups."""

    def test_entities_with_fact(self, abc_pool):
        ids = {p.id for p in abc_pool.entities_with_fact("F1")}
        assert ids == {"A", "B"}

    def test_entities_with_fact_is_exact_match(self, abc_pool):
        assert abc_pool.entities_with_fact("f1") == []

    def test_entities_without_fact(self, abc_pool):
        ids = {p.id for p in abc_pool.entities_without_fact("F2", 5)}
        assert ids == {"B", "C"}

    def test_entities_without_fact_is_capped(self, abc_pool):
        assert len(abc_pool.entities_without_fact("F2", 1)) == 1

    def test_sharing_excludes_self(self, txy_pool):
        target = txy_pool.get_pick("T")
        ids = {p.id for p in txy_pool.entities_sharing_any_property(target, 10)}
        assert ids == {"X", "Y"}

    def test_sharing_requires_common_name(self, rng):
        picks = [
            Pick(id="a", name="A", properties={"P1": 1}),
            Pick(id="b", name="B", properties={"P2": 2}),
            Pick(id="c", name="C", properties={"P1": 3, "P2": 4}),
        ]
        pool = EntityPool(picks, mode=DatasetMode.NUMERIC, rng=rng)

        ids = {p.id for p in pool.entities_sharing_any_property(pool.get_pick("a"), 10)}
        assert ids == {"c"}

    def test_property_image_prefers_pick(self, mountain_pool):
        blanc = mountain_pool.get_pick("blanc")
        fuji = mountain_pool.get_pick("fuji")

        assert mountain_pool.property_image(blanc, "HEIGHT") == "blanc.png"
        assert mountain_pool.property_image(fuji, "HEIGHT") == "height.png"
        assert mountain_pool.property_image(fuji, "ASCENT") is None


class TestPick:
    """Tests for pick attribute helpers."""

    def test_fact_quantity_defaults(self):
        pick = Pick(id="a", name="A", facts=(make_fact("F"), make_fact("G", 4)))

        assert pick.fact_quantity("F") == 1
        assert pick.fact_quantity("G") == 4
        assert pick.fact_quantity("H") == 0

    def test_mode(self):
        assert Pick(id="a", name="A", facts=(make_fact("F"),)).mode == DatasetMode.DISCRETE
        assert Pick(id="a", name="A", properties={"P": 1}).mode == DatasetMode.NUMERIC
        assert Pick(id="a", name="A").mode is None

    def test_picks_compare_by_id(self):
        assert Pick(id="a", name="A") == Pick(id="a", name="Other")
        assert len({Pick(id="a", name="A"), Pick(id="a", name="B")}) == 1

    def test_fact_validity(self):
        assert Fact("WON", "SPORTS").is_valid()
        assert not Fact("  ", "SPORTS").is_valid()
        assert not Fact("WON", "").is_valid()


class TestAttributeResolver:
    """Tests for attribute comparison helpers."""

    def test_common_properties_keeps_target_order(self):
        target = Pick(id="t", name="T", properties={"C": 1, "A": 2, "B": 3})
        candidates = [
            Pick(id="x", name="X", properties={"B": 1}),
            Pick(id="y", name="Y", properties={"C": 1, "Z": 9}),
        ]

        assert common_properties(target, candidates) == ["C", "B"]

    def test_common_properties_empty(self):
        target = Pick(id="t", name="T", properties={"A": 1})
        assert common_properties(target, [Pick(id="x", name="X", properties={"B": 1})]) == []

    def test_max_magnitude_holders(self):
        picks = [
            Pick(id="a", name="A", facts=(make_fact("F", 3),)),
            Pick(id="b", name="B", facts=(make_fact("F", 5),)),
            Pick(id="c", name="C", facts=(make_fact("F", 5),)),
        ]
        assert {p.id for p in max_magnitude_holders(picks, "F")} == {"b", "c"}
        assert max_magnitude_holders([], "F") == []

    def test_greater_than_is_strict(self, txy_pool):
        target = txy_pool.get_pick("T")
        equal = Pick(id="E", name="Echo", properties={"P": 5})
        undefined = Pick(id="U", name="Uniform", properties={"Q": 50})

        winners = greater_than(target, [*txy_pool.picks, equal, undefined], "P")
        assert [p.id for p in winners] == ["X"]
        assert not is_greater(undefined, target, "P")
