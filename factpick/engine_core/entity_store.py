"""
Entity Pool - Read-only view over the picks of a loaded dataset.

The pool:
- Owns every Pick for the lifetime of the dataset
- Builds the global, deduplicated fact list (discrete mode)
- Provides uniform random draws and filtered lookups

All randomness goes through one injected random.Random, so a seeded pool
produces reproducible questions. The pool never mutates after construction
and may be shared by any number of games.
"""

from __future__ import annotations
import copy
import logging
import random
from typing import Iterable, Mapping, Sequence, TypeVar

from .entities import DatasetMode, Fact, Pick

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_fact_pool(picks: Iterable[Pick]) -> tuple[Fact, ...]:
    """
    Collect one fact per description across all picks.

    When a description repeats, the occurrence with the larger magnitude is
    kept; on equal magnitudes the first one seen wins.
    """
    by_description: dict[str, Fact] = {}
    for pick in picks:
        for fact in pick.facts:
            existing = by_description.get(fact.description)
            if existing is None or fact.magnitude > existing.magnitude:
                by_description[fact.description] = fact
    return tuple(by_description.values())


class EntityPool:
    """
    In-memory pool of picks.

    Usage:
        pool = EntityPool(picks, mode=DatasetMode.DISCRETE, rng=random.Random(7))

        fact = pool.random_fact()
        qualifiers = pool.entities_with_fact(fact.description)
        distractors = pool.entities_without_fact(fact.description, 2)
    """

    def __init__(
        self,
        picks: Sequence[Pick],
        mode: DatasetMode,
        rng: random.Random | None = None,
        property_categories: Mapping[str, str] | None = None,
    ):
        self._picks: tuple[Pick, ...] = tuple(picks)
        self.mode = mode
        self.rng = rng or random.Random()

        # Category name -> illustrative image (numeric mode)
        self.property_categories: dict[str, str] = dict(property_categories or {})

        self._facts: tuple[Fact, ...] = ()
        if mode == DatasetMode.DISCRETE:
            self._facts = build_fact_pool(self._picks)

        logger.debug(
            "Entity pool ready: %d pick(s), %d fact(s), mode=%s",
            len(self._picks), len(self._facts), mode.value,
        )

    @property
    def picks(self) -> tuple[Pick, ...]:
        return self._picks

    @property
    def facts(self) -> tuple[Fact, ...]:
        return self._facts

    def __len__(self) -> int:
        return len(self._picks)

    def with_rng(self, rng: random.Random) -> EntityPool:
        """A view over the same picks and facts that draws from `rng`."""
        view = copy.copy(self)
        view.rng = rng
        return view

    def get_pick(self, pick_id: str) -> Pick | None:
        for pick in self._picks:
            if pick.id == pick_id:
                return pick
        return None

    def get_fact(self, description: str) -> Fact | None:
        for fact in self._facts:
            if fact.description == description:
                return fact
        return None

    # =========================================================================
    # Random draws
    # =========================================================================

    def random_entity(self) -> Pick | None:
        """Uniform draw over all picks; None when the pool is empty."""
        if not self._picks:
            return None
        return self.rng.choice(self._picks)

    def random_fact(self) -> Fact | None:
        """Uniform draw over the global fact list; None when there is none."""
        if not self._facts:
            return None
        return self.rng.choice(self._facts)

    def random_subset(self, items: Sequence[T], count: int) -> list[T]:
        """Uniform sample without replacement, capped at len(items)."""
        count = max(0, min(count, len(items)))
        return self.rng.sample(list(items), count)

    # =========================================================================
    # Filtered lookups
    # =========================================================================

    def entities_with_fact(self, description: str) -> list[Pick]:
        return [p for p in self._picks if p.has_fact(description)]

    def entities_without_fact(self, description: str, count: int) -> list[Pick]:
        candidates = [p for p in self._picks if not p.has_fact(description)]
        return self.random_subset(candidates, count)

    def entities_sharing_any_property(self, pick: Pick, count: int) -> list[Pick]:
        """
        Random picks (other than `pick`) holding at least one of its
        property names.
        """
        names = set(pick.properties)
        candidates = [
            p for p in self._picks
            if p.id != pick.id and names.intersection(p.properties)
        ]
        return self.random_subset(candidates, count)

    def property_image(self, pick: Pick, property_name: str) -> str | None:
        """Illustration for a property: the pick's own, else the category's."""
        image = pick.property_images.get(property_name)
        if image:
            return image
        return self.property_categories.get(property_name)
