"""
Entities - Picks and the attributes they carry.

A dataset is in exactly one of two modes:
- DISCRETE: every pick carries a set of Facts ("WON THE NOBEL PRIZE")
- NUMERIC: every pick carries a mapping of property name -> number

Both shapes live on the same Pick record; the pool decides the mode once
at load time and the loaders reject datasets that mix them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class DatasetMode(Enum):
    """Which kind of attribute a dataset carries."""
    DISCRETE = "discrete"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class Fact:
    """
    A discrete attribute with an optional comparable quantity.

    Facts are compared by description. When several picks hold the same
    description, the one with the larger quantity is the better answer
    (e.g. "ATE THE MOST HOTDOGS": 10 beats 5).
    """
    description: str
    category: str
    quantity: float | None = None
    image: str | None = None

    @property
    def magnitude(self) -> float:
        """Quantity used for comparison; an unspecified quantity counts as 1."""
        return self.quantity or 1

    def is_valid(self) -> bool:
        """Description and category must both be non-blank."""
        return bool(
            self.description and self.description.strip()
            and self.category and self.category.strip()
        )


@dataclass(frozen=True)
class Pick:
    """
    A selectable subject (person, item, place...).

    Only one of `facts` / `properties` is populated for a given dataset.
    """
    id: str
    name: str
    image: str | None = None
    description: str | None = None
    facts: tuple[Fact, ...] = ()
    properties: Mapping[str, float] = field(default_factory=dict)
    property_images: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mappings so a loaded pool stays read-only
        object.__setattr__(self, "facts", tuple(self.facts))
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(
            self, "property_images", MappingProxyType(dict(self.property_images))
        )

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, Pick):
            return False
        return self.id == other.id

    @property
    def mode(self) -> DatasetMode | None:
        """Attribute shape of this pick, None when it carries nothing."""
        if self.facts:
            return DatasetMode.DISCRETE
        if self.properties:
            return DatasetMode.NUMERIC
        return None

    @property
    def has_attributes(self) -> bool:
        return bool(self.facts) or bool(self.properties)

    def get_fact(self, description: str) -> Fact | None:
        for fact in self.facts:
            if fact.description == description:
                return fact
        return None

    def has_fact(self, description: str) -> bool:
        return self.get_fact(description) is not None

    def fact_quantity(self, description: str) -> float:
        """Magnitude of the fact for this pick, 0 when the pick lacks it."""
        fact = self.get_fact(description)
        return fact.magnitude if fact else 0

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def property_value(self, name: str) -> float | None:
        return self.properties.get(name)
