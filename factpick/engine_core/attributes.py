"""
Attribute Resolver - Which attributes a pick carries and how they compare.

Discrete mode compares fact magnitudes (presence, weighted by quantity).
Numeric mode compares property values with a strict greater-than.
"""

from __future__ import annotations
from typing import Iterable, Sequence

from .entities import Pick


def common_properties(target: Pick, candidates: Iterable[Pick]) -> list[str]:
    """
    Property names of `target` that at least one candidate also holds.

    Returned in the target's declaration order.
    """
    held: set[str] = set()
    for candidate in candidates:
        held.update(candidate.properties)
    return [name for name in target.properties if name in held]


def max_magnitude_holders(qualifiers: Sequence[Pick], description: str) -> list[Pick]:
    """Qualifiers tied for the largest magnitude of the given fact."""
    if not qualifiers:
        return []
    best = max(pick.fact_quantity(description) for pick in qualifiers)
    return [pick for pick in qualifiers if pick.fact_quantity(description) == best]


def is_greater(candidate: Pick, target: Pick, property_name: str) -> bool:
    """True when candidate's value is defined and strictly above the target's."""
    value = candidate.property_value(property_name)
    target_value = target.property_value(property_name)
    if value is None or target_value is None:
        return False
    return value > target_value


def greater_than(target: Pick, candidates: Iterable[Pick], property_name: str) -> list[Pick]:
    return [c for c in candidates if is_greater(c, target, property_name)]
