"""
Dataset Validation - Authoring-time checks for dataset files.

Validates that:
1. The picks list is present and non-empty
2. Pick ids are present and unique, names are present
3. Every pick carries facts or properties (never both shapes in one dataset)
4. Facts have a description and category; property values are numeric

Warnings flag datasets that load but play badly, e.g. a fact held by every
pick can never produce a distractor.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    pick_count: int = 0
    fact_count: int = 0
    property_count: int = 0


def validate_dataset(data: Any, options_per_question: int = 3) -> ValidationResult:
    """
    Validate a raw (already JSON-decoded) dataset.

    Never raises; every problem is reported in the result.
    """
    errors: list[str] = []
    warnings: list[str] = []

    picks = data.get("picks") if isinstance(data, dict) else None
    if not isinstance(picks, list):
        return ValidationResult(valid=False, errors=["Missing or invalid 'picks' array"])
    if not picks:
        return ValidationResult(valid=False, errors=["No picks defined in dataset"])

    pick_ids: set[str] = set()
    fact_holders: Counter[str] = Counter()
    property_names: set[str] = set()
    uses_facts = uses_properties = False
    empty_picks = 0

    for i, pick in enumerate(picks):
        if not isinstance(pick, dict):
            errors.append(f"Pick at index {i} is not an object")
            continue

        pick_id = pick.get("id")
        label = f"Pick {pick_id}" if pick_id not in (None, "") else f"Pick at index {i}"
        if pick_id in (None, ""):
            errors.append(f"Pick at index {i} is missing an 'id' field")
        elif str(pick_id) in pick_ids:
            errors.append(f"Duplicate pick id: {pick_id}")
        else:
            pick_ids.add(str(pick_id))

        if not pick.get("name"):
            errors.append(f"{label} is missing a 'name' field")

        facts = pick.get("facts")
        properties = pick.get("properties")
        uses_facts = uses_facts or facts is not None
        uses_properties = uses_properties or properties is not None

        if facts is not None:
            errors.extend(_validate_facts(label, facts, fact_holders))
        if properties is not None:
            errors.extend(_validate_properties(label, properties, property_names))

        if not facts and not properties:
            empty_picks += 1

    if uses_facts and uses_properties:
        errors.append("Dataset mixes 'facts' and 'properties' records")
    if not uses_facts and not uses_properties:
        errors.append("Dataset picks carry neither 'facts' nor 'properties'")

    if len(picks) < options_per_question:
        warnings.append(
            f"Only {len(picks)} pick(s); questions need {options_per_question} options"
        )
    if empty_picks:
        warnings.append(f"{empty_picks} pick(s) have no facts or properties assigned")
    universal = sorted(d for d, count in fact_holders.items() if count == len(picks))
    for description in universal:
        warnings.append(
            f"Fact '{description}' is held by every pick and can never be asked"
        )

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        pick_count=len(picks),
        fact_count=len(fact_holders),
        property_count=len(property_names),
    )


def _validate_facts(label: str, facts: Any, holders: Counter[str]) -> list[str]:
    """Validate a pick's fact list and count fact holders."""
    if not isinstance(facts, list):
        return [f"{label} has an invalid 'facts' array"]

    errors = []
    seen: set[str] = set()
    for j, fact in enumerate(facts):
        if not isinstance(fact, dict):
            errors.append(f"{label}: fact at index {j} is not an object")
            continue
        description = fact.get("description")
        if not description or not str(description).strip():
            errors.append(f"{label}: fact at index {j} is missing a 'description' field")
            continue
        if not fact.get("category") or not str(fact.get("category")).strip():
            errors.append(f"{label}: fact '{description}' is missing a 'category' field")
        quantity = fact.get("quantity")
        if quantity is not None and not _is_number(quantity):
            errors.append(f"{label}: fact '{description}' has a non-numeric quantity")
        if description not in seen:
            holders[description] += 1
            seen.add(description)
    return errors


def _validate_properties(label: str, properties: Any, names: set[str]) -> list[str]:
    """Validate a pick's property mapping."""
    if not isinstance(properties, dict):
        return [f"{label} has an invalid 'properties' object"]

    errors = []
    for name, value in properties.items():
        if not _is_number(value):
            errors.append(f"{label}: property '{name}' is not a number")
        names.add(name)
    return errors


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
