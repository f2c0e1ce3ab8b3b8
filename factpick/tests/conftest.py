"""
Pytest fixtures for FactPick tests.
"""

import random

import pytest

from ..config import GameConfig
from ..engine_core.entities import DatasetMode, Fact, Pick
from ..engine_core.entity_store import EntityPool
from ..engine_core.question import FactPrompt, Question


def make_fact(description: str, quantity=None, category: str = "GENERAL") -> Fact:
    return Fact(description=description, category=category, quantity=quantity)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so failures are reproducible."""
    return random.Random(1234)


@pytest.fixture
def abc_pool(rng) -> EntityPool:
    """A holds F1 and F2, B holds F1, C holds nothing."""
    picks = [
        Pick(id="A", name="Alpha", facts=(make_fact("F1"), make_fact("F2"))),
        Pick(id="B", name="Bravo", facts=(make_fact("F1"),)),
        Pick(id="C", name="Charlie", facts=()),
    ]
    return EntityPool(picks, mode=DatasetMode.DISCRETE, rng=rng)


@pytest.fixture
def hotdog_pool(rng) -> EntityPool:
    """Two holders of the same fact with different quantities, plus outsiders."""
    picks = [
        Pick(id="joey", name="Joey", facts=(make_fact("ATE THE MOST HOTDOGS", 76),)),
        Pick(id="takeru", name="Takeru", facts=(make_fact("ATE THE MOST HOTDOGS", 50),)),
        Pick(id="ada", name="Ada", facts=(make_fact("WROTE THE FIRST PROGRAM"),)),
        Pick(id="serena", name="Serena", facts=(make_fact("WON A GRAND SLAM", 23),)),
        Pick(id="marie", name="Marie", facts=(make_fact("WON THE NOBEL PRIZE", 2),)),
    ]
    return EntityPool(picks, mode=DatasetMode.DISCRETE, rng=rng)


@pytest.fixture
def txy_pool(rng) -> EntityPool:
    """Target T (P=5) with X (P=10) above it and Y (P=3) below it."""
    picks = [
        Pick(id="T", name="Tango", properties={"P": 5}),
        Pick(id="X", name="X-ray", properties={"P": 10}),
        Pick(id="Y", name="Yankee", properties={"P": 3}),
    ]
    return EntityPool(picks, mode=DatasetMode.NUMERIC, rng=rng)


@pytest.fixture
def mountain_pool(rng) -> EntityPool:
    """A larger numeric pool with two properties."""
    picks = [
        Pick(id="everest", name="Everest", properties={"HEIGHT": 8849, "ASCENT": 1953}),
        Pick(id="k2", name="K2", properties={"HEIGHT": 8611, "ASCENT": 1954}),
        Pick(id="denali", name="Denali", properties={"HEIGHT": 6190, "ASCENT": 1913}),
        Pick(id="kili", name="Kilimanjaro", properties={"HEIGHT": 5895, "ASCENT": 1889}),
        Pick(
            id="blanc", name="Mont Blanc",
            properties={"HEIGHT": 4806, "ASCENT": 1786},
            property_images={"HEIGHT": "blanc.png"},
        ),
        Pick(id="fuji", name="Fuji", properties={"HEIGHT": 3776}),
    ]
    return EntityPool(
        picks,
        mode=DatasetMode.NUMERIC,
        rng=rng,
        property_categories={"HEIGHT": "height.png"},
    )


@pytest.fixture
def discrete_dataset() -> dict:
    """Raw discrete-mode dataset, as a JSON document would hold it."""
    return {
        "picks": [
            {"id": "marie", "name": "Marie Curie", "facts": [
                {"description": "WON THE NOBEL PRIZE", "category": "SCIENCE", "quantity": 2},
            ]},
            {"id": "albert", "name": "Albert Einstein", "facts": [
                {"description": "WON THE NOBEL PRIZE", "category": "SCIENCE"},
                {"description": "PLAYED THE VIOLIN", "category": "MUSIC"},
            ]},
            {"id": "joey", "name": "Joey Chestnut", "facts": [
                {"description": "ATE THE MOST HOTDOGS", "category": "FOOD", "quantity": 76},
            ]},
            {"id": "serena", "name": "Serena Williams", "facts": [
                {"description": "WON A GRAND SLAM", "category": "SPORTS", "quantity": 23},
            ]},
        ]
    }


@pytest.fixture
def numeric_dataset() -> dict:
    """Raw numeric-mode dataset using the camelCase keys."""
    return {
        "propertyCategories": {"HEIGHT": {"image": "height.png"}},
        "picks": [
            {"id": "everest", "name": "Everest", "properties": {"HEIGHT": 8849}},
            {"id": "k2", "name": "K2", "properties": {"HEIGHT": 8611}},
            {"id": "denali", "name": "Denali", "properties": {"HEIGHT": 6190},
             "propertyImages": {"HEIGHT": "denali.png"}},
            {"id": "fuji", "name": "Fuji", "properties": {"HEIGHT": 3776}},
        ],
    }


@pytest.fixture
def fast_config() -> GameConfig:
    """Config with a short timer so floor behaviour shows up quickly."""
    return GameConfig(initial_time=4.0, min_time=3.0, time_decrement=0.5)


@pytest.fixture
def sample_question() -> Question:
    """A two-option question whose correct answer is index 0."""
    return Question(
        prompt=FactPrompt(make_fact("WON THE NOBEL PRIZE")),
        options=(Pick(id="marie", name="Marie"), Pick(id="joey", name="Joey")),
        correct_index=0,
    )
