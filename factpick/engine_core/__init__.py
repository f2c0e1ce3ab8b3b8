"""
Engine Core - Question generation over a pool of picks.

The core:
1. Holds the loaded picks in a read-only EntityPool
2. Resolves which attributes picks share and how they compare
3. Builds questions with exactly one correct option
4. Retries under a bounded attempt budget, returning Exhausted on failure
"""

from .entities import DatasetMode, Fact, Pick
from .entity_store import EntityPool, build_fact_pool
from .attributes import common_properties, greater_than, is_greater, max_magnitude_holders
from .question import Exhausted, FactPrompt, PropertyPrompt, Question, QuestionResult
from .question_builder import DistractorPolicy, QuestionBuilder

__all__ = [
    "DatasetMode",
    "Fact",
    "Pick",
    "EntityPool",
    "build_fact_pool",
    "common_properties",
    "greater_than",
    "is_greater",
    "max_magnitude_holders",
    "Exhausted",
    "FactPrompt",
    "PropertyPrompt",
    "Question",
    "QuestionResult",
    "DistractorPolicy",
    "QuestionBuilder",
]
