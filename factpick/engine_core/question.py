"""
Question - The immutable record produced once per round.

A question is either about a fact ("Who WON THE NOBEL PRIZE?") or about a
numeric property of a target pick ("Who has a higher HEIGHT than Alice?").
Exactly one option is correct; its index is fixed at construction.

Generation can also fail: Exhausted is the explicit "no question" result
returned when the attempt budget runs out.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .entities import Fact, Pick


@dataclass(frozen=True)
class FactPrompt:
    """Prompt for a discrete-mode question."""
    fact: Fact

    @property
    def text(self) -> str:
        return f"Who {self.fact.description}?"

    @property
    def category(self) -> str:
        return self.fact.category

    @property
    def image(self) -> str | None:
        return self.fact.image


@dataclass(frozen=True)
class PropertyPrompt:
    """Prompt for a numeric-mode question: beat the target on a property."""
    target: Pick
    property_name: str
    target_value: float
    image: str | None = None

    @property
    def text(self) -> str:
        return f"Who has a higher {self.property_name} than {self.target.name}?"

    @property
    def category(self) -> str:
        return self.property_name


Prompt = Union[FactPrompt, PropertyPrompt]


@dataclass(frozen=True)
class Question:
    """
    A multiple-choice question.

    `options` is already shuffled; `correct_index` points at the single
    correct pick within it.
    """
    prompt: Prompt
    options: tuple[Pick, ...]
    correct_index: int

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"correct_index {self.correct_index} out of range "
                f"for {len(self.options)} option(s)"
            )

    @property
    def text(self) -> str:
        return self.prompt.text

    @property
    def category(self) -> str:
        return self.prompt.category

    @property
    def image(self) -> str | None:
        return self.prompt.image

    @property
    def correct_option(self) -> Pick:
        return self.options[self.correct_index]

    def check_answer(self, answer_index: int) -> bool:
        return answer_index == self.correct_index


@dataclass(frozen=True)
class Exhausted:
    """No question could be built within the attempt budget."""
    attempts: int
    reason: str = ""


QuestionResult = Union[Question, Exhausted]
