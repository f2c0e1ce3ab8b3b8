"""
Question Builder - Generates one question with a unique correct answer.

Each attempt runs DRAW -> PARTITION -> SELECT -> ASSEMBLE. Any step that
cannot be satisfied from the current random draw abandons the attempt and
starts over, up to `max_attempts`. When the budget is spent the builder
returns Exhausted instead of raising; callers decide whether that ends
the game.

Discrete mode:
    draw a fact, pick the holder with the largest magnitude (random among
    ties), add distractors that lack the fact.

Numeric mode:
    draw a target pick and a property it shares with others, pick one
    candidate whose value is strictly greater, add distractors that share
    a property with the target.
"""

from __future__ import annotations
import logging
import random
from enum import Enum
from typing import Sequence

from .attributes import common_properties, greater_than, is_greater, max_magnitude_holders
from .entities import DatasetMode, Pick
from .entity_store import EntityPool
from .question import Exhausted, FactPrompt, Prompt, PropertyPrompt, Question, QuestionResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100

# Numeric mode looks at up to this many sharing picks per option
CANDIDATE_FACTOR = 3


class DistractorPolicy(Enum):
    """How numeric-mode distractors relate to the target's value."""
    # Distractors never beat the target; the correct option is unique
    EXCLUDE_GREATER = "exclude_greater"
    # Not-greater distractors first, topped up with any sharing pick
    PREFER_NOT_GREATER = "prefer_not_greater"


class _Retry(Exception):
    """Abandon the current attempt."""


class QuestionBuilder:
    """
    Builds questions from an EntityPool.

    Usage:
        builder = QuestionBuilder(pool, options_per_question=3)
        result = builder.build()
        if isinstance(result, Exhausted):
            ...  # not enough data to continue
    """

    def __init__(
        self,
        pool: EntityPool,
        options_per_question: int = 3,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        distractor_policy: DistractorPolicy = DistractorPolicy.EXCLUDE_GREATER,
        rng: random.Random | None = None,
    ):
        if options_per_question < 2:
            raise ValueError("options_per_question must be >= 2")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        # Every draw for this builder's questions comes from one rng
        if rng is not None and rng is not pool.rng:
            pool = pool.with_rng(rng)
        self.pool = pool
        self.rng = pool.rng
        self.options_per_question = options_per_question
        self.max_attempts = max_attempts
        self.distractor_policy = distractor_policy

    @property
    def distractor_count(self) -> int:
        return self.options_per_question - 1

    def build(self) -> QuestionResult:
        """Generate a question, or Exhausted after max_attempts failed draws."""
        if self.pool.mode == DatasetMode.DISCRETE:
            attempt_once = self._attempt_discrete
        else:
            attempt_once = self._attempt_numeric

        reason = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                return attempt_once()
            except _Retry as retry:
                reason = str(retry)
                logger.debug("Attempt %d/%d abandoned: %s", attempt, self.max_attempts, reason)

        logger.warning(
            "Question generation exhausted after %d attempt(s); last reason: %s",
            self.max_attempts, reason,
        )
        return Exhausted(attempts=self.max_attempts, reason=reason)

    def shuffle(self, options: Sequence[Pick]) -> list[Pick]:
        """Fisher-Yates shuffle into a new list."""
        shuffled = list(options)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    # =========================================================================
    # Discrete mode
    # =========================================================================

    def _attempt_discrete(self) -> Question:
        fact = self.pool.random_fact()
        if fact is None:
            raise _Retry("fact pool is empty")

        qualifiers = self.pool.entities_with_fact(fact.description)
        if not qualifiers:
            raise _Retry(f"no pick holds '{fact.description}'")

        # Only a holder of the largest magnitude may be the answer
        leaders = max_magnitude_holders(qualifiers, fact.description)
        correct = self.rng.choice(leaders)

        distractors = self.pool.entities_without_fact(
            fact.description, self.distractor_count
        )
        if len(distractors) < self.distractor_count:
            raise _Retry(
                f"only {len(distractors)} pick(s) lack '{fact.description}', "
                f"need {self.distractor_count}"
            )

        return self._assemble(FactPrompt(fact=fact), correct, distractors)

    # =========================================================================
    # Numeric mode
    # =========================================================================

    def _attempt_numeric(self) -> Question:
        target = self.pool.random_entity()
        if target is None:
            raise _Retry("pick pool is empty")

        candidates = self.pool.entities_sharing_any_property(
            target, CANDIDATE_FACTOR * self.options_per_question
        )
        if not candidates:
            raise _Retry(f"no pick shares a property with '{target.id}'")

        shared = common_properties(target, candidates)
        if not shared:
            raise _Retry(f"no common property for '{target.id}'")

        property_name = self.rng.choice(shared)
        target_value = target.property_value(property_name)

        winners = greater_than(target, candidates, property_name)
        if not winners:
            raise _Retry(f"nothing beats '{target.id}' on '{property_name}'")
        correct = self.rng.choice(winners)

        distractors = self._numeric_distractors(target, correct, property_name)
        if len(distractors) < self.distractor_count:
            raise _Retry(
                f"only {len(distractors)} distractor(s) for '{target.id}' "
                f"on '{property_name}', need {self.distractor_count}"
            )

        prompt = PropertyPrompt(
            target=target,
            property_name=property_name,
            target_value=target_value,
            image=self.pool.property_image(target, property_name),
        )
        return self._assemble(prompt, correct, distractors)

    def _numeric_distractors(
        self, target: Pick, correct: Pick, property_name: str
    ) -> list[Pick]:
        sharing = self.pool.entities_sharing_any_property(target, len(self.pool))
        others = [p for p in sharing if p.id != correct.id]

        not_greater = [p for p in others if not is_greater(p, target, property_name)]
        chosen = self.pool.random_subset(not_greater, self.distractor_count)

        if (
            self.distractor_policy == DistractorPolicy.PREFER_NOT_GREATER
            and len(chosen) < self.distractor_count
        ):
            greater = [p for p in others if is_greater(p, target, property_name)]
            chosen += self.pool.random_subset(
                greater, self.distractor_count - len(chosen)
            )

        return chosen

    # =========================================================================
    # Assembly
    # =========================================================================

    def _assemble(self, prompt: Prompt, correct: Pick, distractors: list[Pick]) -> Question:
        options = self.shuffle([correct, *distractors])
        correct_index = next(i for i, p in enumerate(options) if p.id == correct.id)
        return Question(prompt=prompt, options=tuple(options), correct_index=correct_index)
