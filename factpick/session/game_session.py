"""
Game Session - Scoring state machine for one play-through.

NOT_STARTED -> IN_PROGRESS -> GAME_OVER

- start() resets the run and enters IN_PROGRESS
- present() records the question the player is about to answer
- submit_answer() scores the pending question and clears it

A correct answer raises score and streak and shrinks the time limit
(never below min_time). A wrong answer or a timeout breaks the streak and,
depending on the config, ends the game.

The session never generates questions itself; the engine hands them in.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum

from ..config import GameConfig
from ..engine_core.question import Question
from ..errors import IllegalStateError
from .score_store import InMemoryScoreStore, ScoreStore

logger = logging.getLogger(__name__)

# Answer index submitted when the player ran out of time
TIMEOUT_ANSWER = -1


class SessionStatus(Enum):
    """State of a game session."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class AnswerResult:
    """
    Outcome of one submitted answer.

    Carries the answered question so the caller can reveal the correct
    option after the session has already cleared it.
    """
    is_correct: bool
    timed_out: bool
    answer_index: int
    correct_index: int
    question: Question
    game_over: bool
    new_best: bool = False


class GameSession:
    """
    Mutable scoring state for one run.

    Owned by a single game; never share one across concurrent games.
    """

    def __init__(self, config: GameConfig | None = None, score_store: ScoreStore | None = None):
        self.config = config or GameConfig()
        self.score_store = score_store or InMemoryScoreStore()

        self.status = SessionStatus.NOT_STARTED
        self.score = 0
        self.questions_answered = 0
        self.streak = 0
        self.best_streak = self.score_store.get()
        self.current_time_limit = self.config.initial_time
        self.current_question: Question | None = None

    @property
    def is_game_over(self) -> bool:
        return self.status == SessionStatus.GAME_OVER

    @property
    def is_in_progress(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS

    def start(self):
        """Reset the run. Safe to call again to restart."""
        self.status = SessionStatus.IN_PROGRESS
        self.score = 0
        self.questions_answered = 0
        self.streak = 0
        self.best_streak = self.score_store.get()
        self.current_time_limit = self.config.initial_time
        self.current_question = None
        logger.info("Session started (best streak %d)", self.best_streak)

    def present(self, question: Question):
        """Make `question` the pending question."""
        if not self.is_in_progress:
            raise IllegalStateError(
                f"Cannot present a question while {self.status.value}"
            )
        self.current_question = question

    def end(self):
        """End the run early (e.g. the pool ran dry)."""
        if self.status == SessionStatus.IN_PROGRESS:
            self.status = SessionStatus.GAME_OVER
            self.current_question = None
            logger.info("Session ended with score %d", self.score)

    def submit_answer(self, answer_index: int) -> AnswerResult:
        """
        Score the pending question.

        Raises:
            IllegalStateError: if no question is pending
        """
        question = self.current_question
        if question is None:
            raise IllegalStateError("No current question")

        timed_out = answer_index == TIMEOUT_ANSWER
        is_correct = not timed_out and question.check_answer(answer_index)

        self.current_question = None
        self.questions_answered += 1
        new_best = False

        if is_correct:
            self.score += 1
            self.streak += 1
            self.current_time_limit = max(
                self.config.min_time,
                self.current_time_limit - self.config.time_decrement,
            )
            # Other games may have raised the shared best since start()
            self.best_streak = max(self.best_streak, self.score_store.get())
            if self.streak > self.best_streak:
                self.best_streak = self.streak
                self.score_store.set(self.best_streak)
                new_best = True
        else:
            self.streak = 0
            ends = self.config.timeout_ends_game if timed_out else self.config.miss_ends_game
            if ends:
                self.status = SessionStatus.GAME_OVER
                logger.info(
                    "Game over after %d answer(s), score %d",
                    self.questions_answered, self.score,
                )

        return AnswerResult(
            is_correct=is_correct,
            timed_out=timed_out,
            answer_index=answer_index,
            correct_index=question.correct_index,
            question=question,
            game_over=self.is_game_over,
            new_best=new_best,
        )
