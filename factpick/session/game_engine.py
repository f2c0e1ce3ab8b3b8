"""
Game Engine - The contract the presentation layer drives.

Usage:
    engine = GameEngine(JSONLoader(), "data/example-data.json")
    engine.initialize()

    result = engine.start_game()
    while isinstance(result, Question):
        answer = ask_player(result, time_limit=engine.current_time_limit)
        outcome = engine.submit_answer(answer)
        if outcome.game_over:
            break
        result = engine.generate_next_question()

The engine owns no timers or threads. Waiting for input and counting down
the time limit belong to the caller, which submits TIMEOUT_ANSWER when
the clock runs out.
"""

from __future__ import annotations
import logging
import random
from typing import Any

from ..config import GameConfig
from ..engine_core.entity_store import EntityPool
from ..engine_core.question import Question, QuestionResult
from ..engine_core.question_builder import QuestionBuilder
from ..errors import IllegalStateError
from ..loaders.base import DataLoader
from .game_session import AnswerResult, GameSession
from .score_store import ScoreStore

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Ties a dataset, a question builder and a session together.

    Either pass a loader and source (loaded by initialize()) or an
    already-loaded pool, which may be shared with other engines.
    """

    def __init__(
        self,
        loader: DataLoader | None = None,
        source: Any = None,
        config: GameConfig | None = None,
        score_store: ScoreStore | None = None,
        pool: EntityPool | None = None,
    ):
        if loader is None and pool is None:
            raise ValueError("GameEngine needs a loader or a pool")
        if loader is not None and source is None:
            raise ValueError("A loader needs a source to load from")
        self.loader = loader
        self.source = source
        self.config = config or GameConfig()
        self.session = GameSession(self.config, score_store)

        self._rng = random.Random(self.config.random_seed)
        self._pool = pool
        self._builder: QuestionBuilder | None = None
        self._started = False

        if pool is not None:
            self._builder = self._make_builder(pool)

    def initialize(self):
        """
        Load the dataset.

        Raises:
            DataFormatError: if the dataset is malformed or empty
        """
        if self.loader is not None:
            self._pool = self.loader.load(self.source)
        self._builder = self._make_builder(self._pool)

    def _make_builder(self, pool: EntityPool) -> QuestionBuilder:
        return QuestionBuilder(
            pool,
            options_per_question=self.config.options_per_question,
            max_attempts=self.config.max_attempts,
            distractor_policy=self.config.distractor_policy,
            rng=self._rng,
        )

    # =========================================================================
    # Game flow
    # =========================================================================

    def start_game(self) -> QuestionResult:
        """Reset the session and generate the first question."""
        if self._builder is None:
            raise IllegalStateError("Engine not initialized")
        self.session.start()
        self._started = True
        return self.generate_next_question()

    def generate_next_question(self) -> QuestionResult:
        """
        Build the next question and make it pending.

        On Exhausted nothing changes: the previous question (if any is
        still pending) stays current.
        """
        if self._builder is None:
            raise IllegalStateError("Engine not initialized")
        if not self.session.is_in_progress:
            raise IllegalStateError(
                f"Cannot generate a question while {self.session.status.value}"
            )

        result = self._builder.build()
        if isinstance(result, Question):
            self.session.present(result)
        return result

    def submit_answer(self, answer_index: int) -> AnswerResult:
        return self.session.submit_answer(answer_index)

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def pool(self) -> EntityPool | None:
        return self._pool

    @property
    def current_question(self) -> Question | None:
        return self.session.current_question

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def streak(self) -> int:
        return self.session.streak

    @property
    def best_streak(self) -> int:
        return self.session.best_streak

    @property
    def questions_answered(self) -> int:
        return self.session.questions_answered

    @property
    def current_time_limit(self) -> float:
        return self.session.current_time_limit

    @property
    def is_game_over(self) -> bool:
        return self.session.is_game_over

    @property
    def is_started(self) -> bool:
        return self._started
