"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages games over one shared dataset
3. Formats questions for display without leaking the answer

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from .. import __version__
from ..config import GameConfig
from ..engine_core.entities import Pick
from ..engine_core.question import Exhausted, FactPrompt, Question
from ..errors import InsufficientPoolError
from ..loaders import loader_for
from ..session import GameManager, ManagedGame, ScoreStore
from .schemas import (
    AnswerResponse,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameResponse,
    GameStatus,
    HealthResponse,
    PickInfo,
    PromptKind,
    QuestionInfo,
    SubmitAnswerRequest,
)


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService.from_dataset("data/example-data.json")

        game = service.create_game(CreateGameRequest())
        answer = service.submit_answer(game.game_id, SubmitAnswerRequest(answer_index=0))
        if not answer.game_over:
            game = service.next_question(game.game_id)
    """
    game_manager: GameManager

    @classmethod
    def from_dataset(
        cls,
        path: str | Path,
        config: GameConfig | None = None,
        score_store: ScoreStore | None = None,
    ) -> GameService:
        """Load a dataset once and serve games from it."""
        pool = loader_for(str(path)).load(path)
        return cls(game_manager=GameManager(pool, config=config, score_store=score_store))

    def health(self) -> HealthResponse:
        pool = self.game_manager.pool
        return HealthResponse(
            status="ok",
            service="factpick",
            version=__version__,
            pick_count=len(pool),
            mode=pool.mode.value,
        )

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """
        Create a game and generate its first question.

        Raises:
            InsufficientPoolError: if the dataset cannot produce a question
        """
        game = self.game_manager.create_game(random_seed=request.random_seed)
        result = game.engine.start_game()
        if isinstance(result, Exhausted):
            self.game_manager.end_game(game.game_id)
            raise InsufficientPoolError(result.attempts, result.reason)
        return self._game_to_response(game)

    def get_game(self, game_id: str) -> GameResponse | ErrorResponse:
        game = self.game_manager.get_game(game_id)
        if not game:
            return self._not_found(game_id)
        return self._game_to_response(game)

    def submit_answer(
        self, game_id: str, request: SubmitAnswerRequest
    ) -> AnswerResponse | ErrorResponse:
        """
        Answer the pending question.

        Raises:
            IllegalStateError: if the game has no pending question
        """
        game = self.game_manager.get_game(game_id)
        if not game:
            return self._not_found(game_id)

        engine = game.engine
        outcome = engine.submit_answer(request.answer_index)
        return AnswerResponse(
            game_id=game_id,
            is_correct=outcome.is_correct,
            timed_out=outcome.timed_out,
            correct_index=outcome.correct_index,
            correct_option=_pick_info(outcome.question.correct_option),
            game_over=outcome.game_over,
            new_best=outcome.new_best,
            score=engine.score,
            streak=engine.streak,
            best_streak=engine.best_streak,
            time_limit=engine.current_time_limit,
        )

    def next_question(self, game_id: str) -> GameResponse | ErrorResponse:
        """
        Generate the next question.

        Raises:
            IllegalStateError: if the game is over
            InsufficientPoolError: if no question could be generated
        """
        game = self.game_manager.get_game(game_id)
        if not game:
            return self._not_found(game_id)

        result = game.engine.generate_next_question()
        if isinstance(result, Exhausted):
            raise InsufficientPoolError(result.attempts, result.reason)
        return self._game_to_response(game)

    def end_game(self, game_id: str) -> bool:
        return self.game_manager.end_game(game_id)

    def list_games(self) -> list[str]:
        return self.game_manager.list_games()

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _game_to_response(self, game: ManagedGame) -> GameResponse:
        engine = game.engine
        question = engine.current_question
        return GameResponse(
            game_id=game.game_id,
            status=GameStatus(engine.session.status.value),
            score=engine.score,
            streak=engine.streak,
            best_streak=engine.best_streak,
            questions_answered=engine.questions_answered,
            time_limit=engine.current_time_limit,
            question=question_to_info(question) if question else None,
            created_at=game.created_at,
        )

    @staticmethod
    def _not_found(game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )


def _pick_info(pick: Pick) -> PickInfo:
    return PickInfo(pick_id=pick.id, name=pick.name, image_url=pick.image)


def question_to_info(question: Question) -> QuestionInfo:
    """Render a question for display, without its correct index."""
    prompt = question.prompt
    if isinstance(prompt, FactPrompt):
        return QuestionInfo(
            kind=PromptKind.FACT,
            text=question.text,
            category=question.category,
            image_url=question.image,
            options=[_pick_info(p) for p in question.options],
        )
    return QuestionInfo(
        kind=PromptKind.PROPERTY,
        text=question.text,
        category=question.category,
        image_url=question.image,
        options=[_pick_info(p) for p in question.options],
        target=_pick_info(prompt.target),
        property_name=prompt.property_name,
    )
