"""
API Module - HTTP interface for front ends.

Exposes the engine via REST API. A front end:
1. Creates a game and receives the first question
2. Runs its own countdown and posts the chosen option (or a timeout)
3. Shows the revealed answer, then asks for the next question
4. Stops when the game is over

One dataset is loaded per process and shared by every game.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    SubmitAnswerRequest,
    # Responses
    AnswerResponse,
    EndGameResponse,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    # Shared
    ErrorCode,
    GameStatus,
    PickInfo,
    PromptKind,
    QuestionInfo,
)
from .service import GameService, question_to_info
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "SubmitAnswerRequest",
    # Responses
    "AnswerResponse",
    "EndGameResponse",
    "ErrorResponse",
    "GameListResponse",
    "GameResponse",
    "HealthResponse",
    # Shared
    "ErrorCode",
    "GameStatus",
    "PickInfo",
    "PromptKind",
    "QuestionInfo",
    # Service
    "GameService",
    "question_to_info",
    "create_app",
]
