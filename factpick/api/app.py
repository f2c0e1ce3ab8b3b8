"""
FastAPI Application - REST API for trivia front ends.

Endpoints:
    GET    /api/v1/health                  Service and dataset info
    POST   /api/v1/games                   Create a game (returns first question)
    GET    /api/v1/games                   List games
    GET    /api/v1/games/{id}              Get game status and pending question
    DELETE /api/v1/games/{id}              End a game
    POST   /api/v1/games/{id}/answers      Answer the pending question
    POST   /api/v1/games/{id}/questions    Generate the next question

The front end owns the countdown: when it expires, it posts
answer_index = -1.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging
import os

from ..errors import IllegalStateError, InsufficientPoolError

logger = logging.getLogger(__name__)

# Environment configuration
FACTPICK_ENV = os.getenv("FACTPICK_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_service_from_env():
    """Build a GameService from FACTPICK_DATASET / FACTPICK_SCORE_FILE."""
    from ..config import GameConfig
    from ..session import InMemoryScoreStore, JsonFileScoreStore
    from .service import GameService

    dataset = os.getenv("FACTPICK_DATASET")
    if not dataset:
        raise ValueError("FACTPICK_DATASET is not set")

    score_file = os.getenv("FACTPICK_SCORE_FILE")
    score_store = JsonFileScoreStore(score_file) if score_file else InMemoryScoreStore()
    return GameService.from_dataset(
        dataset, config=GameConfig.from_env(), score_store=score_store
    )


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (built from the environment
            if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .schemas import (
        # Request models
        CreateGameRequest,
        SubmitAnswerRequest,
        # Response models
        AnswerResponse,
        EndGameResponse,
        ErrorResponse,
        GameListResponse,
        GameResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    api_service = service or create_service_from_env()

    app = FastAPI(
        title="FactPick API",
        description="""
Trivia question engine: "who holds this fact?" and "who beats this value?".

## Game Flow

1. `POST /games` creates a game and returns its first question
2. `POST /games/{id}/answers` answers it (`-1` = time ran out)
3. If `game_over` is false, `POST /games/{id}/questions` for the next one

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `INSUFFICIENT_POOL` | Dataset cannot produce another question |
| `ILLEGAL_STATE` | No pending question, or game already over |
| `INTERNAL_ERROR` | Unexpected server failure |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        messages = [
            ".".join(str(part) for part in error["loc"]) + ": " + error["msg"]
            for error in exc.errors()
        ]
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": messages},
        )

    @app.exception_handler(IllegalStateError)
    async def handle_illegal_state(request: Request, exc: IllegalStateError):
        return make_error_response(ErrorCode.ILLEGAL_STATE, str(exc), status_code=409)

    @app.exception_handler(InsufficientPoolError)
    async def handle_insufficient_pool(request: Request, exc: InsufficientPoolError):
        logger.warning("Insufficient pool: %s", exc)
        return make_error_response(
            ErrorCode.INSUFFICIENT_POOL,
            str(exc),
            status_code=422,
            details={"attempts": exc.attempts, "reason": exc.reason},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = "Internal server error"
        if FACTPICK_ENV != "production":
            message = f"{message}: {exc}"
        return make_error_response(ErrorCode.INTERNAL_ERROR, message, status_code=500)

    def error_or(response, status_code: int = 404):
        if isinstance(response, ErrorResponse):
            return make_error_response(
                response.error_code, response.error, status_code=status_code
            )
        return response

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Service"],
        summary="Service health and dataset info",
    )
    async def health() -> HealthResponse:
        return api_service.health()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        responses={422: {"model": ErrorResponse, "description": "Dataset too small"}},
        tags=["Games"],
        summary="Create a game and get its first question",
    )
    async def create_game(
        request: Optional[CreateGameRequest] = None,
    ) -> GameResponse:
        return api_service.create_game(request or CreateGameRequest())

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game status",
    )
    async def get_game(game_id: str) -> Union[GameResponse, JSONResponse]:
        return error_or(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/answers",
        response_model=AnswerResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "No pending question"},
        },
        tags=["Game Loop"],
        summary="Answer the pending question",
    )
    async def submit_answer(
        game_id: str, request: SubmitAnswerRequest
    ) -> Union[AnswerResponse, JSONResponse]:
        return error_or(api_service.submit_answer(game_id, request))

    @app.post(
        "/api/v1/games/{game_id}/questions",
        response_model=GameResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "Game is over"},
            422: {"model": ErrorResponse, "description": "Dataset exhausted"},
        },
        tags=["Game Loop"],
        summary="Generate the next question",
    )
    async def next_question(game_id: str) -> Union[GameResponse, JSONResponse]:
        return error_or(api_service.next_question(game_id))

    return app
