"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a front end and the engine.
Questions are sent without their correct index; it is revealed only in
the answer response.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INSUFFICIENT_POOL: No question could be generated from the dataset
- ILLEGAL_STATE: Call not allowed in the game's current state
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


class PromptKind(str, Enum):
    """What a question asks about."""
    FACT = "fact"
    PROPERTY = "property"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INSUFFICIENT_POOL = "INSUFFICIENT_POOL"
    ILLEGAL_STATE = "ILLEGAL_STATE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PickInfo(BaseModel):
    """An answer option for display."""
    pick_id: str
    name: str
    image_url: Optional[str] = None


class QuestionInfo(BaseModel):
    """A question for display (correct answer withheld)."""
    kind: PromptKind
    text: str
    category: str
    image_url: Optional[str] = None
    options: list[PickInfo] = Field(default_factory=list)
    target: Optional[PickInfo] = Field(
        None, description="Pick to beat, for property questions"
    )
    property_name: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create and start a new game."""
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")


class SubmitAnswerRequest(BaseModel):
    """Request to answer the pending question."""
    answer_index: int = Field(
        ..., ge=-1, description="Index of the chosen option, -1 when time ran out"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """Current state of a game."""
    game_id: str
    status: GameStatus
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    questions_answered: int = 0
    time_limit: float = Field(..., description="Seconds allowed for the pending question")
    question: Optional[QuestionInfo] = None
    created_at: float = 0.0
    api_version: str = "v1"


class AnswerResponse(BaseModel):
    """Outcome of an answer, with the correct option revealed."""
    game_id: str
    is_correct: bool
    timed_out: bool
    correct_index: int
    correct_option: PickInfo
    game_over: bool
    new_best: bool = False
    score: int
    streak: int
    best_streak: int
    time_limit: float
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    pick_count: int
    mode: str
