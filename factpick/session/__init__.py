"""
Session Module - One play-through of the game.

A session:
- Is created when the player starts a game
- Holds score, streak and the shrinking time limit
- Scores each submitted answer against the pending question
- Ends on a miss or timeout (configurable), or is reset on restart

The only durable state is the best streak, kept behind a ScoreStore.
"""

from .score_store import ScoreStore, InMemoryScoreStore, JsonFileScoreStore
from .game_session import AnswerResult, GameSession, SessionStatus, TIMEOUT_ANSWER
from .game_engine import GameEngine
from .manager import GameManager, ManagedGame

__all__ = [
    "ScoreStore",
    "InMemoryScoreStore",
    "JsonFileScoreStore",
    "AnswerResult",
    "GameSession",
    "SessionStatus",
    "TIMEOUT_ANSWER",
    "GameEngine",
    "GameManager",
    "ManagedGame",
]
