"""
Game Manager - Creates and tracks concurrent games over one dataset.

The entity pool is loaded once and shared read-only by every game. Each
game gets its own GameEngine (and so its own session and random stream),
so games never observe each other's state.

Games are in-memory only; the best streak is the one value written through
the shared ScoreStore.
"""

from __future__ import annotations
import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any

from ..config import GameConfig
from ..engine_core.entity_store import EntityPool
from .game_engine import GameEngine
from .score_store import InMemoryScoreStore, ScoreStore

logger = logging.getLogger(__name__)


@dataclass
class ManagedGame:
    """A game tracked by the manager."""
    game_id: str
    engine: GameEngine
    created_at: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return not self.engine.is_game_over


class GameManager:
    """
    Manages games.

    Responsibilities:
    - Create games bound to the shared pool
    - Look games up by id
    - Remove finished or stale games
    """

    def __init__(
        self,
        pool: EntityPool,
        config: GameConfig | None = None,
        score_store: ScoreStore | None = None,
    ):
        self.pool = pool
        self.config = config or GameConfig()
        self.score_store = score_store or InMemoryScoreStore()
        self._games: dict[str, ManagedGame] = {}

    def create_game(self, random_seed: int | None = None) -> ManagedGame:
        """Create (but do not start) a new game."""
        config = self.config
        if random_seed is not None:
            config = replace(config, random_seed=random_seed)

        engine = GameEngine(
            config=config,
            score_store=self.score_store,
            pool=self.pool,
        )
        game = ManagedGame(
            game_id=str(uuid.uuid4()),
            engine=engine,
            created_at=time.time(),
        )
        self._games[game.game_id] = game
        logger.info("Created game %s", game.game_id)
        return game

    def get_game(self, game_id: str) -> ManagedGame | None:
        return self._games.get(game_id)

    def end_game(self, game_id: str) -> bool:
        """Remove a game. Returns False if it did not exist."""
        game = self._games.pop(game_id, None)
        if game is None:
            return False
        game.engine.session.end()
        logger.info("Ended game %s", game_id)
        return True

    def list_games(self) -> list[str]:
        return list(self._games)

    def cleanup_stale_games(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished games older than max_age.

        Returns the number removed.
        """
        now = time.time()
        stale = [
            game_id for game_id, game in self._games.items()
            if now - game.created_at > max_age_seconds and not game.is_active()
        ]
        for game_id in stale:
            self.end_game(game_id)
        return len(stale)
