"""
FactPick - Trivia Question Generation Engine

Builds "who satisfies this fact?" multiple-choice questions from a pool of
picks annotated with discrete facts or numeric properties, and tracks a
play-through (score, streak, shrinking time limit, game over).

The engine provides:
- Dataset loading (JSON, SQLite)
- Random sampling over a read-only entity pool
- Bounded-retry question generation with a unique correct answer
- A session state machine with pluggable best-streak persistence
"""

__version__ = "0.1.0"
