"""
Session Module - Sets up and runs games.

A session represents one play-through:
- Created from GameSettings
- Holds the board, decks, die, players and turn controller
- Ends when a player reaches the win threshold

Sessions are never persisted.
"""

from .setup import GameSession, setup_game
from .game_loop import play_until_over, run_game

__all__ = [
    "GameSession",
    "setup_game",
    "play_until_over",
    "run_game",
]
