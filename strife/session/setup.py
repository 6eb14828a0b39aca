"""
Game Setup - Creates a ready-to-play game from settings.

This module handles:
- Loading the board and card decks
- Creating players on the starting tile
- Seeding the shared random source
- Picking the first victory tile and paying the first income
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass

from ..config import GameSettings
from ..engine_core.board import TileGraph
from ..engine_core.decks import CardDeckSet
from ..engine_core.die import Die
from ..engine_core.interfaces import DecisionProvider, PresentationNotifier
from ..engine_core.state import PlayerState
from ..engine_core.turns import TurnController

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """
    One play-through.

    Holds the loaded components and the turn controller driving them.
    """
    settings: GameSettings
    board: TileGraph
    decks: CardDeckSet
    die: Die
    players: list[PlayerState]
    turns: TurnController

    @property
    def is_over(self) -> bool:
        return self.turns.is_game_over


def setup_game(
    settings: GameSettings,
    decisions: DecisionProvider,
    notifier: PresentationNotifier | None = None,
    rng: random.Random | None = None,
) -> GameSession:
    """
    Set up a new game.

    Args:
        settings: Validated game settings
        decisions: Answers choices during play
        notifier: Receives state-change notifications
        rng: Random source (defaults to one seeded with settings.seed)

    Returns:
        GameSession whose first player has been paid

    Raises:
        SourceError subclasses when the board or cards cannot be used
    """
    rng = rng or random.Random(settings.seed)

    board = TileGraph.load(settings.board_path, rng=rng)
    start_tile = board.starting_tile()
    decks = CardDeckSet.load(settings.cards_path, rng=rng)
    die = Die(settings.die_faces, rng=rng)

    players = [
        PlayerState(name=seat.name, country=seat.country, current_tile=start_tile)
        for seat in settings.players
    ]

    turns = TurnController(
        players,
        board,
        die,
        decks,
        decisions=decisions,
        notifier=notifier,
        rng=rng,
        win_points=settings.win_points,
    )
    turns.start()

    logger.info(
        "Set up game: %s tiles, decks %s, d%s, %s point(s) to win",
        len(board),
        sorted(decks.categories()),
        die.faces,
        settings.win_points,
    )
    return GameSession(
        settings=settings,
        board=board,
        decks=decks,
        die=die,
        players=players,
        turns=turns,
    )
