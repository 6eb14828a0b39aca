"""
Game Loop - Plays turns until someone wins.

The loop:
1. Set up a game from settings
2. Play turns until the game is over (or a turn limit is hit)
3. If the winner asked for a restart, set up a fresh game and repeat
"""

from __future__ import annotations
import logging
from typing import Callable, Optional

from ..config import GameSettings
from ..engine_core.interfaces import DecisionProvider, PresentationNotifier
from ..engine_core.turns import TurnResult
from .setup import GameSession, setup_game

logger = logging.getLogger(__name__)


def play_until_over(
    session: GameSession,
    max_turns: Optional[int] = None,
    on_turn: Optional[Callable[[TurnResult], None]] = None,
) -> Optional[TurnResult]:
    """
    Play turns on one session.

    Returns the last TurnResult, or None when no turn was played.
    """
    last = None
    played = 0
    while not session.is_over:
        if max_turns is not None and played >= max_turns:
            logger.info("Stopping after %s turns", played)
            break
        last = session.turns.play_turn()
        played += 1
        if on_turn is not None:
            on_turn(last)
    return last


def run_game(
    settings: GameSettings,
    decisions: DecisionProvider,
    notifier: PresentationNotifier | None = None,
    next_settings: Optional[Callable[[], GameSettings]] = None,
    max_turns: Optional[int] = None,
    on_turn: Optional[Callable[[TurnResult], None]] = None,
) -> GameSession:
    """
    Run games until the winner chooses to exit.

    next_settings supplies the settings for a restarted game; the previous
    settings are reused when it is not given. Returns the last session.
    """
    while True:
        session = setup_game(settings, decisions, notifier)
        play_until_over(session, max_turns=max_turns, on_turn=on_turn)
        if not (session.is_over and session.turns.restart_requested):
            return session
        logger.info("Restarting game")
        settings = next_settings() if next_settings else settings
