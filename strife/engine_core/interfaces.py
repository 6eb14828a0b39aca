"""
Collaborator Interfaces - The only seams between the engine and a UI.

DecisionProvider: the engine asks, the UI answers (blocking).
PresentationNotifier: the engine tells the UI something changed
(fire-and-forget, return values are ignored).

"No selection" is always allowed: a None or out-of-range index means
option 0.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .board import Tile
    from .state import PlayerState


class DecisionProvider(ABC):
    """
    Abstract base class for anything that answers the engine's questions.

    Implementations range from console prompts to scripted answers in tests.
    """

    @abstractmethod
    def choose_path(self, tiles: list[Tile]) -> Optional[int]:
        """Pick one of the successor tiles at a branch."""

    @abstractmethod
    def choose_option(self, prompt: str, descriptions: list[str]) -> Optional[int]:
        """Pick one of a card's textual options."""

    @abstractmethod
    def choose_player(self, prompt: str, players: list[PlayerState]) -> Optional[int]:
        """Pick one of the other players."""

    @abstractmethod
    def confirm_victory_purchase(self, player: PlayerState, cost: int) -> bool:
        """Ask whether the player buys a victory point."""

    @abstractmethod
    def confirm_restart_or_exit(self, winner: PlayerState) -> bool:
        """Ask what to do after a win. True restarts, False exits."""

    def inform(self, message: str):
        """Show an informational message (card text, gamble results)."""

    def get_name(self) -> str:
        return self.__class__.__name__


class FirstOptionDecisions(DecisionProvider):
    """
    Always takes the first option and declines every confirmation.

    Used for:
    - Deterministic testing
    - Headless runs
    """

    def choose_path(self, tiles):
        return 0

    def choose_option(self, prompt, descriptions):
        return 0

    def choose_player(self, prompt, players):
        return 0

    def confirm_victory_purchase(self, player, cost):
        return False

    def confirm_restart_or_exit(self, winner):
        return False


class PresentationNotifier:
    """
    Receives state-change notifications.

    The default implementation ignores everything, so a UI only overrides
    what it draws.
    """

    def on_player_position_changed(self, player: PlayerState):
        pass

    def on_victory_tile_changed(self, tile: Tile):
        pass

    def on_player_stats_changed(self):
        pass

    def on_turn_changed(self, player: PlayerState):
        pass

    def on_error(self, message: str):
        pass


NullNotifier = PresentationNotifier
