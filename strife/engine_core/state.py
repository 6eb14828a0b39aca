"""
Game State - Mutable player state and the active-effects registry.

Design principles:
- Players are mutated in place by the turn controller and card effects only
- Resources never go below zero
- Active effects are kept in insertion order so countdown is deterministic
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator

from ..config import STARTING_INCOME, STARTING_RESOURCES

if TYPE_CHECKING:
    from .board import Tile
    from .cards import Card
    from .interfaces import DecisionProvider

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(eq=False)
class PlayerState:
    """
    State for a single player.

    Players compare by identity: two players with the same name are
    still different players.
    """
    name: str
    country: str
    current_tile: Tile
    active: bool = False
    resources: int = STARTING_RESOURCES
    income: int = STARTING_INCOME
    remaining_steps: int = 0
    steps_bonus: int = 0
    victory_points: int = 0

    def adjust_resources(self, amount: int):
        """Add a signed amount, clamping at zero."""
        self.resources = max(0, self.resources + amount)

    def set_resources(self, amount: int):
        self.resources = max(0, amount)

    def adjust_income(self, amount: int):
        self.income += amount

    def add_steps_bonus(self, bonus: int):
        self.steps_bonus += bonus

    def add_victory_points(self, points: int):
        self.victory_points += points

    def get_paid(self):
        """Receive this player's income."""
        self.adjust_resources(self.income)

    @property
    def category(self) -> str:
        """Category of the tile the player stands on."""
        return self.current_tile.category

    def move(
        self,
        die_value: int,
        decisions: DecisionProvider,
        on_step: Callable[[PlayerState], bool] | None = None,
    ) -> list[Tile]:
        """
        Walk die_value + steps_bonus tiles along the graph.

        The decision provider picks a branch when a tile has more than one
        successor. on_step is called after every step; returning True ends
        the walk early. Returns the visited tiles.
        """
        self.remaining_steps = die_value + self.steps_bonus
        visited: list[Tile] = []

        while self.remaining_steps > 0 and not self.current_tile.is_dead_end:
            next_tiles = self.current_tile.next_tiles
            index = 0
            if len(next_tiles) > 1:
                index = _clamp_index(decisions.choose_path(list(next_tiles)), len(next_tiles))
            self.current_tile = next_tiles[index]
            self.remaining_steps -= 1
            visited.append(self.current_tile)

            if on_step is not None and on_step(self):
                self.remaining_steps = 0

        logger.debug("%s moved %s tile(s) to %r", self.name, len(visited), self.current_tile)
        return visited

    def __repr__(self) -> str:
        return f"PlayerState({self.name!r}, resources={self.resources}, income={self.income})"


def _clamp_index(choice: int | None, size: int) -> int:
    """No selection or an out-of-range answer means the first option."""
    if choice is None or choice < 0 or choice >= size:
        return 0
    return choice


@dataclass(eq=False)
class ActiveEffect:
    """
    A card consequence that lasts for a number of turn advances.

    The payload carries what revert needs: the method tag, the magnitude,
    the duration and the player the effect was applied to.
    """
    card: Card
    ticks_remaining: int
    payload: dict[str, Any] = field(default_factory=dict)


class ActiveEffectRegistry:
    """Insertion-ordered collection of active effects."""

    def __init__(self):
        self._effects: list[ActiveEffect] = []

    def add(self, effect: ActiveEffect):
        self._effects.append(effect)

    def countdown(self) -> list[ActiveEffect]:
        """
        Decrement every entry and evict the ones reaching zero.

        Returns the expired entries in insertion order; the caller reverts them.
        """
        expired = []
        for effect in self._effects:
            effect.ticks_remaining -= 1
            if effect.ticks_remaining <= 0:
                expired.append(effect)
        self._effects = [e for e in self._effects if e.ticks_remaining > 0]
        return expired

    def countup(self):
        for effect in self._effects:
            effect.ticks_remaining += 1

    def __len__(self) -> int:
        return len(self._effects)

    def __iter__(self) -> Iterator[ActiveEffect]:
        return iter(list(self._effects))
