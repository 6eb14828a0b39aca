"""
Engine Core - The rules and effect engine.

The engine:
1. Loads the board and the card decks
2. Manages player state and the active-effects registry
3. Moves players along the tile graph
4. Applies and reverts card effects
5. Sequences turns until someone wins
"""

from .board import Tile, TileGraph
from .die import Die
from .cards import Card, CardKind, ChoiceOption
from .decks import CardDeckSet
from .state import GamePhase, PlayerState, ActiveEffect, ActiveEffectRegistry
from .interfaces import DecisionProvider, FirstOptionDecisions, PresentationNotifier, NullNotifier
from .effect_resolver import EffectResolver, EffectContext, EffectResult
from .turns import TurnController, TurnResult

__all__ = [
    "Tile",
    "TileGraph",
    "Die",
    "Card",
    "CardKind",
    "ChoiceOption",
    "CardDeckSet",
    "GamePhase",
    "PlayerState",
    "ActiveEffect",
    "ActiveEffectRegistry",
    "DecisionProvider",
    "FirstOptionDecisions",
    "PresentationNotifier",
    "NullNotifier",
    "EffectResolver",
    "EffectContext",
    "EffectResult",
    "TurnController",
    "TurnResult",
]
