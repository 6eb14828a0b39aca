"""
Turn Controller - The turn state machine.

The controller:
1. Keeps the cyclic turn index (1-based) and pays income
2. Owns the active-effects registry (countdown on advance, countup on reversal)
3. Runs a full player turn: roll, move, draw, apply, advance
4. Sells victory points and detects the end of the game

It is the only component that changes whose turn it is.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from ..config import DEFAULT_WIN_POINTS, VICTORY_POINT_COST
from .board import Tile, TileGraph
from .cards import Card
from .decks import CardDeckSet
from .die import Die
from .effect_resolver import EffectContext, EffectResolver, EffectResult
from .interfaces import DecisionProvider, FirstOptionDecisions, PresentationNotifier
from .state import ActiveEffectRegistry, GamePhase, PlayerState

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """
    Result of playing one turn.

    The turn index has already moved on when this is returned, so
    player is the one who rolled.
    """
    success: bool
    player: Optional[PlayerState] = None
    roll: int = 0
    path: list[Tile] = field(default_factory=list)
    card: Optional[Card] = None
    effect: Optional[EffectResult] = None
    victory_point_bought: bool = False

    # Game over info
    game_over: bool = False
    winner: Optional[PlayerState] = None
    restart_requested: bool = False

    error: Optional[str] = None


class TurnController:
    """
    Sequences play for a fixed set of players.

    Usage:
        turns = TurnController(players, board, die, decks, decisions=provider)
        turns.start()
        while not turns.is_game_over:
            turns.play_turn()
    """

    def __init__(
        self,
        players: list[PlayerState],
        board: TileGraph,
        die: Die,
        decks: CardDeckSet,
        decisions: DecisionProvider | None = None,
        notifier: PresentationNotifier | None = None,
        rng: random.Random | None = None,
        win_points: int = DEFAULT_WIN_POINTS,
        victory_cost: int = VICTORY_POINT_COST,
        resolver: EffectResolver | None = None,
    ):
        if not players:
            raise ValueError("A game needs at least one player")
        self.players = list(players)
        self.board = board
        self.die = die
        self.decks = decks
        self.decisions = decisions or FirstOptionDecisions()
        self.notifier = notifier or PresentationNotifier()
        self.rng = rng or random.Random()
        self.win_points = win_points
        self.victory_cost = victory_cost
        self.resolver = resolver or EffectResolver()

        self.turn_index = 1
        self.phase = GamePhase.SETUP
        self.active_effects = ActiveEffectRegistry()
        self.victory_tile: Tile | None = None
        self.winner: PlayerState | None = None
        self.restart_requested = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.turn_index - 1]

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def start(self):
        """Pick the first victory tile and pay the first player."""
        self.turn_index = 1
        self.phase = GamePhase.PLAYING
        self.pick_victory_tile()
        self._update_active_flags()
        self.current_player.get_paid()
        logger.info("Game started with %s players, %s to move", self.num_players, self.current_player.name)
        self.notifier.on_turn_changed(self.current_player)
        self.notifier.on_player_stats_changed()

    def pick_victory_tile(self) -> Tile | None:
        candidates = self.board.victory_tiles()
        if candidates:
            self.victory_tile = self.rng.choice(candidates)
            logger.debug("Victory tile is now %r", self.victory_tile)
            self.notifier.on_victory_tile_changed(self.victory_tile)
        return self.victory_tile

    def make_context(self, player: PlayerState | None = None) -> EffectContext:
        return EffectContext(
            player=player or self.current_player,
            players=self.players,
            die=self.die,
            board=self.board,
            turns=self,
            decisions=self.decisions,
            notifier=self.notifier,
            rng=self.rng,
        )

    # -------------------------------------------------------------------------
    # Turn transitions
    # -------------------------------------------------------------------------

    def advance_turn(self):
        """Count effects down, move to the next player and pay them."""
        ctx = self.make_context()
        for effect in self.active_effects.countdown():
            self.resolver.revert(effect, ctx)

        self.turn_index = (self.turn_index % self.num_players) + 1
        self.current_player.get_paid()
        self._update_active_flags()
        logger.info("Turn passes to %s", self.current_player.name)
        self.notifier.on_turn_changed(self.current_player)
        self.notifier.on_player_stats_changed()

    def reverse_turn(self):
        """Count effects up, take back the current payment and step back."""
        self.active_effects.countup()
        self.current_player.adjust_resources(-self.current_player.income)

        self.turn_index -= 1
        if self.turn_index == 0:
            self.turn_index = self.num_players
        self._update_active_flags()
        logger.info("Turn reversed to %s", self.current_player.name)
        self.notifier.on_turn_changed(self.current_player)
        self.notifier.on_player_stats_changed()

    def _update_active_flags(self):
        current = self.current_player
        for player in self.players:
            player.active = player is current

    # -------------------------------------------------------------------------
    # Playing a turn
    # -------------------------------------------------------------------------

    def play_turn(self) -> TurnResult:
        """Roll, move, draw and apply a card, then pass the turn."""
        if self.phase != GamePhase.PLAYING:
            return TurnResult(success=False, error=f"Game is not in progress ({self.phase.value})")

        player = self.current_player
        result = TurnResult(success=True, player=player)
        points_before = player.victory_points

        result.roll = self.die.roll()
        result.path = player.move(result.roll, self.decisions, on_step=self._offer_victory_point)
        result.victory_point_bought = player.victory_points > points_before
        self.notifier.on_player_position_changed(player)

        if self.is_game_over:
            result.game_over = True
            result.winner = self.winner
            result.restart_requested = self.restart_requested
            return result

        card = self.decks.draw(player.category)
        if card is not None:
            logger.debug("%s drew %r", player.name, card)
            result.card = card
            result.effect = self.apply_card(card)

        self.advance_turn()
        return result

    def apply_card(self, card: Card, player: PlayerState | None = None) -> EffectResult:
        """Apply a card for a player (default: current) and register its timed effect."""
        ctx = self.make_context(player)
        result = self.resolver.apply(card, ctx)

        if result.error:
            self.notifier.on_error(result.error)
        elif result.active_effect is not None:
            self.active_effects.add(result.active_effect)
            logger.debug(
                "Registered %s for %s ticks",
                result.active_effect.payload.get("method_type"),
                result.active_effect.ticks_remaining,
            )
        self.notifier.on_player_stats_changed()
        return result

    # -------------------------------------------------------------------------
    # Victory points
    # -------------------------------------------------------------------------

    def _offer_victory_point(self, player: PlayerState) -> bool:
        """
        Called after every step. Returns True when movement should stop.

        A buyer keeps walking from the starting tile with the steps left;
        only a win ends the walk.
        """
        if player.current_tile is not self.victory_tile:
            return False
        if not self.decisions.confirm_victory_purchase(player, self.victory_cost):
            return False
        if player.resources < self.victory_cost:
            self.decisions.inform(
                f"You do not have enough gold to buy the Victory Point ({self.victory_cost})"
            )
            return False
        self.purchase_victory_point(player)
        return self.is_game_over

    def purchase_victory_point(self, player: PlayerState):
        player.adjust_resources(-self.victory_cost)
        player.add_victory_points(1)
        logger.info("%s bought a victory point (%s total)", player.name, player.victory_points)
        self.pick_victory_tile()

        player.current_tile = self.board.starting_tile()
        self.notifier.on_player_position_changed(player)
        self.notifier.on_player_stats_changed()

        if player.victory_points >= self.win_points:
            self.phase = GamePhase.GAME_OVER
            self.winner = player
            logger.info("%s has won the game", player.name)
            self.restart_requested = bool(self.decisions.confirm_restart_or_exit(player))
