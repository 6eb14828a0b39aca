"""
Effect Resolver - Applies and reverts card effects.

This module handles:
- Immediate resource changes
- Timed effects (income, die faces, step bonus) and their reversal
- Turn side effects (skip turn, roll again)
- Player choices, fixed options and gambles

Every card kind goes through one apply/revert pair. Unknown method or
choice tags produce an EffectResult with an error and leave the game
untouched; they never raise.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Type, TypeVar

from ..config import MOVE_TO_START_TILE_ID
from .cards import (
    Card,
    CardKind,
    ChoiceOption,
    ChoicePayload,
    ChoiceType,
    GambleMethod,
    OptionMethod,
    PlayerChoiceMethod,
    TimedMethod,
    TimedPayload,
)
from .state import ActiveEffect, PlayerState, _clamp_index

if TYPE_CHECKING:
    from .board import TileGraph
    from .die import Die
    from .interfaces import DecisionProvider, PresentationNotifier
    from .turns import TurnController

logger = logging.getLogger(__name__)

TagT = TypeVar("TagT", bound=Enum)

KEY_STEAL_AMOUNT = "stealAmount"


@dataclass
class EffectContext:
    """
    Everything a card may touch while it resolves.

    player is the acting player; players is every player in seat order.
    """
    player: PlayerState
    players: list[PlayerState]
    die: Die
    board: TileGraph
    turns: TurnController
    decisions: DecisionProvider
    notifier: PresentationNotifier
    rng: random.Random = field(default_factory=random.Random)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def other_players(self) -> list[PlayerState]:
        return [p for p in self.players if p is not self.player]

    def timed_ticks(self, duration: int) -> int:
        """Turn advances a duration-bearing effect survives."""
        return 1 + duration * self.num_players

    def move_to_start(self, player: PlayerState):
        tile = self.board.get(MOVE_TO_START_TILE_ID) or self.board.starting_tile()
        player.current_tile = tile
        self.notifier.on_player_position_changed(player)


@dataclass
class EffectResult:
    """Outcome of applying a card."""
    active_effect: Optional[ActiveEffect] = None
    error: Optional[str] = None
    messages: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None


def _parse_tag(enum_type: Type[TagT], value: str) -> TagT | None:
    try:
        return enum_type(value)
    except ValueError:
        return None


class EffectResolver:
    """
    Resolves cards against an EffectContext.

    Stateless: all game state lives in the context.
    """

    def apply(self, card: Card, ctx: EffectContext) -> EffectResult:
        """Apply a card for ctx.player. Returns any timed effect to register."""
        handlers: dict[CardKind, Callable[[Card, EffectContext], EffectResult]] = {
            CardKind.IMMEDIATE: self._apply_immediate,
            CardKind.TIMED: self._apply_timed,
            CardKind.CHOICE: self._apply_choice,
        }
        ctx.decisions.inform(card.description)
        result = handlers[card.kind](card, ctx)
        if result.error:
            logger.warning("Card %r abandoned: %s", card.description, result.error)
        return result

    def revert(self, effect: ActiveEffect, ctx: EffectContext):
        """Undo an expired timed effect on the player it was applied to."""
        method = effect.payload.get("method_type")
        amount = effect.payload.get("value_change", 0)
        player = effect.payload.get("player") or ctx.player

        if method == TimedMethod.INCOME_CHANGE or method == OptionMethod.CHANGE_INCOME:
            player.adjust_income(-amount)
        elif method == TimedMethod.DIE_CHANGE:
            ctx.die.faces -= amount
        elif method == OptionMethod.CHANGE_STEPS:
            player.add_steps_bonus(-amount)
        else:
            logger.warning("Cannot revert unknown effect method %r", method)
            return
        logger.debug("Reverted %s (%+d) for %s", method, amount, player.name)

    # -------------------------------------------------------------------------
    # Immediate
    # -------------------------------------------------------------------------

    def _apply_immediate(self, card: Card, ctx: EffectContext) -> EffectResult:
        ctx.player.adjust_resources(card.value_change)
        return EffectResult()

    # -------------------------------------------------------------------------
    # Timed
    # -------------------------------------------------------------------------

    def _apply_timed(self, card: Card, ctx: EffectContext) -> EffectResult:
        payload = card.payload
        if not isinstance(payload, TimedPayload):
            raise TypeError(f"Timed card {card.description!r} has a {type(payload).__name__}")

        method = _parse_tag(TimedMethod, payload.method_type)
        if method is None:
            return EffectResult(error=f"Unknown action: {payload.method_type}")

        amount = payload.value_change
        if method is TimedMethod.SELF_MONEY_CHANGE:
            ctx.player.adjust_resources(amount)
        elif method is TimedMethod.OTHER_MONEY_CHANGE:
            for other in ctx.other_players:
                other.adjust_resources(amount)
        elif method is TimedMethod.INCOME_CHANGE:
            ctx.player.adjust_income(amount)
            return EffectResult(active_effect=self._timed_effect(card, ctx, method, amount, payload.duration))
        elif method is TimedMethod.DIE_CHANGE:
            ctx.die.faces += amount
            return EffectResult(active_effect=self._timed_effect(card, ctx, method, amount, payload.duration))
        elif method is TimedMethod.SKIP_TURN:
            ctx.turns.advance_turn()
        elif method is TimedMethod.MOVE_TO_START:
            ctx.move_to_start(ctx.player)
        elif method is TimedMethod.ROLL_AGAIN:
            ctx.turns.reverse_turn()
        return EffectResult()

    def _timed_effect(
        self,
        card: Card,
        ctx: EffectContext,
        method: Enum,
        amount: int,
        duration: int,
    ) -> ActiveEffect:
        return ActiveEffect(
            card=card,
            ticks_remaining=ctx.timed_ticks(duration),
            payload={
                "method_type": method.value,
                "value_change": amount,
                "duration": duration,
                "player": ctx.player,
            },
        )

    # -------------------------------------------------------------------------
    # Choice
    # -------------------------------------------------------------------------

    def _apply_choice(self, card: Card, ctx: EffectContext) -> EffectResult:
        payload = card.payload
        if not isinstance(payload, ChoicePayload):
            raise TypeError(f"Choice card {card.description!r} has a {type(payload).__name__}")

        handlers: dict[ChoiceType, Callable[[Card, ChoicePayload, EffectContext], EffectResult]] = {
            ChoiceType.PLAYER: self._handle_player_choice,
            ChoiceType.OPTIONS: self._handle_options,
            ChoiceType.GAMBLE: self._handle_gamble,
        }
        choice_type = _parse_tag(ChoiceType, payload.choice_type)
        if choice_type is None:
            return EffectResult(error=f"Unknown choice type: {payload.choice_type}")
        return handlers[choice_type](card, payload, ctx)

    def _handle_player_choice(
        self,
        card: Card,
        payload: ChoicePayload,
        ctx: EffectContext,
    ) -> EffectResult:
        method = _parse_tag(PlayerChoiceMethod, payload.method_type)
        if method is None:
            return EffectResult(error=f"Unknown action: {payload.method_type}")

        others = ctx.other_players
        if not others:
            return EffectResult(error="No other players available.")

        index = _clamp_index(ctx.decisions.choose_player(card.description, others), len(others))
        target = others[index]
        current = ctx.player

        if method is PlayerChoiceMethod.SWAP_PLACES:
            current.current_tile, target.current_tile = target.current_tile, current.current_tile
            ctx.notifier.on_player_position_changed(current)
            ctx.notifier.on_player_position_changed(target)
        elif method is PlayerChoiceMethod.MOVE_TO_PLAYER:
            current.current_tile = target.current_tile
            ctx.notifier.on_player_position_changed(current)
        elif method is PlayerChoiceMethod.SWAP_MONEY:
            current_money, target_money = current.resources, target.resources
            current.set_resources(target_money)
            target.set_resources(current_money)
        elif method is PlayerChoiceMethod.STEAL_MONEY:
            amount = payload.get_int(KEY_STEAL_AMOUNT)
            stolen = max(0, min(target.resources, amount))
            target.adjust_resources(-stolen)
            current.adjust_resources(stolen)
        return EffectResult()

    def _choose(self, card: Card, payload: ChoicePayload, ctx: EffectContext) -> ChoiceOption | None:
        if not payload.options:
            return None
        descriptions = [option.description for option in payload.options]
        index = _clamp_index(ctx.decisions.choose_option(card.description, descriptions), len(descriptions))
        return payload.options[index]

    def _handle_options(
        self,
        card: Card,
        payload: ChoicePayload,
        ctx: EffectContext,
    ) -> EffectResult:
        option = self._choose(card, payload, ctx)
        if option is None:
            return EffectResult(error="Card has no options")

        method = _parse_tag(OptionMethod, option.method_type)
        if method is None:
            return EffectResult(error=f"Unknown option: {option.method_type}")

        player = ctx.player
        if method is OptionMethod.SELF_MONEY_CHANGE:
            player.adjust_resources(option.value_change)
        elif method is OptionMethod.OTHER_MONEY_CHANGE:
            for other in ctx.other_players:
                other.adjust_resources(option.value_change)
        elif method is OptionMethod.INCOME_FOR_MONEY:
            player.adjust_income(option.income_change)
            player.adjust_resources(option.money_change)
        elif method is OptionMethod.MOVE_TO_START:
            ctx.move_to_start(player)
        elif method is OptionMethod.CHANGE_STEPS:
            player.add_steps_bonus(option.value_change)
            return EffectResult(
                active_effect=self._timed_effect(card, ctx, method, option.value_change, option.duration)
            )
        elif method is OptionMethod.CHANGE_INCOME:
            player.adjust_income(option.value_change)
            return EffectResult(
                active_effect=self._timed_effect(card, ctx, method, option.value_change, option.duration)
            )
        return EffectResult()

    def _handle_gamble(
        self,
        card: Card,
        payload: ChoicePayload,
        ctx: EffectContext,
    ) -> EffectResult:
        option = self._choose(card, payload, ctx)
        if option is None:
            return EffectResult(error="Card has no options")

        method = _parse_tag(GambleMethod, option.method_type)
        if method is None:
            return EffectResult(error=f"Unknown gamble: {option.method_type}")

        player = ctx.player
        messages = []
        if method is GambleMethod.MONEY_CHANCE:
            player.adjust_resources(option.fixed_cost)
            if ctx.rng.random() < option.penalty_chance:
                player.adjust_resources(option.penalty)
                messages.append(f"Unlucky! Penalty applied: {option.penalty}")
            else:
                messages.append("Success! You incur no further costs.")
        elif method is GambleMethod.INCOME_CHANCE and option.success_effect is not None:
            if ctx.rng.random() < option.success_chance:
                player.adjust_income(option.success_effect)
                messages.append(f"Your gamble paid off! Your income increases by {option.success_effect}")
            else:
                player.adjust_income(option.failure_effect)
                messages.append(f"Unlucky! Your income has gone down by {option.failure_effect}")

        for message in messages:
            ctx.decisions.inform(message)
        return EffectResult(messages=messages)
