"""
Cards - The closed family of card variants.

A card is one of three kinds, each with its own payload:
- IMMEDIATE (green): flat resource change
- TIMED (red): flat change + method tag + duration ("chaotic" cards)
- CHOICE (blue): player choice, fixed options or gamble

Cards are immutable once loaded. Identity matters: an active effect keeps
a reference to the exact card that created it.

Tags are stored as the raw strings from the source. The effect resolver
maps them onto the enums below and reports anything it does not know.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..source_schema.records import (
    ChoiceCardRecord,
    ImmediateCardRecord,
    OptionRecord,
    TimedCardRecord,
)


class CardKind(Enum):
    """Card families."""
    IMMEDIATE = "immediate"
    TIMED = "timed"
    CHOICE = "choice"


# Source "type" tag -> card kind
KIND_BY_TYPE: dict[str, CardKind] = {
    "green": CardKind.IMMEDIATE,
    "red": CardKind.TIMED,
    "blue": CardKind.CHOICE,
}


class TimedMethod(str, Enum):
    """Method tags of timed (red) cards."""
    SELF_MONEY_CHANGE = "selfMoneyChange"
    OTHER_MONEY_CHANGE = "otherMoneyChange"
    INCOME_CHANGE = "incomeChange"
    DIE_CHANGE = "dieChange"
    SKIP_TURN = "skipTurn"
    MOVE_TO_START = "moveToStart"
    ROLL_AGAIN = "rollAgain"


class ChoiceType(str, Enum):
    """Sub-kinds of choice (blue) cards."""
    PLAYER = "playerChoice"
    OPTIONS = "options"
    GAMBLE = "gamble"


class PlayerChoiceMethod(str, Enum):
    """What happens to the chosen player."""
    SWAP_PLACES = "swapPlaces"
    MOVE_TO_PLAYER = "moveToPlayer"
    SWAP_MONEY = "swapMoney"
    STEAL_MONEY = "stealMoney"


class OptionMethod(str, Enum):
    """Method tags of fixed options."""
    SELF_MONEY_CHANGE = "selfMoneyChange"
    OTHER_MONEY_CHANGE = "otherMoneyChange"
    INCOME_FOR_MONEY = "incomeForMoney"
    MOVE_TO_START = "moveToStart"
    CHANGE_STEPS = "changeSteps"
    CHANGE_INCOME = "changeIncome"


class GambleMethod(str, Enum):
    """Method tags of gamble options."""
    MONEY_CHANCE = "moneyChance"
    INCOME_CHANCE = "incomeChance"


@dataclass(frozen=True)
class ChoiceOption:
    """One option of a blue card."""
    description: str
    method_type: str
    value_change: int = 0
    income_change: int = 0
    money_change: int = 0
    duration: int = 0
    fixed_cost: int = 0
    penalty_chance: float = 0.0
    penalty: int = 0
    success_chance: float = 0.0
    success_effect: int | None = None
    failure_effect: int = 0

    @classmethod
    def from_record(cls, record: OptionRecord) -> ChoiceOption:
        return cls(**record.model_dump(by_alias=False))


@dataclass(frozen=True)
class ImmediatePayload:
    value_change: int


@dataclass(frozen=True)
class TimedPayload:
    value_change: int
    method_type: str
    duration: int = 0


@dataclass(frozen=True)
class ChoicePayload:
    choice_type: str
    method_type: str = ""
    options: tuple[ChoiceOption, ...] = ()
    properties: dict[str, Any] = field(default_factory=dict)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.properties.get(key, default)
        return int(value) if isinstance(value, (int, float)) else default


CardPayload = Union[ImmediatePayload, TimedPayload, ChoicePayload]


@dataclass(frozen=True, eq=False)
class Card:
    """
    A card definition drawn from a deck.

    category is the deck key (the tile category that draws it).
    """
    description: str
    category: str
    kind: CardKind
    payload: CardPayload

    @classmethod
    def immediate(cls, description: str, value_change: int, category: str = "green") -> Card:
        return cls(description, category, CardKind.IMMEDIATE, ImmediatePayload(value_change))

    @classmethod
    def timed(
        cls,
        description: str,
        value_change: int,
        method_type: str,
        duration: int = 0,
        category: str = "red",
    ) -> Card:
        return cls(
            description, category, CardKind.TIMED,
            TimedPayload(value_change, method_type, duration),
        )

    @classmethod
    def choice(
        cls,
        description: str,
        choice_type: str,
        method_type: str = "",
        options: list[ChoiceOption] | None = None,
        properties: dict[str, Any] | None = None,
        category: str = "blue",
    ) -> Card:
        return cls(
            description, category, CardKind.CHOICE,
            ChoicePayload(choice_type, method_type, tuple(options or ()), dict(properties or {})),
        )

    @classmethod
    def from_record(
        cls,
        kind: CardKind,
        record: ImmediateCardRecord | TimedCardRecord | ChoiceCardRecord,
    ) -> Card:
        """Build a card from its validated variant record."""
        category = record.type.lower()
        if kind is CardKind.IMMEDIATE:
            return cls.immediate(record.description, record.value_change, category)
        if kind is CardKind.TIMED:
            return cls.timed(
                record.description, record.value_change,
                record.method_type, record.duration, category,
            )
        return cls.choice(
            record.description,
            record.choice_type,
            record.method_type,
            [ChoiceOption.from_record(o) for o in record.options],
            record.properties,
            category,
        )

    @property
    def value_change(self) -> int:
        """Flat change for immediate and timed cards, 0 for choice cards."""
        if isinstance(self.payload, (ImmediatePayload, TimedPayload)):
            return self.payload.value_change
        return 0

    def __repr__(self) -> str:
        return f"Card({self.kind.value}, {self.description!r})"
