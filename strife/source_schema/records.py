"""
Source Records - Pydantic models for the board and card JSON documents.

Field aliases follow the on-disk names (ID, x_coord, valueChange, ...).
Method and choice tags are kept as plain strings: an unknown tag is not a
load error, it is reported when the card is resolved.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Board
# =============================================================================

class TileRecord(BaseModel):
    """One entry of the board's "path" array."""
    tile_id: int = Field(alias="ID")
    category: str = Field(alias="type")
    x: int = Field(alias="x_coord")
    y: int = Field(alias="y_coord")
    width: int
    height: int
    victory: bool
    next: list[int] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class BoardSource(BaseModel):
    """The whole board document."""
    path: list[TileRecord]


# =============================================================================
# Cards
# =============================================================================

class CardRecord(BaseModel):
    """Fields every card record has; used to route to the variant model."""
    type: str
    description: str

    model_config = ConfigDict(extra="allow")


class ImmediateCardRecord(BaseModel):
    """Green card: flat resource change."""
    type: str
    description: str
    value_change: int = Field(alias="valueChange")

    model_config = ConfigDict(populate_by_name=True)


class TimedCardRecord(BaseModel):
    """Red card: flat change plus a method tag and duration."""
    type: str
    description: str
    value_change: int = Field(alias="valueChange")
    method_type: str = Field(alias="methodType")
    duration: int

    model_config = ConfigDict(populate_by_name=True)


class OptionRecord(BaseModel):
    """One selectable option of a blue card."""
    description: str
    method_type: str = Field(alias="methodType")
    value_change: int = Field(0, alias="valueChange")
    income_change: int = Field(0, alias="incomeChange")
    money_change: int = Field(0, alias="moneyChange")
    duration: int = 0
    fixed_cost: int = Field(0, alias="fixedCost")
    penalty_chance: float = Field(0.0, alias="penaltyChance", ge=0.0, le=1.0)
    penalty: int = 0
    success_chance: float = Field(0.0, alias="successChance", ge=0.0, le=1.0)
    success_effect: Optional[int] = Field(None, alias="successEffect")
    failure_effect: int = Field(0, alias="failureEffect")

    model_config = ConfigDict(populate_by_name=True)


class ChoiceCardRecord(BaseModel):
    """Blue card: a player choice, fixed options or a gamble."""
    type: str
    description: str
    choice_type: str = Field(alias="choiceType")
    method_type: str = Field("", alias="methodType")
    options: list[OptionRecord] = Field(default_factory=list)

    # Anything else (e.g. stealAmount) is kept as a card property
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def properties(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class CardSource(BaseModel):
    """The whole card document."""
    cards: list[CardRecord]
