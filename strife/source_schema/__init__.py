"""Source schema - board and card document models and loading."""

from .records import (
    BoardSource,
    TileRecord,
    CardSource,
    CardRecord,
    ImmediateCardRecord,
    TimedCardRecord,
    ChoiceCardRecord,
    OptionRecord,
)
from .validation import (
    SourceError,
    SourceUnreadableError,
    SourceMalformedError,
    BoardConfigurationError,
    load_board_source,
    load_card_source,
)

__all__ = [
    "BoardSource",
    "TileRecord",
    "CardSource",
    "CardRecord",
    "ImmediateCardRecord",
    "TimedCardRecord",
    "ChoiceCardRecord",
    "OptionRecord",
    "SourceError",
    "SourceUnreadableError",
    "SourceMalformedError",
    "BoardConfigurationError",
    "load_board_source",
    "load_card_source",
]
