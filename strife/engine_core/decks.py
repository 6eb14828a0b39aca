"""
Card Decks - Per-category draw and discard piles.

Invariant: for every category, draw pile + discard pile always holds
exactly the cards loaded for that category. Drawing from an empty draw
pile first shuffles the discard pile back in.
"""

from __future__ import annotations
import logging
import random
from pathlib import Path

from ..source_schema.records import (
    CardSource,
    ChoiceCardRecord,
    ImmediateCardRecord,
    TimedCardRecord,
)
from ..source_schema.validation import load_card_source, validate_model
from .cards import Card, CardKind, KIND_BY_TYPE

logger = logging.getLogger(__name__)

_RECORD_MODELS = {
    CardKind.IMMEDIATE: ImmediateCardRecord,
    CardKind.TIMED: TimedCardRecord,
    CardKind.CHOICE: ChoiceCardRecord,
}


class CardDeckSet:
    """
    All decks of a game, keyed by lower-case category.

    Usage:
        decks = CardDeckSet.load("data/cards1.json", rng=random.Random(7))
        card = decks.draw("green")
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self._draw: dict[str, list[Card]] = {}
        self._discard: dict[str, list[Card]] = {}

    @classmethod
    def load(cls, path: str | Path, rng: random.Random | None = None) -> CardDeckSet:
        """
        Load every card of a card document and shuffle the decks.

        Raises SourceUnreadableError / SourceMalformedError.
        """
        return cls.from_source(load_card_source(path), rng=rng, path=path)

    @classmethod
    def from_source(
        cls,
        source: CardSource,
        rng: random.Random | None = None,
        path: str | Path = "<cards>",
    ) -> CardDeckSet:
        decks = cls(rng=rng)
        for index, record in enumerate(source.cards):
            kind = KIND_BY_TYPE.get(record.type.lower())
            if kind is None:
                logger.warning("Skipping card %s with unknown type %r", index, record.type)
                continue
            variant = validate_model(_RECORD_MODELS[kind], record.model_dump(), path, "Cards")
            decks.add(Card.from_record(kind, variant))
        decks.shuffle_all()
        logger.debug("Decks loaded: %s", {c: decks.count(c) for c in decks.categories()})
        return decks

    def add(self, card: Card):
        """Put a card at the back of its category's draw pile."""
        category = card.category.lower()
        self._draw.setdefault(category, []).append(card)
        self._discard.setdefault(category, [])

    def categories(self) -> set[str]:
        return set(self._draw)

    def draw(self, category: str) -> Card | None:
        """
        Draw the front card of a category's pile.

        Returns None for a category that was never loaded.
        """
        key = category.lower()
        deck = self._draw.get(key)
        if deck is None:
            return None

        used = self._discard[key]
        if not deck:
            if not used:
                return None
            self.rng.shuffle(used)
            deck.extend(used)
            used.clear()
            logger.debug("Reshuffled %s discard pile (%s cards)", key, len(deck))

        card = deck.pop(0)
        used.append(card)
        return card

    def shuffle_all(self):
        """Reorder every draw pile; membership does not change."""
        for deck in self._draw.values():
            self.rng.shuffle(deck)

    def draw_pile(self, category: str) -> list[Card]:
        return list(self._draw.get(category.lower(), []))

    def discard_pile(self, category: str) -> list[Card]:
        return list(self._discard.get(category.lower(), []))

    def count(self, category: str) -> int:
        """Total cards of a category, both piles."""
        key = category.lower()
        return len(self._draw.get(key, [])) + len(self._discard.get(key, []))
