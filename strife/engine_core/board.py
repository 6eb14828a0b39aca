"""
Board - The tile graph players move along.

The board is loaded once from a path source and never mutated afterwards.
It provides:
- Ordered tile list (load order)
- ID -> Tile lookup
- The victory subset
- Starting tile detection
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from ..config import MOVE_TO_START_TILE_ID, START_CATEGORY
from ..source_schema.records import BoardSource
from ..source_schema.validation import BoardConfigurationError, load_board_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Tile:
    """
    A single node of the board graph.

    Layout fields (x, y, width, height) are carried for the UI only.
    Tiles compare by identity. Successors are linked once by TileGraph
    while loading and are read-only afterwards.
    """
    tile_id: int
    category: str
    victory: bool = False
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    _successors: list[Tile] = field(default_factory=list, init=False, repr=False)

    @property
    def next_tiles(self) -> tuple[Tile, ...]:
        return tuple(self._successors)

    @property
    def is_dead_end(self) -> bool:
        return not self.next_tiles

    @property
    def is_branch(self) -> bool:
        return len(self.next_tiles) > 1

    def __repr__(self) -> str:
        return f"Tile({self.tile_id}, {self.category!r})"


class TileGraph:
    """
    Immutable tile graph.

    Usage:
        graph = TileGraph.load("data/path1.json")
        start = graph.starting_tile()
    """

    def __init__(self, tiles: list[Tile], victory_tiles: list[Tile] | None = None):
        self._tiles = list(tiles)
        self._by_id = {tile.tile_id: tile for tile in self._tiles}
        if victory_tiles is None:
            victory_tiles = [tile for tile in self._tiles if tile.victory]
        self._victory_tiles = list(victory_tiles)

    @classmethod
    def load(cls, path: str | Path, rng: random.Random | None = None) -> TileGraph:
        """
        Load the board from a JSON path source.

        Raises SourceUnreadableError / SourceMalformedError.
        """
        return cls.from_source(load_board_source(path), rng=rng)

    @classmethod
    def from_source(cls, source: BoardSource, rng: random.Random | None = None) -> TileGraph:
        """Build the graph from an already validated source document."""
        tiles: list[Tile] = []
        by_id: dict[int, Tile] = {}

        for record in source.path:
            tile = Tile(
                tile_id=record.tile_id,
                category=record.category,
                victory=record.victory,
                x=record.x,
                y=record.y,
                width=record.width,
                height=record.height,
            )
            by_id[tile.tile_id] = tile
            tiles.append(tile)

        # Link successors once every tile exists; nothing else touches them
        for record in source.path:
            tile = by_id[record.tile_id]
            for next_id in record.next:
                next_tile = by_id.get(next_id)
                if next_tile is None:
                    logger.debug("Tile %s: dropping unknown successor %s", tile.tile_id, next_id)
                    continue
                tile._successors.append(next_tile)

        victory_tiles = [tile for tile in tiles if tile.victory]
        if not victory_tiles and tiles:
            fallback = (rng or random.Random()).choice(tiles)
            logger.info("No victory tiles flagged, using tile %s", fallback.tile_id)
            victory_tiles = [fallback]

        return cls(tiles, victory_tiles)

    @property
    def tiles(self) -> list[Tile]:
        """All tiles in load order."""
        return list(self._tiles)

    def get(self, tile_id: int) -> Tile | None:
        return self._by_id.get(tile_id)

    def victory_tiles(self) -> list[Tile]:
        """Victory tiles in insertion order."""
        return list(self._victory_tiles)

    def starting_tile(self) -> Tile:
        """
        Get the starting tile.

        A tile categorised as "start" wins; otherwise the tile with ID 0.
        The whole board is scanned before giving up.
        """
        for tile in self._tiles:
            if tile.category.lower() == START_CATEGORY:
                return tile

        fallback = self._by_id.get(MOVE_TO_START_TILE_ID)
        if fallback is not None:
            return fallback

        raise BoardConfigurationError("You don't have a starting tile")

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __contains__(self, tile: object) -> bool:
        return isinstance(tile, Tile) and self._by_id.get(tile.tile_id) is tile
