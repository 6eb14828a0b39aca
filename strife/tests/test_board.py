"""
Tests for the tile graph.

Tests:
- Loading and successor linking
- Victory tiles
- Starting tile detection
- Source errors
"""

import random
from dataclasses import FrozenInstanceError

import pytest

from ..engine_core.board import TileGraph
from ..source_schema.records import BoardSource
from ..source_schema.validation import (
    BoardConfigurationError,
    SourceMalformedError,
    SourceUnreadableError,
)
from .conftest import tile, write_json


def build(records, rng=None):
    return TileGraph.from_source(BoardSource.model_validate({"path": records}), rng=rng)


class TestLoading:
    """Tests for loading a board source."""

    def test_load_from_file(self, board_file):
        """All tiles are loaded in order."""
        board = TileGraph.load(board_file)

        assert len(board) == 8
        assert [t.tile_id for t in board.tiles] == list(range(8))

    def test_successors_linked(self, board):
        """Next IDs resolve to the tile objects."""
        tile0, tile1, tile3 = board.get(0), board.get(1), board.get(3)

        assert tile0.next_tiles == (tile1,)
        assert [t.tile_id for t in tile3.next_tiles] == [4, 6]
        assert tile3.is_branch

    def test_dangling_successor_dropped(self):
        """Unknown successor IDs are ignored."""
        board = build([tile(0, "start", [1, 99]), tile(1, "green")])

        assert [t.tile_id for t in board.get(0).next_tiles] == [1]
        assert board.get(1).is_dead_end

    def test_missing_next_means_dead_end(self):
        """A tile without "next" has no successors."""
        record = tile(0, "start")
        del record["next"]
        board = build([record])

        assert board.get(0).next_tiles == ()

    def test_layout_passed_through(self, board):
        """Layout fields are kept untouched."""
        tile4 = board.get(4)
        assert (tile4.x, tile4.y, tile4.width, tile4.height) == (40, 0, 10, 10)

    def test_tiles_read_only(self, board):
        """Loaded tiles cannot be rewired or relabelled."""
        tile3 = board.get(3)

        assert isinstance(tile3.next_tiles, tuple)
        with pytest.raises(FrozenInstanceError):
            tile3.category = "green"
        with pytest.raises(AttributeError):
            tile3.next_tiles = ()
        assert [t.tile_id for t in tile3.next_tiles] == [4, 6]

    def test_contains(self, board):
        """Only the graph's own tile objects are members."""
        assert board.get(2) in board
        assert build([tile(2, "red")]).get(2) not in board


class TestVictoryTiles:
    """Tests for the victory subset."""

    def test_victory_tiles(self, board):
        """Flagged tiles are returned in insertion order."""
        victory = board.victory_tiles()

        assert [t.tile_id for t in victory] == [5]
        assert all(t.victory for t in victory)

    def test_fallback_when_none_flagged(self):
        """Without flagged tiles a random board tile is used."""
        board = build(
            [tile(0, "start", [1]), tile(1, "green", [2]), tile(2, "red")],
            rng=random.Random(3),
        )

        victory = board.victory_tiles()
        assert len(victory) == 1
        assert victory[0] in board


class TestStartingTile:
    """Tests for starting tile detection."""

    def test_start_category(self, board):
        """The tile categorised as start is returned."""
        assert board.starting_tile().category == "start"

    def test_start_not_first(self):
        """The whole board is scanned for the start tile."""
        board = build([tile(5, "green", [7]), tile(7, "Start", [5])])

        assert board.starting_tile().tile_id == 7

    def test_start_preferred_over_id_zero(self):
        """A start tile wins over tile 0."""
        board = build([tile(0, "green", [3]), tile(3, "start", [0])])

        assert board.starting_tile().tile_id == 3

    def test_fallback_to_id_zero(self):
        """Tile 0 is used when nothing is categorised as start."""
        board = build([tile(4, "red", [0]), tile(0, "green", [4])])

        assert board.starting_tile().tile_id == 0

    def test_no_start_tile(self):
        """No start tile and no tile 0 is a configuration error."""
        board = build([tile(1, "green", [2]), tile(2, "red")])

        with pytest.raises(BoardConfigurationError):
            board.starting_tile()


class TestSourceErrors:
    """Tests for unreadable and malformed sources."""

    def test_missing_file(self, tmp_path):
        """A missing file is unreadable."""
        with pytest.raises(SourceUnreadableError):
            TileGraph.load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Broken JSON is malformed."""
        path = tmp_path / "path.json"
        path.write_text('{"path": [', encoding="utf-8")

        with pytest.raises(SourceMalformedError):
            TileGraph.load(path)

    def test_missing_field(self, tmp_path):
        """A tile without an ID is malformed and the error names the field."""
        record = tile(0, "start")
        del record["ID"]
        path = write_json(tmp_path / "path.json", {"path": [record]})

        with pytest.raises(SourceMalformedError) as exc_info:
            TileGraph.load(path)
        assert any("ID" in e for e in exc_info.value.errors)

    def test_missing_path_key(self, tmp_path):
        """The document must have a path array."""
        path = write_json(tmp_path / "path.json", {"tiles": []})

        with pytest.raises(SourceMalformedError):
            TileGraph.load(path)
