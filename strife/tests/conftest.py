"""
Pytest fixtures for Strife tests.
"""

import json
import random

import pytest

from ..engine_core.board import TileGraph
from ..engine_core.decks import CardDeckSet
from ..engine_core.die import Die
from ..engine_core.interfaces import DecisionProvider, PresentationNotifier
from ..engine_core.state import PlayerState
from ..engine_core.turns import TurnController
from ..source_schema.records import BoardSource


def tile(tile_id, category, next_ids=(), victory=False):
    """Board record with dummy layout."""
    return {
        "ID": tile_id,
        "type": category,
        "x_coord": tile_id * 10,
        "y_coord": 0,
        "width": 10,
        "height": 10,
        "victory": victory,
        "next": list(next_ids),
    }


# 0 -> 1 -> 2 -> 3 -+-> 4 -> 5* -> 7 -> 1
#                   +-> 6 ------> 7
BOARD_DATA = {
    "path": [
        tile(0, "start", [1]),
        tile(1, "green", [2]),
        tile(2, "red", [3]),
        tile(3, "blue", [4, 6]),
        tile(4, "green", [5]),
        tile(5, "red", [7], victory=True),
        tile(6, "blue", [7]),
        tile(7, "green", [1]),
    ]
}


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class ScriptedDecisions(DecisionProvider):
    """
    Answers from queues, falling back to the first option.

    Everything passed to inform() is kept in messages.
    """

    def __init__(self, paths=(), options=(), players=(), buy=False, restart=False):
        self.paths = list(paths)
        self.options = list(options)
        self.players = list(players)
        self.buy = buy
        self.restart = restart
        self.messages = []
        self.option_prompts = []
        self.player_candidates = []
        self.purchase_offers = 0

    def choose_path(self, tiles):
        return self.paths.pop(0) if self.paths else None

    def choose_option(self, prompt, descriptions):
        self.option_prompts.append(list(descriptions))
        return self.options.pop(0) if self.options else None

    def choose_player(self, prompt, players):
        self.player_candidates.append(list(players))
        return self.players.pop(0) if self.players else None

    def confirm_victory_purchase(self, player, cost):
        self.purchase_offers += 1
        return self.buy

    def confirm_restart_or_exit(self, winner):
        return self.restart

    def inform(self, message):
        self.messages.append(message)


class RecordingNotifier(PresentationNotifier):
    """Keeps every notification for assertions."""

    def __init__(self):
        self.positions = []
        self.victory_tiles = []
        self.stats_changes = 0
        self.turns = []
        self.errors = []

    def on_player_position_changed(self, player):
        self.positions.append((player, player.current_tile))

    def on_victory_tile_changed(self, tile):
        self.victory_tiles.append(tile)

    def on_player_stats_changed(self):
        self.stats_changes += 1

    def on_turn_changed(self, player):
        self.turns.append(player)

    def on_error(self, message):
        self.errors.append(message)


class PinnedRandom(random.Random):
    """
    random.Random whose random() returns pinned values.

    Integer draws (die, shuffles, choice) stay seeded and unaffected.
    """

    def __init__(self, values=(), seed=0):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()


@pytest.fixture
def board_data():
    return json.loads(json.dumps(BOARD_DATA))


@pytest.fixture
def board(board_data) -> TileGraph:
    return TileGraph.from_source(BoardSource.model_validate(board_data))


@pytest.fixture
def board_file(tmp_path, board_data):
    return write_json(tmp_path / "path.json", board_data)


@pytest.fixture
def decisions() -> ScriptedDecisions:
    return ScriptedDecisions()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def rng():
    return PinnedRandom(seed=1234)


@pytest.fixture
def players(board):
    start = board.starting_tile()
    return [
        PlayerState(name=name, country=country, current_tile=start)
        for name, country in [
            ("Test Player 1", "netherlands"),
            ("Test Player 2", "morocco"),
            ("Test Player 3", "friesland"),
            ("Test Player 4", "hungary"),
        ]
    ]


@pytest.fixture
def game(players, board, decisions, notifier, rng) -> TurnController:
    """A started 4-player game with empty decks and a d6."""
    turns = TurnController(
        players,
        board,
        Die(6, rng=rng),
        CardDeckSet(rng=rng),
        decisions=decisions,
        notifier=notifier,
        rng=rng,
        win_points=3,
    )
    turns.start()
    return turns
