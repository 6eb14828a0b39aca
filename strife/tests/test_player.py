"""
Tests for player state and movement.
"""

import pytest

from ..engine_core.board import TileGraph
from ..engine_core.cards import Card
from ..engine_core.state import ActiveEffect, ActiveEffectRegistry, PlayerState, _clamp_index
from ..source_schema.records import BoardSource
from .conftest import tile


class TestResources:
    """Tests for resource and income bookkeeping."""

    def test_starting_values(self, players):
        player = players[0]
        assert (player.resources, player.income, player.victory_points) == (500, 50, 0)

    def test_clamped_at_zero(self, players):
        player = players[0]
        player.adjust_resources(-501)
        assert player.resources == 0

        player.set_resources(-10)
        assert player.resources == 0

    def test_get_paid(self, players):
        player = players[0]
        player.adjust_income(25)
        player.get_paid()
        assert player.resources == 575

    def test_negative_income_payment_clamped(self, players):
        player = players[0]
        player.resources = 10
        player.income = -100
        player.get_paid()
        assert player.resources == 0

    def test_identity_comparison(self, players):
        """Players with identical fields are still distinct."""
        first = players[0]
        twin = type(first)(name=first.name, country=first.country, current_tile=first.current_tile)
        assert twin != first


@pytest.mark.parametrize("choice, size, expected", [
    (None, 3, 0),
    (0, 3, 0),
    (2, 3, 2),
    (3, 3, 0),
    (-1, 3, 0),
    (1, 2, 1),
])
def test_clamp_index(choice, size, expected):
    assert _clamp_index(choice, size) == expected


class TestMove:
    """Tests for walking the tile graph."""

    def test_straight_walk(self, players, board, decisions):
        player = players[0]
        visited = player.move(2, decisions)

        assert [t.tile_id for t in visited] == [1, 2]
        assert player.current_tile is board.get(2)
        assert player.remaining_steps == 0

    def test_steps_bonus_added(self, players, decisions):
        player = players[0]
        player.add_steps_bonus(2)

        visited = player.move(1, decisions)

        assert [t.tile_id for t in visited] == [1, 2, 3]

    def test_branch_choice(self, players, board, decisions):
        """The provider picks the successor at a branch."""
        player = players[0]
        player.current_tile = board.get(2)
        decisions.paths = [1]

        visited = player.move(2, decisions)

        assert [t.tile_id for t in visited] == [3, 6]

    def test_branch_default(self, players, board, decisions):
        """No or invalid selection takes the first successor."""
        player = players[0]
        player.current_tile = board.get(3)
        decisions.paths = [9]

        player.move(1, decisions)

        assert player.current_tile is board.get(4)

    def test_no_prompt_without_branch(self, players, decisions):
        """Single successors never ask."""
        player = players[0]
        decisions.paths = [1]

        player.move(2, decisions)

        assert decisions.paths == [1]

    def test_dead_end_stops(self, board, decisions):
        """Movement ends on a tile without successors."""
        dead_end = TileGraph.from_source(BoardSource.model_validate({"path": [
            tile(0, "start", [1]), tile(1, "green"),
        ]}))
        player = PlayerState(name="Solo", country="", current_tile=dead_end.get(0))

        visited = player.move(5, decisions)

        assert visited == [dead_end.get(1)]
        assert player.current_tile is dead_end.get(1)

    def test_on_step_stops_movement(self, players, decisions):
        """A truthy on_step result ends the walk."""
        player = players[0]
        seen = []

        def stop_on_two(p):
            seen.append(p.current_tile.tile_id)
            return p.current_tile.tile_id == 2

        visited = player.move(5, decisions, on_step=stop_on_two)

        assert seen == [1, 2]
        assert [t.tile_id for t in visited] == [1, 2]
        assert player.remaining_steps == 0

    def test_loop_back(self, players, board, decisions):
        """The board loops from tile 7 back to tile 1."""
        player = players[0]
        player.current_tile = board.get(7)

        player.move(1, decisions)

        assert player.current_tile is board.get(1)


class TestActiveEffectRegistry:
    """Tests for countdown and countup."""

    def effect(self, ticks):
        return ActiveEffect(card=Card.timed("x", 1, "incomeChange"), ticks_remaining=ticks)

    def test_countdown_evicts_in_order(self):
        registry = ActiveEffectRegistry()
        first, second, third = self.effect(1), self.effect(2), self.effect(1)
        for effect in (first, second, third):
            registry.add(effect)

        expired = registry.countdown()

        assert expired == [first, third]
        assert list(registry) == [second]
        assert second.ticks_remaining == 1

    def test_countup(self):
        registry = ActiveEffectRegistry()
        effect = self.effect(2)
        registry.add(effect)

        registry.countup()
        registry.countdown()

        assert effect.ticks_remaining == 2
        assert len(registry) == 1
