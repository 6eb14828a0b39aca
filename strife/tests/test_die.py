"""
Tests for the die.
"""

import random

import pytest

from ..engine_core.die import Die


class TestDie:
    """Tests for rolling."""

    def test_initial_value(self):
        """The last value is 0 before the first roll."""
        assert Die(6).last_value == 0

    @pytest.mark.parametrize("faces", [1, 2, 6, 10])
    def test_roll_in_range(self, faces):
        """Rolls stay within [1, faces]."""
        die = Die(faces, rng=random.Random(faces))
        values = {die.roll() for _ in range(300)}

        assert min(values) >= 1
        assert max(values) <= faces

    def test_all_faces_reachable(self):
        """Every face of a d6 comes up eventually."""
        die = Die(6, rng=random.Random(0))
        assert {die.roll() for _ in range(500)} == {1, 2, 3, 4, 5, 6}

    @pytest.mark.parametrize("faces", [0, -1, -10])
    def test_degenerate_faces(self, faces):
        """Fewer than one face always rolls 1."""
        die = Die(faces)
        assert all(die.roll() == 1 for _ in range(50))

    def test_roll_stores_last_value(self):
        """roll() stores its result."""
        die = Die(6, rng=random.Random(5))
        value = die.roll()

        assert die.last_value == value

    def test_change_faces(self):
        """A face change applies to the next roll."""
        die = Die(6, rng=random.Random(9))
        die.faces = 1

        assert die.roll() == 1
        assert die.faces == 1
