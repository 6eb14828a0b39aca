"""Die with a configurable face count."""

from __future__ import annotations
import logging
import random

logger = logging.getLogger(__name__)


class Die:
    """
    The shared die.

    Face counts below 1 degrade to a constant roll of 1.
    The last value is 0 until the first roll.
    """

    def __init__(self, faces: int, rng: random.Random | None = None):
        self.faces = faces
        self.last_value = 0
        self.rng = rng or random.Random()

    def roll(self) -> int:
        if self.faces < 1:
            self.last_value = 1
        else:
            self.last_value = self.rng.randint(1, self.faces)
        logger.debug("Rolled %s on a d%s", self.last_value, self.faces)
        return self.last_value

    def __repr__(self) -> str:
        return f"Die(faces={self.faces}, last_value={self.last_value})"
