"""
Configuration - Environment settings, rule constants and game settings.

Environment:
    STRIFE_DATA_DIR     Directory holding the board and card sources
    STRIFE_BOARD_FILE   Board source file name (default: path1.json)
    STRIFE_CARDS_FILE   Card source file name (default: cards1.json)
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# Environment configuration
STRIFE_DATA_DIR = Path(os.getenv("STRIFE_DATA_DIR", Path(__file__).parent / "data"))
STRIFE_BOARD_FILE = os.getenv("STRIFE_BOARD_FILE", "path1.json")
STRIFE_CARDS_FILE = os.getenv("STRIFE_CARDS_FILE", "cards1.json")

# Rules
STARTING_RESOURCES = 500
STARTING_INCOME = 50
VICTORY_POINT_COST = 1000
START_CATEGORY = "start"
MOVE_TO_START_TILE_ID = 0

# Settings defaults and ranges
DEFAULT_PLAYERS = 4
DEFAULT_DIE_FACES = 6
DEFAULT_WIN_POINTS = 3
MIN_PLAYERS, MAX_PLAYERS = 2, 4
MIN_DIE_FACES, MAX_DIE_FACES = 3, 10
MIN_WIN_POINTS, MAX_WIN_POINTS = 1, 10

# Seat nationalities, in default seat order
COUNTRIES = (
    "Netherlands", "Morocco", "Friesland", "Hungary",
    "Iran", "Turkiye", "Ethiopia", "France",
)


def default_board_path() -> Path:
    return STRIFE_DATA_DIR / STRIFE_BOARD_FILE


def default_cards_path() -> Path:
    return STRIFE_DATA_DIR / STRIFE_CARDS_FILE


class PlayerSetup(BaseModel):
    """
    Name and nationality of one seat.

    Both may be left empty; GameSettings fills in "Player N" and the
    seat's default country.
    """
    name: str = ""
    country: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("country")
    @classmethod
    def known_country(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        for country in COUNTRIES:
            if country.lower() == value.strip().lower():
                return country
        raise ValueError(f"Unknown country {value!r}, choose one of: {', '.join(COUNTRIES)}")


class GameSettings(BaseModel):
    """Settings chosen before a game starts."""
    num_players: int = Field(DEFAULT_PLAYERS, ge=MIN_PLAYERS, le=MAX_PLAYERS)
    die_faces: int = Field(DEFAULT_DIE_FACES, ge=MIN_DIE_FACES, le=MAX_DIE_FACES)
    win_points: int = Field(DEFAULT_WIN_POINTS, ge=MIN_WIN_POINTS, le=MAX_WIN_POINTS)
    players: list[PlayerSetup] = Field(default_factory=list)
    seed: Optional[int] = None
    board_path: Path = Field(default_factory=default_board_path)
    cards_path: Path = Field(default_factory=default_cards_path)

    @model_validator(mode="after")
    def check_players(self) -> GameSettings:
        seats = self.players or [PlayerSetup() for _ in range(self.num_players)]
        if len(seats) != self.num_players:
            raise ValueError(
                f"Expected {self.num_players} players, got {len(seats)}"
            )

        # Seat i defaults to "Player i+1" from COUNTRIES[i]; names may repeat
        self.players = [
            PlayerSetup(
                name=seat.name or f"Player {i + 1}",
                country=seat.country or COUNTRIES[i],
            )
            for i, seat in enumerate(seats)
        ]
        countries = [seat.country for seat in self.players]
        if len(set(countries)) != len(countries):
            raise ValueError("Each country must be unique")
        return self
