"""
Source Validation - Reading and validating the board and card documents.

Two fatal error kinds are distinguished:
1. The source cannot be read (missing file, permissions, bad encoding)
2. The source is malformed (invalid JSON or wrong schema)

A board whose tiles are fine but which has no starting tile is a
configuration error of its own.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .records import BoardSource, CardSource

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SourceError(Exception):
    """Base class for board and card source errors."""


class SourceUnreadableError(SourceError):
    """Raised when a source document cannot be read."""

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(message)


class SourceMalformedError(SourceError):
    """Raised when a source document is not valid JSON or has the wrong schema."""

    def __init__(self, path: str | Path, message: str, errors: list[str] | None = None):
        self.path = Path(path)
        self.errors = errors or []
        super().__init__(message)


class BoardConfigurationError(SourceError):
    """Raised when a valid board cannot be played (e.g. no starting tile)."""


def read_json(path: str | Path, label: str) -> Any:
    """Read a JSON document, mapping failures onto the two fatal kinds."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadableError(path, f"You don't have the correct {label} JSON file") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceMalformedError(
            path,
            f"Take a look at your {label} JSON file, there is an error in the file",
            errors=[str(e)],
        ) from e


def validate_model(model: Type[ModelT], data: Any, path: str | Path, label: str) -> ModelT:
    """Validate data against a record model, raising SourceMalformedError."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise SourceMalformedError(
            path,
            f"Take a look at your {label} JSON file, there is an error in the file",
            errors=errors,
        ) from e


def load_board_source(path: str | Path) -> BoardSource:
    """Read and validate a board document."""
    source = validate_model(BoardSource, read_json(path, "path"), path, "path")
    logger.debug("Loaded %s tile record(s) from %s", len(source.path), path)
    return source


def load_card_source(path: str | Path) -> CardSource:
    """Read and validate the outer shape of a card document."""
    source = validate_model(CardSource, read_json(path, "Cards"), path, "Cards")
    logger.debug("Loaded %s card record(s) from %s", len(source.cards), path)
    return source
