"""
Strife CLI - Command-line interface for the engine.

Usage:
    strife play [options]            Play a game in the terminal
    strife validate-board <file>     Check a board source
    strife validate-cards <file>     Check a card source
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from .config import (
    COUNTRIES,
    DEFAULT_DIE_FACES,
    DEFAULT_PLAYERS,
    DEFAULT_WIN_POINTS,
    GameSettings,
    PlayerSetup,
)
from .engine_core.interfaces import DecisionProvider, PresentationNotifier
from .source_schema.validation import SourceError, SourceMalformedError


class ConsoleDecisions(DecisionProvider):
    """Asks the players through stdin."""

    def __init__(self, input_fn=None, output_fn=None):
        self.input = input_fn or input
        self.output = output_fn or print

    def _pick(self, prompt, labels):
        self.output(prompt)
        for i, label in enumerate(labels, start=1):
            self.output(f"  {i}) {label}")
        answer = self.input("> ").strip()
        if not answer.isdigit():
            return None
        return int(answer) - 1

    def _confirm(self, prompt):
        return self.input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")

    def choose_path(self, tiles):
        return self._pick("Choose a path:", [f"Tile {t.tile_id} ({t.category})" for t in tiles])

    def choose_option(self, prompt, descriptions):
        return self._pick(prompt, descriptions)

    def choose_player(self, prompt, players):
        return self._pick(prompt, [p.name for p in players])

    def confirm_victory_purchase(self, player, cost):
        return self._confirm(f"{player.name}, buy a Victory Point for {cost} gold?")

    def confirm_restart_or_exit(self, winner):
        self.output(f"{winner.name} has won the game!")
        return self._confirm("Restart the game?")

    def inform(self, message):
        self.output(message)


class ConsoleNotifier(PresentationNotifier):
    """Prints what changed."""

    def __init__(self, output_fn=None):
        self.output = output_fn or print

    def on_player_position_changed(self, player):
        self.output(f"{player.name} is on tile {player.current_tile.tile_id} ({player.category})")

    def on_victory_tile_changed(self, tile):
        self.output(f"The victory tile is now tile {tile.tile_id}")

    def on_turn_changed(self, player):
        self.output(
            f"\n--- {player.name}'s turn: {player.resources} gold, "
            f"income {player.income}, {player.victory_points} VP ---"
        )

    def on_error(self, message):
        self.output(f"Error: {message}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Strife - Board Game Rules Engine",
        prog="strife",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--players", type=int, default=DEFAULT_PLAYERS, help="Number of players")
    play_parser.add_argument("--die-faces", type=int, default=DEFAULT_DIE_FACES, help="Faces on the die")
    play_parser.add_argument("--win-points", type=int, default=DEFAULT_WIN_POINTS, help="Victory points to win")
    play_parser.add_argument(
        "--name", action="append", default=[], metavar="NAME[:COUNTRY]",
        help=f"Player name and country ({', '.join(COUNTRIES)}), repeat per player",
    )
    play_parser.add_argument("--board", help="Board JSON file")
    play_parser.add_argument("--cards", help="Cards JSON file")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--max-turns", type=int, help="Stop after this many turns")

    # Validate commands
    board_parser = subparsers.add_parser("validate-board", help="Check a board source")
    board_parser.add_argument("board_file", help="Path to board JSON file")

    cards_parser = subparsers.add_parser("validate-cards", help="Check a card source")
    cards_parser.add_argument("cards_file", help="Path to cards JSON file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            cmd_play(args)
        elif args.command == "validate-board":
            cmd_validate_board(args)
        elif args.command == "validate-cards":
            cmd_validate_cards(args)
        else:
            parser.print_help()
            sys.exit(1)
    except SourceError as e:
        _fatal(e)


def _fatal(error):
    print(f"Error: {error}")
    if isinstance(error, SourceMalformedError):
        for detail in error.errors:
            print(f"  - {detail}")
    sys.exit(1)


def _parse_seat(value):
    name, _, country = value.partition(":")
    return PlayerSetup(name=name.strip(), country=country.strip())


def build_settings(args):
    """Turn play arguments into validated GameSettings."""
    fields = {
        "num_players": args.players,
        "die_faces": args.die_faces,
        "win_points": args.win_points,
        "players": [_parse_seat(v) for v in args.name],
        "seed": args.seed,
    }
    if args.board:
        fields["board_path"] = args.board
    if args.cards:
        fields["cards_path"] = args.cards
    return GameSettings(**fields)


def cmd_play(args):
    """Play in the terminal."""
    from .session import run_game

    try:
        settings = build_settings(args)
    except ValidationError as e:
        print("Invalid settings:")
        for err in e.errors():
            print(f"  - {err['msg']}")
        sys.exit(1)

    decisions = ConsoleDecisions()

    def wait_for_roll(result):
        if result.success and result.card is not None:
            print(f"{result.player.name} rolled {result.roll} and drew: {result.card.description}")
        if not result.game_over:
            input("Press Enter to roll...")

    session = run_game(
        settings,
        decisions,
        ConsoleNotifier(),
        max_turns=args.max_turns,
        on_turn=wait_for_roll,
    )

    print("\nFinal standings:")
    for player in sorted(session.players, key=lambda p: (-p.victory_points, -p.resources)):
        print(f"  {player.name}: {player.victory_points} VP, {player.resources} gold")


def cmd_validate_board(args):
    """Validate a board source."""
    from .engine_core.board import TileGraph

    print(f"Validating: {args.board_file}")
    board = TileGraph.load(args.board_file)
    start = board.starting_tile()
    print(f"Tiles: {len(board)}")
    print(f"Starting tile: {start.tile_id}")
    print(f"Victory tiles: {[t.tile_id for t in board.victory_tiles()]}")


def cmd_validate_cards(args):
    """Validate a card source."""
    from .engine_core.decks import CardDeckSet

    print(f"Validating: {args.cards_file}")
    decks = CardDeckSet.load(args.cards_file)
    for category in sorted(decks.categories()):
        print(f"  {category}: {decks.count(category)} card(s)")


if __name__ == "__main__":
    main()
