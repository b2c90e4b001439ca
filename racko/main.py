"""Main entry point for console Rack-O."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from racko.config import Config, GameConfig, GameLogConfig, load_config
from racko.errors import ConfigurationError, IllegalMoveError, RackoError
from racko.game import GameSession, SleepScheduler, TurnPacer
from racko.logging import GameLogger
from racko.models.deck import PileSource
from racko.models.game_state import UpdateKind
from racko.models.player import Player
from racko.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_ROSTER = [("You", False), ("Computer", True)]


def parse_player(text: str) -> tuple[str, bool]:
    """Parse a NAME or NAME:ai roster entry."""
    name, _, kind = text.partition(":")
    return name, kind.strip().lower() in ("ai", "bot", "cpu")


def generate_log_filename(log_dir: str, roster: list[tuple[str, bool]]) -> str:
    """Generate log filename with timestamp and player names.

    Format: {ISO timestamp}_{player1}_{player2}_..._{playerN}.jsonl
    Player names are sorted alphabetically.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    player_names = "_".join(sorted(name for name, _ in roster))
    return str(Path(log_dir) / f"{timestamp}_{player_names}.jsonl")


def build_config(args: argparse.Namespace) -> Config:
    """Load config and apply command-line overrides."""
    config = load_config(args.config)

    overrides = {}
    if args.cards is not None:
        overrides["card_count"] = args.cards
    if args.slots is not None:
        overrides["slot_count"] = args.slots
    if args.delay is not None:
        overrides["ai_turn_delay"] = args.delay
    if args.seed is not None:
        overrides["seed"] = args.seed
    if overrides:
        # GameConfig is frozen; validate the merged values as a new model
        config.game = GameConfig.model_validate(config.game.model_dump() | overrides)

    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_trays:
        config.logging.show_trays = True
    return config


def prompt(text: str, choices: dict[str, object]) -> object:
    """Ask until the answer is one of choices' keys."""
    while True:
        answer = input(text).strip().lower()
        if answer in choices:
            return choices[answer]
        print(f"Please enter one of: {', '.join(choices)}")


def play_human_turn(session: GameSession, display: GameDisplay) -> None:
    """Prompt the current human player through one turn."""
    player = session.current_player
    if player is None or player.tray is None or player.is_automated:
        raise IllegalMoveError("No human player is due to act")

    display.print_tray(player)
    display.print_piles(session.deck)

    source = prompt(
        "Draw from the (d)raw pile or the (x) discard pile? ",
        {"d": PileSource.DRAW, "x": PileSource.DISCARD},
    )
    session.draw(source)
    display.print_held_card(player)

    slot_count = player.tray.slot_count
    choices: dict[str, object] = {str(i + 1): i for i in range(slot_count)}
    choices["x"] = None
    index = prompt(f"Swap into position (1-{slot_count}) or (x) discard it? ", choices)
    if index is None:
        session.discard_held_card()
    else:
        session.swap(index)


def run_session(config: Config, roster: list[tuple[str, bool]], game_logger: GameLogger) -> int:
    """Play games until the user stops."""
    display = GameDisplay(show_trays=config.logging.show_trays)
    session = GameSession(roster, config.game, game_logger=game_logger)

    def on_update(kind: UpdateKind, player: Player | None) -> None:
        if kind == UpdateKind.TRAY and player is not None and display.show_trays:
            display.print_tray(player)

    session.set_callbacks(
        on_update=on_update,
        on_message=display.print_message,
        on_game_end=lambda winner: display.print_game_end(winner, session.state.turn_number),
    )

    scheduler = SleepScheduler()
    pacer = TurnPacer(session, scheduler.schedule)

    while True:
        session.begin_game()
        display.print_game_start(session.state.game_number, session.players)

        # Start the opening automated turns without delay
        delay: float | None = 0.0
        while not session.is_over:
            pacer.resume(delay)
            scheduler.run()
            if session.is_over:
                break
            play_human_turn(session, display)
            delay = config.game.human_turn_delay

        if not prompt("New game? (y/n) ", {"y": True, "n": False}):
            return 0


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Rack-O card game")
    parser.add_argument("-c", "--config", type=Path, help="Path to config file (YAML)")
    parser.add_argument("--cards", type=int, help="Number of cards (overrides config)")
    parser.add_argument("--slots", type=int, help="Tray slots per player (overrides config)")
    parser.add_argument(
        "-P",
        "--player",
        action="append",
        metavar="NAME[:ai]",
        help="Add a player; append :ai for a computer player (repeatable)",
    )
    parser.add_argument("--delay", type=float, help="Seconds between computer turns")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--show-trays", action="store_true", help="Show computer players' trays")
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    try:
        config = build_config(args)
    except (ValueError, ConfigurationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(config.logging.level)

    roster = [parse_player(p) for p in args.player] if args.player else DEFAULT_ROSTER

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path
    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, roster)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            return run_session(config, roster, game_logger)
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        return 1
    except (EOFError, RackoError) as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
