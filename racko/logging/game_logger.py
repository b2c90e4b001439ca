"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from racko.config import GameLogConfig
from racko.models.deck import Deck
from racko.models.player import Player, TurnRecord

from .formatters import format_tray, format_trays


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Log settings; output_path is the JSONL file. A disabled
                or missing config writes nothing.
        """
        self.config = config or GameLogConfig()
        self.events_written = 0
        self._file: TextIO | None = None

    @property
    def path(self) -> Path | None:
        if not self.config.enabled or not self.config.output_path:
            return None
        return Path(self.config.output_path)

    def __enter__(self) -> "GameLogger":
        path = self.path
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = path.open("a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        # One flushed line per event
        if self._file is None:
            return
        self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
        self._file.flush()
        self.events_written += 1

    def log_session_start(self, players: list[Player], card_count: int, slot_count: int) -> None:
        """Log session start with roster and deck geometry."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "card_count": card_count,
            "slot_count": slot_count,
            "players": [
                {"id": p.player_id, "name": p.name, "automated": p.is_automated}
                for p in players
            ],
        })

    def log_game_start(self, game_num: int, players: list[Player], deck: Deck) -> None:
        """Log game start with the dealt trays.

        Args:
            game_num: Game number.
            players: Players in turn order.
            deck: Deck after dealing.
        """
        self._write({
            "type": "game_start",
            "game": game_num,
            "order": [p.player_id for p in players],
            "trays": format_trays(players),
            "discard_top": deck.top_discard_value(),
            "draw_pile": deck.draw_pile_size(),
        })

    def log_turn(
        self,
        game_num: int,
        turn_num: int,
        player: Player,
        record: TurnRecord,
        deck: Deck,
    ) -> None:
        """Log a single completed turn.

        Args:
            game_num: Game number.
            turn_num: Turn number within the game.
            player: Player who took the turn.
            record: What the player did.
            deck: Deck after the turn.
        """
        self._write({
            "type": "turn",
            "game": game_num,
            "turn": turn_num,
            "player": player.player_id,
            "source": record.source.value,
            "drawn": record.drawn_value,
            "tray_index": record.tray_index,
            "discarded": record.discarded_value,
            "tray": format_tray(player.tray),
            "discard_top": deck.top_discard_value(),
            "draw_pile": deck.draw_pile_size(),
        })

    def log_reshuffle(self, game_num: int, turn_num: int, deck: Deck) -> None:
        """Log the discard pile being recycled into the draw pile."""
        self._write({
            "type": "reshuffle",
            "game": game_num,
            "turn": turn_num,
            "draw_pile": deck.draw_pile_size(),
            "discard_top": deck.top_discard_value(),
        })

    def log_game_end(self, game_num: int, turns: int, winner: Player) -> None:
        """Log game end with the winning tray."""
        self._write({
            "type": "game_end",
            "game": game_num,
            "turns": turns,
            "winner": winner.player_id,
            "tray": format_tray(winner.tray),
        })
