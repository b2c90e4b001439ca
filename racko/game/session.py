"""Turn controller for a Rack-O session."""

from __future__ import annotations

import logging
import random
from typing import Callable, Sequence

from racko.config import GameConfig
from racko.errors import ConfigurationError, IllegalMoveError, IndexOutOfRangeError
from racko.logging import GameLogger
from racko.models.card import Card
from racko.models.deck import Deck, PileSource
from racko.models.game_state import GameState, TurnPhase, UpdateKind
from racko.models.player import Player, TurnRecord
from racko.strategy.base import Strategy
from racko.strategy.guide import GuideValueStrategy

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2

DRAW_HINT = "First, draw from either the draw pile or the discard pile."
SWAP_HINT = (
    "Next, choose the tray position to swap the drawn card into, "
    "or discard it without swapping."
)

RosterEntry = tuple[str, bool]


class GameSession:
    """Owns the players, the deck and the turn state machine.

    Human turns stop twice: in AWAITING_DRAW for a pile choice and in
    AWAITING_SWAP_CHOICE for a slot or a plain discard. Automated turns run
    in a single call to play_automated_turn().
    """

    def __init__(
        self,
        roster: Sequence[RosterEntry | Player],
        config: GameConfig | None = None,
        strategy: Strategy | None = None,
        rng: random.Random | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize session.

        Args:
            roster: (name, is_automated) pairs or ready-made players, in
                setup order. Names are not validated.
            config: Game configuration (uses defaults if not provided)
            strategy: Strategy for automated players
            rng: Random source for shuffles and AI thresholds (seeded from
                config.seed if not provided)
            game_logger: GameLogger instance for detailed logging
        """
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.strategy = strategy or GuideValueStrategy()
        self.game_logger = game_logger

        self.players: list[Player] = []
        for i, entry in enumerate(roster):
            if isinstance(entry, Player):
                self.players.append(entry)
            else:
                name, is_automated = entry
                self.players.append(Player(player_id=i, name=name, is_automated=is_automated))
        self._check_config()

        self.deck = Deck(self.config.card_count, self.rng)
        self.state = GameState()

        self._on_update: Callable[[UpdateKind, Player | None], None] | None = None
        self._on_message: Callable[[str], None] | None = None
        self._on_turn_end: Callable[[Player, TurnRecord], None] | None = None
        self._on_game_end: Callable[[Player], None] | None = None

        self._drawn: Card | None = None
        self._drawn_source = PileSource.DRAW

    def _check_config(self) -> None:
        num_players = len(self.players)
        if num_players < MIN_PLAYERS:
            raise ConfigurationError(
                f"Rack-O needs at least {MIN_PLAYERS} players, got {num_players}"
            )
        needed = self.config.slot_count * num_players + 2
        if self.config.card_count < needed:
            raise ConfigurationError(
                f"{num_players} players with {self.config.slot_count} slots need "
                f"at least {needed} cards, got {self.config.card_count}"
            )

    def set_callbacks(
        self,
        on_update: Callable[[UpdateKind, Player | None], None] | None = None,
        on_message: Callable[[str], None] | None = None,
        on_turn_end: Callable[[Player, TurnRecord], None] | None = None,
        on_game_end: Callable[[Player], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_update: Called after piles, a tray or a held card change
                (kind, player or None for the piles)
            on_message: Called with each human-readable event message
            on_turn_end: Called when a turn completes (player, record)
            on_game_end: Called with the winner when a game ends

        Callbacks run synchronously. An exception from one is logged and
        does not change the session state.
        """
        self._on_update = on_update
        self._on_message = on_message
        self._on_turn_end = on_turn_end
        self._on_game_end = on_game_end

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def current_player(self) -> Player | None:
        if 0 <= self.state.current_player < len(self.players):
            return self.players[self.state.current_player]
        return None

    @property
    def winner(self) -> Player | None:
        if self.state.winner is None:
            return None
        return self.players[self.state.winner]

    def begin_game(self) -> Player | None:
        """Start a new game.

        Rebuilds the deck, shuffles the turn order and deals every tray. A
        tray dealt already in order wins on the spot.

        Returns:
            The immediate winner, or None if play begins
        """
        self.state.reset_for_new_game()
        self._drawn = None

        if self.game_logger and self.state.game_number == 1:
            self.game_logger.log_session_start(
                self.players, self.config.card_count, self.config.slot_count
            )

        self._message("Initializing Rack-O deck...")
        self.deck.initialize_deck()

        self._message("Randomizing player order...")
        self.rng.shuffle(self.players)

        self._message("Initializing trays...")
        for player in self.players:
            player.initialize_tray(self.deck, self.config.slot_count)

        self._notify(UpdateKind.PILES)
        for player in self.players:
            self._notify(UpdateKind.TRAY, player)

        if self.game_logger:
            self.game_logger.log_game_start(self.state.game_number, self.players, self.deck)

        logger.info(
            f"Game {self.state.game_number} dealt, order: "
            f"{', '.join(p.name for p in self.players)}"
        )

        for index, player in enumerate(self.players):
            if player.is_winner:
                self.state.current_player = index
                self._end_game(index)
                return player

        self._message("Starting game...")
        self._start_turn(0)
        return None

    def draw_from_draw_pile(self) -> Card:
        """Draw the top card of the draw pile for the current human player."""
        return self._draw(PileSource.DRAW)

    def draw_from_discard_pile(self) -> Card:
        """Take the visible discard card for the current human player."""
        return self._draw(PileSource.DISCARD)

    def draw(self, source: PileSource) -> Card:
        return self._draw(source)

    def swap(self, tray_index: int) -> bool:
        """Swap the held card into tray_index and end the turn.

        An out-of-range index is reported and ignored; the player keeps the
        card and may choose again.

        Returns:
            True if the swap happened and the turn ended
        """
        player = self._require_turn(TurnPhase.AWAITING_SWAP_CHOICE, automated=False)
        try:
            discarded = player.swap_held_card_and_discard(self.deck, tray_index)
        except IndexOutOfRangeError as e:
            logger.warning(f"Ignoring swap for {player.name}: {e}")
            self._message(f"Position {tray_index + 1} is not in the tray.")
            return False

        self._message(
            f"{player.name} swapped the drawn card with the card at position "
            f"{tray_index + 1} in their tray."
        )
        self._message(f"{player.name} discarded a(n) {discarded.value}.")
        self._notify(UpdateKind.TRAY, player)
        self._notify(UpdateKind.HELD_CARD, player)
        self._notify(UpdateKind.PILES)

        self._end_turn(self._human_record(discarded, tray_index))
        return True

    def discard_held_card(self) -> Card:
        """Discard the held card without swapping and end the turn."""
        player = self._require_turn(TurnPhase.AWAITING_SWAP_CHOICE, automated=False)
        discarded = player.discard_held_card(self.deck)

        self._message(f"{player.name} discarded a(n) {discarded.value}.")
        self._notify(UpdateKind.HELD_CARD, player)
        self._notify(UpdateKind.PILES)

        self._end_turn(self._human_record(discarded, None))
        return discarded

    def play_automated_turn(self) -> TurnRecord:
        """Run the current automated player's whole turn."""
        player = self._require_turn(TurnPhase.AWAITING_DRAW, automated=True)

        self._message("Emulating turn...")
        record = player.emulate_turn(self.deck, self.strategy, self.rng)

        pile = "discard pile" if record.source == PileSource.DISCARD else "draw pile"
        self._message(f"{player.name} drew from the {pile}...")
        if record.swapped:
            self._message(
                f"{player.name} swapped the drawn card with the card at position "
                f"{record.tray_index + 1} in their tray."
            )
        self._message(f"{player.name} discarded a(n) {record.discarded_value}.")

        self._notify(UpdateKind.PILES)
        self._notify(UpdateKind.TRAY, player)
        self._notify(UpdateKind.HELD_CARD, player)

        self._end_turn(record)
        return record

    def step(self) -> TurnRecord | None:
        """Play the current turn if it belongs to an automated player."""
        player = self.current_player
        if self.phase != TurnPhase.AWAITING_DRAW or player is None or not player.is_automated:
            return None
        return self.play_automated_turn()

    def card_inventory(self) -> list[int]:
        """Sorted values of every card in the piles, trays and hands."""
        values = self.deck.card_values()
        for player in self.players:
            values.extend(player.card_values())
        return sorted(values)

    def _draw(self, source: PileSource) -> Card:
        player = self._require_turn(TurnPhase.AWAITING_DRAW, automated=False)
        card = player.draw(self.deck, source)
        self._drawn = card
        self._drawn_source = source
        self.state.phase = TurnPhase.AWAITING_SWAP_CHOICE

        pile = "discard pile" if source == PileSource.DISCARD else "draw pile"
        self._message(f"{player.name} drew from the {pile}...")
        self._notify(UpdateKind.PILES)
        self._notify(UpdateKind.HELD_CARD, player)
        self._message(SWAP_HINT)
        return card

    def _human_record(self, discarded: Card, tray_index: int | None) -> TurnRecord:
        drawn_value = self._drawn.value if self._drawn else 0
        self._drawn = None
        return TurnRecord(
            source=self._drawn_source,
            drawn_value=drawn_value,
            discarded_value=discarded.value,
            tray_index=tray_index,
        )

    def _require_turn(self, phase: TurnPhase, automated: bool) -> Player:
        if self.state.phase != phase:
            raise IllegalMoveError(
                f"Action needs phase {phase.value}, session is in {self.state.phase.value}"
            )
        player = self.current_player
        if player is None:
            raise IllegalMoveError("No current player")
        if player.is_automated != automated:
            kind = "automated" if player.is_automated else "human"
            raise IllegalMoveError(f"{player.name} is {kind}")
        return player

    def _start_turn(self, index: int) -> None:
        self.state.current_player = index
        self.state.turn_number += 1
        self.state.phase = TurnPhase.AWAITING_DRAW
        self._message(f"{self.players[index].name}'s turn.")
        if not self.players[index].is_automated:
            self._message(DRAW_HINT)

    def _end_turn(self, record: TurnRecord) -> None:
        index = self.state.current_player
        player = self.players[index]
        self.state.phase = TurnPhase.TURN_COMPLETE
        self._message(f"Ending {player.name}'s turn...")

        if self.game_logger:
            self.game_logger.log_turn(
                self.state.game_number, self.state.turn_number, player, record, self.deck
            )
        self._emit(self._on_turn_end, player, record)

        # Only the acting player's tray can have changed this turn
        if player.is_winner:
            self._end_game(index)
            return

        if self.deck.reset_draw_pile():
            self._message("Shuffling discard pile...")
            if self.game_logger:
                self.game_logger.log_reshuffle(
                    self.state.game_number, self.state.turn_number, self.deck
                )
            self._notify(UpdateKind.PILES)

        self._start_turn((index + 1) % len(self.players))

    def _end_game(self, index: int) -> None:
        winner = self.players[index]
        self.state.winner = index
        self.state.phase = TurnPhase.GAME_OVER
        self._message(f"{winner.name} wins with {winner.tray}!")

        if self.game_logger:
            self.game_logger.log_game_end(self.state.game_number, self.state.turn_number, winner)
        self._emit(self._on_game_end, winner)

    def _message(self, text: str) -> None:
        logger.debug(text)
        self._emit(self._on_message, text)

    def _notify(self, kind: UpdateKind, player: Player | None = None) -> None:
        self._emit(self._on_update, kind, player)

    def _emit(self, callback: Callable[..., None] | None, *args: object) -> None:
        """Call an event callback; its failures never interrupt a transition."""
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.exception(f"Event callback failed: {e}")
