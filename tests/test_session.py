"""Tests for the session turn controller."""

import random

import pytest

from racko.config import GameConfig
from racko.errors import ConfigurationError, IllegalMoveError
from racko.game import GameSession
from racko.game.session import DRAW_HINT, SWAP_HINT
from racko.models.card import Card
from racko.models.deck import PileSource
from racko.models.game_state import TurnPhase, UpdateKind
from racko.models.player import Player

STANDARD = GameConfig(card_count=60, slot_count=10)


class StackedRandom(random.Random):
    """Arranges the new deck in a fixed order; leaves player order alone."""

    def __init__(self, order: list[int]):
        super().__init__(0)
        self.order = order

    def shuffle(self, x, *args, **kwargs):
        if x and isinstance(x[0], Card):
            x.sort(key=lambda c: self.order.index(c.value))


def ai_session(seed: int = 1234, count: int = 3) -> GameSession:
    roster = [(f"Bot{i}", True) for i in range(count)]
    return GameSession(roster, STANDARD, rng=random.Random(seed))


def human_session(seed: int = 99) -> GameSession:
    return GameSession([("Alice", False), ("Bob", False)], STANDARD, rng=random.Random(seed))


class TestSetup:
    """Tests for session construction."""

    def test_roster(self):
        """Test building players from (name, automated) pairs."""
        session = GameSession([("Alice", False), ("Bot", True)], STANDARD)
        assert [p.name for p in session.players] == ["Alice", "Bot"]
        assert [p.is_automated for p in session.players] == [False, True]
        assert [p.player_id for p in session.players] == [0, 1]
        assert session.phase == TurnPhase.SETUP

    def test_accepts_players(self):
        """Test passing ready-made players."""
        players = [Player(player_id=0, name="A"), Player(player_id=1, name="B", is_automated=True)]
        session = GameSession(players, STANDARD)
        assert session.players[1] is players[1]

    def test_too_few_players(self):
        """Test that a single player is rejected."""
        with pytest.raises(ConfigurationError):
            GameSession([("Solo", False)], STANDARD)

    def test_too_few_cards(self):
        """Test that the deck must cover every tray plus two cards."""
        with pytest.raises(ConfigurationError):
            GameSession([("A", False), ("B", False)], GameConfig(card_count=21, slot_count=10))
        GameSession([("A", False), ("B", False)], GameConfig(card_count=22, slot_count=10))

    def test_no_current_player_before_game(self):
        """Test that nobody acts before the first deal."""
        session = human_session()
        assert session.current_player is None
        with pytest.raises(IllegalMoveError):
            session.draw_from_draw_pile()


class TestBeginGame:
    """Tests for begin_game."""

    def test_deals_every_tray(self):
        """Test that every player gets a full tray and the deck is consistent."""
        session = ai_session()
        assert session.begin_game() is None

        assert all(p.tray.slot_count == 10 for p in session.players)
        assert session.deck.draw_pile_size() == 60 - 1 - 30
        assert session.card_inventory() == list(range(1, 61))

    def test_first_turn(self):
        """Test that the first player in the shuffled order starts."""
        session = human_session()
        session.begin_game()
        assert session.phase == TurnPhase.AWAITING_DRAW
        assert session.state.current_player == 0
        assert session.current_player is session.players[0]
        assert session.state.turn_number == 1
        assert session.state.game_number == 1

    def test_immediate_win(self):
        """Test that a tray dealt in order ends the game before any turn."""
        # Top card 10 is turned up; the first player is dealt 3, 2, 1 from the top down
        rng = StackedRandom([4, 5, 6, 7, 8, 9, 1, 2, 3, 10])
        session = GameSession(
            [("Alice", False), ("Bob", False)],
            GameConfig(card_count=10, slot_count=3),
            rng=rng,
        )
        winners = []
        session.set_callbacks(on_game_end=winners.append)

        winner = session.begin_game()

        assert winner is session.players[0]
        assert winner.name == "Alice"
        assert winner.tray.values() == [1, 2, 3]
        assert session.phase == TurnPhase.GAME_OVER
        assert session.winner is winner
        assert session.state.turn_number == 0
        assert winners == [winner]
        with pytest.raises(IllegalMoveError):
            session.draw_from_draw_pile()

    def test_new_game_resets(self):
        """Test that a new game redeals from a full deck."""
        session = ai_session()
        session.begin_game()
        for _ in range(20):
            session.step()

        session.begin_game()
        assert session.state.game_number == 2
        assert all(p.held_card is None for p in session.players)
        assert session.card_inventory() == list(range(1, 61))


class TestHumanTurn:
    """Tests for the two-step human turn."""

    def test_draw_then_discard(self):
        """Test a turn that throws the drawn card away."""
        session = human_session()
        session.begin_game()
        player = session.current_player
        tray_before = player.tray.values()

        card = session.draw_from_draw_pile()
        assert session.phase == TurnPhase.AWAITING_SWAP_CHOICE
        assert player.held_card is card

        session.discard_held_card()
        assert player.held_card is None
        assert player.tray.values() == tray_before
        assert session.deck.top_discard_value() == card.value
        assert session.phase == TurnPhase.AWAITING_DRAW
        assert session.current_player is session.players[1]
        assert session.state.turn_number == 2

    def test_draw_discard_pile_then_swap(self):
        """Test taking the discard card into the tray."""
        session = human_session()
        session.begin_game()
        player = session.current_player
        top = session.deck.top_discard_value()
        replaced = player.tray.value_at(4)

        session.draw_from_discard_pile()
        assert session.swap(4) is True

        assert player.tray.value_at(4) == top
        assert session.deck.top_discard_value() == replaced
        assert session.card_inventory() == list(range(1, 61))

    def test_swap_bad_index(self):
        """Test that an out-of-range slot is reported and the turn continues."""
        session = human_session()
        session.begin_game()
        messages = []
        session.set_callbacks(on_message=messages.append)
        player = session.current_player

        card = session.draw_from_draw_pile()
        assert session.swap(10) is False

        assert session.phase == TurnPhase.AWAITING_SWAP_CHOICE
        assert player.held_card is card
        assert any("not in the tray" in m for m in messages)

        session.discard_held_card()
        assert session.phase == TurnPhase.AWAITING_DRAW

    def test_swap_before_draw(self):
        """Test that swapping before drawing is refused."""
        session = human_session()
        session.begin_game()
        with pytest.raises(IllegalMoveError):
            session.swap(0)
        with pytest.raises(IllegalMoveError):
            session.discard_held_card()

    def test_draw_twice(self):
        """Test that a second draw in the same turn is refused."""
        session = human_session()
        session.begin_game()
        session.draw(PileSource.DRAW)
        with pytest.raises(IllegalMoveError):
            session.draw(PileSource.DISCARD)

    def test_automated_action_on_human_turn(self):
        """Test that a human turn cannot be emulated."""
        session = human_session()
        session.begin_game()
        with pytest.raises(IllegalMoveError):
            session.play_automated_turn()
        assert session.step() is None

    def test_human_wins(self, reverse_rng):
        """Test a swap that completes the tray."""
        # Deck reversed: 1 turned up, Bob (first after reversal) holds [3, 2]
        session = GameSession(
            [("Alice", False), ("Bob", False)],
            GameConfig(card_count=6, slot_count=2),
            rng=reverse_rng,
        )
        session.begin_game()
        bob = session.current_player
        assert bob.name == "Bob"
        assert bob.tray.values() == [3, 2]

        session.draw_from_discard_pile()
        session.swap(0)

        assert bob.tray.values() == [1, 2]
        assert session.phase == TurnPhase.GAME_OVER
        assert session.winner is bob
        assert session.state.turn_number == 1

    def test_draw_pile_recycled_at_turn_end(self, reverse_rng):
        """Test that an empty draw pile is refilled before the next turn."""
        session = GameSession(
            [("Alice", False), ("Bob", False)],
            GameConfig(card_count=8, slot_count=3),
            rng=reverse_rng,
        )
        messages = []
        session.set_callbacks(on_message=messages.append)
        session.begin_game()
        assert session.deck.draw_pile_size() == 1

        session.draw_from_draw_pile()
        assert session.deck.draw_pile_size() == 0
        session.discard_held_card()

        assert "Shuffling discard pile..." in messages
        assert session.deck.draw_pile_size() == 1
        assert session.deck.discard_pile_size() == 1
        assert session.current_player.name == "Alice"
        assert session.card_inventory() == list(range(1, 9))


class TestAutomatedTurns:
    """Tests for automated players."""

    def test_card_invariant(self):
        """Test that every card is accounted for after every turn."""
        session = ai_session()
        session.begin_game()
        for _ in range(300):
            if session.is_over:
                break
            record = session.step()
            assert record is not None
            assert session.card_inventory() == list(range(1, 61))
            assert all(p.held_card is None for p in session.players)

    def test_turn_order_is_circular(self):
        """Test that turns rotate through the fixed order."""
        session = ai_session()
        session.begin_game()
        names = [p.name for p in session.players]
        seen = []
        session.set_callbacks(on_turn_end=lambda player, record: seen.append(player.name))

        for _ in range(30):
            if session.is_over:
                break
            session.play_automated_turn()

        assert seen == [names[i % 3] for i in range(len(seen))]
        assert [p.name for p in session.players] == names

    def test_same_seed_same_game(self):
        """Test that a seeded session replays identically."""
        histories = []
        for _ in range(2):
            session = ai_session(seed=7)
            session.begin_game()
            history = []
            session.set_callbacks(on_turn_end=lambda player, record: history.append((player.name, record)))
            for _ in range(50):
                if session.is_over:
                    break
                session.step()
            histories.append(history)

        assert histories[0] == histories[1]

    def test_human_action_on_automated_turn(self):
        """Test that a human action is refused on an automated turn."""
        session = ai_session()
        session.begin_game()
        with pytest.raises(IllegalMoveError):
            session.draw_from_draw_pile()

    def test_update_notifications(self):
        """Test that an automated turn reports piles, tray and hand changes."""
        session = ai_session()
        session.begin_game()
        updates = []
        session.set_callbacks(on_update=lambda kind, player: updates.append((kind, player)))
        player = session.current_player

        session.play_automated_turn()

        kinds = [kind for kind, _ in updates]
        assert UpdateKind.PILES in kinds
        assert (UpdateKind.TRAY, player) in updates
        assert (UpdateKind.HELD_CARD, player) in updates

    def test_turn_messages(self):
        """Test the event messages of an automated turn."""
        session = ai_session()
        session.begin_game()
        messages = []
        session.set_callbacks(on_message=messages.append)
        name = session.current_player.name

        session.play_automated_turn()

        assert messages[0] == "Emulating turn..."
        assert any(m.startswith(f"{name} drew from the") for m in messages)
        assert any(m.startswith(f"{name} discarded") for m in messages)
        assert f"Ending {name}'s turn..." in messages


def fail(*args):
    raise RuntimeError("display went away")


class TestFailingCallbacks:
    """Tests that event callbacks cannot stall a session."""

    def test_swap_with_failing_callbacks(self, caplog):
        """Test that a turn still completes when every callback raises."""
        session = human_session()
        session.begin_game()
        session.set_callbacks(on_update=fail, on_message=fail, on_turn_end=fail)
        player = session.current_player

        session.draw_from_draw_pile()
        assert session.swap(0) is True

        assert player.held_card is None
        assert session.phase == TurnPhase.AWAITING_DRAW
        assert session.current_player is session.players[1]
        assert session.card_inventory() == list(range(1, 61))
        assert "Event callback failed" in caplog.text

    def test_discard_with_failing_turn_end(self):
        """Test that a raising on_turn_end does not leave the turn open."""
        session = human_session()
        session.begin_game()
        session.set_callbacks(on_turn_end=fail)

        session.draw_from_draw_pile()
        session.discard_held_card()

        assert session.phase == TurnPhase.AWAITING_DRAW
        assert session.state.turn_number == 2

    def test_failing_game_end(self, reverse_rng):
        """Test that the game is still over when on_game_end raises."""
        session = GameSession(
            [("Alice", False), ("Bob", False)],
            GameConfig(card_count=6, slot_count=2),
            rng=reverse_rng,
        )
        session.set_callbacks(on_game_end=fail)
        session.begin_game()

        session.draw_from_discard_pile()
        session.swap(0)

        assert session.phase == TurnPhase.GAME_OVER
        assert session.winner.name == "Bob"


class TestHumanPrompts:
    """Tests for the step-by-step instructions shown to human players."""

    def test_hints_follow_turn(self):
        """Test that a human is told to draw, then to pick a slot."""
        session = human_session()
        messages = []
        session.set_callbacks(on_message=messages.append)
        session.begin_game()
        name = session.current_player.name

        assert messages[-2:] == [f"{name}'s turn.", DRAW_HINT]

        session.draw_from_draw_pile()
        assert messages[-1] == SWAP_HINT

    def test_no_hints_for_computer(self):
        """Test that automated turns carry no instructions."""
        session = ai_session()
        messages = []
        session.set_callbacks(on_message=messages.append)
        session.begin_game()
        session.play_automated_turn()

        assert DRAW_HINT not in messages
        assert SWAP_HINT not in messages
