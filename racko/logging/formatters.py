"""Formatters for game log output."""

from racko.models.card import Card
from racko.models.player import Player
from racko.models.tray import Tray


def format_card(card: Card | None) -> str:
    """Format a single card to string.

    Args:
        card: Card to format, or None for an empty hand.

    Returns:
        The card value (e.g., "17"), or "" for None.
    """
    if card is None:
        return ""
    return str(card.value)


def format_tray(tray: Tray | None) -> str:
    """Format a tray to a comma-separated string, bottom slot first.

    Args:
        tray: Tray to format.

    Returns:
        Comma-separated values (e.g., "3,12,40"). Empty string if no tray.
    """
    if tray is None:
        return ""
    return ",".join(str(v) for v in tray.values())


def format_trays(players: list[Player]) -> dict[str, str]:
    """Format all players' trays to dict.

    Args:
        players: Players in turn order.

    Returns:
        Dict mapping player_id (as string) to formatted tray string.
    """
    return {str(p.player_id): format_tray(p.tray) for p in players}
