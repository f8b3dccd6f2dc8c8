"""
Dealer House Way engine.

Casino house ways are printed decision tables that differ from venue to
venue. This one does not try to reproduce a table: the dealer always
plays the strongest split whose 5-card hand strictly beats the 2-card
hand, ranked by high hand and then low hand. The same search produces the
arrangement suggested to the player at the start of a round.

To plug in a venue-exact House Way, replace the selector below with that
venue's decision tree while keeping the PlayerHands return type.
"""

from __future__ import annotations

from typing import Sequence

from .cards import Card
from .partition import PlayerHands, best_split


def set_dealer_hands(cards: Sequence[Card]) -> PlayerHands:
    """Deterministic House Way for the dealer's seven cards."""
    return best_split(cards)
