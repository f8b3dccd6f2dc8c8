from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .cards import Card, contains_ace_or_joker
from .partition import PlayerHands, check_hands
from .ranks import Hand, HandCategory


class GameResult(str, Enum):
    PLAYER_WINS = "PLAYER_WINS"
    DEALER_WINS = "DEALER_WINS"
    PUSH = "PUSH"

    @property
    def display(self) -> str:
        return {
            GameResult.PLAYER_WINS: "Player Wins!",
            GameResult.DEALER_WINS: "Dealer Wins",
            GameResult.PUSH: "Push (Tie)",
        }[self]


def is_ace_high_pai_gow(hands: PlayerHands, seven_cards: Optional[Sequence[Card]] = None) -> bool:
    """Both hands are only High Card and the seven cards hold an Ace or the Joker."""
    cards = hands.cards if seven_cards is None else seven_cards
    both_high_card = (
        hands.high.category == HandCategory.HIGH_CARD
        and hands.low.category == HandCategory.HIGH_CARD
    )
    return both_high_card and contains_ace_or_joker(cards)


def resolve(
    player_low: Hand,
    player_high: Hand,
    dealer_low: Hand,
    dealer_high: Hand,
    dealer_cards: Optional[Sequence[Card]] = None,
) -> GameResult:
    player = PlayerHands(high=player_high, low=player_low)
    dealer = PlayerHands(high=dealer_high, low=dealer_low)
    return resolve_round(player, dealer, dealer_cards)


def resolve_round(
    player: PlayerHands,
    dealer: PlayerHands,
    dealer_cards: Optional[Sequence[Card]] = None,
) -> GameResult:
    """Settle a round. Copies go to the dealer.

    A dealer holding Ace-high Pai Gow pushes every player hand.
    """
    check_hands(player, "player")
    check_hands(dealer, "dealer")

    if is_ace_high_pai_gow(dealer, dealer_cards):
        return GameResult.PUSH

    wins_high = player.high > dealer.high
    wins_low = player.low > dealer.low
    if wins_high and wins_low:
        return GameResult.PLAYER_WINS
    if not wins_high and not wins_low:
        return GameResult.DEALER_WINS
    return GameResult.PUSH
