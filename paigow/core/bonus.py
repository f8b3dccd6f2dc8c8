from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .cards import ACE, HAND_SIZE, Card, contains_joker
from .combos import choose_split
from .partition import PlayerHands, check_hands
from .ranks import HIGH_SIZE, Hand, HandCategory, evaluate
from .rules import is_ace_high_pai_gow

ROYAL_RANKS = (10, 11, 12, 13, ACE)


@dataclass(frozen=True)
class Payout:
    label: str
    odds: Tuple[int, int]  # (pays, per)
    multiplier: int

    @property
    def payout(self) -> str:
        pays, per = self.odds
        return f"{pays} to {per}"


class FortuneBonus(Payout):
    pass


class AceHighBonus(Payout):
    pass


FIVE_ACES = FortuneBonus("Five Aces", (400, 1), 400)
ROYAL_FLUSH = FortuneBonus("Royal Straight Flush", (150, 1), 150)
STRAIGHT_FLUSH = FortuneBonus("Straight Flush", (50, 1), 50)
FOUR_OF_A_KIND = FortuneBonus("Four of a Kind", (25, 1), 25)
FULL_HOUSE = FortuneBonus("Full House", (5, 1), 5)
FLUSH = FortuneBonus("Flush", (4, 1), 4)
STRAIGHT = FortuneBonus("Straight", (3, 1), 3)
THREE_OF_A_KIND = FortuneBonus("Three of a Kind", (3, 1), 3)

BOTH_ACE_HIGH = AceHighBonus("Both Player and Dealer Ace High Pai Gow", (40, 1), 40)
DEALER_ACE_HIGH_JOKER = AceHighBonus("Dealer Ace High Pai Gow (with Joker)", (15, 1), 15)
DEALER_ACE_HIGH = AceHighBonus("Dealer Ace High Pai Gow (no Joker)", (5, 1), 5)


def best_five(cards: Sequence[Card]) -> Hand:
    """Strongest 5-card hand among the C(7,5) = 21 subsets.

    A natural royal beats a joker straight flush to the ace, which ranks
    the same, so the pick never depends on card order.
    """
    return max(
        (evaluate(five) for five, _ in choose_split(cards, HIGH_SIZE)),
        key=lambda hand: (hand.key(), is_royal(hand)),
    )


def is_royal(hand: Hand) -> bool:
    if hand.category != HandCategory.STRAIGHT_FLUSH:
        return False
    return tuple(sorted(c.val for c in hand.cards)) == ROYAL_RANKS


def fortune_payout(hand: Hand) -> Optional[FortuneBonus]:
    cat = hand.category
    if cat == HandCategory.FIVE_ACES:
        return FIVE_ACES
    if cat == HandCategory.STRAIGHT_FLUSH:
        return ROYAL_FLUSH if is_royal(hand) else STRAIGHT_FLUSH
    if cat == HandCategory.FOUR_OF_A_KIND:
        return FOUR_OF_A_KIND
    if cat == HandCategory.FULL_HOUSE:
        return FULL_HOUSE
    if cat == HandCategory.FLUSH:
        return FLUSH
    if cat == HandCategory.STRAIGHT:
        return STRAIGHT
    if cat == HandCategory.THREE_OF_A_KIND:
        return THREE_OF_A_KIND
    return None


def fortune_bonus(seven_cards: Sequence[Card]) -> Optional[FortuneBonus]:
    """Fortune side bet on the player's seven cards, however they are set."""
    if len(seven_cards) != HAND_SIZE:
        raise ValueError(f"Fortune bonus needs {HAND_SIZE} cards, got {len(seven_cards)}")
    return fortune_payout(best_five(seven_cards))


def ace_high_side_bet(
    player: PlayerHands,
    player_cards: Sequence[Card],
    dealer: PlayerHands,
    dealer_cards: Sequence[Card],
) -> Optional[AceHighBonus]:
    check_hands(player, "player")
    check_hands(dealer, "dealer")

    if not is_ace_high_pai_gow(dealer, dealer_cards):
        return None
    if is_ace_high_pai_gow(player, player_cards):
        return BOTH_ACE_HIGH
    if contains_joker(dealer_cards):
        return DEALER_ACE_HIGH_JOKER
    return DEALER_ACE_HIGH
