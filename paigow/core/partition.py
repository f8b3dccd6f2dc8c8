from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .cards import HAND_SIZE, Card, sort_desc
from .combos import choose_split
from .ranks import HIGH_SIZE, LOW_SIZE, Hand, evaluate

Split = Tuple[Tuple[Card, ...], Tuple[Card, ...]]  # (low 2, high 5)


class InvalidArrangementError(ValueError):
    """Hands handed to the resolver are not a settled 2/5 arrangement."""


@dataclass(frozen=True)
class PlayerHands:
    high: Hand
    low: Hand

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self.low.cards + self.high.cards


def generate_splits(cards: Sequence[Card]) -> List[Split]:
    """All C(7,2) = 21 ways to pull a 2-card low hand out of 7 cards."""
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Expected {HAND_SIZE} cards, got {len(cards)}")
    return [(tuple(low), tuple(high)) for low, high in choose_split(cards, LOW_SIZE)]


class RankedSplit:
    __slots__ = ("low", "high")

    def __init__(self, split: Split):
        low, high = split
        self.low: Hand = evaluate(low)
        self.high: Hand = evaluate(high)

    def foul(self) -> bool:
        # A tied high and low hand is still a playable arrangement
        return self.high < self.low

    def high_beats_low(self) -> bool:
        return self.high > self.low

    def key_house(self):
        return (self.high.key(), self.low.key())

    def hands(self) -> PlayerHands:
        return PlayerHands(high=self.high, low=self.low)


def all_ranked_splits(cards: Sequence[Card]) -> List[RankedSplit]:
    return [RankedSplit(s) for s in generate_splits(cards)]


def all_ranked_non_foul(cards: Sequence[Card]) -> List[RankedSplit]:
    return [rs for rs in all_ranked_splits(cards) if not rs.foul()]


def fallback_split(cards: Sequence[Card]) -> PlayerHands:
    """Fixed arrangement: the two lowest cards play low, the rest play high."""
    ordered = sort_desc(cards)
    return PlayerHands(high=evaluate(ordered[:HIGH_SIZE]), low=evaluate(ordered[HIGH_SIZE:]))


def best_split(cards: Sequence[Card]) -> PlayerHands:
    """Strongest split whose high hand strictly beats its low hand.

    Ranks candidates by high hand first, then low hand. The first of
    several equal candidates (in enumeration order) wins.
    """
    cand = [rs for rs in all_ranked_splits(cards) if rs.high_beats_low()]
    if not cand:
        # Can't happen with seven distinct cards from one deck
        return fallback_split(cards)
    return max(cand, key=lambda rs: rs.key_house()).hands()


def is_legal_arrangement(
    low_cards: Sequence[Card],
    high_cards: Sequence[Card],
    unassigned_count: int = 0,
) -> bool:
    """True when every card is placed 2 low / 5 high and high >= low."""
    if len(low_cards) != LOW_SIZE or len(high_cards) != HIGH_SIZE or unassigned_count != 0:
        return False
    return evaluate(high_cards) >= evaluate(low_cards)


def check_hands(hands: PlayerHands, who: str = "player") -> None:
    if len(hands.low) != LOW_SIZE or len(hands.high) != HIGH_SIZE:
        raise InvalidArrangementError(
            f"{who} arrangement must be {LOW_SIZE} low / {HIGH_SIZE} high cards, "
            f"got {len(hands.low)} / {len(hands.high)}"
        )
    if hands.high < hands.low:
        raise InvalidArrangementError(
            f"{who} low hand ({hands.low.describe()}) outranks high hand ({hands.high.describe()})"
        )
