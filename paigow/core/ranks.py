from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .cards import ACE, VAL_TO_RANK, Card


class HandCategory(IntEnum):
    """Hand categories, weakest first."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    FIVE_ACES = 9

    @property
    def display(self) -> str:
        return CATEGORY_NAMES[self]


CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FIVE_ACES: "Five Aces",
}

HIGH_SIZE = 5
LOW_SIZE = 2

# Legal 5-rank windows, highest first. The wheel (A-2-3-4-5) plays 5-high.
STRAIGHT_WINDOWS: List[Tuple[FrozenSet[int], int]] = [
    (frozenset(range(top - 4, top + 1)), top) for top in range(ACE, 5, -1)
]
STRAIGHT_WINDOWS.append((frozenset((ACE, 2, 3, 4, 5)), 5))

Tiebreakers = Tuple[int, ...]


@total_ordering
@dataclass(frozen=True, eq=False)
class Hand:
    cards: Tuple[Card, ...]
    category: HandCategory
    tiebreakers: Tiebreakers  # compared element-wise, most significant first

    def key(self) -> Tuple[int, Tiebreakers]:
        return (int(self.category), self.tiebreakers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.key() == other.key()

    def __lt__(self, other: "Hand") -> bool:
        return self.key() < other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __len__(self) -> int:
        return len(self.cards)

    def describe(self) -> str:
        name = self.category.display
        if self.category in (HandCategory.HIGH_CARD, HandCategory.FLUSH, HandCategory.FIVE_ACES):
            return name
        if self.category == HandCategory.TWO_PAIR:
            hi, lo = self.tiebreakers
            return f"{name}, {VAL_TO_RANK[hi]}s and {VAL_TO_RANK[lo]}s"
        top = VAL_TO_RANK.get(self.tiebreakers[0], "?")
        if self.category in (HandCategory.STRAIGHT, HandCategory.STRAIGHT_FLUSH):
            return f"{name}, {top} high"
        return f"{name}, {top}s"


def _straight_high(vals: Sequence[int], has_joker: bool) -> Optional[int]:
    """Top rank of the best straight the ranks (plus joker) can make."""
    distinct = frozenset(vals)
    if len(distinct) != len(vals) or len(distinct) + (1 if has_joker else 0) != HIGH_SIZE:
        return None
    for window, top in STRAIGHT_WINDOWS:
        if distinct <= window:
            return top
    return None


def _eval2(vals: List[int], has_joker: bool) -> Tuple[HandCategory, Tiebreakers]:
    if has_joker:
        # Joker pairs with whatever it sits next to
        return HandCategory.PAIR, (max(vals, default=ACE),)
    hi, lo = sorted(vals, reverse=True)
    if hi == lo:
        return HandCategory.PAIR, (hi,)
    return HandCategory.HIGH_CARD, (hi, lo)


def _eval5(known: List[Card], has_joker: bool) -> Tuple[HandCategory, Tiebreakers]:
    vals = [c.val for c in known]
    desc = tuple(sorted(vals, reverse=True))
    cnt = Counter(vals)
    # Largest group first, then highest rank
    groups = sorted(cnt.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    counts = [n for _, n in groups]
    top = groups[0][0] if groups else ACE

    if has_joker and cnt[ACE] == 4:
        return HandCategory.FIVE_ACES, (ACE,)

    flush = len({c.suit for c in known}) == 1
    straight = _straight_high(vals, has_joker)

    if flush and straight:
        return HandCategory.STRAIGHT_FLUSH, (straight,)

    if counts[0] == 4 or (has_joker and counts[0] == 3):
        return HandCategory.FOUR_OF_A_KIND, (top,)

    if counts == [3, 2] or (has_joker and counts == [2, 2]):
        return HandCategory.FULL_HOUSE, (top,)

    if flush:
        return HandCategory.FLUSH, desc

    if straight:
        return HandCategory.STRAIGHT, (straight,)

    if counts[0] == 3 or (has_joker and counts[0] == 2):
        return HandCategory.THREE_OF_A_KIND, (top,)

    if counts == [2, 2, 1]:
        pairs = sorted((v for v, n in groups if n == 2), reverse=True)
        return HandCategory.TWO_PAIR, tuple(pairs)

    if counts[0] == 2:
        return HandCategory.PAIR, (top,)

    if has_joker:
        return HandCategory.PAIR, (desc[0],)

    return HandCategory.HIGH_CARD, desc


def evaluate_raw(cards: Sequence[Card]) -> Tuple[HandCategory, Tiebreakers]:
    """Category and tiebreakers for a 2- or 5-card hand.

    Any other card count is not a real Pai Gow hand and degrades to a
    High Card ranking of the raw card values; callers validating an
    arrangement must check the size themselves.
    """
    if len(cards) not in (LOW_SIZE, HIGH_SIZE):
        return HandCategory.HIGH_CARD, tuple(sorted((c.val for c in cards), reverse=True))

    known = [c for c in cards if not c.is_joker()]
    has_joker = len(known) < len(cards)
    if len(cards) == LOW_SIZE:
        return _eval2([c.val for c in known], has_joker)
    return _eval5(known, has_joker)


def evaluate(cards: Sequence[Card]) -> Hand:
    ordered = tuple(sorted(cards, key=lambda c: c.val))
    category, tiebreakers = evaluate_raw(ordered)
    return Hand(ordered, category, tiebreakers)


def compare_hands(a: Hand, b: Hand) -> int:
    """Return 1 if a>b, 0 if equal (a copy), -1 if a<b."""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


# Tiebreakers never exceed five entries for 2- and 5-card hands; each fits
# in four bits (values 2..15), so the category sits above 20 bits of keys.
_KEY_SLOTS = 5
_KEY_BITS = 4


def hand_to_int(hand: Hand) -> int:
    """Pack a hand into an order-preserving integer for vectorized compares."""
    packed = int(hand.category)
    keys = hand.tiebreakers[:_KEY_SLOTS]
    for i in range(_KEY_SLOTS):
        packed = (packed << _KEY_BITS) | (keys[i] if i < len(keys) else 0)
    return packed
