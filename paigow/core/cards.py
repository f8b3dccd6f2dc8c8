from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

# Suits and ranks
SUITS = ("H", "D", "C", "S")  # Hearts, Diamonds, Clubs, Spades
RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
JOKER = "XJ"  # Joker id

RANK_TO_VAL = {r: i + 2 for i, r in enumerate(RANKS)}  # 2..14 (A=14)
VAL_TO_RANK = {v: r for r, v in RANK_TO_VAL.items()}
ACE = RANK_TO_VAL["A"]
JOKER_VAL = 15  # sort/display placement only, never scored

DECK_SIZE = 53
HAND_SIZE = 7


@dataclass(frozen=True)
class Card:
    rank: str  # "2".."10","J","Q","K","A" or "XJ" for Joker
    suit: Optional[str]  # "H","D","C","S" or None for Joker

    def __post_init__(self):
        if self.rank == JOKER:
            object.__setattr__(self, "suit", None)
            return
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    def id(self) -> str:
        return self.rank if self.rank == JOKER else f"{self.rank}{self.suit}"

    def __str__(self) -> str:
        return self.id()

    def is_joker(self) -> bool:
        return self.rank == JOKER

    def is_ace(self) -> bool:
        return self.rank == "A"

    @property
    def val(self) -> int:
        if self.rank == JOKER:
            return JOKER_VAL
        return RANK_TO_VAL[self.rank]


def parse(card_id: str) -> Card:
    """Parse an id like AS, 10D, TD, 9H, 2C, or XJ for the Joker."""
    s = card_id.strip().upper()
    if s == JOKER:
        return Card(JOKER, None)
    if len(s) < 2:
        raise ValueError(f"Bad card id: {card_id!r}")
    rank, suit = s[:-1], s[-1]
    if rank == "T":
        rank = "10"
    if rank not in RANKS:
        raise ValueError(f"Bad card rank: {rank}")
    if suit not in SUITS:
        raise ValueError(f"Bad suit: {suit}")
    return Card(rank, suit)


def parse_many(text: str | Iterable[str]) -> List[Card]:
    """Parse a comma/space separated string (or an iterable of ids)."""
    if isinstance(text, str):
        text = text.replace(",", " ").split()
    return [parse(t) for t in text]


def full_deck(include_joker: bool = True) -> List[Card]:
    deck: List[Card] = [Card(r, s) for s in SUITS for r in RANKS]
    if include_joker:
        deck.append(Card(JOKER, None))
    return deck


def remaining_deck(exclude: Sequence[Card], include_joker: bool = True) -> List[Card]:
    excl = {c.id() for c in exclude}
    return [c for c in full_deck(include_joker) if c.id() not in excl]


def new_shuffled_deck(seed: int | None = None) -> List[Card]:
    deck = full_deck()
    random.Random(seed).shuffle(deck)
    return deck


def deal(deck: Sequence[Card]) -> Tuple[List[Card], List[Card]]:
    """Split off the player's and the dealer's seven cards.

    Cards past the fourteenth are unused in this game.
    """
    if len(deck) < 2 * HAND_SIZE:
        raise ValueError(f"Need {2 * HAND_SIZE} cards to deal, got {len(deck)}")
    cards = list(deck)
    return cards[:HAND_SIZE], cards[HAND_SIZE:2 * HAND_SIZE]


def sort_desc(cards: Sequence[Card]) -> List[Card]:
    return sorted(cards, key=lambda c: (c.val, c.suit or "Z"), reverse=True)


def contains_ace_or_joker(cards: Iterable[Card]) -> bool:
    return any(c.is_ace() or c.is_joker() for c in cards)


def contains_joker(cards: Iterable[Card]) -> bool:
    return any(c.is_joker() for c in cards)


# Pretty strings for the CLI
SUIT_SYMBOL = {"S": "♠", "H": "♥", "D": "♦", "C": "♣", None: ""}


def label(card: Card) -> str:
    if card.rank == JOKER:
        return "Joker"
    return f"{card.rank}{SUIT_SYMBOL[card.suit]}"


def labels(cards: Iterable[Card]) -> str:
    return " ".join(label(c) for c in cards)
