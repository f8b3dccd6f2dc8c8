from __future__ import annotations

from enum import Enum
from typing import Dict, List, Sequence

from .cards import Card
from .partition import InvalidArrangementError, PlayerHands, is_legal_arrangement
from .ranks import HIGH_SIZE, LOW_SIZE, evaluate


class HandPosition(str, Enum):
    DEALT = "DEALT"  # not yet assigned
    LOW = "LOW"
    HIGH = "HIGH"


CAPACITY = {HandPosition.LOW: LOW_SIZE, HandPosition.HIGH: HIGH_SIZE}


class CardPlacement:
    """Where each of the player's seven cards currently sits.

    Cards keep their deal order; moving a card into a full hand swaps the
    first card of that hand back to where the moved card came from.
    """

    def __init__(self, cards: Sequence[Card], position: HandPosition = HandPosition.DEALT):
        self._order: List[Card] = list(cards)
        self._pos: Dict[Card, HandPosition] = {c: position for c in self._order}

    @classmethod
    def from_split(cls, hands: PlayerHands) -> "CardPlacement":
        placement = cls(hands.low.cards, HandPosition.LOW)
        for card in hands.high.cards:
            placement._order.append(card)
            placement._pos[card] = HandPosition.HIGH
        return placement

    @property
    def cards(self) -> List[Card]:
        return list(self._order)

    def position(self, card: Card) -> HandPosition:
        return self._pos[card]

    def cards_in(self, position: HandPosition) -> List[Card]:
        return [c for c in self._order if self._pos[c] == position]

    def move(self, card: Card, target: HandPosition) -> None:
        if card not in self._pos:
            raise KeyError(f"{card} is not one of this player's cards")
        current = self._pos[card]
        if current == target:
            return
        occupants = self.cards_in(target)
        capacity = CAPACITY.get(target)
        if capacity is not None and len(occupants) >= capacity:
            self._pos[occupants[0]] = current
        self._pos[card] = target

    def is_legal(self) -> bool:
        return is_legal_arrangement(
            self.cards_in(HandPosition.LOW),
            self.cards_in(HandPosition.HIGH),
            len(self.cards_in(HandPosition.DEALT)),
        )

    def hands(self) -> PlayerHands:
        low = self.cards_in(HandPosition.LOW)
        high = self.cards_in(HandPosition.HIGH)
        unassigned = self.cards_in(HandPosition.DEALT)
        if len(low) != LOW_SIZE or len(high) != HIGH_SIZE or unassigned:
            raise InvalidArrangementError(
                f"placement not settled: {len(low)} low, {len(high)} high, {len(unassigned)} unassigned"
            )
        return PlayerHands(high=evaluate(high), low=evaluate(low))
