import pytest

from paigow.core.cards import parse, parse_many
from paigow.core.partition import InvalidArrangementError, best_split
from paigow.core.placement import CardPlacement, HandPosition

CARDS = parse_many("AS KD QH JC 9S 5D 2C")


def test_from_split_places_every_card():
    placement = CardPlacement.from_split(best_split(CARDS))
    assert len(placement.cards_in(HandPosition.LOW)) == 2
    assert len(placement.cards_in(HandPosition.HIGH)) == 5
    assert placement.is_legal()
    hands = placement.hands()
    assert hands.high > hands.low


def test_move_into_full_hand_swaps_first_card_back():
    placement = CardPlacement.from_split(best_split(CARDS))
    first_low = placement.cards_in(HandPosition.LOW)[0]
    mover = placement.cards_in(HandPosition.HIGH)[0]
    placement.move(mover, HandPosition.LOW)
    assert placement.position(mover) == HandPosition.LOW
    assert placement.position(first_low) == HandPosition.HIGH
    assert len(placement.cards_in(HandPosition.LOW)) == 2


def test_unassigned_card_makes_placement_illegal():
    placement = CardPlacement.from_split(best_split(CARDS))
    card = placement.cards_in(HandPosition.HIGH)[0]
    placement.move(card, HandPosition.DEALT)
    assert not placement.is_legal()
    with pytest.raises(InvalidArrangementError, match="1 unassigned"):
        placement.hands()


def test_building_up_from_dealt_cards():
    placement = CardPlacement(CARDS)
    assert not placement.is_legal()
    for card in parse_many("5D 2C"):
        placement.move(card, HandPosition.LOW)
    for card in placement.cards_in(HandPosition.DEALT):
        placement.move(card, HandPosition.HIGH)
    assert placement.is_legal()
    assert sorted(c.id() for c in placement.hands().low.cards) == ["2C", "5D"]


def test_low_pair_over_high_card_is_illegal():
    placement = CardPlacement(parse_many("KS KH 2C 3D 4H 6S 9C"))
    for card in parse_many("KS KH"):
        placement.move(card, HandPosition.LOW)
    for card in placement.cards_in(HandPosition.DEALT):
        placement.move(card, HandPosition.HIGH)
    assert not placement.is_legal()


def test_moving_a_foreign_card_fails():
    placement = CardPlacement(CARDS)
    with pytest.raises(KeyError):
        placement.move(parse("3H"), HandPosition.LOW)
