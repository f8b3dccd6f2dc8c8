import pytest

from paigow.core.bonus import fortune_bonus
from paigow.core.cards import full_deck, parse_many
from paigow.core.evaluator import new_round, play_round
from paigow.core.partition import InvalidArrangementError, best_split
from paigow.core.rules import GameResult


def _stacked_deck(first14: str):
    top = parse_many(first14)
    ids = {c.id() for c in top}
    return top + [c for c in full_deck() if c.id() not in ids]


def test_new_round_is_reproducible_with_seed():
    a = new_round(seed=5)
    b = new_round(seed=5)
    assert a.player_cards == b.player_cards
    assert a.dealer_cards == b.dealer_cards
    assert a.suggested == b.suggested


def test_new_round_sets_both_hands_by_house_way():
    rnd = new_round(seed=12)
    assert rnd.suggested.high > rnd.suggested.low
    assert rnd.dealer == best_split(rnd.dealer_cards)
    assert not {c.id() for c in rnd.player_cards} & {c.id() for c in rnd.dealer_cards}


def test_play_round_with_suggested_split():
    rnd = new_round(seed=21)
    outcome = play_round(rnd)
    assert outcome.result in set(GameResult)
    assert outcome.player == rnd.suggested
    assert outcome.fortune == fortune_bonus(rnd.player_cards)


def test_play_round_on_stacked_deck():
    deck = _stacked_deck("AS AH AD AC XJ 7S 2D  KS KH QD QC 6S 5H 3C")
    rnd = new_round(deck=deck)
    outcome = play_round(rnd)
    assert outcome.result == GameResult.PLAYER_WINS
    assert outcome.fortune is not None
    assert outcome.fortune.multiplier == 400
    assert outcome.ace_high is None


def test_dealer_ace_high_pai_gow_round():
    deck = _stacked_deck("KS KH QS QH QD 8C 8D  AH KD 9H 7C 5S 3C 2D")
    rnd = new_round(deck=deck)
    outcome = play_round(rnd)
    assert outcome.result == GameResult.PUSH
    assert outcome.ace_high is not None
    assert outcome.ace_high.multiplier == 5


def test_play_round_rejects_low_hand_over_high(make_hands):
    deck = _stacked_deck("KS KH 2C 3D 4H 6S 9C  AH QD 10S 8C 7D 5H 3S")
    rnd = new_round(deck=deck)
    with pytest.raises(InvalidArrangementError, match="outranks"):
        play_round(rnd, make_hands("KS KH", "2C 3D 4H 6S 9C"))


def test_play_round_rejects_foreign_cards(make_hands):
    rnd = new_round(deck=_stacked_deck("KS KH 2C 3D 4H 6S 9C  AH QD 10S 8C 7D 5H 3S"))
    with pytest.raises(InvalidArrangementError, match="dealt cards"):
        play_round(rnd, make_hands("2H 3H", "KS KH 4H 6S 9C"))
