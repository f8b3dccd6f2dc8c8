import pytest

from paigow.core.cards import (
    Card,
    JOKER,
    deal,
    full_deck,
    label,
    new_shuffled_deck,
    parse,
    parse_many,
    sort_desc,
)


def test_full_deck_has_52_cards_and_one_joker():
    deck = full_deck()
    assert len(deck) == 53
    assert len({c.id() for c in deck}) == 53
    assert sum(1 for c in deck if c.is_joker()) == 1


def test_shuffled_deck_is_reproducible_with_seed():
    a = new_shuffled_deck(seed=11)
    b = new_shuffled_deck(seed=11)
    assert a == b
    assert sorted(c.id() for c in a) == sorted(c.id() for c in full_deck())


def test_deal_gives_two_disjoint_seven_card_hands():
    player, dealer = deal(new_shuffled_deck(seed=3))
    assert len(player) == 7
    assert len(dealer) == 7
    assert not {c.id() for c in player} & {c.id() for c in dealer}


def test_deal_rejects_short_deck():
    with pytest.raises(ValueError, match="Need 14 cards"):
        deal(full_deck()[:10])


def test_parse_accepts_ten_aliases_and_joker():
    assert parse("10h") == Card("10", "H")
    assert parse("TD") == Card("10", "D")
    joker = parse("xj")
    assert joker.is_joker()
    assert joker.suit is None
    assert parse_many("AS, KD 2c") == [Card("A", "S"), Card("K", "D"), Card("2", "C")]


def test_parse_rejects_bad_ids():
    with pytest.raises(ValueError, match="Bad card rank"):
        parse("1H")
    with pytest.raises(ValueError, match="Bad suit"):
        parse("AX")
    with pytest.raises(ValueError, match="Invalid rank"):
        Card("1", "H")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card("A", "X")


def test_rank_values_and_predicates():
    ace = parse("AS")
    joker = Card(JOKER, "H")
    assert ace.val == 14
    assert ace.is_ace()
    assert joker.val == 15
    assert joker.suit is None
    assert not joker.is_ace()


def test_sort_desc_places_joker_first_and_labels():
    ordered = sort_desc(parse_many("2C XJ AS 9D"))
    assert [c.id() for c in ordered] == ["XJ", "AS", "9D", "2C"]
    assert label(ordered[0]) == "Joker"
    assert label(ordered[1]) == "A♠"
