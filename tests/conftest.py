import pytest

from paigow.core.cards import parse_many
from paigow.core.partition import PlayerHands
from paigow.core.ranks import evaluate


@pytest.fixture
def make_hands():
    """Build PlayerHands from low / high card id strings."""

    def _make(low: str, high: str) -> PlayerHands:
        return PlayerHands(high=evaluate(parse_many(high)), low=evaluate(parse_many(low)))

    return _make
