import numpy as np
import pytest

from paigow.core import simulate
from paigow.core.cards import parse_many
from paigow.core.partition import all_ranked_non_foul

CARDS = parse_many("AS AH KD QC 9S 5D 2C")


@pytest.fixture(autouse=True)
def single_process(monkeypatch):
    monkeypatch.setattr(simulate, "_WORKERS", 1)


def test_every_sample_is_counted_for_every_split():
    best, results = simulate.simulate_arrangements(CARDS, samples=300, seed=1)
    assert len(results) == len(all_ranked_non_foul(CARDS))
    for res in results:
        assert res.games == 300
        assert res.hands.high >= res.hands.low
    assert best is results[0]
    rates = [r.win_rate for r in results]
    assert rates == sorted(rates, reverse=True)


def test_numpy_and_pure_loops_agree(monkeypatch):
    _, vectorized = simulate.simulate_arrangements(CARDS, samples=200, seed=9)
    monkeypatch.setattr(simulate, "_USE_NUMPY", False)
    _, pure = simulate.simulate_arrangements(CARDS, samples=200, seed=9)
    assert [(r.wins, r.losses, r.pushes) for r in vectorized] == [
        (r.wins, r.losses, r.pushes) for r in pure
    ]


def test_progress_reaches_one_and_cancel_stops_early():
    seen = []
    simulate.simulate_arrangements(CARDS, samples=1000, seed=2, progress=seen.append)
    assert seen[-1] == 1.0

    _, results = simulate.simulate_arrangements(CARDS, samples=1000, seed=2, cancel=lambda: True)
    assert all(r.games == 0 for r in results)


def test_rejects_non_positive_samples():
    with pytest.raises(ValueError, match="samples must be positive"):
        simulate.simulate_arrangements(CARDS, samples=0)


def test_tally_counts_copies_for_dealer_and_honours_auto_push():
    p_hi = np.array([10, 10, 10], dtype=np.int64)
    p_lo = np.array([5, 3, 5], dtype=np.int64)
    d_hi = np.array([10, 9], dtype=np.int64)
    d_lo = np.array([4, 4], dtype=np.int64)
    d_push = np.array([False, True])
    w, l, p = simulate._tally_numpy(p_hi, p_lo, d_hi, d_lo, d_push)
    # Against dealer 0 the high hand is a copy: split decision or loss
    assert w.tolist() == [0, 0, 0]
    assert l.tolist() == [0, 1, 0]
    assert p.tolist() == [2, 1, 2]
