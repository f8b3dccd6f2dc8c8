from __future__ import annotations

import logging
import os
import random
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Callable, List, Sequence, Tuple

import numpy as np

from .cards import HAND_SIZE, Card, parse, remaining_deck
from .house_way import set_dealer_hands
from .partition import RankedSplit, all_ranked_non_foul
from .ranks import hand_to_int
from .rules import is_ace_high_pai_gow

logger = logging.getLogger(__name__)

# ── Configuration ─────────────────────────────────────────────
# Number of worker processes.  Override with PAIGOW_WORKERS env var.
# Default: min(cpu_count, 8).  Set to 1 to disable multiprocessing.
_MAX_WORKERS = min(os.cpu_count() or 4, 8)
_WORKERS = int(os.environ.get("PAIGOW_WORKERS", _MAX_WORKERS))

# Minimum samples before we bother spawning subprocesses
_MP_THRESHOLD = 2000

# Set PAIGOW_NO_NUMPY=1 to fall back to pure-Python loops (debug only)
_USE_NUMPY = not bool(int(os.environ.get("PAIGOW_NO_NUMPY", "0")))

# Dealer hands scored per vectorized comparison
_BATCH = 500

DealerRow = Tuple[int, int, bool]  # (high, low, dealer ace-high pai gow)


class SimResult:
    def __init__(self, rs: RankedSplit, wins: int, losses: int, pushes: int):
        self.rs = rs
        self.wins = wins
        self.losses = losses
        self.pushes = pushes

    @property
    def hands(self):
        return self.rs.hands()

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.pushes

    @property
    def win_rate(self) -> float:
        n = self.games
        return (self.wins / n) if n else 0.0

    @property
    def loss_rate(self) -> float:
        n = self.games
        return (self.losses / n) if n else 0.0


def _dealer_row(dealer7: Sequence[Card]) -> DealerRow:
    dealer = set_dealer_hands(dealer7)
    return hand_to_int(dealer.high), hand_to_int(dealer.low), is_ace_high_pai_gow(dealer, dealer7)


def _tally_numpy(
    p_hi: np.ndarray,
    p_lo: np.ndarray,
    d_hi: np.ndarray,
    d_lo: np.ndarray,
    d_push: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Compare P player splits against B dealer hands in one broadcast.

    Copies go to the dealer, so a hand is won only when strictly greater.
    """
    win_hi = p_hi[:, None] > d_hi[None, :]  # (P, B)
    win_lo = p_lo[:, None] > d_lo[None, :]
    live = ~d_push[None, :]

    w_flag = win_hi & win_lo & live
    l_flag = ~win_hi & ~win_lo & live
    p_flag = ~(w_flag | l_flag)
    return w_flag.sum(axis=1), l_flag.sum(axis=1), p_flag.sum(axis=1)


def _tally_pure(
    player_rows: Sequence[Tuple[int, int]],
    dealer: DealerRow,
    W: List[int],
    L: List[int],
    P: List[int],
) -> None:
    d_hi, d_lo, d_push = dealer
    for idx, (p_hi, p_lo) in enumerate(player_rows):
        if d_push:
            P[idx] += 1
            continue
        win_hi = p_hi > d_hi
        win_lo = p_lo > d_lo
        if win_hi and win_lo:
            W[idx] += 1
        elif not win_hi and not win_lo:
            L[idx] += 1
        else:
            P[idx] += 1


# ══════════════════════════════════════════════════════════════
#  Top-level worker function (must be picklable for Windows spawn)
# ══════════════════════════════════════════════════════════════

def _sim_chunk(
    deck_ids: List[str],
    player_rows: List[Tuple[int, int]],
    chunk_size: int,
    seed: int,
    use_numpy: bool,
) -> Tuple[List[int], List[int], List[int]]:
    """Run *chunk_size* random dealer hands in this worker process.

    Arguments use plain Python types for pickling.  Returns (W, L, P)
    lists with one entry per player split.
    """
    rng = random.Random(seed)
    deck = [parse(cid) for cid in deck_ids]
    n_parts = len(player_rows)

    if not use_numpy:
        W, L, P = [0] * n_parts, [0] * n_parts, [0] * n_parts
        for _ in range(chunk_size):
            _tally_pure(player_rows, _dealer_row(rng.sample(deck, HAND_SIZE)), W, L, P)
        return W, L, P

    rows = np.array(player_rows, dtype=np.int64)  # (P, 2)
    p_hi, p_lo = rows[:, 0], rows[:, 1]
    W = np.zeros(n_parts, dtype=np.int64)
    L = np.zeros(n_parts, dtype=np.int64)
    P = np.zeros(n_parts, dtype=np.int64)

    for batch_start in range(0, chunk_size, _BATCH):
        B = min(_BATCH, chunk_size - batch_start)
        batch = [_dealer_row(rng.sample(deck, HAND_SIZE)) for _ in range(B)]
        d_hi = np.array([r[0] for r in batch], dtype=np.int64)
        d_lo = np.array([r[1] for r in batch], dtype=np.int64)
        d_push = np.array([r[2] for r in batch], dtype=bool)
        w, l, p = _tally_numpy(p_hi, p_lo, d_hi, d_lo, d_push)
        W += w
        L += l
        P += p

    return W.tolist(), L.tolist(), P.tolist()


# ══════════════════════════════════════════════════════════════
#  Public API
# ══════════════════════════════════════════════════════════════

def simulate_arrangements(
    player7: Sequence[Card],
    samples: int = 100_000,
    seed: int | None = None,
    progress: Callable[[float], None] | None = None,
    cancel: Callable[[], bool] | None = None,
) -> Tuple[SimResult, List[SimResult]]:
    """Monte Carlo estimate of every playable split against the House Way.

    Each sample deals the dealer seven random cards from the 46 the player
    does not hold.  Uses multiprocessing when *samples* >= _MP_THRESHOLD
    and _WORKERS > 1.

    Returns: (best_result, all_results_sorted_desc)
    """
    if samples <= 0:
        raise ValueError(f"samples must be positive, got {samples}")

    rng = random.Random(seed)
    parts: List[RankedSplit] = all_ranked_non_foul(player7)
    if not parts:
        raise ValueError("No playable split; check input cards")

    deck = remaining_deck(player7, include_joker=True)
    player_rows = [(hand_to_int(rs.high), hand_to_int(rs.low)) for rs in parts]
    num_parts = len(parts)

    W = [0] * num_parts
    L = [0] * num_parts
    P = [0] * num_parts

    workers = min(_WORKERS, max(1, samples // _MP_THRESHOLD))
    if workers > 1:
        done = _run_pool(deck, player_rows, samples, workers, rng, (W, L, P), progress, cancel)
    else:
        done = _run_local(deck, player_rows, samples, rng, (W, L, P), progress, cancel)

    logger.debug("simulated %d/%d dealer hands over %d splits", done, samples, num_parts)

    results: List[SimResult] = [
        SimResult(rs=parts[i], wins=W[i], losses=L[i], pushes=P[i])
        for i in range(num_parts)
    ]
    results.sort(key=lambda r: (r.win_rate, -r.loss_rate, r.rs.key_house()), reverse=True)
    if progress:
        progress(1.0)
    return results[0], results


def _accumulate(totals, chunk) -> None:
    for acc, part in zip(totals, chunk):
        for idx, v in enumerate(part):
            acc[idx] += int(v)


def _run_local(deck, player_rows, samples, rng, totals, progress, cancel) -> int:
    """Single-process loop in chunks so progress and cancel stay responsive."""
    step = max(_BATCH, samples // 100)
    done = 0
    while done < samples:
        if cancel and cancel():
            logger.info("simulation cancelled after %d samples", done)
            break
        size = min(step, samples - done)
        chunk = _sim_chunk(
            [c.id() for c in deck], player_rows, size, rng.randint(0, 2**63), _USE_NUMPY
        )
        _accumulate(totals, chunk)
        done += size
        if progress:
            progress(done / samples)
    return done


def _run_pool(deck, player_rows, samples, workers, rng, totals, progress, cancel) -> int:
    deck_ids = [c.id() for c in deck]
    base, remainder = divmod(samples, workers)
    sizes = [base + (1 if w < remainder else 0) for w in range(workers)]

    done = 0
    try:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(
                    _sim_chunk, deck_ids, player_rows, size, rng.randint(0, 2**63), _USE_NUMPY
                ): size
                for size in sizes
            }
            for fut in as_completed(futures):
                if cancel and cancel():
                    for f in futures:
                        f.cancel()
                    logger.info("simulation cancelled after %d samples", done)
                    break
                _accumulate(totals, fut.result())
                done += futures[fut]
                if progress:
                    progress(done / samples)
    except (BrokenPipeError, OSError):
        logger.warning("process pool unavailable, simulating in-process")
        for acc in totals:
            acc[:] = [0] * len(acc)
        return _run_local(deck, player_rows, samples, rng, totals, progress, cancel)
    return done
