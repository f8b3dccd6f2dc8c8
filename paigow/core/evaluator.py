from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .bonus import AceHighBonus, FortuneBonus, ace_high_side_bet, fortune_bonus
from .cards import Card, deal, labels, new_shuffled_deck
from .house_way import set_dealer_hands
from .partition import InvalidArrangementError, PlayerHands, best_split, check_hands
from .rules import GameResult, resolve_round
from .simulate import SimResult, simulate_arrangements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Round:
    player_cards: Tuple[Card, ...]
    dealer_cards: Tuple[Card, ...]
    suggested: PlayerHands
    dealer: PlayerHands


@dataclass(frozen=True)
class RoundOutcome:
    result: GameResult
    player: PlayerHands
    dealer: PlayerHands
    fortune: Optional[FortuneBonus]
    ace_high: Optional[AceHighBonus]


def new_round(seed: int | None = None, deck: Sequence[Card] | None = None) -> Round:
    """Deal a round and set both hands by the House Way.

    The dealer's hand is set immediately; the player's split is only a
    suggestion and can be rearranged before play_round.
    """
    if deck is None:
        deck = new_shuffled_deck(seed)
    player7, dealer7 = deal(deck)
    rnd = Round(
        player_cards=tuple(player7),
        dealer_cards=tuple(dealer7),
        suggested=best_split(player7),
        dealer=set_dealer_hands(dealer7),
    )
    logger.debug("dealt player [%s] dealer [%s]", labels(player7), labels(dealer7))
    return rnd


def play_round(rnd: Round, player: PlayerHands | None = None) -> RoundOutcome:
    """Settle the round and both side bets for the player's arrangement."""
    if player is None:
        player = rnd.suggested
    check_hands(player, "player")
    if sorted(c.id() for c in player.cards) != sorted(c.id() for c in rnd.player_cards):
        raise InvalidArrangementError("arrangement does not use the player's dealt cards")

    result = resolve_round(player, rnd.dealer, rnd.dealer_cards)
    outcome = RoundOutcome(
        result=result,
        player=player,
        dealer=rnd.dealer,
        fortune=fortune_bonus(rnd.player_cards),
        ace_high=ace_high_side_bet(player, rnd.player_cards, rnd.dealer, rnd.dealer_cards),
    )
    logger.debug("round settled: %s", result.value)
    return outcome


def evaluate_best_setup(
    hand: Sequence[Card],
    samples: int,
    seed: int | None = None,
    progress: Callable[[float], None] | None = None,
    cancel: Callable[[], bool] | None = None,
) -> Tuple[SimResult, List[SimResult]]:
    """Monte Carlo ranking of every playable split of the player's cards."""
    return simulate_arrangements(hand, samples=samples, seed=seed, progress=progress, cancel=cancel)
