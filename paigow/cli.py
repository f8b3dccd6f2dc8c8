from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .core.cards import label, labels, parse_many
from .core.evaluator import RoundOutcome, evaluate_best_setup, new_round, play_round
from .core.partition import PlayerHands
from .core.placement import CardPlacement, HandPosition

logger = logging.getLogger(__name__)


def _format_hands(name: str, hands: PlayerHands) -> List[str]:
    return [
        f"{name} high: {labels(hands.high.cards):<24} {hands.high.describe()}",
        f"{name} low:  {labels(hands.low.cards):<24} {hands.low.describe()}",
    ]


def _format_outcome(outcome: RoundOutcome) -> List[str]:
    lines = _format_hands("Player", outcome.player) + _format_hands("Dealer", outcome.dealer)
    lines.append(f"Result: {outcome.result.display}")
    fortune = outcome.fortune
    lines.append(
        f"Fortune bonus: {fortune.label} ({fortune.payout})" if fortune else "Fortune bonus: no qualifying hand"
    )
    ace_high = outcome.ace_high
    lines.append(
        f"Ace high side bet: {ace_high.label} ({ace_high.payout})" if ace_high else "Ace high side bet: no win"
    )
    return lines


def cmd_deal(args: argparse.Namespace) -> int:
    rnd = new_round(seed=args.seed)
    print(f"Player cards: {labels(rnd.player_cards)}")
    for line in _format_hands("Suggested", rnd.suggested) + _format_hands("Dealer", rnd.dealer):
        print(line)
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    rnd = new_round(seed=args.seed)
    placement = CardPlacement.from_split(rnd.suggested)
    if args.low:
        wanted = parse_many(args.low)
        if len(wanted) != 2:
            raise ValueError("--low takes exactly two cards")
        by_id = {c.id(): c for c in placement.cards}
        for card in wanted:
            if card.id() not in by_id:
                raise ValueError(f"{label(card)} is not in the player's hand")
        for card in placement.cards_in(HandPosition.LOW):
            placement.move(card, HandPosition.DEALT)
        for card in wanted:
            placement.move(by_id[card.id()], HandPosition.LOW)
        for card in placement.cards_in(HandPosition.DEALT):
            placement.move(card, HandPosition.HIGH)
        logger.debug("player rearranged low hand to %s", labels(wanted))

    print(f"Player cards: {labels(rnd.player_cards)}")
    for line in _format_outcome(play_round(rnd, placement.hands())):
        print(line)
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    cards = parse_many(args.cards) if args.cards else list(new_round(seed=args.seed).player_cards)
    if len(cards) != 7:
        raise ValueError(f"need 7 cards to simulate, got {len(cards)}")
    _, results = evaluate_best_setup(cards, samples=args.samples, seed=args.seed)
    print(f"Player cards: {labels(cards)}")
    for res in results[: args.top]:
        hands = res.hands
        print(
            f"{res.win_rate:6.1%} win {res.loss_rate:6.1%} lose  "
            f"high {labels(hands.high.cards):<24} low {labels(hands.low.cards)}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pai Gow poker hand engine")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    deal = sub.add_parser("deal", help="Deal a round and show the House Way splits")
    deal.add_argument("--seed", type=int, default=None)
    deal.set_defaults(func=cmd_deal)

    play = sub.add_parser("play", help="Deal and settle a round")
    play.add_argument("--seed", type=int, default=None)
    play.add_argument("--low", default=None, help="Two card ids for the low hand, e.g. 'KS,QH'")
    play.set_defaults(func=cmd_play)

    sim = sub.add_parser("simulate", help="Rank every split by simulated win rate")
    sim.add_argument("--cards", default=None, help="Seven card ids; dealt at random when omitted")
    sim.add_argument("--seed", type=int, default=None)
    sim.add_argument("--samples", type=int, default=10_000)
    sim.add_argument("--top", type=int, default=5)
    sim.set_defaults(func=cmd_simulate)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    try:
        return args.func(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
