"""Command line front-end for the bridge engine.

Examples::

    bridge-engine generate --seed 42 --pbn
    bridge-engine evaluate AKQJ.AKQ.AKQ.AKQ
    bridge-engine score 4H 10 --vulnerability Both
    bridge-engine legal-calls 1C X
    bridge-engine solve "N:AKQJ.AKQ.AKQ.AKQ T987.JT9.JT9.JT9 6543.876.876.876 2.5432.5432.5432"
    bridge-engine simulate 3NT --deals 20 --seed 7
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from . import service
from .bidding import Auction, AuctionEntry, Contract, add_call, parse_call
from .cards import BidSuit, EngineError, Seat, Vulnerability, next_seat
from .config import LOG_LEVELS, EngineSettings, configure_logging
from .deck import deal_from_pbn, deal_to_pbn, hand_from_pbn
from .schema import AuctionModel, ContractModel, DealConstraintsModel, DealModel, HandModel

logger = logging.getLogger(__name__)

CONTRACT_PATTERN = re.compile(r"^([1-7])(NT|N|C|D|H|S)(XX|X)?$")


def parse_contract(text: str, declarer: Seat) -> Contract:
    match = CONTRACT_PATTERN.match(text.strip().upper())
    if match is None:
        raise argparse.ArgumentTypeError(f"Cannot parse contract {text!r}; expected e.g. 3NT, 4S, 4SX or 6HXX.")
    level, strain, penalty = match.groups()
    return Contract(
        level=int(level),
        strain=BidSuit.NO_TRUMP if strain in ("N", "NT") else BidSuit(strain),
        declarer=declarer,
        doubled=penalty == "X",
        redoubled=penalty == "XX",
    )


def _seat(text: str) -> Seat:
    try:
        return Seat(text.strip().upper())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Unknown seat {text!r}.") from exc


def _vulnerability(text: str) -> Vulnerability:
    for option in Vulnerability:
        if option.value.upper() == text.strip().upper():
            return option
    raise argparse.ArgumentTypeError(f"Unknown vulnerability {text!r}; use None, NS, EW or Both.")


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def _read_constraints(source: Optional[str]) -> DealConstraintsModel:
    if source is None:
        return DealConstraintsModel()
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return DealConstraintsModel.model_validate_json(text)


# Commands ----------------------------------------------------------------


def cmd_generate(args: argparse.Namespace, settings: EngineSettings) -> None:
    constraints = _read_constraints(args.constraints)
    overrides = {
        "seed": args.seed,
        "max_attempts": args.max_attempts,
        "dealer": args.dealer,
        "vulnerability": args.vulnerability,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    constraints = DealConstraintsModel.model_validate({**constraints.model_dump(), **overrides})
    result = service.generate_deal(constraints, settings=settings)
    if args.pbn:
        print(deal_to_pbn(result.deal.to_domain()))
        return
    _emit(result.to_wire())


def cmd_evaluate(args: argparse.Namespace, settings: EngineSettings) -> None:
    hand = HandModel.from_domain(hand_from_pbn(args.hand))
    payload = service.evaluate_hand(hand).to_wire()
    payload["balanced"] = service.is_balanced(hand)
    _emit(payload)


def cmd_score(args: argparse.Namespace, settings: EngineSettings) -> None:
    contract = ContractModel.from_domain(parse_contract(args.contract, args.declarer))
    if args.breakdown:
        _emit(service.score_breakdown(contract, args.tricks, args.vulnerability).to_wire())
        return
    _emit(service.calculate_score(contract, args.tricks, args.vulnerability))


def cmd_legal_calls(args: argparse.Namespace, settings: EngineSettings) -> None:
    auction = Auction()
    seat = args.dealer
    for text in args.calls:
        auction = add_call(auction, AuctionEntry(seat, parse_call(text)))
        seat = next_seat(seat)
    on_turn = args.seat or seat
    calls = service.get_legal_calls(AuctionModel.from_domain(auction), on_turn)
    _emit(
        {
            "seat": on_turn.value,
            "isComplete": auction.is_complete,
            "calls": [call.to_wire() for call in calls],
        }
    )


def cmd_solve(args: argparse.Namespace, settings: EngineSettings) -> None:
    deal = deal_from_pbn(args.deal, dealer=args.dealer, vulnerability=args.vulnerability)
    _emit(service.solve_deal(DealModel.from_domain(deal)).to_wire())


def cmd_simulate(args: argparse.Namespace, settings: EngineSettings) -> None:
    from bots.arena import STRATEGY_REGISTRY, run_match

    if args.strategy not in STRATEGY_REGISTRY:
        raise EngineError(f"Unknown strategy {args.strategy!r}.")
    contract = parse_contract(args.contract, args.declarer)
    constraints = _read_constraints(args.constraints).to_domain(settings.max_attempts)
    _emit(
        run_match(
            contract,
            n_deals=args.deals,
            seed=args.seed,
            strategy=args.strategy,
            constraints=constraints,
        )
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bridge-engine", description="Contract bridge rules engine.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper, help="Override BRIDGE_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a random deal.")
    generate.add_argument("--seed", type=int)
    generate.add_argument("--max-attempts", type=int)
    generate.add_argument("--dealer", type=_seat)
    generate.add_argument("--vulnerability", type=_vulnerability)
    generate.add_argument("--constraints", help="Path to a JSON constraints file, or - for stdin.")
    generate.add_argument("--pbn", action="store_true", help="Print the deal as a PBN string.")
    generate.set_defaults(handler=cmd_generate)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate a hand given in PBN (S.H.D.C).")
    evaluate.add_argument("hand")
    evaluate.set_defaults(handler=cmd_evaluate)

    score = subparsers.add_parser("score", help="Score a played contract.")
    score.add_argument("contract", help="e.g. 3NT, 4S, 4SX, 6HXX")
    score.add_argument("tricks", type=int, help="Tricks won by declarer's side.")
    score.add_argument("--declarer", type=_seat, default=Seat.SOUTH)
    score.add_argument("--vulnerability", type=_vulnerability, default=Vulnerability.NONE)
    score.add_argument("--breakdown", action="store_true")
    score.set_defaults(handler=cmd_score)

    legal_calls = subparsers.add_parser("legal-calls", help="List legal calls after an auction.")
    legal_calls.add_argument("calls", nargs="*", help="Calls so far, e.g. 1C P 1H X.")
    legal_calls.add_argument("--dealer", type=_seat, default=Seat.NORTH)
    legal_calls.add_argument("--seat", type=_seat, help="Seat to list calls for; defaults to the seat on turn.")
    legal_calls.set_defaults(handler=cmd_legal_calls)

    solve = subparsers.add_parser("solve", help="Double dummy analysis of a PBN deal.")
    solve.add_argument("deal")
    solve.add_argument("--dealer", type=_seat, default=Seat.NORTH)
    solve.add_argument("--vulnerability", type=_vulnerability, default=Vulnerability.NONE)
    solve.set_defaults(handler=cmd_solve)

    simulate = subparsers.add_parser("simulate", help="Play random deals out in a fixed contract.")
    simulate.add_argument("contract")
    simulate.add_argument("--declarer", type=_seat, default=Seat.SOUTH)
    simulate.add_argument("--deals", type=int, default=10)
    simulate.add_argument("--seed", type=int)
    simulate.add_argument("--strategy", default="random")
    simulate.add_argument("--constraints", help="Path to a JSON constraints file, or - for stdin.")
    simulate.set_defaults(handler=cmd_simulate)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))

    try:
        settings = EngineSettings.from_env()
    except ValidationError as exc:
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    configure_logging(args.log_level or settings.log_level)

    try:
        args.handler(args, settings)
    except (EngineError, ValidationError, argparse.ArgumentTypeError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
