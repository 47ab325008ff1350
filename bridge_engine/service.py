"""Operation facade for the HTTP API and the CLI.

Every function takes wire models, runs exactly one engine operation and hands
back wire models or plain JSON values. Engine errors propagate unchanged so
each adapter can render them its own way.
"""

from __future__ import annotations

import logging
from random import Random
from typing import List, Optional

from . import bidding, deal_generator, hand_evaluator, mechanics, scoring, solver, trick
from .cards import Seat, Suit, Vulnerability
from .config import EngineSettings
from .schema import (
    AuctionEntryModel,
    AuctionModel,
    CardModel,
    ContractModel,
    DDSolutionModel,
    DealConstraintsModel,
    DealGeneratorResultModel,
    DealModel,
    HandEvaluationModel,
    HandModel,
    ScoreBreakdownModel,
    TrickModel,
    call_from_domain,
)

logger = logging.getLogger(__name__)


def default_solver() -> solver.DoubleDummySolver:
    """Return the endplay-backed solver, or raise ``SolverUnavailable``."""
    try:
        from .dds import EndplaySolver
    except ImportError as exc:
        logger.warning("endplay is not installed: %s", exc)
        raise solver.SolverUnavailable() from exc
    return EndplaySolver()


# Deals -------------------------------------------------------------------


def generate_deal(
    constraints: Optional[DealConstraintsModel] = None,
    *,
    settings: Optional[EngineSettings] = None,
    rng: Optional[Random] = None,
) -> DealGeneratorResultModel:
    settings = settings or EngineSettings()
    request = constraints or DealConstraintsModel()
    result = deal_generator.generate_deal(request.to_domain(settings.max_attempts), rng=rng)
    logger.info("Generated deal after %d iteration(s)", result.iterations)
    return DealGeneratorResultModel.from_domain(result)


def solve_deal(deal: DealModel, dd_solver: Optional[solver.DoubleDummySolver] = None) -> DDSolutionModel:
    dd_solver = dd_solver or default_solver()
    solution = solver.solve_deal(deal.to_domain(), dd_solver)
    return DDSolutionModel.from_domain(solution)


# Hand evaluation ---------------------------------------------------------


def evaluate_hand(hand: HandModel) -> HandEvaluationModel:
    return HandEvaluationModel.from_domain(hand_evaluator.evaluate_hand(hand.to_domain()))


def get_suit_length(hand: HandModel) -> List[int]:
    return list(hand_evaluator.get_suit_length(hand.to_domain()))


def is_balanced(hand: HandModel) -> bool:
    return hand_evaluator.is_balanced(hand_evaluator.get_suit_length(hand.to_domain()))


# Auction -----------------------------------------------------------------


def get_legal_calls(auction: AuctionModel, seat: Seat) -> list:
    calls = bidding.get_legal_calls(auction.to_domain(), seat)
    return [call_from_domain(call) for call in calls]


def add_call(auction: AuctionModel, entry: AuctionEntryModel) -> AuctionModel:
    try:
        updated = bidding.add_call(auction.to_domain(), entry.to_domain())
    except bidding.BiddingError as exc:
        logger.info("Rejected call: %s", exc)
        raise
    return AuctionModel.from_domain(updated)


def is_auction_complete(auction: AuctionModel) -> bool:
    return bidding.is_auction_complete(auction.to_domain())


def get_contract(auction: AuctionModel) -> Optional[ContractModel]:
    contract = bidding.get_contract(auction.to_domain())
    if contract is None:
        return None
    return ContractModel.from_domain(contract)


# Scoring -----------------------------------------------------------------


def calculate_score(contract: ContractModel, tricks_won: int, vulnerability: Vulnerability) -> int:
    return scoring.calculate_score(contract.to_domain(), tricks_won, vulnerability)


def score_breakdown(contract: ContractModel, tricks_won: int, vulnerability: Vulnerability) -> ScoreBreakdownModel:
    breakdown = scoring.score_breakdown(contract.to_domain(), tricks_won, vulnerability)
    return ScoreBreakdownModel.from_domain(breakdown)


# Play --------------------------------------------------------------------


def get_legal_plays(hand: HandModel, lead_suit: Optional[Suit] = None) -> List[CardModel]:
    # Mid-play holdings are shorter than 13 cards, so no Hand is built here.
    cards = mechanics.legal_plays(hand.card_list(), lead_suit)
    return [CardModel.from_domain(card) for card in cards]


def get_trick_winner(played: TrickModel) -> Seat:
    return trick.get_trick_winner(played.to_domain())
