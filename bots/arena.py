"""Card-play arena: drives a full 13-trick play-out with pluggable strategies."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import Dict, List, Mapping, Optional, Tuple

from bridge_engine.bidding import Contract
from bridge_engine.cards import HAND_SIZE, SEATS, Card, Seat, next_seat, partner_seat
from bridge_engine.deal_generator import DealConstraints, generate_deal
from bridge_engine.deck import Deal
from bridge_engine.mechanics import ensure_legal_play
from bridge_engine.scoring import calculate_score
from bridge_engine.trick import TRICK_SIZE, Trick

from .base import PlayStrategy
from .random_bot import RandomPlayStrategy

STRATEGY_REGISTRY: Dict[str, type] = {
    "random": RandomPlayStrategy,
}


@dataclass(frozen=True)
class PlayOutResult:
    contract: Contract
    tricks: Tuple[Trick, ...]
    tricks_by_seat: Mapping[Seat, int]

    @property
    def declarer_tricks(self) -> int:
        declarer = self.contract.declarer
        return self.tricks_by_seat[declarer] + self.tricks_by_seat[partner_seat(declarer)]


@dataclass(frozen=True)
class SimulationResult:
    play: PlayOutResult
    score: int


def play_out(deal: Deal, contract: Contract, strategies: Mapping[Seat, PlayStrategy]) -> PlayOutResult:
    """Play every trick of ``deal``; declarer's left-hand opponent leads first."""
    trump = contract.strain.trump
    holdings: Dict[Seat, List[Card]] = {seat: list(deal.hands[seat]) for seat in SEATS}
    completed: List[Trick] = []
    leader = next_seat(contract.declarer)

    for _ in range(HAND_SIZE):
        current = Trick(trump_suit=trump)
        seat = leader
        for _ in range(TRICK_SIZE):
            card = strategies[seat].suggest_play(tuple(holdings[seat]), current, trump, tuple(completed))
            ensure_legal_play(holdings[seat], current, card)
            holdings[seat].remove(card)
            current = current.add_play(seat, card)
            seat = next_seat(seat)
        current = current.resolved()
        completed.append(current)
        assert current.winner is not None
        leader = current.winner

    counts = {seat: 0 for seat in SEATS}
    for trick in completed:
        assert trick.winner is not None
        counts[trick.winner] += 1
    return PlayOutResult(contract=contract, tricks=tuple(completed), tricks_by_seat=counts)


def simulate(deal: Deal, contract: Contract, strategies: Mapping[Seat, PlayStrategy]) -> SimulationResult:
    result = play_out(deal, contract, strategies)
    return SimulationResult(play=result, score=calculate_score(contract, result.declarer_tricks, deal.vulnerability))


def build_strategies(name: str = "random", seed: Optional[int] = None) -> Dict[Seat, PlayStrategy]:
    factory = STRATEGY_REGISTRY[name]
    rng = Random(seed)
    return {seat: factory(rng=Random(rng.getrandbits(32))) for seat in SEATS}


def run_match(
    contract: Contract,
    *,
    n_deals: int = 10,
    seed: Optional[int] = None,
    strategy: str = "random",
    constraints: Optional[DealConstraints] = None,
) -> dict:
    """Deal and play ``n_deals`` boards in ``contract``; returns per-board results and totals."""
    rng = Random(seed)
    strategies = build_strategies(strategy, seed)
    base = constraints or DealConstraints()
    history = []
    for _ in range(n_deals):
        generated = generate_deal(base, rng=rng)
        outcome = simulate(generated.deal, contract, strategies)
        history.append(
            {
                "declarer_tricks": outcome.play.declarer_tricks,
                "score": outcome.score,
                "made": outcome.play.declarer_tricks >= contract.required_tricks,
            }
        )
    total = sum(entry["score"] for entry in history)
    return {
        "contract": str(contract),
        "boards": len(history),
        "made": sum(1 for entry in history if entry["made"]),
        "average_score": total / len(history) if history else 0.0,
        "history": history,
    }
