"""Constrained random deal generation.

Deals are produced by rejection sampling: shuffle, split into four hands in
N, E, S, W order, test every seat constraint, and retry until a candidate
passes or the attempt budget runs out. The random source is scoped to one call
so a seeded request always replays the same sequence of shuffles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .cards import HAND_SIZE, SEATS, SUIT_ORDER, Card, EngineError, Seat, Suit, Vulnerability
from .deck import Deal, build_deck, deal_from_deck
from .hand_evaluator import SuitLength, calculate_hcp, calculate_hcp_and_shape, get_suit_length, is_balanced

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


class InvalidConstraints(EngineError, ValueError):
    """Raised when a constraint set cannot be used to drive generation."""


class MaxAttemptsExceeded(EngineError, RuntimeError):
    """Raised when no candidate satisfied the constraints within the budget."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Failed to generate deal after {attempts} attempts")
        self.attempts = attempts


@dataclass(frozen=True)
class SeatConstraint:
    seat: Seat
    min_hcp: Optional[int] = None
    max_hcp: Optional[int] = None
    balanced: Optional[bool] = None
    min_length: Optional[Mapping[Suit, int]] = None
    max_length: Optional[Mapping[Suit, int]] = None
    # Satisfied when at least one listed suit reaches its length.
    min_length_any: Optional[Mapping[Suit, int]] = None

    @property
    def needs_hcp(self) -> bool:
        return self.min_hcp is not None or self.max_hcp is not None

    @property
    def needs_shape(self) -> bool:
        return (
            self.balanced is not None
            or self.min_length is not None
            or self.max_length is not None
            or self.min_length_any is not None
        )


@dataclass(frozen=True)
class DealConstraints:
    seats: Tuple[SeatConstraint, ...] = ()
    dealer: Seat = Seat.NORTH
    vulnerability: Vulnerability = Vulnerability.NONE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "seats", tuple(self.seats))
        if self.max_attempts < 1:
            raise InvalidConstraints(f"max_attempts must be positive, got {self.max_attempts}.")


@dataclass(frozen=True)
class DealGeneratorResult:
    deal: Deal
    iterations: int
    relaxation_steps: int = 0


def _check_hcp(hcp: int, constraint: SeatConstraint) -> bool:
    if constraint.min_hcp is not None and hcp < constraint.min_hcp:
        return False
    if constraint.max_hcp is not None and hcp > constraint.max_hcp:
        return False
    return True


def check_shape_constraint(shape: SuitLength, constraint: SeatConstraint) -> bool:
    if constraint.balanced is not None and constraint.balanced != is_balanced(shape):
        return False

    lengths = dict(zip(SUIT_ORDER, shape))

    if constraint.min_length:
        for suit, minimum in constraint.min_length.items():
            if lengths[suit] < minimum:
                return False

    if constraint.max_length:
        for suit, maximum in constraint.max_length.items():
            if lengths[suit] > maximum:
                return False

    if constraint.min_length_any is not None:
        if not any(lengths[suit] >= minimum for suit, minimum in constraint.min_length_any.items()):
            return False

    return True


def check_seat_constraint(cards: Iterable[Card], constraint: SeatConstraint) -> bool:
    if constraint.needs_hcp and constraint.needs_shape:
        hcp, shape = calculate_hcp_and_shape(cards)
        return _check_hcp(hcp, constraint) and check_shape_constraint(shape, constraint)
    if constraint.needs_hcp:
        return _check_hcp(calculate_hcp(cards), constraint)
    if constraint.needs_shape:
        return check_shape_constraint(get_suit_length(cards), constraint)
    return True


def _satisfies(hands: Mapping[Seat, Sequence[Card]], constraints: DealConstraints) -> bool:
    # Short-circuits on the first failing seat.
    return all(check_seat_constraint(hands[sc.seat], sc) for sc in constraints.seats)


def check_constraints(deal: Deal, constraints: DealConstraints) -> bool:
    return _satisfies({seat: deal.hands[seat].cards for seat in SEATS}, constraints)


def _split(cards: Sequence[Card]) -> Mapping[Seat, Sequence[Card]]:
    return {seat: cards[index * HAND_SIZE : (index + 1) * HAND_SIZE] for index, seat in enumerate(SEATS)}


def generate_deal(
    constraints: Optional[DealConstraints] = None,
    *,
    rng: Optional[Random] = None,
) -> DealGeneratorResult:
    """Generate a random deal satisfying the constraints via rejection sampling.

    An explicit ``rng`` wins; otherwise a fresh generator is seeded from
    ``constraints.seed``, or from system entropy when no seed is given.

    Raises:
        MaxAttemptsExceeded: no candidate qualified within ``max_attempts``.
    """
    if constraints is None:
        constraints = DealConstraints()
    if rng is None:
        rng = Random(constraints.seed) if constraints.seed is not None else Random()

    deck = build_deck()
    for attempt in range(1, constraints.max_attempts + 1):
        cards = list(deck)
        rng.shuffle(cards)
        if _satisfies(_split(cards), constraints):
            logger.debug("Accepted deal after %d attempt(s)", attempt)
            deal = deal_from_deck(cards, dealer=constraints.dealer, vulnerability=constraints.vulnerability)
            return DealGeneratorResult(deal=deal, iterations=attempt)

    logger.warning("No deal satisfied %d seat constraint(s) within %d attempts", len(constraints.seats), constraints.max_attempts)
    raise MaxAttemptsExceeded(constraints.max_attempts)
