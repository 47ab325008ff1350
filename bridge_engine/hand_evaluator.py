"""Hand evaluation: high card points, shape and distribution.

Evaluation goes through the ``HandEvaluationStrategy`` protocol so further
point-count methods can be plugged in next to ``HcpStrategy`` without callers
changing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Protocol, Tuple, runtime_checkable

from .cards import SUIT_ORDER, Card, Hand, Suit

SuitLength = Tuple[int, int, int, int]

# Sorted descending; every other pattern counts as unbalanced.
BALANCED_PATTERNS: frozenset[SuitLength] = frozenset({(4, 3, 3, 3), (4, 4, 3, 2), (5, 3, 3, 2)})

SHORTNESS_POINTS: Dict[int, int] = {0: 3, 1: 2, 2: 1}

_SUIT_INDEX: Dict[Suit, int] = {suit: index for index, suit in enumerate(SUIT_ORDER)}


@dataclass(frozen=True)
class DistributionPoints:
    shortness: int
    length: int

    @property
    def total(self) -> int:
        return self.shortness + self.length


@dataclass(frozen=True)
class HandEvaluation:
    hcp: int
    distribution: DistributionPoints
    shape: SuitLength
    total_points: int
    strategy: str


@runtime_checkable
class HandEvaluationStrategy(Protocol):
    name: str

    def evaluate(self, hand: Hand) -> HandEvaluation:
        ...


def calculate_hcp(cards: Iterable[Card]) -> int:
    """Sum of high card points (A=4, K=3, Q=2, J=1)."""
    return sum(card.hcp() for card in cards)


def get_suit_length(cards: Iterable[Card]) -> SuitLength:
    """Return suit counts ordered Spades, Hearts, Diamonds, Clubs."""
    counts = [0, 0, 0, 0]
    for card in cards:
        counts[_SUIT_INDEX[card.suit]] += 1
    return counts[0], counts[1], counts[2], counts[3]


def calculate_hcp_and_shape(cards: Iterable[Card]) -> Tuple[int, SuitLength]:
    """Single pass over the cards for callers that need both figures."""
    hcp = 0
    counts = [0, 0, 0, 0]
    for card in cards:
        hcp += card.hcp()
        counts[_SUIT_INDEX[card.suit]] += 1
    return hcp, (counts[0], counts[1], counts[2], counts[3])


def is_balanced(shape: SuitLength) -> bool:
    """True for 4-3-3-3, 4-4-3-2 and 5-3-3-2 in any suit order."""
    ordered = tuple(sorted(shape, reverse=True))
    return ordered in BALANCED_PATTERNS


def calculate_distribution_points(shape: SuitLength) -> DistributionPoints:
    """Shortness (void 3, singleton 2, doubleton 1) plus one point per card beyond the fourth."""
    shortness = sum(SHORTNESS_POINTS.get(count, 0) for count in shape)
    length = sum(count - 4 for count in shape if count > 4)
    return DistributionPoints(shortness=shortness, length=length)


def get_cards_in_suit(cards: Iterable[Card], suit: Suit) -> List[Card]:
    return [card for card in cards if card.suit is suit]


class HcpStrategy:
    """Default point count: HCP plus shortness and length points."""

    name = "HCP"

    def evaluate(self, hand: Hand) -> HandEvaluation:
        hcp, shape = calculate_hcp_and_shape(hand)
        distribution = calculate_distribution_points(shape)
        return HandEvaluation(
            hcp=hcp,
            distribution=distribution,
            shape=shape,
            total_points=hcp + distribution.total,
            strategy=self.name,
        )


DEFAULT_STRATEGY: HandEvaluationStrategy = HcpStrategy()


def evaluate_hand(hand: Hand, strategy: HandEvaluationStrategy = DEFAULT_STRATEGY) -> HandEvaluation:
    return strategy.evaluate(hand)


def evaluate_hand_hcp(hand: Hand) -> HandEvaluation:
    return evaluate_hand(hand, DEFAULT_STRATEGY)
