from bridge_engine.cards import Card, Rank, Suit
from bridge_engine.deck import hand_from_pbn
from bridge_engine.hand_evaluator import (
    DistributionPoints,
    HandEvaluation,
    HandEvaluationStrategy,
    HcpStrategy,
    calculate_distribution_points,
    calculate_hcp,
    evaluate_hand,
    evaluate_hand_hcp,
    get_cards_in_suit,
    get_suit_length,
    is_balanced,
)


def test_hcp_of_strongest_hand():
    hand = hand_from_pbn("AKQJ.AKQ.AKQ.AKQ")
    assert calculate_hcp(hand) == 37


def test_hcp_counts_only_honours():
    assert calculate_hcp([Card(Suit.CLUBS, Rank.TEN), Card(Suit.CLUBS, Rank.NINE)]) == 0
    assert calculate_hcp([Card(Suit.CLUBS, Rank.JACK), Card(Suit.DIAMONDS, Rank.ACE)]) == 5


def test_suit_length_is_spades_first():
    hand = hand_from_pbn("2.5432.5432.5432")
    assert get_suit_length(hand) == (1, 4, 4, 4)
    assert sum(get_suit_length(hand)) == 13


def test_balanced_patterns():
    assert is_balanced((4, 3, 3, 3))
    assert is_balanced((3, 4, 2, 4))
    assert is_balanced((2, 3, 5, 3))
    assert not is_balanced((4, 4, 4, 1))
    assert not is_balanced((5, 4, 2, 2))
    assert not is_balanced((6, 3, 2, 2))


def test_distribution_points():
    assert calculate_distribution_points((4, 3, 3, 3)) == DistributionPoints(shortness=0, length=0)
    points = calculate_distribution_points((13, 0, 0, 0))
    assert points.shortness == 9
    assert points.length == 9
    assert points.total == 18
    assert calculate_distribution_points((5, 3, 3, 2)).total == 2


def test_evaluate_hand_default_strategy():
    hand = hand_from_pbn("AK432.K32.Q32.J2")
    evaluation = evaluate_hand(hand)
    assert evaluation.hcp == 13
    assert evaluation.shape == (5, 3, 3, 2)
    assert evaluation.distribution.total == 2
    assert evaluation.total_points == 15
    assert evaluation.strategy == "HCP"
    assert evaluate_hand_hcp(hand) == evaluation


def test_cards_in_suit():
    hand = hand_from_pbn("AK432.K32.Q32.J2")
    clubs = get_cards_in_suit(hand, Suit.CLUBS)
    assert clubs == [Card(Suit.CLUBS, Rank.JACK), Card(Suit.CLUBS, Rank.TWO)]


class LosingTrickStrategy:
    name = "flat"

    def evaluate(self, hand):
        return HandEvaluation(
            hcp=0,
            distribution=DistributionPoints(0, 0),
            shape=get_suit_length(hand),
            total_points=7,
            strategy=self.name,
        )


def test_strategies_are_pluggable():
    assert isinstance(HcpStrategy(), HandEvaluationStrategy)
    assert isinstance(LosingTrickStrategy(), HandEvaluationStrategy)
    evaluation = evaluate_hand(hand_from_pbn("AKQJ.AKQ.AKQ.AKQ"), LosingTrickStrategy())
    assert evaluation.strategy == "flat"
    assert evaluation.total_points == 7
