import logging
from random import Random

import pytest

from bridge_engine.cards import SEATS, EngineError, Seat, Suit, Vulnerability
from bridge_engine.deal_generator import (
    DealConstraints,
    InvalidConstraints,
    MaxAttemptsExceeded,
    SeatConstraint,
    check_constraints,
    check_seat_constraint,
    generate_deal,
)
from bridge_engine.deck import build_deck, deal_from_pbn
from bridge_engine.hand_evaluator import calculate_hcp, get_suit_length, is_balanced


def seat_cards(deal):
    return {seat: tuple(deal.hand(seat)) for seat in SEATS}


def test_generated_deal_is_a_full_deck():
    result = generate_deal(DealConstraints(seed=1))
    cards = list(result.deal.cards())
    assert len(cards) == 52
    assert set(cards) == set(build_deck())
    assert sum(calculate_hcp(result.deal.hand(seat)) for seat in SEATS) == 40
    assert result.iterations == 1
    assert result.relaxation_steps == 0


def test_seeded_generation_is_deterministic():
    first = generate_deal(DealConstraints(seed=42))
    second = generate_deal(DealConstraints(seed=42))
    other = generate_deal(DealConstraints(seed=43))
    assert seat_cards(first.deal) == seat_cards(second.deal)
    assert seat_cards(first.deal) != seat_cards(other.deal)


def test_injected_rng_wins_over_seed():
    first = generate_deal(DealConstraints(seed=1), rng=Random(99))
    second = generate_deal(DealConstraints(seed=2), rng=Random(99))
    assert seat_cards(first.deal) == seat_cards(second.deal)


def test_dealer_and_vulnerability_are_carried():
    result = generate_deal(DealConstraints(dealer=Seat.WEST, vulnerability=Vulnerability.BOTH, seed=3))
    assert result.deal.dealer is Seat.WEST
    assert result.deal.vulnerability is Vulnerability.BOTH


def test_south_strong_notrump_range():
    seats = (SeatConstraint(seat=Seat.SOUTH, min_hcp=15, max_hcp=17, balanced=True),)
    checked = 0
    for seed in range(7, 12):
        constraints = DealConstraints(seats=seats, seed=seed)
        try:
            result = generate_deal(constraints)
        except MaxAttemptsExceeded:
            continue
        south = result.deal.hand(Seat.SOUTH)
        assert 15 <= calculate_hcp(south) <= 17
        assert is_balanced(get_suit_length(south))
        checked += 1
    assert checked > 0


def test_suit_length_constraints():
    constraints = DealConstraints(
        seats=(
            SeatConstraint(
                seat=Seat.NORTH,
                min_length={Suit.SPADES: 5},
                max_length={Suit.HEARTS: 2},
            ),
        ),
        seed=11,
    )
    result = generate_deal(constraints)
    spades, hearts, _, _ = get_suit_length(result.deal.hand(Seat.NORTH))
    assert spades >= 5
    assert hearts <= 2
    assert check_constraints(result.deal, constraints)


def test_min_length_any_is_disjunctive():
    deal = deal_from_pbn("N:AKQJ.AKQ.AKQ.AKQ T987.JT9.JT9.JT9 6543.876.876.876 2.5432.5432.5432")
    west = deal.hand(Seat.WEST)
    assert check_seat_constraint(west, SeatConstraint(seat=Seat.WEST, min_length_any={Suit.SPADES: 5, Suit.CLUBS: 4}))
    assert not check_seat_constraint(west, SeatConstraint(seat=Seat.WEST, min_length_any={Suit.SPADES: 5, Suit.CLUBS: 5}))


def test_unconstrained_seat_always_passes():
    deal = deal_from_pbn("N:AKQJ.AKQ.AKQ.AKQ T987.JT9.JT9.JT9 6543.876.876.876 2.5432.5432.5432")
    assert check_seat_constraint(deal.hand(Seat.EAST), SeatConstraint(seat=Seat.EAST))


def test_impossible_constraints_exhaust_the_budget(caplog):
    constraints = DealConstraints(
        seats=(SeatConstraint(seat=Seat.NORTH, min_hcp=38),),
        max_attempts=25,
        seed=5,
    )
    with caplog.at_level(logging.WARNING, logger="bridge_engine.deal_generator"):
        with pytest.raises(MaxAttemptsExceeded) as excinfo:
            generate_deal(constraints)
    assert excinfo.value.attempts == 25
    assert str(excinfo.value) == "Failed to generate deal after 25 attempts"
    assert "within 25 attempts" in caplog.text


def test_attempt_budget_must_be_positive():
    with pytest.raises(InvalidConstraints):
        DealConstraints(max_attempts=0)
    with pytest.raises(EngineError):
        DealConstraints(max_attempts=-5)
