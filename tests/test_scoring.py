import pytest

from bridge_engine.bidding import Contract
from bridge_engine.cards import BidSuit, Seat, Vulnerability
from bridge_engine.scoring import (
    ScoringError,
    calculate_score,
    calculate_trick_points,
    is_game,
    score_breakdown,
)

NV = Vulnerability.NONE
VUL = Vulnerability.BOTH


def contract(level, strain, *, declarer=Seat.SOUTH, doubled=False, redoubled=False):
    return Contract(level=level, strain=BidSuit(strain), declarer=declarer, doubled=doubled, redoubled=redoubled)


@pytest.mark.parametrize(
    "played, tricks, vulnerability, expected",
    [
        (contract(1, "C"), 7, NV, 70),
        (contract(3, "NT"), 9, NV, 400),
        (contract(4, "H"), 10, VUL, 620),
        (contract(6, "NT"), 12, NV, 990),
        (contract(3, "NT", doubled=True), 6, NV, -500),
        (contract(2, "H", doubled=True), 8, NV, 470),
    ],
)
def test_reference_scores(played, tricks, vulnerability, expected):
    assert calculate_score(played, tricks, vulnerability) == expected


def test_trick_points_by_strain():
    assert calculate_trick_points(contract(2, "D")) == 40
    assert calculate_trick_points(contract(2, "S")) == 60
    assert calculate_trick_points(contract(2, "NT")) == 70
    assert calculate_trick_points(contract(2, "NT", doubled=True)) == 140
    assert calculate_trick_points(contract(2, "NT", redoubled=True)) == 280


def test_game_threshold():
    assert is_game(contract(3, "NT"))
    assert is_game(contract(4, "S"))
    assert is_game(contract(5, "C"))
    assert not is_game(contract(4, "D"))
    assert is_game(contract(2, "H", doubled=True))


def test_undoubled_overtricks():
    assert calculate_score(contract(4, "S"), 11, NV) == 450
    assert calculate_score(contract(1, "NT"), 8, NV) == 120
    assert calculate_score(contract(3, "C"), 11, NV) == 150


def test_slam_bonuses():
    assert calculate_score(contract(7, "NT"), 13, VUL) == 2220
    assert calculate_score(contract(6, "S", redoubled=True), 13, NV) == 1820


def test_undertrick_schedules():
    assert calculate_score(contract(4, "S"), 8, NV) == -100
    assert calculate_score(contract(4, "S"), 8, VUL) == -200
    assert calculate_score(contract(4, "S", doubled=True), 6, NV) == -800
    assert calculate_score(contract(4, "S", doubled=True), 7, VUL) == -800
    assert calculate_score(contract(4, "S", redoubled=True), 9, NV) == -200
    assert calculate_score(contract(7, "NT", doubled=True), 0, NV) == -3500


def test_vulnerability_follows_declarer():
    north_south = Vulnerability.NORTH_SOUTH
    assert calculate_score(contract(4, "H", declarer=Seat.NORTH), 10, north_south) == 620
    assert calculate_score(contract(4, "H", declarer=Seat.EAST), 10, north_south) == 420


def test_breakdown_matches_score():
    breakdown = score_breakdown(contract(2, "H", doubled=True), 9, NV)
    assert breakdown.made
    assert breakdown.trick_points == 120
    assert breakdown.game_bonus == 300
    assert breakdown.insult_bonus == 50
    assert breakdown.overtrick_points == 100
    assert breakdown.total == calculate_score(contract(2, "H", doubled=True), 9, NV) == 570

    failed = score_breakdown(contract(3, "NT", doubled=True), 6, NV)
    assert not failed.made
    assert failed.undertrick_penalty == 500
    assert failed.total == -500


@pytest.mark.parametrize("tricks", [-1, 14])
def test_trick_count_out_of_range(tricks):
    with pytest.raises(ScoringError):
        calculate_score(contract(1, "C"), tricks, NV)
