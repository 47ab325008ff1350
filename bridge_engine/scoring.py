"""Duplicate bridge scoring."""

from __future__ import annotations

from dataclasses import dataclass

from .bidding import Contract
from .cards import BidSuit, EngineError, Seat, Vulnerability

TOTAL_TRICKS = 13
GAME_THRESHOLD = 100


class ScoringError(EngineError, ValueError):
    """Base class for scoring issues."""


@dataclass(frozen=True)
class ScoreBreakdown:
    """Components of a declarer-side score; ``total`` is positive when made."""

    trick_points: int = 0
    game_bonus: int = 0
    slam_bonus: int = 0
    insult_bonus: int = 0
    overtrick_points: int = 0
    undertrick_penalty: int = 0

    @property
    def made(self) -> bool:
        return self.undertrick_penalty == 0

    @property
    def total(self) -> int:
        if not self.made:
            return -self.undertrick_penalty
        return (
            self.trick_points
            + self.game_bonus
            + self.slam_bonus
            + self.insult_bonus
            + self.overtrick_points
        )


def is_vulnerable(declarer: Seat, vulnerability: Vulnerability) -> bool:
    return vulnerability.is_vulnerable(declarer)


def calculate_trick_points(contract: Contract) -> int:
    """Contracted trick points, including the double/redouble multiplier."""
    if contract.strain in (BidSuit.CLUBS, BidSuit.DIAMONDS):
        base = 20 * contract.level
    elif contract.strain in (BidSuit.HEARTS, BidSuit.SPADES):
        base = 30 * contract.level
    else:
        base = 40 + 30 * (contract.level - 1)

    if contract.redoubled:
        return base * 4
    if contract.doubled:
        return base * 2
    return base


def is_game(contract: Contract) -> bool:
    return calculate_trick_points(contract) >= GAME_THRESHOLD


def _trick_value(strain: BidSuit) -> int:
    # Only the first no-trump trick is worth 40; overtricks score 30.
    if strain in (BidSuit.CLUBS, BidSuit.DIAMONDS):
        return 20
    return 30


def _making_breakdown(contract: Contract, overtricks: int, vulnerable: bool) -> ScoreBreakdown:
    trick_points = calculate_trick_points(contract)

    if trick_points >= GAME_THRESHOLD:
        game_bonus = 500 if vulnerable else 300
    else:
        game_bonus = 50

    slam_bonus = 0
    if contract.level == 6:
        slam_bonus = 750 if vulnerable else 500
    elif contract.level == 7:
        slam_bonus = 1500 if vulnerable else 1000

    insult_bonus = 100 if contract.redoubled else 50 if contract.doubled else 0

    if contract.redoubled:
        overtrick_points = overtricks * (400 if vulnerable else 200)
    elif contract.doubled:
        overtrick_points = overtricks * (200 if vulnerable else 100)
    else:
        overtrick_points = overtricks * _trick_value(contract.strain)

    return ScoreBreakdown(
        trick_points=trick_points,
        game_bonus=game_bonus,
        slam_bonus=slam_bonus,
        insult_bonus=insult_bonus,
        overtrick_points=overtrick_points,
    )


def _doubled_penalty(undertricks: int, vulnerable: bool) -> int:
    total = 0
    for index in range(1, undertricks + 1):
        if vulnerable:
            total += 200 if index == 1 else 300
        elif index == 1:
            total += 100
        elif index <= 3:
            total += 200
        else:
            total += 300
    return total


def _penalty(contract: Contract, undertricks: int, vulnerable: bool) -> int:
    if contract.redoubled:
        return _doubled_penalty(undertricks, vulnerable) * 2
    if contract.doubled:
        return _doubled_penalty(undertricks, vulnerable)
    return undertricks * (100 if vulnerable else 50)


def score_breakdown(contract: Contract, tricks_won: int, vulnerability: Vulnerability) -> ScoreBreakdown:
    if not 0 <= tricks_won <= TOTAL_TRICKS:
        raise ScoringError(f"Tricks won must be between 0 and {TOTAL_TRICKS}, got {tricks_won}.")

    vulnerable = is_vulnerable(contract.declarer, vulnerability)
    required = contract.required_tricks
    if tricks_won >= required:
        return _making_breakdown(contract, tricks_won - required, vulnerable)
    return ScoreBreakdown(undertrick_penalty=_penalty(contract, required - tricks_won, vulnerable))


def calculate_score(contract: Contract, tricks_won: int, vulnerability: Vulnerability) -> int:
    """Declarer-side duplicate score. Positive when made, negative when defeated."""
    return score_breakdown(contract, tricks_won, vulnerability).total
