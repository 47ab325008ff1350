"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .cards import Card, EngineError, Seat, Suit, beats

TRICK_SIZE = 4


class TrickError(EngineError, RuntimeError):
    """Raised when trick play breaks ordering constraints."""


class IncompleteTrick(TrickError):
    """Raised when a winner is requested before all four cards are down."""

    def __init__(self) -> None:
        super().__init__(f"Trick must have exactly {TRICK_SIZE} plays")


@dataclass(frozen=True)
class PlayedCard:
    seat: Seat
    card: Card


@dataclass(frozen=True)
class Trick:
    plays: Tuple[PlayedCard, ...] = ()
    trump_suit: Optional[Suit] = None
    winner: Optional[Seat] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "plays", tuple(self.plays))

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == TRICK_SIZE

    def led_suit(self) -> Optional[Suit]:
        return self.plays[0].card.suit if self.plays else None

    def add_play(self, seat: Seat, card: Card) -> "Trick":
        """Return a new trick with the play appended."""
        if self.is_full():
            raise TrickError("Trick already complete.")
        if any(play.seat is seat for play in self.plays):
            raise TrickError(f"{seat.value} has already played to this trick.")
        return replace(self, plays=self.plays + (PlayedCard(seat, card),))

    def resolved(self) -> "Trick":
        """Return a copy with the winner filled in."""
        return replace(self, winner=get_trick_winner(self))


def get_trick_winner(trick: Trick) -> Seat:
    """Highest trump wins if any trump was played, otherwise the highest card of the led suit."""
    if len(trick.plays) != TRICK_SIZE:
        raise IncompleteTrick()
    led = trick.led_suit()
    assert led is not None
    winning = trick.plays[0]
    for play in trick.plays[1:]:
        if beats(play.card, winning.card, led, trick.trump_suit):
            winning = play
    return winning.seat
