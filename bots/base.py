"""Common play strategy interface."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from bridge_engine.cards import Card, EngineError, Suit
from bridge_engine.trick import Trick


class NoLegalPlays(EngineError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("No legal plays available")


@runtime_checkable
class PlayStrategy(Protocol):
    """Chooses a card for the seat on play."""

    name: str

    def suggest_play(
        self,
        hand: Sequence[Card],
        current_trick: Trick,
        trump_suit: Optional[Suit],
        previous_tricks: Sequence[Trick],
    ) -> Card:
        """Return one of the legal cards in ``hand`` for ``current_trick``."""
        ...
