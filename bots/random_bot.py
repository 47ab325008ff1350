"""Random play strategy used as the default card player."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from bridge_engine.cards import Card, Suit
from bridge_engine.mechanics import legal_plays_for_trick
from bridge_engine.trick import Trick

from .base import NoLegalPlays


class RandomPlayStrategy:
    name = "random"

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def suggest_play(
        self,
        hand: Sequence[Card],
        current_trick: Trick,
        trump_suit: Optional[Suit] = None,
        previous_tricks: Sequence[Trick] = (),
    ) -> Card:
        legal = legal_plays_for_trick(hand, current_trick)
        if not legal:
            raise NoLegalPlays()
        return self._rng.choice(legal)
