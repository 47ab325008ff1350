"""Legal play generation for bridge."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, EngineError, Suit, card_label
from .trick import Trick


class InvalidPlay(EngineError, RuntimeError):
    """Raised when an illegal card play is attempted."""


def legal_plays(hand: Iterable[Card], lead_suit: Optional[Suit]) -> List[Card]:
    """Return the cards that may be played, in hand order.

    Following suit is compulsory; a hand void in the led suit may play anything.
    """
    cards = list(hand)
    if lead_suit is None:
        return cards
    following = [card for card in cards if card.suit is lead_suit]
    return following if following else cards


def legal_plays_for_trick(hand: Iterable[Card], trick: Trick) -> List[Card]:
    return legal_plays(hand, trick.led_suit())


def ensure_legal_play(hand: Iterable[Card], trick: Trick, card: Card) -> None:
    cards = list(hand)
    if card not in cards:
        raise InvalidPlay(f"{card_label(card)} is not in hand.")
    if card not in legal_plays_for_trick(cards, trick):
        raise InvalidPlay(f"{card_label(card)} does not follow suit.")
