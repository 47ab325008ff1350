"""Deck creation and deal partitioning for bridge."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Sequence

from .cards import (
    HAND_SIZE,
    RANK_ORDER,
    SEATS,
    SUIT_ORDER,
    Card,
    EngineError,
    Hand,
    Rank,
    Seat,
    Suit,
    Vulnerability,
    card_strength,
    create_hand,
    next_seat,
)

DECK_SIZE = 52


class InvalidDeal(EngineError, ValueError):
    """Raised when four hands do not partition the 52-card deck."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck (clubs first, two to ace within each suit)."""
    return [Card(suit, rank) for suit in Suit for rank in RANK_ORDER]


@dataclass(frozen=True)
class Deal:
    """Four hands covering the whole deck, plus dealer and vulnerability."""

    hands: Mapping[Seat, Hand]
    dealer: Seat = Seat.NORTH
    vulnerability: Vulnerability = Vulnerability.NONE

    def __post_init__(self) -> None:
        missing = [seat for seat in SEATS if seat not in self.hands]
        if missing:
            raise InvalidDeal(f"Deal is missing hands for {', '.join(seat.value for seat in missing)}.")
        hands = {seat: self.hands[seat] for seat in SEATS}
        cards = [card for hand in hands.values() for card in hand]
        if len(cards) != DECK_SIZE or len(set(cards)) != DECK_SIZE:
            raise InvalidDeal("Deal must contain each of the 52 cards exactly once.")
        object.__setattr__(self, "hands", MappingProxyType(hands))

    def __hash__(self) -> int:
        return hash((tuple(self.hands[seat] for seat in SEATS), self.dealer, self.vulnerability))

    def hand(self, seat: Seat) -> Hand:
        return self.hands[seat]

    def cards(self) -> Iterator[Card]:
        for seat in SEATS:
            yield from self.hands[seat]


def deal_from_deck(
    cards: Sequence[Card],
    *,
    dealer: Seat = Seat.NORTH,
    vulnerability: Vulnerability = Vulnerability.NONE,
) -> Deal:
    """Partition 52 cards into consecutive 13-card hands in N, E, S, W order."""
    if len(cards) != DECK_SIZE:
        raise InvalidDeal(f"Deck must contain exactly {DECK_SIZE} cards.")
    hands = {
        seat: create_hand(cards[index * HAND_SIZE : (index + 1) * HAND_SIZE])
        for index, seat in enumerate(SEATS)
    }
    return Deal(hands=hands, dealer=dealer, vulnerability=vulnerability)


def shuffled_deck(rng: Random) -> List[Card]:
    cards = build_deck()
    rng.shuffle(cards)
    return cards


def deal_four_hands(
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
    dealer: Seat = Seat.NORTH,
    vulnerability: Vulnerability = Vulnerability.NONE,
) -> Deal:
    """Deal four 13-card hands from a given deck or a freshly shuffled one."""
    if deck is not None:
        cards = list(deck)
    else:
        cards = shuffled_deck(rng if rng is not None else Random())
    return deal_from_deck(cards, dealer=dealer, vulnerability=vulnerability)


# PBN deal strings: "N:AKQ.JT9.876.5432 ..." listing hands clockwise from the first seat,
# suits as spades.hearts.diamonds.clubs and ranks high to low.

def hand_to_pbn(hand: Hand) -> str:
    holdings = []
    for suit in SUIT_ORDER:
        ranks = sorted(hand.cards_in_suit(suit), key=card_strength, reverse=True)
        holdings.append("".join(card.rank.value for card in ranks))
    return ".".join(holdings)


def hand_from_pbn(text: str) -> Hand:
    holdings = text.strip().split(".")
    if len(holdings) != 4:
        raise InvalidDeal(f"PBN hand needs four suit holdings, got {text!r}.")
    cards = []
    for suit, holding in zip(SUIT_ORDER, holdings):
        for letter in holding.upper():
            try:
                cards.append(Card(suit, Rank(letter)))
            except ValueError as exc:
                raise InvalidDeal(f"Unknown rank {letter!r} in PBN hand {text!r}.") from exc
    return create_hand(cards)


def deal_to_pbn(deal: Deal, first: Seat = Seat.NORTH) -> str:
    seat = first
    holdings = []
    for _ in range(4):
        holdings.append(hand_to_pbn(deal.hands[seat]))
        seat = next_seat(seat)
    return f"{first.value}:" + " ".join(holdings)


def deal_from_pbn(
    text: str,
    *,
    dealer: Seat = Seat.NORTH,
    vulnerability: Vulnerability = Vulnerability.NONE,
) -> Deal:
    try:
        prefix, body = text.strip().split(":", 1)
        seat = Seat(prefix.strip().upper())
    except ValueError as exc:
        raise InvalidDeal(f"PBN deal must start with a seat and a colon, got {text!r}.") from exc
    parts = body.split()
    if len(parts) != 4:
        raise InvalidDeal(f"PBN deal needs four hands, got {len(parts)}.")
    hands = {}
    for part in parts:
        hands[seat] = hand_from_pbn(part)
        seat = next_seat(seat)
    return Deal(hands=hands, dealer=dealer, vulnerability=vulnerability)
