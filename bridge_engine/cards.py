"""Card, seat and hand vocabulary for contract bridge."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

HAND_SIZE = 13


class EngineError(Exception):
    """Base class for every rules-engine failure."""


class InvalidHandSize(EngineError, ValueError):
    """Raised when a hand is built from anything other than 13 cards."""

    def __init__(self, size: int) -> None:
        super().__init__(f"Hand must have exactly {HAND_SIZE} cards, got {size}")
        self.size = size


class InvalidHand(EngineError, ValueError):
    """Raised when a hand repeats a card."""


class Suit(Enum):
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value


# Rank order from lowest to highest for trick resolution.
RANK_ORDER: list[Rank] = list(Rank)

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

# High card points (4-3-2-1).
HCP_VALUES: dict[Rank, int] = {
    Rank.ACE: 4,
    Rank.KING: 3,
    Rank.QUEEN: 2,
    Rank.JACK: 1,
}

# Suit-length vectors are always ordered Spades, Hearts, Diamonds, Clubs.
SUIT_ORDER: list[Suit] = [Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS]


class Seat(Enum):
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    def __str__(self) -> str:
        return self.value


# Clockwise table order, which is also the dealing order.
SEATS: list[Seat] = [Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST]


def next_seat(seat: Seat) -> Seat:
    return SEATS[(SEATS.index(seat) + 1) % 4]


def partner_seat(seat: Seat) -> Seat:
    return SEATS[(SEATS.index(seat) + 2) % 4]


def same_side(a: Seat, b: Seat) -> bool:
    """Return True if both seats belong to the same partnership."""
    return a is b or partner_seat(a) is b


class Vulnerability(Enum):
    NONE = "None"
    NORTH_SOUTH = "NS"
    EAST_WEST = "EW"
    BOTH = "Both"

    def __str__(self) -> str:
        return self.value

    def is_vulnerable(self, seat: Seat) -> bool:
        if self is Vulnerability.BOTH:
            return True
        if self is Vulnerability.NORTH_SOUTH:
            return seat in (Seat.NORTH, Seat.SOUTH)
        if self is Vulnerability.EAST_WEST:
            return seat in (Seat.EAST, Seat.WEST)
        return False


class BidSuit(Enum):
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    NO_TRUMP = "NT"

    def __str__(self) -> str:
        return self.value

    @property
    def trump(self) -> Optional[Suit]:
        """The trump suit this strain designates, or None for no-trump."""
        if self is BidSuit.NO_TRUMP:
            return None
        return Suit(self.value)


# Strain order for bid comparison: C < D < H < S < NT.
STRAIN_ORDER: list[BidSuit] = list(BidSuit)

STRAIN_RANK: dict[BidSuit, int] = {strain: index + 1 for index, strain in enumerate(STRAIN_ORDER)}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    suit: Suit
    rank: Rank

    def hcp(self) -> int:
        return HCP_VALUES.get(self.rank, 0)

    @property
    def code(self) -> str:
        return f"{self.suit.value}{self.rank.value}"

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Parse a two-letter code such as ``SA`` or ``HT``."""
        normalized = code.strip().upper()
        if len(normalized) != 2:
            raise ValueError(f"Card code must be two characters, got {code!r}")
        return cls(Suit(normalized[0]), Rank(normalized[1]))

    def __str__(self) -> str:
        return self.code


def card_strength(card: Card) -> int:
    """Return an integer strength used for ordering cards within a suit."""
    return RANK_STRENGTH[card.rank]


def beats(candidate: Card, current: Card, led_suit: Suit, trump: Optional[Suit]) -> bool:
    """Return True if candidate wins over current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = trump is not None and candidate.suit is trump
    current_trump = trump is not None and current.suit is trump

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False

    if candidate.suit is current.suit:
        return card_strength(candidate) > card_strength(current)

    if candidate.suit is led_suit and current.suit is not led_suit:
        return True

    return False


@dataclass(frozen=True)
class Hand:
    """Exactly thirteen distinct cards held by one seat."""

    cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        cards = tuple(self.cards)
        object.__setattr__(self, "cards", cards)
        if len(cards) != HAND_SIZE:
            raise InvalidHandSize(len(cards))
        if len(set(cards)) != HAND_SIZE:
            raise InvalidHand("Hand contains duplicate cards.")

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def cards_in_suit(self, suit: Suit) -> List[Card]:
        return [card for card in self.cards if card.suit is suit]


def create_hand(cards: Iterable[Card]) -> Hand:
    return Hand(tuple(cards))


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
