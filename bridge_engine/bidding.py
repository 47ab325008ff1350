"""Auction legality rules, completion detection and contract extraction.

An auction is an immutable, append-only log of calls. ``add_call`` is the only
way to grow one: it validates the new entry against the prior snapshot and
returns a fresh ``Auction``, leaving its input untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .cards import STRAIN_ORDER, STRAIN_RANK, BidSuit, EngineError, Seat, next_seat, same_side

MIN_LEVEL = 1
MAX_LEVEL = 7
BOOK = 6


class BiddingError(EngineError, ValueError):
    """Base class for bidding related errors."""


class AuctionComplete(BiddingError):
    """Raised when a call is appended to an auction that has already ended."""

    def __init__(self) -> None:
        super().__init__("Cannot add call to completed auction")


class IllegalCall(BiddingError):
    """Raised when a call breaks the legality rules."""

    def __init__(self, call: "Call", reason: Optional[str] = None) -> None:
        message = f"Illegal call: {format_call(call)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.call = call


class NoBidsInAuction(BiddingError):
    """Raised when a declarer is requested from an auction without bids."""

    def __init__(self) -> None:
        super().__init__("No bids in auction; cannot determine declarer")


@dataclass(frozen=True)
class Bid:
    level: int
    strain: BidSuit

    def __post_init__(self) -> None:
        if not MIN_LEVEL <= self.level <= MAX_LEVEL:
            raise BiddingError(f"Bid level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {self.level}.")

    def __str__(self) -> str:
        return f"{self.level}{self.strain.value}"


@dataclass(frozen=True)
class Pass:
    def __str__(self) -> str:
        return "P"


@dataclass(frozen=True)
class Double:
    def __str__(self) -> str:
        return "X"


@dataclass(frozen=True)
class Redouble:
    def __str__(self) -> str:
        return "XX"


Call = Union[Bid, Pass, Double, Redouble]

PASS = Pass()
DOUBLE = Double()
REDOUBLE = Redouble()

# Every contract bid in ascending order, 1C through 7NT.
ALL_BIDS: Tuple[Bid, ...] = tuple(
    Bid(level, strain) for level in range(MIN_LEVEL, MAX_LEVEL + 1) for strain in STRAIN_ORDER
)


def format_call(call: Call) -> str:
    return str(call)


def parse_call(text: str) -> Call:
    """Parse the short notation used by ``format_call`` (``1C``, ``3NT``, ``P``, ``X``, ``XX``)."""
    normalized = text.strip().upper()
    if normalized in ("P", "PASS"):
        return PASS
    if normalized == "X":
        return DOUBLE
    if normalized == "XX":
        return REDOUBLE
    if len(normalized) >= 2 and normalized[0].isdigit():
        try:
            return Bid(int(normalized[0]), BidSuit(normalized[1:]))
        except ValueError as exc:
            raise BiddingError(f"Cannot parse call {text!r}.") from exc
    raise BiddingError(f"Cannot parse call {text!r}.")


@dataclass(frozen=True)
class AuctionEntry:
    seat: Seat
    call: Call


@dataclass(frozen=True)
class Auction:
    entries: Tuple[AuctionEntry, ...] = ()
    is_complete: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def next_seat(self) -> Optional[Seat]:
        """Seat expected to call next, or None when empty or finished."""
        if self.is_complete or not self.entries:
            return None
        return next_seat(self.entries[-1].seat)

    def add(self, seat: Seat, call: Call) -> "Auction":
        return add_call(self, AuctionEntry(seat, call))


@dataclass(frozen=True)
class Contract:
    level: int
    strain: BidSuit
    declarer: Seat
    doubled: bool = False
    redoubled: bool = False

    @property
    def required_tricks(self) -> int:
        return self.level + BOOK

    def __str__(self) -> str:
        suffix = "XX" if self.redoubled else "X" if self.doubled else ""
        return f"{self.level}{self.strain.value}{suffix} by {self.declarer.value}"


def bid_key(bid: Bid) -> Tuple[int, int]:
    return bid.level, STRAIN_RANK[bid.strain]


def compare_bids(a: Bid, b: Bid) -> int:
    """Return -1, 0 or 1 as ``a`` ranks below, equal to or above ``b``."""
    key_a, key_b = bid_key(a), bid_key(b)
    return (key_a > key_b) - (key_a < key_b)


def _last_non_pass(auction: Auction) -> Optional[AuctionEntry]:
    for entry in reversed(auction.entries):
        if not isinstance(entry.call, Pass):
            return entry
    return None


def _last_bid(auction: Auction) -> Optional[AuctionEntry]:
    for entry in reversed(auction.entries):
        if isinstance(entry.call, Bid):
            return entry
    return None


def is_legal_call(auction: Auction, call: Call, seat: Seat) -> bool:
    """Check whether ``seat`` may make ``call`` given the auction so far.

    Turn order is not considered here; ``add_call`` enforces it separately.
    """
    if auction.is_complete:
        return False

    if isinstance(call, Pass):
        return True

    if isinstance(call, Bid):
        last = _last_bid(auction)
        if last is None:
            return True
        assert isinstance(last.call, Bid)
        return compare_bids(call, last.call) > 0

    last_action = _last_non_pass(auction)
    if last_action is None:
        return False

    if isinstance(call, Double):
        return isinstance(last_action.call, Bid) and not same_side(last_action.seat, seat)

    if isinstance(call, Redouble):
        return isinstance(last_action.call, Double) and not same_side(last_action.seat, seat)

    return False


def is_auction_complete(auction: Auction) -> bool:
    """True after four opening passes, or three passes following any other call."""
    entries = auction.entries
    if len(entries) < 4:
        return False
    if not all(isinstance(entry.call, Pass) for entry in entries[-3:]):
        return False
    if len(entries) == 4 and isinstance(entries[0].call, Pass):
        return True
    return any(not isinstance(entry.call, Pass) for entry in entries[:-3])


def add_call(auction: Auction, entry: AuctionEntry) -> Auction:
    """Return a new auction with ``entry`` appended.

    Raises:
        AuctionComplete: the auction has already ended.
        IllegalCall: the call breaks the legality rules or is out of turn.
    """
    if auction.is_complete:
        raise AuctionComplete()

    if auction.entries and entry.seat is not next_seat(auction.entries[-1].seat):
        raise IllegalCall(entry.call, f"{entry.seat.value} is out of turn")

    if not is_legal_call(auction, entry.call, entry.seat):
        raise IllegalCall(entry.call)

    extended = Auction(entries=auction.entries + (entry,))
    return Auction(entries=extended.entries, is_complete=is_auction_complete(extended))


def get_declarer(auction: Auction) -> Seat:
    """Return the first player of the final bidder's side to name the final strain."""
    last = _last_bid(auction)
    if last is None:
        raise NoBidsInAuction()
    assert isinstance(last.call, Bid)
    final_strain = last.call.strain

    for entry in auction.entries:
        if (
            isinstance(entry.call, Bid)
            and entry.call.strain is final_strain
            and same_side(entry.seat, last.seat)
        ):
            return entry.seat
    return last.seat


def get_contract(auction: Auction) -> Optional[Contract]:
    """Extract the final contract, or None when the auction holds no bid (passed out)."""
    last = _last_bid(auction)
    if last is None:
        return None
    assert isinstance(last.call, Bid)

    # Legality already guarantees a trailing double or redouble applies to the last bid.
    last_action = _last_non_pass(auction)
    doubled = last_action is not None and isinstance(last_action.call, Double)
    redoubled = last_action is not None and isinstance(last_action.call, Redouble)

    return Contract(
        level=last.call.level,
        strain=last.call.strain,
        declarer=get_declarer(auction),
        doubled=doubled,
        redoubled=redoubled,
    )


def get_legal_calls(auction: Auction, seat: Seat) -> List[Call]:
    """Pass, then every bid in ascending order, then double and redouble, filtered by legality."""
    if auction.is_complete:
        return []
    candidates: List[Call] = [PASS, *ALL_BIDS, DOUBLE, REDOUBLE]
    return [call for call in candidates if is_legal_call(auction, call, seat)]
