"""Wire vocabulary shared by the HTTP API and the CLI.

Field names are camelCase on the wire (``isComplete``, ``tricksWon``,
``trumpSuit``...), enums travel as their single-letter codes, and calls are a
union discriminated on ``type``. Every model converts to and from the engine's
own dataclasses.
"""

from __future__ import annotations

from typing import Annotated, Dict, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .bidding import PASS, DOUBLE, REDOUBLE, Auction, AuctionEntry, Bid, Call, Contract, Double, Pass
from .cards import BidSuit, Card, Hand, Rank, Seat, Suit, Vulnerability, create_hand
from .deal_generator import DEFAULT_MAX_ATTEMPTS, DealConstraints, DealGeneratorResult, SeatConstraint
from .deck import Deal
from .hand_evaluator import HandEvaluation
from .scoring import ScoreBreakdown
from .solver import DDSolution, ParInfo
from .trick import PlayedCard, Trick


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class CardModel(WireModel):
    suit: Suit
    rank: Rank

    def to_domain(self) -> Card:
        return Card(self.suit, self.rank)

    @classmethod
    def from_domain(cls, card: Card) -> "CardModel":
        return cls(suit=card.suit, rank=card.rank)


class HandModel(WireModel):
    cards: List[CardModel]

    def card_list(self) -> List[Card]:
        """Cards without the 13-card check, for mid-play holdings."""
        return [card.to_domain() for card in self.cards]

    def to_domain(self) -> Hand:
        return create_hand(self.card_list())

    @classmethod
    def from_domain(cls, cards: Iterable[Card]) -> "HandModel":
        return cls(cards=[CardModel.from_domain(card) for card in cards])


class BidCall(WireModel):
    type: Literal["bid"] = "bid"
    level: int = Field(ge=1, le=7)
    strain: BidSuit

    def to_domain(self) -> Call:
        return Bid(self.level, self.strain)


class PassCall(WireModel):
    type: Literal["pass"] = "pass"

    def to_domain(self) -> Call:
        return PASS


class DoubleCall(WireModel):
    type: Literal["double"] = "double"

    def to_domain(self) -> Call:
        return DOUBLE


class RedoubleCall(WireModel):
    type: Literal["redouble"] = "redouble"

    def to_domain(self) -> Call:
        return REDOUBLE


CallModel = Annotated[Union[BidCall, PassCall, DoubleCall, RedoubleCall], Field(discriminator="type")]


def call_from_domain(call: Call) -> Union[BidCall, PassCall, DoubleCall, RedoubleCall]:
    if isinstance(call, Bid):
        return BidCall(level=call.level, strain=call.strain)
    if isinstance(call, Pass):
        return PassCall()
    if isinstance(call, Double):
        return DoubleCall()
    return RedoubleCall()


class AuctionEntryModel(WireModel):
    seat: Seat
    call: CallModel

    def to_domain(self) -> AuctionEntry:
        return AuctionEntry(self.seat, self.call.to_domain())

    @classmethod
    def from_domain(cls, entry: AuctionEntry) -> "AuctionEntryModel":
        return cls(seat=entry.seat, call=call_from_domain(entry.call))


class AuctionModel(WireModel):
    entries: List[AuctionEntryModel] = Field(default_factory=list)
    is_complete: bool = False

    def to_domain(self) -> Auction:
        return Auction(entries=tuple(entry.to_domain() for entry in self.entries), is_complete=self.is_complete)

    @classmethod
    def from_domain(cls, auction: Auction) -> "AuctionModel":
        return cls(
            entries=[AuctionEntryModel.from_domain(entry) for entry in auction.entries],
            is_complete=auction.is_complete,
        )


class ContractModel(WireModel):
    level: int = Field(ge=1, le=7)
    strain: BidSuit
    doubled: bool = False
    redoubled: bool = False
    declarer: Seat

    def to_domain(self) -> Contract:
        return Contract(
            level=self.level,
            strain=self.strain,
            declarer=self.declarer,
            doubled=self.doubled,
            redoubled=self.redoubled,
        )

    @classmethod
    def from_domain(cls, contract: Contract) -> "ContractModel":
        return cls(
            level=contract.level,
            strain=contract.strain,
            doubled=contract.doubled,
            redoubled=contract.redoubled,
            declarer=contract.declarer,
        )


class DealModel(WireModel):
    hands: Dict[Seat, HandModel]
    dealer: Seat = Seat.NORTH
    vulnerability: Vulnerability = Vulnerability.NONE

    def to_domain(self) -> Deal:
        hands = {seat: hand.to_domain() for seat, hand in self.hands.items()}
        return Deal(hands=hands, dealer=self.dealer, vulnerability=self.vulnerability)

    @classmethod
    def from_domain(cls, deal: Deal) -> "DealModel":
        return cls(
            hands={seat: HandModel.from_domain(hand) for seat, hand in deal.hands.items()},
            dealer=deal.dealer,
            vulnerability=deal.vulnerability,
        )


class PlayedCardModel(WireModel):
    card: CardModel
    seat: Seat


class TrickModel(WireModel):
    plays: List[PlayedCardModel] = Field(default_factory=list)
    trump_suit: Optional[Suit] = None
    winner: Optional[Seat] = None

    def to_domain(self) -> Trick:
        return Trick(
            plays=tuple(PlayedCard(play.seat, play.card.to_domain()) for play in self.plays),
            trump_suit=self.trump_suit,
            winner=self.winner,
        )

    @classmethod
    def from_domain(cls, trick: Trick) -> "TrickModel":
        return cls(
            plays=[PlayedCardModel(card=CardModel.from_domain(play.card), seat=play.seat) for play in trick.plays],
            trump_suit=trick.trump_suit,
            winner=trick.winner,
        )


class SeatConstraintModel(WireModel):
    seat: Seat
    min_hcp: Optional[int] = Field(None, ge=0)
    max_hcp: Optional[int] = Field(None, ge=0)
    balanced: Optional[bool] = None
    min_length: Optional[Dict[Suit, int]] = None
    max_length: Optional[Dict[Suit, int]] = None
    min_length_any: Optional[Dict[Suit, int]] = None

    def to_domain(self) -> SeatConstraint:
        return SeatConstraint(
            seat=self.seat,
            min_hcp=self.min_hcp,
            max_hcp=self.max_hcp,
            balanced=self.balanced,
            min_length=self.min_length,
            max_length=self.max_length,
            min_length_any=self.min_length_any,
        )


class DealConstraintsModel(WireModel):
    seats: List[SeatConstraintModel] = Field(default_factory=list)
    vulnerability: Optional[Vulnerability] = None
    dealer: Optional[Seat] = None
    max_attempts: Optional[int] = Field(None, gt=0)
    seed: Optional[int] = Field(None, ge=0)

    def to_domain(self, default_max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> DealConstraints:
        return DealConstraints(
            seats=tuple(seat.to_domain() for seat in self.seats),
            dealer=self.dealer or Seat.NORTH,
            vulnerability=self.vulnerability or Vulnerability.NONE,
            max_attempts=default_max_attempts if self.max_attempts is None else self.max_attempts,
            seed=self.seed,
        )


class DealGeneratorResultModel(WireModel):
    deal: DealModel
    iterations: int
    relaxation_steps: int = 0

    @classmethod
    def from_domain(cls, result: DealGeneratorResult) -> "DealGeneratorResultModel":
        return cls(
            deal=DealModel.from_domain(result.deal),
            iterations=result.iterations,
            relaxation_steps=result.relaxation_steps,
        )


class DistributionPointsModel(WireModel):
    shortness: int
    length: int
    total: int


class HandEvaluationModel(WireModel):
    hcp: int
    distribution: DistributionPointsModel
    shape: Tuple[int, int, int, int]
    total_points: int
    strategy: str

    @classmethod
    def from_domain(cls, evaluation: HandEvaluation) -> "HandEvaluationModel":
        return cls(
            hcp=evaluation.hcp,
            distribution=DistributionPointsModel(
                shortness=evaluation.distribution.shortness,
                length=evaluation.distribution.length,
                total=evaluation.distribution.total,
            ),
            shape=evaluation.shape,
            total_points=evaluation.total_points,
            strategy=evaluation.strategy,
        )


class ScoreBreakdownModel(WireModel):
    made: bool
    trick_points: int
    game_bonus: int
    slam_bonus: int
    insult_bonus: int
    overtrick_points: int
    undertrick_penalty: int
    total_points: int

    @classmethod
    def from_domain(cls, breakdown: ScoreBreakdown) -> "ScoreBreakdownModel":
        return cls(
            made=breakdown.made,
            trick_points=breakdown.trick_points,
            game_bonus=breakdown.game_bonus,
            slam_bonus=breakdown.slam_bonus,
            insult_bonus=breakdown.insult_bonus,
            overtrick_points=breakdown.overtrick_points,
            undertrick_penalty=breakdown.undertrick_penalty,
            total_points=breakdown.total,
        )


class ParContractModel(WireModel):
    level: int
    strain: BidSuit
    declarer: Seat
    doubled: bool
    overtricks: int


class ParInfoModel(WireModel):
    score: int
    contracts: List[ParContractModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, par: ParInfo) -> "ParInfoModel":
        return cls(
            score=par.score,
            contracts=[
                ParContractModel(
                    level=contract.level,
                    strain=contract.strain,
                    declarer=contract.declarer,
                    doubled=contract.doubled,
                    overtricks=contract.overtricks,
                )
                for contract in par.contracts
            ],
        )


class DDSolutionModel(WireModel):
    tricks: Dict[Seat, Dict[BidSuit, int]]
    par: Optional[ParInfoModel] = None

    @classmethod
    def from_domain(cls, solution: DDSolution) -> "DDSolutionModel":
        return cls(
            tricks={seat: dict(row) for seat, row in solution.tricks.items()},
            par=ParInfoModel.from_domain(solution.par) if solution.par is not None else None,
        )
