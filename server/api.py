"""REST API exposing the bridge rules engine under ``/api``."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import Field

from bridge_engine import service
from bridge_engine.cards import EngineError, Seat, Suit, Vulnerability
from bridge_engine.config import EngineSettings, configure_logging
from bridge_engine.schema import (
    AuctionEntryModel,
    AuctionModel,
    ContractModel,
    DealConstraintsModel,
    DealModel,
    HandModel,
    TrickModel,
    WireModel,
)
from bridge_engine.solver import DoubleDummySolver, SolverUnavailable

logger = logging.getLogger(__name__)


class GenerateDealRequest(WireModel):
    constraints: DealConstraintsModel = Field(default_factory=DealConstraintsModel)


class HandRequest(WireModel):
    hand: HandModel


class LegalCallsRequest(WireModel):
    auction: AuctionModel
    seat: Seat


class AddCallRequest(WireModel):
    auction: AuctionModel
    entry: AuctionEntryModel


class AuctionRequest(WireModel):
    auction: AuctionModel


class CalculateScoreRequest(WireModel):
    contract: ContractModel
    tricks_won: int
    vulnerability: Vulnerability


class LegalPlaysRequest(WireModel):
    hand: HandModel
    lead_suit: Optional[Suit] = None


class TrickWinnerRequest(WireModel):
    trick: TrickModel


class SolveDealRequest(WireModel):
    deal: DealModel


def get_settings(request: Request) -> EngineSettings:
    return request.app.state.settings


def get_solver() -> DoubleDummySolver:
    return service.default_solver()


router = APIRouter(prefix="/api")


@router.post("/generate_deal")
def generate_deal(request: GenerateDealRequest, settings: EngineSettings = Depends(get_settings)) -> Dict[str, Any]:
    return service.generate_deal(request.constraints, settings=settings).to_wire()


@router.post("/evaluate_hand")
def evaluate_hand(request: HandRequest) -> Dict[str, Any]:
    return service.evaluate_hand(request.hand).to_wire()


@router.post("/get_suit_length")
def get_suit_length(request: HandRequest) -> List[int]:
    return service.get_suit_length(request.hand)


@router.post("/is_balanced")
def is_balanced(request: HandRequest) -> bool:
    return service.is_balanced(request.hand)


@router.post("/get_legal_calls")
def get_legal_calls(request: LegalCallsRequest) -> List[Dict[str, Any]]:
    return [call.to_wire() for call in service.get_legal_calls(request.auction, request.seat)]


@router.post("/add_call")
def add_call(request: AddCallRequest) -> Dict[str, Any]:
    return service.add_call(request.auction, request.entry).to_wire()


@router.post("/is_auction_complete")
def is_auction_complete(request: AuctionRequest) -> bool:
    return service.is_auction_complete(request.auction)


@router.post("/get_contract")
def get_contract(request: AuctionRequest) -> Optional[Dict[str, Any]]:
    contract = service.get_contract(request.auction)
    return contract.to_wire() if contract is not None else None


@router.post("/calculate_score")
def calculate_score(request: CalculateScoreRequest) -> int:
    return service.calculate_score(request.contract, request.tricks_won, request.vulnerability)


@router.post("/get_legal_plays")
def get_legal_plays(request: LegalPlaysRequest) -> List[Dict[str, Any]]:
    return [card.to_wire() for card in service.get_legal_plays(request.hand, request.lead_suit)]


@router.post("/get_trick_winner")
def get_trick_winner(request: TrickWinnerRequest) -> str:
    return service.get_trick_winner(request.trick).value


@router.post("/solve_deal")
def solve_deal(request: SolveDealRequest, solver: DoubleDummySolver = Depends(get_solver)) -> Dict[str, Any]:
    return service.solve_deal(request.deal, solver).to_wire()


async def _solver_unavailable(request: Request, exc: SolverUnavailable) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


async def _engine_error(request: Request, exc: EngineError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app(settings: Optional[EngineSettings] = None) -> FastAPI:
    settings = settings or EngineSettings()
    app = FastAPI(title="Bridge Engine API")
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SolverUnavailable, _solver_unavailable)
    app.add_exception_handler(EngineError, _engine_error)
    app.include_router(router)
    return app


def main() -> None:
    import uvicorn

    settings = EngineSettings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
