"""Double dummy solver seam.

The solver itself is a black box reached through ``DoubleDummySolver``; this
module only defines the result vocabulary and the one entry point,
``solve_deal``, which wraps solver failures and tolerates a failed par
calculation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .cards import SEATS, STRAIN_ORDER, BidSuit, EngineError, Seat
from .deck import Deal
from .scoring import TOTAL_TRICKS

logger = logging.getLogger(__name__)

DDTable = Dict[Seat, Dict[BidSuit, int]]


class SolverError(EngineError, RuntimeError):
    """Wraps any failure raised by the external solver."""

    def __init__(self, message: str) -> None:
        super().__init__(f"DDS error: {message}")


class SolverUnavailable(EngineError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("double dummy solver not available")


@dataclass(frozen=True)
class ParContract:
    level: int
    strain: BidSuit
    declarer: Seat
    doubled: bool
    overtricks: int


@dataclass(frozen=True)
class ParInfo:
    """Par score from the North-South point of view and the contracts reaching it."""

    score: int
    contracts: Tuple[ParContract, ...] = ()


@dataclass(frozen=True)
class DDSolution:
    tricks: Mapping[Seat, Mapping[BidSuit, int]]
    par: Optional[ParInfo] = None

    def tricks_for(self, seat: Seat, strain: BidSuit) -> int:
        return self.tricks[seat][strain]


@runtime_checkable
class DoubleDummySolver(Protocol):
    def solve_tricks(self, deal: Deal) -> DDTable:
        """Return maximum declarer tricks per seat per strain."""
        ...

    def calculate_par(self, tricks: DDTable, deal: Deal) -> ParInfo:
        ...


def _validate_table(tricks: DDTable) -> DDTable:
    table: DDTable = {}
    for seat in SEATS:
        row = tricks.get(seat)
        if row is None:
            raise SolverError(f"missing trick row for {seat.value}")
        table[seat] = {}
        for strain in STRAIN_ORDER:
            value = row.get(strain)
            if value is None or not 0 <= value <= TOTAL_TRICKS:
                raise SolverError(f"invalid trick count {value!r} for {seat.value} in {strain.value}")
            table[seat][strain] = int(value)
    return table


def solve_deal(deal: Deal, solver: DoubleDummySolver) -> DDSolution:
    """Solve a complete deal and attach par information when it can be computed."""
    try:
        raw = solver.solve_tricks(deal)
    except SolverError:
        raise
    except Exception as exc:
        logger.error("Double dummy solve failed: %s", exc)
        raise SolverError(f"solve_deal failed: {exc}") from exc

    tricks = _validate_table(raw)

    try:
        par: Optional[ParInfo] = solver.calculate_par(tricks, deal)
    except Exception as exc:
        logger.warning("calculate_par failed, returning tricks without par: %s", exc)
        par = None

    return DDSolution(tricks=tricks, par=par)
