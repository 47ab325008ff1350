"""Double dummy solving backed by the endplay bindings to Bo Haglund's DDS."""

from __future__ import annotations

from typing import Dict

from endplay.dds import calc_dd_table, par
from endplay.types import Deal as EndplayDeal
from endplay.types import Denom, Penalty, Player, Vul

from .cards import SEATS, STRAIN_ORDER, BidSuit, Seat, Vulnerability
from .deck import Deal, deal_to_pbn
from .solver import DDTable, ParContract, ParInfo

DENOMS: Dict[BidSuit, Denom] = {
    BidSuit.CLUBS: Denom.clubs,
    BidSuit.DIAMONDS: Denom.diamonds,
    BidSuit.HEARTS: Denom.hearts,
    BidSuit.SPADES: Denom.spades,
    BidSuit.NO_TRUMP: Denom.nt,
}

PLAYERS: Dict[Seat, Player] = {
    Seat.NORTH: Player.north,
    Seat.EAST: Player.east,
    Seat.SOUTH: Player.south,
    Seat.WEST: Player.west,
}

VULNERABILITIES: Dict[Vulnerability, Vul] = {
    Vulnerability.NONE: Vul.none,
    Vulnerability.NORTH_SOUTH: Vul.ns,
    Vulnerability.EAST_WEST: Vul.ew,
    Vulnerability.BOTH: Vul.both,
}

STRAINS_BY_DENOM: Dict[Denom, BidSuit] = {denom: strain for strain, denom in DENOMS.items()}
SEATS_BY_PLAYER: Dict[Player, Seat] = {player: seat for seat, player in PLAYERS.items()}


def to_endplay_deal(deal: Deal) -> EndplayDeal:
    return EndplayDeal(deal_to_pbn(deal))


class EndplaySolver:
    """``DoubleDummySolver`` implementation using ``endplay.dds``."""

    name = "endplay"

    def solve_tricks(self, deal: Deal) -> DDTable:
        table = calc_dd_table(to_endplay_deal(deal))
        return {
            seat: {strain: int(table[DENOMS[strain], PLAYERS[seat]]) for strain in STRAIN_ORDER}
            for seat in SEATS
        }

    def calculate_par(self, tricks: DDTable, deal: Deal) -> ParInfo:
        # endplay computes par straight from the deal.
        result = par(to_endplay_deal(deal), VULNERABILITIES[deal.vulnerability], PLAYERS[deal.dealer])
        return ParInfo(
            score=int(result.score),
            contracts=tuple(
                ParContract(
                    level=contract.level,
                    strain=STRAINS_BY_DENOM[contract.denom],
                    declarer=SEATS_BY_PLAYER[contract.declarer],
                    doubled=contract.penalty is not Penalty.passed,
                    overtricks=contract.result,
                )
                for contract in result
            ),
        )
