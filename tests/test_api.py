from fastapi.testclient import TestClient

from bridge_engine.cards import SEATS, STRAIN_ORDER
from bridge_engine.config import EngineSettings
from bridge_engine.solver import SolverUnavailable
from server.api import create_app, get_solver

STRONG_HAND = {
    "cards": [
        {"suit": suit, "rank": rank}
        for suit, ranks in (("S", "AKQJ"), ("H", "AKQ"), ("D", "AKQ"), ("C", "AKQ"))
        for rank in ranks
    ]
}


def hand_from(holdings):
    return {
        "cards": [
            {"suit": suit, "rank": rank}
            for suit, ranks in zip(("S", "H", "D", "C"), holdings.split("."))
            for rank in ranks
        ]
    }


DEAL = {
    "hands": {
        "N": hand_from("AKQJ.AKQ.AKQ.AKQ"),
        "E": hand_from("T987.JT9.JT9.JT9"),
        "S": hand_from("6543.876.876.876"),
        "W": hand_from("2.5432.5432.5432"),
    },
    "dealer": "N",
    "vulnerability": "None",
}


class StubSolver:
    def solve_tricks(self, deal):
        return {seat: {strain: 7 for strain in STRAIN_ORDER} for seat in SEATS}

    def calculate_par(self, tricks, deal):
        raise RuntimeError("no par for you")


def client(settings=None):
    return TestClient(create_app(settings or EngineSettings()))


def test_evaluate_hand_returns_hcp():
    response = client().post("/api/evaluate_hand", json={"hand": STRONG_HAND})
    assert response.status_code == 200
    body = response.json()
    assert body["hcp"] == 37
    assert body["shape"] == [4, 3, 3, 3]
    assert body["totalPoints"] == 37
    assert body["strategy"] == "HCP"


def test_suit_length_and_balance():
    api = client()
    assert api.post("/api/get_suit_length", json={"hand": STRONG_HAND}).json() == [4, 3, 3, 3]
    assert api.post("/api/is_balanced", json={"hand": STRONG_HAND}).json() is True


def test_wrong_hand_size_is_a_bad_request():
    response = client().post("/api/evaluate_hand", json={"hand": {"cards": STRONG_HAND["cards"][:5]}})
    assert response.status_code == 400
    assert "got 5" in response.json()["detail"]


def test_generate_deal_is_seeded():
    api = client()
    body = {"constraints": {"seats": [], "seed": 42}}
    first = api.post("/api/generate_deal", json=body).json()
    second = api.post("/api/generate_deal", json=body).json()
    assert first == second
    assert set(first["deal"]["hands"]) == {"N", "E", "S", "W"}
    assert first["relaxationSteps"] == 0
    assert first["iterations"] >= 1


def test_generate_deal_budget_exhausted():
    body = {"constraints": {"seats": [{"seat": "N", "minHcp": 38}], "seed": 1, "maxAttempts": 10}}
    response = client().post("/api/generate_deal", json=body)
    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to generate deal after 10 attempts"


def test_generate_deal_uses_configured_budget():
    body = {"constraints": {"seats": [{"seat": "N", "minHcp": 38}], "seed": 1}}
    response = client(EngineSettings(max_attempts=3)).post("/api/generate_deal", json=body)
    assert response.json()["detail"] == "Failed to generate deal after 3 attempts"


def test_legal_calls_opening():
    body = {"auction": {"entries": [], "isComplete": False}, "seat": "N"}
    calls = client().post("/api/get_legal_calls", json=body).json()
    assert len(calls) == 36
    assert calls[0] == {"type": "pass"}
    assert calls[1] == {"type": "bid", "level": 1, "strain": "C"}


def test_add_call_and_completion():
    api = client()
    auction = {"entries": [], "isComplete": False}
    for seat, call in (("N", {"type": "bid", "level": 1, "strain": "C"}), ("E", {"type": "pass"}), ("S", {"type": "pass"}), ("W", {"type": "pass"})):
        response = api.post("/api/add_call", json={"auction": auction, "entry": {"seat": seat, "call": call}})
        assert response.status_code == 200
        auction = response.json()
    assert auction["isComplete"] is True
    assert api.post("/api/is_auction_complete", json={"auction": auction}).json() is True

    contract = api.post("/api/get_contract", json={"auction": auction}).json()
    assert contract == {"level": 1, "strain": "C", "doubled": False, "redoubled": False, "declarer": "N"}

    rejected = api.post("/api/add_call", json={"auction": auction, "entry": {"seat": "N", "call": {"type": "pass"}}})
    assert rejected.status_code == 400
    assert rejected.json()["detail"] == "Cannot add call to completed auction"


def test_illegal_call_is_reported():
    auction = {"entries": [{"seat": "N", "call": {"type": "bid", "level": 2, "strain": "H"}}], "isComplete": False}
    body = {"auction": auction, "entry": {"seat": "E", "call": {"type": "bid", "level": 1, "strain": "S"}}}
    response = client().post("/api/add_call", json=body)
    assert response.status_code == 400
    assert response.json()["detail"] == "Illegal call: 1S"


def test_passed_out_contract_is_null():
    auction = {
        "entries": [{"seat": seat, "call": {"type": "pass"}} for seat in ("N", "E", "S", "W")],
        "isComplete": True,
    }
    assert client().post("/api/get_contract", json={"auction": auction}).json() is None


def test_calculate_score():
    body = {
        "contract": {"level": 4, "strain": "H", "doubled": False, "redoubled": False, "declarer": "S"},
        "tricksWon": 10,
        "vulnerability": "Both",
    }
    assert client().post("/api/calculate_score", json=body).json() == 620


def test_calculate_score_rejects_impossible_trick_count():
    body = {
        "contract": {"level": 4, "strain": "H", "declarer": "S"},
        "tricksWon": 14,
        "vulnerability": "None",
    }
    assert client().post("/api/calculate_score", json=body).status_code == 400


def test_legal_plays_follow_suit():
    body = {
        "hand": {"cards": [{"suit": "S", "rank": "A"}, {"suit": "H", "rank": "2"}, {"suit": "S", "rank": "3"}]},
        "leadSuit": "S",
    }
    plays = client().post("/api/get_legal_plays", json=body).json()
    assert plays == [{"suit": "S", "rank": "A"}, {"suit": "S", "rank": "3"}]


def test_trick_winner():
    plays = [
        {"card": {"suit": "S", "rank": rank}, "seat": seat}
        for seat, rank in (("N", "T"), ("E", "J"), ("S", "A"), ("W", "K"))
    ]
    api = client()
    assert api.post("/api/get_trick_winner", json={"trick": {"plays": plays}}).json() == "S"
    incomplete = api.post("/api/get_trick_winner", json={"trick": {"plays": plays[:3]}})
    assert incomplete.status_code == 400
    assert incomplete.json()["detail"] == "Trick must have exactly 4 plays"


def test_malformed_payload_is_unprocessable():
    response = client().post("/api/get_legal_calls", json={"auction": {"entries": []}, "seat": "Q"})
    assert response.status_code == 422


def test_solve_deal_with_injected_solver():
    app = create_app(EngineSettings())
    app.dependency_overrides[get_solver] = StubSolver
    body = TestClient(app).post("/api/solve_deal", json={"deal": DEAL}).json()
    assert body["tricks"]["N"]["NT"] == 7
    assert body["par"] is None


def test_solve_deal_without_solver_is_unavailable():
    def unavailable():
        raise SolverUnavailable()

    app = create_app(EngineSettings())
    app.dependency_overrides[get_solver] = unavailable
    response = TestClient(app).post("/api/solve_deal", json={"deal": DEAL})
    assert response.status_code == 503
    assert response.json()["detail"] == "double dummy solver not available"


def test_cors_origins_from_settings():
    api = client(EngineSettings(cors_origins=["http://example.test"]))
    response = api.options(
        "/api/evaluate_hand",
        headers={"Origin": "http://example.test", "Access-Control-Request-Method": "POST"},
    )
    assert response.headers["access-control-allow-origin"] == "http://example.test"
