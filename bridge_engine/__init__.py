"""Core rules engine for contract bridge."""

__all__ = [
    "cards",
    "deck",
    "bidding",
    "trick",
    "mechanics",
    "scoring",
    "hand_evaluator",
    "deal_generator",
    "solver",
    "dds",
    "schema",
    "service",
    "config",
    "cli",
]
