"""Card-play strategies for the bridge engine."""

from .base import NoLegalPlays, PlayStrategy
from .random_bot import RandomPlayStrategy

__all__ = ["NoLegalPlays", "PlayStrategy", "RandomPlayStrategy"]
