"""Data models shared across the engine."""

from .player import PlayerRecord, TriviaQuestion

__all__ = ["PlayerRecord", "TriviaQuestion"]
