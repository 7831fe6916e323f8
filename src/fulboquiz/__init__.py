"""Football trivia engine: player classification, sampling and scoring."""

__version__ = "0.1.0"
