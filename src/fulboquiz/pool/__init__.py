"""Player pool utilities (balanced sampling)."""

from .sampling import bucket_players, sample_players

__all__ = ["bucket_players", "sample_players"]
