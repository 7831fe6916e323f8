"""Exception hierarchy shared by ingestion, sampling and game sessions."""

from __future__ import annotations


class FulboQuizError(Exception):
    """Base class for all engine errors."""


class UnparseableFieldError(FulboQuizError, ValueError):
    """A player field could not be normalized; the player is excluded."""

    def __init__(self, field: str, value: str | None, player_name: str | None = None):
        self.field = field
        self.value = value
        self.player_name = player_name
        who = f" for {player_name!r}" if player_name else ""
        super().__init__(f"unparseable {field} {value!r}{who}")


class EmptyPoolError(FulboQuizError):
    """No valid players remained after filtering a fetched pool."""


class FetchError(FulboQuizError):
    """The external player or question source failed."""


class SessionStateError(FulboQuizError):
    """An action is not allowed in the session's current state."""


class SessionLoadingError(SessionStateError):
    """An action arrived while the session is waiting on a refill."""


__all__ = [
    "EmptyPoolError",
    "FetchError",
    "FulboQuizError",
    "SessionLoadingError",
    "SessionStateError",
    "UnparseableFieldError",
]
