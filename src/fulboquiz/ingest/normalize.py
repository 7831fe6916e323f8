"""Normalization helpers for noisy player fields and free-text answers."""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable, List, Optional, Sequence

from fulboquiz.errors import UnparseableFieldError
from fulboquiz.models import PlayerRecord


logger = logging.getLogger(__name__)

_PAREN_AGE = re.compile(r"\((\d+)\)")
_DIGITS = re.compile(r"\d+")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def parse_age(raw: Optional[str]) -> Optional[int]:
    """Extract an age from ``"06/02/1995 (30)"``, ``"30"`` or similar strings.

    The parenthesised number wins, then the whole string as an integer, then the
    first run of digits anywhere. Returns ``None`` when no digits exist.
    """

    if not raw:
        return None
    match = _PAREN_AGE.search(raw)
    if match:
        return int(match.group(1))
    text = raw.strip()
    if text.isdecimal():
        return int(text)
    match = _DIGITS.search(text)
    if match:
        return int(match.group(0))
    return None


def normalize_nationality(raw: Optional[str]) -> str:
    if not raw:
        return ""
    return _strip_diacritics(raw.lower()).strip()


def nationality_matches(player: Optional[PlayerRecord], variants: Iterable[str]) -> bool:
    """True when the player's normalized nationality contains any variant."""

    if player is None:
        return False
    norm = normalize_nationality(player.nationality)
    if not norm:
        return False
    return any(variant and variant in norm for variant in variants)


def normalize_free_text(raw: Optional[str]) -> str:
    if not raw:
        return ""
    text = _strip_diacritics(raw.lower())
    return _NON_ALNUM.sub("", text).strip()


def validate_player(player: PlayerRecord) -> int:
    """Return the parsed age of a valid player or raise ``UnparseableFieldError``."""

    for field in ("name", "nationality", "team", "age"):
        value = getattr(player, field)
        if not value or not value.strip():
            raise UnparseableFieldError(field, value, player.name or None)
    age = parse_age(player.age)
    if age is None:
        raise UnparseableFieldError("age", player.age, player.name)
    return age


def is_valid_player(player: PlayerRecord) -> bool:
    try:
        validate_player(player)
    except UnparseableFieldError:
        return False
    return True


def filter_valid_players(players: Sequence[PlayerRecord]) -> List[PlayerRecord]:
    valid: List[PlayerRecord] = []
    for player in players:
        try:
            validate_player(player)
        except UnparseableFieldError as exc:
            logger.debug("Excluding player: %s", exc)
            continue
        valid.append(player)
    return valid


__all__ = [
    "filter_valid_players",
    "is_valid_player",
    "nationality_matches",
    "normalize_free_text",
    "normalize_nationality",
    "parse_age",
    "validate_player",
]
