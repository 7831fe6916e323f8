"""Category-balanced random sampling of player pools."""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence, Set, Tuple

from fulboquiz.config.categories import BINGO_CATEGORIES, Category, first_match
from fulboquiz.errors import EmptyPoolError
from fulboquiz.ingest.normalize import filter_valid_players
from fulboquiz.models import PlayerRecord


logger = logging.getLogger(__name__)


def bucket_players(
    players: Sequence[PlayerRecord],
    categories: Sequence[Category],
) -> Tuple[Dict[str, List[PlayerRecord]], List[PlayerRecord]]:
    """Group players by the first category they match.

    Returns the buckets keyed by category id (every category present, possibly
    empty) and the players that matched nothing.
    """

    buckets: Dict[str, List[PlayerRecord]] = {category.id: [] for category in categories}
    unbucketed: List[PlayerRecord] = []
    for player in players:
        category = first_match(player, categories)
        if category is None:
            unbucketed.append(player)
        else:
            buckets[category.id].append(player)
    return buckets, unbucketed


def sample_players(
    pool: Sequence[PlayerRecord],
    target_size: int,
    categories: Sequence[Category] = BINGO_CATEGORIES,
    *,
    rng: Optional[random.Random] = None,
) -> List[PlayerRecord]:
    """Draw up to ``target_size`` unique players, spread across ``categories``."""

    rng = rng or random.Random()
    valid = filter_valid_players(pool)
    if not valid:
        raise EmptyPoolError(f"no valid players in a pool of {len(pool)}")
    if target_size <= 0:
        return []

    buckets, _ = bucket_players(valid, categories)
    per_category = target_size // len(categories) if categories else 0

    selected: List[PlayerRecord] = []
    seen: Set[Tuple[str, str]] = set()
    for category in categories:
        bucket = list(buckets[category.id])
        if not bucket:
            logger.info("Category %s has no candidates this session", category.id)
            continue
        if len(selected) >= target_size:
            break
        rng.shuffle(bucket)
        for player in bucket[: min(per_category, len(bucket))]:
            if player.key in seen:
                continue
            selected.append(player)
            seen.add(player.key)

    if len(selected) < target_size:
        remaining = [player for player in valid if player.key not in seen]
        rng.shuffle(remaining)
        for player in remaining:
            if len(selected) >= target_size:
                break
            if player.key in seen:
                continue
            selected.append(player)
            seen.add(player.key)

    rng.shuffle(selected)
    logger.debug(
        "Sampled %d/%d players (%d valid); bucket sizes %s",
        len(selected),
        target_size,
        len(valid),
        {key: len(value) for key, value in buckets.items()},
    )
    return selected


__all__ = ["bucket_players", "sample_players"]
