import random
from collections import Counter

import pytest

from fulboquiz.config import BINGO_CATEGORIES, first_match, get_category
from fulboquiz.errors import EmptyPoolError
from fulboquiz.pool import bucket_players, sample_players

from tests.helpers import diverse_pool, make_player


def _one_bucket_each(per_category: int = 3):
    """Players whose first matching category is each of the bingo categories in turn."""

    players = []
    for category in BINGO_CATEGORIES:
        for index in range(per_category):
            name = f"{category.id}-{index}"
            if category.kind == "nationality":
                players.append(make_player(name, nationality=category.title))
            elif category.kind == "team":
                players.append(make_player(name, team=category.title))
            else:
                age = {"young": "20", "veteran": "35", "prime": "27"}[category.id]
                players.append(make_player(name, age=age))
    return players


def test_sample_spreads_across_categories():
    pool = _one_bucket_each()
    assert len({first_match(player).id for player in pool}) == len(BINGO_CATEGORIES)

    sample = sample_players(pool, 24, rng=random.Random(3))

    counts = Counter(first_match(player).id for player in sample)
    assert len(sample) == 24
    assert set(counts.values()) == {2}


def test_sample_fills_remainder_and_never_duplicates():
    pool = diverse_pool(40)
    pool.extend(pool[:5])

    sample = sample_players(pool, 30, rng=random.Random(11))

    assert len(sample) == 30
    assert len({player.key for player in sample}) == 30


def test_sample_smaller_pool_returns_everything_valid():
    pool = diverse_pool(5) + [make_player("Broken", age="")]

    sample = sample_players(pool, 30, rng=random.Random(0))

    assert sorted(player.name for player in sample) == [f"Player {i}" for i in range(5)]


def test_sample_is_reproducible_with_seed():
    pool = diverse_pool(40)

    first = sample_players(pool, 12, rng=random.Random(42))
    second = sample_players(pool, 12, rng=random.Random(42))

    assert first == second


def test_sample_with_non_positive_target_is_empty():
    assert sample_players(diverse_pool(3), 0) == []


def test_sample_without_valid_players_raises():
    with pytest.raises(EmptyPoolError):
        sample_players([], 10)
    with pytest.raises(EmptyPoolError):
        sample_players([make_player("Ghost", nationality="")], 10)


def test_bucket_players_lists_every_category():
    categories = [get_category("spain"), get_category("barcelona")]
    spaniard = make_player("Pedri", nationality="Spain", team="FC Barcelona")
    dutch = make_player("De Jong", nationality="Netherlands", team="FC Barcelona")
    other = make_player("Lautaro")

    buckets, unbucketed = bucket_players([spaniard, dutch, other], categories)

    assert buckets == {"spain": [spaniard], "barcelona": [dutch]}
    assert unbucketed == [other]


def test_sample_excludes_players_with_non_decimal_age():
    regular = make_player("Regular", age="27")
    superscript = make_player("Superscript", age="²")

    assert sample_players([regular, superscript], 2, rng=random.Random(0)) == [regular]
