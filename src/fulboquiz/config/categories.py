"""Bingo categories and the predicates that classify players against them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List, Literal, Optional, Tuple

from fulboquiz.ingest.normalize import nationality_matches, parse_age
from fulboquiz.models import PlayerRecord


CategoryKind = Literal["nationality", "team", "age"]


@dataclass(frozen=True)
class Category:
    id: str
    title: str
    kind: CategoryKind
    variants: FrozenSet[str] = frozenset()
    team_needles: Tuple[str, ...] = ()
    min_age: Optional[int] = None
    max_age: Optional[int] = None

    def matches(self, player: PlayerRecord) -> bool:
        return _PREDICATES[self.kind](self, player)


def _match_nationality(category: Category, player: PlayerRecord) -> bool:
    return nationality_matches(player, category.variants)


def _match_team(category: Category, player: PlayerRecord) -> bool:
    team = (player.team or "").lower()
    if not team:
        return False
    return any(needle in team for needle in category.team_needles)


def _match_age(category: Category, player: PlayerRecord) -> bool:
    age = parse_age(player.age)
    if age is None:
        return False
    if category.min_age is not None and age < category.min_age:
        return False
    if category.max_age is not None and age > category.max_age:
        return False
    return True


_PREDICATES: Dict[str, Callable[[Category, PlayerRecord], bool]] = {
    "nationality": _match_nationality,
    "team": _match_team,
    "age": _match_age,
}


def _nationality(id: str, title: str, *variants: str) -> Category:
    return Category(id=id, title=title, kind="nationality", variants=frozenset(variants))


def _team(id: str, title: str, *needles: str) -> Category:
    return Category(id=id, title=title, kind="team", team_needles=needles)


BINGO_CATEGORIES: Tuple[Category, ...] = (
    _nationality("england", "Inglaterra", "england", "english", "inglaterra"),
    # "españa" can never match a normalized nationality.
    _nationality("spain", "España", "spain", "espana", "espanol", "espanola", "españa"),
    _nationality("france", "Francia", "france", "frances", "francais", "francia", "french"),
    _nationality("germany", "Alemania", "germany", "deutschland", "alemania", "german"),
    _nationality("brazil", "Brasil", "brazil", "brasil", "brazilian", "brasileiro"),
    _nationality("portugal", "Portugal", "portugal", "portugues", "portuguese"),
    _team("manchester-city", "Manchester City", "manchester-city", "manchester city"),
    _team("real-madrid", "Real Madrid", "real-madrid", "real madrid"),
    _team("barcelona", "FC Barcelona", "barcelona"),
    Category(id="young", title="Menor de 25", kind="age", max_age=24),
    Category(id="veteran", title="Mayor de 30", kind="age", min_age=31),
    Category(id="prime", title="25-30 años", kind="age", min_age=25, max_age=30),
)

_CATEGORY_INDEX: Dict[str, Category] = {category.id: category for category in BINGO_CATEGORIES}


def iter_categories() -> Iterable[Category]:
    """Return the bingo categories in board order."""

    return iter(BINGO_CATEGORIES)


def get_category(category_id: str) -> Category:
    if category_id not in _CATEGORY_INDEX:
        raise KeyError(f"No bingo category configured for id={category_id!r}")
    return _CATEGORY_INDEX[category_id]


def classify(
    player: PlayerRecord,
    categories: Iterable[Category] = BINGO_CATEGORIES,
) -> List[Category]:
    """Every category the player satisfies, in the given order."""

    return [category for category in categories if category.matches(player)]


def first_match(
    player: PlayerRecord,
    categories: Iterable[Category] = BINGO_CATEGORIES,
) -> Optional[Category]:
    for category in categories:
        if category.matches(player):
            return category
    return None


__all__ = [
    "BINGO_CATEGORIES",
    "Category",
    "CategoryKind",
    "classify",
    "first_match",
    "get_category",
    "iter_categories",
]
