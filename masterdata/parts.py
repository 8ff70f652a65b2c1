"""Parts catalog: parts, rarities, level-up rates and prices, and sell prices."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from .numericalfunc import FunctionResolver, NumericalFunc
from .tables import TableReader

PARTS_TABLE = "EntityMPartsTable.json"
PARTS_RARITY_TABLE = "EntityMPartsRarityTable.json"
LEVEL_UP_RATE_TABLE = "EntityMPartsLevelUpRateGroupTable.json"
LEVEL_UP_PRICE_TABLE = "EntityMPartsLevelUpPriceGroupTable.json"

_TIERS = range(1, 5)
_STAT_CATEGORIES = range(1, 7)

_T = TypeVar("_T")


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _row(cls: type[_T], raw: Mapping[str, Any]) -> _T:
    return cls(**{f.name: int(raw.get(_json_key(f.name), 0)) for f in fields(cls)})


def _int(raw: Mapping[str, Any], key: str) -> int:
    return int(raw.get(key, 0))


@dataclass(frozen=True)
class PartsRow:
    parts_id: int
    rarity_type: int
    parts_group_id: int
    parts_status_main_lottery_group_id: int


@dataclass(frozen=True)
class PartsRarityRow:
    rarity_type: int
    parts_level_up_rate_group_id: int
    parts_level_up_price_group_id: int
    sell_price_numerical_function_id: int


@dataclass
class PartsCatalog:
    parts_by_id: dict[int, PartsRow] = field(default_factory=dict)
    default_parts_status_main_by_lottery_group: dict[int, int] = field(default_factory=dict)
    rarity_by_rarity_type: dict[int, PartsRarityRow] = field(default_factory=dict)
    # Rate group id to level lower limit to success rate in permil.
    rate_by_group_and_level: dict[int, dict[int, int]] = field(default_factory=dict)
    # Price group id to level lower limit to gold.
    price_by_group_and_level: dict[int, dict[int, int]] = field(default_factory=dict)
    sell_price_by_rarity: dict[int, NumericalFunc] = field(default_factory=dict)


def _default_main_stats() -> dict[int, int]:
    # A lottery group id holds the tier in its tens digit and the stat category
    # in its units digit; the main stat id interleaves them category-major.
    return {
        tier * 10 + category: (category - 1) * 4 + tier
        for tier in _TIERS
        for category in _STAT_CATEGORIES
    }


def load_parts_catalog(tables: TableReader, functions: FunctionResolver) -> PartsCatalog:
    """Build the parts catalog; sell price curves are looked up in ``functions``."""
    parts_rows = tables.read(PARTS_TABLE)
    rarity_rows = tables.read(PARTS_RARITY_TABLE)
    rate_rows = tables.read(LEVEL_UP_RATE_TABLE)
    price_rows = tables.read(LEVEL_UP_PRICE_TABLE)

    catalog = PartsCatalog(default_parts_status_main_by_lottery_group=_default_main_stats())

    for raw in parts_rows:
        parts = _row(PartsRow, raw)
        catalog.parts_by_id[parts.parts_id] = parts

    for raw in rarity_rows:
        rarity = _row(PartsRarityRow, raw)
        catalog.rarity_by_rarity_type[rarity.rarity_type] = rarity
        func = functions.resolve(rarity.sell_price_numerical_function_id)
        if func is not None:
            catalog.sell_price_by_rarity[rarity.rarity_type] = func

    for raw in rate_rows:
        catalog.rate_by_group_and_level.setdefault(_int(raw, "PartsLevelUpRateGroupId"), {})[
            _int(raw, "LevelLowerLimit")
        ] = _int(raw, "SuccessRatePermil")

    for raw in price_rows:
        catalog.price_by_group_and_level.setdefault(_int(raw, "PartsLevelUpPriceGroupId"), {})[
            _int(raw, "LevelLowerLimit")
        ] = _int(raw, "Gold")

    return catalog