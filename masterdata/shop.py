"""Shop catalog: items, contents, effects, limited stock and shop cell layouts."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from .tables import TableReader

SHOP_ITEM_TABLE = "EntityMShopItemTable.json"
SHOP_CONTENT_TABLE = "EntityMShopItemContentPossessionTable.json"
SHOP_EFFECT_TABLE = "EntityMShopItemContentEffectTable.json"
USER_LEVEL_TABLE = "EntityMUserLevelTable.json"
LIMITED_STOCK_TABLE = "EntityMShopItemLimitedStockTable.json"
SHOP_TABLE = "EntityMShopTable.json"
CELL_GROUP_TABLE = "EntityMShopItemCellGroupTable.json"
CELL_TABLE = "EntityMShopItemCellTable.json"

_T = TypeVar("_T")


def _i32(value: int) -> int:
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _row(cls: type[_T], raw: Mapping[str, Any]) -> _T:
    return cls(**{f.name: int(raw.get(_json_key(f.name), 0)) for f in fields(cls)})


def _int(raw: Mapping[str, Any], key: str) -> int:
    return int(raw.get(key, 0))


@dataclass(frozen=True)
class ShopItemRow:
    shop_item_id: int
    price_type: int
    price_id: int
    price: int
    shop_item_limited_stock_id: int


@dataclass(frozen=True)
class ShopContentRow:
    shop_item_id: int
    possession_type: int
    possession_id: int
    count: int


@dataclass(frozen=True)
class ShopContentEffectRow:
    shop_item_id: int
    effect_target_type: int
    effect_value_type: int
    effect_value: int


@dataclass(frozen=True)
class ExchangeShopCell:
    sort_order: int
    shop_item_id: int


@dataclass
class ShopCatalog:
    items: dict[int, ShopItemRow] = field(default_factory=dict)
    contents: dict[int, list[ShopContentRow]] = field(default_factory=dict)
    effects: dict[int, list[ShopContentEffectRow]] = field(default_factory=dict)
    # User level to maximum stamina in millis.
    max_stamina_millis: dict[int, int] = field(default_factory=dict)
    # Limited stock id to maximum count.
    limited_stock: dict[int, int] = field(default_factory=dict)
    # Shop item ids of the replaceable item shop, in cell sort order.
    item_shop_pool: list[int] = field(default_factory=list)
    # Shop id to its cells in sort order, for exchange shops.
    exchange_shop_cells: dict[int, list[ExchangeShopCell]] = field(default_factory=dict)


def load_shop_catalog(
    tables: TableReader, item_shop_group_type: int, exchange_shop_group_type: int
) -> ShopCatalog:
    """Build the shop catalog; the group types name the item and exchange shops."""
    items = tables.read(SHOP_ITEM_TABLE)
    contents = tables.read(SHOP_CONTENT_TABLE)
    effects = tables.read(SHOP_EFFECT_TABLE)
    user_levels = tables.read(USER_LEVEL_TABLE)
    stock_rows = tables.read(LIMITED_STOCK_TABLE)

    catalog = ShopCatalog()
    for raw in items:
        item = _row(ShopItemRow, raw)
        catalog.items[item.shop_item_id] = item
    for raw in contents:
        content = _row(ShopContentRow, raw)
        catalog.contents.setdefault(content.shop_item_id, []).append(content)
    for raw in effects:
        effect = _row(ShopContentEffectRow, raw)
        catalog.effects.setdefault(effect.shop_item_id, []).append(effect)
    for raw in user_levels:
        catalog.max_stamina_millis[_int(raw, "UserLevel")] = _i32(_int(raw, "MaxStamina") * 1000)
    for raw in stock_rows:
        catalog.limited_stock[_int(raw, "ShopItemLimitedStockId")] = _int(raw, "MaxCount")

    shops = tables.read(SHOP_TABLE)
    cell_groups = tables.read(CELL_GROUP_TABLE)
    cells = tables.read(CELL_TABLE)

    item_by_cell = {_int(raw, "ShopItemCellId"): _int(raw, "ShopItemId") for raw in cells}
    groups: dict[int, list[tuple[int, int]]] = defaultdict(list)
    for raw in cell_groups:
        groups[_int(raw, "ShopItemCellGroupId")].append(
            (_int(raw, "ShopItemCellId"), _int(raw, "SortOrder"))
        )

    for raw in shops:
        entries = groups.get(_int(raw, "ShopItemCellGroupId"))
        if not entries:
            continue
        group_type = _int(raw, "ShopGroupType")
        if group_type not in (item_shop_group_type, exchange_shop_group_type):
            continue
        shop_cells = sorted(
            (
                ExchangeShopCell(sort_order=sort_order, shop_item_id=item_by_cell[cell_id])
                for cell_id, sort_order in entries
                if cell_id in item_by_cell
            ),
            key=lambda cell: cell.sort_order,
        )
        if group_type == item_shop_group_type:
            catalog.item_shop_pool = [cell.shop_item_id for cell in shop_cells]
        else:
            catalog.exchange_shop_cells[_int(raw, "ShopId")] = shop_cells
    return catalog