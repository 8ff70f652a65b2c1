"""Reading master-data tables, plus the material and consumable item catalogs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Iterable

MATERIAL_TABLE = "EntityMMaterialTable.json"
CONSUMABLE_ITEM_TABLE = "EntityMConsumableItemTable.json"
PARAMETER_MAP_TABLE = "EntityMNumericalParameterMapTable.json"


class MasterDataError(Exception):
    """Raised when master data cannot be read or is malformed."""


class TableReader:
    """Reads master-data tables stored as JSON arrays of objects in one directory."""

    def __init__(self, directory: str | PathLike[str]) -> None:
        self.directory = Path(directory)

    def read(self, name: str) -> list[dict[str, Any]]:
        """Return the rows of the table file ``name``."""
        path = self.directory / name
        try:
            with path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            raise MasterDataError(f"read {name}: {exc}") from exc
        except ValueError as exc:
            raise MasterDataError(f"read {name}: invalid JSON: {exc}") from exc
        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            raise MasterDataError(f"read {name}: expected a JSON array of objects")
        return data


@dataclass(frozen=True)
class ParameterMapRow:
    numerical_parameter_map_id: int
    parameter_key: int
    parameter_value: int


@dataclass(frozen=True)
class MaterialRow:
    material_id: int
    material_type: int
    weapon_type: int
    effect_value: int
    sell_price: int


@dataclass
class MaterialCatalog:
    all: dict[int, MaterialRow] = field(default_factory=dict)
    by_type: dict[int, dict[int, MaterialRow]] = field(default_factory=dict)


@dataclass(frozen=True)
class ConsumableItemRow:
    consumable_item_id: int
    sell_price: int


@dataclass
class ConsumableItemCatalog:
    all: dict[int, ConsumableItemRow] = field(default_factory=dict)


def load_parameter_map(tables: TableReader) -> list[ParameterMapRow]:
    """Read the numerical parameter map table."""
    return [
        ParameterMapRow(
            numerical_parameter_map_id=int(row.get("NumericalParameterMapId", 0)),
            parameter_key=int(row.get("ParameterKey", 0)),
            parameter_value=int(row.get("ParameterValue", 0)),
        )
        for row in tables.read(PARAMETER_MAP_TABLE)
    ]


def build_exp_thresholds(rows: Iterable[ParameterMapRow], map_id: int) -> list[int]:
    """Lay out one parameter map as a list indexed by parameter key, gaps as zero."""
    selected = [row for row in rows if row.numerical_parameter_map_id == map_id]
    if any(row.parameter_key < 0 for row in selected):
        raise MasterDataError(f"parameter map {map_id} has a negative key")
    max_key = max([0, *(row.parameter_key for row in selected)])
    thresholds = [0] * (max_key + 1)
    for row in selected:
        thresholds[row.parameter_key] = row.parameter_value
    return thresholds


def load_material_catalog(tables: TableReader) -> MaterialCatalog:
    """Build the material catalog, indexed by id and by material type."""
    catalog = MaterialCatalog()
    for raw in tables.read(MATERIAL_TABLE):
        row = MaterialRow(
            material_id=int(raw.get("MaterialId", 0)),
            material_type=int(raw.get("MaterialType", 0)),
            weapon_type=int(raw.get("WeaponType", 0)),
            effect_value=int(raw.get("EffectValue", 0)),
            sell_price=int(raw.get("SellPrice", 0)),
        )
        catalog.all[row.material_id] = row
        catalog.by_type.setdefault(row.material_type, {})[row.material_id] = row
    return catalog


def load_consumable_item_catalog(tables: TableReader) -> ConsumableItemCatalog:
    """Build the consumable item catalog, indexed by id."""
    catalog = ConsumableItemCatalog()
    for raw in tables.read(CONSUMABLE_ITEM_TABLE):
        row = ConsumableItemRow(
            consumable_item_id=int(raw.get("ConsumableItemId", 0)),
            sell_price=int(raw.get("SellPrice", 0)),
        )
        catalog.all[row.consumable_item_id] = row
    return catalog