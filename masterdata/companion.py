"""Companion catalog: companions, enhancement gold curves and level materials."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .numericalfunc import FunctionResolver, NumericalFunc
from .tables import TableReader

COMPANION_TABLE = "EntityMCompanionTable.json"
CATEGORY_TABLE = "EntityMCompanionCategoryTable.json"
ENHANCEMENT_MATERIAL_TABLE = "EntityMCompanionEnhancementMaterialTable.json"


def _int(raw: Mapping[str, Any], key: str) -> int:
    return int(raw.get(key, 0))


@dataclass(frozen=True)
class CompanionRow:
    companion_id: int
    companion_category_type: int


@dataclass(frozen=True)
class CompanionLevelKey:
    category_type: int
    level: int


@dataclass(frozen=True)
class CompanionMaterialCost:
    material_id: int
    count: int


@dataclass
class CompanionCatalog:
    companion_by_id: dict[int, CompanionRow] = field(default_factory=dict)
    gold_cost_by_category: dict[int, NumericalFunc] = field(default_factory=dict)
    materials_by_key: dict[CompanionLevelKey, CompanionMaterialCost] = field(
        default_factory=dict
    )


def load_companion_catalog(tables: TableReader, functions: FunctionResolver) -> CompanionCatalog:
    """Build the companion catalog; gold cost curves are looked up in ``functions``."""
    companions = tables.read(COMPANION_TABLE)
    categories = tables.read(CATEGORY_TABLE)
    materials = tables.read(ENHANCEMENT_MATERIAL_TABLE)

    catalog = CompanionCatalog()
    for raw in companions:
        companion = CompanionRow(
            companion_id=_int(raw, "CompanionId"),
            companion_category_type=_int(raw, "CompanionCategoryType"),
        )
        catalog.companion_by_id[companion.companion_id] = companion

    for raw in categories:
        func = functions.resolve(_int(raw, "EnhancementCostNumericalFunctionId"))
        if func is not None:
            catalog.gold_cost_by_category[_int(raw, "CompanionCategoryType")] = func

    for raw in materials:
        key = CompanionLevelKey(
            category_type=_int(raw, "CompanionCategoryType"), level=_int(raw, "Level")
        )
        catalog.materials_by_key[key] = CompanionMaterialCost(
            material_id=_int(raw, "MaterialId"), count=_int(raw, "Count")
        )
    return catalog