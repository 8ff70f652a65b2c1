"""Costume catalog: costumes, rarity curves, awakening and active skills."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from .numericalfunc import FunctionResolver, NumericalFunc
from .tables import (
    MaterialCatalog,
    MaterialRow,
    TableReader,
    build_exp_thresholds,
    load_parameter_map,
)

COSTUME_TABLE = "EntityMCostumeTable.json"
COSTUME_RARITY_TABLE = "EntityMCostumeRarityTable.json"
AWAKEN_TABLE = "EntityMCostumeAwakenTable.json"
AWAKEN_PRICE_TABLE = "EntityMCostumeAwakenPriceGroupTable.json"
AWAKEN_EFFECT_TABLE = "EntityMCostumeAwakenEffectGroupTable.json"
AWAKEN_STATUS_UP_TABLE = "EntityMCostumeAwakenStatusUpGroupTable.json"
AWAKEN_ITEM_ACQUIRE_TABLE = "EntityMCostumeAwakenItemAcquireTable.json"
ACTIVE_SKILL_GROUP_TABLE = "EntityMCostumeActiveSkillGroupTable.json"
ACTIVE_SKILL_MATERIAL_TABLE = "EntityMCostumeActiveSkillEnhancementMaterialTable.json"

_T = TypeVar("_T")


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _row(cls: type[_T], raw: Mapping[str, Any]) -> _T:
    return cls(**{f.name: int(raw.get(_json_key(f.name), 0)) for f in fields(cls)})


@dataclass(frozen=True)
class CostumeMasterRow:
    costume_id: int
    character_id: int
    skillful_weapon_type: int
    rarity_type: int
    costume_limit_break_material_group_id: int
    costume_active_skill_group_id: int


@dataclass(frozen=True)
class _CostumeRarityRow:
    rarity_type: int
    costume_limit_break_material_rarity_group_id: int
    required_exp_for_level_up_numerical_parameter_map_id: int
    enhancement_cost_by_material_numerical_function_id: int
    limit_break_cost_numerical_function_id: int
    max_level_numerical_function_id: int
    active_skill_max_level_numerical_function_id: int
    active_skill_enhancement_cost_numerical_function_id: int


@dataclass(frozen=True)
class CostumeAwakenRow:
    costume_id: int
    costume_awaken_effect_group_id: int
    costume_awaken_step_material_group_id: int
    costume_awaken_price_group_id: int


@dataclass(frozen=True)
class CostumeAwakenEffectRow:
    costume_awaken_effect_group_id: int
    awaken_step: int
    costume_awaken_effect_type: int
    costume_awaken_effect_id: int


@dataclass(frozen=True)
class CostumeAwakenStatusUpRow:
    costume_awaken_status_up_group_id: int
    sort_order: int
    status_kind_type: int
    status_calculation_type: int
    effect_value: int


@dataclass(frozen=True)
class CostumeAwakenItemAcquireRow:
    costume_awaken_item_acquire_id: int
    possession_type: int
    possession_id: int
    count: int


@dataclass(frozen=True)
class CostumeActiveSkillGroupRow:
    costume_active_skill_group_id: int
    costume_limit_break_count_lower_limit: int
    costume_active_skill_id: int
    costume_active_skill_enhancement_material_id: int


@dataclass(frozen=True)
class CostumeActiveSkillEnhanceMaterialRow:
    costume_active_skill_enhancement_material_id: int
    skill_level: int
    material_id: int
    count: int
    sort_order: int


@dataclass
class CostumeCatalog:
    costumes: dict[int, CostumeMasterRow] = field(default_factory=dict)
    materials: dict[int, MaterialRow] = field(default_factory=dict)
    exp_by_rarity: dict[int, list[int]] = field(default_factory=dict)
    enhance_cost_by_rarity: dict[int, NumericalFunc] = field(default_factory=dict)
    max_level_by_rarity: dict[int, NumericalFunc] = field(default_factory=dict)
    limit_break_cost_by_rarity: dict[int, NumericalFunc] = field(default_factory=dict)

    awaken_by_costume_id: dict[int, CostumeAwakenRow] = field(default_factory=dict)
    awaken_price_by_group: dict[int, int] = field(default_factory=dict)
    awaken_effects_by_group_and_step: dict[int, dict[int, CostumeAwakenEffectRow]] = field(
        default_factory=dict
    )
    awaken_status_up_by_group: dict[int, list[CostumeAwakenStatusUpRow]] = field(
        default_factory=dict
    )
    awaken_item_acquire_by_id: dict[int, CostumeAwakenItemAcquireRow] = field(
        default_factory=dict
    )

    # Highest limit-break lower limit first.
    active_skill_groups_by_group_id: dict[int, list[CostumeActiveSkillGroupRow]] = field(
        default_factory=dict
    )
    # Keyed by (enhancement material id, skill level).
    active_skill_enhance_mats: dict[
        tuple[int, int], list[CostumeActiveSkillEnhanceMaterialRow]
    ] = field(default_factory=dict)
    active_skill_max_level_by_rarity: dict[int, NumericalFunc] = field(default_factory=dict)
    active_skill_cost_by_rarity: dict[int, NumericalFunc] = field(default_factory=dict)


def _register_first(
    target: dict[int, NumericalFunc], rarity: int, functions: FunctionResolver, function_id: int
) -> None:
    if rarity in target:
        return
    func = functions.resolve(function_id)
    if func is not None:
        target[rarity] = func


def load_costume_catalog(
    tables: TableReader,
    materials: MaterialCatalog,
    functions: FunctionResolver,
    enhancement_material_type: int,
) -> CostumeCatalog:
    """Build the costume catalog.

    ``enhancement_material_type`` selects the costume enhancement materials from
    ``materials``; per rarity, the first row that resolves a curve provides it.
    """
    costumes = [_row(CostumeMasterRow, raw) for raw in tables.read(COSTUME_TABLE)]
    rarities = [_row(_CostumeRarityRow, raw) for raw in tables.read(COSTUME_RARITY_TABLE)]
    parameter_map = load_parameter_map(tables)
    awaken_rows = [_row(CostumeAwakenRow, raw) for raw in tables.read(AWAKEN_TABLE)]
    price_rows = tables.read(AWAKEN_PRICE_TABLE)
    effect_rows = [_row(CostumeAwakenEffectRow, raw) for raw in tables.read(AWAKEN_EFFECT_TABLE)]
    status_up_rows = [
        _row(CostumeAwakenStatusUpRow, raw) for raw in tables.read(AWAKEN_STATUS_UP_TABLE)
    ]
    item_acquire_rows = [
        _row(CostumeAwakenItemAcquireRow, raw) for raw in tables.read(AWAKEN_ITEM_ACQUIRE_TABLE)
    ]
    skill_group_rows = [
        _row(CostumeActiveSkillGroupRow, raw) for raw in tables.read(ACTIVE_SKILL_GROUP_TABLE)
    ]
    skill_mat_rows = [
        _row(CostumeActiveSkillEnhanceMaterialRow, raw)
        for raw in tables.read(ACTIVE_SKILL_MATERIAL_TABLE)
    ]

    catalog = CostumeCatalog(materials=materials.by_type.get(enhancement_material_type, {}))

    for costume in costumes:
        catalog.costumes[costume.costume_id] = costume

    for rarity in rarities:
        key = rarity.rarity_type
        if key not in catalog.exp_by_rarity:
            catalog.exp_by_rarity[key] = build_exp_thresholds(
                parameter_map, rarity.required_exp_for_level_up_numerical_parameter_map_id
            )
        _register_first(
            catalog.enhance_cost_by_rarity,
            key,
            functions,
            rarity.enhancement_cost_by_material_numerical_function_id,
        )
        _register_first(
            catalog.max_level_by_rarity, key, functions, rarity.max_level_numerical_function_id
        )
        _register_first(
            catalog.limit_break_cost_by_rarity,
            key,
            functions,
            rarity.limit_break_cost_numerical_function_id,
        )
        _register_first(
            catalog.active_skill_max_level_by_rarity,
            key,
            functions,
            rarity.active_skill_max_level_numerical_function_id,
        )
        _register_first(
            catalog.active_skill_cost_by_rarity,
            key,
            functions,
            rarity.active_skill_enhancement_cost_numerical_function_id,
        )

    for awaken in awaken_rows:
        catalog.awaken_by_costume_id[awaken.costume_id] = awaken
    for raw in price_rows:
        catalog.awaken_price_by_group[int(raw.get("CostumeAwakenPriceGroupId", 0))] = int(
            raw.get("Gold", 0)
        )
    for effect in effect_rows:
        catalog.awaken_effects_by_group_and_step.setdefault(
            effect.costume_awaken_effect_group_id, {}
        )[effect.awaken_step] = effect
    for status_up in status_up_rows:
        catalog.awaken_status_up_by_group.setdefault(
            status_up.costume_awaken_status_up_group_id, []
        ).append(status_up)
    for item in item_acquire_rows:
        catalog.awaken_item_acquire_by_id[item.costume_awaken_item_acquire_id] = item

    grouped: dict[int, list[CostumeActiveSkillGroupRow]] = {}
    for skill in skill_group_rows:
        grouped.setdefault(skill.costume_active_skill_group_id, []).append(skill)
    catalog.active_skill_groups_by_group_id = {
        group_id: sorted(
            rows, key=lambda r: r.costume_limit_break_count_lower_limit, reverse=True
        )
        for group_id, rows in grouped.items()
    }

    for mat in skill_mat_rows:
        catalog.active_skill_enhance_mats.setdefault(
            (mat.costume_active_skill_enhancement_material_id, mat.skill_level), []
        ).append(mat)

    return catalog