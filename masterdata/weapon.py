"""Weapon catalog: weapons, enhancement curves, evolution, skills, abilities and awakening."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from .numericalfunc import FunctionResolver, NumericalFunc
from .tables import MaterialCatalog, MaterialRow, TableReader, load_parameter_map
from .weapon_rows import (
    EnhanceCurveRow,
    EnhanceCurves,
    WeaponAbilityEnhanceMaterialRow,
    WeaponAbilityGroupRow,
    WeaponAwakenMaterialGroupRow,
    WeaponAwakenRow,
    WeaponEvolutionGroupRow,
    WeaponEvolutionMaterialRow,
    WeaponMasterRow,
    WeaponSkillEnhanceMaterialRow,
    WeaponSkillGroupRow,
    WeaponStoryReleaseConditionRow,
    build_enhance_curves,
)

logger = logging.getLogger(__name__)

WEAPON_TABLE = "EntityMWeaponTable.json"
SPECIFIC_ENHANCE_TABLE = "EntityMWeaponSpecificEnhanceTable.json"
RARITY_TABLE = "EntityMWeaponRarityTable.json"
CONSUME_EXCHANGE_TABLE = "EntityMWeaponConsumeExchangeConsumableItemGroupTable.json"
EVOLUTION_GROUP_TABLE = "EntityMWeaponEvolutionGroupTable.json"
EVOLUTION_MATERIAL_TABLE = "EntityMWeaponEvolutionMaterialGroupTable.json"
ABILITY_GROUP_TABLE = "EntityMWeaponAbilityGroupTable.json"
SKILL_GROUP_TABLE = "EntityMWeaponSkillGroupTable.json"
SKILL_MATERIAL_TABLE = "EntityMWeaponSkillEnhancementMaterialTable.json"
ABILITY_MATERIAL_TABLE = "EntityMWeaponAbilityEnhancementMaterialTable.json"
RELEASE_CONDITION_TABLE = "EntityMWeaponStoryReleaseConditionGroupTable.json"
AWAKEN_TABLE = "EntityMWeaponAwakenTable.json"
AWAKEN_MATERIAL_TABLE = "EntityMWeaponAwakenMaterialGroupTable.json"

_T = TypeVar("_T")

# Catalog attribute holding a curve, paired with the EnhanceCurves attribute it comes from.
_FUNCTION_CURVES = (
    ("gold_cost_by_enhance_id", "gold_cost"),
    ("max_level_by_enhance_id", "max_level"),
    ("sell_price_by_enhance_id", "sell_price"),
    ("evolution_cost_by_enhance_id", "evolution_cost"),
    ("skill_max_level_by_enhance_id", "skill_max_level"),
    ("skill_cost_by_enhance_id", "skill_cost"),
    ("ability_max_level_by_enhance_id", "ability_max_level"),
    ("ability_cost_by_enhance_id", "ability_cost"),
    ("enhance_cost_by_weapon_by_enhance_id", "enhance_cost_by_weapon"),
    ("limit_break_cost_by_weapon_by_enhance_id", "limit_break_cost_by_weapon"),
    ("limit_break_cost_by_material_by_enhance_id", "limit_break_cost_by_material"),
)


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _row(cls: type[_T], raw: Mapping[str, Any]) -> _T:
    return cls(**{f.name: int(raw.get(_json_key(f.name), 0)) for f in fields(cls)})


def _int(raw: Mapping[str, Any], key: str) -> int:
    return int(raw.get(key, 0))


@dataclass
class WeaponCatalog:
    weapons: dict[int, WeaponMasterRow] = field(default_factory=dict)
    materials: dict[int, MaterialRow] = field(default_factory=dict)
    exp_by_enhance_id: dict[int, list[int]] = field(default_factory=dict)
    gold_cost_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    max_level_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    sell_price_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    # Weapon id to consumable item id to count.
    medals_by_weapon_id: dict[int, dict[int, int]] = field(default_factory=dict)
    evolution_next_weapon_id: dict[int, int] = field(default_factory=dict)
    # Weapon id to its zero-based position in its evolution chain.
    evolution_order: dict[int, int] = field(default_factory=dict)
    evolution_materials: dict[int, list[WeaponEvolutionMaterialRow]] = field(default_factory=dict)
    evolution_cost_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    # Ability group id to slot numbers.
    ability_slots: dict[int, list[int]] = field(default_factory=dict)
    skill_groups_by_group_id: dict[int, list[WeaponSkillGroupRow]] = field(default_factory=dict)
    # Keyed by (enhancement material id, skill level).
    skill_enhance_mats: dict[tuple[int, int], list[WeaponSkillEnhanceMaterialRow]] = field(
        default_factory=dict
    )
    skill_max_level_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    skill_cost_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    ability_groups_by_group_id: dict[int, list[WeaponAbilityGroupRow]] = field(
        default_factory=dict
    )
    # Keyed by (enhancement material id, ability level).
    ability_enhance_mats: dict[tuple[int, int], list[WeaponAbilityEnhanceMaterialRow]] = field(
        default_factory=dict
    )
    ability_max_level_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    ability_cost_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    enhance_cost_by_weapon_by_enhance_id: dict[int, NumericalFunc] = field(default_factory=dict)
    limit_break_cost_by_weapon_by_enhance_id: dict[int, NumericalFunc] = field(
        default_factory=dict
    )
    limit_break_cost_by_material_by_enhance_id: dict[int, NumericalFunc] = field(
        default_factory=dict
    )
    base_exp_by_enhance_id: dict[int, int] = field(default_factory=dict)
    release_conditions_by_group_id: dict[int, list[WeaponStoryReleaseConditionRow]] = field(
        default_factory=dict
    )

    awaken_by_weapon_id: dict[int, WeaponAwakenRow] = field(default_factory=dict)
    awaken_materials_by_group_id: dict[int, list[WeaponAwakenMaterialGroupRow]] = field(
        default_factory=dict
    )

    def _register(self, enhance_id: int, curves: EnhanceCurves, keep_existing: bool) -> None:
        if not (keep_existing and enhance_id in self.exp_by_enhance_id):
            self.exp_by_enhance_id[enhance_id] = curves.exp_thresholds
        for attribute, curve_name in _FUNCTION_CURVES:
            target: dict[int, NumericalFunc] = getattr(self, attribute)
            if keep_existing and enhance_id in target:
                continue
            func = getattr(curves, curve_name)
            if func is not None:
                target[enhance_id] = func
        if not (keep_existing and enhance_id in self.base_exp_by_enhance_id):
            self.base_exp_by_enhance_id[enhance_id] = curves.base_exp


def load_weapon_catalog(
    tables: TableReader,
    materials: MaterialCatalog,
    functions: FunctionResolver,
    enhancement_material_type: int,
) -> WeaponCatalog:
    """Build the weapon catalog.

    Per specific enhance id, the first row that provides a curve wins. Weapons
    without a specific enhance id fall back to their rarity's curves under the
    synthetic enhance id ``-rarity_type``.
    """
    weapons = [_row(WeaponMasterRow, raw) for raw in tables.read(WEAPON_TABLE)]
    enhance_rows = [
        (_int(raw, "WeaponSpecificEnhanceId"), _row(EnhanceCurveRow, raw))
        for raw in tables.read(SPECIFIC_ENHANCE_TABLE)
    ]
    rarity_rows = [
        (_int(raw, "RarityType"), _row(EnhanceCurveRow, raw)) for raw in tables.read(RARITY_TABLE)
    ]
    parameter_map = load_parameter_map(tables)
    exchange_rows = tables.read(CONSUME_EXCHANGE_TABLE)
    evolution_rows = [
        _row(WeaponEvolutionGroupRow, raw) for raw in tables.read(EVOLUTION_GROUP_TABLE)
    ]
    evolution_mat_rows = [
        _row(WeaponEvolutionMaterialRow, raw) for raw in tables.read(EVOLUTION_MATERIAL_TABLE)
    ]
    ability_group_rows = [
        _row(WeaponAbilityGroupRow, raw) for raw in tables.read(ABILITY_GROUP_TABLE)
    ]
    skill_group_rows = [_row(WeaponSkillGroupRow, raw) for raw in tables.read(SKILL_GROUP_TABLE)]
    skill_mat_rows = [
        _row(WeaponSkillEnhanceMaterialRow, raw) for raw in tables.read(SKILL_MATERIAL_TABLE)
    ]
    ability_mat_rows = [
        _row(WeaponAbilityEnhanceMaterialRow, raw) for raw in tables.read(ABILITY_MATERIAL_TABLE)
    ]
    release_conditions = [
        _row(WeaponStoryReleaseConditionRow, raw) for raw in tables.read(RELEASE_CONDITION_TABLE)
    ]
    awaken_rows = [_row(WeaponAwakenRow, raw) for raw in tables.read(AWAKEN_TABLE)]
    awaken_mat_rows = [
        _row(WeaponAwakenMaterialGroupRow, raw) for raw in tables.read(AWAKEN_MATERIAL_TABLE)
    ]

    catalog = WeaponCatalog(materials=materials.by_type.get(enhancement_material_type, {}))

    for weapon in weapons:
        catalog.weapons[weapon.weapon_id] = weapon

    for enhance_id, curve_row in enhance_rows:
        curves = build_enhance_curves(curve_row, parameter_map, functions)
        catalog._register(enhance_id, curves, keep_existing=True)

    for raw in exchange_rows:
        catalog.medals_by_weapon_id.setdefault(_int(raw, "WeaponId"), {})[
            _int(raw, "ConsumableItemId")
        ] = _int(raw, "Count")

    chains: dict[int, list[WeaponEvolutionGroupRow]] = defaultdict(list)
    for evolution in evolution_rows:
        chains[evolution.weapon_evolution_group_id].append(evolution)
    for chain in chains.values():
        ordered = sorted(chain, key=lambda r: r.evolution_order)
        for position, evolution in enumerate(ordered):
            catalog.evolution_order[evolution.weapon_id] = position
        for current, following in zip(ordered, ordered[1:]):
            catalog.evolution_next_weapon_id[current.weapon_id] = following.weapon_id

    for mat in evolution_mat_rows:
        catalog.evolution_materials.setdefault(mat.weapon_evolution_material_group_id, []).append(
            mat
        )

    for ability in ability_group_rows:
        catalog.ability_slots.setdefault(ability.weapon_ability_group_id, []).append(
            ability.slot_number
        )
        catalog.ability_groups_by_group_id.setdefault(ability.weapon_ability_group_id, []).append(
            ability
        )

    for skill in skill_group_rows:
        catalog.skill_groups_by_group_id.setdefault(skill.weapon_skill_group_id, []).append(skill)

    for mat in skill_mat_rows:
        catalog.skill_enhance_mats.setdefault(
            (mat.weapon_skill_enhancement_material_id, mat.skill_level), []
        ).append(mat)

    for mat in ability_mat_rows:
        catalog.ability_enhance_mats.setdefault(
            (mat.weapon_ability_enhancement_material_id, mat.ability_level), []
        ).append(mat)

    for condition in release_conditions:
        catalog.release_conditions_by_group_id.setdefault(
            condition.weapon_story_release_condition_group_id, []
        ).append(condition)

    for awaken in awaken_rows:
        catalog.awaken_by_weapon_id[awaken.weapon_id] = awaken
    for mat in awaken_mat_rows:
        catalog.awaken_materials_by_group_id.setdefault(
            mat.weapon_awaken_material_group_id, []
        ).append(mat)

    rarity_by_type = dict(rarity_rows)
    registered: set[int] = set()
    fallback_count = 0
    for weapon_id, weapon in list(catalog.weapons.items()):
        if weapon.weapon_specific_enhance_id != 0:
            continue
        synthetic_id = -weapon.rarity_type
        if weapon.rarity_type not in registered:
            curve_row = rarity_by_type.get(weapon.rarity_type)
            if curve_row is None:
                continue
            curves = build_enhance_curves(curve_row, parameter_map, functions)
            catalog._register(synthetic_id, curves, keep_existing=False)
            registered.add(weapon.rarity_type)
        catalog.weapons[weapon_id] = WeaponMasterRow(
            weapon_id=weapon.weapon_id,
            rarity_type=weapon.rarity_type,
            weapon_type=weapon.weapon_type,
            weapon_specific_enhance_id=synthetic_id,
            weapon_skill_group_id=weapon.weapon_skill_group_id,
            weapon_ability_group_id=weapon.weapon_ability_group_id,
            weapon_story_release_condition_group_id=weapon.weapon_story_release_condition_group_id,
            weapon_evolution_material_group_id=weapon.weapon_evolution_material_group_id,
        )
        fallback_count += 1
    logger.info("weapon catalog rarity fallback: assigned synthetic enhance ids to %d weapons",
                fallback_count)

    return catalog