"""Weapon master-data rows and the enhancement curves a weapon draws on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .numericalfunc import FunctionResolver, NumericalFunc
from .tables import ParameterMapRow, build_exp_thresholds


@dataclass(frozen=True)
class WeaponMasterRow:
    weapon_id: int
    rarity_type: int
    weapon_type: int
    weapon_specific_enhance_id: int
    weapon_skill_group_id: int
    weapon_ability_group_id: int
    weapon_story_release_condition_group_id: int
    weapon_evolution_material_group_id: int


@dataclass(frozen=True)
class WeaponStoryReleaseConditionRow:
    weapon_story_release_condition_group_id: int
    story_index: int
    weapon_story_release_condition_type: int
    condition_value: int
    weapon_story_release_condition_operation_group_id: int


@dataclass(frozen=True)
class WeaponSkillGroupRow:
    weapon_skill_group_id: int
    slot_number: int
    skill_id: int
    weapon_skill_enhancement_material_id: int


@dataclass(frozen=True)
class WeaponAbilityGroupRow:
    weapon_ability_group_id: int
    slot_number: int
    ability_id: int
    weapon_ability_enhancement_material_id: int


@dataclass(frozen=True)
class WeaponEvolutionGroupRow:
    weapon_evolution_group_id: int
    evolution_order: int
    weapon_id: int


@dataclass(frozen=True)
class WeaponEvolutionMaterialRow:
    weapon_evolution_material_group_id: int
    material_id: int
    count: int
    sort_order: int


@dataclass(frozen=True)
class WeaponSkillEnhanceMaterialRow:
    weapon_skill_enhancement_material_id: int
    skill_level: int
    material_id: int
    count: int
    sort_order: int


@dataclass(frozen=True)
class WeaponAbilityEnhanceMaterialRow:
    weapon_ability_enhancement_material_id: int
    ability_level: int
    material_id: int
    count: int
    sort_order: int


@dataclass(frozen=True)
class WeaponAwakenRow:
    weapon_id: int
    weapon_awaken_effect_group_id: int
    weapon_awaken_material_group_id: int
    consume_gold: int
    level_limit_up: int


@dataclass(frozen=True)
class WeaponAwakenMaterialGroupRow:
    weapon_awaken_material_group_id: int
    material_id: int
    count: int
    sort_order: int


@dataclass(frozen=True)
class EnhanceCurveRow:
    """The curve references shared by the specific-enhance and rarity tables."""

    base_enhancement_obtained_exp: int = 0
    sell_price_numerical_function_id: int = 0
    required_exp_for_level_up_numerical_parameter_map_id: int = 0
    enhancement_cost_by_weapon_numerical_function_id: int = 0
    enhancement_cost_by_material_numerical_function_id: int = 0
    max_level_numerical_function_id: int = 0
    evolution_cost_numerical_function_id: int = 0
    limit_break_cost_by_weapon_numerical_function_id: int = 0
    limit_break_cost_by_material_numerical_function_id: int = 0
    max_skill_level_numerical_function_id: int = 0
    skill_enhancement_cost_numerical_function_id: int = 0
    max_ability_level_numerical_function_id: int = 0
    ability_enhancement_cost_numerical_function_id: int = 0


@dataclass(frozen=True)
class EnhanceCurves:
    """Resolved curves; a curve whose function id is unknown is None."""

    exp_thresholds: list[int] = field(default_factory=list)
    gold_cost: NumericalFunc | None = None
    max_level: NumericalFunc | None = None
    sell_price: NumericalFunc | None = None
    evolution_cost: NumericalFunc | None = None
    skill_max_level: NumericalFunc | None = None
    skill_cost: NumericalFunc | None = None
    ability_max_level: NumericalFunc | None = None
    ability_cost: NumericalFunc | None = None
    enhance_cost_by_weapon: NumericalFunc | None = None
    limit_break_cost_by_weapon: NumericalFunc | None = None
    limit_break_cost_by_material: NumericalFunc | None = None
    base_exp: int = 0


def build_enhance_curves(
    row: EnhanceCurveRow,
    parameter_map: Iterable[ParameterMapRow],
    functions: FunctionResolver,
) -> EnhanceCurves:
    """Resolve every curve a row refers to."""
    resolve = functions.resolve
    return EnhanceCurves(
        exp_thresholds=build_exp_thresholds(
            parameter_map, row.required_exp_for_level_up_numerical_parameter_map_id
        ),
        gold_cost=resolve(row.enhancement_cost_by_material_numerical_function_id),
        max_level=resolve(row.max_level_numerical_function_id),
        sell_price=resolve(row.sell_price_numerical_function_id),
        evolution_cost=resolve(row.evolution_cost_numerical_function_id),
        skill_max_level=resolve(row.max_skill_level_numerical_function_id),
        skill_cost=resolve(row.skill_enhancement_cost_numerical_function_id),
        ability_max_level=resolve(row.max_ability_level_numerical_function_id),
        ability_cost=resolve(row.ability_enhancement_cost_numerical_function_id),
        enhance_cost_by_weapon=resolve(row.enhancement_cost_by_weapon_numerical_function_id),
        limit_break_cost_by_weapon=resolve(
            row.limit_break_cost_by_weapon_numerical_function_id
        ),
        limit_break_cost_by_material=resolve(
            row.limit_break_cost_by_material_numerical_function_id
        ),
        base_exp=row.base_enhancement_obtained_exp,
    )