"""Character board catalog: panels, release costs and effects, abilities and status ups."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from .tables import TableReader

PANEL_TABLE = "EntityMCharacterBoardPanelTable.json"
RELEASE_POSSESSION_TABLE = "EntityMCharacterBoardPanelReleasePossessionGroupTable.json"
RELEASE_EFFECT_TABLE = "EntityMCharacterBoardPanelReleaseEffectGroupTable.json"
BOARD_TABLE = "EntityMCharacterBoardTable.json"
STATUS_UP_TABLE = "EntityMCharacterBoardStatusUpTable.json"
ABILITY_TABLE = "EntityMCharacterBoardAbilityTable.json"
ABILITY_MAX_LEVEL_TABLE = "EntityMCharacterBoardAbilityMaxLevelTable.json"
EFFECT_TARGET_TABLE = "EntityMCharacterBoardEffectTargetGroupTable.json"

_T = TypeVar("_T")


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _row(cls: type[_T], raw: Mapping[str, Any]) -> _T:
    return cls(**{f.name: int(raw.get(_json_key(f.name), 0)) for f in fields(cls)})


@dataclass(frozen=True)
class CharacterBoardPanelRow:
    character_board_panel_id: int
    character_board_id: int
    character_board_panel_unlock_condition_group_id: int
    character_board_panel_release_possession_group_id: int
    character_board_panel_release_reward_group_id: int
    character_board_panel_release_effect_group_id: int
    sort_order: int
    parent_character_board_panel_id: int
    place_index: int


@dataclass(frozen=True)
class CharacterBoardReleasePossessionRow:
    character_board_panel_release_possession_group_id: int
    possession_type: int
    possession_id: int
    count: int
    sort_order: int


@dataclass(frozen=True)
class CharacterBoardReleaseEffectRow:
    character_board_panel_release_effect_group_id: int
    sort_order: int
    character_board_effect_type: int
    character_board_effect_id: int
    effect_value: int


@dataclass(frozen=True)
class CharacterBoardRow:
    character_board_id: int
    character_board_group_id: int
    character_board_unlock_condition_group_id: int
    release_rank: int


@dataclass(frozen=True)
class CharacterBoardStatusUpRow:
    character_board_status_up_id: int
    character_board_status_up_type: int
    character_board_effect_target_group_id: int


@dataclass(frozen=True)
class CharacterBoardAbilityRow:
    character_board_ability_id: int
    character_board_effect_target_group_id: int
    ability_id: int


@dataclass(frozen=True)
class CharacterBoardAbilityMaxLevelRow:
    character_id: int
    ability_id: int
    max_level: int


@dataclass(frozen=True)
class CharacterBoardEffectTargetRow:
    character_board_effect_target_group_id: int
    group_index: int
    character_board_effect_target_type: int
    target_value: int


@dataclass(frozen=True)
class CharacterBoardAbilityKey:
    character_id: int
    ability_id: int


@dataclass
class CharacterBoardCatalog:
    panel_by_id: dict[int, CharacterBoardPanelRow] = field(default_factory=dict)
    panels_by_board_id: dict[int, list[CharacterBoardPanelRow]] = field(default_factory=dict)
    release_costs_by_group_id: dict[int, list[CharacterBoardReleasePossessionRow]] = field(
        default_factory=dict
    )
    release_effects_by_group_id: dict[int, list[CharacterBoardReleaseEffectRow]] = field(
        default_factory=dict
    )
    status_up_by_id: dict[int, CharacterBoardStatusUpRow] = field(default_factory=dict)
    ability_by_id: dict[int, CharacterBoardAbilityRow] = field(default_factory=dict)
    ability_max_level: dict[CharacterBoardAbilityKey, int] = field(default_factory=dict)
    effect_targets_by_group_id: dict[int, list[CharacterBoardEffectTargetRow]] = field(
        default_factory=dict
    )
    board_by_id: dict[int, CharacterBoardRow] = field(default_factory=dict)


def load_character_board_catalog(tables: TableReader) -> CharacterBoardCatalog:
    """Build the character board catalog from its eight tables."""
    panels = [_row(CharacterBoardPanelRow, raw) for raw in tables.read(PANEL_TABLE)]
    costs = [
        _row(CharacterBoardReleasePossessionRow, raw)
        for raw in tables.read(RELEASE_POSSESSION_TABLE)
    ]
    effects = [
        _row(CharacterBoardReleaseEffectRow, raw) for raw in tables.read(RELEASE_EFFECT_TABLE)
    ]
    boards = [_row(CharacterBoardRow, raw) for raw in tables.read(BOARD_TABLE)]
    status_ups = [_row(CharacterBoardStatusUpRow, raw) for raw in tables.read(STATUS_UP_TABLE)]
    abilities = [_row(CharacterBoardAbilityRow, raw) for raw in tables.read(ABILITY_TABLE)]
    max_levels = [
        _row(CharacterBoardAbilityMaxLevelRow, raw)
        for raw in tables.read(ABILITY_MAX_LEVEL_TABLE)
    ]
    targets = [
        _row(CharacterBoardEffectTargetRow, raw) for raw in tables.read(EFFECT_TARGET_TABLE)
    ]

    catalog = CharacterBoardCatalog()
    for panel in panels:
        catalog.panel_by_id[panel.character_board_panel_id] = panel
        catalog.panels_by_board_id.setdefault(panel.character_board_id, []).append(panel)
    for cost in costs:
        catalog.release_costs_by_group_id.setdefault(
            cost.character_board_panel_release_possession_group_id, []
        ).append(cost)
    for effect in effects:
        catalog.release_effects_by_group_id.setdefault(
            effect.character_board_panel_release_effect_group_id, []
        ).append(effect)
    for board in boards:
        catalog.board_by_id[board.character_board_id] = board
    for status_up in status_ups:
        catalog.status_up_by_id[status_up.character_board_status_up_id] = status_up
    for ability in abilities:
        catalog.ability_by_id[ability.character_board_ability_id] = ability
    for level in max_levels:
        key = CharacterBoardAbilityKey(character_id=level.character_id, ability_id=level.ability_id)
        catalog.ability_max_level[key] = level.max_level
    for target in targets:
        catalog.effect_targets_by_group_id.setdefault(
            target.character_board_effect_target_group_id, []
        ).append(target)
    return catalog