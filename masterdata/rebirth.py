"""Character rebirth catalog: step groups per character, steps and their materials."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from .tables import TableReader

REBIRTH_TABLE = "EntityMCharacterRebirthTable.json"
STEP_GROUP_TABLE = "EntityMCharacterRebirthStepGroupTable.json"
MATERIAL_GROUP_TABLE = "EntityMCharacterRebirthMaterialGroupTable.json"

_T = TypeVar("_T")


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _row(cls: type[_T], raw: Mapping[str, Any]) -> _T:
    return cls(**{f.name: int(raw.get(_json_key(f.name), 0)) for f in fields(cls)})


@dataclass(frozen=True)
class CharacterRebirthRow:
    character_id: int
    character_rebirth_step_group_id: int


@dataclass(frozen=True)
class CharacterRebirthStepRow:
    character_rebirth_step_group_id: int
    before_rebirth_count: int
    costume_level_limit_up: int
    character_rebirth_material_group_id: int


@dataclass(frozen=True)
class CharacterRebirthMaterialRow:
    character_rebirth_material_group_id: int
    material_id: int
    count: int


@dataclass(frozen=True)
class StepKey:
    group_id: int
    before_rebirth_count: int


@dataclass
class CharacterRebirthCatalog:
    step_group_by_character_id: dict[int, int] = field(default_factory=dict)
    step_by_group_and_count: dict[StepKey, CharacterRebirthStepRow] = field(default_factory=dict)
    materials_by_group_id: dict[int, list[CharacterRebirthMaterialRow]] = field(
        default_factory=dict
    )


def load_character_rebirth_catalog(tables: TableReader) -> CharacterRebirthCatalog:
    """Build the rebirth catalog from the rebirth, step group and material group tables."""
    rebirths = [_row(CharacterRebirthRow, raw) for raw in tables.read(REBIRTH_TABLE)]
    steps = [_row(CharacterRebirthStepRow, raw) for raw in tables.read(STEP_GROUP_TABLE)]
    materials = [
        _row(CharacterRebirthMaterialRow, raw) for raw in tables.read(MATERIAL_GROUP_TABLE)
    ]

    catalog = CharacterRebirthCatalog()
    for rebirth in rebirths:
        catalog.step_group_by_character_id[rebirth.character_id] = (
            rebirth.character_rebirth_step_group_id
        )
    for step in steps:
        key = StepKey(
            group_id=step.character_rebirth_step_group_id,
            before_rebirth_count=step.before_rebirth_count,
        )
        catalog.step_by_group_and_count[key] = step
    for material in materials:
        catalog.materials_by_group_id.setdefault(
            material.character_rebirth_material_group_id, []
        ).append(material)
    return catalog