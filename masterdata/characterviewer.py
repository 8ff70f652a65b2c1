"""Character viewer catalog: which viewer fields a player has unlocked."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection

from .conditions import ConditionResolver
from .tables import TableReader

logger = logging.getLogger(__name__)

FIELD_TABLE = "EntityMCharacterViewerFieldTable.json"


@dataclass(frozen=True)
class _ViewerField:
    field_id: int
    required_quest_id: int


@dataclass
class CharacterViewerCatalog:
    fields: list[_ViewerField] = field(default_factory=list)

    def released_field_ids(self, cleared_quest_ids: Collection[int]) -> list[int]:
        """Field ids open to a player who has cleared ``cleared_quest_ids``."""
        return [
            entry.field_id
            for entry in self.fields
            if entry.required_quest_id == 0 or entry.required_quest_id in cleared_quest_ids
        ]


def load_character_viewer_catalog(
    tables: TableReader, conditions: ConditionResolver
) -> CharacterViewerCatalog:
    """Build the catalog, fields ordered by id with their required quests resolved."""
    entries = []
    for raw in tables.read(FIELD_TABLE):
        quest_id = conditions.required_quest_id(int(raw.get("ReleaseEvaluateConditionId", 0)))
        entries.append(
            _ViewerField(
                field_id=int(raw.get("CharacterViewerFieldId", 0)),
                required_quest_id=quest_id or 0,
            )
        )
    entries.sort(key=lambda entry: entry.field_id)
    logger.info("character viewer catalog loaded: %d fields", len(entries))
    return CharacterViewerCatalog(entries)