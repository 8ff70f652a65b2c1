"""Gimmick sequence schedules and which of them are active for a player."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Mapping

from .conditions import ConditionResolver
from .tables import TableReader

logger = logging.getLogger(__name__)

SCHEDULE_TABLE = "EntityMGimmickSequenceScheduleTable.json"


def _int(raw: Mapping[str, Any], key: str) -> int:
    return int(raw.get(key, 0))


@dataclass(frozen=True)
class GimmickSequenceKey:
    gimmick_sequence_schedule_id: int
    gimmick_sequence_id: int


@dataclass(frozen=True)
class _Schedule:
    schedule_id: int
    start_datetime: int
    end_datetime: int
    first_sequence_id: int
    # Zero when the schedule needs no quest to be cleared.
    required_quest_id: int


@dataclass
class GimmickCatalog:
    schedules: list[_Schedule] = field(default_factory=list)

    def active_schedule_keys(
        self, cleared_quest_ids: Collection[int], now_millis: int
    ) -> list[GimmickSequenceKey]:
        """Keys of schedules running at ``now_millis`` whose required quest is cleared."""
        return [
            GimmickSequenceKey(
                gimmick_sequence_schedule_id=s.schedule_id,
                gimmick_sequence_id=s.first_sequence_id,
            )
            for s in self.schedules
            if s.start_datetime <= now_millis <= s.end_datetime
            and (s.required_quest_id == 0 or s.required_quest_id in cleared_quest_ids)
        ]


def load_gimmick_catalog(tables: TableReader, conditions: ConditionResolver) -> GimmickCatalog:
    """Build the schedule list, resolving release conditions to required quests."""
    schedules = []
    for raw in tables.read(SCHEDULE_TABLE):
        condition_id = _int(raw, "ReleaseEvaluateConditionId")
        required = conditions.required_quest_id(condition_id) if condition_id else None
        schedules.append(
            _Schedule(
                schedule_id=_int(raw, "GimmickSequenceScheduleId"),
                start_datetime=_int(raw, "StartDatetime"),
                end_datetime=_int(raw, "EndDatetime"),
                first_sequence_id=_int(raw, "FirstGimmickSequenceId"),
                required_quest_id=required or 0,
            )
        )
    logger.info("gimmick catalog loaded: %d schedules", len(schedules))
    return GimmickCatalog(schedules)