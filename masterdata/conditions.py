"""Resolving release conditions to the quest that must be cleared."""

from __future__ import annotations

from dataclasses import dataclass, field

from .tables import TableReader

CONDITION_TABLE = "EntityMEvaluateConditionTable.json"
VALUE_GROUP_TABLE = "EntityMEvaluateConditionValueGroupTable.json"

_DEFAULT_GROUP_INDEX = 1


def _int32(value: int) -> int:
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


@dataclass
class ConditionResolver:
    """Maps evaluate-condition ids to the quest id they require to be cleared."""

    required_quest_by_condition: dict[int, int] = field(default_factory=dict)

    def required_quest_id(self, condition_id: int) -> int | None:
        return self.required_quest_by_condition.get(condition_id)


def load_condition_resolver(
    tables: TableReader, quest_clear_function_type: int, id_contain_evaluate_type: int
) -> ConditionResolver:
    """Collect quest-clear conditions whose first value names the quest."""
    conditions = tables.read(CONDITION_TABLE)
    value_groups = tables.read(VALUE_GROUP_TABLE)

    values: dict[tuple[int, int], int] = {
        (int(vg.get("EvaluateConditionValueGroupId", 0)), int(vg.get("GroupIndex", 0))): int(
            vg.get("Value", 0)
        )
        for vg in value_groups
    }

    resolved: dict[int, int] = {}
    for cond in conditions:
        if int(cond.get("EvaluateConditionFunctionType", 0)) != quest_clear_function_type:
            continue
        if int(cond.get("EvaluateConditionEvaluateType", 0)) != id_contain_evaluate_type:
            continue
        key = (int(cond.get("EvaluateConditionValueGroupId", 0)), _DEFAULT_GROUP_INDEX)
        if key in values:
            resolved[int(cond.get("EvaluateConditionId", 0))] = _int32(values[key])
    return ConditionResolver(resolved)