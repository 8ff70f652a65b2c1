"""Big hunt catalog: boss quests, grades, schedules and score rewards."""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .tables import TableReader

logger = logging.getLogger(__name__)

BOSS_QUEST_TABLE = "EntityMBigHuntBossQuestTable.json"
QUEST_TABLE = "EntityMBigHuntQuestTable.json"
SCORE_COEFFICIENT_TABLE = "EntityMBigHuntQuestScoreCoefficientTable.json"
BOSS_TABLE = "EntityMBigHuntBossTable.json"
BOSS_GRADE_GROUP_TABLE = "EntityMBigHuntBossGradeGroupTable.json"
SCHEDULE_TABLE = "EntityMBigHuntScheduleTable.json"
SCORE_REWARD_SCHEDULE_TABLE = "EntityMBigHuntScoreRewardGroupScheduleTable.json"
SCORE_REWARD_GROUP_TABLE = "EntityMBigHuntScoreRewardGroupTable.json"
REWARD_GROUP_TABLE = "EntityMBigHuntRewardGroupTable.json"
WEEKLY_REWARD_SCHEDULE_TABLE = "EntityMBigHuntWeeklyAttributeScoreRewardGroupScheduleTable.json"


def _int(row: Mapping[str, Any], key: str) -> int:
    return int(row.get(key, 0))


@dataclass(frozen=True)
class BigHuntBossQuestRow:
    big_hunt_boss_quest_id: int
    big_hunt_boss_id: int
    big_hunt_quest_group_id: int
    big_hunt_score_reward_group_schedule_id: int
    daily_challenge_count: int


@dataclass(frozen=True)
class BigHuntQuestRow:
    big_hunt_quest_id: int
    quest_id: int
    big_hunt_quest_score_coefficient_id: int


@dataclass(frozen=True)
class BigHuntBossRow:
    big_hunt_boss_id: int
    big_hunt_boss_grade_group_id: int
    attribute_type: int


@dataclass(frozen=True)
class GradeThreshold:
    necessary_score: int
    asset_grade_icon_id: int


@dataclass(frozen=True)
class ScoreRewardScheduleEntry:
    big_hunt_score_reward_group_id: int
    start_datetime: int


@dataclass(frozen=True)
class ScoreRewardThreshold:
    necessary_score: int
    big_hunt_reward_group_id: int


@dataclass(frozen=True)
class RewardItem:
    possession_type: int
    possession_id: int
    count: int


@dataclass(frozen=True)
class BigHuntWeeklyRewardKey:
    schedule_id: int
    attribute_type: int


def _active_group_id(entries: Sequence[ScoreRewardScheduleEntry], now_millis: int) -> int:
    """Pick the latest-started entry at ``now_millis``; entries run newest first."""
    for entry in entries:
        if now_millis >= entry.start_datetime:
            return entry.big_hunt_score_reward_group_id
    if entries:
        return entries[-1].big_hunt_score_reward_group_id
    return 0


@dataclass
class BigHuntCatalog:
    boss_quest_by_id: dict[int, BigHuntBossQuestRow] = field(default_factory=dict)
    quest_by_id: dict[int, BigHuntQuestRow] = field(default_factory=dict)
    score_coefficients: dict[int, int] = field(default_factory=dict)
    boss_by_boss_id: dict[int, BigHuntBossRow] = field(default_factory=dict)
    grade_thresholds: dict[int, list[GradeThreshold]] = field(default_factory=dict)
    active_schedule_id: int = 0
    score_reward_schedules: dict[int, list[ScoreRewardScheduleEntry]] = field(
        default_factory=dict
    )
    score_reward_thresholds: dict[int, list[ScoreRewardThreshold]] = field(
        default_factory=dict
    )
    reward_items: dict[int, list[RewardItem]] = field(default_factory=dict)
    weekly_reward_schedules: dict[BigHuntWeeklyRewardKey, list[ScoreRewardScheduleEntry]] = (
        field(default_factory=dict)
    )

    def resolve_active_score_reward_group_id(self, schedule_id: int, now_millis: int) -> int:
        """Score reward group in effect for a schedule, or 0 when it has none."""
        return _active_group_id(self.score_reward_schedules.get(schedule_id, []), now_millis)

    def resolve_active_weekly_reward_group_id(
        self, key: BigHuntWeeklyRewardKey, now_millis: int
    ) -> int:
        """Weekly attribute reward group in effect, or 0 when there is none."""
        return _active_group_id(self.weekly_reward_schedules.get(key, []), now_millis)

    def resolve_grade_icon_id(self, boss_id: int, score: int) -> int:
        """Icon of the highest grade the score reaches for a boss, or 0."""
        boss = self.boss_by_boss_id.get(boss_id)
        if boss is None:
            return 0
        icon_id = 0
        for threshold in self.grade_thresholds.get(boss.big_hunt_boss_grade_group_id, []):
            if score < threshold.necessary_score:
                break
            icon_id = threshold.asset_grade_icon_id
        return icon_id

    def collect_new_rewards(
        self, score_reward_group_id: int, old_max: int, new_max: int
    ) -> list[RewardItem]:
        """Rewards for thresholds above ``old_max`` and at most ``new_max``."""
        items: list[RewardItem] = []
        for threshold in self.score_reward_thresholds.get(score_reward_group_id, []):
            if old_max < threshold.necessary_score <= new_max:
                items.extend(self.reward_items.get(threshold.big_hunt_reward_group_id, []))
        return items


def _schedule_entries(
    rows: Sequence[Mapping[str, Any]], key_of
) -> dict[Any, list[ScoreRewardScheduleEntry]]:
    grouped: dict[Any, list[ScoreRewardScheduleEntry]] = defaultdict(list)
    for row in rows:
        grouped[key_of(row)].append(
            ScoreRewardScheduleEntry(
                big_hunt_score_reward_group_id=_int(row, "BigHuntScoreRewardGroupId"),
                start_datetime=_int(row, "StartDatetime"),
            )
        )
    return {
        key: sorted(entries, key=lambda e: e.start_datetime, reverse=True)
        for key, entries in grouped.items()
    }


def _select_active_schedule(rows: Sequence[Mapping[str, Any]], now_millis: int) -> int:
    active_id = 0
    latest_end = 0
    for row in rows:
        start = _int(row, "ChallengeStartDatetime")
        end = _int(row, "ChallengeEndDatetime")
        if start <= now_millis <= end:
            return _int(row, "BigHuntScheduleId")
        if end > latest_end:
            latest_end = end
            active_id = _int(row, "BigHuntScheduleId")
    return active_id


def load_big_hunt_catalog(tables: TableReader, now_millis: int | None = None) -> BigHuntCatalog:
    """Build the big hunt catalog; the active schedule is chosen at ``now_millis``."""
    if now_millis is None:
        now_millis = time.time_ns() // 1_000_000

    boss_quests = {}
    for row in tables.read(BOSS_QUEST_TABLE):
        boss_quest = BigHuntBossQuestRow(
            big_hunt_boss_quest_id=_int(row, "BigHuntBossQuestId"),
            big_hunt_boss_id=_int(row, "BigHuntBossId"),
            big_hunt_quest_group_id=_int(row, "BigHuntQuestGroupId"),
            big_hunt_score_reward_group_schedule_id=_int(
                row, "BigHuntScoreRewardGroupScheduleId"
            ),
            daily_challenge_count=_int(row, "DailyChallengeCount"),
        )
        boss_quests[boss_quest.big_hunt_boss_quest_id] = boss_quest

    quests = {}
    for row in tables.read(QUEST_TABLE):
        quest = BigHuntQuestRow(
            big_hunt_quest_id=_int(row, "BigHuntQuestId"),
            quest_id=_int(row, "QuestId"),
            big_hunt_quest_score_coefficient_id=_int(row, "BigHuntQuestScoreCoefficientId"),
        )
        quests[quest.big_hunt_quest_id] = quest

    coefficients = {
        _int(row, "BigHuntQuestScoreCoefficientId"): _int(row, "ScoreDifficultBonusPermil")
        for row in tables.read(SCORE_COEFFICIENT_TABLE)
    }

    bosses = {}
    for row in tables.read(BOSS_TABLE):
        boss = BigHuntBossRow(
            big_hunt_boss_id=_int(row, "BigHuntBossId"),
            big_hunt_boss_grade_group_id=_int(row, "BigHuntBossGradeGroupId"),
            attribute_type=_int(row, "AttributeType"),
        )
        bosses[boss.big_hunt_boss_id] = boss

    grades: dict[int, list[GradeThreshold]] = defaultdict(list)
    for row in tables.read(BOSS_GRADE_GROUP_TABLE):
        grades[_int(row, "BigHuntBossGradeGroupId")].append(
            GradeThreshold(
                necessary_score=_int(row, "NecessaryScore"),
                asset_grade_icon_id=_int(row, "AssetGradeIconId"),
            )
        )
    grade_thresholds = {
        key: sorted(values, key=lambda t: t.necessary_score) for key, values in grades.items()
    }

    active_schedule_id = _select_active_schedule(tables.read(SCHEDULE_TABLE), now_millis)

    score_reward_schedules = _schedule_entries(
        tables.read(SCORE_REWARD_SCHEDULE_TABLE),
        lambda row: _int(row, "BigHuntScoreRewardGroupScheduleId"),
    )

    thresholds: dict[int, list[ScoreRewardThreshold]] = defaultdict(list)
    for row in tables.read(SCORE_REWARD_GROUP_TABLE):
        thresholds[_int(row, "BigHuntScoreRewardGroupId")].append(
            ScoreRewardThreshold(
                necessary_score=_int(row, "NecessaryScore"),
                big_hunt_reward_group_id=_int(row, "BigHuntRewardGroupId"),
            )
        )
    score_reward_thresholds = {
        key: sorted(values, key=lambda t: t.necessary_score)
        for key, values in thresholds.items()
    }

    reward_items: dict[int, list[RewardItem]] = defaultdict(list)
    for row in tables.read(REWARD_GROUP_TABLE):
        reward_items[_int(row, "BigHuntRewardGroupId")].append(
            RewardItem(
                possession_type=_int(row, "PossessionType"),
                possession_id=_int(row, "PossessionId"),
                count=_int(row, "Count"),
            )
        )

    weekly_reward_schedules = _schedule_entries(
        tables.read(WEEKLY_REWARD_SCHEDULE_TABLE),
        lambda row: BigHuntWeeklyRewardKey(
            schedule_id=_int(row, "BigHuntWeeklyAttributeScoreRewardGroupScheduleId"),
            attribute_type=_int(row, "AttributeType"),
        ),
    )

    logger.info(
        "big hunt catalog loaded: %d boss quests, %d quests, %d bosses, "
        "%d score coefficients, %d reward groups, schedule=%d",
        len(boss_quests),
        len(quests),
        len(bosses),
        len(coefficients),
        len(reward_items),
        active_schedule_id,
    )

    return BigHuntCatalog(
        boss_quest_by_id=boss_quests,
        quest_by_id=quests,
        score_coefficients=coefficients,
        boss_by_boss_id=bosses,
        grade_thresholds=grade_thresholds,
        active_schedule_id=active_schedule_id,
        score_reward_schedules=score_reward_schedules,
        score_reward_thresholds=score_reward_thresholds,
        reward_items=dict(reward_items),
        weekly_reward_schedules=weekly_reward_schedules,
    )