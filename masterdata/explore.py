"""Explore catalog: explores, grade score thresholds and grade icons."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from .tables import TableReader

EXPLORE_TABLE = "EntityMExploreTable.json"
GRADE_SCORE_TABLE = "EntityMExploreGradeScoreTable.json"
GRADE_ASSET_TABLE = "EntityMExploreGradeAssetTable.json"


@dataclass(frozen=True)
class ExploreRow:
    explore_id: int
    consume_item_count: int
    reward_lottery_count: int


@dataclass(frozen=True)
class ExploreGradeScoreRow:
    explore_id: int
    necessary_score: int
    explore_grade_id: int


@dataclass
class ExploreCatalog:
    explores: dict[int, ExploreRow] = field(default_factory=dict)
    # Keyed by explore id, highest necessary score first.
    grade_scores: dict[int, list[ExploreGradeScoreRow]] = field(default_factory=dict)
    # Grade id to asset grade icon id.
    grade_assets: dict[int, int] = field(default_factory=dict)

    def grade_for_score(self, explore_id: int, score: int) -> int:
        """Icon id of the best grade the score reaches, or 0 when none matches."""
        for row in self.grade_scores.get(explore_id, []):
            if score >= row.necessary_score:
                return self.grade_assets.get(row.explore_grade_id, 0)
        return 0


def load_explore_catalog(tables: TableReader) -> ExploreCatalog:
    explores = tables.read(EXPLORE_TABLE)
    grade_scores = tables.read(GRADE_SCORE_TABLE)
    grade_assets = tables.read(GRADE_ASSET_TABLE)

    catalog = ExploreCatalog()
    for raw in explores:
        row = ExploreRow(
            explore_id=int(raw.get("ExploreId", 0)),
            consume_item_count=int(raw.get("ConsumeItemCount", 0)),
            reward_lottery_count=int(raw.get("RewardLotteryCount", 0)),
        )
        catalog.explores[row.explore_id] = row

    grouped: dict[int, list[ExploreGradeScoreRow]] = defaultdict(list)
    for raw in grade_scores:
        row = ExploreGradeScoreRow(
            explore_id=int(raw.get("ExploreId", 0)),
            necessary_score=int(raw.get("NecessaryScore", 0)),
            explore_grade_id=int(raw.get("ExploreGradeId", 0)),
        )
        grouped[row.explore_id].append(row)
    catalog.grade_scores = {
        explore_id: sorted(rows, key=lambda r: r.necessary_score, reverse=True)
        for explore_id, rows in grouped.items()
    }

    for raw in grade_assets:
        catalog.grade_assets[int(raw.get("ExploreGradeId", 0))] = int(
            raw.get("AssetGradeIconId", 0)
        )
    return catalog