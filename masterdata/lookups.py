"""Small lookup catalogs: cage ornaments, login bonus stamps, omikuji and side stories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .tables import TableReader

logger = logging.getLogger(__name__)

CAGE_ORNAMENT_TABLE = "EntityMCageOrnamentTable.json"
CAGE_ORNAMENT_REWARD_TABLE = "EntityMCageOrnamentRewardTable.json"
LOGIN_BONUS_STAMP_TABLE = "EntityMLoginBonusStampTable.json"
OMIKUJI_TABLE = "EntityMOmikujiTable.json"
SIDE_STORY_SCENE_TABLE = "EntityMSideStoryQuestSceneTable.json"


@dataclass(frozen=True)
class PossessionReward:
    possession_type: int
    possession_id: int
    count: int


@dataclass
class CageOrnamentCatalog:
    ornament_to_reward_id: dict[int, int] = field(default_factory=dict)
    rewards: dict[int, PossessionReward] = field(default_factory=dict)

    def lookup_reward(self, cage_ornament_id: int) -> PossessionReward | None:
        """Return the ornament's reward, or None when it has none."""
        reward_id = self.ornament_to_reward_id.get(cage_ornament_id, 0)
        if reward_id == 0:
            return None
        return self.rewards.get(reward_id)


def load_cage_ornament_catalog(tables: TableReader) -> CageOrnamentCatalog:
    ornaments = tables.read(CAGE_ORNAMENT_TABLE)
    rewards = tables.read(CAGE_ORNAMENT_REWARD_TABLE)
    catalog = CageOrnamentCatalog()
    for row in ornaments:
        catalog.ornament_to_reward_id[int(row.get("CageOrnamentId", 0))] = int(
            row.get("CageOrnamentRewardId", 0)
        )
    for row in rewards:
        catalog.rewards[int(row.get("CageOrnamentRewardId", 0))] = PossessionReward(
            possession_type=int(row.get("PossessionType", 0)),
            possession_id=int(row.get("PossessionId", 0)),
            count=int(row.get("Count", 0)),
        )
    return catalog


@dataclass
class LoginBonusCatalog:
    stamps: dict[tuple[int, int, int], PossessionReward] = field(default_factory=dict)

    def lookup_stamp_reward(
        self, login_bonus_id: int, page_number: int, stamp_number: int
    ) -> PossessionReward | None:
        return self.stamps.get((login_bonus_id, page_number, stamp_number))


def load_login_bonus_catalog(tables: TableReader) -> LoginBonusCatalog:
    catalog = LoginBonusCatalog()
    for row in tables.read(LOGIN_BONUS_STAMP_TABLE):
        key = (
            int(row.get("LoginBonusId", 0)),
            int(row.get("LowerPageNumber", 0)),
            int(row.get("StampNumber", 0)),
        )
        catalog.stamps[key] = PossessionReward(
            possession_type=int(row.get("RewardPossessionType", 0)),
            possession_id=int(row.get("RewardPossessionId", 0)),
            count=int(row.get("RewardCount", 0)),
        )
    return catalog


@dataclass
class OmikujiCatalog:
    asset_ids: dict[int, int] = field(default_factory=dict)

    def lookup_asset_id(self, omikuji_id: int) -> int:
        """Return the asset id for an omikuji, or 0 when unknown."""
        return self.asset_ids.get(omikuji_id, 0)


def load_omikuji_catalog(tables: TableReader) -> OmikujiCatalog:
    return OmikujiCatalog(
        {
            int(row.get("OmikujiId", 0)): int(row.get("OmikujiAssetId", 0))
            for row in tables.read(OMIKUJI_TABLE)
        }
    )


@dataclass
class SideStoryCatalog:
    first_scene_by_quest_id: dict[int, int] = field(default_factory=dict)


def load_side_story_catalog(tables: TableReader) -> SideStoryCatalog:
    """Map each side story quest to the scene with sort order 1."""
    first_scene = {
        int(row.get("SideStoryQuestId", 0)): int(row.get("SideStoryQuestSceneId", 0))
        for row in tables.read(SIDE_STORY_SCENE_TABLE)
        if int(row.get("SortOrder", 0)) == 1
    }
    logger.info("side story catalog loaded: %d quests", len(first_scene))
    return SideStoryCatalog(first_scene)