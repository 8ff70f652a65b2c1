import json

import pytest

from masterdata.lookups import (
    CageOrnamentCatalog,
    OmikujiCatalog,
    PossessionReward,
    load_cage_ornament_catalog,
    load_login_bonus_catalog,
    load_omikuji_catalog,
    load_side_story_catalog,
)
from masterdata.tables import MasterDataError, TableReader


def make_reader(tmp_path, tables):
    for name, rows in tables.items():
        (tmp_path / name).write_text(json.dumps(rows), encoding="utf-8")
    return TableReader(tmp_path)


@pytest.fixture
def cage_catalog(tmp_path):
    reader = make_reader(
        tmp_path,
        {
            "EntityMCageOrnamentTable.json": [
                {"CageOrnamentId": 1, "CageOrnamentRewardId": 10},
                {"CageOrnamentId": 2, "CageOrnamentRewardId": 0},
                {"CageOrnamentId": 3, "CageOrnamentRewardId": 99},
            ],
            "EntityMCageOrnamentRewardTable.json": [
                {"CageOrnamentRewardId": 10, "PossessionType": 4, "PossessionId": 500, "Count": 3},
                {"CageOrnamentRewardId": 0, "PossessionType": 4, "PossessionId": 1, "Count": 1},
            ],
        },
    )
    return load_cage_ornament_catalog(reader)


def test_cage_ornament_reward(cage_catalog):
    assert cage_catalog.lookup_reward(1) == PossessionReward(4, 500, 3)


@pytest.mark.parametrize("ornament_id", [2, 3, 4])
def test_cage_ornament_without_reward(cage_catalog, ornament_id):
    assert cage_catalog.lookup_reward(ornament_id) is None


def test_cage_ornament_zero_reward_id_is_never_looked_up():
    catalog = CageOrnamentCatalog({5: 0}, {0: PossessionReward(1, 1, 1)})
    assert catalog.lookup_reward(5) is None


def test_cage_ornament_missing_table(tmp_path):
    with pytest.raises(MasterDataError):
        load_cage_ornament_catalog(TableReader(tmp_path))


def test_login_bonus_stamps(tmp_path):
    reader = make_reader(
        tmp_path,
        {
            "EntityMLoginBonusStampTable.json": [
                {
                    "LoginBonusId": 1,
                    "LowerPageNumber": 2,
                    "StampNumber": 3,
                    "RewardPossessionType": 6,
                    "RewardPossessionId": 700,
                    "RewardCount": 8,
                },
            ]
        },
    )
    catalog = load_login_bonus_catalog(reader)
    assert catalog.lookup_stamp_reward(1, 2, 3) == PossessionReward(6, 700, 8)
    assert catalog.lookup_stamp_reward(1, 3, 3) is None
    assert catalog.lookup_stamp_reward(2, 2, 3) is None


def test_omikuji_lookup(tmp_path):
    reader = make_reader(
        tmp_path,
        {"EntityMOmikujiTable.json": [{"OmikujiId": 1, "OmikujiAssetId": 11}]},
    )
    catalog = load_omikuji_catalog(reader)
    assert catalog.lookup_asset_id(1) == 11
    assert catalog.lookup_asset_id(2) == 0


def test_omikuji_direct_unknown_is_zero():
    assert OmikujiCatalog({}).lookup_asset_id(5) == 0


def test_side_story_first_scene(tmp_path):
    reader = make_reader(
        tmp_path,
        {
            "EntityMSideStoryQuestSceneTable.json": [
                {"SideStoryQuestId": 1, "SideStoryQuestSceneId": 102, "SortOrder": 2},
                {"SideStoryQuestId": 1, "SideStoryQuestSceneId": 101, "SortOrder": 1},
                {"SideStoryQuestId": 2, "SideStoryQuestSceneId": 201, "SortOrder": 1},
                {"SideStoryQuestId": 3, "SideStoryQuestSceneId": 302, "SortOrder": 2},
            ]
        },
    )
    catalog = load_side_story_catalog(reader)
    assert catalog.first_scene_by_quest_id == {1: 101, 2: 201}


def test_side_story_missing_table(tmp_path):
    with pytest.raises(MasterDataError):
        load_side_story_catalog(TableReader(tmp_path))