import json

import pytest

from masterdata.numericalfunc import FunctionResolver, FunctionShape, NumericalFunc
from masterdata.parts import (
    PartsRarityRow,
    PartsRow,
    load_parts_catalog,
)
from masterdata.tables import MasterDataError, TableReader

ALL_TABLES = (
    "EntityMPartsTable.json",
    "EntityMPartsRarityTable.json",
    "EntityMPartsLevelUpRateGroupTable.json",
    "EntityMPartsLevelUpPriceGroupTable.json",
)


def _write(directory, tables):
    for name in ALL_TABLES:
        (directory / name).write_text(json.dumps(tables.get(name, [])), encoding="utf-8")
    return TableReader(directory)


@pytest.fixture
def sell_func():
    return NumericalFunc(FunctionShape.LINEAR, (5, 7))


@pytest.fixture
def resolver(sell_func):
    return FunctionResolver({900: sell_func})


def test_parts_indexed_by_id_last_wins(tmp_path, resolver):
    tables = _write(
        tmp_path,
        {
            "EntityMPartsTable.json": [
                {"PartsId": 1, "RarityType": 20, "PartsGroupId": 3,
                 "PartsStatusMainLotteryGroupId": 11},
                {"PartsId": 2, "RarityType": 30, "PartsGroupId": 4},
                {"PartsId": 1, "RarityType": 40, "PartsGroupId": 5,
                 "PartsStatusMainLotteryGroupId": 12},
            ]
        },
    )
    catalog = load_parts_catalog(tables, resolver)
    assert catalog.parts_by_id[1] == PartsRow(1, 40, 5, 12)
    assert catalog.parts_by_id[2] == PartsRow(2, 30, 4, 0)
    assert set(catalog.parts_by_id) == {1, 2}


def test_default_main_stats_cover_every_tier_and_category(tmp_path, resolver):
    catalog = load_parts_catalog(_write(tmp_path, {}), resolver)
    mapping = catalog.default_parts_status_main_by_lottery_group
    assert len(mapping) == 24
    assert sorted(mapping.values()) == list(range(1, 25))
    assert mapping[11] == 1
    assert mapping[46] == 24


def test_rarity_and_sell_price(tmp_path, resolver, sell_func):
    tables = _write(
        tmp_path,
        {
            "EntityMPartsRarityTable.json": [
                {"RarityType": 20, "PartsLevelUpRateGroupId": 1,
                 "PartsLevelUpPriceGroupId": 2, "SellPriceNumericalFunctionId": 900},
                {"RarityType": 30, "PartsLevelUpRateGroupId": 3,
                 "PartsLevelUpPriceGroupId": 4, "SellPriceNumericalFunctionId": 901},
            ]
        },
    )
    catalog = load_parts_catalog(tables, resolver)
    assert catalog.rarity_by_rarity_type[20] == PartsRarityRow(20, 1, 2, 900)
    assert catalog.rarity_by_rarity_type[30] == PartsRarityRow(30, 3, 4, 901)
    assert catalog.sell_price_by_rarity == {20: sell_func}


def test_rates_and_prices_nested_by_group_and_level(tmp_path, resolver):
    tables = _write(
        tmp_path,
        {
            "EntityMPartsLevelUpRateGroupTable.json": [
                {"PartsLevelUpRateGroupId": 1, "LevelLowerLimit": 1, "SuccessRatePermil": 1000},
                {"PartsLevelUpRateGroupId": 1, "LevelLowerLimit": 5, "SuccessRatePermil": 600},
                {"PartsLevelUpRateGroupId": 2, "LevelLowerLimit": 1, "SuccessRatePermil": 800},
            ],
            "EntityMPartsLevelUpPriceGroupTable.json": [
                {"PartsLevelUpPriceGroupId": 7, "LevelLowerLimit": 1, "Gold": 100},
                {"PartsLevelUpPriceGroupId": 7, "LevelLowerLimit": 3, "Gold": 250},
            ],
        },
    )
    catalog = load_parts_catalog(tables, resolver)
    assert catalog.rate_by_group_and_level == {1: {1: 1000, 5: 600}, 2: {1: 800}}
    assert catalog.price_by_group_and_level == {7: {1: 100, 3: 250}}


def test_missing_table_raises(tmp_path, resolver):
    _write(tmp_path, {})
    (tmp_path / "EntityMPartsLevelUpPriceGroupTable.json").unlink()
    with pytest.raises(MasterDataError):
        load_parts_catalog(TableReader(tmp_path), resolver)