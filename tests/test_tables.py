import json

import pytest

from masterdata.tables import (
    ConsumableItemRow,
    MasterDataError,
    MaterialRow,
    ParameterMapRow,
    TableReader,
    build_exp_thresholds,
    load_consumable_item_catalog,
    load_material_catalog,
    load_parameter_map,
)


def make_reader(tmp_path, tables):
    for name, rows in tables.items():
        (tmp_path / name).write_text(json.dumps(rows), encoding="utf-8")
    return TableReader(tmp_path)


def test_read_returns_rows(tmp_path):
    rows = [{"A": 1}, {"A": 2, "B": "x"}]
    reader = make_reader(tmp_path, {"T.json": rows})
    assert reader.read("T.json") == rows


def test_read_accepts_string_directory(tmp_path):
    make_reader(tmp_path, {"T.json": [{"A": 3}]})
    assert TableReader(str(tmp_path)).read("T.json") == [{"A": 3}]


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(MasterDataError):
        TableReader(tmp_path).read("Missing.json")


def test_read_invalid_json_raises(tmp_path):
    (tmp_path / "Bad.json").write_text("[{", encoding="utf-8")
    with pytest.raises(MasterDataError):
        TableReader(tmp_path).read("Bad.json")


@pytest.mark.parametrize("payload", [{"A": 1}, [1, 2], "text"])
def test_read_rejects_non_array_of_objects(tmp_path, payload):
    reader = make_reader(tmp_path, {"T.json": payload})
    with pytest.raises(MasterDataError):
        reader.read("T.json")


def test_load_parameter_map(tmp_path):
    reader = make_reader(
        tmp_path,
        {
            "EntityMNumericalParameterMapTable.json": [
                {"NumericalParameterMapId": 7, "ParameterKey": 2, "ParameterValue": 40},
            ]
        },
    )
    assert load_parameter_map(reader) == [ParameterMapRow(7, 2, 40)]


def test_build_exp_thresholds_fills_by_key():
    rows = [
        ParameterMapRow(1, 1, 10),
        ParameterMapRow(1, 3, 30),
        ParameterMapRow(2, 9, 99),
    ]
    thresholds = build_exp_thresholds(rows, 1)
    assert len(thresholds) == 4
    assert thresholds[1] == 10
    assert thresholds[3] == 30
    assert thresholds[0] == thresholds[2] == 0


def test_build_exp_thresholds_unknown_map_has_single_zero():
    assert build_exp_thresholds([ParameterMapRow(1, 5, 1)], 42) == [0]


def test_build_exp_thresholds_negative_key_raises():
    with pytest.raises(MasterDataError):
        build_exp_thresholds([ParameterMapRow(1, -1, 5)], 1)


def test_load_material_catalog_groups_by_type(tmp_path):
    reader = make_reader(
        tmp_path,
        {
            "EntityMMaterialTable.json": [
                {"MaterialId": 100, "MaterialType": 1, "WeaponType": 2, "EffectValue": 50, "SellPrice": 5},
                {"MaterialId": 101, "MaterialType": 1, "EffectValue": 80},
                {"MaterialId": 200, "MaterialType": 3, "SellPrice": 7},
            ]
        },
    )
    catalog = load_material_catalog(reader)
    assert catalog.all[100] == MaterialRow(100, 1, 2, 50, 5)
    assert set(catalog.by_type[1]) == {100, 101}
    assert set(catalog.by_type[3]) == {200}
    assert catalog.all[101].sell_price == 0
    assert all(
        catalog.all[mid] is row for group in catalog.by_type.values() for mid, row in group.items()
    )


def test_load_consumable_item_catalog(tmp_path):
    reader = make_reader(
        tmp_path,
        {
            "EntityMConsumableItemTable.json": [
                {"ConsumableItemId": 1, "SellPrice": 12},
                {"ConsumableItemId": 2},
            ]
        },
    )
    catalog = load_consumable_item_catalog(reader)
    assert catalog.all == {
        1: ConsumableItemRow(1, 12),
        2: ConsumableItemRow(2, 0),
    }


def test_load_consumable_item_catalog_missing_table(tmp_path):
    with pytest.raises(MasterDataError):
        load_consumable_item_catalog(TableReader(tmp_path))