import json

import pytest

from masterdata.companion import (
    CompanionLevelKey,
    CompanionMaterialCost,
    CompanionRow,
    load_companion_catalog,
)
from masterdata.numericalfunc import FunctionResolver, FunctionShape, NumericalFunc
from masterdata.tables import MasterDataError, TableReader


def _write(tmp_path, tables):
    for name, rows in tables.items():
        (tmp_path / name).write_text(json.dumps(rows), encoding="utf-8")
    return TableReader(tmp_path)


GOLD_CURVE = NumericalFunc(FunctionShape.LINEAR, (2, 3))


@pytest.fixture
def reader(tmp_path):
    return _write(
        tmp_path,
        {
            "EntityMCompanionTable.json": [
                {"CompanionId": 1, "CompanionCategoryType": 1},
                {"CompanionId": 2, "CompanionCategoryType": 2},
            ],
            "EntityMCompanionCategoryTable.json": [
                {"CompanionCategoryType": 1, "EnhancementCostNumericalFunctionId": 7},
                {"CompanionCategoryType": 2, "EnhancementCostNumericalFunctionId": 99},
            ],
            "EntityMCompanionEnhancementMaterialTable.json": [
                {"CompanionCategoryType": 1, "Level": 1, "MaterialId": 300, "Count": 2},
                {"CompanionCategoryType": 1, "Level": 2, "MaterialId": 301, "Count": 5},
            ],
        },
    )


@pytest.fixture
def functions():
    return FunctionResolver({7: GOLD_CURVE})


def test_companions_indexed_by_id(reader, functions):
    catalog = load_companion_catalog(reader, functions)
    assert catalog.companion_by_id[2] == CompanionRow(companion_id=2, companion_category_type=2)
    assert sorted(catalog.companion_by_id) == [1, 2]


def test_gold_cost_only_for_resolved_functions(reader, functions):
    catalog = load_companion_catalog(reader, functions)
    assert catalog.gold_cost_by_category == {1: GOLD_CURVE}


def test_materials_by_category_and_level(reader, functions):
    catalog = load_companion_catalog(reader, functions)
    assert catalog.materials_by_key[CompanionLevelKey(category_type=1, level=2)] == (
        CompanionMaterialCost(material_id=301, count=5)
    )
    assert CompanionLevelKey(category_type=2, level=1) not in catalog.materials_by_key


def test_missing_table_raises(tmp_path, functions):
    with pytest.raises(MasterDataError):
        load_companion_catalog(TableReader(tmp_path), functions)