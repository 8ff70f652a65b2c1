import pytest

from masterdata.numericalfunc import FunctionResolver, FunctionShape, NumericalFunc
from masterdata.tables import MasterDataError, ParameterMapRow
from masterdata.weapon_rows import EnhanceCurveRow, build_enhance_curves

GOLD = NumericalFunc(FunctionShape.LINEAR, (2, 3))
MAX_LEVEL = NumericalFunc(FunctionShape.LINEAR, (10, 20))
SELL = NumericalFunc(FunctionShape.LINEAR_PERMIL, (500, 1))


@pytest.fixture
def functions():
    return FunctionResolver({1: GOLD, 2: MAX_LEVEL, 3: SELL})


@pytest.fixture
def parameter_map():
    return [
        ParameterMapRow(numerical_parameter_map_id=9, parameter_key=1, parameter_value=10),
        ParameterMapRow(numerical_parameter_map_id=9, parameter_key=2, parameter_value=30),
        ParameterMapRow(numerical_parameter_map_id=8, parameter_key=5, parameter_value=77),
    ]


def test_resolves_known_curves(functions, parameter_map):
    row = EnhanceCurveRow(
        base_enhancement_obtained_exp=40,
        required_exp_for_level_up_numerical_parameter_map_id=9,
        enhancement_cost_by_material_numerical_function_id=1,
        max_level_numerical_function_id=2,
        sell_price_numerical_function_id=3,
    )
    curves = build_enhance_curves(row, parameter_map, functions)
    assert curves.gold_cost == GOLD
    assert curves.max_level == MAX_LEVEL
    assert curves.sell_price == SELL
    assert curves.base_exp == 40
    assert curves.exp_thresholds == [0, 10, 30]


def test_unknown_function_ids_give_none(functions, parameter_map):
    row = EnhanceCurveRow(
        required_exp_for_level_up_numerical_parameter_map_id=9,
        evolution_cost_numerical_function_id=404,
        max_skill_level_numerical_function_id=405,
    )
    curves = build_enhance_curves(row, parameter_map, functions)
    assert curves.evolution_cost is None
    assert curves.skill_max_level is None
    assert curves.ability_cost is None
    assert curves.limit_break_cost_by_material is None


def test_each_curve_follows_its_own_reference(functions, parameter_map):
    row = EnhanceCurveRow(
        enhancement_cost_by_weapon_numerical_function_id=3,
        limit_break_cost_by_weapon_numerical_function_id=1,
        limit_break_cost_by_material_numerical_function_id=2,
        max_ability_level_numerical_function_id=2,
        ability_enhancement_cost_numerical_function_id=1,
        skill_enhancement_cost_numerical_function_id=3,
    )
    curves = build_enhance_curves(row, parameter_map, functions)
    assert curves.enhance_cost_by_weapon == SELL
    assert curves.limit_break_cost_by_weapon == GOLD
    assert curves.limit_break_cost_by_material == MAX_LEVEL
    assert curves.ability_max_level == MAX_LEVEL
    assert curves.ability_cost == GOLD
    assert curves.skill_cost == SELL
    assert curves.gold_cost is None


def test_unknown_parameter_map_gives_single_zero(functions, parameter_map):
    row = EnhanceCurveRow(required_exp_for_level_up_numerical_parameter_map_id=123)
    curves = build_enhance_curves(row, parameter_map, functions)
    assert curves.exp_thresholds == [0]


def test_negative_parameter_key_raises(functions):
    bad_map = [ParameterMapRow(numerical_parameter_map_id=9, parameter_key=-1, parameter_value=5)]
    row = EnhanceCurveRow(required_exp_for_level_up_numerical_parameter_map_id=9)
    with pytest.raises(MasterDataError):
        build_enhance_curves(row, bad_map, functions)