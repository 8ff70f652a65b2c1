# masterdata

Loaders and lookup catalogs for a role-playing game's master data. Each
table is a JSON file holding an array of objects (for example
`EntityMMaterialTable.json`). The package reads those files from one
directory and builds indexed catalogs for materials, consumable items,
numerical cost curves, release conditions, weapons, costumes, parts,
companions, character boards and rebirth, shops, big-hunt events, explore
grades, gimmick schedules, and a few small lookups. It has no third-party
dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Reading tables

Every loader takes a `TableReader` pointing at the directory that holds the
JSON tables:

```python
from masterdata.tables import TableReader, load_material_catalog

tables = TableReader("data/master")
materials = load_material_catalog(tables)
materials.all[100001]            # MaterialRow by id
materials.by_type[1]             # {material_id: MaterialRow} for one material type
```

`TableReader.read(name)` returns the rows of one table as a list of dicts. It
raises `MasterDataError` when the file cannot be opened, is not valid JSON, or
is not an array of objects. Columns missing from a row read as `0`.

`masterdata.tables` also provides `load_consumable_item_catalog`,
`load_parameter_map` and `build_exp_thresholds(rows, map_id)`, which lays out
one numerical parameter map as a list indexed by parameter key (gaps are
`0`; a negative key raises `MasterDataError`).

## Numeric codes are supplied by the caller

The tables store enumerations as numbers. The package does not define what
those numbers mean; loaders that need one take it as an argument:

```python
from masterdata.numericalfunc import FunctionShape, load_function_resolver
from masterdata.conditions import load_condition_resolver

# Map the NumericalFunctionType numbers of your data to formulas.
kinds = {
    1: FunctionShape.LINEAR,
    2: FunctionShape.MONOMIAL,
    3: FunctionShape.LINEAR_PERMIL,
    4: FunctionShape.POLYNOMIAL_THIRD,
    5: FunctionShape.POLYNOMIAL_THIRD_PERMIL,
}
functions = load_function_resolver(tables, kinds)

cost = functions.resolve(1001)   # NumericalFunc, or None when unknown
if cost is not None:
    gold = cost.evaluate(10)

conditions = load_condition_resolver(
    tables, quest_clear_function_type=1, id_contain_evaluate_type=1
)
conditions.required_quest_id(5001)   # quest id, or None
```

`NumericalFunc.evaluate` uses 32-bit signed integer arithmetic (wrapping, and
division truncating toward zero); a function whose type is not in `kinds`
evaluates to `0`.

## Catalogs

```python
from masterdata.weapon import load_weapon_catalog
from masterdata.costume import load_costume_catalog
from masterdata.parts import load_parts_catalog
from masterdata.companion import load_companion_catalog
from masterdata.rebirth import load_character_rebirth_catalog
from masterdata.characterboard import load_character_board_catalog
from masterdata.shop import load_shop_catalog

weapons = load_weapon_catalog(tables, materials, functions, enhancement_material_type=2)
costumes = load_costume_catalog(tables, materials, functions, enhancement_material_type=3)
parts = load_parts_catalog(tables, functions)
companions = load_companion_catalog(tables, functions)
rebirth = load_character_rebirth_catalog(tables)
board = load_character_board_catalog(tables)
shop = load_shop_catalog(tables, item_shop_group_type=1, exchange_shop_group_type=2)
```

- `WeaponCatalog` indexes weapons, per-enhance-id curves, evolution chains
  (`evolution_next_weapon_id`, `evolution_order`), skills, abilities,
  awakening and story release conditions. Weapons with no specific enhance id
  are given the synthetic id `-rarity_type` and their rarity's curves.
  `masterdata.weapon_rows` holds the row classes and `build_enhance_curves`.
- `CostumeCatalog` holds costumes, per-rarity curves, awakening data and
  active skill groups (highest limit-break lower limit first).
- `PartsCatalog` holds parts, rarities, level-up rates and prices, sell price
  curves, and the default main stat for each lottery group.
- `ShopCatalog` holds items, contents, effects, limited stock, maximum stamina
  in millis per user level, the item shop pool and exchange shop cells.

## Lookups

```python
from masterdata.explore import load_explore_catalog
from masterdata.bighunt import load_big_hunt_catalog
from masterdata.lookups import (
    load_cage_ornament_catalog,
    load_login_bonus_catalog,
    load_omikuji_catalog,
    load_side_story_catalog,
)

explore = load_explore_catalog(tables)
icon = explore.grade_for_score(explore_id=1, score=5000)   # 0 when no grade matches

big_hunt = load_big_hunt_catalog(tables, now_millis)   # defaults to the current time
group_id = big_hunt.resolve_active_score_reward_group_id(schedule_id, now_millis)
rewards = big_hunt.collect_new_rewards(group_id, old_max=0, new_max=120000)
grade_icon = big_hunt.resolve_grade_icon_id(boss_id, score)

load_cage_ornament_catalog(tables).lookup_reward(10)          # PossessionReward or None
load_login_bonus_catalog(tables).lookup_stamp_reward(1, 1, 3)  # PossessionReward or None
load_omikuji_catalog(tables).lookup_asset_id(7)                # 0 when unknown
load_side_story_catalog(tables).first_scene_by_quest_id
```

Player-dependent lookups take the set of quest ids the player has cleared:

```python
from masterdata.characterviewer import load_character_viewer_catalog
from masterdata.gimmick import load_gimmick_catalog

viewer = load_character_viewer_catalog(tables, conditions)
viewer.released_field_ids(cleared_quest_ids={1001, 1002})

gimmicks = load_gimmick_catalog(tables, conditions)
gimmicks.active_schedule_keys(cleared_quest_ids={1001}, now_millis=now_millis)
```

## What this package does not do

It only reads master data and answers lookups. It has no command-line
program, no network server, and no storage of player state: anything about a
player (such as cleared quests) is passed in by the caller. It does not define
the game's enumeration numbers, and it does not build gacha, quest or game
configuration catalogs.

## Modules

- `masterdata.tables`: table reading, materials, consumable items, experience thresholds
- `masterdata.numericalfunc`: numerical cost and level functions
- `masterdata.conditions`: quest-clear release conditions
- `masterdata.lookups`: cage ornaments, login bonus stamps, omikuji, side stories
- `masterdata.bighunt`, `masterdata.explore`, `masterdata.shop`
- `masterdata.characterboard`, `masterdata.characterviewer`, `masterdata.rebirth`
- `masterdata.parts`, `masterdata.costume`, `masterdata.companion`, `masterdata.gimmick`
- `masterdata.weapon_rows`, `masterdata.weapon`