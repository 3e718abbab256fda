import random

import pytest

from pokemon_rpg.constants import TYPE_CHART, TYPES
from pokemon_rpg.formulas import (
    apply_stat_stage,
    calculate_all_stats,
    calculate_catch_probability,
    calculate_damage,
    calculate_run_threshold,
    calculate_shake_threshold,
    calculate_stat,
    get_accuracy_multiplier,
    get_crit_chance,
    get_exp_for_level,
    get_exp_yield,
    get_nature_modifier,
    get_status_catch_bonus,
    get_type_effectiveness_multiplier,
)
from pokemon_rpg.models.models import Nature, StatusCondition


def reference_stat(base, iv, ev, level, nature, stat):
    raw = (2 * base + iv + ev // 4) * level // 100
    if stat == "hp":
        return raw + level + 10
    numerator, denominator = get_nature_modifier(nature, stat)
    return (raw + 5) * numerator // denominator


def test_hp_uses_level_and_ten():
    assert calculate_stat(45, 31, 0, 50, Nature.HARDY, "hp") == 120
    assert calculate_stat(100, 31, 252, 100, Nature.HARDY, "hp") == 404


def test_hp_of_base_one_is_always_one():
    assert calculate_stat(1, 31, 252, 100, Nature.ADAMANT, "hp") == 1


def test_nature_scales_favoured_and_hindered_stats():
    assert calculate_stat(49, 31, 252, 50, Nature.HARDY, "attack") == 101
    assert calculate_stat(49, 31, 252, 50, Nature.ADAMANT, "attack") == 111
    assert calculate_stat(49, 31, 252, 50, Nature.MODEST, "attack") == 90
    assert calculate_stat(49, 31, 252, 50, Nature.ADAMANT, "defense") == 101


def test_nature_never_touches_hp():
    assert calculate_stat(80, 20, 100, 60, Nature.LONELY, "hp") == calculate_stat(80, 20, 100, 60, Nature.HARDY, "hp")


def test_stat_formula_matches_for_random_inputs():
    rng = random.Random(1234)
    stats = ("hp", "attack", "defense", "sp_attack", "sp_defense", "speed")
    for _ in range(500):
        base = rng.randint(2, 255)
        iv = rng.randint(0, 31)
        ev = rng.randint(0, 255)
        level = rng.randint(1, 100)
        nature = rng.choice(list(Nature))
        stat = rng.choice(stats)
        assert calculate_stat(base, iv, ev, level, nature, stat) == reference_stat(base, iv, ev, level, nature, stat)


def test_calculate_all_stats_covers_every_stat():
    base = {"hp": 45, "attack": 49, "defense": 49, "sp_attack": 65, "sp_defense": 65, "speed": 45}
    ivs = dict.fromkeys(base, 31)
    evs = dict.fromkeys(base, 0)
    stats = calculate_all_stats(base, ivs, evs, 5, Nature.HARDY)
    assert set(stats) == set(base)
    assert stats["hp"] == (90 + 31) * 5 // 100 + 15


@pytest.mark.parametrize(
    ("growth_rate", "level", "expected"),
    [
        ("medium_fast", 10, 1000),
        ("fast", 10, 800),
        ("slow", 10, 1250),
        ("medium_slow", 10, 560),
        ("erratic", 100, 600000),
        ("fluctuating", 100, 1640000),
        ("medium_slow", 1, 0),
    ],
)
def test_exp_curves(growth_rate, level, expected):
    assert get_exp_for_level(growth_rate, level) == expected


def test_exp_yield_is_larger_for_trainer_battles():
    assert get_exp_yield(64, 10, is_trainer=False) == 91
    assert get_exp_yield(64, 10, is_trainer=True) == 137


def test_type_effectiveness_multiplies_dual_types():
    assert get_type_effectiveness_multiplier("fire", ["grass"]) == 2
    assert get_type_effectiveness_multiplier("fire", ["grass", "bug"]) == 4
    assert get_type_effectiveness_multiplier("electric", ["water", "flying"]) == 4
    assert get_type_effectiveness_multiplier("water", ["water", "grass"]) == 0.25
    assert get_type_effectiveness_multiplier("ground", ["flying"]) == 0
    assert get_type_effectiveness_multiplier("normal", ["ghost"]) == 0
    assert get_type_effectiveness_multiplier("typeless", ["rock", "steel"]) == 1


def test_stat_stages_and_accuracy():
    assert apply_stat_stage(100, 2) == 200
    assert apply_stat_stage(100, -1) == 66
    assert apply_stat_stage(100, 12) == 400
    assert get_accuracy_multiplier(0, 0) == 1
    assert get_accuracy_multiplier(-1, 0) == 0.75
    assert get_crit_chance(0) == 1 / 16
    assert get_crit_chance(10) == 1 / 2


def test_damage_formula():
    assert calculate_damage(50, 40, 100, 100, False, 1, False, 1.0) == 19
    assert calculate_damage(50, 40, 100, 100, True, 1, False, 1.0) == 28
    assert calculate_damage(50, 40, 100, 100, True, 1, True, 1.0) == 42
    assert calculate_damage(50, 40, 100, 100, False, 1, False, 0.85) == 16
    assert calculate_damage(1, 10, 5, 500, False, 0.25, False, 0.85) == 1


def test_status_catch_bonus():
    assert get_status_catch_bonus(None) == 1
    assert get_status_catch_bonus(StatusCondition.SLEEP) == 2
    assert get_status_catch_bonus(StatusCondition.FREEZE) == 2
    assert get_status_catch_bonus(StatusCondition.BURN) == 1.5


def test_shake_threshold_reference_value():
    assert calculate_shake_threshold(100, 100, 45, 1, 1) == 32767


def test_catch_probability_grows_as_hp_falls():
    probabilities = [calculate_catch_probability(200, hp, 45, 1, 1) for hp in range(200, 0, -1)]
    assert all(later >= earlier for earlier, later in zip(probabilities, probabilities[1:]))


def test_catch_probability_grows_with_ball_multiplier():
    probabilities = [calculate_catch_probability(100, 60, 45, ball, 1) for ball in (0.5, 1, 1.5, 2, 3, 255)]
    assert all(later >= earlier for earlier, later in zip(probabilities, probabilities[1:]))
    assert probabilities[-1] == 1.0


def test_catch_probability_bounds():
    assert calculate_catch_probability(100, 1, 255, 2, 2) == 1.0
    assert calculate_catch_probability(100, 100, 0, 1, 1) == 0.0
    assert calculate_shake_threshold(100, 100, 0, 1, 1) == 0


def test_run_threshold():
    assert calculate_run_threshold(100, 50, 0) == 256
    assert calculate_run_threshold(50, 50, 0) == 256
    assert calculate_run_threshold(50, 100, 0) == 64
    assert calculate_run_threshold(50, 100, 1) == 94


def test_type_chart_covers_only_known_types():
    assert len(TYPES) == 18
    assert set(TYPE_CHART) <= set(TYPES)
    for row in TYPE_CHART.values():
        assert set(row) <= set(TYPES)
