"""Stat, experience, damage, capture and escape formulas.

Pure functions over their arguments; no repository or random source is touched here.
"""

import math

from pokemon_rpg.constants import (
    ACCURACY_STAGE_MULTIPLIER,
    CRIT_STAGE_CHANCES,
    NATURE_MODIFIERS,
    STAT_STAGE_MAX,
    STAT_STAGE_MIN,
    STAT_STAGE_MULTIPLIER,
    STATS,
    TYPE_CHART,
)
from pokemon_rpg.models.models import Nature, Pokemon, SpeciesData, StatusCondition

CATCH_CERTAIN_THRESHOLD = 255
CATCH_SHAKE_RANGE = 65536
CATCH_SHAKES = 4


def get_nature_modifier(nature: Nature, stat: str) -> tuple[int, int]:
    """Return the nature scaling for ``stat`` as an integer fraction (numerator, denominator)."""
    favoured, hindered = NATURE_MODIFIERS[nature.value]
    if stat == favoured:
        return 11, 10
    if stat == hindered:
        return 9, 10
    return 1, 1


def calculate_stat(base: int, iv: int, ev: int, level: int, nature: Nature, stat: str) -> int:
    """Compute one battle stat.

    HP is ``floor((2*base + iv + floor(ev/4)) * level / 100) + level + 10``; every other stat
    uses ``+ 5`` and is then scaled by the nature (x1.1, x0.9 or x1.0) and floored. Nature
    scaling uses integer arithmetic.
    """
    raw = (2 * base + iv + ev // 4) * level // 100
    if stat == "hp":
        if base == 1:
            return 1
        return raw + level + 10
    numerator, denominator = get_nature_modifier(nature, stat)
    return (raw + 5) * numerator // denominator


def calculate_all_stats(
    base_stats: dict[str, int],
    ivs: dict[str, int],
    evs: dict[str, int],
    level: int,
    nature: Nature,
) -> dict[str, int]:
    return {
        stat: calculate_stat(base_stats[stat], ivs[stat], evs[stat], level, nature, stat) for stat in STATS
    }


def recalculate_stats(pokemon: Pokemon, species: SpeciesData) -> None:
    """Recompute ``pokemon.stats`` in place; current HP moves by the change in max HP."""
    old_max_hp = pokemon.stats.get("hp", 0)
    pokemon.stats = calculate_all_stats(
        species["base_stats"],
        pokemon.ivs,
        pokemon.evs,
        pokemon.level,
        pokemon.nature,
    )
    if old_max_hp > 0:
        hp_difference = pokemon.stats["hp"] - old_max_hp
        pokemon.current_hp = max(0, min(pokemon.stats["hp"], pokemon.current_hp + hp_difference))
    else:
        pokemon.current_hp = pokemon.stats["hp"]


def _erratic(n: int) -> int:
    if n <= 50:
        return n**3 * (100 - n) // 50
    if n <= 68:
        return n**3 * (150 - n) // 100
    if n <= 98:
        return n**3 * ((1911 - 10 * n) // 3) // 500
    return n**3 * (160 - n) // 100


def _fluctuating(n: int) -> int:
    if n <= 15:
        return n**3 * ((n + 1) // 3 + 24) // 50
    if n <= 36:
        return n**3 * (n + 14) // 50
    return n**3 * (n // 2 + 32) // 50


EXP_FORMULAS = {
    "fast": lambda n: 4 * n**3 // 5,
    "medium_fast": lambda n: n**3,
    "medium_slow": lambda n: max(0, 6 * n**3 // 5 - 15 * n**2 + 100 * n - 140),
    "slow": lambda n: 5 * n**3 // 4,
    "erratic": _erratic,
    "fluctuating": _fluctuating,
}


def get_exp_for_level(growth_rate: str, level: int) -> int:
    if level <= 1:
        return 0
    return EXP_FORMULAS[growth_rate](level)


def get_exp_yield(base_exp: int, defeated_level: int, is_trainer: bool) -> int:
    if is_trainer:
        return 3 * base_exp * defeated_level // 14
    return base_exp * defeated_level // 7


def get_type_effectiveness(attack_type: str, defend_type: str) -> float:
    return TYPE_CHART.get(attack_type, {}).get(defend_type, 1)


def get_type_effectiveness_multiplier(attack_type: str, defend_types: list[str]) -> float:
    multiplier = 1.0
    for defend_type in defend_types:
        multiplier *= get_type_effectiveness(attack_type, defend_type)
    return multiplier


def apply_stat_stage(value: int, stage: int) -> int:
    stage = max(STAT_STAGE_MIN, min(STAT_STAGE_MAX, stage))
    return math.floor(value * STAT_STAGE_MULTIPLIER[stage])


def get_accuracy_multiplier(accuracy_stage: int, evasion_stage: int) -> float:
    stage = max(STAT_STAGE_MIN, min(STAT_STAGE_MAX, accuracy_stage - evasion_stage))
    return ACCURACY_STAGE_MULTIPLIER[stage]


def get_crit_chance(crit_stage: int) -> float:
    return CRIT_STAGE_CHANCES[max(0, min(crit_stage, len(CRIT_STAGE_CHANCES) - 1))]


def calculate_damage(  # noqa: PLR0913
    level: int,
    power: int,
    attack: int,
    defense: int,
    stab: bool,
    effectiveness: float,
    critical: bool,
    random_factor: float,
) -> int:
    base = math.floor(math.floor(2 * level / 5 + 2) * power * attack / max(1, defense) / 50 + 2)
    damage = base
    if critical:
        damage = math.floor(damage * 1.5)
    if stab:
        damage = math.floor(damage * 1.5)
    damage = math.floor(damage * effectiveness)
    damage = math.floor(damage * random_factor)
    return max(1, damage)


def get_status_catch_bonus(status: StatusCondition | None) -> float:
    if status in {StatusCondition.SLEEP, StatusCondition.FREEZE}:
        return 2
    if status is not None:
        return 1.5
    return 1


def calculate_shake_threshold(
    max_hp: int,
    current_hp: int,
    catch_rate: int,
    ball_multiplier: float,
    status_bonus: float,
) -> int:
    """Per-shake success threshold out of 65536; 65536 means capture is certain."""
    max_hp = max(1, max_hp)
    current_hp = max(0, min(current_hp, max_hp))
    a = math.floor((3 * max_hp - 2 * current_hp) * catch_rate * ball_multiplier / (3 * max_hp) * status_bonus)
    if a >= CATCH_CERTAIN_THRESHOLD:
        return CATCH_SHAKE_RANGE
    if a <= 0:
        return 0
    return math.floor(1048560 / math.floor(math.sqrt(math.floor(math.sqrt(16711680 / a)))))


def calculate_catch_probability(
    max_hp: int,
    current_hp: int,
    catch_rate: int,
    ball_multiplier: float,
    status_bonus: float,
) -> float:
    """Probability in [0, 1] that all four shakes succeed."""
    threshold = calculate_shake_threshold(max_hp, current_hp, catch_rate, ball_multiplier, status_bonus)
    return min(1.0, (threshold / CATCH_SHAKE_RANGE) ** CATCH_SHAKES)


def calculate_run_threshold(player_speed: int, opponent_speed: int, attempts: int) -> int:
    """Escape threshold out of 256; 256 means escape is certain."""
    if player_speed >= opponent_speed:
        return 256
    return (player_speed * 128 // max(1, opponent_speed) + 30 * attempts) % 256
