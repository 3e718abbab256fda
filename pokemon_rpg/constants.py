import logging

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "logging.level.debug": "dim white",
        "logging.level.info": "white",
        "logging.level.warning": "yellow",
        "logging.level.error": "red",
        "logging.level.critical": "bold bright_red",
        "info": "cyan",
        "success": "bold green",
    },
)
CONSOLE = Console(theme=THEME)
LOG_FILE_LIMIT = 20
LOGGER = logging.getLogger(__name__)

SAVE_KEY_PREFIX = "pokemon_rpg_save_"

DEFAULT_FRIENDSHIP = 70
DEFAULT_ORIGINAL_TRAINER = "Player"
DEFAULT_CAUGHT_BALL = "poke_ball"
EV_MAX_SINGLE = 255
EV_MAX_TOTAL = 510
FRIENDSHIP_EVOLUTION_THRESHOLD = 220
FRIENDSHIP_LEVEL_UP_GAIN = 5
FRIENDSHIP_MAX = 255
IV_MAX = 31
IV_MIN = 0
MAX_LEVEL = 100
MAX_MOVES = 4
SHINY_CHANCE = 1 / 8192
STAT_STAGE_MAX = 6
STAT_STAGE_MIN = -6
STATS = ("hp", "attack", "defense", "sp_attack", "sp_defense", "speed")
WEATHER_DURATION = 5
SCREEN_DURATION = 5
SPIKES_MAX_LAYERS = 3
TOXIC_SPIKES_MAX_LAYERS = 2
SPIKES_DIVISORS = (8, 6, 4)

PC_BOX_COUNT = 14
PC_BOX_SIZE = 30
STARTING_MONEY = 3000
STARTER_ITEMS = (("potion", 5), ("poke_ball", 5))
START_TILE = (10, 9)

DEFAULT_HEAL_AMOUNT = 20
DEFAULT_REVIVE_FRACTION = 0.5
DEFAULT_CATCH_RATE = 45
DEFAULT_GROWTH_RATE = "medium_fast"

STRUGGLE_MOVE_ID = "struggle"
STRUGGLE_MOVE = {
    "id": STRUGGLE_MOVE_ID,
    "name": "Struggle",
    "type": "typeless",
    "category": "physical",
    "power": 50,
    "accuracy": None,
    "pp": 1,
    "priority": 0,
    "effect": {"target": "self", "recoil": 0.25},
}

CRIT_STAGE_CHANCES = (1 / 16, 1 / 8, 1 / 4, 1 / 3, 1 / 2)
STAT_STAGE_MULTIPLIER = {
    -6: 2 / 8,
    -5: 2 / 7,
    -4: 2 / 6,
    -3: 2 / 5,
    -2: 2 / 4,
    -1: 2 / 3,
    0: 1,
    1: 3 / 2,
    2: 4 / 2,
    3: 5 / 2,
    4: 6 / 2,
    5: 7 / 2,
    6: 8 / 2,
}
ACCURACY_STAGE_MULTIPLIER = {
    -6: 3 / 9,
    -5: 3 / 8,
    -4: 3 / 7,
    -3: 3 / 6,
    -2: 3 / 5,
    -1: 3 / 4,
    0: 1,
    1: 4 / 3,
    2: 5 / 3,
    3: 6 / 3,
    4: 7 / 3,
    5: 8 / 3,
    6: 9 / 3,
}

# Natures as (favoured stat, hindered stat); neutral natures map to (None, None).
NATURE_MODIFIERS = {
    "hardy": (None, None),
    "lonely": ("attack", "defense"),
    "brave": ("attack", "speed"),
    "adamant": ("attack", "sp_attack"),
    "naughty": ("attack", "sp_defense"),
    "bold": ("defense", "attack"),
    "docile": (None, None),
    "relaxed": ("defense", "speed"),
    "impish": ("defense", "sp_attack"),
    "lax": ("defense", "sp_defense"),
    "timid": ("speed", "attack"),
    "hasty": ("speed", "defense"),
    "serious": (None, None),
    "jolly": ("speed", "sp_attack"),
    "naive": ("speed", "sp_defense"),
    "modest": ("sp_attack", "attack"),
    "mild": ("sp_attack", "defense"),
    "quiet": ("sp_attack", "speed"),
    "bashful": (None, None),
    "rash": ("sp_attack", "sp_defense"),
    "calm": ("sp_defense", "attack"),
    "gentle": ("sp_defense", "defense"),
    "sassy": ("sp_defense", "speed"),
    "careful": ("sp_defense", "sp_attack"),
    "quirky": (None, None),
}

TYPES = (
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
)
TYPE_CHART = {
    "normal": {"rock": 0.5, "ghost": 0, "steel": 0.5},
    "fire": {
        "fire": 0.5,
        "water": 0.5,
        "grass": 2,
        "ice": 2,
        "bug": 2,
        "rock": 0.5,
        "dragon": 0.5,
        "steel": 2,
    },
    "water": {"fire": 2, "water": 0.5, "grass": 0.5, "ground": 2, "rock": 2, "dragon": 0.5},
    "electric": {"water": 2, "electric": 0.5, "grass": 0.5, "ground": 0, "flying": 2, "dragon": 0.5},
    "grass": {
        "fire": 0.5,
        "water": 2,
        "grass": 0.5,
        "poison": 0.5,
        "ground": 2,
        "flying": 0.5,
        "bug": 0.5,
        "rock": 2,
        "dragon": 0.5,
        "steel": 0.5,
    },
    "ice": {
        "fire": 0.5,
        "water": 0.5,
        "grass": 2,
        "ice": 0.5,
        "ground": 2,
        "flying": 2,
        "dragon": 2,
        "steel": 0.5,
    },
    "fighting": {
        "normal": 2,
        "ice": 2,
        "poison": 0.5,
        "flying": 0.5,
        "psychic": 0.5,
        "bug": 0.5,
        "rock": 2,
        "ghost": 0,
        "dark": 2,
        "steel": 2,
        "fairy": 0.5,
    },
    "poison": {"grass": 2, "poison": 0.5, "ground": 0.5, "rock": 0.5, "ghost": 0.5, "steel": 0, "fairy": 2},
    "ground": {
        "fire": 2,
        "electric": 2,
        "grass": 0.5,
        "poison": 2,
        "flying": 0,
        "bug": 0.5,
        "rock": 2,
        "steel": 2,
    },
    "flying": {"electric": 0.5, "grass": 2, "fighting": 2, "bug": 2, "rock": 0.5, "steel": 0.5},
    "psychic": {"fighting": 2, "poison": 2, "psychic": 0.5, "dark": 0, "steel": 0.5},
    "bug": {
        "fire": 0.5,
        "grass": 2,
        "fighting": 0.5,
        "poison": 0.5,
        "flying": 0.5,
        "psychic": 2,
        "ghost": 0.5,
        "dark": 2,
        "steel": 0.5,
        "fairy": 0.5,
    },
    "rock": {"fire": 2, "ice": 2, "fighting": 0.5, "ground": 0.5, "flying": 2, "bug": 2, "steel": 0.5},
    "ghost": {"normal": 0, "psychic": 2, "ghost": 2, "dark": 0.5},
    "dragon": {"dragon": 2, "steel": 0.5, "fairy": 0},
    "dark": {"fighting": 0.5, "psychic": 2, "ghost": 2, "dark": 0.5, "fairy": 0.5},
    "steel": {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2, "rock": 2, "steel": 0.5, "fairy": 2},
    "fairy": {"fire": 0.5, "fighting": 2, "poison": 0.5, "dragon": 2, "dark": 2, "steel": 0.5},
}

HELD_ITEM_EFFECTS = {
    "leftovers": {"end_of_turn_heal_fraction": 1 / 16},
    "choice_band": {"boost_stat": "attack", "boost_multiplier": 1.5},
    "life_orb": {"damage_multiplier": 1.3, "recoil_fraction": 0.1},
    "shell_bell": {"drain_fraction": 1 / 8},
    "focus_sash": {"survive_ko": True},
}

ABSORB_ABILITIES = {"water_absorb": "water", "volt_absorb": "electric"}
ATTACK_DOUBLING_ABILITIES = {"huge_power", "pure_power"}
HAZARD_IMMUNE_ABILITIES = {"levitate"}
SYNCHRONIZED_STATUSES = {"burn", "paralysis", "poison"}
WEATHER_ABILITIES = {"drizzle": "rain", "drought": "sun", "sand_stream": "sandstorm"}

HITS_UNDERGROUND = {"earthquake"}
HITS_FLYING = {"thunder", "gust", "twister", "sky_uppercut"}

STATUS_APPLIED_MESSAGES = {
    "burn": "{name} was burned!",
    "freeze": "{name} was frozen solid!",
    "paralysis": "{name} was paralyzed!",
    "poison": "{name} was poisoned!",
    "bad_poison": "{name} was badly poisoned!",
    "sleep": "{name} fell asleep!",
}
WEATHER_STARTED_MESSAGES = {
    "rain": "It started to rain!",
    "sun": "The sunlight turned harsh!",
    "sandstorm": "A sandstorm kicked up!",
    "hail": "It started to hail!",
}
