from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NotRequired, TypedDict


class LearnsetEntry(TypedDict):
    level: int
    move_id: str


class EvolutionCondition(TypedDict):
    type: str
    level: NotRequired[int]
    item: NotRequired[str]


class EvolutionEdge(TypedDict):
    species_id: int
    condition: EvolutionCondition


class MoveEffect(TypedDict, total=False):
    target: str
    status: str
    volatile_status: str
    stat_changes: dict[str, int]
    accuracy_change: int
    chance: int
    drain: float
    recoil: float
    protect: bool
    field_effect: str
    clear_hazards: bool
    set_weather: str


class MoveData(TypedDict):
    id: str
    name: str
    type: str
    category: str
    power: int | None
    accuracy: int | None
    pp: int
    priority: int
    effect: NotRequired[MoveEffect]
    crit_stage: NotRequired[int]
    is_multi_turn: NotRequired[bool]
    semi_invulnerable: NotRequired[str]
    charge_message: NotRequired[str]
    description: NotRequired[str]


class SpeciesData(TypedDict):
    id: int
    name: str
    types: list[str]
    base_stats: dict[str, int]
    base_exp: int
    catch_rate: int
    growth_rate: str
    learnset: list[LearnsetEntry]
    evolves_to: NotRequired[list[EvolutionEdge]]
    sprite_id: str
    generation: int
    abilities: NotRequired[list[str]]
    ev_yield: NotRequired[dict[str, int]]


class ItemEffect(TypedDict, total=False):
    type: str
    value: float
    status: str
    catch_multiplier: float
    cures_status: bool


class ItemData(TypedDict):
    id: str
    name: str
    category: str
    price: int
    is_key_item: bool
    effect: NotRequired[ItemEffect]
    description: NotRequired[str]


class ActionType(Enum):
    FIGHT = "fight"
    ITEM = "item"
    SWITCH = "switch"
    RUN = "run"
    CATCH = "catch"


class AITier(Enum):
    RANDOM = "random"
    BASIC = "basic"
    SMART = "smart"
    EXPERT = "expert"


class BagCategory(Enum):
    ITEMS = "items"
    MEDICINE = "medicine"
    POKEBALLS = "pokeballs"
    TMS = "tms"
    BERRIES = "berries"
    KEY_ITEMS = "key_items"


class BattleOutcome(Enum):
    ONGOING = "ongoing"
    WIN = "win"
    LOSE = "lose"
    RUN = "run"
    CAUGHT = "caught"


class BattleType(Enum):
    WILD = "wild"
    TRAINER = "trainer"


class EventType(Enum):
    POKEMON_CREATED = auto()
    TURN_RESOLVED = auto()
    POKEMON_FAINTED = auto()
    POKEMON_LEVELED_UP = auto()
    POKEMON_EVOLVED = auto()
    POKEMON_CAUGHT = auto()
    BATTLE_ENDED = auto()
    ITEM_USED = auto()
    ITEM_BOUGHT = auto()
    ITEM_SOLD = auto()
    GAME_SAVED = auto()
    GAME_LOADED = auto()


class EvolutionTrigger(Enum):
    LEVEL_UP = "level_up"
    ITEM = "item"
    TRADE = "trade"


class GameVersion(Enum):
    RED_BLUE = "red-blue"
    GOLD_SILVER = "gold-silver"
    RUBY_SAPPHIRE = "ruby-sapphire"


class Nature(Enum):
    HARDY = "hardy"
    LONELY = "lonely"
    BRAVE = "brave"
    ADAMANT = "adamant"
    NAUGHTY = "naughty"
    BOLD = "bold"
    DOCILE = "docile"
    RELAXED = "relaxed"
    IMPISH = "impish"
    LAX = "lax"
    TIMID = "timid"
    HASTY = "hasty"
    SERIOUS = "serious"
    JOLLY = "jolly"
    NAIVE = "naive"
    MODEST = "modest"
    MILD = "mild"
    QUIET = "quiet"
    BASHFUL = "bashful"
    RASH = "rash"
    CALM = "calm"
    GENTLE = "gentle"
    SASSY = "sassy"
    CAREFUL = "careful"
    QUIRKY = "quirky"


class Side(Enum):
    PLAYER = "player"
    OPPONENT = "opponent"


class StatusCondition(Enum):
    BURN = "burn"
    FREEZE = "freeze"
    PARALYSIS = "paralysis"
    POISON = "poison"
    BAD_POISON = "bad_poison"
    SLEEP = "sleep"


class VolatileStatus(Enum):
    CONFUSION = "confusion"
    FLINCH = "flinch"
    LEECH_SEED = "leech_seed"
    INFATUATION = "infatuation"


class Weather(Enum):
    CLEAR = "clear"
    RAIN = "rain"
    SUN = "sun"
    SANDSTORM = "sandstorm"
    HAIL = "hail"


@dataclass
class PokemonMove:
    move_id: str
    pp: int
    max_pp: int


@dataclass
class Pokemon:
    uid: str
    species_id: int
    nickname: str | None
    level: int
    exp: int
    nature: Nature
    ivs: dict[str, int]
    evs: dict[str, int]
    stats: dict[str, int]
    current_hp: int
    moves: list[PokemonMove]
    status: StatusCondition | None = None
    friendship: int = 70
    is_shiny: bool = False
    original_trainer: str = "Player"
    caught_ball: str = "poke_ball"
    ability: str | None = None
    held_item: str | None = None

    @property
    def display_name(self) -> str:
        return self.nickname or f"#{self.species_id}"

    @property
    def is_fainted(self) -> bool:
        return self.current_hp <= 0

    def __str__(self) -> str:
        return f"{self.display_name} - Lv {self.level}"


@dataclass
class ChargingMove:
    move_id: str
    turns_left: int


@dataclass
class BattlePokemon:
    pokemon: Pokemon
    types: list[str]
    stat_stages: dict[str, int]
    accuracy_stage: int = 0
    evasion_stage: int = 0
    volatile_statuses: set[VolatileStatus] = field(default_factory=set)
    is_protected: bool = False
    protect_count: int = 0
    sleep_turns: int = 0
    confusion_turns: int = 0
    toxic_counter: int = 0
    charging_move: ChargingMove | None = None
    semi_invulnerable: str | None = None
    flash_fire_active: bool = False
    last_move: str | None = None

    @property
    def name(self) -> str:
        return self.pokemon.display_name


@dataclass
class SideConditions:
    reflect: int = 0
    light_screen: int = 0
    stealth_rock: bool = False
    spikes_layers: int = 0
    toxic_spikes_layers: int = 0


@dataclass
class FieldState:
    weather: Weather = Weather.CLEAR
    weather_turns: int = 0
    player_side: SideConditions = field(default_factory=SideConditions)
    opponent_side: SideConditions = field(default_factory=SideConditions)

    def side(self, side: Side) -> SideConditions:
        return self.player_side if side == Side.PLAYER else self.opponent_side


@dataclass
class BattleAction:
    type: ActionType
    move_index: int | None = None
    item_id: str | None = None
    switch_index: int | None = None
    ball_multiplier: float = 1.0


@dataclass
class BattleState:
    battle_type: BattleType
    player_party: list[Pokemon]
    opponent_party: list[Pokemon]
    player_active: BattlePokemon
    opponent_active: BattlePokemon
    player_active_index: int = 0
    opponent_active_index: int = 0
    field: FieldState = field(default_factory=FieldState)
    turn_number: int = 0
    outcome: BattleOutcome = BattleOutcome.ONGOING
    ai_tier: AITier = AITier.RANDOM
    run_attempts: int = 0
    catch_attempts: int = 0

    @property
    def is_over(self) -> bool:
        return self.outcome != BattleOutcome.ONGOING


@dataclass
class LevelUpResult:
    leveled: bool
    new_level: int
    learned_moves: list[str] = field(default_factory=list)
    forgotten_moves: list[str] = field(default_factory=list)


@dataclass
class CatchResult:
    probability: float
    shakes: int
    caught: bool
    messages: list[str] = field(default_factory=list)


@dataclass
class TurnResult:
    state: BattleState
    messages: list[str] = field(default_factory=list)
    player_first: bool = True
    player_damage_dealt: int = 0
    opponent_damage_dealt: int = 0
    player_fainted: bool = False
    opponent_fainted: bool = False
    exp_gained: int = 0
    level_up: LevelUpResult | None = None
    catch: CatchResult | None = None
    ran_away: bool = False


@dataclass
class EvolutionCheck:
    can_evolve: bool
    evolves_to: int | None = None
    condition: EvolutionCondition | None = None


@dataclass
class BagItem:
    item_id: str
    quantity: int


@dataclass
class UseItemResult:
    success: bool
    message: str
    bag: list[BagItem]


@dataclass
class ShopResult:
    success: bool
    message: str
    bag: list[BagItem]
    money: int


@dataclass
class PlayerState:
    x: int = 0
    y: int = 0
    tile_x: int = 0
    tile_y: int = 0
    direction: str = "down"
    is_moving: bool = False
    move_progress: float = 0.0
    sprite_frame: int = 0
    speed: int = 2
    is_surfing: bool = False
    is_biking: bool = False


@dataclass
class PCBox:
    name: str
    pokemon: list[Pokemon | None]


@dataclass
class PokedexEntry:
    seen: bool = False
    caught: bool = False


@dataclass
class GameSave:
    version: GameVersion
    player_name: str
    rival_name: str
    player: PlayerState
    party: list[Pokemon]
    pc_boxes: list[PCBox]
    bag: list[BagItem]
    money: int
    badges: list[str]
    pokedex: dict[int, PokedexEntry]
    story_flags: dict[str, bool]
    current_map: str
    play_time: int
    timestamp: int
