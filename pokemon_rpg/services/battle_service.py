import logging
import random
from dataclasses import dataclass

from pokemon_rpg.constants import (
    ABSORB_ABILITIES,
    ATTACK_DOUBLING_ABILITIES,
    DEFAULT_CATCH_RATE,
    DEFAULT_GROWTH_RATE,
    EV_MAX_SINGLE,
    EV_MAX_TOTAL,
    FRIENDSHIP_LEVEL_UP_GAIN,
    FRIENDSHIP_MAX,
    HAZARD_IMMUNE_ABILITIES,
    HELD_ITEM_EFFECTS,
    HITS_FLYING,
    HITS_UNDERGROUND,
    MAX_LEVEL,
    MAX_MOVES,
    SCREEN_DURATION,
    SPIKES_DIVISORS,
    SPIKES_MAX_LAYERS,
    STAT_STAGE_MAX,
    STAT_STAGE_MIN,
    STATS,
    STATUS_APPLIED_MESSAGES,
    STRUGGLE_MOVE,
    STRUGGLE_MOVE_ID,
    SYNCHRONIZED_STATUSES,
    TOXIC_SPIKES_MAX_LAYERS,
    WEATHER_ABILITIES,
    WEATHER_DURATION,
    WEATHER_STARTED_MESSAGES,
)
from pokemon_rpg.events import EventManager
from pokemon_rpg.formulas import (
    CATCH_SHAKE_RANGE,
    CATCH_SHAKES,
    apply_stat_stage,
    calculate_catch_probability,
    calculate_damage,
    calculate_run_threshold,
    calculate_shake_threshold,
    get_accuracy_multiplier,
    get_crit_chance,
    get_exp_for_level,
    get_exp_yield,
    get_status_catch_bonus,
    get_type_effectiveness_multiplier,
    recalculate_stats,
)
from pokemon_rpg.models.models import (
    ActionType,
    AITier,
    BattleAction,
    BattleOutcome,
    BattlePokemon,
    BattleState,
    BattleType,
    CatchResult,
    ChargingMove,
    EventType,
    FieldState,
    LevelUpResult,
    MoveData,
    MoveEffect,
    Pokemon,
    PokemonMove,
    Side,
    SideConditions,
    StatusCondition,
    TurnResult,
    VolatileStatus,
    Weather,
)
from pokemon_rpg.repositories import MoveRepository, SpeciesRepository

LOGGER = logging.getLogger(__name__)

BASIC_AI_BEST_MOVE_CHANCE = 0.7
SMART_AI_BEST_MOVE_CHANCE = 0.85
SMART_AI_STATUS_SCORE = 60
SMART_AI_STAT_CHANGE_SCORE = 40
FREEZE_THAW_CHANCE = 0.2
FULL_PARALYSIS_CHANCE = 0.25
CONFUSION_SELF_HIT_CHANCE = 0.5
SHED_SKIN_CHANCE = 0.3
SHAKE_MESSAGES = ("", "It shook once...", "It shook twice...", "It shook three times...")


@dataclass
class MoveOutcome:
    damage: int = 0
    hit: bool = False
    critical: bool = False
    effectiveness: float = 1.0


class BattleService:
    def __init__(
        self,
        move_repository: MoveRepository,
        species_repository: SpeciesRepository,
        rng: random.Random | None = None,
        event_manager: EventManager | None = None,
    ) -> None:
        self._event_manager = event_manager
        self._move_repository = move_repository
        self._rng = rng or random.Random()
        self._species_repository = species_repository

    def _publish(self, event_type: EventType, **data: object) -> None:
        if self._event_manager is not None:
            self._event_manager.publish(event_type, **data)

    def get_move_data(self, move_id: str) -> MoveData | None:
        if move_id == STRUGGLE_MOVE_ID:
            return STRUGGLE_MOVE
        return self._move_repository.get_by_id(move_id)

    def create_battle_pokemon(self, pokemon: Pokemon) -> BattlePokemon:
        types = self._species_repository.get_types(pokemon.species_id)
        if types is None:
            LOGGER.warning("Unknown species %s, treating it as normal type", pokemon.species_id)
            types = ["normal"]
        return BattlePokemon(pokemon=pokemon, types=types, stat_stages=dict.fromkeys(STATS, 0))

    @staticmethod
    def create_field_effects() -> FieldState:
        return FieldState()

    def create_battle_state(
        self,
        battle_type: BattleType,
        player_party: list[Pokemon],
        opponent_party: list[Pokemon],
        ai_tier: AITier = AITier.RANDOM,
        messages: list[str] | None = None,
    ) -> BattleState:
        messages = messages if messages is not None else []
        player_index = self._first_healthy_index(player_party)
        opponent_index = self._first_healthy_index(opponent_party)
        if player_index is None or opponent_index is None:
            err_msg = "Both parties need at least one Pokemon able to battle"
            raise ValueError(err_msg)
        state = BattleState(
            battle_type=battle_type,
            player_party=player_party,
            opponent_party=opponent_party,
            player_active=self.create_battle_pokemon(player_party[player_index]),
            opponent_active=self.create_battle_pokemon(opponent_party[opponent_index]),
            player_active_index=player_index,
            opponent_active_index=opponent_index,
            field=self.create_field_effects(),
            ai_tier=ai_tier,
        )
        if battle_type == BattleType.WILD:
            messages.append(f"A wild {state.opponent_active.name} appeared!")
        else:
            messages.append(f"The opponent sent out {state.opponent_active.name}!")
        messages.append(f"Go! {state.player_active.name}!")
        self.apply_on_switch_in(state.player_active, state.opponent_active, state.field, messages)
        self.apply_on_switch_in(state.opponent_active, state.player_active, state.field, messages)
        LOGGER.info(
            "%s battle started: %s vs %s",
            battle_type.value,
            state.player_active.name,
            state.opponent_active.name,
        )
        return state

    @staticmethod
    def _first_healthy_index(party: list[Pokemon], exclude: int | None = None) -> int | None:
        for index, pokemon in enumerate(party):
            if index != exclude and not pokemon.is_fainted:
                return index
        return None

    def apply_entry_hazards(
        self,
        switched_in: BattlePokemon,
        side_conditions: SideConditions,
        messages: list[str],
    ) -> None:
        pokemon = switched_in.pokemon
        types = switched_in.types
        grounded = "flying" not in types and pokemon.ability not in HAZARD_IMMUNE_ABILITIES
        if side_conditions.stealth_rock:
            rock_effectiveness = get_type_effectiveness_multiplier("rock", types)
            damage = max(1, int(pokemon.stats["hp"] * rock_effectiveness // 8))
            pokemon.current_hp = max(0, pokemon.current_hp - damage)
            messages.append(f"Pointed stones dug into {switched_in.name}!")
        if side_conditions.spikes_layers > 0 and grounded:
            layers = min(side_conditions.spikes_layers, SPIKES_MAX_LAYERS)
            damage = max(1, pokemon.stats["hp"] // SPIKES_DIVISORS[layers - 1])
            pokemon.current_hp = max(0, pokemon.current_hp - damage)
            messages.append(f"{switched_in.name} was hurt by spikes!")
        if side_conditions.toxic_spikes_layers > 0 and grounded:
            if "poison" in types:
                side_conditions.toxic_spikes_layers = 0
                messages.append(f"{switched_in.name} absorbed the toxic spikes!")
            elif pokemon.status is None and "steel" not in types and not pokemon.is_fainted:
                if side_conditions.toxic_spikes_layers >= TOXIC_SPIKES_MAX_LAYERS:
                    pokemon.status = StatusCondition.BAD_POISON
                    switched_in.toxic_counter = 0
                    messages.append(f"{switched_in.name} was badly poisoned by toxic spikes!")
                else:
                    pokemon.status = StatusCondition.POISON
                    messages.append(f"{switched_in.name} was poisoned by toxic spikes!")

    @staticmethod
    def get_ability_switch_in_weather(ability: str | None) -> Weather | None:
        if not ability or ability not in WEATHER_ABILITIES:
            return None
        return Weather(WEATHER_ABILITIES[ability])

    def apply_on_switch_in(
        self,
        switched_in: BattlePokemon,
        opponent: BattlePokemon,
        field: FieldState,
        messages: list[str],
    ) -> None:
        ability = switched_in.pokemon.ability
        if not ability:
            return
        name = switched_in.name
        if ability == "intimidate":
            new_stage = max(STAT_STAGE_MIN, opponent.stat_stages["attack"] - 1)
            if new_stage != opponent.stat_stages["attack"]:
                opponent.stat_stages["attack"] = new_stage
                messages.append(f"{name}'s Intimidate lowered {opponent.name}'s Attack!")
        elif ability == "trace":
            if opponent.pokemon.ability:
                switched_in.pokemon.ability = opponent.pokemon.ability
                messages.append(f"{name} traced {opponent.name}'s {opponent.pokemon.ability}!")
        weather = self.get_ability_switch_in_weather(ability)
        if weather is not None:
            field.weather = weather
            field.weather_turns = WEATHER_DURATION
            ability_name = ability.replace("_", " ").title()
            messages.append(f"{name}'s {ability_name} changed the weather! {WEATHER_STARTED_MESSAGES[weather.value]}")

    def switch_in(self, state: BattleState, side: Side, party_index: int, messages: list[str]) -> bool:
        party = state.player_party if side == Side.PLAYER else state.opponent_party
        active_index = state.player_active_index if side == Side.PLAYER else state.opponent_active_index
        current = state.player_active if side == Side.PLAYER else state.opponent_active
        if not 0 <= party_index < len(party):
            messages.append("There is no Pokemon in that slot!")
            return False
        if party_index == active_index and not current.pokemon.is_fainted:
            messages.append(f"{current.name} is already in battle!")
            return False
        if party[party_index].is_fainted:
            messages.append(f"{party[party_index].display_name} has no energy left to battle!")
            return False
        switched_in = self.create_battle_pokemon(party[party_index])
        opponent = state.opponent_active if side == Side.PLAYER else state.player_active
        if side == Side.PLAYER:
            if not current.pokemon.is_fainted:
                messages.append(f"{current.name}, come back!")
            state.player_active = switched_in
            state.player_active_index = party_index
            messages.append(f"Go! {switched_in.name}!")
        else:
            state.opponent_active = switched_in
            state.opponent_active_index = party_index
            messages.append(f"The opponent sent out {switched_in.name}!")
        self.apply_entry_hazards(switched_in, state.field.side(side), messages)
        if not switched_in.pokemon.is_fainted:
            self.apply_on_switch_in(switched_in, opponent, state.field, messages)
        return True

    def check_ability_absorption(self, defender: BattlePokemon, move_type: str, messages: list[str]) -> bool:
        ability = defender.pokemon.ability
        if not ability:
            return False
        pokemon = defender.pokemon
        if ABSORB_ABILITIES.get(ability) == move_type:
            heal = max(1, pokemon.stats["hp"] // 4)
            pokemon.current_hp = min(pokemon.stats["hp"], pokemon.current_hp + heal)
            ability_name = ability.replace("_", " ").title()
            messages.append(f"{defender.name}'s {ability_name} restored HP!")
            return True
        if ability == "flash_fire" and move_type == "fire":
            defender.flash_fire_active = True
            messages.append(f"{defender.name}'s Flash Fire powered up its Fire-type moves!")
            return True
        return False

    def get_effective_stat(self, battle_pokemon: BattlePokemon, stat: str, stage: int | None = None) -> int:
        pokemon = battle_pokemon.pokemon
        stage = battle_pokemon.stat_stages[stat] if stage is None else stage
        value = apply_stat_stage(pokemon.stats[stat], stage)
        if stat == "attack" and pokemon.status == StatusCondition.BURN and pokemon.ability != "guts":
            value = value // 2
        if stat == "speed" and pokemon.status == StatusCondition.PARALYSIS:
            value = value // 4
        item_effect = HELD_ITEM_EFFECTS.get(pokemon.held_item or "")
        if item_effect and item_effect.get("boost_stat") == stat:
            value = int(value * item_effect["boost_multiplier"])
        if stat == "attack":
            if pokemon.ability in ATTACK_DOUBLING_ABILITIES:
                value *= 2
            if pokemon.ability == "guts" and pokemon.status is not None:
                value = int(value * 1.5)
            if pokemon.ability == "hustle":
                value = int(value * 1.5)
        return max(1, value)

    def _side_members(self, state: BattleState, side: Side) -> tuple[BattlePokemon, BattlePokemon]:
        if side == Side.PLAYER:
            return state.player_active, state.opponent_active
        return state.opponent_active, state.player_active

    def _validate_player_action(self, state: BattleState, action: BattleAction) -> str | None:
        active = state.player_active
        if active.pokemon.is_fainted and action.type != ActionType.SWITCH:
            return f"{active.name} can't battle! Choose another Pokemon."
        if action.type == ActionType.RUN and state.battle_type == BattleType.TRAINER:
            return "Can't escape from a trainer battle!"
        if action.type == ActionType.CATCH and state.battle_type == BattleType.TRAINER:
            return "You can't catch another trainer's Pokemon!"
        if action.type == ActionType.SWITCH:
            index = action.switch_index
            if index is None or not 0 <= index < len(state.player_party):
                return "Choose a Pokemon to switch in!"
            if state.player_party[index].is_fainted:
                return f"{state.player_party[index].display_name} has no energy left to battle!"
            if index == state.player_active_index:
                return f"{active.name} is already in battle!"
        if action.type == ActionType.FIGHT and action.move_index is not None and active.charging_move is None:
            has_usable_move = any(move.pp > 0 for move in active.pokemon.moves)
            if has_usable_move and not 0 <= action.move_index < len(active.pokemon.moves):
                return "That move doesn't exist!"
        return None

    def _resolve_move(self, battle_pokemon: BattlePokemon, action: BattleAction) -> PokemonMove:
        moves = battle_pokemon.pokemon.moves
        if not any(move.pp > 0 for move in moves):
            return PokemonMove(STRUGGLE_MOVE_ID, 1, 1)
        if action.move_index is None or not 0 <= action.move_index < len(moves):
            return next(move for move in moves if move.pp > 0)
        return moves[action.move_index]

    def _move_priority(self, battle_pokemon: BattlePokemon, move: PokemonMove) -> int:
        move_id = battle_pokemon.charging_move.move_id if battle_pokemon.charging_move else move.move_id
        move_data = self.get_move_data(move_id)
        return move_data["priority"] if move_data else 0

    def _player_moves_first(
        self,
        state: BattleState,
        player_move: PokemonMove,
        opponent_move: PokemonMove,
    ) -> bool:
        player_priority = self._move_priority(state.player_active, player_move)
        opponent_priority = self._move_priority(state.opponent_active, opponent_move)
        if player_priority != opponent_priority:
            return player_priority > opponent_priority
        player_speed = self.get_effective_stat(state.player_active, "speed")
        opponent_speed = self.get_effective_stat(state.opponent_active, "speed")
        if player_speed != opponent_speed:
            return player_speed > opponent_speed
        return self._rng.random() < 0.5  # noqa: PLR2004

    def _attempt_run(self, state: BattleState, messages: list[str]) -> bool:
        threshold = calculate_run_threshold(
            self.get_effective_stat(state.player_active, "speed"),
            self.get_effective_stat(state.opponent_active, "speed"),
            state.run_attempts,
        )
        state.run_attempts += 1
        if self._rng.random() * 256 < threshold:
            messages.append("Got away safely!")
            return True
        messages.append("Can't escape!")
        return False

    def execute_turn(
        self,
        state: BattleState,
        player_action: BattleAction,
        opponent_action: BattleAction | None = None,
    ) -> TurnResult:
        result = TurnResult(state=state)
        messages = result.messages
        if state.is_over:
            messages.append("The battle is already over.")
            return result
        error = self._validate_player_action(state, player_action)
        if error:
            messages.append(error)
            return result
        state.turn_number += 1
        state.player_active.is_protected = False
        state.opponent_active.is_protected = False
        if opponent_action is None:
            opponent_action = self.select_opponent_move(state)

        # Non-move actions resolve before any move.
        player_fights = player_action.type == ActionType.FIGHT
        if player_action.type == ActionType.RUN:
            if self._attempt_run(state, messages):
                result.ran_away = True
                self._finish_battle(state, BattleOutcome.RUN, messages)
                return result
        elif player_action.type == ActionType.CATCH:
            state.catch_attempts += 1
            catch = self.attempt_catch(state.opponent_active.pokemon, player_action.ball_multiplier)
            result.catch = catch
            messages.extend(catch.messages)
            if catch.caught:
                self._publish(EventType.POKEMON_CAUGHT, pokemon=state.opponent_active.pokemon)
                self._finish_battle(state, BattleOutcome.CAUGHT, messages)
                return result
        elif player_action.type == ActionType.SWITCH:
            self.switch_in(state, Side.PLAYER, player_action.switch_index, messages)
        elif player_action.type == ActionType.ITEM:
            messages.append(f"Used {player_action.item_id}!")
        opponent_fights = opponent_action.type == ActionType.FIGHT
        if opponent_action.type == ActionType.SWITCH and opponent_action.switch_index is not None:
            self.switch_in(state, Side.OPPONENT, opponent_action.switch_index, messages)

        player_move = self._resolve_move(state.player_active, player_action) if player_fights else None
        opponent_move = self._resolve_move(state.opponent_active, opponent_action) if opponent_fights else None
        order: list[tuple[Side, PokemonMove]] = []
        if player_move and opponent_move:
            result.player_first = self._player_moves_first(state, player_move, opponent_move)
            if result.player_first:
                order = [(Side.PLAYER, player_move), (Side.OPPONENT, opponent_move)]
            else:
                order = [(Side.OPPONENT, opponent_move), (Side.PLAYER, player_move)]
        elif player_move:
            order = [(Side.PLAYER, player_move)]
        elif opponent_move:
            result.player_first = False
            order = [(Side.OPPONENT, opponent_move)]

        for side, move in order:
            attacker, defender = self._side_members(state, side)
            if attacker.pokemon.is_fainted or defender.pokemon.is_fainted:
                continue
            defender_side = Side.OPPONENT if side == Side.PLAYER else Side.PLAYER
            outcome = self._execute_move(attacker, defender, move, messages, state.field, side, defender_side)
            if side == Side.PLAYER:
                result.player_damage_dealt += outcome.damage
            else:
                result.opponent_damage_dealt += outcome.damage
        self._reset_protect_counters(state, player_move, opponent_move)

        self._end_of_turn(state, messages)
        self._resolve_faints(state, result)
        self._publish(EventType.TURN_RESOLVED, state=state, result=result)
        return result

    def _reset_protect_counters(
        self,
        state: BattleState,
        player_move: PokemonMove | None,
        opponent_move: PokemonMove | None,
    ) -> None:
        for battle_pokemon, move in ((state.player_active, player_move), (state.opponent_active, opponent_move)):
            move_data = self.get_move_data(move.move_id) if move else None
            if not move_data or not move_data.get("effect", {}).get("protect"):
                battle_pokemon.protect_count = 0

    def _end_of_turn(self, state: BattleState, messages: list[str]) -> None:
        self._apply_post_turn_effects(state.player_active, state.opponent_active, messages, "Your", state.field.weather)
        self._apply_post_turn_effects(state.opponent_active, state.player_active, messages, "Foe", state.field.weather)
        for battle_pokemon in (state.player_active, state.opponent_active):
            battle_pokemon.volatile_statuses.discard(VolatileStatus.FLINCH)
        self._decrement_side_conditions(state.field.player_side, messages, "Your")
        self._decrement_side_conditions(state.field.opponent_side, messages, "Foe")
        field = state.field
        if field.weather != Weather.CLEAR and field.weather_turns > 0:
            field.weather_turns -= 1
            if field.weather_turns <= 0:
                messages.append("The weather returned to normal.")
                field.weather = Weather.CLEAR
                field.weather_turns = 0

    def _resolve_faints(self, state: BattleState, result: TurnResult) -> None:
        messages = result.messages
        player = state.player_active
        opponent = state.opponent_active
        result.player_fainted = player.pokemon.is_fainted
        result.opponent_fainted = opponent.pokemon.is_fainted
        if result.opponent_fainted:
            messages.append(f"The foe's {opponent.name} fainted!")
            self._publish(EventType.POKEMON_FAINTED, pokemon=opponent.pokemon, side=Side.OPPONENT)
            if not player.pokemon.is_fainted:
                self._award_experience(state, result)
        if result.player_fainted:
            messages.append(f"{player.name} fainted!")
            self._publish(EventType.POKEMON_FAINTED, pokemon=player.pokemon, side=Side.PLAYER)
        player_remaining = self._first_healthy_index(state.player_party) is not None
        opponent_remaining = self._first_healthy_index(state.opponent_party) is not None
        if not player_remaining:
            messages.append("You have no more Pokemon that can fight!")
            self._finish_battle(state, BattleOutcome.LOSE, messages)
        elif not opponent_remaining:
            messages.append("You won the battle!")
            self._finish_battle(state, BattleOutcome.WIN, messages)
        elif result.opponent_fainted:
            next_index = self._first_healthy_index(state.opponent_party, exclude=state.opponent_active_index)
            self.switch_in(state, Side.OPPONENT, next_index, messages)

    def _award_experience(self, state: BattleState, result: TurnResult) -> None:
        defeated = state.opponent_active.pokemon
        species = self._species_repository.get_by_id(defeated.species_id)
        if species is None:
            return
        winner = state.player_active.pokemon
        result.exp_gained = get_exp_yield(species["base_exp"], defeated.level, state.battle_type == BattleType.TRAINER)
        result.messages.append(f"{winner.display_name} gained {result.exp_gained} EXP. Points!")
        self.apply_ev_gains(winner, defeated.species_id)
        level_up = self.check_level_up(winner, result.exp_gained)
        result.level_up = level_up
        if level_up.leveled:
            result.messages.append(f"{winner.display_name} grew to Lv. {level_up.new_level}!")
            for forgotten in level_up.forgotten_moves:
                result.messages.append(f"{winner.display_name} forgot {forgotten}.")
            for learned in level_up.learned_moves:
                result.messages.append(f"{winner.display_name} learned {learned}!")

    def _finish_battle(self, state: BattleState, outcome: BattleOutcome, messages: list[str]) -> None:
        state.outcome = outcome
        LOGGER.info("Battle ended after %d turn(s): %s", state.turn_number, outcome.value)
        self._publish(EventType.BATTLE_ENDED, state=state, outcome=outcome, messages=messages)

    def end_battle(self, state: BattleState) -> list[Pokemon]:
        """Drop all battle-only state and hand back the player's party."""
        for battle_pokemon in (state.player_active, state.opponent_active):
            battle_pokemon.volatile_statuses.clear()
            battle_pokemon.stat_stages = dict.fromkeys(STATS, 0)
            battle_pokemon.charging_move = None
            battle_pokemon.semi_invulnerable = None
        if state.outcome == BattleOutcome.ONGOING:
            state.outcome = BattleOutcome.RUN
        return state.player_party

    def _execute_move(  # noqa: PLR0911, PLR0913
        self,
        attacker: BattlePokemon,
        defender: BattlePokemon,
        move: PokemonMove,
        messages: list[str],
        field: FieldState,
        attacker_side: Side,
        defender_side: Side,
    ) -> MoveOutcome:
        name = attacker.name
        attacker_conditions = field.side(attacker_side)
        defender_conditions = field.side(defender_side)
        if attacker.charging_move is not None:
            charged_move_id = attacker.charging_move.move_id
            attacker.charging_move = None
            attacker.semi_invulnerable = None
            move_data = self.get_move_data(charged_move_id)
            if move_data is None:
                return MoveOutcome()
            messages.append(f"{name} used {move_data['name']}!")
            if not self._can_attack(attacker, messages):
                return MoveOutcome()
            if not self._accuracy_check(attacker, defender, move_data, messages):
                return MoveOutcome()
            return self._execute_damaging_move(
                attacker,
                defender,
                move_data,
                messages,
                field,
                attacker_conditions,
                defender_conditions,
            )

        move_data = self.get_move_data(move.move_id)
        if move_data is None:
            messages.append(f"{name} used an unknown move!")
            return MoveOutcome()
        if move.move_id == STRUGGLE_MOVE_ID:
            messages.append(f"{name} has no moves left!")
        messages.append(f"{name} used {move_data['name']}!")
        if move.move_id != STRUGGLE_MOVE_ID:
            if move.pp <= 0:
                messages.append("But there was no PP left for this move!")
                return MoveOutcome()
            move.pp -= 1
        attacker.last_move = move.move_id
        if not self._can_attack(attacker, messages):
            return MoveOutcome()
        if defender.is_protected and move_data["category"] != "status":
            messages.append(f"{defender.name} protected itself!")
            return MoveOutcome()
        if defender.semi_invulnerable and move_data["category"] != "status":
            can_hit = (defender.semi_invulnerable == "underground" and move_data["id"] in HITS_UNDERGROUND) or (
                defender.semi_invulnerable == "flying" and move_data["id"] in HITS_FLYING
            )
            if not can_hit:
                messages.append(f"{name}'s attack missed!")
                return MoveOutcome()
        if move_data.get("is_multi_turn"):
            skip_charge = move_data["id"] == "solar_beam" and field.weather == Weather.SUN
            if not skip_charge:
                attacker.charging_move = ChargingMove(move_data["id"], 1)
                attacker.semi_invulnerable = move_data.get("semi_invulnerable")
                messages.append(f"{name} {move_data.get('charge_message', 'is charging up!')}")
                return MoveOutcome(hit=True)
        if not self._accuracy_check(attacker, defender, move_data, messages):
            return MoveOutcome()
        if move_data["category"] == "status":
            weather = self._apply_move_effect(
                move_data.get("effect"),
                attacker,
                defender,
                messages,
                attacker_conditions,
                defender_conditions,
            )
            self._set_weather(field, weather)
            return MoveOutcome(hit=True)
        return self._execute_damaging_move(
            attacker,
            defender,
            move_data,
            messages,
            field,
            attacker_conditions,
            defender_conditions,
        )

    def _accuracy_check(
        self,
        attacker: BattlePokemon,
        defender: BattlePokemon,
        move_data: MoveData,
        messages: list[str],
    ) -> bool:
        if move_data["accuracy"] is None:
            return True
        multiplier = get_accuracy_multiplier(attacker.accuracy_stage, defender.evasion_stage)
        hit_chance = move_data["accuracy"] * multiplier / 100
        if self._rng.random() >= hit_chance:
            messages.append(f"{attacker.name}'s attack missed!")
            return False
        return True

    @staticmethod
    def _set_weather(field: FieldState, weather: Weather | None) -> None:
        if weather is not None:
            field.weather = weather
            field.weather_turns = WEATHER_DURATION

    def _calculate_attack_and_defense(
        self,
        attacker: BattlePokemon,
        defender: BattlePokemon,
        is_physical: bool,
        critical: bool,
    ) -> tuple[int, int]:
        attack_stat = "attack" if is_physical else "sp_attack"
        defense_stat = "defense" if is_physical else "sp_defense"
        if not critical:
            return self.get_effective_stat(attacker, attack_stat), self.get_effective_stat(defender, defense_stat)
        attack_stage = max(0, attacker.stat_stages[attack_stat])
        defense_stage = min(0, defender.stat_stages[defense_stat])
        return (
            self.get_effective_stat(attacker, attack_stat, attack_stage),
            self.get_effective_stat(defender, defense_stat, defense_stage),
        )

    def _execute_damaging_move(  # noqa: C901, PLR0912, PLR0913, PLR0915
        self,
        attacker: BattlePokemon,
        defender: BattlePokemon,
        move_data: MoveData,
        messages: list[str],
        field: FieldState,
        attacker_conditions: SideConditions,
        defender_conditions: SideConditions,
    ) -> MoveOutcome:
        attacker_pokemon = attacker.pokemon
        defender_pokemon = defender.pokemon
        move_type = move_data["type"]
        is_physical = move_data["category"] == "physical"
        if move_type == "ground" and defender_pokemon.ability == "levitate":
            messages.append(f"{defender.name}'s Levitate made it immune!")
            return MoveOutcome(hit=True, effectiveness=0)
        if self.check_ability_absorption(defender, move_type, messages):
            return MoveOutcome(hit=True, effectiveness=0)
        effectiveness = get_type_effectiveness_multiplier(move_type, defender.types)
        if defender_pokemon.ability == "wonder_guard" and effectiveness <= 1:
            messages.append(f"{defender.name}'s Wonder Guard blocked the attack!")
            return MoveOutcome(hit=True, effectiveness=0)
        if effectiveness == 0:
            messages.append(f"It doesn't affect {defender.name}...")
            return MoveOutcome(hit=True, effectiveness=0)

        critical = self._rng.random() < get_crit_chance(move_data.get("crit_stage", 0))
        attack, defense = self._calculate_attack_and_defense(attacker, defender, is_physical, critical)
        stab = move_type in attacker.types
        random_factor = 0.85 + self._rng.random() * 0.15
        damage = 0
        if move_data["power"]:
            damage = calculate_damage(
                attacker_pokemon.level,
                move_data["power"],
                attack,
                defense,
                stab,
                effectiveness,
                critical,
                random_factor,
            )
        if damage > 0:
            damage = self._apply_damage_modifiers(
                damage,
                attacker,
                defender,
                move_type,
                is_physical,
                critical,
                field.weather,
                defender_conditions,
            )
        if damage >= defender_pokemon.current_hp and defender_pokemon.current_hp == defender_pokemon.stats["hp"]:
            if defender_pokemon.ability == "sturdy":
                damage = defender_pokemon.current_hp - 1
                messages.append(f"{defender.name} endured the hit with Sturdy!")
            elif HELD_ITEM_EFFECTS.get(defender_pokemon.held_item or "", {}).get("survive_ko"):
                damage = defender_pokemon.current_hp - 1
                defender_pokemon.held_item = None
                messages.append(f"{defender.name} held on with its Focus Sash!")

        if damage > 0:
            defender_pokemon.current_hp = max(0, defender_pokemon.current_hp - damage)
            if effectiveness > 1:
                messages.append("It's super effective!")
            elif effectiveness < 1:
                messages.append("It's not very effective...")
            if critical:
                messages.append("A critical hit!")
            attacker_item = HELD_ITEM_EFFECTS.get(attacker_pokemon.held_item or "", {})
            if attacker_item.get("recoil_fraction"):
                recoil = max(1, int(attacker_pokemon.stats["hp"] * attacker_item["recoil_fraction"]))
                attacker_pokemon.current_hp = max(0, attacker_pokemon.current_hp - recoil)
                messages.append(f"{attacker.name} lost some HP due to Life Orb!")
            if attacker_item.get("drain_fraction"):
                heal = max(1, int(damage * attacker_item["drain_fraction"]))
                attacker_pokemon.current_hp = min(attacker_pokemon.stats["hp"], attacker_pokemon.current_hp + heal)

        effect = move_data.get("effect")
        if effect and move_data["power"]:
            target = attacker if effect.get("target") == "self" else defender
            chance = effect.get("chance", 100)
            if not target.pokemon.is_fainted and self._rng.random() * 100 < chance:
                self._apply_move_effect(
                    effect,
                    attacker,
                    defender,
                    messages,
                    attacker_conditions,
                    defender_conditions,
                    secondary=True,
                )
            if effect.get("recoil") and damage > 0:
                recoil = max(1, int(damage * effect["recoil"]))
                attacker_pokemon.current_hp = max(0, attacker_pokemon.current_hp - recoil)
                messages.append(f"{attacker.name} was hurt by recoil!")
            if effect.get("drain") and damage > 0:
                drained = max(1, int(damage * effect["drain"]))
                attacker_pokemon.current_hp = min(attacker_pokemon.stats["hp"], attacker_pokemon.current_hp + drained)
                messages.append(f"{defender.name} had its energy drained!")
        return MoveOutcome(damage=damage, hit=True, critical=critical, effectiveness=effectiveness)

    def _apply_damage_modifiers(  # noqa: PLR0913
        self,
        damage: int,
        attacker: BattlePokemon,
        defender: BattlePokemon,
        move_type: str,
        is_physical: bool,
        critical: bool,
        weather: Weather,
        defender_conditions: SideConditions,
    ) -> int:
        if attacker.flash_fire_active and move_type == "fire":
            damage = int(damage * 1.5)
        if weather == Weather.RAIN:
            if move_type == "water":
                damage = int(damage * 1.5)
            elif move_type == "fire":
                damage = damage // 2
        elif weather == Weather.SUN:
            if move_type == "fire":
                damage = int(damage * 1.5)
            elif move_type == "water":
                damage = damage // 2
        if defender.pokemon.ability == "thick_fat" and move_type in {"fire", "ice"}:
            damage = damage // 2
        if not critical:
            if is_physical and defender_conditions.reflect > 0:
                damage = damage // 2
            if not is_physical and defender_conditions.light_screen > 0:
                damage = damage // 2
        attacker_item = HELD_ITEM_EFFECTS.get(attacker.pokemon.held_item or "", {})
        if attacker_item.get("damage_multiplier"):
            damage = int(damage * attacker_item["damage_multiplier"])
        return max(1, damage)

    def _can_attack(self, battle_pokemon: BattlePokemon, messages: list[str]) -> bool:  # noqa: PLR0911
        pokemon = battle_pokemon.pokemon
        name = battle_pokemon.name
        if pokemon.status == StatusCondition.SLEEP:
            if battle_pokemon.sleep_turns <= 0:
                pokemon.status = None
                messages.append(f"{name} woke up!")
            else:
                battle_pokemon.sleep_turns -= 1
                messages.append(f"{name} is fast asleep.")
                return False
        if pokemon.status == StatusCondition.FREEZE:
            if self._rng.random() < FREEZE_THAW_CHANCE:
                pokemon.status = None
                messages.append(f"{name} thawed out!")
            else:
                messages.append(f"{name} is frozen solid!")
                return False
        if pokemon.status == StatusCondition.PARALYSIS and self._rng.random() < FULL_PARALYSIS_CHANCE:
            messages.append(f"{name} is fully paralyzed!")
            return False
        if VolatileStatus.CONFUSION in battle_pokemon.volatile_statuses:
            if battle_pokemon.confusion_turns <= 0:
                battle_pokemon.volatile_statuses.discard(VolatileStatus.CONFUSION)
                messages.append(f"{name} snapped out of confusion!")
            else:
                battle_pokemon.confusion_turns -= 1
                messages.append(f"{name} is confused!")
                if self._rng.random() < CONFUSION_SELF_HIT_CHANCE:
                    self_damage = max(1, pokemon.stats["attack"] // 4)
                    pokemon.current_hp = max(0, pokemon.current_hp - self_damage)
                    messages.append("It hurt itself in its confusion!")
                    return False
        if VolatileStatus.FLINCH in battle_pokemon.volatile_statuses:
            battle_pokemon.volatile_statuses.discard(VolatileStatus.FLINCH)
            messages.append(f"{name} flinched and couldn't move!")
            return False
        return True

    def _apply_move_effect(  # noqa: C901, PLR0912, PLR0913
        self,
        effect: MoveEffect | None,
        attacker: BattlePokemon,
        defender: BattlePokemon,
        messages: list[str],
        attacker_conditions: SideConditions | None = None,
        defender_conditions: SideConditions | None = None,
        secondary: bool = False,
    ) -> Weather | None:
        if not effect:
            return None
        target = attacker if effect.get("target") == "self" else defender
        if effect.get("status"):
            self._apply_status(StatusCondition(effect["status"]), effect, attacker, target, messages, secondary)
        if effect.get("volatile_status"):
            self._apply_volatile_status(VolatileStatus(effect["volatile_status"]), target, messages)
        for stat, change in effect.get("stat_changes", {}).items():
            target.stat_stages[stat] = self._change_stage(target.stat_stages[stat], change, target.name, stat, messages)
        if effect.get("accuracy_change"):
            target.accuracy_stage = self._change_stage(
                target.accuracy_stage,
                effect["accuracy_change"],
                target.name,
                "accuracy",
                messages,
            )
        if effect.get("protect"):
            success_rate = 0.5**attacker.protect_count
            if self._rng.random() < success_rate:
                attacker.is_protected = True
                attacker.protect_count += 1
                messages.append(f"{attacker.name} protected itself!")
            else:
                attacker.protect_count = 0
                messages.append("But it failed!")
            return None
        if effect.get("field_effect"):
            conditions = attacker_conditions if effect.get("target") == "self" else defender_conditions
            if conditions is not None:
                self._apply_field_effect(effect["field_effect"], conditions, attacker.name, messages)
            return None
        if effect.get("clear_hazards") and attacker_conditions is not None:
            cleared = (
                attacker_conditions.stealth_rock
                or attacker_conditions.spikes_layers > 0
                or attacker_conditions.toxic_spikes_layers > 0
            )
            attacker_conditions.stealth_rock = False
            attacker_conditions.spikes_layers = 0
            attacker_conditions.toxic_spikes_layers = 0
            if cleared:
                messages.append("The hazards were blown away!")
            attacker.volatile_statuses.discard(VolatileStatus.LEECH_SEED)
        if effect.get("set_weather"):
            weather = Weather(effect["set_weather"])
            messages.append(WEATHER_STARTED_MESSAGES.get(weather.value, "The weather changed!"))
            return weather
        return None

    def _apply_status(  # noqa: PLR0913
        self,
        status: StatusCondition,
        effect: MoveEffect,
        attacker: BattlePokemon,
        target: BattlePokemon,
        messages: list[str],
        secondary: bool,
    ) -> None:
        types = target.types
        immune = (
            (status == StatusCondition.BURN and "fire" in types)
            or (status in {StatusCondition.POISON, StatusCondition.BAD_POISON} and {"poison", "steel"} & set(types))
            or (status == StatusCondition.FREEZE and "ice" in types)
            or (status == StatusCondition.PARALYSIS and "electric" in types)
        )
        if immune:
            if not secondary:
                messages.append(f"It doesn't affect {target.name}...")
            return
        if target.pokemon.status is not None:
            if not secondary:
                messages.append("But it failed!")
            return
        target.pokemon.status = status
        messages.append(STATUS_APPLIED_MESSAGES[status.value].format(name=target.name))
        if status == StatusCondition.SLEEP:
            target.sleep_turns = self._rng.randint(1, 3)
        if status == StatusCondition.BAD_POISON:
            target.toxic_counter = 0
        if (
            target.pokemon.ability == "synchronize"
            and effect.get("target") != "self"
            and status.value in SYNCHRONIZED_STATUSES
            and attacker.pokemon.status is None
        ):
            attacker.pokemon.status = status
            messages.append(f"{target.name}'s Synchronize passed the {status.value} to {attacker.name}!")

    def _apply_volatile_status(self, volatile: VolatileStatus, target: BattlePokemon, messages: list[str]) -> None:
        if volatile == VolatileStatus.LEECH_SEED and "grass" in target.types:
            messages.append(f"It doesn't affect {target.name}...")
            return
        if volatile in target.volatile_statuses and volatile != VolatileStatus.FLINCH:
            messages.append("But it failed!")
            return
        target.volatile_statuses.add(volatile)
        if volatile == VolatileStatus.CONFUSION:
            target.confusion_turns = self._rng.randint(2, 5)
            messages.append(f"{target.name} became confused!")
        elif volatile == VolatileStatus.LEECH_SEED:
            messages.append(f"{target.name} was seeded!")
        elif volatile == VolatileStatus.INFATUATION:
            messages.append(f"{target.name} fell in love!")

    @staticmethod
    def _change_stage(old_stage: int, change: int, name: str, label: str, messages: list[str]) -> int:
        new_stage = max(STAT_STAGE_MIN, min(STAT_STAGE_MAX, old_stage + change))
        label = label.replace("_", " ")
        if new_stage == old_stage:
            direction = "won't go higher" if change > 0 else "won't go lower"
            messages.append(f"{name}'s {label} {direction}!")
            return old_stage
        magnitude = abs(change)
        adverb = " drastically" if magnitude >= 3 else " sharply" if magnitude == 2 else ""  # noqa: PLR2004
        direction = "rose" if change > 0 else "fell"
        messages.append(f"{name}'s {label}{adverb} {direction}!")
        return new_stage

    @staticmethod
    def _apply_field_effect(field_effect: str, conditions: SideConditions, user_name: str, messages: list[str]) -> None:
        if field_effect == "reflect":
            if conditions.reflect > 0:
                messages.append("But it failed!")
            else:
                conditions.reflect = SCREEN_DURATION
                messages.append(f"{user_name} raised a physical barrier!")
        elif field_effect == "light_screen":
            if conditions.light_screen > 0:
                messages.append("But it failed!")
            else:
                conditions.light_screen = SCREEN_DURATION
                messages.append(f"{user_name} raised a special barrier!")
        elif field_effect == "stealth_rock":
            if conditions.stealth_rock:
                messages.append("But it failed!")
            else:
                conditions.stealth_rock = True
                messages.append("Pointed stones float in the air!")
        elif field_effect == "spikes":
            if conditions.spikes_layers >= SPIKES_MAX_LAYERS:
                messages.append("But it failed!")
            else:
                conditions.spikes_layers += 1
                messages.append("Spikes were scattered on the ground!")
        elif field_effect == "toxic_spikes":
            if conditions.toxic_spikes_layers >= TOXIC_SPIKES_MAX_LAYERS:
                messages.append("But it failed!")
            else:
                conditions.toxic_spikes_layers += 1
                messages.append("Poison spikes were scattered on the ground!")
        else:
            LOGGER.warning("Unknown field effect: %s", field_effect)

    def _apply_post_turn_effects(  # noqa: C901, PLR0912
        self,
        battle_pokemon: BattlePokemon,
        other: BattlePokemon,
        messages: list[str],
        prefix: str,
        weather: Weather,
    ) -> None:
        pokemon = battle_pokemon.pokemon
        if pokemon.is_fainted:
            return
        name = battle_pokemon.name
        max_hp = pokemon.stats["hp"]

        def take_damage(amount: int, message: str) -> None:
            pokemon.current_hp = max(0, pokemon.current_hp - amount)
            messages.append(message)

        if pokemon.status == StatusCondition.BURN:
            take_damage(max(1, max_hp // 8), f"{prefix} {name} is hurt by its burn!")
        elif pokemon.status == StatusCondition.POISON:
            take_damage(max(1, max_hp // 8), f"{prefix} {name} is hurt by poison!")
        elif pokemon.status == StatusCondition.BAD_POISON:
            battle_pokemon.toxic_counter += 1
            take_damage(max(1, max_hp * battle_pokemon.toxic_counter // 16), f"{prefix} {name} is hurt by poison!")
        if VolatileStatus.LEECH_SEED in battle_pokemon.volatile_statuses and not pokemon.is_fainted:
            drained = min(pokemon.current_hp, max(1, max_hp // 8))
            take_damage(drained, f"{prefix} {name}'s health is sapped by Leech Seed!")
            if not other.pokemon.is_fainted:
                other.pokemon.current_hp = min(other.pokemon.stats["hp"], other.pokemon.current_hp + drained)
        types = battle_pokemon.types
        if weather == Weather.SANDSTORM and not pokemon.is_fainted and not {"rock", "ground", "steel"} & set(types):
            take_damage(max(1, max_hp // 16), f"{prefix} {name} is buffeted by the sandstorm!")
        if weather == Weather.HAIL and not pokemon.is_fainted and "ice" not in types:
            take_damage(max(1, max_hp // 16), f"{prefix} {name} is pelted by hail!")
        if pokemon.is_fainted:
            return
        item_effect = HELD_ITEM_EFFECTS.get(pokemon.held_item or "", {})
        if item_effect.get("end_of_turn_heal_fraction") and pokemon.current_hp < max_hp:
            heal = max(1, int(max_hp * item_effect["end_of_turn_heal_fraction"]))
            pokemon.current_hp = min(max_hp, pokemon.current_hp + heal)
            messages.append(f"{prefix} {name} restored a little HP with its Leftovers!")
        if pokemon.ability == "speed_boost" and battle_pokemon.stat_stages["speed"] < STAT_STAGE_MAX:
            battle_pokemon.stat_stages["speed"] += 1
            messages.append(f"{prefix} {name}'s Speed Boost raised its Speed!")
        if pokemon.ability == "shed_skin" and pokemon.status is not None and self._rng.random() < SHED_SKIN_CHANCE:
            pokemon.status = None
            battle_pokemon.toxic_counter = 0
            messages.append(f"{prefix} {name}'s Shed Skin cured its status!")

    @staticmethod
    def _decrement_side_conditions(conditions: SideConditions, messages: list[str], prefix: str) -> None:
        if conditions.reflect > 0:
            conditions.reflect -= 1
            if conditions.reflect == 0:
                messages.append(f"{prefix} team's Reflect wore off!")
        if conditions.light_screen > 0:
            conditions.light_screen -= 1
            if conditions.light_screen == 0:
                messages.append(f"{prefix} team's Light Screen wore off!")

    def select_opponent_move(self, state: BattleState) -> BattleAction:
        attacker = state.opponent_active
        defender = state.player_active
        usable = [index for index, move in enumerate(attacker.pokemon.moves) if move.pp > 0]
        if not usable:
            return BattleAction(ActionType.FIGHT, move_index=None)
        if state.ai_tier == AITier.RANDOM:
            return BattleAction(ActionType.FIGHT, move_index=self._rng.choice(usable))
        if state.ai_tier == AITier.BASIC:
            scored = [(self._score_basic(attacker, defender, index), index) for index in usable]
            best_chance = BASIC_AI_BEST_MOVE_CHANCE
        else:
            scored = [(self._score_smart(attacker, defender, index), index) for index in usable]
            best_chance = SMART_AI_BEST_MOVE_CHANCE
        # Stable on ties: the earlier move slot wins.
        scored.sort(key=lambda pair: pair[0], reverse=True)
        if self._rng.random() < best_chance and scored[0][0] > 0:
            return BattleAction(ActionType.FIGHT, move_index=scored[0][1])
        if state.ai_tier != AITier.BASIC and len(scored) > 1 and scored[1][0] > 0:
            return BattleAction(ActionType.FIGHT, move_index=scored[1][1])
        return BattleAction(ActionType.FIGHT, move_index=self._rng.choice(usable))

    def _score_basic(self, attacker: BattlePokemon, defender: BattlePokemon, index: int) -> float:
        move_data = self.get_move_data(attacker.pokemon.moves[index].move_id)
        if not move_data or not move_data["power"]:
            return 0
        return move_data["power"] * get_type_effectiveness_multiplier(move_data["type"], defender.types)

    def _score_smart(self, attacker: BattlePokemon, defender: BattlePokemon, index: int) -> float:
        move_data = self.get_move_data(attacker.pokemon.moves[index].move_id)
        if not move_data:
            return 0
        score = 0.0
        if move_data["power"]:
            effectiveness = get_type_effectiveness_multiplier(move_data["type"], defender.types)
            stab = 1.5 if move_data["type"] in attacker.types else 1
            is_physical = move_data["category"] == "physical"
            attack = attacker.pokemon.stats["attack" if is_physical else "sp_attack"]
            defense = defender.pokemon.stats["defense" if is_physical else "sp_defense"]
            score = move_data["power"] * effectiveness * stab * attack / max(1, defense)
        if move_data["category"] == "status":
            effect = move_data.get("effect", {})
            if effect.get("status") and defender.pokemon.status is None:
                score = SMART_AI_STATUS_SCORE
            if effect.get("stat_changes"):
                score = SMART_AI_STAT_CHANGE_SCORE
        return score

    def apply_ev_gains(self, pokemon: Pokemon, defeated_species_id: int) -> None:
        species = self._species_repository.get_by_id(defeated_species_id)
        if species is None or not species.get("ev_yield"):
            return
        total = sum(pokemon.evs.values())
        for stat in STATS:
            gain = species["ev_yield"].get(stat, 0)
            if not gain or total >= EV_MAX_TOTAL:
                continue
            applied = min(gain, EV_MAX_SINGLE - pokemon.evs[stat], EV_MAX_TOTAL - total)
            if applied > 0:
                pokemon.evs[stat] += applied
                total += applied

    def recalculate_stats(self, pokemon: Pokemon) -> None:
        species = self._species_repository.get_by_id(pokemon.species_id)
        if species is None:
            LOGGER.warning("Cannot recalculate stats for unknown species %s", pokemon.species_id)
            return
        recalculate_stats(pokemon, species)

    def learn_move(self, pokemon: Pokemon, move_id: str) -> tuple[bool, str | None]:
        """Teach ``move_id``; a full moveset forgets its first (oldest) slot.

        Returns whether the move was learned and the id of the forgotten move, if any.
        """
        if any(move.move_id == move_id for move in pokemon.moves):
            return False, None
        move_data = self.get_move_data(move_id)
        if move_data is None:
            LOGGER.warning("Cannot teach unknown move %s to %s", move_id, pokemon)
            return False, None
        forgotten = None
        if len(pokemon.moves) >= MAX_MOVES:
            forgotten = pokemon.moves.pop(0).move_id
        pokemon.moves.append(PokemonMove(move_id, move_data["pp"], move_data["pp"]))
        return True, forgotten

    def check_level_up(self, pokemon: Pokemon, exp_gained: int = 0) -> LevelUpResult:
        species = self._species_repository.get_by_id(pokemon.species_id)
        growth_rate = species.get("growth_rate", DEFAULT_GROWTH_RATE) if species else DEFAULT_GROWTH_RATE
        pokemon.exp += exp_gained
        old_level = pokemon.level
        new_level = old_level
        while new_level < MAX_LEVEL and pokemon.exp >= get_exp_for_level(growth_rate, new_level + 1):
            new_level += 1
        result = LevelUpResult(leveled=new_level > old_level, new_level=new_level)
        if not result.leveled:
            return result
        pokemon.level = new_level
        self.recalculate_stats(pokemon)
        pokemon.friendship = min(FRIENDSHIP_MAX, pokemon.friendship + FRIENDSHIP_LEVEL_UP_GAIN)
        for level in range(old_level + 1, new_level + 1):
            for entry in self._species_repository.get_learnset(pokemon.species_id):
                if entry["level"] != level:
                    continue
                learned, forgotten = self.learn_move(pokemon, entry["move_id"])
                if learned:
                    result.learned_moves.append(entry["move_id"])
                if forgotten:
                    result.forgotten_moves.append(forgotten)
        LOGGER.info("%s grew from Lv %d to Lv %d", pokemon.display_name, old_level, new_level)
        self._publish(EventType.POKEMON_LEVELED_UP, pokemon=pokemon, result=result)
        return result

    def attempt_catch(self, pokemon: Pokemon, ball_multiplier: float) -> CatchResult:
        species = self._species_repository.get_by_id(pokemon.species_id)
        catch_rate = species.get("catch_rate", DEFAULT_CATCH_RATE) if species else DEFAULT_CATCH_RATE
        catch_args = (
            pokemon.stats["hp"],
            pokemon.current_hp,
            catch_rate,
            ball_multiplier,
            get_status_catch_bonus(pokemon.status),
        )
        shake_chance = calculate_shake_threshold(*catch_args) / CATCH_SHAKE_RANGE
        result = CatchResult(probability=calculate_catch_probability(*catch_args), shakes=0, caught=False)
        while result.shakes < CATCH_SHAKES and self._rng.random() < shake_chance:
            result.shakes += 1
        for shake in range(1, min(result.shakes, 3) + 1):
            result.messages.append(SHAKE_MESSAGES[shake])
        result.caught = result.shakes == CATCH_SHAKES
        if result.caught:
            result.messages.append(f"Gotcha! {pokemon.display_name} was caught!")
        else:
            result.messages.append("Oh no! The Pokemon broke free!")
        return result
