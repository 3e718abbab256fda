import logging
import random
import uuid

from pokemon_rpg.constants import (
    DEFAULT_CAUGHT_BALL,
    DEFAULT_FRIENDSHIP,
    DEFAULT_GROWTH_RATE,
    DEFAULT_ORIGINAL_TRAINER,
    IV_MAX,
    IV_MIN,
    MAX_LEVEL,
    MAX_MOVES,
    SHINY_CHANCE,
    STATS,
)
from pokemon_rpg.events import EventManager
from pokemon_rpg.formulas import calculate_all_stats, get_exp_for_level
from pokemon_rpg.models.models import EventType, Nature, Pokemon, PokemonMove, SpeciesData
from pokemon_rpg.repositories import MoveRepository

LOGGER = logging.getLogger(__name__)

FALLBACK_MOVE_ID = "tackle"


class PokemonFactory:
    def __init__(
        self,
        move_repository: MoveRepository,
        rng: random.Random | None = None,
        event_manager: EventManager | None = None,
        shiny_chance: float = SHINY_CHANCE,
    ) -> None:
        self._event_manager = event_manager
        self._move_repository = move_repository
        self._rng = rng or random.Random()
        self._shiny_chance = shiny_chance

    @staticmethod
    def _generate_uid() -> str:
        return f"pkmn_{uuid.uuid4().hex}"

    def _roll_ivs(self) -> dict[str, int]:
        return {stat: self._rng.randint(IV_MIN, IV_MAX) for stat in STATS}

    def _build_move(self, move_id: str) -> PokemonMove | None:
        move_data = self._move_repository.get_by_id(move_id)
        if move_data is None:
            LOGGER.warning("Skipping unknown move: %s", move_id)
            return None
        return PokemonMove(move_id, move_data["pp"], move_data["pp"])

    def select_starting_moves(self, species: SpeciesData, level: int) -> list[PokemonMove]:
        eligible = [entry for entry in species.get("learnset", []) if entry["level"] <= level]
        eligible.sort(key=lambda entry: entry["level"], reverse=True)
        moves: list[PokemonMove] = []
        for entry in eligible:
            if len(moves) >= MAX_MOVES:
                break
            if any(move.move_id == entry["move_id"] for move in moves):
                continue
            move = self._build_move(entry["move_id"])
            if move is not None:
                moves.append(move)
        if not moves:
            fallback = self._build_move(FALLBACK_MOVE_ID)
            if fallback is not None:
                moves.append(fallback)
        return moves

    def create_pokemon(
        self,
        species: SpeciesData,
        level: int,
        original_trainer: str = DEFAULT_ORIGINAL_TRAINER,
        caught_ball: str = DEFAULT_CAUGHT_BALL,
    ) -> Pokemon:
        if not 1 <= level <= MAX_LEVEL:
            LOGGER.warning("Clamping out-of-range level %d for %s", level, species["name"])
            level = max(1, min(MAX_LEVEL, level))
        ivs = self._roll_ivs()
        evs = dict.fromkeys(STATS, 0)
        nature = self._rng.choice(list(Nature))
        stats = calculate_all_stats(species["base_stats"], ivs, evs, level, nature)
        abilities = species.get("abilities") or []
        ability = self._rng.choice(abilities) if abilities else None
        is_shiny = self._rng.random() < self._shiny_chance
        pokemon = Pokemon(
            uid=self._generate_uid(),
            species_id=species["id"],
            nickname=species["name"],
            level=level,
            exp=get_exp_for_level(species.get("growth_rate", DEFAULT_GROWTH_RATE), level),
            nature=nature,
            ivs=ivs,
            evs=evs,
            stats=stats,
            current_hp=stats["hp"],
            moves=self.select_starting_moves(species, level),
            status=None,
            friendship=DEFAULT_FRIENDSHIP,
            is_shiny=is_shiny,
            original_trainer=original_trainer,
            caught_ball=caught_ball,
            ability=ability,
        )
        LOGGER.debug("Created %s (%s)", pokemon, pokemon.uid)
        if self._event_manager is not None:
            self._event_manager.publish(EventType.POKEMON_CREATED, pokemon=pokemon)
        return pokemon
