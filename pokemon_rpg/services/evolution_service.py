import copy
import logging

from pokemon_rpg.constants import FRIENDSHIP_EVOLUTION_THRESHOLD, MAX_MOVES
from pokemon_rpg.events import EventManager
from pokemon_rpg.formulas import recalculate_stats
from pokemon_rpg.models.models import EventType, EvolutionCheck, EvolutionTrigger, Pokemon, SpeciesData
from pokemon_rpg.repositories import SpeciesRepository

LOGGER = logging.getLogger(__name__)


class EvolutionService:
    def __init__(self, species_repository: SpeciesRepository, event_manager: EventManager | None = None) -> None:
        self._event_manager = event_manager
        self._species_repository = species_repository

    def set_evolution_database(self, species_list: list[SpeciesData]) -> None:
        self._species_repository.install(species_list)

    def check_evolution(
        self,
        pokemon: Pokemon,
        trigger: EvolutionTrigger,
        item_id: str | None = None,
    ) -> EvolutionCheck:
        species = self._species_repository.get_by_id(pokemon.species_id)
        if species is None or not species.get("evolves_to"):
            return EvolutionCheck(can_evolve=False)
        for edge in species["evolves_to"]:
            condition = edge["condition"]
            condition_type = condition["type"]
            if condition_type == "level":
                matched = trigger == EvolutionTrigger.LEVEL_UP and pokemon.level >= condition.get("level", 0) > 0
            elif condition_type == "item":
                matched = trigger == EvolutionTrigger.ITEM and item_id is not None and condition.get("item") == item_id
            elif condition_type == "trade":
                matched = trigger == EvolutionTrigger.TRADE
            elif condition_type == "happiness":
                matched = trigger == EvolutionTrigger.LEVEL_UP and pokemon.friendship >= FRIENDSHIP_EVOLUTION_THRESHOLD
            else:
                LOGGER.warning("Unknown evolution condition %s on species %s", condition_type, species["name"])
                matched = False
            if matched:
                return EvolutionCheck(can_evolve=True, evolves_to=edge["species_id"], condition=condition)
        return EvolutionCheck(can_evolve=False)

    def evolve_pokemon(self, pokemon: Pokemon, target_species_id: int) -> Pokemon:
        old_name = self.get_species_name(pokemon.species_id)
        evolved = copy.deepcopy(pokemon)
        evolved.species_id = target_species_id
        target = self._species_repository.get_by_id(target_species_id)
        if target is None:
            LOGGER.warning("Evolving %s into unregistered species %s, stats unchanged", pokemon, target_species_id)
            return evolved
        if pokemon.nickname in (None, old_name):
            evolved.nickname = target["name"]
        recalculate_stats(evolved, target)
        LOGGER.info("%s evolved into %s", old_name, target["name"])
        if self._event_manager is not None:
            self._event_manager.publish(
                EventType.POKEMON_EVOLVED,
                pokemon=evolved,
                previous_species_id=pokemon.species_id,
            )
        return evolved

    def get_moves_for_level(self, species_id: int, level: int) -> list[str]:
        learnset = self._species_repository.get_learnset(species_id)
        return [entry["move_id"] for entry in learnset if entry["level"] == level]

    def get_species_name(self, species_id: int) -> str:
        species = self._species_repository.get_by_id(species_id)
        if species is None:
            return f"Pokemon #{species_id}"
        return species["name"]

    def get_starter_moves(self, species_id: int, level: int) -> list[str]:
        available = [entry for entry in self._species_repository.get_learnset(species_id) if entry["level"] <= level]
        available.sort(key=lambda entry: entry["level"], reverse=True)
        return [entry["move_id"] for entry in available[:MAX_MOVES]]
