import random

import pytest

from pokemon_rpg.constants import STATS
from pokemon_rpg.data_loader import GameDataLoader
from pokemon_rpg.events import EventManager
from pokemon_rpg.formulas import calculate_all_stats, get_exp_for_level
from pokemon_rpg.models.models import Nature, Pokemon, PokemonMove
from pokemon_rpg.repositories import ItemRepository, MoveRepository, SpeciesRepository
from pokemon_rpg.services.battle_service import BattleService
from pokemon_rpg.services.evolution_service import EvolutionService
from pokemon_rpg.services.inventory_service import InventoryService
from pokemon_rpg.services.pokemon_factory import PokemonFactory
from pokemon_rpg.services.save_service import SaveService
from pokemon_rpg.storage import InMemoryStorage


class FixedRandom(random.Random):
    """Seeded generator whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def seeded_rng():
    return random.Random(42)


@pytest.fixture
def game_data_loader():
    return GameDataLoader()


@pytest.fixture
def item_repository(game_data_loader):
    repository = ItemRepository(game_data_loader)
    repository.load_defaults()
    return repository


@pytest.fixture
def move_repository(game_data_loader):
    repository = MoveRepository(game_data_loader)
    repository.load_defaults()
    return repository


@pytest.fixture
def species_repository(game_data_loader):
    repository = SpeciesRepository(game_data_loader)
    repository.load_defaults()
    return repository


@pytest.fixture
def event_manager():
    return EventManager()


@pytest.fixture
def pokemon_factory(move_repository, seeded_rng, event_manager):
    return PokemonFactory(move_repository, rng=seeded_rng, event_manager=event_manager)


@pytest.fixture
def battle_service(move_repository, species_repository, event_manager):
    return BattleService(move_repository, species_repository, rng=FixedRandom(0.5), event_manager=event_manager)


@pytest.fixture
def evolution_service(species_repository, event_manager):
    return EvolutionService(species_repository, event_manager=event_manager)


@pytest.fixture
def inventory_service(item_repository, species_repository, event_manager):
    return InventoryService(item_repository, species_repository, event_manager=event_manager)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def save_service(storage, event_manager):
    return SaveService(storage, event_manager=event_manager)


@pytest.fixture
def make_pokemon(species_repository, move_repository):
    """Build a deterministic creature: 15 IVs everywhere, a neutral nature and the given moves."""
    counter = iter(range(1, 10_000))

    def _make(species_id: int, level: int, moves: list[str] | None = None, **overrides) -> Pokemon:
        species = species_repository.get_by_id(species_id)
        ivs = dict.fromkeys(STATS, 15)
        evs = dict.fromkeys(STATS, 0)
        stats = calculate_all_stats(species["base_stats"], ivs, evs, level, Nature.HARDY)
        move_ids = moves if moves is not None else ["tackle"]
        pokemon = Pokemon(
            uid=f"test_{next(counter)}",
            species_id=species_id,
            nickname=species["name"],
            level=level,
            exp=get_exp_for_level(species["growth_rate"], level),
            nature=Nature.HARDY,
            ivs=ivs,
            evs=evs,
            stats=stats,
            current_hp=stats["hp"],
            moves=[
                PokemonMove(move_id, move_repository.get_by_id(move_id)["pp"], move_repository.get_by_id(move_id)["pp"])
                for move_id in move_ids
            ],
        )
        for key, value in overrides.items():
            setattr(pokemon, key, value)
        return pokemon

    return _make
