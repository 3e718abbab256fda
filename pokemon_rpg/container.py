import random

from dependency_injector import containers, providers

from pokemon_rpg.config import PathConfig
from pokemon_rpg.data_loader import GameDataLoader
from pokemon_rpg.events import EventManager
from pokemon_rpg.repositories import ItemRepository, MoveRepository, SpeciesRepository
from pokemon_rpg.services.battle_service import BattleService
from pokemon_rpg.services.evolution_service import EvolutionService
from pokemon_rpg.services.inventory_service import InventoryService
from pokemon_rpg.services.pokemon_factory import PokemonFactory
from pokemon_rpg.services.save_service import SaveService
from pokemon_rpg.storage import FileStorage


class Container(containers.DeclarativeContainer):
    event_manager = providers.Singleton(EventManager)
    game_data_loader = providers.Singleton(GameDataLoader)
    item_repository = providers.Singleton(ItemRepository, game_data_loader=game_data_loader)
    move_repository = providers.Singleton(MoveRepository, game_data_loader=game_data_loader)
    rng = providers.Singleton(random.Random)
    species_repository = providers.Singleton(SpeciesRepository, game_data_loader=game_data_loader)
    storage = providers.Singleton(FileStorage, folder=providers.Callable(PathConfig.save_folder))
    battle_service = providers.Singleton(
        BattleService,
        move_repository=move_repository,
        species_repository=species_repository,
        rng=rng,
        event_manager=event_manager,
    )
    evolution_service = providers.Singleton(
        EvolutionService,
        species_repository=species_repository,
        event_manager=event_manager,
    )
    inventory_service = providers.Singleton(
        InventoryService,
        item_repository=item_repository,
        species_repository=species_repository,
        event_manager=event_manager,
    )
    pokemon_factory = providers.Singleton(
        PokemonFactory,
        move_repository=move_repository,
        rng=rng,
        event_manager=event_manager,
    )
    save_service = providers.Singleton(SaveService, storage=storage, event_manager=event_manager)
