import logging
from platform import python_version

from pokemon_rpg import __version__
from pokemon_rpg.constants import CONSOLE
from pokemon_rpg.container import Container
from pokemon_rpg.models.models import ActionType, AITier, BattleAction, BattleType, EvolutionTrigger
from pokemon_rpg.utils.logs import setup_logging

LOGGER = logging.getLogger(__name__)

DEMO_TURN_LIMIT = 30


def main() -> None:
    setup_logging(logging.WARNING)
    LOGGER.info("Python v%s", python_version())
    LOGGER.info("Pokemon RPG v%s", __version__)
    container = Container()
    for repository in (container.item_repository(), container.move_repository(), container.species_repository()):
        repository.load_defaults()
    species_repository = container.species_repository()
    factory = container.pokemon_factory()
    battle_service = container.battle_service()
    starter = factory.create_pokemon(species_repository.get_by_id(4), 12)
    wild = factory.create_pokemon(species_repository.get_by_id(16), 8)
    messages: list[str] = []
    state = battle_service.create_battle_state(BattleType.WILD, [starter], [wild], AITier.BASIC, messages)
    for message in messages:
        CONSOLE.print(message, style="info")
    while not state.is_over and state.turn_number < DEMO_TURN_LIMIT:
        result = battle_service.execute_turn(state, BattleAction(ActionType.FIGHT, move_index=0))
        CONSOLE.print(f"[bold]Turn {state.turn_number}[/bold]")
        for message in result.messages:
            CONSOLE.print(f"  {message}")
    battle_service.end_battle(state)
    CONSOLE.print(f"Battle outcome: {state.outcome.value}", style="success")
    evolution = container.evolution_service().check_evolution(starter, EvolutionTrigger.LEVEL_UP)
    if evolution.can_evolve:
        starter = container.evolution_service().evolve_pokemon(starter, evolution.evolves_to)
        CONSOLE.print(f"{starter} evolved!", style="success")


if __name__ == "__main__":
    main()
