import logging
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable
from typing import Any

from pokemon_rpg.data_loader import GameDataLoader
from pokemon_rpg.models.models import ItemData, LearnsetEntry, MoveData, SpeciesData

LOGGER = logging.getLogger(__name__)


class StaticDataRepository(ABC):
    def __init__(self, game_data_loader: GameDataLoader | None = None) -> None:
        self._game_data_loader = game_data_loader
        self._entries: dict[Hashable, Any] = {}

    def __contains__(self, entry_id: Hashable) -> bool:
        return entry_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @abstractmethod
    def _load_entries(self) -> list[Any]:
        pass

    def get_all(self) -> list[Any]:
        return list(self._entries.values())

    def get_by_id(self, entry_id: Hashable) -> Any | None:
        return self._entries.get(entry_id)

    def install(self, entries: Iterable[Any]) -> None:
        self._entries = {entry["id"]: entry for entry in entries}
        LOGGER.info("%s installed %d entries", self.__class__.__name__, len(self._entries))

    def load_defaults(self) -> None:
        if self._game_data_loader is None:
            err_msg = f"{self.__class__.__name__} has no data loader configured"
            raise RuntimeError(err_msg)
        self.install(self._load_entries())


class ItemRepository(StaticDataRepository):
    def _load_entries(self) -> list[ItemData]:
        return self._game_data_loader.load_item_data()

    def get_by_id(self, item_id: str) -> ItemData | None:
        return self._entries.get(item_id)


class MoveRepository(StaticDataRepository):
    def _load_entries(self) -> list[MoveData]:
        return self._game_data_loader.load_move_data()

    def get_by_id(self, move_id: str) -> MoveData | None:
        return self._entries.get(move_id)


class SpeciesRepository(StaticDataRepository):
    def _load_entries(self) -> list[SpeciesData]:
        return self._game_data_loader.load_species_data()

    def get_all_species(self) -> list[int]:
        return list(self._entries.keys())

    def get_by_id(self, species_id: int) -> SpeciesData | None:
        return self._entries.get(species_id)

    def get_learnset(self, species_id: int) -> list[LearnsetEntry]:
        species = self.get_by_id(species_id)
        if species is None:
            return []
        return species.get("learnset", [])

    def get_types(self, species_id: int) -> list[str] | None:
        species = self.get_by_id(species_id)
        if species is None:
            return None
        return list(species["types"])
