import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pokemon_rpg.config import PathConfig
from pokemon_rpg.utils.utils import load_yaml_file

if TYPE_CHECKING:
    from pokemon_rpg.models.models import ItemData, MoveData, SpeciesData

LOGGER = logging.getLogger(__name__)


class GameDataLoader:
    def __init__(self, resources_folder: Path | None = None) -> None:
        self._resources_folder = resources_folder

    def _data_file(self, filename: str) -> Path:
        folder = self._resources_folder or PathConfig.resources_folder()
        data_path = folder / filename
        if not data_path.exists():
            err_msg = f"Game data file not found: {data_path}"
            raise FileNotFoundError(err_msg)
        return data_path

    def load_item_data(self) -> list["ItemData"]:
        return load_yaml_file(self._data_file("items.yaml")) or []

    def load_move_data(self) -> list["MoveData"]:
        return load_yaml_file(self._data_file("moves.yaml")) or []

    def load_species_data(self) -> list["SpeciesData"]:
        return load_yaml_file(self._data_file("species.yaml")) or []
