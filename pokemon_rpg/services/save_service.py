import datetime
import json
import logging
from dataclasses import asdict
from enum import Enum
from typing import Any

from pokemon_rpg.constants import (
    PC_BOX_COUNT,
    PC_BOX_SIZE,
    SAVE_KEY_PREFIX,
    START_TILE,
    STARTER_ITEMS,
    STARTING_MONEY,
)
from pokemon_rpg.events import EventManager
from pokemon_rpg.models.models import (
    BagItem,
    EventType,
    GameSave,
    GameVersion,
    Nature,
    PCBox,
    PlayerState,
    PokedexEntry,
    Pokemon,
    PokemonMove,
    StatusCondition,
)
from pokemon_rpg.storage import KeyValueStorage

LOGGER = logging.getLogger(__name__)


def _encode_enum(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    err_msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(err_msg)


def _pokemon_from_dict(data: dict[str, Any]) -> Pokemon:
    data = dict(data)
    data["moves"] = [PokemonMove(**move) for move in data["moves"]]
    data["nature"] = Nature(data["nature"])
    data["status"] = StatusCondition(data["status"]) if data.get("status") else None
    return Pokemon(**data)


class SaveService:
    def __init__(self, storage: KeyValueStorage, event_manager: EventManager | None = None) -> None:
        self._event_manager = event_manager
        self._storage = storage

    @staticmethod
    def _get_key(version: GameVersion) -> str:
        return f"{SAVE_KEY_PREFIX}{version.value}"

    @staticmethod
    def _serialize(save: GameSave) -> str:
        return json.dumps(asdict(save), default=_encode_enum)

    @staticmethod
    def _deserialize(payload: str) -> GameSave:
        data = json.loads(payload)
        data["version"] = GameVersion(data["version"])
        data["player"] = PlayerState(**data["player"])
        data["party"] = [_pokemon_from_dict(pokemon) for pokemon in data["party"]]
        data["pc_boxes"] = [
            PCBox(box["name"], [_pokemon_from_dict(slot) if slot else None for slot in box["pokemon"]])
            for box in data["pc_boxes"]
        ]
        data["bag"] = [BagItem(**entry) for entry in data["bag"]]
        data["pokedex"] = {int(species_id): PokedexEntry(**entry) for species_id, entry in data["pokedex"].items()}
        return GameSave(**data)

    def save_game(self, save: GameSave) -> bool:
        save.timestamp = int(datetime.datetime.now(datetime.UTC).timestamp() * 1000)
        key = self._get_key(save.version)
        try:
            self._storage.set_item(key, self._serialize(save))
        except (OSError, TypeError, ValueError):
            LOGGER.exception("Failed to save game under %s", key)
            return False
        LOGGER.info("Game saved under %s", key)
        if self._event_manager is not None:
            self._event_manager.publish(EventType.GAME_SAVED, version=save.version)
        return True

    def load_game(self, version: GameVersion) -> GameSave | None:
        key = self._get_key(version)
        try:
            payload = self._storage.get_item(key)
        except (OSError, UnicodeDecodeError):
            LOGGER.exception("Failed to read save %s", key)
            return None
        if not payload:
            return None
        try:
            save = self._deserialize(payload)
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError):
            LOGGER.error("Corrupted save data under %s", key)  # noqa: TRY400
            return None
        LOGGER.info("Game loaded from %s", key)
        if self._event_manager is not None:
            self._event_manager.publish(EventType.GAME_LOADED, version=version)
        return save

    def delete_save(self, version: GameVersion) -> None:
        key = self._get_key(version)
        try:
            self._storage.remove_item(key)
        except OSError:
            LOGGER.exception("Failed to delete save %s", key)

    def has_save(self, version: GameVersion) -> bool:
        key = self._get_key(version)
        try:
            return self._storage.get_item(key) is not None
        except (OSError, UnicodeDecodeError):
            LOGGER.exception("Failed to read save %s", key)
            return False

    def get_all_saves(self) -> list[tuple[GameVersion, GameSave]]:
        saves = []
        for version in GameVersion:
            save = self.load_game(version)
            if save is not None:
                saves.append((version, save))
        return saves

    @staticmethod
    def create_new_save(version: GameVersion, player_name: str, rival_name: str, starting_map: str) -> GameSave:
        tile_x, tile_y = START_TILE
        return GameSave(
            version=version,
            player_name=player_name,
            rival_name=rival_name,
            player=PlayerState(tile_x=tile_x, tile_y=tile_y),
            party=[],
            pc_boxes=[PCBox(f"BOX {i + 1}", [None] * PC_BOX_SIZE) for i in range(PC_BOX_COUNT)],
            bag=[BagItem(item_id, quantity) for item_id, quantity in STARTER_ITEMS],
            money=STARTING_MONEY,
            badges=[],
            pokedex={},
            story_flags={},
            current_map=starting_map,
            play_time=0,
            timestamp=int(datetime.datetime.now(datetime.UTC).timestamp() * 1000),
        )

    @staticmethod
    def format_play_time(seconds: int) -> str:
        hours = seconds // 3600
        minutes = seconds % 3600 // 60
        return f"{hours}:{minutes:02d}"
