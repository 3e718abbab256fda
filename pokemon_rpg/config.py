import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)


class PathConfig:
    @staticmethod
    def get_package_root() -> Path:
        return Path(__file__).parent

    @staticmethod
    def get_project_root() -> Path:
        return Path(__file__).parent.parent

    @staticmethod
    def logs_folder() -> Path:
        folder = PathConfig.get_project_root() / "logs"
        if not folder.exists():
            folder.mkdir(parents=True, exist_ok=True)
            LOGGER.info("Logs folder created: %s", folder)
        return folder

    @staticmethod
    def resources_folder() -> Path:
        folder = PathConfig.get_package_root() / "resources"
        if not folder.exists():
            LOGGER.critical("Resources folder does not exist: %s", folder)
        return folder

    @staticmethod
    def save_folder() -> Path:
        folder = PathConfig.get_project_root() / "save"
        if not folder.exists():
            LOGGER.warning("Save folder does not exist: %s", folder)
            folder.mkdir(parents=True, exist_ok=True)
            LOGGER.info("Save folder created.")
        return folder
