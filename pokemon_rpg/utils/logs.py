import datetime
import logging
from pathlib import Path

from rich.logging import RichHandler

from pokemon_rpg import __version__
from pokemon_rpg.config import PathConfig
from pokemon_rpg.constants import CONSOLE, LOG_FILE_LIMIT

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] {%(name)s} | %(message)s"


def _prune_log_files(log_folder: Path, keep: int) -> None:
    # Leaves room for the file about to be created.
    log_files = sorted(log_folder.glob("*.log"), key=lambda f: f.stat().st_mtime)
    for stale in log_files[: max(0, len(log_files) - keep + 1)]:
        stale.unlink()


def setup_logging(
    console_log_level: int,
    file_log_level: int = logging.INFO,
    log_folder: Path | None = None,
) -> Path:
    """Send records to the themed console and to a fresh per-session log file.

    Returns the path of the session's log file.
    """
    log_folder = log_folder or PathConfig.logs_folder()
    log_folder.mkdir(parents=True, exist_ok=True)
    _prune_log_files(log_folder, LOG_FILE_LIMIT)
    console_handler = RichHandler(
        level=console_log_level,
        console=CONSOLE,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    started = datetime.datetime.now(tz=datetime.UTC)
    log_file = log_folder / f"session_{started:%Y%m%d_%H%M%S_%f}_v{__version__}.log"
    file_handler = logging.FileHandler(filename=log_file, encoding="utf-8")
    file_handler.setLevel(file_log_level)
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        level=min(console_log_level, file_log_level),
        handlers=[console_handler, file_handler],
        force=True,
    )
    return log_file
