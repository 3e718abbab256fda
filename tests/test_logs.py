import logging

import pytest

from pokemon_rpg.constants import LOG_FILE_LIMIT
from pokemon_rpg.utils.logs import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
def test_records_reach_the_session_file(tmp_path):
    log_file = setup_logging(logging.CRITICAL, log_folder=tmp_path)
    logging.getLogger("pokemon_rpg.tests").info("Battle started")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert log_file.parent == tmp_path
    assert "{pokemon_rpg.tests} | Battle started" in log_file.read_text(encoding="utf-8")


@pytest.mark.usefixtures("restore_root_logger")
def test_old_log_files_are_pruned(tmp_path):
    for index in range(LOG_FILE_LIMIT + 5):
        (tmp_path / f"old_{index:03d}.log").write_text("", encoding="utf-8")
    setup_logging(logging.CRITICAL, log_folder=tmp_path)
    assert len(list(tmp_path.glob("*.log"))) == LOG_FILE_LIMIT
