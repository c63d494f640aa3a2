import logging

import pytest

from vidafit.core.config import Settings
from vidafit.core.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _own_handlers(root):
    return [h for h in root.handlers if getattr(h, "_vidafit_handler", False)]


def test_file_handler_written_to_log_dir(tmp_path, restore_root_logger):
    settings = Settings(LOG_DIR=str(tmp_path / "logs"), DEBUG_MODE=False, LOG_TO_FILE=True)

    root = setup_logging(settings)

    assert root.level == logging.INFO
    assert any(isinstance(h, logging.FileHandler) for h in _own_handlers(root))
    assert list((tmp_path / "logs").glob("vidafit_*.log"))


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_root_logger):
    settings = Settings(LOG_DIR=str(tmp_path), DEBUG_MODE=True, LOG_TO_FILE=False)
    foreign = logging.NullHandler()
    restore_root_logger.addHandler(foreign)

    setup_logging(settings)
    root = setup_logging(settings)

    assert root.level == logging.DEBUG
    assert len(_own_handlers(root)) == 1
    assert foreign in root.handlers
    assert logging.getLogger("apscheduler").level == logging.WARNING
