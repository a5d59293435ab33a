"""
Tests for the logging setup
"""
import logging

import pytest

from backend.utils import logging_config
from backend.utils.action_log import log_user_action

PRAZOS_HANDLERS = (logging_config.CONSOLE_HANDLER_NAME, logging_config.FILE_HANDLER_NAME)


@pytest.fixture
def root_logger():
    """Root logger without the prazos handlers; restored afterwards"""
    root = logging.getLogger()
    level = root.level
    saved = [h for h in root.handlers if h.get_name() in PRAZOS_HANDLERS]
    for handler in saved:
        root.removeHandler(handler)

    yield root

    for handler in [h for h in root.handlers if h.get_name() in PRAZOS_HANDLERS]:
        root.removeHandler(handler)
        handler.close()
    for handler in saved:
        root.addHandler(handler)
    root.setLevel(level)


def prazos_handlers(root):
    return [h for h in root.handlers if h.get_name() in PRAZOS_HANDLERS]


def test_setup_adds_console_and_file_handlers(root_logger, tmp_path):
    logging_config.setup_logging("DEBUG", log_dir=tmp_path)

    names = sorted(h.get_name() for h in prazos_handlers(root_logger))
    assert names == ["prazos.console", "prazos.file"]
    assert root_logger.level == logging.DEBUG
    assert (tmp_path / "prazos.log").exists()


def test_setup_twice_only_updates_level(root_logger, tmp_path):
    logging_config.setup_logging("DEBUG", log_dir=tmp_path)
    logging_config.setup_logging("WARNING", log_dir=tmp_path)

    handlers = prazos_handlers(root_logger)
    assert len(handlers) == 2
    assert all(h.level == logging.WARNING for h in handlers)
    assert logging.getLogger("apscheduler").level == logging.WARNING


def test_user_actions_reach_the_log_file(root_logger, tmp_path):
    logging_config.setup_logging("INFO", log_dir=tmp_path)

    log_user_action("SUSPEND_DEADLINE", client_ip="10.0.0.7", deadline_id="d-1", remaining_days=4)
    for handler in prazos_handlers(root_logger):
        handler.flush()

    content = (tmp_path / "prazos.log").read_text(encoding="utf-8")
    assert "prazos.actions" in content
    assert "USER_ACTION | ip=10.0.0.7 | SUSPEND_DEADLINE deadline_id='d-1' remaining_days=4" in content
