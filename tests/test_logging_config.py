"""Tests for the root logger setup."""

import logging

import pytest

from expense_tracker_api.app.core.logging_config import HANDLER_NAME, setup_logging


def own_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in own_handlers():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


class TestSetupLogging:
    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(own_handlers()) == 1
        assert logging.getLogger().level == logging.DEBUG

    def test_foreign_handlers_are_kept(self):
        foreign = logging.NullHandler()
        root = logging.getLogger()
        root.addHandler(foreign)
        try:
            setup_logging("INFO")
            assert foreign in root.handlers
        finally:
            root.removeHandler(foreign)

    def test_log_file_receives_records(self, tmp_path):
        log_file = tmp_path / "api.log"
        setup_logging("INFO", str(log_file))
        assert len(own_handlers()) == 2

        logging.getLogger("expense_tracker_api.tests").info("ledger entry created")
        for handler in own_handlers():
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "[INFO] expense_tracker_api.tests: ledger entry created" in text

    def test_reconfiguring_drops_the_old_file(self, tmp_path):
        setup_logging("INFO", str(tmp_path / "first.log"))
        setup_logging("INFO")
        assert all(not isinstance(h, logging.FileHandler) for h in own_handlers())

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO
