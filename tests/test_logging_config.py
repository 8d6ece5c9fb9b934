"""Tests for logging setup."""

import logging

from components.core.logging_config import QUIET_LOGGERS, get_logger, setup_logging


class TestSetupLogging:
    """Tests for library logger levels."""

    def test_sql_loggers_stay_quiet_at_info(self):
        setup_logging("info")
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_sql_loggers_follow_stricter_levels(self):
        setup_logging("ERROR")
        assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
        setup_logging("INFO")

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_get_logger_is_named(self):
        assert get_logger("components.goal.repository").name == "components.goal.repository"
