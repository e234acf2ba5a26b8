"""Tests for logging helpers."""

import logging

import pytest

from pumpfun_sdk.utils.logger import (
    PACKAGE_LOGGER,
    get_logger,
    set_log_level,
    setup_file_logging,
)


class TestLogger:
    def test_same_logger_per_name(self) -> None:
        assert get_logger("pumpfun_sdk.tests.cached") is get_logger("pumpfun_sdk.tests.cached")

    def test_module_loggers_share_package_handler(self) -> None:
        logger = get_logger("pumpfun_sdk.tests.handlers")
        get_logger("pumpfun_sdk.tests.handlers")
        assert logger.handlers == []
        assert logger.propagate
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) >= 1

    def test_outside_name_is_nested(self) -> None:
        assert get_logger("__main__").name == f"{PACKAGE_LOGGER}.__main__"

    def test_set_level_by_name(self) -> None:
        logger = get_logger("pumpfun_sdk.tests.level")
        set_log_level("debug")
        try:
            assert logger.getEffectiveLevel() == logging.DEBUG
        finally:
            set_log_level(logging.INFO)

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            set_log_level("chatty")

    def test_file_logging(self, tmp_path) -> None:
        path = tmp_path / "sdk.log"
        setup_file_logging(str(path))
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        handler = package_logger.handlers[-1]
        try:
            get_logger("pumpfun_sdk.tests.file").info("written to file")
            handler.flush()
            assert "written to file" in path.read_text()
        finally:
            package_logger.removeHandler(handler)
            handler.close()
