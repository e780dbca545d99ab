from __future__ import annotations

import logging

import pytest
from synth_returns.utils.logging_config import get_logger, log_dict


def test_get_logger_sets_level() -> None:
    logger = get_logger("synth_returns.tests.helpers", level=logging.WARNING)
    assert logger.level == logging.WARNING
    assert get_logger("synth_returns.tests.helpers") is logger


def test_log_dict_formats_payload(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("synth_returns.tests.payload")
    with caplog.at_level(logging.INFO, logger=logger.name):
        log_dict(logger, "paths generated", {"n_paths": 3, "seed": 7})

    record = caplog.records[-1]
    assert record.getMessage() == "paths generated | n_paths=3, seed=7"
    assert record.n_paths == 3
    assert record.seed == 7


def test_log_dict_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("synth_returns.tests.quiet")
    with caplog.at_level(logging.INFO, logger=logger.name):
        log_dict(logger, "hidden", {"x": 1}, level=logging.DEBUG)
    assert not caplog.records


def test_log_dict_renames_reserved_keys(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("synth_returns.tests.reserved")
    with caplog.at_level(logging.INFO, logger=logger.name):
        log_dict(logger, "collision", {"message": "hi", "name": "SPY", "args": 1, "seed": 3})

    record = caplog.records[-1]
    assert record.name == "synth_returns.tests.reserved"
    assert record.payload_message == "hi"
    assert record.payload_name == "SPY"
    assert record.payload_args == 1
    assert record.seed == 3
    assert "name=SPY" in record.getMessage()
