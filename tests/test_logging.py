import logging

import pytest

from startgg_sheets.core.logging import log_timing, setup_logging


def test_setup_logging_writes_log_file(tmp_path):
    log_file = tmp_path / "logs" / "sync.log"
    logger = setup_logging("DEBUG", log_file=log_file, format_style="simple")

    logging.getLogger("startgg_sheets.test").info("hello from the sync job")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert "INFO: hello from the sync job" in log_file.read_text()


def test_setup_logging_replaces_previous_handlers():
    setup_logging("INFO")
    logger = setup_logging("WARNING", format_style="json")

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_log_timing_reports_completion(caplog):
    logger = logging.getLogger("startgg_sheets.test")
    caplog.set_level(logging.INFO, logger="startgg_sheets")

    with log_timing(logger, "page fetch"):
        pass

    assert caplog.messages[0] == "Starting page fetch"
    assert caplog.messages[1].startswith("Completed page fetch in ")


def test_log_timing_failure_is_a_warning_and_reraises(caplog):
    logger = logging.getLogger("startgg_sheets.test")
    caplog.set_level(logging.INFO, logger="startgg_sheets")

    with pytest.raises(RuntimeError):
        with log_timing(logger, "page fetch"):
            raise RuntimeError("sheet quota")

    failed = [r for r in caplog.records if r.getMessage().startswith("Failed")]
    assert len(failed) == 1
    assert failed[0].levelno == logging.WARNING
    assert "sheet quota" in failed[0].getMessage()
