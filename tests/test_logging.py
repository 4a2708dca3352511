"""
Test Suite: Logging

Tests for the treehouse logger tree helpers.
"""
import io
import logging

from treehouse.utils.logging import get_logger, log_error, log_operation, setup_logging


def test_get_logger_prefixes_names():
    assert get_logger("store").name == "treehouse.store"
    assert get_logger("treehouse.store") is get_logger("store")


def test_setup_logging_replaces_handlers(tmp_path):
    stream = io.StringIO()
    setup_logging(level="INFO", log_dir=tmp_path, stream=stream)
    root = setup_logging(level="INFO", log_dir=tmp_path, stream=stream)

    assert len(root.handlers) == 2
    assert not root.propagate

    log_operation(get_logger("store"), "Buddy ready", {"level": 1, "mood": "excited"})

    line = stream.getvalue().strip()
    assert line.endswith("INFO    store: Buddy ready: level=1, mood=excited")
    assert "\033[" not in line
    assert "Buddy ready" in (tmp_path / "treehouse.log").read_text(encoding="utf-8")


def test_log_error_includes_context_and_traceback():
    stream = io.StringIO()
    setup_logging(level="ERROR", file_output=False, stream=stream)

    try:
        raise OSError("disk full")
    except OSError as e:
        log_error(get_logger("store"), "persist snapshot", e, {"level": 2})

    text = stream.getvalue()
    assert "persist snapshot failed (OSError: disk full) [level=2]" in text
    assert "Traceback" in text


def test_level_filters_records():
    stream = io.StringIO()
    setup_logging(level="WARNING", file_output=False, stream=stream)

    log_operation(get_logger("store"), "quiet", level=logging.INFO)

    assert stream.getvalue() == ""
