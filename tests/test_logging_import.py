"""
Test that transfer_blink.logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger and use the logger."""
    from transfer_blink.logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    logger.info("test_message", key="value")


def test_bind_request_context():
    """bind_request binds context without raising; later log calls still work."""
    from transfer_blink.logging import bind_request, get_logger

    bind_request(request_id="abc123")
    get_logger("test").info("bound_message")


def test_log_settings_read_from_dotenv(tmp_path, monkeypatch):
    """LOG_LEVEL / LOG_FORMAT set only in .env are picked up."""
    import logging

    from transfer_blink.logging.logger import read_log_settings

    for name in ("LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=DEBUG\nLOG_FORMAT=console\n")

    assert read_log_settings(env_file) == (logging.DEBUG, "console")


def test_log_settings_real_env_wins_over_dotenv(tmp_path, monkeypatch):
    import logging

    from transfer_blink.logging.logger import read_log_settings

    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_FORMAT", "json")
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=DEBUG\nLOG_FORMAT=console\n")

    assert read_log_settings(env_file) == (logging.WARNING, "json")
