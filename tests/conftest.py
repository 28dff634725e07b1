import logging

import pytest

from obswalk.config import reset_config
from obswalk.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at an empty XDG dir and drop OBSWALK_* overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("OBSWALK_MAX_DEPTH", raising=False)
    monkeypatch.delenv("OBSWALK_LOG_LEVEL", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop console handlers installed by configure_logging (they hold a captured stderr)."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_obswalk_console", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
