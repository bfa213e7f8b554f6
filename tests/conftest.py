import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from genericplotter.config import CONFIG_ENV_VAR, load_config
from genericplotter.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # main() binds a handler to the captured stderr of the test that ran it
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_data(tmp_path):
    """Write ``text`` to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "data.txt") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def three_points(write_data) -> Path:
    return write_data("1 2\n3 4\n5 6\n")


@pytest.fixture
def defaults_cfg():
    return load_config()
