import pytest

from mal.builtin.env_builtin import register
from mal.interpreter import Interpreter
from mal.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    return register(Environment())


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    # Keep REPL tests away from the user's real history file and settings.
    monkeypatch.setenv("MAL_HISTORY_FILE", str(tmp_path / "history"))
    monkeypatch.delenv("MAL_PROMPT", raising=False)
    monkeypatch.delenv("MAL_LOG_LEVEL", raising=False)
