import argparse

import pytest

from qirkat.ai import MAX_DEPTH
from qirkat.config import ConfigError, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.depth == MAX_DEPTH
    assert settings.white == "manual"
    assert settings.black == "ai"


def test_environment_overrides():
    settings = Settings.from_env({"QIRKAT_SEARCH_DEPTH": "4", "QIRKAT_LOG_LEVEL": "debug"})
    assert settings.depth == 4
    assert settings.log_level == "debug"


def test_bad_environment_depth():
    with pytest.raises(ConfigError):
        Settings.from_env({"QIRKAT_SEARCH_DEPTH": "deep"})


def test_arguments_override_environment():
    args = argparse.Namespace(white="ai", black=None, depth=3, log_level=None, board=None, next_move=None)
    settings = Settings.from_env({"QIRKAT_SEARCH_DEPTH": "5"}).with_args(args)
    assert settings.depth == 3
    assert settings.white == "ai"
    assert settings.black == "ai"


def test_unknown_player_kind():
    with pytest.raises(ConfigError):
        Settings(white="robot").validated()
