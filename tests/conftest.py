" generic fixtures "
import copy
import logging
from io import StringIO

import pytest
from pytest_asyncio import fixture

from shelltree.aliases import AliasStore
from shelltree.builtin_commands import register_builtins
from shelltree.config import Configuration
from shelltree.constants import DEFAULT_CONFIG
from shelltree.session import Session
from shelltree.terminal import Terminal


def pytest_configure():
    "Runs once before all"
    from shelltree.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    return logging.getLogger("shelltree.tests")


@pytest.fixture
def no_color(monkeypatch):
    "Disable ANSI colors"
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def terminal(no_color, output, test_logger):
    return Terminal(Configuration({"display_names": False}, logger=test_logger), stream=output)


@pytest.fixture
def config(test_logger, tmp_path):
    "Default configuration with files under tmp_path"
    conf = copy.deepcopy(DEFAULT_CONFIG)
    conf["aliases"]["file"] = str(tmp_path / "commands.yaml")
    conf["terminal"]["history_file"] = ""
    return Configuration(conf, logger=test_logger)


@fixture
async def session(config, terminal, test_logger, tmp_path):
    "A session with built-ins registered and an empty alias file"
    sess = Session(config, terminal=terminal, aliases=AliasStore(tmp_path / "commands.yaml", test_logger))
    register_builtins(sess)
    await sess.load_aliases()
    return sess
