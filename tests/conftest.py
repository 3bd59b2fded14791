from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import numpy as np
import pytest
import yaml
from _pytest.logging import LogCaptureFixture
from loguru import logger

from rngkit.randomness import FastRandomTraits, ServerRandomTraits


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption("--runslow", action="store_true", default=False, help="run slow tests")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--runslow"):
        # --runslow given in cli: do not skip slow tests
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def caplog(caplog: LogCaptureFixture) -> Generator[LogCaptureFixture, None, None]:
    handler_id = logger.add(caplog.handler, format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def reset_shared_generators() -> Generator[None, None, None]:
    FastRandomTraits.reset()
    ServerRandomTraits.reset()
    yield
    FastRandomTraits.reset()
    ServerRandomTraits.reset()


@pytest.fixture
def generator() -> np.random.Generator:
    return FastRandomTraits.make_generator(20260101)


@pytest.fixture
def randomness_config_file(tmp_path: Path) -> Path:
    config_file = tmp_path / "randomness.yaml"
    with config_file.open("w") as f:
        yaml.dump({"randomness": {"server_seed": 1234, "additional_seed": "shard_1"}}, f)
    return config_file


@pytest.fixture
def no_user_config(mocker, tmp_path: Path) -> Path:
    user_config = tmp_path / "oh_no_nothing_here.yaml"
    expand_user_mock = mocker.patch("rngkit.configuration.Path.expanduser")
    expand_user_mock.return_value = user_config
    return user_config
