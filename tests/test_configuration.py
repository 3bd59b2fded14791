from pathlib import Path

import pytest
import yaml
from layered_config_tree import ConfigurationError

from rngkit.configuration import (
    CONFIGURATION_DEFAULTS,
    build_randomness_configuration,
    validate_configuration_file,
)


@pytest.fixture
def user_config(mocker, tmp_path: Path) -> Path:
    user_config = tmp_path / "rngkit.yaml"
    with user_config.open("w") as f:
        yaml.dump({"randomness": {"server_seed": 99}}, f)
    expand_user_mock = mocker.patch("rngkit.configuration.Path.expanduser")
    expand_user_mock.return_value = user_config
    return user_config


def test_build_randomness_configuration_defaults(no_user_config: Path) -> None:
    config = build_randomness_configuration()
    assert config.to_dict() == CONFIGURATION_DEFAULTS
    assert config.randomness.server_seed is None


def test_build_randomness_configuration_user_config(user_config: Path) -> None:
    config = build_randomness_configuration()
    assert config.randomness.server_seed == 99
    assert config.randomness.additional_seed is None


def test_build_randomness_configuration_override_beats_user_config(
    user_config: Path, randomness_config_file: Path
) -> None:
    config = build_randomness_configuration(randomness_config_file)
    assert config.randomness.server_seed == 1234
    assert config.randomness.additional_seed == "shard_1"

    config = build_randomness_configuration({"randomness": {"additional_seed": 7}})
    assert config.randomness.server_seed == 99
    assert config.randomness.additional_seed == 7


def test_build_randomness_configuration_accepts_string_path(
    no_user_config: Path, randomness_config_file: Path
) -> None:
    config = build_randomness_configuration(str(randomness_config_file))
    assert config.randomness.server_seed == 1234


def test_validate_configuration_file(randomness_config_file: Path) -> None:
    validate_configuration_file(randomness_config_file)


def test_validate_configuration_file_failures(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        validate_configuration_file("made_up_file.yaml")

    not_yaml = tmp_path / "randomness.txt"
    not_yaml.write_text("randomness: {}")
    with pytest.raises(ConfigurationError):
        validate_configuration_file(not_yaml)

    extra_keys = tmp_path / "extra.yaml"
    with extra_keys.open("w") as f:
        yaml.dump({"randomness": {"server_seed": 1}, "population": {"size": 10}}, f)
    with pytest.raises(ConfigurationError):
        validate_configuration_file(extra_keys)

    not_a_mapping = tmp_path / "list.yaml"
    not_a_mapping.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        validate_configuration_file(not_a_mapping)


def test_validate_configuration_file_empty(tmp_path: Path) -> None:
    empty = tmp_path / "empty.yml"
    empty.write_text("")
    validate_configuration_file(empty)
