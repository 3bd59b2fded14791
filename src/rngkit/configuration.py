"""
=======================
Configuration Utilities
=======================

A set of functions for turning randomness configuration files and
dictionaries into a :class:`layered_config_tree.LayeredConfigTree`.

Configuration is layered. Package defaults sit at the bottom, then
``~/rngkit.yaml`` if the user has one, then whatever the caller passes in.
A configuration file looks like::

    randomness:
        server_seed: 12345
        additional_seed: shard-3

"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from layered_config_tree import ConfigurationError, LayeredConfigTree

CONFIGURATION_DEFAULTS: dict[str, Any] = {
    "randomness": {
        "server_seed": None,
        "additional_seed": None,
    }
}

CONFIGURATION_LAYERS = ["base", "user_configs", "override"]


def build_randomness_configuration(
    configuration: str | Path | dict[str, Any] | LayeredConfigTree | None = None,
) -> LayeredConfigTree:
    """Builds the layered randomness configuration.

    Parameters
    ----------
    configuration
        Overrides for the defaults, either as a dictionary or as a path to a
        yaml configuration file.

    Returns
    -------
        A configuration tree with a ``randomness`` block.

    Raises
    ------
    ConfigurationError
        If a configuration file is given and is not a valid one.
    """
    config = LayeredConfigTree(layers=CONFIGURATION_LAYERS)
    config.update(CONFIGURATION_DEFAULTS, layer="base", source="rngkit_defaults")

    user_config_path = Path("~/rngkit.yaml").expanduser()
    if user_config_path.exists():
        config.update(
            _load(user_config_path), layer="user_configs", source=str(user_config_path)
        )

    if isinstance(configuration, (str, Path)):
        config.update(_load(configuration), layer="override", source=str(configuration))
    elif configuration is not None:
        config.update(configuration, layer="override", source="user_supplied_args")

    return config


def validate_configuration_file(file_path: str | Path) -> None:
    """Ensures the provided file is a yaml randomness configuration file."""
    _load(file_path)


def _load(file_path: str | Path) -> dict[str, Any]:
    file_path = Path(file_path)
    if not file_path.exists():
        raise ConfigurationError(
            "If you provide a configuration file, it must be a file. "
            f"You provided {str(file_path)}",
            value_name=None,
        )

    if file_path.suffix not in [".yaml", ".yml"]:
        raise ConfigurationError(
            f"Configuration files must be in a yaml format. You provided {file_path.suffix}",
            value_name=None,
        )

    with file_path.open() as f:
        raw_config = yaml.full_load(f)
    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Configuration file {str(file_path)} must contain a mapping.", value_name=None
        )

    valid_keys = set(CONFIGURATION_DEFAULTS)
    top_keys = set(raw_config.keys())
    if not top_keys <= valid_keys:
        raise ConfigurationError(
            f"Configuration contains additional top level "
            f"keys {top_keys.difference(valid_keys)}.",
            value_name=None,
        )
    return raw_config
