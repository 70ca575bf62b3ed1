"""
Run configuration.

A run is described by a RunConfig: the variable initialization policy,
whether to optimize, initial variable values and the output format.
It can be loaded from a YAML file and is then overridden by
command-line flags.

Example file:

    policy: require_explicit_init
    optimize: true
    format: text
    initial_values:
      X: 5
      Y: 3
"""

from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from barebones.errors import ConfigError
from barebones.store import MAX_VALUE, InitPolicy


OUTPUT_FORMATS = ("text", "yaml", "json")

_KNOWN_KEYS = {"policy", "optimize", "initial_values", "format"}


@dataclass
class RunConfig:
    """
    Settings fixed for the whole run.

    Properties:
        policy: what a newly created variable looks like
        optimize: run the peephole optimizer before execution
        initial_values: pre-seeded variables, applied before parsing
        output_format: "text", "yaml" or "json"
    """

    policy: InitPolicy = InitPolicy.EAGER_ZERO
    optimize: bool = False
    initial_values: Dict[str, int] = field(default_factory=dict)
    output_format: str = "text"


def config_from_dict(d: Dict[str, Any]) -> RunConfig:
    if not isinstance(d, dict):
        raise ConfigError("configuration must be a mapping")

    unknown = set(d) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

    config = RunConfig()

    if "policy" in d:
        try:
            config.policy = InitPolicy(d["policy"])
        except ValueError:
            raise ConfigError(f"Unknown initialization policy: {d['policy']!r}")

    if "optimize" in d:
        if not isinstance(d["optimize"], bool):
            raise ConfigError("'optimize' must be true or false")
        config.optimize = d["optimize"]

    if "format" in d:
        if d["format"] not in OUTPUT_FORMATS:
            raise ConfigError(f"Unknown output format: {d['format']!r}")
        config.output_format = d["format"]

    values = d.get("initial_values") or {}
    if not isinstance(values, dict):
        raise ConfigError("'initial_values' must be a mapping of name to value")
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"Initial value for {name} must be an integer")
        if value < 0 or value > MAX_VALUE:
            raise ConfigError(f"Initial value for {name} out of range: {value}")
        config.initial_values[str(name)] = value

    return config


def load_config(filepath: str) -> RunConfig:
    """
    Load a RunConfig from a YAML file.

    Raises:
        ConfigError: if the file is missing, not YAML, or has bad values
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {filepath}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config '{filepath}': {str(e)}")

    return config_from_dict(data or {})
