"""
SDK configuration loading and validation.
"""

import os
from typing import Any

import yaml
from dotenv import load_dotenv

from pumpfun_sdk.core.exceptions import ConfigError
from pumpfun_sdk.core.pubkeys import BPS_DENOMINATOR, DEFAULT_SLIPPAGE_BASIS_POINTS

REQUIRED_FIELDS = [
    "rpc_endpoint",
    "private_key",
]

CONFIG_VALIDATION_RULES = [
    ("trade.buy_slippage_bps", int, 0, BPS_DENOMINATOR, "trade.buy_slippage_bps must be between 0 and 10000"),
    ("trade.sell_slippage_bps", int, 0, BPS_DENOMINATOR, "trade.sell_slippage_bps must be between 0 and 10000"),
    ("trade.fee_basis_points", int, 0, BPS_DENOMINATOR, "trade.fee_basis_points must be between 0 and 10000"),
    ("priority_fees.fixed_amount", int, 0, float("inf"), "priority_fees.fixed_amount must be a non-negative integer"),
    ("retries.max_attempts", int, 0, 100, "retries.max_attempts must be between 0 and 100"),
]

VALID_VALUES = {
    "commitment": ["processed", "confirmed", "finalized"],
}

DEFAULTS = {
    "commitment": "confirmed",
    "trade": {
        "buy_slippage_bps": DEFAULT_SLIPPAGE_BASIS_POINTS,
        "sell_slippage_bps": DEFAULT_SLIPPAGE_BASIS_POINTS,
    },
    "priority_fees": {
        "fixed_amount": 0,
    },
    "retries": {
        "max_attempts": 3,
    },
}


def load_sdk_config(path: str) -> dict:
    """Load and validate an SDK configuration from a YAML file."""
    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e!s}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e!s}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    env_file = config.get("env_file")
    if env_file:
        env_path = os.path.join(os.path.dirname(path), env_file)
        if os.path.exists(env_path):
            load_dotenv(env_path, override=True)
        else:
            load_dotenv(env_file, override=True)

    resolve_env_vars(config)
    apply_defaults(config, DEFAULTS)
    validate_config(config)
    return config


def resolve_env_vars(config: dict) -> None:
    """Recursively resolve ${VAR} references in the configuration."""
    def resolve_env(value):
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            env_value = os.getenv(env_var)
            if env_value is None:
                raise ConfigError(f"Environment variable '{env_var}' not found")
            return env_value
        return value

    def resolve_all(d):
        for k, v in d.items():
            if isinstance(v, dict):
                resolve_all(v)
            else:
                d[k] = resolve_env(v)

    resolve_all(config)


def apply_defaults(config: dict, defaults: dict) -> None:
    """Fill in missing optional keys without overwriting given ones."""
    for key, value in defaults.items():
        if isinstance(value, dict):
            section = config.setdefault(key, {})
            if not isinstance(section, dict):
                raise ConfigError(f"Config section '{key}' must be a mapping")
            apply_defaults(section, value)
        else:
            config.setdefault(key, value)


def get_nested_value(config: dict, path: str) -> Any:
    """Get a nested value from the configuration using dot notation."""
    keys = path.split(".")
    value = config
    for key in keys:
        if not isinstance(value, dict) or key not in value:
            raise ConfigError(f"Missing required config key: {path}")
        value = value[key]
    return value


def has_nested_value(config: dict, path: str) -> bool:
    try:
        get_nested_value(config, path)
    except ConfigError:
        return False
    return True


def validate_config(config: dict) -> None:
    """Validate the configuration against defined rules."""
    for field in REQUIRED_FIELDS:
        value = get_nested_value(config, field)
        if not value:
            raise ConfigError(f"Config key {field} must not be empty")

    endpoint = config["rpc_endpoint"]
    if not isinstance(endpoint, str) or not endpoint.startswith(("http://", "https://")):
        raise ConfigError("rpc_endpoint must start with http:// or https://")

    for path, expected_type, min_val, max_val, error_msg in CONFIG_VALIDATION_RULES:
        if not has_nested_value(config, path):
            continue
        value = get_nested_value(config, path)

        # bool is an int subclass but never a valid amount
        if isinstance(value, bool) or not isinstance(value, expected_type):
            raise ConfigError(f"Type error: {error_msg}")

        if not (min_val <= value <= max_val):
            raise ConfigError(f"Range error: {error_msg}")

    for path, valid_values in VALID_VALUES.items():
        if not has_nested_value(config, path):
            continue
        value = get_nested_value(config, path)
        if value not in valid_values:
            raise ConfigError(f"{path} must be one of {valid_values}")

