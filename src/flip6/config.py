"""
flip6.config — Engine configuration
===================================

Configuration is read from an optional JSON file, then overridden by
environment variables. A ``.env`` file in the working directory is
loaded first via python-dotenv.

Environment variables:
    FLIP6_DB_PATH            SQLite file (unset: in-memory store)
    FLIP6_LOG_FILE           JSON log file path
    FLIP6_LOG_LEVEL          DEBUG / INFO / WARNING / ERROR
    FLIP6_COMPLETION_BONUS   Bonus for a full hand (default 15)
    FLIP6_CLAMP_AT_ZERO      true/false, floor round scores at zero
    FLIP6_PREVIEW_COUNT      Draw-pile cards shown in snapshots
    FLIP6_SEED               Seed for the shuffle random source
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from ._deck.catalog import card_kind
from .errors import ConfigError

logger = logging.getLogger("flip6.config")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
INT_FIELDS = ("completion_bonus", "completion_min_cards", "action_cap", "preview_count")


@dataclass
class EngineConfig:
    db_path: Optional[str] = None
    log_file: Optional[str] = None
    log_level: str = "INFO"
    completion_bonus: int = 15
    completion_min_cards: int = 6
    clamp_at_zero: bool = True
    streak_lengths: Tuple[int, ...] = (2, 3)
    action_cap: int = 14
    preview_count: int = 0
    seed: Optional[int] = None
    catalog: Optional[Dict[str, int]] = field(default=None)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


ENV_MAPPINGS = {
    "FLIP6_DB_PATH": ("db_path", str),
    "FLIP6_LOG_FILE": ("log_file", str),
    "FLIP6_LOG_LEVEL": ("log_level", str),
    "FLIP6_COMPLETION_BONUS": ("completion_bonus", int),
    "FLIP6_CLAMP_AT_ZERO": ("clamp_at_zero", _parse_bool),
    "FLIP6_PREVIEW_COUNT": ("preview_count", int),
    "FLIP6_SEED": ("seed", int),
}


def load_config(
    config_path: Optional[str] = None, env_file: Optional[str] = None
) -> EngineConfig:
    """
    Build an EngineConfig from file and environment.

    Args:
        config_path: Optional JSON file with EngineConfig keys
        env_file: Optional .env path (default: search from cwd)

    Raises:
        ConfigError: Unknown keys, unparsable values or invalid settings
    """
    load_dotenv(env_file)
    values: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        with open(path, encoding="utf-8") as f:
            try:
                loaded = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file must hold a JSON object: {config_path}")
        values.update(loaded)

    for env_key, (config_key, parse) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            try:
                values[config_key] = parse(os.environ[env_key])
            except ValueError as e:
                raise ConfigError(f"Bad value for {env_key}: {e}") from e

    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {unknown}")
    if "streak_lengths" in values:
        if not isinstance(values["streak_lengths"], (list, tuple)):
            raise ConfigError("streak_lengths must be a list of integers")
        values["streak_lengths"] = tuple(values["streak_lengths"])

    config = EngineConfig(**values)
    validate_config(config)
    logger.debug(f"Config loaded: {config}")
    return config


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _type_errors(config: EngineConfig) -> List[str]:
    errors = []
    for name in INT_FIELDS:
        if not _is_int(getattr(config, name)):
            errors.append(f"{name} must be an integer")
    if config.seed is not None and not _is_int(config.seed):
        errors.append("seed must be an integer")
    for name in ("db_path", "log_file"):
        value = getattr(config, name)
        if value is not None and not isinstance(value, str):
            errors.append(f"{name} must be a string")
    if not isinstance(config.log_level, str):
        errors.append("log_level must be a string")
    if not isinstance(config.clamp_at_zero, bool):
        errors.append("clamp_at_zero must be true or false")
    if not all(_is_int(length) for length in config.streak_lengths):
        errors.append("streak_lengths must be a list of integers")
    if config.catalog is not None and (
        not isinstance(config.catalog, dict)
        or not all(_is_int(count) for count in config.catalog.values())
    ):
        errors.append("catalog must map card values to integer counts")
    return errors


def validate_config(config: EngineConfig) -> None:
    """
    Validate config values.

    Raises:
        ConfigError: If any value has the wrong type or is out of range
    """
    errors = _type_errors(config)
    if errors:
        raise ConfigError("; ".join(errors))
    if config.log_level.upper() not in LOG_LEVELS:
        errors.append(f"log_level must be one of {LOG_LEVELS}")
    if config.completion_bonus < 0:
        errors.append("completion_bonus must be >= 0")
    if config.completion_min_cards < 1:
        errors.append("completion_min_cards must be >= 1")
    if any(length < 2 for length in config.streak_lengths):
        errors.append("streak_lengths must all be >= 2")
    if config.action_cap < 0:
        errors.append("action_cap must be >= 0")
    if config.preview_count < 0:
        errors.append("preview_count must be >= 0")
    if config.catalog is not None:
        if not config.catalog or any(c < 0 for c in config.catalog.values()):
            errors.append("catalog must map card values to non-negative counts")
        for value in config.catalog:
            try:
                card_kind(value)
            except ValueError:
                errors.append(f"catalog has unknown card value {value!r}")
    if errors:
        raise ConfigError("; ".join(errors))
