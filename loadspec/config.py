"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass

import yaml

from loadspec.durations import SECOND, parse_duration
from loadspec.models import LoadspecError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(LoadspecError):
    """Raised for invalid configuration values."""


@dataclass(frozen=True)
class Config:
    target_url: str = ""
    index_overrides: tuple[str, ...] = ()
    max_duration_nanos: int = 0  # 0 means unlimited
    log_level: str = "WARNING"


def split_overrides(values) -> tuple[str, ...]:
    """Flatten repeated and comma-separated override values, dropping blanks.

    ["a,b", "c"] -> ("a", "b", "c")
    """
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    result = []
    for value in values:
        for item in str(value).split(","):
            item = item.strip()
            if item:
                result.append(item)
    return tuple(result)


def _duration(value, source: str) -> int:
    # YAML may hand us a bare number, taken as seconds
    if isinstance(value, bool):
        raise ConfigError(f"invalid max_duration from {source}: {value!r}")
    if isinstance(value, (int, float)):
        return int(value * SECOND)
    try:
        return parse_duration(str(value))
    except ValueError as e:
        raise ConfigError(f"invalid max_duration from {source}: {e}") from e


def _log_level(value: str, source: str) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"invalid log level from {source}: {value!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return level


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config with precedence CLI args > env vars > YAML > defaults."""
    target_url = (
        getattr(cli_args, "target_url", None)
        or os.environ.get("LOADSPEC_TARGET_URL")
        or yaml_data.get("target_url")
        or ""
    )

    cli_indexes = split_overrides(getattr(cli_args, "index_override", None))
    if cli_indexes:
        index_overrides = cli_indexes
    elif os.environ.get("LOADSPEC_INDEX_OVERRIDE"):
        index_overrides = split_overrides(os.environ["LOADSPEC_INDEX_OVERRIDE"])
    else:
        index_overrides = split_overrides(yaml_data.get("index_override"))

    cli_duration = getattr(cli_args, "max_duration", None)
    if cli_duration is not None:
        max_duration = _duration(cli_duration, "command line")
    elif os.environ.get("LOADSPEC_MAX_DURATION"):
        max_duration = _duration(os.environ["LOADSPEC_MAX_DURATION"], "LOADSPEC_MAX_DURATION")
    elif yaml_data.get("max_duration") is not None:
        max_duration = _duration(yaml_data["max_duration"], "config file")
    else:
        max_duration = Config.max_duration_nanos

    if getattr(cli_args, "log_level", None):
        log_level = _log_level(cli_args.log_level, "command line")
    elif os.environ.get("LOG_LEVEL"):
        log_level = _log_level(os.environ["LOG_LEVEL"], "LOG_LEVEL")
    elif yaml_data.get("log_level"):
        log_level = _log_level(yaml_data["log_level"], "config file")
    else:
        log_level = Config.log_level

    return Config(
        target_url=str(target_url),
        index_overrides=index_overrides,
        max_duration_nanos=max(max_duration, 0),
        log_level=log_level,
    )
