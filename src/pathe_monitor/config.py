"""Configuration management."""

import logging
import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
import yaml

from pathe_monitor.core import ConfigError

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TIMEZONE = "Europe/Amsterdam"

LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are only interesting when debugging
NOISY_LOGGERS = ("httpx", "httpcore", "apscheduler")

LOG_LEVELS = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "OFF": logging.CRITICAL + 10,
}


@dataclass
class MonitorConfig:
    """Polling settings."""
    interval_minutes: int = 30
    poll_interval: float = 0.5
    request_timeout: float = 30.0
    run_on_startup: bool = False


@dataclass
class PathsConfig:
    """Path settings."""
    watch_list: Path = Path("config.json")


@dataclass
class Settings:
    """Application settings."""

    # From environment only
    webhook_url: str
    log_level: str = DEFAULT_LOG_LEVEL
    timezone_name: str = DEFAULT_TIMEZONE

    # Config sections
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    @property
    def watch_list_path(self) -> Path:
        return self.paths.watch_list

    @property
    def interval_minutes(self) -> int:
        return self.monitor.interval_minutes

    @property
    def request_timeout(self) -> float:
        return self.monitor.request_timeout


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"failed reading `{config_path}`: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"`{config_path}` must contain a mapping")
    return config


def parse_log_level(name: str) -> int:
    """Translate a log level name (case-insensitive) to a logging level."""
    try:
        return LOG_LEVELS[name.strip().upper()]
    except KeyError:
        raise ConfigError(f"invalid log level {name!r} passed") from None


def validate_webhook_url(url: str) -> str:
    """Check that the webhook URL is an absolute http(s) URL."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConfigError(f"invalid `DISCORD_WEBHOOK_URL`: {e}") from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigError(f"`DISCORD_WEBHOOK_URL` must be an http(s) URL, got {url!r}")
    return url


def validate_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"invalid timezone {name!r}") from e


def _apply_section(section: object, values: object, section_name: str) -> None:
    if not isinstance(values, dict):
        raise ConfigError(f"config section `{section_name}` must be a mapping")

    known = {f.name: f.type for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"unknown config key `{section_name}.{key}`")
        if known[key] is Path:
            if not isinstance(value, str):
                raise ConfigError(f"`{section_name}.{key}` must be a path, got {value!r}")
            value = Path(value)
        setattr(section, key, value)


def _validate_monitor(monitor: MonitorConfig) -> None:
    for name in ("interval_minutes", "poll_interval", "request_timeout"):
        value = getattr(monitor, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"`monitor.{name}` must be a positive number, got {value!r}")
    if not isinstance(monitor.interval_minutes, int):
        raise ConfigError("`monitor.interval_minutes` must be a whole number")


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment.

    Raises:
        ConfigError: if required settings are missing or invalid
    """
    config = load_config(config_path)

    webhook_url = os.getenv("DISCORD_WEBHOOK_URL", "").strip()
    if not webhook_url:
        raise ConfigError("no `DISCORD_WEBHOOK_URL`-environment variable passed")
    validate_webhook_url(webhook_url)

    settings = Settings(
        webhook_url=webhook_url,
        log_level=os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        timezone_name=os.getenv("TIMEZONE") or DEFAULT_TIMEZONE,
    )

    parse_log_level(settings.log_level)
    validate_timezone(settings.timezone_name)

    # Apply YAML config
    for key, values in config.items():
        if key == "monitor":
            _apply_section(settings.monitor, values, key)
        elif key == "paths":
            _apply_section(settings.paths, values, key)
        else:
            raise ConfigError(f"unknown config section `{key}`")

    _validate_monitor(settings.monitor)

    return settings


def setup_logging(log_level: str) -> None:
    """Configure root logging to stdout."""
    level = parse_log_level(log_level)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
