import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_DATA_DIR = "WATCH_TRACKER_DATA_DIR"
ENV_TIMEZONE = "WATCH_TRACKER_TIMEZONE"
ENV_LOG_LEVEL = "WATCH_TRACKER_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StorageConfig(BaseModel):
    items_key: str = "watch-tracker-items-v1"
    wear_key: str = "watch-tracker-wear-v1"


class ExportConfig(BaseModel):
    watches: str = "watch-tracker.csv"
    wear_logs: str = "watch-wear-log.csv"
    backup: str = "watch-tracker-backup-{date}.json"
    profit_loss: str = "watch-profit-loss-{year}.csv"


class TrackerConfig(BaseModel):
    data_dir: Path = Path("./data")
    export_dir: Path | None = None  # defaults to <data_dir>/exports
    timezone: str = "UTC"
    log_level: str = "INFO"
    storage: StorageConfig = Field(default_factory=StorageConfig)
    exports: ExportConfig = Field(default_factory=ExportConfig)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def resolved_export_dir(self) -> Path:
        return self.export_dir or self.data_dir / "exports"


def load_config(path: Path | None = None) -> TrackerConfig:
    """
    Load configuration from a YAML file plus environment overrides.

    With no path, defaults are used.
    Raises FileNotFoundError if the file is missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    data: dict = {}
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config file not found at: {path}")
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML syntax in config file: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

    # Environment wins over the file
    if ENV_DATA_DIR in os.environ:
        data["data_dir"] = os.environ[ENV_DATA_DIR]
    if ENV_TIMEZONE in os.environ:
        data["timezone"] = os.environ[ENV_TIMEZONE]
    if ENV_LOG_LEVEL in os.environ:
        data["log_level"] = os.environ[ENV_LOG_LEVEL]

    try:
        return TrackerConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
