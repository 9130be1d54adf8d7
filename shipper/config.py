from __future__ import annotations

import logging
import os
from typing import Any
import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from shipper.exceptions import ConfigError
from shipper.models import Settings
from shipper.utils import mask_secret

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/airbox/shipper.yml"
ENV_PREFIX = "SHIPPER_"

def _read_file(config_path: str) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"error reading config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"error parsing config file {config_path}: {e}") from e

    if raw is None:
        raise ConfigError(f"config file {config_path} is empty")
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping, got {type(raw).__name__}")
    return raw

def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for name in Settings.model_fields:
        value = os.getenv(ENV_PREFIX + name.upper())
        if value is not None and value != "":
            overrides[name] = value
    return overrides

def get_settings(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from a YAML file, then apply ``SHIPPER_*`` environment overrides.

    A ``.env`` file in the working directory is loaded first so secrets such
    as ``SHIPPER_API_TOKEN`` can live outside the YAML. Any failure raises
    ``ConfigError``.
    """
    load_dotenv(find_dotenv(usecwd=True))
    values = _read_file(config_path)
    values.update(_env_overrides())
    try:
        settings = Settings.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    logger.debug(
        "Loaded config from %s: pattern=%s max_files=%d endpoint=%s token=%s server_key=%s interval=%ss",
        config_path,
        settings.path_pattern,
        settings.max_files,
        settings.api_endpoint,
        mask_secret(settings.api_token),
        mask_secret(settings.server_key),
        settings.check_interval,
    )
    return settings
