from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from apidef.server.core.config.models import ServiceConfigModel
from apidef.server.definitions.api.loader import extract_validation_error

logger = logging.getLogger(__name__)

__all__ = ["CONFIG_FILENAME", "find_config_file", "load_service_config"]

CONFIG_FILENAME = "apidef.yml"


def find_config_file(start: Path | None = None) -> Path:
    """Find the service configuration file.

    ``APIDEF_CONFIG`` wins when set; otherwise ``apidef.yml`` is searched in
    ``start`` (default: the current directory) and its parents.

    Raises:
        FileNotFoundError: If no configuration file is found
    """
    env_path = os.environ.get("APIDEF_CONFIG")
    if env_path:
        return Path(env_path)

    current = (start or Path.cwd()).resolve()
    for parent in [current] + list(current.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    raise FileNotFoundError(
        f"{CONFIG_FILENAME} not found in current directory or any parent directory"
    )


def load_service_config(config_path: Path | None = None) -> ServiceConfigModel:
    """Load and validate a service configuration file.

    Args:
        config_path: Path to the YAML file. If not provided, ``find_config_file`` is used.

    Returns:
        The loaded and validated configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or fails validation
    """
    if config_path is None:
        config_path = find_config_file()

    if not config_path.exists():
        raise FileNotFoundError(f"{config_path.name} not found at {config_path}")

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse {config_path}: {exc}") from exc

    try:
        model = ServiceConfigModel.model_validate(config)
    except ValidationError as exc:
        raise ValueError(
            f"Service config validation error in {config_path}: {extract_validation_error(exc)}"
        ) from exc

    logger.debug(f"Loaded {len(model.apis)} API definitions from {config_path}")
    return model
