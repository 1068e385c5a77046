"""Detection configuration loader.

Loads a YAML configuration file and validates it against the
DetectionConfig schema. Omitted sections fall back to built-in defaults.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tunnelscope.core.errors import ConfigNotFoundError, ConfigValidationError
from tunnelscope.models.config import DetectionConfig


def load_config(path: Path | str | None = None) -> DetectionConfig:
    """Load detection configuration.

    Args:
        path: YAML file to load, or None for built-in defaults

    Returns:
        Validated DetectionConfig

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid YAML or fails validation
    """
    if path is None:
        return DetectionConfig()

    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigNotFoundError(str(config_path))

    with open(config_path, encoding="utf-8") as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigValidationError(str(config_path), [f"YAML parse error: {e}"])

    return config_from_dict(data or {}, source=str(config_path))


def config_from_dict(data: Any, source: str = "<dict>") -> DetectionConfig:
    """Validate a configuration mapping.

    Args:
        data: Parsed configuration data
        source: Name used in error reports

    Returns:
        Validated DetectionConfig
    """
    if not isinstance(data, dict):
        raise ConfigValidationError(source, ["Configuration must be a mapping"])

    try:
        return DetectionConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ConfigValidationError(source, errors)
