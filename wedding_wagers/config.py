"""
Configuration loader
"""
import os
import yaml
from pathlib import Path
from wedding_wagers.models import AppConfig


DEFAULT_CONFIG_PATH = "config/settings.yaml"


def config_path_from_env() -> str:
    """Config path, overridable with WAGERS_CONFIG"""
    return os.environ.get("WAGERS_CONFIG", DEFAULT_CONFIG_PATH)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to config file

    Returns:
        AppConfig object

    Raises:
        FileNotFoundError: If config file not found
        pydantic.ValidationError: If a field has the wrong type
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)
