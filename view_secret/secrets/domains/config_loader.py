"""Configuration loader for view-secret."""
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
import yaml

from .preferences import get_preference

logger = logging.getLogger(__name__)

SOURCES = ("kubectl", "gcp", "file")

DEFAULT_CONFIG: Dict[str, Any] = {
    "source": "kubectl",
    "kubernetes": {},
    "gcp": {},
}


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    return Path.home() / ".config" / "view-secret" / "config.yml"


def resolve_config_path() -> Tuple[Optional[Path], str]:
    """
    Find the config file using the XDG Base Directory standard.

    Priority order:
    1. User preference (stored in ~/.config/view-secret/preferences.json)
    2. Default location: ~/.config/view-secret/config.yml

    Returns:
        (path, source) where source is "preference" or "default";
        path is None when no config file exists
    """
    config_path_pref = get_preference("config_path")
    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.is_file():
            logger.debug(f"Using config from preference: {config_path}")
            return config_path, "preference"
        logger.warning(f"Config path from preference doesn't exist: {config_path}")

    default_config = default_config_path()
    if default_config.is_file():
        logger.debug(f"Using default config location: {default_config}")
        return default_config, "default"

    return None, "default"


def _validate(config: Dict[str, Any], config_path: Path) -> Dict[str, Any]:
    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    source = config.get("source", DEFAULT_CONFIG["source"])
    if source not in SOURCES:
        raise ConfigError(
            f"Unsupported source in config at {config_path}: {source}\n"
            f"Supported sources: {', '.join(SOURCES)}"
        )

    for section in ("kubernetes", "gcp"):
        value = config.get(section)
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' in config at {config_path} must be a mapping"
            )

    return {
        "source": source,
        "kubernetes": dict(config.get("kubernetes") or {}),
        "gcp": dict(config.get("gcp") or {}),
    }


def load_config() -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    The config file is optional; without one the defaults apply.

    Returns:
        Dict with keys:
        - source: default secret source ("kubectl", "gcp" or "file")
        - kubernetes: dict with optional namespace, context, kubeconfig
        - gcp: dict with optional project_id

    Raises:
        ConfigError: If the config file exists but is empty, unparsable or invalid
    """
    # Resolved on every call so preference changes apply immediately
    config_path, _ = resolve_config_path()
    if config_path is None:
        logger.debug("No config file found, using defaults")
        return {key: (dict(value) if isinstance(value, dict) else value)
                for key, value in DEFAULT_CONFIG.items()}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if not config:
        raise ConfigError(f"Config file at {config_path} is empty")

    config = _validate(config, config_path)
    logger.debug(f"Configuration loaded from {config_path} (source: {config['source']})")
    return config
