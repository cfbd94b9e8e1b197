"""
Configuration management for the home controller.

Loads configuration from YAML files with environment variable overrides.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Default configuration paths
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "homectl"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
SYSTEM_CONFIG_FILE = Path("/etc/homectl/config.yaml")


@dataclass
class RegistryConfig:
    """Device registry configuration."""

    log_capacity: int = 50
    seed_samples: bool = True


@dataclass
class WebConfig:
    """Web server configuration."""

    host: str = "127.0.0.1"
    port: int = 5000


@dataclass
class Config:
    """Main configuration for the home controller."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        registry_data = data.get("registry", {})
        web_data = data.get("web", {})

        registry = RegistryConfig(
            log_capacity=_positive_int(registry_data.get("log_capacity"), 50),
            seed_samples=registry_data.get("seed_samples", True),
        )

        web = WebConfig(
            host=web_data.get("host", "127.0.0.1"),
            port=web_data.get("port", 5000),
        )

        return cls(
            registry=registry,
            web=web,
            log_level=data.get("log_level", "INFO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "registry": {
                "log_capacity": self.registry.log_capacity,
                "seed_samples": self.registry.seed_samples,
            },
            "web": {
                "host": self.web.host,
                "port": self.web.port,
            },
            "log_level": self.log_level,
        }


def load_config(
    config_path: Optional[Path] = None,
) -> Config:
    """
    Load configuration from YAML file.

    Search order:
    1. Explicit path if provided
    2. HOMECTL_CONFIG environment variable
    3. ~/.config/homectl/config.yaml
    4. /etc/homectl/config.yaml
    5. Default values

    Environment variable overrides:
    - HOMECTL_LOG_CAPACITY: Override registry.log_capacity
    - HOMECTL_SEED_SAMPLES: Override registry.seed_samples
    - HOMECTL_HOST: Override web.host
    - HOMECTL_PORT: Override web.port
    - HOMECTL_LOG_LEVEL: Override log_level

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Loaded configuration
    """
    if config_path:
        paths_to_try = [config_path]
    else:
        env_path = os.environ.get("HOMECTL_CONFIG")
        paths_to_try = []
        if env_path:
            paths_to_try.append(Path(env_path))
        paths_to_try.extend([DEFAULT_CONFIG_FILE, SYSTEM_CONFIG_FILE])

    config_data = {}
    for path in paths_to_try:
        if path.exists():
            try:
                with open(path) as f:
                    config_data = yaml.safe_load(f) or {}
                break
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Skipping unreadable config {path}: {e}")
                continue

    config = Config.from_dict(config_data)
    config = _apply_env_overrides(config)

    return config


def _positive_int(value: Any, default: int) -> int:
    """Coerce a positive int, keeping the default for anything else."""
    if value is None:
        return default
    if not isinstance(value, bool):
        try:
            number = int(value)
        except (TypeError, ValueError):
            number = 0
        if number > 0:
            return number
    logger.warning(f"Ignoring invalid log capacity {value!r}, using {default}")
    return default


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config."""
    if "HOMECTL_LOG_CAPACITY" in os.environ:
        config.registry.log_capacity = _positive_int(
            os.environ["HOMECTL_LOG_CAPACITY"], config.registry.log_capacity
        )

    if "HOMECTL_SEED_SAMPLES" in os.environ:
        value = os.environ["HOMECTL_SEED_SAMPLES"].strip().lower()
        config.registry.seed_samples = value in ("1", "true", "yes", "on")

    if "HOMECTL_HOST" in os.environ:
        config.web.host = os.environ["HOMECTL_HOST"]

    if "HOMECTL_PORT" in os.environ:
        try:
            config.web.port = int(os.environ["HOMECTL_PORT"])
        except ValueError:
            pass

    if "HOMECTL_LOG_LEVEL" in os.environ:
        config.log_level = os.environ["HOMECTL_LOG_LEVEL"]

    return config


def save_config(config: Config, path: Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration to save
        path: Path to save to
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        f.write("# Smart Home Controller Configuration\n")
        f.write("# See documentation for all options\n\n")
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def get_default_config() -> Config:
    """Get default configuration without loading from file."""
    return Config()
