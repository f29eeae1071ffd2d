"""Configuration management for evtail."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..core.exceptions import ConfigurationError
from ..io.directories import get_config_path
from ..io.logger import get_logger
from .schema import EvtailConfig

logger = get_logger("config")

EXAMPLE_CONFIG = """# evtail configuration file
# Command-line options override anything set here

# Default event source (path or file:// URL); EVTAIL_SOURCE also works
# source: /var/log/platform/events.jsonl

tail:
  mode: list          # list, kinds or summary
  format: text        # text or json
  page_size: 100      # Events requested per fetch
  poll_interval: 1.0  # Seconds between polls when following
  color: false        # Color list output in text format

window:
  begin: 10           # Look back this many units
  unit: m             # s, m, h or d

fetch:
  retries: 0          # Retries for transient fetch failures (0 = fail fast)
  retry_base_delay: 1.0

logging:
  level: WARNING      # DEBUG, INFO, WARNING or ERROR
  # file: /tmp/evtail.log
"""


class Config:
    """Configuration manager for evtail."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config: Dict[str, Any] = EvtailConfig().model_dump()
        self.config_path = config_path

        # Only load from explicit path if provided
        if config_path:
            self.load_from_file(config_path)
        else:
            default_path = get_config_path()
            if default_path.exists():
                logger.debug(f"Loading config from: {default_path}")
                self.load_from_file(default_path)

    def load_from_file(self, path: Path):
        """Load configuration from YAML file.

        Raises:
            ConfigurationError: if the file is missing, unreadable or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                user_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

        if not user_config:
            self.config_path = path
            return
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        merged_config = self._deep_merge(self.config, user_config)

        try:
            validated_config = EvtailConfig(**merged_config)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {path}")
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration in {path}: {problems}") from e

        self.config = validated_config.model_dump()
        self.config_path = path

    def _deep_merge(self, base: Dict, update: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value using dot notation (e.g., 'tail.page_size')."""
        keys = key_path.split(".")
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    @staticmethod
    def write_example_config(path: Path):
        """Write example configuration file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(EXAMPLE_CONFIG)
