"""Configuration loader and validator."""

from pathlib import Path
from typing import Any, Dict, Union
import yaml
import os

DEFAULT_CONFIG_FILE = "synergy-bridge.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Config:
    """Load and validate synergy-bridge.yaml configuration."""

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> None:
        """Initialize config loader.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """Load and validate configuration.

        Returns:
            Validated configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                "Run 'synergy-bridge init' to create one."
            )

        with open(self.config_path, encoding="utf-8") as f:
            self._config = yaml.safe_load(f)

        if self._config is None:
            self._config = {}

        if not isinstance(self._config, dict):
            raise ValueError("Configuration root must be a mapping/object")

        self._expand_env_vars(self._config)
        self._validate()

        return self._config

    def _expand_env_vars(self, obj: Any) -> None:
        """Recursively expand ${VAR} environment variables."""
        if isinstance(obj, dict):
            for key, value in obj.items():
                if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                    obj[key] = os.environ.get(value[2:-1], "")
                elif isinstance(value, (dict, list)):
                    self._expand_env_vars(value)
        elif isinstance(obj, list):
            for i, item in enumerate(obj):
                if isinstance(item, str) and item.startswith("${") and item.endswith("}"):
                    obj[i] = os.environ.get(item[2:-1], "")
                else:
                    self._expand_env_vars(item)

    @staticmethod
    def _as_number(section: str, key: str, value: Any) -> float:
        # Env-expanded values arrive as strings
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{section}.{key} must be a number")
        return float(value)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Configuration section '{name}' must be a mapping")
        return section

    def _validate(self) -> None:
        """Validate configuration."""
        delays = self._section("delays")
        if "time_scale" in delays:
            time_scale = self._as_number("delays", "time_scale", delays["time_scale"])
            if time_scale < 0:
                raise ValueError("delays.time_scale must be >= 0")
            delays["time_scale"] = time_scale

        errors = self._section("errors")
        if "probability" in errors:
            probability = self._as_number("errors", "probability", errors["probability"])
            if not 0.0 <= probability <= 1.0:
                raise ValueError("errors.probability must be between 0 and 1")
            errors["probability"] = probability

        responses = self._section("responses")
        if responses.get("canned_dir") and not Path(responses["canned_dir"]).is_dir():
            raise ValueError(
                f"responses.canned_dir is not a directory: {responses['canned_dir']}"
            )

        logging_config = self._section("logging")
        level = logging_config.get("level")
        if level is not None and str(level).upper() not in LOG_LEVELS:
            raise ValueError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )

    @property
    def delays(self) -> Dict[str, Any]:
        """Get delay configuration."""
        delays = dict(self._config.get("delays") or {})
        delays.setdefault("time_scale", 1.0)
        return delays

    @property
    def errors(self) -> Dict[str, Any]:
        """Get error injection configuration."""
        errors = dict(self._config.get("errors") or {})
        errors.setdefault("probability", 0.10)
        return errors

    @property
    def responses(self) -> Dict[str, Any]:
        """Get canned response configuration."""
        return self._config.get("responses") or {}

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        logging_config = dict(self._config.get("logging") or {})
        logging_config.setdefault("level", "WARNING")
        return logging_config
