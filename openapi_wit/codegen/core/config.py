"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields

from ...logging_config import get_logger

logger = get_logger(__name__)


ERROR_MODEL_STYLES = ("string", "record", "variant")

# Option names used by the host generator framework
OPTION_ALIASES = {
    "packageName": "package_name",
    "projectName": "project_name",
    "errorModel": "error_model",
    "interfaceName": "interface_name",
    "packageVersion": "package_version",
    "strictMode": "strict_mode",
}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for the WIT generator."""

    # Output settings
    output_dir: Optional[str] = None
    project_name: str = "openapi-client"
    package_name: str = "openapi"
    package_version: Optional[str] = None
    interface_name: str = "api"

    # Error model style: string, record or variant
    error_model: str = "variant"

    # Translation behavior
    strict_mode: bool = False
    detect_cycles: bool = True

    # Code style settings
    indent_size: int = 4

    # Additional output
    add_comments: bool = True
    generate_readme: bool = True

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the configuration into a JSON-compatible dictionary."""
        config_dict = {
            f.name: getattr(self, f.name) for f in fields(self) if f.name != "custom"
        }
        config_dict.update(self.custom)
        return config_dict


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "package_name": "openapi",
            "project_name": "openapi-client",
            "interface_name": "api",
            "error_model": "variant",
            "strict_mode": False,
            "detect_cycles": True,
            "add_comments": True,
            "generate_readme": True,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = self._defaults.copy()

        if config_file:
            base_config.update(_normalize_keys(self._load_config_file(config_file)))

        if custom_config:
            base_config.update(_normalize_keys(custom_config))

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        # Deferred import, the wit package imports this module
        from ..wit.naming import validate_package_name

        warnings = []

        if config.error_model not in ERROR_MODEL_STYLES:
            warnings.append(
                f"Invalid error_model: {config.error_model} "
                f"(expected one of {', '.join(ERROR_MODEL_STYLES)})"
            )
        elif config.error_model != "variant":
            warnings.append(
                f"error_model '{config.error_model}' is not synthesized, "
                "the variant error model is used"
            )

        for problem in validate_package_name(config.package_name):
            warnings.append(f"Invalid WIT package name: {problem}")

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        return warnings


def _normalize_keys(config: Dict[str, Any]) -> Dict[str, Any]:
    """Accept the camelCase option names of the host framework."""
    return {OPTION_ALIASES.get(key, key): value for key, value in config.items()}


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
