"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import copy
import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


DEFAULT_INJECTION_PACKAGE = "github.com/knative/pkg/injection"
DEFAULT_CONTROLLER_PACKAGE = "github.com/knative/pkg/controller"

# Nouns whose plural is spelled like the singular
DEFAULT_PLURAL_EXCEPTIONS = {
    "Endpoints": "Endpoints",
}


@dataclass
class GeneratorConfig:
    """Configuration for injection generators."""

    # Naming tables, keyed by singular type name and by naming key
    plural_exceptions: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PLURAL_EXCEPTIONS)
    )
    naming_exceptions: Dict[str, str] = field(default_factory=dict)

    # Packages generated code registers with
    injection_package: str = DEFAULT_INJECTION_PACKAGE
    controller_package: str = DEFAULT_CONTROLLER_PACKAGE

    # Tag parsing
    warn_unknown_tags: bool = True

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "plural_exceptions": dict(DEFAULT_PLURAL_EXCEPTIONS),
            "naming_exceptions": {},
            "injection_package": DEFAULT_INJECTION_PACKAGE,
            "controller_package": DEFAULT_CONTROLLER_PACKAGE,
            "warn_unknown_tags": True,
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
        base_config = copy.deepcopy(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

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
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

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
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        for table in ("plural_exceptions", "naming_exceptions"):
            value = config_args.get(table)
            if value is not None and not isinstance(value, dict):
                raise ConfigError(f"{table} must be a mapping, got {type(value).__name__}")

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "plural_exceptions": config.plural_exceptions,
            "naming_exceptions": config.naming_exceptions,
            "injection_package": config.injection_package,
            "controller_package": config.controller_package,
            "warn_unknown_tags": config.warn_unknown_tags,
        }
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}")

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        for key, value in config.naming_exceptions.items():
            if "." not in key:
                warnings.append(
                    f"Naming exception key {key!r} is not package-qualified "
                    "and will never match"
                )
            if not value or not value.isidentifier():
                warnings.append(
                    f"Naming exception {key!r} maps to invalid identifier {value!r}"
                )

        for singular, plural in config.plural_exceptions.items():
            if not plural:
                warnings.append(f"Plural exception for {singular!r} is empty")

        for attr in ("injection_package", "controller_package"):
            if not getattr(config, attr):
                warnings.append(f"{attr} must not be empty")

        return warnings


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
