"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    BridgeConfig,
    EndpointParams,
    InterpreterParams,
    LoggingParams,
    PublisherParams,
    ReconnectParams,
    TradingParams,
    get_default_config,
)
from .validation import ConfigValidator

_SECTION_TYPES = {
    "endpoint": EndpointParams,
    "reconnect": ReconnectParams,
    "trading": TradingParams,
    "publisher": PublisherParams,
    "interpreter": InterpreterParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_path: Path
    defaults: BridgeConfig

    @classmethod
    def create(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config" / "bridge.yaml"

        return cls(
            config_path=Path(config_path),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML config file, if present."""
        if not self.config_path.exists():
            return {}

        with open(self.config_path) as f:
            file_config = yaml.safe_load(f)

        if not file_config:
            return {}

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {self.config_path}"
            )

        return file_config.get("bridge", file_config)  # type: ignore[no-any-return]

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides, e.g. command line flags (highest priority)
        2. YAML config file
        3. Built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> BridgeConfig:
        """Merge, validate and build the typed bridge configuration."""
        return build_bridge_config(self.merge_config(overrides))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_bridge_config(config: dict[str, Any]) -> BridgeConfig:
    """
    Build a BridgeConfig from a merged configuration dictionary.

    Raises:
        ConfigurationError: If any section or field fails validation
    """
    errors = ConfigValidator.validate_config(config)
    if errors:
        details = "; ".join(f"{err.field}: {err.message} (got: {err.value!r})" for err in errors)
        raise ConfigurationError(f"Invalid bridge configuration: {details}", errors=errors)

    sections = {}
    for section_name, section_type in _SECTION_TYPES.items():
        known = {f.name for f in fields(section_type)}
        values = config.get(section_name) or {}
        sections[section_name] = section_type(
            **{key: value for key, value in values.items() if key in known}
        )

    return BridgeConfig(**sections)
