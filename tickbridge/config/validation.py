"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_endpoint_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate endpoint parameters."""
        errors = []

        if "host" in params:
            value = params["host"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="endpoint.host",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "port" in params:
            value = params["port"]
            if not _is_int(value) or not 1 <= value <= 65535:
                errors.append(ValidationError(
                    field="endpoint.port",
                    message="Must be an integer between 1 and 65535",
                    value=value
                ))

        for name in ("connect_timeout_seconds", "io_timeout_seconds"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"endpoint.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_reconnect_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate reconnect parameters."""
        errors = []

        if "interval_seconds" in params:
            value = params["interval_seconds"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="reconnect.interval_seconds",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "max_attempts" in params:
            value = params["max_attempts"]
            if value is not None and (not _is_int(value) or value <= 0):
                errors.append(ValidationError(
                    field="reconnect.max_attempts",
                    message="Must be a positive integer or null for unlimited",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_trading_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trading parameters."""
        errors = []

        for name in ("symbol", "position_label"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.strip() or " " in value:
                    errors.append(ValidationError(
                        field=f"trading.{name}",
                        message="Must be a non-empty string without spaces",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_publisher_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate publisher parameters."""
        errors = []

        if "log_every" in params:
            value = params["log_every"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="publisher.log_every",
                    message="Must be a positive integer",
                    value=value
                ))

        if "price_digits" in params:
            value = params["price_digits"]
            if not _is_int(value) or not 0 <= value <= 10:
                errors.append(ValidationError(
                    field="publisher.price_digits",
                    message="Must be an integer between 0 and 10",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_interpreter_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate interpreter parameters."""
        errors = []

        if "read_chunk_size" in params:
            value = params["read_chunk_size"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="interpreter.read_chunk_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        validators = {
            "endpoint": ConfigValidator.validate_endpoint_params,
            "reconnect": ConfigValidator.validate_reconnect_params,
            "trading": ConfigValidator.validate_trading_params,
            "publisher": ConfigValidator.validate_publisher_params,
            "interpreter": ConfigValidator.validate_interpreter_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validator in validators.items():
            if section not in config or config[section] is None:
                continue
            if not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
                continue
            errors.extend(validator(config[section]))

        return errors
