"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

KNOWN_SECTIONS = {
    "channels": {"positions_snapshot", "price_quote", "position_update", "errors", "trade_request"},
    "session": {"identity_header", "suffix_header"},
    "display": {"currency_symbol", "decimal_places"},
    "logging": {"level", "format_json"},
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_unknown_keys(config: dict[str, Any]) -> list[ValidationError]:
        """Reject sections and keys the client does not understand."""
        errors = []

        for section, params in config.items():
            if section not in KNOWN_SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            for key in params:
                if key not in KNOWN_SECTIONS[section]:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=params[key]
                    ))

        return errors

    @staticmethod
    def validate_channel_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate channel names."""
        errors = []

        for name, value in params.items():
            if not isinstance(value, str) or not value.startswith("/"):
                errors.append(ValidationError(
                    field=f"channels.{name}",
                    message="Must be a channel path starting with '/'",
                    value=value
                ))

        # Quotes are broadcast per ticker, so the subscription must be a wildcard
        quote_channel = params.get("price_quote")
        if isinstance(quote_channel, str) and "*" not in quote_channel:
            errors.append(ValidationError(
                field="channels.price_quote",
                message="Must contain a '*' wildcard",
                value=quote_channel
            ))

        return errors

    @staticmethod
    def validate_session_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate handshake header names."""
        errors = []

        for name, value in params.items():
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field=f"session.{name}",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_display_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate display parameters."""
        errors = []

        if "decimal_places" in params:
            value = params["decimal_places"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="display.decimal_places",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "currency_symbol" in params:
            value = params["currency_symbol"]
            if not isinstance(value, str):
                errors.append(ValidationError(
                    field="display.currency_symbol",
                    message="Must be a string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {sorted(LOG_LEVELS)}",
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
        errors = ConfigValidator.validate_unknown_keys(config)
        if errors:
            return errors

        if "channels" in config:
            errors.extend(ConfigValidator.validate_channel_params(config["channels"]))

        if "session" in config:
            errors.extend(ConfigValidator.validate_session_params(config["session"]))

        if "display" in config:
            errors.extend(ConfigValidator.validate_display_params(config["display"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
