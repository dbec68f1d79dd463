"""Environment variable loading and validation.

Configuration is read through an injected key-value lookup (``os.environ`` by
default) so callers and tests can supply their own mapping.
"""

import os
from typing import List, Mapping, Optional

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import (
    DEFAULT_SMTP_PORT,
    LoggingConfig,
    LogFormat,
    LogLevel,
    SmtpConfig,
    TransportConfig,
    TwilioConfig,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_transport_config(lookup: Optional[Mapping[str, str]] = None) -> TransportConfig:
    """
    Load SMTP and Twilio settings.

    Recognised keys (all optional):
    - SMTP_HOST, SMTP_PORT (default 587), SMTP_SECURE (default false)
    - SMTP_USER, SMTP_PASS, SMTP_FROM
    - TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER

    Absent values are left unset rather than rejected. Only values that are
    present but malformed (a non-numeric port, an unrecognised boolean) are
    reported.

    Args:
        lookup: Key-value source, defaults to the process environment

    Returns:
        Frozen TransportConfig

    Raises:
        ConfigurationError: If any present value is malformed
    """
    source = os.environ if lookup is None else lookup
    errors: List[str] = []

    port = DEFAULT_SMTP_PORT
    port_raw = _get(source, "SMTP_PORT")
    if port_raw is not None:
        try:
            port = int(port_raw)
            if port < 1 or port > 65535:
                errors.append(f"Invalid SMTP_PORT: {port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid SMTP_PORT: '{port_raw}'. Must be a valid integer.")

    secure = False
    secure_raw = _get(source, "SMTP_SECURE")
    if secure_raw is not None:
        normalized = secure_raw.lower()
        if normalized in _TRUE_VALUES:
            secure = True
        elif normalized not in _FALSE_VALUES:
            errors.append(
                f"Invalid SMTP_SECURE: '{secure_raw}'. Use true/false, yes/no, on/off or 1/0."
            )

    if errors:
        raise ConfigurationError(
            "Transport configuration validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Verify SMTP_PORT is a number between 1 and 65535",
                "Set SMTP_SECURE=true only for implicit TLS servers (usually port 465)",
            ],
        )

    try:
        return TransportConfig(
            smtp=SmtpConfig(
                host=_get(source, "SMTP_HOST"),
                port=port,
                secure=secure,
                user=_get(source, "SMTP_USER"),
                password=_get(source, "SMTP_PASS"),
                from_address=_get(source, "SMTP_FROM"),
            ),
            twilio=TwilioConfig(
                account_sid=_get(source, "TWILIO_ACCOUNT_SID"),
                auth_token=_get(source, "TWILIO_AUTH_TOKEN"),
                from_number=_get(source, "TWILIO_PHONE_NUMBER"),
            ),
        )
    except ValidationError as e:
        raise ConfigurationError(
            "Transport configuration validation failed",
            errors=_format_validation_errors(e),
        ) from e


def load_logging_config(lookup: Optional[Mapping[str, str]] = None) -> LoggingConfig:
    """
    Load logging settings from LOG_LEVEL, LOG_FORMAT and ENVIRONMENT.

    Raises:
        ConfigurationError: If the level or format is not recognised
    """
    source = os.environ if lookup is None else lookup
    errors: List[str] = []

    level = (_get(source, "LOG_LEVEL") or LogLevel.INFO.value).upper()
    valid_levels = [member.value for member in LogLevel]
    if level not in valid_levels:
        errors.append(
            f"Invalid LOG_LEVEL: '{level}'. Must be one of: {', '.join(valid_levels)}"
        )

    log_format = (_get(source, "LOG_FORMAT") or LogFormat.KEY_VALUE.value).lower()
    valid_formats = [member.value for member in LogFormat]
    if log_format not in valid_formats:
        errors.append(
            f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
        )

    if errors:
        raise ConfigurationError("Logging configuration validation failed", errors=errors)

    return LoggingConfig(
        level=level,
        format=log_format,
        environment=_get(source, "ENVIRONMENT") or "local",
    )


def _get(source: Mapping[str, str], key: str) -> Optional[str]:
    """Return a stripped value, treating blank strings as unset."""
    value = source.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _format_validation_errors(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"])
        messages.append(f"{field_path}: {item['msg']}")
    return messages
