"""Configuration management for the notification dispatcher."""

from .environment import load_logging_config, load_transport_config
from .exceptions import ConfigurationError
from .models import (
    LogFormat,
    LogLevel,
    LoggingConfig,
    SmtpConfig,
    TransportConfig,
    TwilioConfig,
)

__all__ = [
    # Loader functions
    "load_transport_config",
    "load_logging_config",
    # Configuration models
    "TransportConfig",
    "SmtpConfig",
    "TwilioConfig",
    "LoggingConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
