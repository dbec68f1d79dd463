"""Configuration schema models using Pydantic.

All models are frozen: transport settings are read once at process start and
never change afterwards.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_SMTP_PORT = 587


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SmtpConfig(BaseModel):
    """Settings for the outgoing mail server.

    Every field is optional. Missing values are not rejected here; they
    surface as delivery failures when a message is actually sent.
    """

    host: Optional[str] = Field(None, description="SMTP server hostname")
    port: int = Field(DEFAULT_SMTP_PORT, ge=1, le=65535, description="SMTP server port")
    secure: bool = Field(False, description="Use implicit TLS (SMTP over SSL)")
    user: Optional[str] = Field(None, description="SMTP authentication username")
    password: Optional[str] = Field(None, description="SMTP authentication password")
    from_address: Optional[str] = Field(None, description="Sender address for all emails")

    model_config = {"frozen": True}

    @property
    def has_credentials(self) -> bool:
        """Whether both halves of the SMTP login are present."""
        return bool(self.user and self.password)


class TwilioConfig(BaseModel):
    """Settings for the Twilio SMS gateway."""

    account_sid: Optional[str] = Field(None, description="Twilio account SID")
    auth_token: Optional[str] = Field(None, description="Twilio auth token")
    from_number: Optional[str] = Field(None, description="Sender phone number")

    model_config = {"frozen": True}

    @property
    def is_complete(self) -> bool:
        """SMS is only available when both account SID and auth token are set."""
        return bool(self.account_sid and self.auth_token)


class TransportConfig(BaseModel):
    """Root configuration for both delivery channels."""

    smtp: SmtpConfig = Field(default_factory=SmtpConfig)
    twilio: TwilioConfig = Field(default_factory=TwilioConfig)

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )
    environment: str = Field("local", description="Environment label added to every record")

    model_config = {"use_enum_values": True, "frozen": True}

    @field_validator("environment")
    @classmethod
    def strip_environment(cls, v: str) -> str:
        """Strip whitespace and fall back to 'local' for blank labels."""
        return v.strip() or "local"
