"""Shared fixtures for the notification dispatcher tests."""

from unittest.mock import MagicMock, Mock

import pytest

from notify_dispatch.config.models import SmtpConfig, TransportConfig, TwilioConfig
from notify_dispatch.logging.context import clear_log_context
from notify_dispatch.notifications.service import NotificationDispatcher
from notify_dispatch.notifications.transports import (
    EmailTransport,
    SmsTransport,
    TransportContext,
)


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def smtp_config():
    """SMTP settings with authentication."""
    return SmtpConfig(
        host="smtp.example.com",
        port=587,
        secure=False,
        user="mailer@example.com",
        password="secret123",
        from_address="Eco-Points <noreply@example.com>",
    )


@pytest.fixture
def twilio_config():
    """Complete Twilio settings."""
    return TwilioConfig(
        account_sid="AC123",
        auth_token="token456",
        from_number="+15550001111",
    )


@pytest.fixture
def transport_config(smtp_config):
    """SMTP configured, Twilio left unset."""
    return TransportConfig(smtp=smtp_config)


@pytest.fixture
def full_transport_config(smtp_config, twilio_config):
    """Both channels configured."""
    return TransportConfig(smtp=smtp_config, twilio=twilio_config)


@pytest.fixture
def email_transport():
    """Mock email transport that succeeds by default."""
    return Mock(spec=EmailTransport)


@pytest.fixture
def sms_transport():
    """Mock SMS transport that succeeds by default."""
    return Mock(spec=SmsTransport)


@pytest.fixture
def dispatcher(email_transport, transport_config):
    """Dispatcher with a mock email transport and no SMS transport."""
    context = TransportContext(email=email_transport, sms=None, config=transport_config)
    return NotificationDispatcher(context)


@pytest.fixture
def sms_dispatcher(email_transport, sms_transport, full_transport_config):
    """Dispatcher with mock transports on both channels."""
    context = TransportContext(
        email=email_transport, sms=sms_transport, config=full_transport_config
    )
    return NotificationDispatcher(context)


@pytest.fixture
def mock_smtp():
    """MagicMock standing in for an smtplib.SMTP connection."""
    return MagicMock()
