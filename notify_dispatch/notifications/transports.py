"""Transport providers and the transport initializer.

Transports are thin wrappers around the mail server and the SMS gateway.
They raise TransportError subclasses on failure; turning failures into
results is the dispatcher's job.

Neither transport talks to the network at construction time. The SMTP
transport opens a fresh connection per message, so a single instance can be
shared between threads.
"""

import smtplib
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Callable, Optional

from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client as TwilioClient

from notify_dispatch.config.models import SmtpConfig, TransportConfig, TwilioConfig
from notify_dispatch.logging import get_logger

from .models import EmailDeliveryError, EmailMessageSpec, SmsDeliveryError, SmsMessageSpec

logger = get_logger(__name__, component="transport")


class EmailTransport(ABC):
    """Delivers a single email or raises EmailDeliveryError."""

    @abstractmethod
    def send(self, message: EmailMessageSpec) -> None:
        raise NotImplementedError


class SmsTransport(ABC):
    """Delivers a single SMS or raises SmsDeliveryError."""

    @abstractmethod
    def send(self, message: SmsMessageSpec) -> None:
        raise NotImplementedError


class SMTPEmailTransport(EmailTransport):
    """Sends email through smtplib.

    ``secure=True`` connects with implicit TLS (SMTP_SSL). Otherwise the
    connection is plain SMTP, upgraded with STARTTLS when the server
    advertises it. Login happens only when both user and password are set.
    """

    def __init__(
        self,
        config: SmtpConfig,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the transport without connecting.

        Args:
            config: SMTP settings
            smtp_factory: Factory for SMTP instances (for mocking)
            smtp_ssl_factory: Factory for SMTP_SSL instances (for mocking)
            timeout: Socket timeout passed to smtplib; library default if None
        """
        self.config = config
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL
        self.timeout = timeout

    def send(self, message: EmailMessageSpec) -> None:
        """Connect, authenticate, deliver and disconnect.

        Raises:
            EmailDeliveryError: If the message could not be delivered
        """
        if not self.config.host:
            raise EmailDeliveryError("SMTP host is not configured (SMTP_HOST)")

        smtp = None
        try:
            smtp = self._connect()
            if not self.config.secure:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    logger.debug("Upgrading connection with STARTTLS")
                    smtp.starttls(context=ssl.create_default_context())

            if self.config.has_credentials:
                logger.debug(f"Authenticating as {self.config.user}")
                smtp.login(self.config.user, self.config.password)

            smtp.send_message(build_email_message(message))
            logger.debug(f"Message handed to {self.config.host} for {message.to}")

        except smtplib.SMTPException as e:
            raise EmailDeliveryError(f"SMTP error during message delivery: {e}") from e
        except OSError as e:
            raise EmailDeliveryError(f"Network error during SMTP connection: {e}") from e
        except Exception as e:
            raise EmailDeliveryError(f"Unexpected error during SMTP delivery: {e}") from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except Exception as e:
                    logger.warning(f"Error closing SMTP connection: {e}")

    def _connect(self):
        host, port = self.config.host, self.config.port
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}

        if self.config.secure:
            logger.debug(f"Connecting to {host}:{port} with implicit TLS")
            return self.smtp_ssl_factory(
                host, port, context=ssl.create_default_context(), **kwargs
            )

        logger.debug(f"Connecting to {host}:{port}")
        return self.smtp_factory(host, port, **kwargs)


class TwilioSmsTransport(SmsTransport):
    """Sends SMS through the Twilio REST API."""

    def __init__(
        self,
        config: TwilioConfig,
        client_factory: Optional[Callable] = None,
    ):
        """Build the Twilio client. No request is made until send().

        Args:
            config: Twilio settings; account SID and auth token must be set
            client_factory: Factory taking (account_sid, auth_token) (for mocking)
        """
        if not config.is_complete:
            raise ValueError("TwilioSmsTransport requires account_sid and auth_token")

        self.config = config
        factory = client_factory or TwilioClient
        self.client = factory(config.account_sid, config.auth_token)

    def send(self, message: SmsMessageSpec) -> None:
        """Create a Twilio message.

        Raises:
            SmsDeliveryError: If Twilio rejects the message or is unreachable
        """
        try:
            created = self.client.messages.create(
                body=message.body,
                from_=message.from_number,
                to=message.to,
            )
        except TwilioRestException as e:
            raise SmsDeliveryError(
                f"Twilio rejected message (HTTP {e.status}, code {e.code}): {e.msg}"
            ) from e
        except Exception as e:
            raise SmsDeliveryError(f"Twilio SMS send failed: {e}") from e

        logger.debug(f"Twilio accepted message {getattr(created, 'sid', None)} for {message.to}")


@dataclass(frozen=True)
class TransportContext:
    """Long-lived transport handles shared by every send.

    ``sms`` is None when Twilio credentials were incomplete at startup.
    """

    email: EmailTransport
    sms: Optional[SmsTransport]
    config: TransportConfig

    @property
    def sms_available(self) -> bool:
        return self.sms is not None


def build_transport_context(
    config: TransportConfig,
    *,
    smtp_factory: Optional[Callable] = None,
    smtp_ssl_factory: Optional[Callable] = None,
    twilio_client_factory: Optional[Callable] = None,
    smtp_timeout: Optional[float] = None,
) -> TransportContext:
    """Build both transports from configuration.

    The email transport is always built and never connects here. The SMS
    transport is only built when both Twilio credentials are present.

    Args:
        config: Loaded transport configuration
        smtp_factory: Optional smtplib.SMTP replacement
        smtp_ssl_factory: Optional smtplib.SMTP_SSL replacement
        twilio_client_factory: Optional twilio Client replacement
        smtp_timeout: Socket timeout for SMTP connections

    Returns:
        Frozen TransportContext
    """
    email = SMTPEmailTransport(
        config.smtp,
        smtp_factory=smtp_factory,
        smtp_ssl_factory=smtp_ssl_factory,
        timeout=smtp_timeout,
    )

    sms: Optional[SmsTransport] = None
    if config.twilio.is_complete:
        sms = TwilioSmsTransport(config.twilio, client_factory=twilio_client_factory)
    else:
        logger.debug(
            "Twilio credentials incomplete, SMS channel disabled",
            extra={"event": "transport.sms.disabled"},
        )

    logger.debug(
        f"Transports initialized (smtp={config.smtp.host}:{config.smtp.port}, "
        f"sms_available={sms is not None})",
        extra={"event": "transport.initialized"},
    )
    return TransportContext(email=email, sms=sms, config=config)


def build_email_message(spec: EmailMessageSpec) -> EmailMessage:
    """Build a MIME message with a plain-text part and an HTML alternative.

    When no plain-text body is given the HTML is sent as the only part.
    """
    message = EmailMessage()
    message["Subject"] = spec.subject
    if spec.from_address:
        message["From"] = spec.from_address
    message["To"] = spec.to

    if spec.text:
        message.set_content(spec.text)
        message.add_alternative(spec.html, subtype="html")
    else:
        message.set_content(spec.html, subtype="html")

    return message
