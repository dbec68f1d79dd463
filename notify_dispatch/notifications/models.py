"""Data models and exceptions for the notification dispatcher.

Defines the delivery result type, outbound message shapes handed to
transports, and one payload type per business event.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Raised when template rendering fails due to configuration or missing variables."""

    pass


class TransportError(NotificationError):
    """Raised by a transport when a provider rejects or cannot deliver a message."""

    pass


class EmailDeliveryError(TransportError):
    """Raised when SMTP delivery fails."""

    pass


class SmsDeliveryError(TransportError):
    """Raised when the SMS gateway rejects a message."""

    pass


class Channel(str, Enum):
    """Delivery channels."""

    EMAIL = "email"
    SMS = "sms"


class DeliveryStatus(str, Enum):
    """Outcome of a single send attempt."""

    SENT = "sent"
    FAILED = "failed"  # transport raised
    UNAVAILABLE = "unavailable"  # channel not configured


class EventKind(str, Enum):
    """Business events that trigger a notification."""

    SUBMISSION_APPROVED = "submission_approved"
    SUBMISSION_REJECTED = "submission_rejected"
    CASHOUT_INITIATED = "cashout_initiated"
    CASHOUT_COMPLETED = "cashout_completed"
    CASHOUT_FAILED = "cashout_failed"


@dataclass(frozen=True)
class NotificationRequest:
    """A single outbound notification, built per call and discarded afterwards."""

    recipient: str
    channel: Channel


@dataclass(frozen=True)
class DeliveryResult:
    """Result of attempting to deliver one notification.

    Truthiness mirrors success, so a result can stand in for a plain boolean
    (``if dispatcher.send_email(...):``) while still carrying the cause of a
    failure.

    Attributes:
        channel: Channel the message was sent on
        recipient: Email address or phone number
        status: sent, failed or unavailable
        error: Error description when status is not sent
    """

    channel: Channel
    recipient: str
    status: DeliveryStatus
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.SENT

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def sent(cls, request: NotificationRequest) -> "DeliveryResult":
        return cls(channel=request.channel, recipient=request.recipient, status=DeliveryStatus.SENT)

    @classmethod
    def failed(cls, request: NotificationRequest, error: str) -> "DeliveryResult":
        return cls(
            channel=request.channel,
            recipient=request.recipient,
            status=DeliveryStatus.FAILED,
            error=error,
        )

    @classmethod
    def unavailable(cls, request: NotificationRequest, error: str) -> "DeliveryResult":
        return cls(
            channel=request.channel,
            recipient=request.recipient,
            status=DeliveryStatus.UNAVAILABLE,
            error=error,
        )


@dataclass(frozen=True)
class RenderedMessage:
    """Channel-ready content produced by the template renderer.

    ``subject`` is only set for email. For email, ``body`` is HTML and
    ``text_body`` the plain-text alternative.
    """

    body: str
    subject: Optional[str] = None
    text_body: Optional[str] = None


@dataclass(frozen=True)
class EmailMessageSpec:
    """Message handed to an EmailTransport."""

    from_address: Optional[str]
    to: str
    subject: str
    html: str
    text: Optional[str] = None


@dataclass(frozen=True)
class SmsMessageSpec:
    """Message handed to an SmsTransport."""

    body: str
    from_number: Optional[str]
    to: str


@dataclass(frozen=True)
class SubmissionApproved:
    kind: ClassVar[EventKind] = EventKind.SUBMISSION_APPROVED

    user_email: str
    user_name: str
    points: int


@dataclass(frozen=True)
class SubmissionRejected:
    kind: ClassVar[EventKind] = EventKind.SUBMISSION_REJECTED

    user_email: str
    user_name: str
    reason: str


@dataclass(frozen=True)
class CashoutInitiated:
    kind: ClassVar[EventKind] = EventKind.CASHOUT_INITIATED

    user_email: str
    user_name: str
    amount: float
    method: str


@dataclass(frozen=True)
class CashoutCompleted:
    kind: ClassVar[EventKind] = EventKind.CASHOUT_COMPLETED

    user_email: str
    user_name: str
    amount: float
    method: str


@dataclass(frozen=True)
class CashoutFailed:
    kind: ClassVar[EventKind] = EventKind.CASHOUT_FAILED

    user_email: str
    user_name: str
    amount: float
    reason: str


EventPayload = Union[
    SubmissionApproved,
    SubmissionRejected,
    CashoutInitiated,
    CashoutCompleted,
    CashoutFailed,
]
