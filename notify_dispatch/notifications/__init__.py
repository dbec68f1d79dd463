"""Notification dispatch over email and SMS.

This module provides the complete notification pipeline:
- NotificationDispatcher: Low-level sends and one operation per business event
- DeliveryResult: Never-raising outcome of a single send
- TemplateRenderer: Jinja2-based subject/body rendering
- Transports: SMTP and Twilio providers plus the transport initializer
- Payloads: Event payload types and template context builders
"""

from .models import (
    CashoutCompleted,
    CashoutFailed,
    CashoutInitiated,
    Channel,
    DeliveryResult,
    DeliveryStatus,
    EmailDeliveryError,
    EmailMessageSpec,
    EventKind,
    EventPayload,
    NotificationError,
    NotificationRequest,
    NotificationTemplateError,
    RenderedMessage,
    SmsDeliveryError,
    SmsMessageSpec,
    SubmissionApproved,
    SubmissionRejected,
    TransportError,
)
from .payloads import build_event_context, format_amount
from .service import NotificationDispatcher
from .templates import TemplateRenderer, render_event
from .transports import (
    EmailTransport,
    SmsTransport,
    SMTPEmailTransport,
    TransportContext,
    TwilioSmsTransport,
    build_transport_context,
)

__all__ = [
    # Main service
    "NotificationDispatcher",
    # Results and requests
    "Channel",
    "DeliveryResult",
    "DeliveryStatus",
    "NotificationRequest",
    "RenderedMessage",
    "EmailMessageSpec",
    "SmsMessageSpec",
    # Event payloads
    "EventKind",
    "EventPayload",
    "SubmissionApproved",
    "SubmissionRejected",
    "CashoutInitiated",
    "CashoutCompleted",
    "CashoutFailed",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "TransportError",
    "EmailDeliveryError",
    "SmsDeliveryError",
    # Components
    "TemplateRenderer",
    "EmailTransport",
    "SmsTransport",
    "SMTPEmailTransport",
    "TwilioSmsTransport",
    "TransportContext",
    # Utilities
    "build_transport_context",
    "build_event_context",
    "format_amount",
    "render_event",
]
