"""Notification dispatcher.

This module provides the NotificationDispatcher class that orchestrates
render -> send -> log for both channels. Sends never raise: every transport
failure is logged and returned as a DeliveryResult, so a failed notification
cannot abort the business operation that triggered it.
"""

import logging
import uuid
from typing import Optional

from notify_dispatch.logging import get_logger
from notify_dispatch.logging.context import log_context

from .models import (
    CashoutCompleted,
    CashoutFailed,
    CashoutInitiated,
    Channel,
    DeliveryResult,
    EmailMessageSpec,
    EventPayload,
    NotificationRequest,
    SmsMessageSpec,
    SubmissionApproved,
    SubmissionRejected,
)
from .templates import TemplateRenderer, default_renderer
from .transports import TransportContext

logger = get_logger(__name__, component="notification")


class NotificationDispatcher:
    """Dispatches notifications over email and SMS.

    Holds an explicitly constructed TransportContext; substitute fake
    transports by building the context directly. The dispatcher keeps no
    per-request state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        transports: TransportContext,
        template_renderer: Optional[TemplateRenderer] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the dispatcher.

        Args:
            transports: Transport handles built by build_transport_context()
            template_renderer: Template renderer (shared default if None)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.transports = transports
        self.template_renderer = template_renderer or default_renderer()
        self.logger = logger_instance or logger

    def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        text_body: Optional[str] = None,
    ) -> DeliveryResult:
        """Send an HTML email from the configured sender address.

        The recipient is not validated here; the transport rejects what it
        cannot deliver.

        Args:
            to: Recipient address
            subject: Subject line
            body: HTML body
            text_body: Optional plain-text alternative

        Returns:
            DeliveryResult with status sent or failed
        """
        request = NotificationRequest(recipient=to, channel=Channel.EMAIL)
        message = EmailMessageSpec(
            from_address=self.transports.config.smtp.from_address,
            to=to,
            subject=subject,
            html=body,
            text=text_body,
        )

        with log_context(channel=request.channel.value, notification_id=_new_notification_id()):
            try:
                self.transports.email.send(message)
            except Exception as e:
                self.logger.error(
                    f"Failed to send email to {to}: {e}",
                    extra={
                        "event": "notification.email.failed",
                        "recipient": to,
                        "error_type": type(e).__name__,
                    },
                )
                return DeliveryResult.failed(request, str(e))

            self.logger.info(
                f"Email sent to {to}: {subject}",
                extra={"event": "notification.email.sent", "recipient": to},
            )
            return DeliveryResult.sent(request)

    def send_sms(self, to: str, body: str) -> DeliveryResult:
        """Send an SMS from the configured Twilio number.

        Returns immediately with status unavailable when SMS was not
        configured at startup; no transport is contacted in that case.

        Args:
            to: Recipient phone number
            body: Message text

        Returns:
            DeliveryResult with status sent, failed or unavailable
        """
        request = NotificationRequest(recipient=to, channel=Channel.SMS)

        with log_context(channel=request.channel.value, notification_id=_new_notification_id()):
            sms = self.transports.sms
            if sms is None:
                self.logger.warning(
                    "Twilio client not initialized, SMS not sent",
                    extra={"event": "notification.sms.unavailable", "recipient": to},
                )
                return DeliveryResult.unavailable(request, "SMS transport not configured")

            message = SmsMessageSpec(
                body=body,
                from_number=self.transports.config.twilio.from_number,
                to=to,
            )
            try:
                sms.send(message)
            except Exception as e:
                self.logger.error(
                    f"Failed to send SMS to {to}: {e}",
                    extra={
                        "event": "notification.sms.failed",
                        "recipient": to,
                        "error_type": type(e).__name__,
                    },
                )
                return DeliveryResult.failed(request, str(e))

            self.logger.info(
                f"SMS sent to {to}",
                extra={"event": "notification.sms.sent", "recipient": to},
            )
            return DeliveryResult.sent(request)

    def notify(self, event: EventPayload) -> DeliveryResult:
        """Render and email the notification for any business event payload.

        Rendering errors propagate; delivery errors are returned as a result.
        """
        rendered = self.template_renderer.render_event(event)
        return self.send_email(
            event.user_email,
            rendered.subject,
            rendered.body,
            text_body=rendered.text_body,
        )

    def notify_submission_approved(
        self, user_email: str, user_name: str, points: int
    ) -> DeliveryResult:
        """Tell a user their video submission was approved."""
        return self.notify(SubmissionApproved(user_email, user_name, points))

    def notify_submission_rejected(
        self, user_email: str, user_name: str, reason: str
    ) -> DeliveryResult:
        """Tell a user their video submission was rejected, and why."""
        return self.notify(SubmissionRejected(user_email, user_name, reason))

    def notify_cashout_initiated(
        self, user_email: str, user_name: str, amount: float, method: str
    ) -> DeliveryResult:
        return self.notify(CashoutInitiated(user_email, user_name, amount, method))

    def notify_cashout_completed(
        self, user_email: str, user_name: str, amount: float, method: str
    ) -> DeliveryResult:
        return self.notify(CashoutCompleted(user_email, user_name, amount, method))

    def notify_cashout_failed(
        self, user_email: str, user_name: str, amount: float, reason: str
    ) -> DeliveryResult:
        """Tell a user their cash-out failed; the email notes the points refund."""
        return self.notify(CashoutFailed(user_email, user_name, amount, reason))


def _new_notification_id() -> str:
    return uuid.uuid4().hex[:12]
