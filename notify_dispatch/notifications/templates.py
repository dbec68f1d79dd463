"""Template rendering for notifications using Jinja2.

Each business event maps to a fixed subject line, an HTML body and a
plain-text body. Rendering is direct substitution with strict undefined
checking so a missing field fails loudly instead of producing a blank.
"""

import logging
from functools import lru_cache
from typing import Dict, Mapping

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from .models import EventKind, EventPayload, NotificationTemplateError, RenderedMessage
from .payloads import build_event_context

logger = logging.getLogger(__name__)

SUBJECT_TEMPLATES: Dict[EventKind, str] = {
    EventKind.SUBMISSION_APPROVED: (
        "Your Video Submission Has Been Approved! You earned {{ points }} points \U0001F389"
    ),
    EventKind.SUBMISSION_REJECTED: "Video Submission Update: {{ reason }}",
    EventKind.CASHOUT_INITIATED: (
        "Cash-out Request Initiated: ${{ amount_display }} via {{ method }} (Processing)"
    ),
    EventKind.CASHOUT_COMPLETED: (
        "Cash-out Completed Successfully! ${{ amount_display }} via {{ method }} \U0001F4B0"
    ),
    EventKind.CASHOUT_FAILED: "Cash-out Request Failed: ${{ amount_display }} ({{ reason }})",
}


class TemplateRenderer:
    """Renders notification content using Jinja2.

    Body templates live in the ``email_templates`` package directory and
    are named ``<event kind>.html.j2`` and ``<event kind>.txt.j2``. Only the HTML templates are auto-escaped.

    Compiled templates are cached by the Jinja2 environment.
    """

    def __init__(self, template_dir: str = "email_templates"):
        """Initialize template renderer.

        Args:
            template_dir: Directory name within the notifications package
        """
        self.env = Environment(
            loader=PackageLoader("notify_dispatch.notifications", template_dir),
            autoescape=select_autoescape(
                enabled_extensions=("html.j2",),
                default_for_string=False,
                default=False,
            ),
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )
        self._subjects = {
            kind: self.env.from_string(source) for kind, source in SUBJECT_TEMPLATES.items()
        }

        logger.debug(f"Initialized TemplateRenderer with templates from {template_dir}")

    def render(self, kind: EventKind, context: Mapping) -> RenderedMessage:
        """Render subject, HTML body and text body for one event kind.

        Args:
            kind: Event kind selecting the templates
            context: Template variables (see build_event_context)

        Returns:
            RenderedMessage with subject, HTML body and plain-text body

        Raises:
            NotificationTemplateError: If any template fails to render
        """
        kind = EventKind(kind)
        try:
            subject = self._subjects[kind].render(context).strip().replace("\n", " ")
            html_body = self.env.get_template(f"{kind.value}.html.j2").render(context)
            text_body = self.env.get_template(f"{kind.value}.txt.j2").render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed for {kind.value}: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e

        return RenderedMessage(subject=subject, body=html_body, text_body=text_body)

    def render_event(self, event: EventPayload) -> RenderedMessage:
        """Render the content for a business event payload.

        Raises:
            TypeError: If ``event`` is not an event payload
            NotificationTemplateError: If rendering fails
        """
        context = build_event_context(event)
        return self.render(context["kind"], context)


@lru_cache(maxsize=1)
def default_renderer() -> TemplateRenderer:
    """Shared renderer; Jinja2 environments are safe to share across threads."""
    return TemplateRenderer()


def render_event(event: EventPayload) -> RenderedMessage:
    """Render a business event with the shared default renderer."""
    return default_renderer().render_event(event)
