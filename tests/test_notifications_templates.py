"""Unit tests for notification template rendering.

Tests the TemplateRenderer for:
- Subject, HTML and text rendering for every event kind
- Verbatim substitution of every payload value
- HTML auto-escaping (bodies only)
- Strict undefined variable detection
"""

import pytest

from notify_dispatch.notifications.models import (
    CashoutCompleted,
    CashoutFailed,
    CashoutInitiated,
    EventKind,
    NotificationTemplateError,
    RenderedMessage,
    SubmissionApproved,
    SubmissionRejected,
)
from notify_dispatch.notifications.templates import (
    SUBJECT_TEMPLATES,
    TemplateRenderer,
    default_renderer,
    render_event,
)


@pytest.fixture(scope="module")
def renderer():
    return TemplateRenderer()


ALL_EVENTS = [
    SubmissionApproved("ann@example.com", "Ann Green", 50),
    SubmissionRejected("ann@example.com", "Ann Green", "Bin not visible in frame"),
    CashoutInitiated("bo@example.com", "Bo Rivers", 25, "PayPal"),
    CashoutCompleted("bo@example.com", "Bo Rivers", 1234.5, "Stripe"),
    CashoutFailed("bo@example.com", "Bo Rivers", 0, "Account suspended"),
]


def test_every_event_kind_has_a_subject():
    assert set(SUBJECT_TEMPLATES) == set(EventKind)


@pytest.mark.parametrize("event", ALL_EVENTS, ids=lambda e: e.kind.value)
def test_render_returns_all_parts(renderer, event):
    rendered = renderer.render_event(event)

    assert isinstance(rendered, RenderedMessage)
    assert rendered.subject
    assert "\n" not in rendered.subject
    assert "<!DOCTYPE html>" in rendered.body
    assert "The Eco-Points Team" in rendered.body
    assert "The Eco-Points Team" in rendered.text_body
    assert "<" not in rendered.text_body


@pytest.mark.parametrize("event", ALL_EVENTS, ids=lambda e: e.kind.value)
def test_user_name_appears_in_both_bodies(renderer, event):
    rendered = renderer.render_event(event)

    assert event.user_name in rendered.body
    assert event.user_name in rendered.text_body


def test_submission_approved(renderer):
    rendered = renderer.render_event(ALL_EVENTS[0])

    assert rendered.subject.startswith("Your Video Submission Has Been Approved!")
    assert "50 points" in rendered.subject
    assert "Congratulations, Ann Green!" in rendered.body
    assert "<strong>50 points</strong>" in rendered.body


def test_submission_rejected(renderer):
    rendered = renderer.render_event(ALL_EVENTS[1])

    assert rendered.subject == "Video Submission Update: Bin not visible in frame"
    assert "Reason for Rejection:" in rendered.body
    assert "<p>Bin not visible in frame</p>" in rendered.body
    assert "Reason for rejection: Bin not visible in frame" in rendered.text_body


def test_cashout_initiated(renderer):
    rendered = renderer.render_event(ALL_EVENTS[2])

    assert rendered.subject == "Cash-out Request Initiated: $25.00 via PayPal (Processing)"
    assert "<strong>$25.00</strong>" in rendered.body
    assert "PayPal" in rendered.body
    assert "<strong>Status:</strong> Processing" in rendered.body
    assert "Status: Processing" in rendered.text_body


def test_cashout_completed(renderer):
    rendered = renderer.render_event(ALL_EVENTS[3])

    assert "$1234.50" in rendered.subject
    assert "Stripe" in rendered.subject
    assert "<strong>Amount:</strong> $1234.50" in rendered.body
    assert "<strong>Status:</strong> Completed" in rendered.body
    assert "Amount: $1234.50" in rendered.text_body


def test_cashout_failed(renderer):
    rendered = renderer.render_event(ALL_EVENTS[4])

    assert rendered.subject == "Cash-out Request Failed: $0.00 (Account suspended)"
    assert "<strong>$0.00</strong>" in rendered.body
    assert "Account suspended" in rendered.body
    assert "points have been refunded" in rendered.body
    assert "points have been refunded" in rendered.text_body


def test_rendering_is_deterministic(renderer):
    event = ALL_EVENTS[3]

    assert renderer.render_event(event) == renderer.render_event(event)


def test_html_body_escapes_values_but_subject_and_text_do_not(renderer):
    event = SubmissionRejected("x@example.com", "Tom & Jerry", "<script>alert(1)</script>")

    rendered = renderer.render_event(event)

    assert "Tom &amp; Jerry" in rendered.body
    assert "<script>" not in rendered.body
    assert "&lt;script&gt;" in rendered.body
    assert "Tom & Jerry" in rendered.text_body
    assert rendered.subject == "Video Submission Update: <script>alert(1)</script>"


def test_reason_is_verbatim_in_text_and_escaped_in_html(renderer):
    event = SubmissionRejected("x@example.com", "Ann", "O'Brien & Sons")

    rendered = renderer.render_event(event)

    assert "O'Brien & Sons" in rendered.text_body
    assert "O'Brien & Sons" in rendered.subject
    assert "O'Brien & Sons" not in rendered.body
    assert "&amp; Sons" in rendered.body


def test_missing_variable_raises_template_error(renderer):
    with pytest.raises(NotificationTemplateError, match="cashout_completed"):
        renderer.render(EventKind.CASHOUT_COMPLETED, {"user_name": "Bo", "method": "PayPal"})


def test_render_accepts_kind_value_string(renderer):
    rendered = renderer.render(
        "submission_approved", {"user_name": "Ann", "points": 7, "user_email": "a@b.com"}
    )

    assert "7 points" in rendered.subject


def test_unknown_kind_raises_value_error(renderer):
    with pytest.raises(ValueError):
        renderer.render("submission_archived", {})


def test_module_level_render_event_uses_shared_renderer():
    assert default_renderer() is default_renderer()

    rendered = render_event(ALL_EVENTS[0])

    assert rendered == default_renderer().render_event(ALL_EVENTS[0])
