#!/usr/bin/env python3
"""Render every notification template to disk for visual review.

No transports are contacted; this only exercises the template renderer.

Usage:
    # Write previews to ./previews
    python scripts/preview_templates.py

    # Custom output directory and recipient name
    python scripts/preview_templates.py --output /tmp/previews --name "Ann Green"
"""

import argparse
import sys
from pathlib import Path

from notify_dispatch.notifications.models import (
    CashoutCompleted,
    CashoutFailed,
    CashoutInitiated,
    SubmissionApproved,
    SubmissionRejected,
)
from notify_dispatch.notifications.templates import render_event


def sample_events(name: str, email: str):
    return [
        SubmissionApproved(email, name, 50),
        SubmissionRejected(email, name, "The bin location was not visible in the video"),
        CashoutInitiated(email, name, 1234.5, "PayPal"),
        CashoutCompleted(email, name, 1234.5, "PayPal"),
        CashoutFailed(email, name, 0, "Payout account could not be verified"),
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Render notification templates to files")
    parser.add_argument("--output", type=Path, default=Path("previews"))
    parser.add_argument("--name", default="Sample User")
    parser.add_argument("--email", default="sample.user@example.com")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    for event in sample_events(args.name, args.email):
        rendered = render_event(event)
        stem = args.output / event.kind.value
        stem.with_suffix(".html").write_text(rendered.body, encoding="utf-8")
        stem.with_suffix(".txt").write_text(
            f"Subject: {rendered.subject}\n\n{rendered.text_body}", encoding="utf-8"
        )
        print(f"✓ {event.kind.value}: {rendered.subject}")

    print(f"\nPreviews written to {args.output.resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
