"""Command-line entry point for sending notifications by hand.

Useful for checking SMTP/Twilio credentials and previewing templates
against a real inbox.
"""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from typing import List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from notify_dispatch.config.environment import load_logging_config, load_transport_config
from notify_dispatch.config.exceptions import ConfigurationError
from notify_dispatch.logging import get_logger
from notify_dispatch.logging.config import configure_logging
from notify_dispatch.notifications.models import DeliveryResult
from notify_dispatch.notifications.service import NotificationDispatcher
from notify_dispatch.notifications.transports import build_transport_context

logger = get_logger(__name__, component="cli")

EXIT_DELIVERED = 0
EXIT_NOT_DELIVERED = 1
EXIT_CONFIG_ERROR = 2


def build_dispatcher(lookup: Optional[Mapping[str, str]] = None) -> NotificationDispatcher:
    """
    Load transport configuration and build a dispatcher.

    Args:
        lookup: Key-value configuration source (process environment if None)

    Raises:
        ConfigurationError: If configuration values are malformed
    """
    config = load_transport_config(lookup)
    return NotificationDispatcher(build_transport_context(config))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notify-dispatch",
        description="Send email and SMS notifications for Eco-Points events",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides LOG_LEVEL)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    email = commands.add_parser("email", help="Send a raw HTML email")
    email.add_argument("--to", required=True)
    email.add_argument("--subject", required=True)
    email.add_argument("--body", required=True, help="HTML body")

    sms = commands.add_parser("sms", help="Send a raw SMS")
    sms.add_argument("--to", required=True, help="Phone number in E.164 format")
    sms.add_argument("--body", required=True)

    approved = commands.add_parser("approved", help="Submission approved email")
    _add_user_args(approved)
    approved.add_argument("--points", type=int, required=True)

    rejected = commands.add_parser("rejected", help="Submission rejected email")
    _add_user_args(rejected)
    rejected.add_argument("--reason", required=True)

    for name, text in (
        ("cashout-initiated", "Cash-out initiated email"),
        ("cashout-completed", "Cash-out completed email"),
    ):
        cashout = commands.add_parser(name, help=text)
        _add_user_args(cashout)
        cashout.add_argument("--amount", type=float, required=True)
        cashout.add_argument("--method", required=True)

    failed = commands.add_parser("cashout-failed", help="Cash-out failed email")
    _add_user_args(failed)
    failed.add_argument("--amount", type=float, required=True)
    failed.add_argument("--reason", required=True)

    return parser


def _add_user_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--email", required=True, help="Recipient email address")
    parser.add_argument("--name", required=True, help="User display name")


def dispatch_command(args: argparse.Namespace, dispatcher: NotificationDispatcher) -> DeliveryResult:
    """Run the notification selected on the command line."""
    command = args.command

    if command == "email":
        return dispatcher.send_email(args.to, args.subject, args.body)
    if command == "sms":
        return dispatcher.send_sms(args.to, args.body)
    if command == "approved":
        return dispatcher.notify_submission_approved(args.email, args.name, args.points)
    if command == "rejected":
        return dispatcher.notify_submission_rejected(args.email, args.name, args.reason)
    if command == "cashout-initiated":
        return dispatcher.notify_cashout_initiated(args.email, args.name, args.amount, args.method)
    if command == "cashout-completed":
        return dispatcher.notify_cashout_completed(args.email, args.name, args.amount, args.method)
    if command == "cashout-failed":
        return dispatcher.notify_cashout_failed(args.email, args.name, args.amount, args.reason)

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 if the notification was delivered, 1 if it failed or the channel is
        unavailable, 2 on configuration or argument errors.
    """
    args = build_parser().parse_args(argv)

    try:
        logging_config = load_logging_config()
        configure_logging(
            level=args.log_level or logging_config.level,
            format_type=logging_config.format,
            environment=logging_config.environment,
        )
        dispatcher = build_dispatcher()
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    recipient = args.to if args.command == "email" else getattr(args, "email", None)
    if recipient is not None:
        try:
            validate_email(recipient, check_deliverability=False)
        except EmailNotValidError as e:
            print(f"Invalid email address '{recipient}': {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

    result = dispatch_command(args, dispatcher)

    logger.info(
        f"Dispatch finished: {result.channel.value} to {result.recipient} -> {result.status.value}",
        extra={"event": "cli.dispatch.finished", "status": result.status.value},
    )
    if not result:
        print(f"Notification not delivered ({result.status.value}): {result.error}", file=sys.stderr)
        return EXIT_NOT_DELIVERED

    return EXIT_DELIVERED


if __name__ == "__main__":
    sys.exit(main())
