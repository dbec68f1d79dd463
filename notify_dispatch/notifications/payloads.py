"""Payload resolution for notification templates.

Turns event payloads into the flat context dictionaries consumed by the
Jinja2 templates.
"""

from dataclasses import asdict, is_dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

from .models import EventKind, EventPayload

_CENTS = Decimal("0.01")


def format_amount(amount: Union[int, float, Decimal]) -> str:
    """Format a currency amount with exactly two decimal places.

    Rounds half-up on the decimal representation, so ``2.675`` becomes
    ``"2.68"`` rather than the binary-float ``"2.67"``.

    Examples:
        >>> format_amount(0)
        '0.00'
        >>> format_amount(1234.5)
        '1234.50'
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise TypeError(f"amount must be a number, got {type(amount).__name__}")

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return str(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def build_event_context(event: EventPayload) -> Dict:
    """Build template context from a business event payload.

    Every payload field is copied verbatim. Events carrying an ``amount`` also
    get ``amount_display``, the two-decimal string the templates print.

    Args:
        event: One of the event payload dataclasses

    Returns:
        Dictionary with the payload fields plus:
        - kind: EventKind value
        - amount_display: Formatted amount (cash-out events only)

    Raises:
        TypeError: If ``event`` is not an event payload
    """
    kind = getattr(event, "kind", None)
    if not is_dataclass(event) or not isinstance(kind, EventKind):
        raise TypeError(f"Unsupported notification event: {type(event).__name__}")

    context = asdict(event)
    context["kind"] = kind.value

    if "amount" in context:
        context["amount_display"] = format_amount(context["amount"])

    return context
