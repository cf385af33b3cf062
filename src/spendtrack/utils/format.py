"""Currency formatting and amount input parsing."""

from __future__ import annotations

import math

from ..errors import ValidationError

# fr-FR groups thousands with a narrow no-break space and puts the symbol after a no-break space.
_THOUSANDS_SEP = "\u202f"
_CURRENCY_SUFFIX = "\u00a0€"


def format_eur(value: float) -> str:
    """Format ``value`` the way fr-FR renders euros, e.g. ``1 234,50 €``.

    Non-finite inputs render as zero.
    """
    amount = value if isinstance(value, (int, float)) and math.isfinite(value) else 0.0
    sign = "-" if amount < 0 else ""
    whole, cents = f"{abs(amount):,.2f}".split(".")
    whole = whole.replace(",", _THOUSANDS_SEP)
    return f"{sign}{whole},{cents}{_CURRENCY_SUFFIX}"


def parse_amount_input(raw: str | float | int) -> float:
    """Parse user-entered amounts, accepting ``,`` as the decimal separator."""

    if isinstance(raw, bool):
        raise ValidationError("Enter a valid amount.")
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError as exc:
            raise ValidationError("Enter a valid amount.") from exc
    text = str(raw).strip().replace(",", ".")
    if not text:
        raise ValidationError("Enter a valid amount.")
    try:
        return float(text)
    except ValueError as exc:
        raise ValidationError(f"Enter a valid amount, got {raw!r}.") from exc
