"""Quotation numbering, totals and currency formatting"""

import secrets
import string
from datetime import datetime, timezone
from typing import Optional

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "CNY": "¥",
}

_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_quotation_number(prefix: str = "Q") -> str:
    """e.g. QDS-20261019-7K2M"""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(4))
    return f"{prefix}-{stamp}-{suffix}"


def calculate_quotation_totals(
    items: list[dict],
    shipping_cost: Optional[float] = None,
    tax_rate: Optional[float] = None,
    discount_amount: Optional[float] = None,
) -> dict[str, float]:
    """
    Totals for a quotation.

    Tax applies to the discounted subtotal; shipping is not taxed.
    """
    subtotal = round(sum(item["totalPrice"] for item in items), 2)
    discount = round(discount_amount or 0, 2)
    shipping = round(shipping_cost or 0, 2)
    tax = round((subtotal - discount) * (tax_rate or 0), 2)
    total = round(subtotal - discount + shipping + tax, 2)

    return {
        "subtotal": subtotal,
        "discount": discount,
        "shipping": shipping,
        "tax": tax,
        "total": total,
    }


def format_currency(amount: Optional[float], currency: str = "USD") -> str:
    """$1,234.56 style formatting; unknown currencies are shown with their code"""
    value = amount or 0
    symbol = CURRENCY_SYMBOLS.get(currency)
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.2f}"
    if symbol:
        return f"{sign}{symbol}{formatted}"
    return f"{sign}{currency} {formatted}"
