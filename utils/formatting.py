# utils/formatting.py
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

from utils.localization import SHORT_DAYS

CURRENCY_SUFFIX = "\u00a0₫"


def format_price(price):
    """
    Vietnamese dong, the way vi-VN renders it: 150000 -> "150.000 ₫".
    Dong has no minor unit, so the amount is rounded half-up to whole dong.
    """
    amount = Decimal(str(price)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(int(amount)):,}".replace(",", ".")
    return f"{sign}{grouped}{CURRENCY_SUFFIX}"


def parse_iso_date(value):
    """"2024-05-01" -> date, None if the text is not a valid calendar date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        return None


def format_day_label(day: date, lang):
    day_names = SHORT_DAYS.get(lang, SHORT_DAYS["vi"])
    return f"{day_names[day.weekday()]}, {day.strftime('%d.%m')}"
