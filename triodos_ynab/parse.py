"""Parse the Dutch-formatted amounts and dates shown by Triodos."""


import re
from datetime import date


# Triodos shows two fractional digits, YNAB counts in thousandths.
AMOUNT_SCALE = 10

_NON_DIGITS = re.compile(r'[^0-9]')


def parse_amount(text):
    """
    Turn an amount like "1.234,56" into YNAB minor units (1234560).

    Every non-digit is dropped, so the decimal comma and thousands separators
    vanish and the two fractional digits end up folded into the integer.
    Empty input gives None; input without digits gives 0.
    """
    if not text:
        return None
    digits = _NON_DIGITS.sub('', text)
    if digits == '':
        return 0
    return abs(int(digits)) * AMOUNT_SCALE


def parse_date(text):
    """Parse DD-MM-YYYY into a date."""
    try:
        day, month, year = map(int, text.strip().split('-'))
    except (AttributeError, ValueError):
        raise ValueError(f'expected a DD-MM-YYYY date, got {text!r}') from None
    return date(year, month, day)
