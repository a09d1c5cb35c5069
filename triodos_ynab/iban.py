"""IBAN validation and formatting on top of schwifty."""


import re
from schwifty import IBAN
from schwifty.exceptions import SchwiftyException


_NON_ALNUM = re.compile(r'[^0-9A-Za-z]')


def parse(value):
    """Return the schwifty IBAN for value, or None if it does not validate."""
    if not value:
        return None
    try:
        return IBAN(value)
    except SchwiftyException:
        return None


def is_valid(value):
    return parse(value) is not None


def electronic_format(value):
    """Strip separators and upper-case, e.g. 'NL91ABNA0417164300'."""
    return _NON_ALNUM.sub('', value).upper()


def print_format(value):
    """
    Group the electronic form in blocks of four, e.g.
    'NL91 ABNA 0417 1643 00'. No validation is done here.
    """
    compact = electronic_format(value)
    return ' '.join(compact[i:i + 4] for i in range(0, len(compact), 4))
