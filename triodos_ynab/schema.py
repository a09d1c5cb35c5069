"""The schema for transactions flowing from Triodos into YNAB."""


from datetime import date
from typing import NamedTuple, Optional


INFLOW = 'inflow'
OUTFLOW = 'outflow'


class Transaction(NamedTuple):
    """
    A bank transaction in canonical form. The amount is a non-negative number
    of YNAB minor units; the direction lives in `type` only.
    """
    date: date
    amount: Optional[int]
    type: str
    payee: str
    description: str
    account_number: Optional[str] = None


class Checkpoint(NamedTuple):
    last_import_date: date
    extra: Optional[dict] = None


class Budget(NamedTuple):
    id: str
    name: str


class LinkedAccount(NamedTuple):
    """A YNAB account whose note is expected to hold an IBAN."""
    id: str
    name: str
    note: Optional[str] = None


class YnabTransaction(NamedTuple):
    account_id: str
    date: str
    payee_name: str
    amount: Optional[int]
    memo: Optional[str]
    import_id: str
    approved: bool = False
    cleared: str = 'cleared'
