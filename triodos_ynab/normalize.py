"""
Turn raw Triodos records into canonical transactions.

Two raw shapes exist: the labeled fields of the transaction detail view in
internet banking, and the rows of a CSV export. Both reduce to the same
schema.Transaction.
"""


import csv
from triodos_ynab import iban, schema
from triodos_ynab.errors import MalformedRowError, MissingFieldError
from triodos_ynab.parse import parse_amount, parse_date


# Labels of the detail view.
TRANSACTION_DATE = 'Transactiedatum'
AMOUNT_IN = 'Bedrag bij'
AMOUNT_OUT = 'Bedrag af'
DESCRIPTION = 'Omschrijving'
NAME = 'Naam'
COUNTER_ACCOUNT = 'Tegenrekening'

DETAIL_FIELDS = (
    TRANSACTION_DATE,
    AMOUNT_IN,
    AMOUNT_OUT,
    DESCRIPTION,
    NAME,
    COUNTER_ACCOUNT,
)

# The portal leaves out the unused amount label, and name and counter account
# for transactions without a counterparty (bank costs, interest).
_REQUIRED_FIELDS = (TRANSACTION_DATE, DESCRIPTION)
_AMOUNT_FIELDS = (AMOUNT_IN, AMOUNT_OUT)

CSV_COLUMNS = (
    'date',
    'account_number',
    'amount',
    'type_marker',
    'payee_name',
    'payee_account_number',
    'code',
    'description',
)
CREDIT_MARKER = 'Credit'

MAX_DESCRIPTION = 100


def _missing_fields(record):
    missing = [f for f in _REQUIRED_FIELDS if f not in record]
    if not any(f in record for f in _AMOUNT_FIELDS):
        missing.append(' or '.join(_AMOUNT_FIELDS))
    return missing


def detail_record(labels, values):
    """
    Pair the labels and values scraped from a detail view into a raw detail
    record holding exactly the DETAIL_FIELDS that were present.

    Raises:
        MissingFieldError, MalformedRowError
    """
    if len(labels) != len(values):
        raise MalformedRowError(
            f'{len(labels)} labels but {len(values)} values in detail view')
    scraped = {label.strip().rstrip(':').strip(): (value or '').strip()
               for label, value in zip(labels, values)}
    record = {f: scraped[f] for f in DETAIL_FIELDS if f in scraped}
    missing = _missing_fields(record)
    if missing:
        raise MissingFieldError(missing)
    return record


def clean_description(text):
    """Keep what precedes the first backslash, trimmed, at most 100 chars."""
    return (text or '').split('\\')[0].strip()[:MAX_DESCRIPTION]


def _validated_account_number(value):
    parsed = iban.parse(value)
    return parsed.formatted if parsed is not None else None


def normalize_detail(record):
    """
    Normalize a raw detail record. When both amount fields are filled the
    transaction counts as inflow.

    Raises:
        MissingFieldError, ValueError
    """
    missing = _missing_fields(record)
    if missing:
        raise MissingFieldError(missing)
    amount_in = record.get(AMOUNT_IN, '')
    amount_out = record.get(AMOUNT_OUT, '')
    kind = schema.INFLOW if amount_in else schema.OUTFLOW
    description = clean_description(record[DESCRIPTION])
    return schema.Transaction(
        date=parse_date(record[TRANSACTION_DATE]),
        amount=parse_amount(amount_in or amount_out),
        type=kind,
        payee=record.get(NAME) or description,
        description=description,
        account_number=_validated_account_number(record.get(COUNTER_ACCOUNT)),
    )


def normalize_csv_row(row):
    """
    Normalize one row of a CSV export. The export carries counterparty
    account numbers verbatim, so they are only reformatted.

    Raises:
        MalformedRowError, ValueError
    """
    if len(row) != len(CSV_COLUMNS):
        raise MalformedRowError(
            f'expected {len(CSV_COLUMNS)} columns, got {len(row)}: {row!r}')
    date, _, amount, marker, payee, payee_account, _, description = row
    description = clean_description(description)
    return schema.Transaction(
        date=parse_date(date),
        amount=parse_amount(amount),
        type=schema.INFLOW if marker == CREDIT_MARKER else schema.OUTFLOW,
        payee=payee.strip() or description,
        description=description,
        account_number=iban.print_format(payee_account) if payee_account.strip() else None,
    )


def read_csv(fileobj):
    """Normalize every non-blank row of a Triodos CSV export."""
    return [normalize_csv_row(row) for row in csv.reader(fileobj) if row]
