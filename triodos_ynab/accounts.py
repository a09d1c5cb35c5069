"""Decide which YNAB accounts mirror a Triodos account."""


import logging
from triodos_ynab import iban


logger = logging.getLogger(__name__)

# Triodos' bank code, part of every Triodos IBAN.
TRIODOS_MARKER = 'TRIO'


class AccountMatcher:
    def __init__(self, marker=TRIODOS_MARKER, exclude=()):
        self.marker = marker
        self.exclude = frozenset(iban.electronic_format(x) for x in exclude)

    def canonical_account_number(self, account):
        """
        The note of the account as a compact IBAN, e.g. 'NL12TRIO0123456789'.

        Raises:
            ValueError if the note is not a valid IBAN
        """
        parsed = iban.parse(account.note)
        if parsed is None:
            raise ValueError(f'note of account {account.name!r} is not an IBAN')
        return parsed.compact

    def is_sync_target(self, account):
        note = account.note
        if not note or self.marker not in note or not iban.is_valid(note):
            return False
        number = self.canonical_account_number(account)
        if number in self.exclude:
            logger.info('ignoring excluded account %s', number)
            return False
        return True
