"""
Deterministic import ids. YNAB drops a transaction whose import id it has
already seen for the account, which is what makes re-running a sync safe.
Any change to the hashed fields or their order must bump IMPORT_ID_VERSION,
since it changes the id of every transaction imported before.
"""


import hashlib


IMPORT_ID_VERSION = 'v1'


def import_id(transaction):
    parts = [
        IMPORT_ID_VERSION,
        transaction.payee,
        transaction.type,
        transaction.amount,
        transaction.description,
        transaction.account_number,
    ]
    joined = ''.join('' if part is None else str(part) for part in parts)
    return hashlib.md5(joined.encode('utf-8')).hexdigest()
