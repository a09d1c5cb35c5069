"""Per-account outcomes of a sync run."""


from typing import NamedTuple


DOWNLOAD = 'download'
SUBMIT = 'submit'


class AccountFailure(NamedTuple):
    stage: str
    message: str


class Result(object):
    """
    The outcome for one account: holds either self.ok (the number of
    transactions handed to YNAB) or self.err (an AccountFailure), never both.
    """

    def __init__(self, account, variant, value):
        self.account = account
        if variant == 'ok':
            self.ok = value
        elif variant == 'err':
            self.err = value
        else:
            raise ValueError('variant must be ok or err')

    def has_ok(self):
        return hasattr(self, 'ok')

    def has_err(self):
        return hasattr(self, 'err')

    def __repr__(self):
        if self.has_ok():
            return f'ok({self.account.name!r}, {self.ok!r})'
        return f'err({self.account.name!r}, {self.err!r})'


def ok(account, count):
    return Result(account, 'ok', count)


def err(account, stage, message):
    return Result(account, 'err', AccountFailure(stage, str(message)))


class RunSummary:
    """
    Results of every synced account, in the order they were handled. A dry
    run also keeps the (account, YNAB transactions) it would have sent.
    """

    def __init__(self):
        self.results = []
        self.previews = []

    def add(self, result):
        self.results.append(result)
        return result

    @property
    def failures(self):
        return [r for r in self.results if r.has_err()]

    @property
    def submitted(self):
        return sum(r.ok for r in self.results if r.has_ok())

    def ok(self):
        return not self.failures

    def rows(self):
        """(account, status, detail) triples for printing."""
        for r in self.results:
            if r.has_ok():
                yield r.account.name, 'ok', f'{r.ok} transactions'
            else:
                yield r.account.name, f'failed ({r.err.stage})', r.err.message
