"""Exceptions raised by triodos_ynab"""


class SyncError(Exception):
    """Base class for everything this package raises on purpose"""


class MissingFieldError(SyncError):
    """A scraped detail view lacks one or more expected labels"""

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__('missing detail fields: {}'.format(', '.join(self.missing)))


class MalformedRowError(SyncError):
    """A CSV export row does not have the expected columns"""


class BankError(SyncError):
    """Wraps any issues that are caused by the bank portal"""


class YnabError(SyncError):
    """The YNAB API rejected a request or could not be reached"""

    def __init__(self, message, status=None, error_id=None):
        self.status = status
        self.error_id = error_id
        super().__init__(message)


class ConfigError(SyncError):
    """Required settings are missing or unreadable"""
