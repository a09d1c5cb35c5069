"""
Persist the date of the last import between runs.

Loading and saving are deliberately asymmetric. A missing or broken file
loads as DEFAULT_LOOKBACK_DAYS before today. Saving ignores the date in the
checkpoint and always writes SAVE_LOOKBACK_DAYS before today, so every run
re-scans a few days that may have been incomplete at the previous run.
Duplicates from that overlap are dropped by YNAB through the import id.
"""


import json
import logging
import os
from datetime import date, timedelta
from atomicwrites import atomic_write
from triodos_ynab.schema import Checkpoint


logger = logging.getLogger(__name__)

DEFAULT_PATH = '.sync-config'
DEFAULT_LOOKBACK_DAYS = 60
SAVE_LOOKBACK_DAYS = 3

_KEY = 'lastImportDate'


def last_import_date(today, days):
    return today - timedelta(days=days)


def _read_document(path):
    try:
        with open(path) as f:
            document = json.load(f)
    except FileNotFoundError:
        logger.info('no checkpoint at %s yet', path)
        return {}
    except (OSError, ValueError) as e:
        logger.warning('ignoring unreadable checkpoint %s: %s', path, e)
        return {}
    if not isinstance(document, dict):
        logger.warning('ignoring checkpoint %s: not a JSON object', path)
        return {}
    return document


def _parse_iso(value):
    if not isinstance(value, str):
        return None
    try:
        # older files hold a full timestamp
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


class CheckpointStore:
    def __init__(self, path=DEFAULT_PATH,
                 default_days=DEFAULT_LOOKBACK_DAYS,
                 lookback_days=SAVE_LOOKBACK_DAYS):
        self.path = os.path.abspath(path)
        self.default_days = default_days
        self.lookback_days = lookback_days

    def exists(self):
        return os.path.exists(self.path)

    def load(self, today=None):
        """Read the checkpoint. Never raises for a missing or broken file."""
        today = today or date.today()
        document = _read_document(self.path)
        extra = {k: v for k, v in document.items() if k != _KEY}
        last = _parse_iso(document.get(_KEY))
        if last is None:
            last = last_import_date(today, self.default_days)
        return Checkpoint(last, extra)

    def save(self, checkpoint, today=None):
        """
        Write the checkpoint back, with the last import date reset to
        lookback_days before today.
        """
        today = today or date.today()
        last = last_import_date(today, self.lookback_days)
        document = dict(checkpoint.extra or {})
        document[_KEY] = last.isoformat()
        with atomic_write(self.path, mode='w', overwrite=True) as f:
            json.dump(document, f, indent=2)
        logger.debug('checkpoint %s set to %s', self.path, last)
        return Checkpoint(last, checkpoint.extra)
