"""
Settings for a sync run, read once at startup and passed around explicitly.

The two secrets (YNAB access token and Triodos identifier) come from the
environment, a .env file, or an encrypted vault in the working directory.
"""


from atomicwrites import atomic_write
from typing import NamedTuple, Tuple
import json
import os
import rncryptor
from triodos_ynab.checkpoint import (
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_PATH,
    SAVE_LOOKBACK_DAYS,
)
from triodos_ynab.accounts import TRIODOS_MARKER
from triodos_ynab.errors import ConfigError


YNAB_URL = 'https://api.youneedabudget.com/v1'

SECRETS = ('access_token', 'identifier')

_ENV_SECRETS = {
    'access_token': ('YNAB_ACCESS_TOKEN',),
    'identifier': ('TRIODOS_IDENTIFIER', 'IDENTIFIER_ID'),
}


class Settings(NamedTuple):
    access_token: str
    identifier: str
    checkpoint_path: str = DEFAULT_PATH
    default_lookback_days: int = DEFAULT_LOOKBACK_DAYS
    lookback_days: int = SAVE_LOOKBACK_DAYS
    exclude: Tuple[str, ...] = ()
    marker: str = TRIODOS_MARKER
    ynab_url: str = YNAB_URL


def _encrypt(data, passphrase):
    """Encrypt python object"""
    cryptor = rncryptor.RNCryptor()
    return cryptor.encrypt(json.dumps(data), passphrase)


def _decrypt(encrypted, passphrase):
    """Decrypt python object"""
    cryptor = rncryptor.RNCryptor()
    try:
        return json.loads(cryptor.decrypt(encrypted, passphrase))
    except rncryptor.DecryptionError:
        raise ConfigError('wrong passphrase or corrupt vault') from None


class Vault:
    """The secrets, encrypted with a passphrase."""

    def __init__(self, root):
        self.path = os.path.join(root, 'vault')

    def exists(self):
        return os.path.exists(self.path)

    def write(self, secrets, passphrase, overwrite=False):
        unknown = set(secrets) - set(SECRETS)
        if unknown:
            raise ConfigError('unknown secrets: ' + ', '.join(sorted(unknown)))
        with atomic_write(self.path, mode='wb', overwrite=overwrite) as f:
            f.write(_encrypt(dict(secrets), passphrase))

    def read(self, passphrase):
        with open(self.path, 'rb') as f:
            return _decrypt(f.read(), passphrase)


def _int(environ, name, default):
    value = environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f'{name} must be a whole number of days, got {value!r}') from None


def _secret(environ, secrets, key):
    for name in _ENV_SECRETS[key]:
        if environ.get(name):
            return environ[name]
    return secrets.get(key)


def checkpoint_options(environ=None):
    """Keyword arguments for CheckpointStore from the environment."""
    environ = os.environ if environ is None else environ
    return {
        'path': environ.get('TRIODOS_YNAB_CHECKPOINT') or DEFAULT_PATH,
        'default_days': _int(environ, 'TRIODOS_YNAB_DEFAULT_LOOKBACK_DAYS',
                             DEFAULT_LOOKBACK_DAYS),
        'lookback_days': _int(environ, 'TRIODOS_YNAB_LOOKBACK_DAYS', SAVE_LOOKBACK_DAYS),
    }


def settings_from_env(environ=None, secrets=None):
    """
    Build Settings from environment variables, falling back to `secrets`
    (as read from the vault) for the access token and identifier.

    Raises:
        ConfigError if a secret is missing or a number does not parse
    """
    environ = os.environ if environ is None else environ
    secrets = secrets or {}
    values = {key: _secret(environ, secrets, key) for key in SECRETS}
    missing = [_ENV_SECRETS[key][0] for key, value in values.items() if not value]
    if missing:
        raise ConfigError('missing settings: ' + ', '.join(missing))
    store = checkpoint_options(environ)
    exclude = tuple(x.strip() for x in environ.get('TRIODOS_YNAB_EXCLUDE', '').split(',')
                    if x.strip())
    return Settings(
        access_token=values['access_token'],
        identifier=values['identifier'],
        checkpoint_path=store['path'],
        default_lookback_days=store['default_days'],
        lookback_days=store['lookback_days'],
        exclude=exclude,
        marker=environ.get('TRIODOS_YNAB_MARKER') or TRIODOS_MARKER,
        ynab_url=environ.get('YNAB_URL') or YNAB_URL,
    )


def needs_vault(environ=None):
    """True if the environment alone does not provide every secret."""
    environ = os.environ if environ is None else environ
    return not all(_secret(environ, {}, key) for key in SECRETS)
