"""triodos-ynab CLI"""

import sys
import os
import logging
from getpass import getpass
import click
from dotenv import load_dotenv
from selenium.common.exceptions import WebDriverException
from tabulate import tabulate
from triodos_ynab import config
from triodos_ynab.accounts import AccountMatcher
from triodos_ynab.bank.common import firefox_driver
from triodos_ynab.bank.triodos import TriodosSession
from triodos_ynab.checkpoint import CheckpointStore
from triodos_ynab.config import Vault
from triodos_ynab.errors import ConfigError, SyncError
from triodos_ynab.import_id import import_id
from triodos_ynab.normalize import read_csv
from triodos_ynab.schema import Transaction, YnabTransaction
from triodos_ynab.sync import sync
from triodos_ynab.ynab import YnabClient


def _fatal(message):
    print('fatal: ' + message, file=sys.stderr)
    sys.exit(1)


def _promptpass():
    return getpass('vault passphrase: ')


def _load_settings():
    load_dotenv(os.path.join(os.getcwd(), '.env'))
    secrets = None
    if config.needs_vault():
        vault = Vault(os.getcwd())
        if not vault.exists():
            _fatal('set YNAB_ACCESS_TOKEN and TRIODOS_IDENTIFIER '
                   'or run `triodos-ynab init`')
        secrets = vault.read(_promptpass())
    return config.settings_from_env(secrets=secrets)


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Log debug output.')
def cli(verbose):
    """Copies Triodos transactions into YNAB."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s')


@cli.command()
def init():
    """Store the secrets in an encrypted vault"""
    vault = Vault(os.getcwd())
    if vault.exists():
        _fatal('vault already exists: ' + vault.path)
    secrets = {
        'access_token': getpass('YNAB access token: '),
        'identifier': input('Triodos identifier: '),
    }
    passphrase = getpass('set a vault passphrase: ')
    vault.write(secrets, passphrase)


@cli.command(name='sync')
@click.option('--dry-run', is_flag=True,
              help='Show what would be sent without sending it.')
@click.option('--show-browser', is_flag=True, help='Run Firefox with a window.')
def sync_cmd(dry_run, show_browser):
    """Sync transactions of all linked accounts"""
    try:
        settings = _load_settings()
    except ConfigError as e:
        _fatal(str(e))
    client = YnabClient(settings.access_token, base_url=settings.ynab_url)
    matcher = AccountMatcher(marker=settings.marker, exclude=settings.exclude)
    store = CheckpointStore(settings.checkpoint_path,
                            default_days=settings.default_lookback_days,
                            lookback_days=settings.lookback_days)
    try:
        driver = firefox_driver(headless=not show_browser)
    except WebDriverException as e:
        _fatal(f'cannot start Firefox: {e.msg}')
    with TriodosSession(driver) as bank:
        try:
            bank.login(settings.identifier,
                       lambda: click.prompt('Access code identifier'))
            summary = sync(client, bank, store, matcher, dry_run=dry_run)
        except SyncError as e:
            _fatal(str(e))

    for account, transactions in summary.previews:
        print(f'\n{account.name}')
        print(tabulate(transactions, headers=YnabTransaction._fields))
    print(tabulate(summary.rows(), headers=('account', 'status', 'detail')))
    if not summary.ok():
        sys.exit(1)


@cli.command()
@click.argument('csvfile', type=click.File('r', encoding='utf-8'))
def convert(csvfile):
    """Show the transactions of a Triodos CSV export"""
    try:
        transactions = read_csv(csvfile)
    except (SyncError, ValueError) as e:
        _fatal(str(e))
    rows = [t + (import_id(t),) for t in transactions]
    print(tabulate(rows, headers=Transaction._fields + ('import_id',),
                   disable_numparse=True))


@cli.command(name='checkpoint')
def checkpoint_cmd():
    """Show the date the next sync starts after"""
    load_dotenv(os.path.join(os.getcwd(), '.env'))
    try:
        store = CheckpointStore(**config.checkpoint_options())
    except ConfigError as e:
        _fatal(str(e))
    print(store.load().last_import_date.isoformat())
    if not store.exists():
        print('no checkpoint written yet at ' + store.path, file=sys.stderr)


if __name__ == '__main__':
    cli()
