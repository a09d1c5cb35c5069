"""One run: Triodos accounts linked in YNAB budgets, synced one at a time."""


import logging
from triodos_ynab import outcome
from triodos_ynab.errors import SyncError
from triodos_ynab.ynab import to_ynab_transaction


logger = logging.getLogger(__name__)


def _sync_account(client, bank, budget, account, number, checkpoint, summary, dry_run):
    try:
        transactions = bank.download_transactions(number, checkpoint)
    except (SyncError, ValueError) as e:
        logger.error('download for %s failed: %s', account.name, e)
        return outcome.err(account, outcome.DOWNLOAD, e)

    ynab_transactions = [to_ynab_transaction(account, t) for t in transactions]
    if dry_run:
        summary.previews.append((account, ynab_transactions))
        return outcome.ok(account, len(ynab_transactions))
    if not ynab_transactions:
        return outcome.ok(account, 0)

    logger.info('sending %d transactions for %s to YNAB',
                len(ynab_transactions), account.name)
    try:
        client.create_transactions(budget.id, ynab_transactions)
    except SyncError as e:
        logger.error('submitting %s failed: %s', account.name, e)
        return outcome.err(account, outcome.SUBMIT, e)
    return outcome.ok(account, len(ynab_transactions))


def sync(client, bank, store, matcher, today=None, dry_run=False):
    """
    Sync every YNAB account that the matcher accepts. A failing account is
    recorded in the summary and the run moves on to the next one. The
    checkpoint is read once up front and written once at the end, unless
    this is a dry run.

    Raises:
        YnabError if budgets or accounts cannot be listed
    """
    checkpoint = store.load(today)
    logger.info('importing transactions after %s', checkpoint.last_import_date)
    summary = outcome.RunSummary()
    for budget in client.budgets():
        logger.info('fetching accounts for %s', budget.name)
        for account in client.accounts(budget.id):
            if not matcher.is_sync_target(account):
                continue
            number = matcher.canonical_account_number(account)
            logger.info('fetching transactions for %s from %s', account.name, number)
            summary.add(_sync_account(client, bank, budget, account, number,
                                      checkpoint, summary, dry_run))
    if not dry_run:
        store.save(checkpoint, today)
    return summary
