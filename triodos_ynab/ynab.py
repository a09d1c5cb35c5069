"""A minimal YNAB API client and the mapping of transactions onto it."""


import logging
import requests
from triodos_ynab import schema
from triodos_ynab.config import YNAB_URL
from triodos_ynab.errors import YnabError
from triodos_ynab.import_id import import_id


logger = logging.getLogger(__name__)

MAX_MEMO = 200


def to_ynab_transaction(account, transaction):
    amount = transaction.amount
    if amount is not None and transaction.type == schema.OUTFLOW:
        amount = -amount
    description = transaction.description
    return schema.YnabTransaction(
        account_id=account.id,
        date=transaction.date.isoformat(),
        payee_name=transaction.payee,
        amount=amount,
        memo=description[:MAX_MEMO] if description else None,
        import_id=import_id(transaction),
    )


def _error_message(body, response):
    error = body.get('error') if isinstance(body, dict) else None
    if isinstance(error, dict):
        detail = error.get('detail') or error.get('name') or 'unknown error'
        return detail, error.get('id')
    return f'HTTP {response.status_code}: {response.reason}', None


class YnabClient:
    def __init__(self, access_token, base_url=YNAB_URL, session=None, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers['Authorization'] = f'Bearer {access_token}'

    def _request(self, method, path, payload=None):
        """
        Returns the `data` member of the response body.

        Raises:
            YnabError
        """
        url = self.base_url + path
        try:
            response = self.session.request(method, url, json=payload,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            raise YnabError(f'{method} {path} failed: {e}') from e
        try:
            body = response.json()
        except ValueError:
            body = None
        if not response.ok or (isinstance(body, dict) and body.get('error')):
            message, error_id = _error_message(body, response)
            raise YnabError(f'{method} {path}: {message}',
                            status=response.status_code, error_id=error_id)
        if not isinstance(body, dict) or 'data' not in body:
            raise YnabError(f'{method} {path}: response without data',
                            status=response.status_code)
        return body['data']

    def budgets(self):
        data = self._request('GET', '/budgets')
        return [schema.Budget(b['id'], b['name']) for b in data['budgets']]

    def accounts(self, budget_id):
        data = self._request('GET', f'/budgets/{budget_id}/accounts')
        return [schema.LinkedAccount(a['id'], a['name'], a.get('note'))
                for a in data['accounts']]

    def create_transactions(self, budget_id, transactions):
        payload = {'transactions': [t._asdict() for t in transactions]}
        data = self._request('POST', f'/budgets/{budget_id}/transactions', payload)
        duplicates = data.get('duplicate_import_ids') or []
        if duplicates:
            logger.info('YNAB skipped %d already imported transactions', len(duplicates))
        return data
