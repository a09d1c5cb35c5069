"""
Scrape transactions from Triodos Bank NL internet banking.

Login uses the identifier plus a one-time access code from the user's
digipass. Transactions are read from each account's overview table, opening
the detail view of every row that is newer than the checkpoint.
"""


import logging
from typing import Any, NamedTuple
from datetime import date
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from triodos_ynab import iban
from triodos_ynab.errors import BankError
from triodos_ynab.normalize import detail_record, normalize_detail
from triodos_ynab.parse import parse_date
from triodos_ynab.selection import select_since


logger = logging.getLogger(__name__)

LOGIN_URL = ('https://bankieren.triodos.nl/ib-seam/login.seam'
             '?loginType=digipass&locale=nl_NL')
HOME_URL = 'https://bankieren.triodos.nl/ib-seam/pages/home.seam'

TIMEOUT_SECONDS = 30


class Row(NamedTuple):
    """A row of the account overview, with the date read from its first cell."""
    date: date
    element: Any


class TriodosSession:
    def __init__(self, driver, timeout=TIMEOUT_SECONDS):
        self.driver = driver
        self.wait = WebDriverWait(driver, timeout)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.driver.quit()

    def _css(self, selector):
        return self.driver.find_element(By.CSS_SELECTOR, selector)

    def login(self, identifier, ask_access_code):
        """
        Log in with the identifier, then the access code returned by
        `ask_access_code()` once the portal asks for it.

        Raises:
            BankError
        """
        driver = self.driver
        try:
            driver.get(LOGIN_URL)
            # second radio button selects login by identifier
            driver.find_elements(By.NAME, 'frm_gebruikersnummer_radio')[1].click()
            id_elem = driver.find_elements(By.CSS_SELECTOR, '.defInput')[1]
            id_elem.clear()
            id_elem.send_keys(identifier)
            self._css('button.btnArrowItem').click()

            code_elem = self.wait.until(
                EC.visibility_of_element_located((By.CSS_SELECTOR, '.smallInput')))
            code_elem.send_keys(ask_access_code())
            self._css('button.btnItem').click()
            self.wait.until(EC.staleness_of(code_elem))
        except (WebDriverException, IndexError) as e:
            raise BankError('login failed') from e
        logger.info('logged in to Triodos')

    def _open_account(self, account_number):
        self.driver.get(HOME_URL)
        link = self.wait.until(EC.element_to_be_clickable(
            (By.LINK_TEXT, iban.print_format(account_number))))
        link.click()
        self.wait.until(EC.presence_of_element_located(
            (By.CSS_SELECTOR, 'tbody.rf-dt-b tr')))

    def rows(self, account_number):
        """Open the account overview and list its rows, newest first."""
        self._open_account(account_number)
        result = []
        for element in self.driver.find_elements(By.CSS_SELECTOR, 'tbody.rf-dt-b tr'):
            cell = element.find_element(By.TAG_NAME, 'td')
            try:
                row_date = parse_date(cell.text)
            except ValueError:
                # e.g. the "no more transactions" row at the end of the table
                logger.debug('skipping overview row %r', cell.text)
                continue
            result.append(Row(row_date, element))
        return result

    def _detail(self, row):
        row.element.find_element(By.CSS_SELECTOR, '.detailItem a').click()
        modal = self.wait.until(EC.visibility_of_element_located(
            (By.CSS_SELECTOR, '.modalPanel .formView')))
        labels = [e.text for e in modal.find_elements(By.CSS_SELECTOR, '.labelItem')]
        values = [e.text for e in modal.find_elements(By.CSS_SELECTOR, '.dataItem')]
        record = detail_record(labels, values)

        close = self.driver.find_elements(By.CSS_SELECTOR, '.butItemClose .btnItem')
        if close:
            close[0].click()
        # the portal keeps closed modals in the DOM, which confuses the next wait
        self.driver.execute_script(
            'arguments[0].parentElement.removeChild(arguments[0]);', modal)
        return record

    def download_transactions(self, account_number, checkpoint):
        """
        Fetch the transactions of one account dated after the checkpoint.

        Raises:
            BankError, MissingFieldError, ValueError
        """
        try:
            rows = select_since(self.rows(account_number), checkpoint)
            logger.info('%s: %d transactions since %s', iban.print_format(account_number),
                        len(rows), checkpoint.last_import_date)
            transactions = []
            for i, row in enumerate(rows, 1):
                transactions.append(normalize_detail(self._detail(row)))
                logger.debug('downloaded transaction %d/%d', i, len(rows))
        except WebDriverException as e:
            raise BankError(f'download for {account_number} failed') from e
        return transactions
