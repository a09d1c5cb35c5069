import pytest
from triodos_ynab.accounts import AccountMatcher
from triodos_ynab.schema import LinkedAccount


TRIODOS = 'NL70TRIO0123456789'


def _account(note):
    return LinkedAccount('id-1', 'Checking', note)


def test_empty_note():
    assert not AccountMatcher().is_sync_target(_account(''))
    assert not AccountMatcher().is_sync_target(_account(None))


def test_note_without_marker():
    assert not AccountMatcher().is_sync_target(_account('NL91ABNA0417164300'))


def test_note_with_bad_checksum():
    assert not AccountMatcher().is_sync_target(_account('NL71TRIO0123456789'))


def test_valid_triodos_note():
    assert AccountMatcher().is_sync_target(_account(TRIODOS))
    assert AccountMatcher().is_sync_target(_account('NL70 TRIO 0123 4567 89'))


def test_excluded_account():
    matcher = AccountMatcher(exclude=['NL70 TRIO 0123 4567 89'])
    assert not matcher.is_sync_target(_account(TRIODOS))
    assert matcher.is_sync_target(_account('NL92TRIO0987654322'))


def test_canonical_account_number():
    matcher = AccountMatcher()
    assert matcher.canonical_account_number(_account('NL70 TRIO 0123 4567 89')) == TRIODOS


def test_canonical_account_number_rejects_non_iban():
    with pytest.raises(ValueError):
        AccountMatcher().canonical_account_number(_account('my TRIO account'))
