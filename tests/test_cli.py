import json
from click.testing import CliRunner
from triodos_ynab.cli import cli
from triodos_ynab.import_id import import_id
from triodos_ynab.normalize import normalize_csv_row


ROW = ['01-03-2020', 'NL00BANK0000000000', '150,00', 'Credit', 'J Doe',
       'NL11BANK1111111111', 'Z001', 'Groceries\\extra']


def test_convert(tmp_path):
    export = tmp_path / 'export.csv'
    export.write_text(','.join('"{}"'.format(x) for x in ROW) + '\n')
    result = CliRunner().invoke(cli, ['convert', str(export)])
    assert result.exit_code == 0, result.output
    assert 'Groceries' in result.output
    assert 'extra' not in result.output
    assert '2020-03-01' in result.output
    assert 'NL11 BANK 1111 1111 11' in result.output
    assert import_id(normalize_csv_row(ROW)) in result.output


def test_convert_bad_row(tmp_path):
    export = tmp_path / 'export.csv'
    export.write_text('01-03-2020,too,short\n')
    result = CliRunner().invoke(cli, ['convert', str(export)])
    assert result.exit_code == 1


def test_checkpoint_command(tmp_path, monkeypatch):
    state = tmp_path / 'state.json'
    state.write_text(json.dumps({'lastImportDate': '2020-02-29'}))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('TRIODOS_YNAB_CHECKPOINT', str(state))
    result = CliRunner().invoke(cli, ['checkpoint'])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '2020-02-29'


def test_checkpoint_command_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('TRIODOS_YNAB_CHECKPOINT', str(tmp_path / 'missing.json'))
    result = CliRunner().invoke(cli, ['checkpoint'])
    assert result.exit_code == 0, result.output
    assert 'no checkpoint written yet' in result.output


def test_sync_without_secrets_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('YNAB_ACCESS_TOKEN', raising=False)
    monkeypatch.delenv('TRIODOS_IDENTIFIER', raising=False)
    monkeypatch.delenv('IDENTIFIER_ID', raising=False)
    result = CliRunner().invoke(cli, ['sync'])
    assert result.exit_code == 1
