import tempfile
import pytest
from triodos_ynab import config
from triodos_ynab.errors import ConfigError


ENV = {'YNAB_ACCESS_TOKEN': 'token', 'TRIODOS_IDENTIFIER': '61-1234567-8'}


def test_vault_write_read():
    secrets = {'access_token': 'abc', 'identifier': 'xyz'}
    with tempfile.TemporaryDirectory() as path:
        vault = config.Vault(path)
        assert not vault.exists()
        vault.write(secrets, 'abcd')
        assert vault.exists()
        assert vault.read('abcd') == secrets


def test_vault_wrong_passphrase():
    with tempfile.TemporaryDirectory() as path:
        vault = config.Vault(path)
        vault.write({'access_token': 'abc'}, 'abcd')
        with pytest.raises(ConfigError):
            vault.read('wrong')


def test_vault_rejects_unknown_secrets():
    with tempfile.TemporaryDirectory() as path:
        with pytest.raises(ConfigError):
            config.Vault(path).write({'password': 'x'}, 'abcd')


def test_vault_does_not_overwrite():
    with tempfile.TemporaryDirectory() as path:
        vault = config.Vault(path)
        vault.write({'access_token': 'abc'}, 'abcd')
        with pytest.raises(FileExistsError):
            vault.write({'access_token': 'def'}, 'abcd')


def test_settings_defaults():
    settings = config.settings_from_env(ENV)
    assert settings.access_token == 'token'
    assert settings.identifier == '61-1234567-8'
    assert settings.checkpoint_path == '.sync-config'
    assert settings.default_lookback_days == 60
    assert settings.lookback_days == 3
    assert settings.exclude == ()
    assert settings.marker == 'TRIO'


def test_settings_overrides():
    env = dict(ENV,
               TRIODOS_YNAB_CHECKPOINT='/tmp/checkpoint.json',
               TRIODOS_YNAB_DEFAULT_LOOKBACK_DAYS='3',
               TRIODOS_YNAB_LOOKBACK_DAYS='7',
               TRIODOS_YNAB_EXCLUDE='NL70TRIO0123456789, NL92TRIO0987654322,')
    settings = config.settings_from_env(env)
    assert settings.checkpoint_path == '/tmp/checkpoint.json'
    assert settings.default_lookback_days == 3
    assert settings.lookback_days == 7
    assert settings.exclude == ('NL70TRIO0123456789', 'NL92TRIO0987654322')


def test_settings_old_identifier_name():
    env = {'YNAB_ACCESS_TOKEN': 'token', 'IDENTIFIER_ID': 'old'}
    assert config.settings_from_env(env).identifier == 'old'


def test_settings_from_vault_secrets():
    secrets = {'access_token': 'vaulted', 'identifier': 'me'}
    settings = config.settings_from_env({'YNAB_ACCESS_TOKEN': 'env'}, secrets)
    assert settings.access_token == 'env'
    assert settings.identifier == 'me'


def test_settings_missing_secrets():
    with pytest.raises(ConfigError) as info:
        config.settings_from_env({})
    assert 'YNAB_ACCESS_TOKEN' in str(info.value)
    assert 'TRIODOS_IDENTIFIER' in str(info.value)


def test_settings_bad_number():
    with pytest.raises(ConfigError):
        config.settings_from_env(dict(ENV, TRIODOS_YNAB_LOOKBACK_DAYS='three'))


def test_needs_vault():
    assert config.needs_vault({})
    assert config.needs_vault({'YNAB_ACCESS_TOKEN': 'x'})
    assert not config.needs_vault(ENV)
