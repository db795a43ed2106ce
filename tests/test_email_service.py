"""Tests for building the adapter from configuration."""

import pytest

from sendgrid_rest import config
from sendgrid_rest.providers.email_adapter import ConfigurationError
from sendgrid_rest.providers.email_service import (
    create_email_adapter,
    create_email_adapter_from_env,
)
from sendgrid_rest.providers.sendgrid_adapter import SENDGRID_API_URL, SendGridAdapter


def test_create_from_config():
    adapter = create_email_adapter({
        'sendgrid_key': 'SG.test_key',
        'sendgrid_from': 'noreply@example.com',
        'sendgrid_from_name': 'Example',
        'sendgrid_timeout': 15,
    })

    assert isinstance(adapter, SendGridAdapter)
    assert adapter.api_key == 'SG.test_key'
    assert adapter.default_from_address == 'noreply@example.com'
    assert adapter.default_from_name == 'Example'
    assert adapter.api_url == SENDGRID_API_URL
    assert adapter.timeout == 15


def test_missing_from_name_defaults_to_empty():
    adapter = create_email_adapter({'sendgrid_key': 'SG.test_key', 'sendgrid_from': 'noreply@example.com'})

    assert adapter.default_from_name == ''
    assert adapter.timeout is None


@pytest.mark.parametrize('settings, match', [
    ({'sendgrid_from': 'noreply@example.com'}, 'API key'),
    ({'sendgrid_key': 'SG.test_key'}, 'from address'),
])
def test_missing_settings_raise(settings, match):
    with pytest.raises(ConfigurationError, match=match):
        create_email_adapter(settings)


def test_create_from_env(monkeypatch):
    monkeypatch.setattr(config, 'SENDGRID_API_KEY', 'SG.env_key')
    monkeypatch.setattr(config, 'SENDGRID_FROM_ADDRESS', 'env@example.com')
    monkeypatch.setattr(config, 'SENDGRID_FROM_NAME', 'Env Sender')
    monkeypatch.setattr(config, 'SENDGRID_API_URL', 'https://sendgrid.test/v3/mail/send')
    monkeypatch.setattr(config, 'SENDGRID_TIMEOUT', None)

    adapter = create_email_adapter_from_env()

    assert adapter.api_key == 'SG.env_key'
    assert adapter.default_from_address == 'env@example.com'
    assert adapter.default_from_name == 'Env Sender'
    assert adapter.api_url == 'https://sendgrid.test/v3/mail/send'
