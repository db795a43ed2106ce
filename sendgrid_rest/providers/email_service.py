"""
Email Service - Factory

Builds a SendGridAdapter from a configuration dict or from the
environment, so callers don't have to wire the adapter up themselves.
"""

from typing import Dict, Any
from sendgrid_rest.providers.email_adapter import ConfigurationError
from sendgrid_rest.providers.sendgrid_adapter import SendGridAdapter, SENDGRID_API_URL
from sendgrid_rest import logger


def create_email_adapter(config: Dict[str, Any]) -> SendGridAdapter:
    """
    Factory function to create a SendGridAdapter from configuration.

    Args:
        config: Must contain 'sendgrid_key' and 'sendgrid_from'; optionally
            'sendgrid_from_name', 'sendgrid_api_url' and 'sendgrid_timeout'

    Returns:
        SendGridAdapter instance

    Raises:
        ConfigurationError: If the API key or default sender is missing

    Example:
        >>> config = {'sendgrid_key': 'SG.xxx', 'sendgrid_from': 'noreply@example.com'}
        >>> adapter = create_email_adapter(config)
        >>> adapter.send_email(SendEmailOptions(to='user@example.com', ...))
    """
    api_key = config.get('sendgrid_key')
    if not api_key:
        raise ConfigurationError('Missing SendGrid API key in config')

    from_address = config.get('sendgrid_from')
    if not from_address:
        raise ConfigurationError('Missing SendGrid default from address in config')

    from_name = config.get('sendgrid_from_name') or ''
    if not from_name:
        logger.warn('No SendGrid default from name configured', from_address=from_address)

    return SendGridAdapter(
        api_key=api_key,
        default_from_address=from_address,
        default_from_name=from_name,
        api_url=config.get('sendgrid_api_url') or SENDGRID_API_URL,
        timeout=config.get('sendgrid_timeout')
    )


def create_email_adapter_from_env() -> SendGridAdapter:
    """Create a SendGridAdapter from SENDGRID_* environment settings."""
    from sendgrid_rest import config

    return create_email_adapter({
        'sendgrid_key': config.SENDGRID_API_KEY,
        'sendgrid_from': config.SENDGRID_FROM_ADDRESS,
        'sendgrid_from_name': config.SENDGRID_FROM_NAME,
        'sendgrid_api_url': config.SENDGRID_API_URL,
        'sendgrid_timeout': config.SENDGRID_TIMEOUT,
    })
