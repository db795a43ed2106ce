from .email_adapter import (
    Address,
    Attachment,
    ConfigurationError,
    EmailAdapter,
    EmailAdapterError,
    ProviderError,
    SendEmailOptions,
    ValidationError,
)
from .email_service import create_email_adapter, create_email_adapter_from_env
from .sendgrid_adapter import SendGridAdapter, SendGridAdapterArgs, sendgrid_adapter

__all__ = [
    "Address",
    "Attachment",
    "ConfigurationError",
    "EmailAdapter",
    "EmailAdapterError",
    "ProviderError",
    "SendEmailOptions",
    "SendGridAdapter",
    "SendGridAdapterArgs",
    "ValidationError",
    "create_email_adapter",
    "create_email_adapter_from_env",
    "sendgrid_adapter",
]
