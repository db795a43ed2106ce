"""
Email Adapter Pattern - Interface and Shared Types

This module defines the contract the SendGrid adapter implements: the
generic send request, the address and attachment shapes it accepts, and
the errors raised back to the caller.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Mapping, Sequence, Union
from dataclasses import dataclass


@dataclass
class Address:
    """Structured address with an optional display name."""
    address: str
    name: Optional[str] = None


# A single address is either a string ("Name <email>" or bare "email"),
# an Address, or a mapping with 'address' / 'name' keys.
AddressLike = Union[str, Address, Mapping[str, Any]]
AddressInput = Union[AddressLike, Sequence[AddressLike], None]


@dataclass
class Attachment:
    """File attached to an outgoing email."""
    filename: Optional[str]
    content: Any
    content_type: Optional[str] = None


@dataclass
class SendEmailOptions:
    """Standard email message format accepted by the adapter."""
    to: AddressInput = None
    subject: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None
    from_address: Optional[AddressLike] = None
    reply_to: AddressInput = None
    cc: AddressInput = None
    bcc: AddressInput = None
    attachments: Optional[List[Union[Attachment, Mapping[str, Any]]]] = None
    headers: Optional[Dict[str, str]] = None
    custom_args: Optional[Dict[str, str]] = None
    send_at: Optional[int] = None
    ip_pool_name: Optional[str] = None
    mail_settings: Optional[Dict[str, Any]] = None
    tracking_settings: Optional[Dict[str, Any]] = None


class EmailAdapterError(Exception):
    """Base error raised by the adapter; carries an HTTP-style status code."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(EmailAdapterError):
    """The request was rejected locally, before any network call."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message, status_code)


class ProviderError(EmailAdapterError):
    """SendGrid answered with anything other than 202 Accepted."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message, status_code)


class ConfigurationError(EmailAdapterError):
    """The adapter could not be built from the supplied configuration."""


class EmailAdapter(ABC):
    """
    Abstract base class (interface) for email providers.

    Implementations raise instead of returning an error value: a call to
    send_email either returns None or raises EmailAdapterError (or the
    transport's own exception).
    """

    @abstractmethod
    def send_email(self, message: SendEmailOptions) -> None:
        """
        Send an email using the provider's API.

        Args:
            message: SendEmailOptions describing the email

        Raises:
            ValidationError: If the message cannot be turned into a request
            ProviderError: If the provider rejects the request
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of this email provider."""
        pass
