"""
SendGrid Email Adapter Implementation

Concrete implementation of the EmailAdapter for the SendGrid v3 REST API.
"""

from dataclasses import dataclass
from typing import Any, Optional
import requests
from sendgrid_rest.providers.email_adapter import EmailAdapter, SendEmailOptions
from sendgrid_rest.providers.payload import build_payload, serialize_payload
from sendgrid_rest.providers.responses import ACCEPTED, interpret_response
from sendgrid_rest import logger


SENDGRID_API_URL = 'https://api.sendgrid.com/v3/mail/send'


@dataclass
class SendGridAdapterArgs:
    api_key: str
    default_from_address: str
    default_from_name: str


class SendGridAdapter(EmailAdapter):
    """SendGrid implementation of the EmailAdapter interface."""

    name = 'sendgrid-rest'

    def __init__(
        self,
        api_key: str,
        default_from_address: str,
        default_from_name: str,
        api_url: str = SENDGRID_API_URL,
        timeout: Optional[float] = None,
        session: Optional[Any] = None
    ):
        """
        Args:
            api_key: SendGrid API key, sent as a Bearer token
            default_from_address: Sender email used when a message has none
            default_from_name: Sender name used when a message has none
            api_url: Mail send endpoint
            timeout: Passed to the HTTP call as is; None leaves it to requests
            session: Optional requests.Session (or compatible) to post with
        """
        self.api_key = api_key
        self.default_from_address = default_from_address
        self.default_from_name = default_from_name
        self.api_url = api_url
        self.timeout = timeout
        self.session = session

    def get_provider_name(self) -> str:
        return "SendGrid"

    def send_email(self, message: SendEmailOptions) -> None:
        """
        Send email via SendGrid API.

        Args:
            message: SendEmailOptions with email details

        Raises:
            ValidationError: If the message cannot be mapped (no request is made)
            ProviderError: If SendGrid does not answer 202 Accepted
            requests.RequestException: If the request itself fails
        """
        payload = build_payload(message, self.default_from_address, self.default_from_name)

        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json'
        }

        recipients = [item['email'] for item in payload['personalizations'][0]['to']]
        logger.debug(f'Sending email via SendGrid to {recipients}')

        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(
                self.api_url,
                json=serialize_payload(payload),
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f'SendGrid API request failed: {str(e)}', err=e)
            raise

        if response.status_code == ACCEPTED:
            logger.info('Email sent successfully via SendGrid', to=recipients)
            return None

        body = None
        if response.text:
            try:
                body = response.json()
            except ValueError:
                logger.warn(
                    'SendGrid error response was not JSON',
                    status_code=response.status_code,
                    response_text=response.text[:200]
                )

        error = interpret_response(response.status_code, response.reason or '', body)
        logger.error(
            'Email send failed via SendGrid',
            status_code=error.status_code,
            error=error.message,
            to=recipients
        )
        raise error


def sendgrid_adapter(args: SendGridAdapterArgs) -> SendGridAdapter:
    """Create a SendGridAdapter from the api key and default sender."""
    return SendGridAdapter(
        api_key=args.api_key,
        default_from_address=args.default_from_address,
        default_from_name=args.default_from_name
    )
