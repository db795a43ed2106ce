"""Tests for the SendGrid adapter send flow."""

import base64
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest
import requests

from sendgrid_rest.providers.email_adapter import (
    Attachment,
    ProviderError,
    SendEmailOptions,
    ValidationError,
)
from sendgrid_rest.providers.sendgrid_adapter import (
    SENDGRID_API_URL,
    SendGridAdapter,
    SendGridAdapterArgs,
    sendgrid_adapter,
)


API_KEY = "test-api-key"
DEFAULT_FROM_ADDRESS = "hello+default@zapal.tech"
DEFAULT_FROM_NAME = "Zapal"

POST_TARGET = "sendgrid_rest.providers.sendgrid_adapter.requests.post"


def make_response(status_code, reason="", json_body=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    if text is None:
        text = "" if json_body is None else "{...}"
    response.text = text
    response.json.return_value = json_body
    return response


@pytest.fixture
def adapter():
    return sendgrid_adapter(SendGridAdapterArgs(
        api_key=API_KEY,
        default_from_address=DEFAULT_FROM_ADDRESS,
        default_from_name=DEFAULT_FROM_NAME,
    ))


class TestFactory:
    """Tests for adapter construction."""

    def test_factory_exposes_defaults(self, adapter):
        assert isinstance(adapter, SendGridAdapter)
        assert adapter.name == "sendgrid-rest"
        assert adapter.default_from_address == DEFAULT_FROM_ADDRESS
        assert adapter.default_from_name == DEFAULT_FROM_NAME
        assert adapter.get_provider_name() == "SendGrid"


class TestSendEmail:
    """Tests for SendGridAdapter.send_email."""

    def test_successful_send(self, adapter):
        with patch(POST_TARGET, return_value=make_response(202, "Accepted")) as mock_post:
            result = adapter.send_email(SendEmailOptions(
                from_address="hello+from@zapal.tech <Zapal>",
                to="hello+to@zapal.tech <Zapal>",
                subject="This was sent on init",
                text="This is my message body",
                html="<p>This is my message body</p>",
            ))

        assert result is None
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == SENDGRID_API_URL
        assert kwargs["headers"] == {
            "Authorization": f"Bearer {API_KEY}",
            "Content-Type": "application/json",
        }
        assert kwargs["timeout"] is None
        assert kwargs["json"] == {
            "from": {"email": "hello+from@zapal.tech", "name": "Zapal"},
            "subject": "This was sent on init",
            "personalizations": [{"to": [{"email": "hello+to@zapal.tech", "name": "Zapal"}]}],
            "content": [
                {"type": "text/html", "value": "<p>This is my message body</p>"},
                {"type": "text/plain", "value": "This is my message body"},
            ],
        }

    def test_success_does_not_read_body(self, adapter):
        response = make_response(202, "Accepted")
        with patch(POST_TARGET, return_value=response):
            adapter.send_email(SendEmailOptions(to="jane@example.com"))

        response.json.assert_not_called()

    def test_default_sender_fallback(self, adapter):
        with patch(POST_TARGET, return_value=make_response(202)) as mock_post:
            adapter.send_email(SendEmailOptions(to="jane@example.com", text="hi"))

        assert mock_post.call_args.kwargs["json"]["from"] == {
            "email": DEFAULT_FROM_ADDRESS,
            "name": DEFAULT_FROM_NAME,
        }

    def test_attachments_are_base64_on_the_wire(self, adapter):
        with patch(POST_TARGET, return_value=make_response(202)) as mock_post:
            adapter.send_email(SendEmailOptions(
                to="jane@example.com",
                attachments=[Attachment(filename="a.txt", content="data")],
            ))

        assert mock_post.call_args.kwargs["json"]["attachments"] == [
            {"content": base64.b64encode(b"data").decode("ascii"), "filename": "a.txt"}
        ]

    def test_error_response_raises_provider_error(self, adapter):
        error_body = {
            "errors": [{
                "message": "error message",
                "field": "field",
                "help": "https://sendgrid.com/docs/API_Reference/Web_API_v3/Mail/errors.html",
            }],
            "id": "test-id",
        }
        with patch(POST_TARGET, return_value=make_response(400, "Bad Request", error_body)):
            with pytest.raises(ProviderError) as exc_info:
                adapter.send_email(SendEmailOptions(to="jane@example.com", text="hi"))

        assert str(exc_info.value) == (
            "Error sending email: 400 Bad Request (ID: test-id). Field: field, Message: error message, "
            "Help: https://sendgrid.com/docs/API_Reference/Web_API_v3/Mail/errors.html "
        )
        assert exc_info.value.status_code == 400

    def test_non_json_error_body(self, adapter):
        response = make_response(502, "Bad Gateway", text="<html>upstream down</html>")
        response.json.side_effect = ValueError("not json")

        with patch(POST_TARGET, return_value=response):
            with pytest.raises(ProviderError) as exc_info:
                adapter.send_email(SendEmailOptions(to="jane@example.com"))

        assert exc_info.value.message == "Error sending email: 502 Bad Gateway."
        assert exc_info.value.status_code == 502

    def test_invalid_attachment_never_reaches_transport(self, adapter):
        with patch(POST_TARGET) as mock_post:
            with pytest.raises(ValidationError):
                adapter.send_email(SendEmailOptions(
                    to="jane@example.com",
                    attachments=[Attachment(filename=None, content="data")],
                ))

        mock_post.assert_not_called()

    def test_transport_errors_propagate_unchanged(self, adapter):
        failure = requests.ConnectionError("DNS failure")
        with patch(POST_TARGET, side_effect=failure):
            with pytest.raises(requests.ConnectionError) as exc_info:
                adapter.send_email(SendEmailOptions(to="jane@example.com"))

        assert exc_info.value is failure

    def test_injected_session_and_settings(self):
        session = MagicMock()
        session.post.return_value = make_response(202)
        adapter = SendGridAdapter(
            api_key=API_KEY,
            default_from_address=DEFAULT_FROM_ADDRESS,
            default_from_name=DEFAULT_FROM_NAME,
            api_url="https://sendgrid.test/v3/mail/send",
            timeout=10,
            session=session,
        )

        with patch(POST_TARGET) as mock_post:
            adapter.send_email(SendEmailOptions(to="jane@example.com"))

        mock_post.assert_not_called()
        args, kwargs = session.post.call_args
        assert args[0] == "https://sendgrid.test/v3/mail/send"
        assert kwargs["timeout"] == 10

    def test_concurrent_sends_are_independent(self, adapter):
        recipients = [f"user{i}@example.com" for i in range(8)]

        with patch(POST_TARGET, return_value=make_response(202)) as mock_post:
            with ThreadPoolExecutor(max_workers=4) as pool:
                results = list(pool.map(
                    lambda to: adapter.send_email(SendEmailOptions(to=to, subject=to)),
                    recipients,
                ))

        assert results == [None] * len(recipients)
        sent = {}
        for call in mock_post.call_args_list:
            body = call.kwargs["json"]
            sent[body["subject"]] = body["personalizations"][0]["to"]
        assert sent == {to: [{"email": to}] for to in recipients}
