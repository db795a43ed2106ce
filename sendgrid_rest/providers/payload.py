"""
SendGrid Mail Send payload assembly.

Maps SendEmailOptions onto the v3 ``/mail/send`` request body.
"""

import base64
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from sendgrid_rest.providers.addresses import (
    UniformAddress,
    normalize_address,
    normalize_addresses,
    parse_address_string,
)
from sendgrid_rest.providers.email_adapter import (
    Attachment,
    SendEmailOptions,
    ValidationError,
)


# Optional top-level keys copied into the payload as given
PASSTHROUGH_FIELDS = (
    'headers',
    'custom_args',
    'send_at',
    'ip_pool_name',
    'mail_settings',
    'tracking_settings',
)


@dataclass(frozen=True)
class SingleReplyTo:
    address: UniformAddress

    def apply(self, payload: Dict[str, Any]) -> None:
        payload['reply_to'] = self.address.to_dict()


@dataclass(frozen=True)
class ReplyToList:
    addresses: List[UniformAddress]

    def apply(self, payload: Dict[str, Any]) -> None:
        payload['reply_to_list'] = [address.to_dict() for address in self.addresses]


ReplyTo = Union[SingleReplyTo, ReplyToList]


def resolve_from(from_address, default_from_address: str, default_from_name: str) -> Dict[str, str]:
    """Sender object; falls back to the configured default pair verbatim."""
    if not from_address:
        return {'email': default_from_address, 'name': default_from_name}
    return normalize_address(from_address).to_dict()


def resolve_reply_to(reply_to) -> Optional[ReplyTo]:
    """Pick the reply-to variant; a lone address never goes in the list form."""
    if not reply_to:
        return None

    if isinstance(reply_to, str):
        return SingleReplyTo(parse_address_string(reply_to))

    if isinstance(reply_to, (list, tuple)):
        addresses = normalize_addresses(reply_to)
        if len(addresses) > 1:
            return ReplyToList(addresses)
        if addresses:
            return SingleReplyTo(addresses[0])
        return None

    return SingleReplyTo(normalize_address(reply_to))


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    return str(value)


def resolve_content(text, html) -> Optional[List[Dict[str, str]]]:
    """HTML part first, then plain text; None when there is no body."""
    if not text and not html:
        return None

    content = []
    if html:
        content.append({'type': 'text/html', 'value': _as_text(html)})
    if text:
        content.append({'type': 'text/plain', 'value': _as_text(text)})
    return content


def _attachment_fields(attachment) -> tuple:
    if isinstance(attachment, Attachment):
        return attachment.filename, attachment.content, attachment.content_type
    if isinstance(attachment, Mapping):
        return (
            attachment.get('filename'),
            attachment.get('content'),
            attachment.get('content_type'),
        )
    raise ValidationError(f'Unsupported attachment type: {type(attachment).__name__}')


def resolve_attachment(attachment) -> Dict[str, Any]:
    filename, content, content_type = _attachment_fields(attachment)

    if not filename or content is None or content == '':
        raise ValidationError('Attachment is missing filename or content')

    if isinstance(content, str):
        data = content.encode('utf-8')
    elif isinstance(content, (bytes, bytearray)):
        data = bytes(content)
    else:
        raise ValidationError('Attachment content must be a string or a buffer')

    resolved = {'content': data, 'filename': filename}
    if content_type:
        resolved['type'] = content_type
    return resolved


def resolve_attachments(attachments) -> Optional[List[Dict[str, Any]]]:
    """
    Validate attachments; None when absent.

    An empty list is also reported as None so the key is left out of the
    payload.
    """
    if attachments is None:
        return None
    resolved = [resolve_attachment(attachment) for attachment in attachments]
    return resolved or None


def build_payload(
    message: SendEmailOptions,
    default_from_address: str,
    default_from_name: str
) -> Dict[str, Any]:
    """
    Build the SendGrid request body for a message.

    Args:
        message: SendEmailOptions to send
        default_from_address: Sender email used when the message has none
        default_from_name: Sender name used when the message has none

    Returns:
        Payload dict; attachment content is raw bytes (see serialize_payload)

    Raises:
        ValidationError: If an attachment or address is malformed
    """
    attachments = resolve_attachments(message.attachments)

    personalization = {
        'to': [address.to_dict() for address in normalize_addresses(message.to)]
    }

    cc = normalize_addresses(message.cc)
    if cc:
        personalization['cc'] = [address.to_dict() for address in cc]

    bcc = normalize_addresses(message.bcc)
    if bcc:
        personalization['bcc'] = [address.to_dict() for address in bcc]

    payload = {
        'from': resolve_from(message.from_address, default_from_address, default_from_name),
        'subject': message.subject or '',
        'personalizations': [personalization],
    }

    content = resolve_content(message.text, message.html)
    if content:
        payload['content'] = content

    if attachments:
        payload['attachments'] = attachments

    reply_to = resolve_reply_to(message.reply_to)
    if reply_to is not None:
        reply_to.apply(payload)

    for field_name in PASSTHROUGH_FIELDS:
        value = getattr(message, field_name)
        if value is not None:
            payload[field_name] = value

    return payload


def serialize_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready copy of a payload with attachment bytes base64-encoded."""
    wire = dict(payload)
    if 'attachments' in payload:
        wire['attachments'] = [
            {**attachment, 'content': base64.b64encode(attachment['content']).decode('ascii')}
            for attachment in payload['attachments']
        ]
    return wire
