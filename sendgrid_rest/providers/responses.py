"""
SendGrid response handling.

SendGrid accepts a send with 202 and an empty body. Anything else carries
``{"id": ..., "errors": [{"message", "field", "help"}]}``, which is folded
into a single ProviderError message.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from sendgrid_rest.providers.email_adapter import ProviderError


ACCEPTED = 202


@dataclass
class ProviderErrorDetail:
    message: Optional[str] = None
    field: Optional[str] = None
    help: Optional[Any] = None


@dataclass
class ProviderErrorReport:
    id: Optional[str] = None
    errors: List[ProviderErrorDetail] = field(default_factory=list)

    @classmethod
    def from_body(cls, body: Optional[Mapping[str, Any]]) -> 'ProviderErrorReport':
        if not isinstance(body, Mapping):
            return cls()

        errors = []
        for item in body.get('errors') or []:
            if isinstance(item, Mapping):
                errors.append(ProviderErrorDetail(
                    message=item.get('message'),
                    field=item.get('field'),
                    help=item.get('help'),
                ))
        return cls(id=body.get('id'), errors=errors)


def format_error_message(status_code: int, reason: str, report: ProviderErrorReport) -> str:
    formatted = f'Error sending email: {status_code} {reason}'
    if report.id:
        formatted += f' (ID: {report.id})'
    formatted += '.'

    for idx, detail in enumerate(report.errors):
        if not (detail.field and detail.message):
            continue

        formatted += '; ' if idx != 0 else ' '
        if detail.field != 'null':
            formatted += f'Field: {detail.field}, '
        formatted += f'Message: {detail.message}'
        if detail.help:
            formatted += f', Help: {detail.help} '

    return formatted


def interpret_response(
    status_code: int,
    reason: str,
    body: Optional[Mapping[str, Any]] = None
) -> Optional[ProviderError]:
    """
    Classify a SendGrid response.

    Returns:
        None for 202 Accepted, otherwise a ProviderError for the caller to raise
    """
    if status_code == ACCEPTED:
        return None

    report = ProviderErrorReport.from_body(body)
    return ProviderError(format_error_message(status_code, reason, report), status_code)
