"""
Address normalization for the SendGrid payload.

Turns the address shapes accepted in SendEmailOptions into SendGrid's
``{"email": ..., "name": ...}`` objects.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sendgrid_rest.providers.email_adapter import Address, AddressInput, ValidationError


_ANGLE_BRACKETS = re.compile(r'<([^<>]*)>')


@dataclass(frozen=True)
class UniformAddress:
    """SendGrid email object. ``name`` is None when it adds nothing."""
    email: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {'email': self.email}
        if self.name is not None:
            data['name'] = self.name
        return data


def _display_name(name: Optional[str], email: str) -> Optional[str]:
    if not name or name == email:
        return None
    return name


def parse_address_string(value: str) -> UniformAddress:
    """
    Parse ``"Name <email>"`` (or ``"email <Name>"``) into a UniformAddress.

    The text before the first ``<...>`` pair is the email and the bracketed
    text the name, unless only the bracketed part looks like an address, in
    which case the two swap. A string without brackets is a bare email.
    """
    match = _ANGLE_BRACKETS.search(value)
    if not match:
        return UniformAddress(email=value.strip())

    outer = value[:match.start()].strip()
    inner = match.group(1).strip()

    if '@' in inner and '@' not in outer:
        email, name = inner, outer
    else:
        email, name = outer, inner

    return UniformAddress(email=email, name=_display_name(name, email))


def _from_structured(value: Address) -> UniformAddress:
    if not isinstance(value.address, str) or not value.address.strip():
        raise ValidationError('Address is missing an email address')
    email = parse_address_string(value.address).email
    name = value.name
    if name == value.address:
        name = None
    return UniformAddress(email=email, name=_display_name(name, email))


def _from_mapping(value: Mapping[str, Any]) -> UniformAddress:
    if 'address' not in value:
        raise ValidationError("Address mapping must have an 'address' key")
    return _from_structured(Address(address=value['address'], name=value.get('name')))


def normalize_address(value: Any) -> UniformAddress:
    """Normalize a single string, Address or address mapping."""
    if isinstance(value, str):
        return parse_address_string(value)
    if isinstance(value, Address):
        return _from_structured(value)
    if isinstance(value, Mapping):
        return _from_mapping(value)
    raise ValidationError(f'Unsupported address type: {type(value).__name__}')


def normalize_addresses(value: AddressInput) -> List[UniformAddress]:
    """
    Normalize any accepted address input into an ordered list.

    Absent or empty input yields an empty list. Lists keep their order and
    duplicates.
    """
    if value is None:
        return []
    if isinstance(value, str) and not value.strip():
        return []
    if isinstance(value, (list, tuple)):
        return [normalize_address(item) for item in value]
    return [normalize_address(value)]
