"""
Helpers for dealing with urn:uuid:... URIs

See RFC 4122 for the urn:uuid namespace.
"""

import re
from dataclasses import dataclass
from typing import Any

from ..exceptions import AddressParseError

URN_UUID_PREFIX = "urn:uuid:"

_URN_UUID_PATTERN = re.compile(r'urn:uuid:(?P<uuid>[^:]+)')


@dataclass(frozen=True)
class ParsedUrnUuid:
    """Components parsed from a urn:uuid URI"""
    uuid: str


def is_urn_uuid(value: Any) -> bool:
    """
    Check whether the provided value is a urn:uuid URI.
    
    Only the prefix is checked; the suffix is not validated as a UUID.
    
    Args:
        value: Value to test
        
    Returns:
        bool: True iff the value is a string starting with 'urn:uuid:'
    """
    if not isinstance(value, str):
        return False
    return value.startswith(URN_UUID_PREFIX)


def parse_urn_uuid(value: str) -> ParsedUrnUuid:
    """
    Parse the provided urn:uuid URI to get the uuid.
    
    Args:
        value: urn:uuid to parse
        
    Returns:
        ParsedUrnUuid: Parsed components including the bare uuid
        
    Raises:
        AddressParseError: If no uuid can be parsed from the value
    """
    match = _URN_UUID_PATTERN.search(value) if isinstance(value, str) else None
    if match is None:
        raise AddressParseError(
            f"unable to parse uuid from {value}",
            details={"value": value}
        )
    return ParsedUrnUuid(uuid=match.group('uuid'))


def urn_uuid_from_uuid(uuid_value) -> str:
    """Format a uuid (str or uuid.UUID) as a urn:uuid URI."""
    return f"{URN_UUID_PREFIX}{uuid_value}"
