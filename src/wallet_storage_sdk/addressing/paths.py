"""
Storage URL path parsing and construction

A space lives at ``/space/{uuid}`` and every resource in that space lives
below it at ``/space/{uuid}/{resource...}``.
"""

import re
import uuid
from dataclasses import dataclass
from typing import Optional

from ..exceptions import AddressParseError
from .urn_uuid import is_urn_uuid, parse_urn_uuid

SPACE_PATH_PREFIX = "/space/"

_RESOURCE_PATH_PATTERN = re.compile(r'(?P<space_path>/space/[^/]+)(?P<resource_path>.*)', re.DOTALL)


@dataclass(frozen=True)
class ParsedResourcePath:
    """
    A full storage path split into its space and resource parts
    
    Attributes:
        space_path: Path of the owning space, e.g. ``/space/abc``
        resource_path: Remainder within the space, e.g. ``/notes/1`` (may be empty)
    """
    space_path: str
    resource_path: str


def space_path_for_id(space_id: str) -> str:
    """
    Get the storage path of a space from its urn:uuid id.
    
    Raises:
        AddressParseError: If space_id is not a urn:uuid
    """
    if not is_urn_uuid(space_id):
        raise AddressParseError(
            "expected space id to be a urn:uuid",
            details={"space": space_id}
        )
    return f"{SPACE_PATH_PREFIX}{parse_urn_uuid(space_id).uuid}"


def parse_resource_path(path: str) -> ParsedResourcePath:
    """
    Parse a full storage URL path for a resource.
    
    Args:
        path: Path to parse, e.g. ``/space/{uuid}/some/resource``
        
    Returns:
        ParsedResourcePath: The space path and resource path within the space
        
    Raises:
        AddressParseError: If the path has no ``/space/{id}`` prefix
    """
    match = _RESOURCE_PATH_PATTERN.search(path) if isinstance(path, str) else None
    if match is None:
        raise AddressParseError(
            "unable to parse space path from resource path",
            details={"resource": path}
        )
    return ParsedResourcePath(
        space_path=match.group('space_path'),
        resource_path=match.group('resource_path'),
    )


def normalize_resource_segment(name: Optional[str] = None, uuid_value: Optional[str] = None) -> str:
    """
    Normalize a caller-supplied resource name into a rooted segment.
    
    Names that already start with '/' are used as-is, others get a leading '/'.
    Without a name, ``uuid_value`` or a fresh random uuid4 is used.
    """
    if name is None:
        return f"/{uuid_value or uuid.uuid4()}"
    if not isinstance(name, str):
        raise AddressParseError(
            "unexpected resource path parameter",
            details={"resource_path": repr(name)}
        )
    if name.startswith('/'):
        return name
    return f"/{name}"


class StorageURLPath:
    """Validated full storage path of a resource"""
    
    def __init__(self, path: str):
        self._parsed = parse_resource_path(path)
    
    @property
    def space_path(self) -> str:
        return self._parsed.space_path
    
    @property
    def resource_path(self) -> str:
        return self._parsed.resource_path
    
    def __str__(self) -> str:
        return f"{self._parsed.space_path}{self._parsed.resource_path}"
    
    def __repr__(self) -> str:
        return f"StorageURLPath({str(self)!r})"
    
    def __eq__(self, other) -> bool:
        if isinstance(other, StorageURLPath):
            return str(self) == str(other)
        return NotImplemented
    
    def __hash__(self) -> int:
        return hash(str(self))
