"""
Iteration of remote storage collections

A collection is an ActivityStreams-style JSON document listing the named
items stored below a path. Only the single fetched page is exposed; no
pagination cursor is followed.
"""

import json
import logging
from typing import AsyncIterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, ValidationError as PydanticValidationError

from .activitypub import ACTIVITYPUB_MEDIA_TYPE
from .exceptions import NotFoundError, ShapeValidationError, TransportFailureError, UnauthorizedError
from .http_clients.response import StorageResponse
from .http_clients.transport import Transport, call_transport
from .signing.http_signature import sign_headers
from .signing.signing_config import HttpSignatureConfig
from .signing.types import HttpMethod, Signer

logger = logging.getLogger(__name__)


class CollectionItem(BaseModel):
    """One named entry of a collection."""
    
    name: StrictStr = Field(..., description="Name of the item relative to the collection")
    url: StrictStr = Field(..., description="Location of the item")


class CollectionGetResponseBody(BaseModel):
    """Shape of the JSON body returned by GET on a collection."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    type: Literal["Collection"]
    total_items: Union[StrictInt, StrictFloat] = Field(..., alias="totalItems")
    items: List[CollectionItem]


async def fetch_collection(
    path: str,
    transport: Transport,
    signer: Optional[Signer] = None,
    signing_config: Optional[HttpSignatureConfig] = None,
) -> CollectionGetResponseBody:
    """
    Fetch and validate a collection with one (optionally signed) GET.
    
    Raises:
        NotFoundError: If the collection does not exist
        UnauthorizedError: If the server rejects the request's authorization
        TransportFailureError: On any other non-success status
        ShapeValidationError: If the body is not a valid collection
    """
    headers = await sign_headers(
        HttpMethod.GET,
        path,
        {'accept': ACTIVITYPUB_MEDIA_TYPE},
        signer=signer,
        config=signing_config,
    )
    raw = await call_transport(transport, path, method=HttpMethod.GET.value, headers=headers)
    response = StorageResponse.from_transport(raw)
    
    if not response.ok:
        if response.status == 404:
            raise NotFoundError(
                "failed to iterate collection items because collection not found",
                response=response,
                details={"path": path}
            )
        if response.status == 401:
            raise UnauthorizedError(
                "failed to iterate collection items because the request was not authorized",
                response=response,
                details={"path": path}
            )
        raise TransportFailureError(
            f"failed to iterate collection items because response status was {response.status}",
            http_status=response.status,
            response=response,
            details={"path": path}
        )
    
    try:
        body = await response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ShapeValidationError(
            f"collection body is not JSON: {e}",
            details={"path": path}
        ) from e
    
    try:
        return CollectionGetResponseBody.model_validate(body)
    except PydanticValidationError as e:
        logger.debug(f"invalid collection body from {path}: {body!r}")
        raise ShapeValidationError(
            "unexpected collection fetched to start iterating collection items",
            details={"path": path, "errors": e.errors()}
        ) from e


async def iterate_collection_items(
    path: str,
    transport: Transport,
    signer: Optional[Signer] = None,
    signing_config: Optional[HttpSignatureConfig] = None,
) -> AsyncIterator[CollectionItem]:
    """
    Async iterate the items in a remote storage collection.
    
    The collection is fetched once, when iteration starts; iterating again
    requires a new call.
    
    Args:
        path: Storage path of the collection (``/space/{uuid}/...``)
        transport: Transport used to send the request
        signer: Optional signer for the request
        signing_config: Optional signing configuration
        
    Yields:
        CollectionItem: Each item of the collection
    """
    collection = await fetch_collection(path, transport, signer, signing_config)
    for item in collection.items:
        yield item
