"""ActivityPub-related constants and helpers"""

import logging

logger = logging.getLogger(__name__)

ACTIVITYPUB_MEDIA_TYPE = 'application/ld+json; profile="https://www.w3.org/ns/activitystreams"'

# Some servers send the media type without the space after the first
# semicolon. Accepted on read as a compatibility shim.
ACTIVITYPUB_MEDIA_TYPE_SANS_WHITESPACE = 'application/ld+json;profile="https://www.w3.org/ns/activitystreams"'

# https://www.w3.org/TR/activitypub/#public-addressing
ACTIVITYPUB_PUBLIC_ADDRESS = 'https://www.w3.org/ns/activitystreams#Public'

ACTIVITYPUB_ADDRESSING_PROPERTIES = frozenset(['to', 'bto', 'cc', 'bcc'])


def is_valid_activitypub_media_type(media_type: str) -> bool:
    """Return whether the string is a known ActivityPub media type."""
    if media_type == ACTIVITYPUB_MEDIA_TYPE_SANS_WHITESPACE:
        logger.debug("Accepting ActivityPub media type without whitespace after ';'")
        return True
    return media_type == ACTIVITYPUB_MEDIA_TYPE
