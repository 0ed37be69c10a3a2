"""
Identifier parsing.

Path and query parameters arrive as strings. A value that cannot be a UUID
is rejected as INVALID_IDENTIFIER before any lookup, so clients can tell a
malformed id from one that names nothing.
"""

from typing import Union
from uuid import UUID

from vidshare.shared.core.exceptions import InvalidIdentifierError


def parse_identifier(value: Union[str, UUID], resource: str) -> UUID:
    """
    Parse an entity id.

    Args:
        value: Raw id from the request
        resource: Entity name used in the error ("video", "comment", ...)

    Raises:
        InvalidIdentifierError: If value is not a UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifierError(resource, value)
