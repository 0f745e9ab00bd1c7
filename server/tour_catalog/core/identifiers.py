"""Document identifier validation."""

from bson import ObjectId
from bson.errors import InvalidId

from .exceptions import InvalidIdentifierError


def is_valid_object_id(value: str) -> bool:
    """
    Return True if ``value`` is a canonical ObjectId string.

    The value must parse as an ObjectId and serialize back to exactly the
    same text, so uppercase hex and other non-canonical spellings are
    rejected along with malformed input.
    """
    if not isinstance(value, str):
        return False
    try:
        return str(ObjectId(value)) == value
    except (InvalidId, TypeError):
        return False


def parse_object_id(value: str, resource_type: str = "tour") -> ObjectId:
    """
    Parse a path identifier, rejecting anything non-canonical.

    Raises:
        InvalidIdentifierError: If the value is not a canonical ObjectId
    """
    if not is_valid_object_id(value):
        raise InvalidIdentifierError(value, resource_type=resource_type)
    return ObjectId(value)
