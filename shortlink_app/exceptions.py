"""
Domain errors raised by the allocation and resolution services.

Every error carries a stable ``kind`` and a human readable ``message``.
The API layer maps kinds to HTTP statuses; services never raise
``HTTPException`` themselves.
"""

from enum import Enum


class ErrorKind(str, Enum):
    FORBIDDEN = "forbidden"
    INVALID_DESTINATION = "invalid_destination"
    INVALID_ALIAS = "invalid_alias"
    RESERVED = "reserved"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    ALLOCATION_EXHAUSTED = "allocation_exhausted"
    STORAGE_ERROR = "storage_error"


class ShortlinkError(Exception):
    """Base class for all rejections surfaced to callers"""

    kind: ErrorKind = ErrorKind.STORAGE_ERROR
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Forbidden(ShortlinkError):
    kind = ErrorKind.FORBIDDEN
    default_message = "You are forbidden to perform this action by admin."


class InvalidDestination(ShortlinkError):
    kind = ErrorKind.INVALID_DESTINATION
    default_message = "Original URL doesn't exist"


class InvalidAlias(ShortlinkError):
    kind = ErrorKind.INVALID_ALIAS
    default_message = "The requested alias is not allowed"


class ReservedAlias(ShortlinkError):
    kind = ErrorKind.RESERVED
    default_message = "The requested custom URL is reserved"


class AliasAlreadyExists(ShortlinkError):
    kind = ErrorKind.ALREADY_EXISTS
    default_message = "The requested custom URL already exists"


class NotFound(ShortlinkError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class AllocationExhausted(ShortlinkError):
    kind = ErrorKind.ALLOCATION_EXHAUSTED
    default_message = "Could not allocate a free short endpoint"


class StorageError(ShortlinkError):
    kind = ErrorKind.STORAGE_ERROR
    default_message = "Failed to save. Please try again"
