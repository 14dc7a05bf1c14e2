"""Error taxonomy shared by every app.

Every failure the registry reports to a caller is one of a closed
family of errors. Each carries a machine-checkable ``reason`` code and
a human-readable ``message``; views map the family to HTTP statuses.
"""

import enum
from typing import ClassVar, Final

_UNAUTHORIZED_MESSAGE: Final = 'Unauthorized'
_NOT_FOUND_MESSAGE: Final = 'Not found'


class ErrorReason(enum.StrEnum):
    """Reason codes attached to registry errors."""

    # Request shape
    INVALID_BODY = 'invalid_body'
    UNEXPECTED_FIELD = 'unexpected_field'

    # Node creation
    MISSING_NAME = 'missing_name'
    MISSING_KIND = 'missing_kind'
    NAME_NOT_STRING = 'name_not_string'
    KIND_NOT_STRING = 'kind_not_string'
    IS_PUBLIC_NOT_BOOLEAN = 'is_public_not_boolean'
    INVALID_KIND = 'invalid_kind'
    MISSING_PAYLOAD = 'missing_payload'
    EMPTY_NAME = 'empty_name'
    INVALID_NAME_CHARACTERS = 'invalid_name_characters'
    NAME_TOO_LONG = 'name_too_long'
    FOLDER_NAME_HAS_DOT = 'folder_name_has_dot'
    INVALID_PAYLOAD_ENCODING = 'invalid_payload_encoding'
    PAYLOAD_TOO_LARGE = 'payload_too_large'
    INVALID_PARENT_ID = 'invalid_parent_id'
    PARENT_NOT_FOUND = 'parent_not_found'
    PARENT_NOT_FOLDER = 'parent_not_folder'

    # Payload reads
    PAYLOAD_NOT_APPLICABLE = 'payload_not_applicable'
    INVALID_RENDITION_SIZE = 'invalid_rendition_size'

    # Accounts
    MALFORMED_CREDENTIALS = 'malformed_credentials'
    MISSING_EMAIL = 'missing_email'
    MISSING_PASSWORD = 'missing_password'
    EMAIL_NOT_STRING = 'email_not_string'
    PASSWORD_NOT_STRING = 'password_not_string'
    INVALID_EMAIL = 'invalid_email'
    WEAK_PASSWORD = 'weak_password'
    EMAIL_TAKEN = 'email_taken'
    UNAUTHORIZED = 'unauthorized'

    # Lookups
    NOT_FOUND = 'not_found'

    # Infrastructure
    BLOB_WRITE_FAILED = 'blob_write_failed'
    BLOB_READ_FAILED = 'blob_read_failed'
    METADATA_WRITE_FAILED = 'metadata_write_failed'
    STORE_UNAVAILABLE = 'store_unavailable'


class RegistryError(Exception):
    """Base class for every error surfaced to registry callers."""

    status_code: ClassVar[int] = 500

    def __init__(self, reason: ErrorReason, message: str) -> None:
        """Initialize RegistryError.

        Args:
            reason: Machine-checkable reason code.
            message: Human-readable description returned to the caller.
        """
        self.reason = reason
        self.message = message
        super().__init__(message)


class ValidationError(RegistryError):
    """Malformed, missing or out-of-policy input.

    The message is returned to the caller verbatim.
    """

    status_code = 400


class CredentialDecodeError(ValidationError):
    """Raised when a transport credential cannot be decoded."""

    def __init__(self, message: str) -> None:
        """Initialize CredentialDecodeError.

        Args:
            message: Description of the decoding failure.
        """
        super().__init__(ErrorReason.MALFORMED_CREDENTIALS, message)


class PayloadNotApplicableError(ValidationError):
    """Raised when payload bytes are requested for a folder."""

    def __init__(self) -> None:
        """Initialize PayloadNotApplicableError."""
        super().__init__(
            ErrorReason.PAYLOAD_NOT_APPLICABLE,
            "A folder doesn't have content",
        )


class AuthError(RegistryError):
    """Missing, unknown or expired session, or rejected credentials.

    The message never tells the caller which of these happened.
    """

    status_code = 401

    def __init__(self) -> None:
        """Initialize AuthError with the generic rejection message."""
        super().__init__(ErrorReason.UNAUTHORIZED, _UNAUTHORIZED_MESSAGE)


class NotFoundError(RegistryError):
    """Resource is absent or not visible to the caller.

    Absent and forbidden resources are reported identically.
    """

    status_code = 404

    def __init__(self) -> None:
        """Initialize NotFoundError with the generic message."""
        super().__init__(ErrorReason.NOT_FOUND, _NOT_FOUND_MESSAGE)


class StorageError(RegistryError):
    """Underlying store unavailable or a write failed."""

    status_code = 500
