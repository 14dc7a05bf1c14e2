"""Metadata and encoding utilities for node payloads."""

import base64
import mimetypes
import re
from typing import Final

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'

# Whole base64 quanta, optionally ending with one padded quantum
_BASE64_PATTERN: Final = re.compile(
    r'(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?',
)

_BYTE_UNITS: Final = ('Bytes', 'KB', 'MB', 'GB', 'TB', 'PB', 'EB', 'ZB', 'YB')
_UNIT_STEP: Final = 1024


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from a node name.

    Args:
        filename: Node name with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'text/plain').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def is_base64(data: str) -> bool:
    """Check that a string uses the base64 alphabet with valid padding.

    Args:
        data: Candidate base64 text.

    Returns:
        True if the string is well-formed base64.
    """
    return _BASE64_PATTERN.fullmatch(data) is not None


def decoded_length(data: str) -> int:
    """Compute the decoded size of a base64 string without decoding it.

    Example: 'SGVsbG8=' -> 5

    Args:
        data: Well-formed base64 text.

    Returns:
        Number of bytes the text decodes to.
    """
    padding = len(data) - len(data.rstrip('='))
    return len(data) // 4 * 3 - padding


def decode_payload(data: str) -> bytes:
    """Decode a validated base64 payload.

    Args:
        data: Well-formed base64 text.

    Returns:
        Raw payload bytes.

    Raises:
        binascii.Error: If the text is not valid base64.
    """
    return base64.b64decode(data, validate=True)


def format_bytes(size_bytes: int) -> str:
    """Convert a byte count to a human-readable size.

    Example: 2147483648 -> '2.00 GB'

    Args:
        size_bytes: Size in bytes.

    Returns:
        Size with two decimals and a binary unit.
    """
    if size_bytes == 0:
        return '0 Bytes'
    exponent = 0
    while (
        exponent < len(_BYTE_UNITS) - 1 and
        size_bytes >= _UNIT_STEP ** (exponent + 1)
    ):
        exponent += 1
    scaled = size_bytes / _UNIT_STEP ** exponent
    return f'{scaled:.2f} {_BYTE_UNITS[exponent]}'
