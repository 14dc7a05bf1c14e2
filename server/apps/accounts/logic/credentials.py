"""Decoding of HTTP Basic credentials into an identity pair."""

import base64
import binascii
from typing import Final, NamedTuple

from server.apps.core.exceptions import CredentialDecodeError

_BASIC_SCHEME: Final = 'Basic '
_SEPARATOR: Final = ':'


class Credentials(NamedTuple):
    """Plaintext identity pair extracted from a credential blob."""

    email: str
    password: str


def decode_basic_credentials(header: str | None) -> Credentials:
    """Decode an ``Authorization: Basic ...`` header value.

    The decoded text is split at the first ``:``, so passwords may
    themselves contain colons.

    Args:
        header: Raw header value, or None when the header is absent.

    Returns:
        Decoded credentials.

    Raises:
        CredentialDecodeError: If the scheme is missing, the body is not
            valid base64 or UTF-8, the separator is missing, or either
            half of the pair is empty.
    """
    if not header or not header.startswith(_BASIC_SCHEME):
        raise CredentialDecodeError('Missing Basic authorization scheme')

    encoded = header[len(_BASIC_SCHEME):].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as error:
        raise CredentialDecodeError('Malformed credentials') from error

    email, separator, password = decoded.partition(_SEPARATOR)
    if not separator:
        raise CredentialDecodeError('Missing credentials separator')
    if not email or not password:
        raise CredentialDecodeError('Missing email or password')

    return Credentials(email=email, password=password)


def encode_basic_credentials(email: str, password: str) -> str:
    """Build an ``Authorization`` header value for the given pair.

    Args:
        email: User email.
        password: Plaintext password.

    Returns:
        Header value in the ``Basic <base64>`` form.
    """
    raw = f'{email}{_SEPARATOR}{password}'.encode('utf-8')
    return _BASIC_SCHEME + base64.b64encode(raw).decode('ascii')
