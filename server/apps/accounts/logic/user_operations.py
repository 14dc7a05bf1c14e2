"""Business logic for user registration and sign-in."""

import logging
import re
from collections.abc import Mapping
from typing import Final

from django.db import IntegrityError, transaction

from server.apps.accounts.models import User
from server.apps.core.exceptions import AuthError, ErrorReason, ValidationError

logger = logging.getLogger(__name__)

_ALLOWED_FIELDS: Final = frozenset(('email', 'password'))

_EMAIL_PATTERN: Final = re.compile(
    r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}',
)

# At least 8 characters, and at least one digit, special char or capital
_PASSWORD_PATTERN: Final = re.compile(
    r'(?=.*\d|.*[@$!%*?&]|.*[A-Z])[A-Za-z\d@$!%*?&]{8,}',
)


def validate_registration(body: Mapping[str, object]) -> tuple[str, str]:
    """Validate a registration request body.

    Checks run in a fixed order and the first failure is reported.

    Args:
        body: Decoded JSON request body.

    Returns:
        Tuple of (email, password).

    Raises:
        ValidationError: If the body is malformed or out of policy.
    """
    unexpected = [key for key in body if key not in _ALLOWED_FIELDS]
    if unexpected:
        raise ValidationError(
            ErrorReason.UNEXPECTED_FIELD,
            'Unexpected attribute(s): {0}'.format(', '.join(unexpected)),
        )

    email = body.get('email')
    password = body.get('password')

    if not email:
        raise ValidationError(ErrorReason.MISSING_EMAIL, 'Missing email')
    if not password:
        raise ValidationError(ErrorReason.MISSING_PASSWORD, 'Missing password')
    if not isinstance(email, str):
        raise ValidationError(
            ErrorReason.EMAIL_NOT_STRING,
            'Email must be a string',
        )
    if not isinstance(password, str):
        raise ValidationError(
            ErrorReason.PASSWORD_NOT_STRING,
            'Password must be a string',
        )
    if not _EMAIL_PATTERN.fullmatch(email):
        raise ValidationError(ErrorReason.INVALID_EMAIL, 'Invalid email format')
    if not _PASSWORD_PATTERN.fullmatch(password):
        raise ValidationError(
            ErrorReason.WEAK_PASSWORD,
            'Password must be at least 8 characters long and include '
            'an uppercase letter, a number or a special character',
        )

    return email, password


def register_user(body: Mapping[str, object]) -> User:
    """Validate a registration request and create the user.

    Args:
        body: Decoded JSON request body.

    Returns:
        Created User instance.

    Raises:
        ValidationError: If the body is invalid or the email is taken.
    """
    email, password = validate_registration(body)

    if User.objects.filter(email=email).exists():
        raise ValidationError(ErrorReason.EMAIL_TAKEN, 'Already exist')

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password)
    except IntegrityError as error:
        # Concurrent registration with the same email
        raise ValidationError(ErrorReason.EMAIL_TAKEN, 'Already exist') from error

    logger.info('User registered: %s (ID: %d)', email, user.id)
    return user


def authenticate_user(email: str, password: str) -> User:
    """Check an identity pair against stored users.

    Args:
        email: Email, matched case-sensitively.
        password: Plaintext password.

    Returns:
        Matching User instance.

    Raises:
        AuthError: If no user has this email or the password is wrong.
    """
    user = User.objects.filter(email=email).first()
    if user is None or not user.check_password(password):
        logger.warning('Authentication failed for user: %s', email)
        raise AuthError()
    return user


def get_user(user_id: str) -> User:
    """Load the user behind an authenticated session.

    Args:
        user_id: Id resolved from the session token.

    Returns:
        User instance.

    Raises:
        AuthError: If the user no longer exists.
    """
    user = User.objects.filter(id=user_id).first()
    if user is None:
        raise AuthError()
    return user


def count_users() -> int:
    """Count registered users."""
    return User.objects.count()
