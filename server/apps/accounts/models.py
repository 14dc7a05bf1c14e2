"""Database models for accounts app."""

from typing import ClassVar, Final, final, override

from django.db import models

from server.apps.accounts.logic.hashing import hash_password, verify_password

# Constants for field max lengths
_EMAIL_MAX_LENGTH: Final = 254
_PASSWORD_HASH_LENGTH: Final = 40  # SHA1 hex length


class UserManager(models.Manager['User']):
    """Manager creating users with hashed passwords."""

    def create_user(self, email: str, password: str) -> 'User':
        """Create a user, storing only the password digest.

        Args:
            email: Unique email, matched case-sensitively.
            password: Plaintext password.

        Returns:
            Created User instance.
        """
        return self.create(email=email, password=hash_password(password))


@final
class User(models.Model):
    """Registered user of the file registry.

    Users are created on registration and never modified or deleted
    afterwards.
    """

    email = models.EmailField(
        max_length=_EMAIL_MAX_LENGTH,
        unique=True,
    )

    password = models.CharField(
        max_length=_PASSWORD_HASH_LENGTH,
        help_text='Hex digest of the password',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    objects: ClassVar[UserManager] = UserManager()

    class Meta:
        """Model metadata."""

        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.email

    def check_password(self, password: str) -> bool:
        """Check a plaintext password against the stored digest.

        Args:
            password: Plaintext password.

        Returns:
            True if the password matches.
        """
        return verify_password(password, self.password)

    def as_projection(self) -> dict[str, str]:
        """Public representation without the password digest."""
        return {'id': str(self.id), 'email': self.email}
