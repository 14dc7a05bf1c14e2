"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.db import models

# Parent id echoed to callers for top-level nodes
ROOT_PARENT_ID: Final = '0'

# Constants for field max lengths
NAME_MAX_LENGTH: Final = 255
_KIND_MAX_LENGTH: Final = 16
_PAYLOAD_REF_MAX_LENGTH: Final = 100


class NodeKind(models.TextChoices):
    """Kinds of file-tree nodes."""

    FOLDER = 'folder', 'Folder'
    FILE = 'file', 'File'
    IMAGE = 'image', 'Image'


@final
class Node(models.Model):
    """Entry of a user's file tree: a folder, a file or an image.

    Folders carry no payload. Files and images reference a blob in
    S3-compatible storage through ``payload``, whose name is a
    generated content identifier assigned at creation.

    Top-level nodes have no parent row; callers see them with the
    ``'0'`` root sentinel as parent id. Nodes are never renamed or
    moved; only ``is_public`` changes after creation.
    """

    # Owner relationship
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='nodes',
        db_index=True,
    )

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
    )

    kind = models.CharField(
        max_length=_KIND_MAX_LENGTH,
        choices=NodeKind.choices,
    )

    # NULL parent means top-level placement
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        related_name='children',
        null=True,
        blank=True,
    )

    is_public = models.BooleanField(
        default=False,
        help_text='Readable by anyone, with or without a session',
    )

    # Blob key in storage, empty for folders
    payload = models.FileField(
        upload_to='',
        max_length=_PAYLOAD_REF_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Content identifier of the payload in storage',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Node'  # type: ignore[mutable-override]
        verbose_name_plural = 'Nodes'  # type: ignore[mutable-override]
        # Primary keys grow with inserts, so this is insertion order
        ordering: ClassVar[list[str]] = ['id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize directory listing queries
            models.Index(
                fields=['owner', 'parent', 'id'],
                name='files_owner_parent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Payload exists if and only if the node is not a folder
            models.CheckConstraint(
                condition=(
                    models.Q(kind=NodeKind.FOLDER, payload='') |
                    (~models.Q(kind=NodeKind.FOLDER) & ~models.Q(payload=''))
                ),
                name='files_node_payload_iff_not_folder',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.kind}:{self.name}'

    @property
    def is_folder(self) -> bool:
        """Whether the node is a folder."""
        return self.kind == NodeKind.FOLDER

    @property
    def payload_ref(self) -> str | None:
        """Blob key of the payload, or None for folders."""
        return self.payload.name or None

    def as_projection(self) -> dict[str, object]:
        """Public representation returned to callers.

        Example: ``{'id': '7', 'ownerId': '1', 'name': 'docs',
        'kind': 'folder', 'isPublic': False, 'parentId': '0'}``

        Returns:
            Dictionary with string ids and the root sentinel for
            top-level nodes.
        """
        parent_id = ROOT_PARENT_ID
        if self.parent_id is not None:
            parent_id = str(self.parent_id)
        return {
            'id': str(self.id),
            'ownerId': str(self.owner_id),
            'name': self.name,
            'kind': self.kind,
            'isPublic': self.is_public,
            'parentId': parent_id,
        }
