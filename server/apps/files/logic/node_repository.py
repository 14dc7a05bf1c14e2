"""Persistence of file-tree nodes and their payloads.

Node metadata lives in the database through the Django ORM; payload
bytes live in S3-compatible storage. Every lookup is scoped to an
owner unless the node is public.
"""

import logging
import re
import uuid
from typing import TYPE_CHECKING, Final, final

from django.core.files.base import ContentFile
from django.db import DatabaseError, transaction

from server.apps.core.exceptions import (
    ErrorReason,
    NotFoundError,
    StorageError,
)
from server.apps.files.infrastructure.metadata import (
    decode_payload,
    detect_mime_type,
)
from server.apps.files.models import Node

if TYPE_CHECKING:
    from django.core.files import File

    from server.apps.files.infrastructure.storage import FileStorage
    from server.apps.files.logic.requests import CreateNodeRequest

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE: Final = 20

# Image rendition widths stored next to the original as <key>_<size>
RENDITION_SIZES: Final = frozenset(('500', '250', '100'))

# Positive integer without leading zeros, within BIGINT range
_NODE_ID_PATTERN: Final = re.compile('[1-9][0-9]{0,18}')
_MAX_NODE_ID: Final = 2 ** 63 - 1


def parse_node_id(raw_id: object) -> int | None:
    """Parse a caller-supplied node id.

    Args:
        raw_id: Id from a URL or request body (string or integer).

    Returns:
        Integer id, or None if the value is not a syntactically valid id.
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        node_id = raw_id
    elif isinstance(raw_id, str) and _NODE_ID_PATTERN.fullmatch(raw_id):
        node_id = int(raw_id)
    else:
        return None
    if not 0 < node_id <= _MAX_NODE_ID:
        return None
    return node_id


@final
class NodeRepository:
    """Store of file-tree nodes and their payload blobs."""

    def __init__(
        self,
        storage: 'FileStorage',
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize the repository.

        Args:
            storage: Blob storage for file and image payloads.
            page_size: Number of nodes per listing page.
        """
        self._storage = storage
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        """Number of nodes per listing page."""
        return self._page_size

    def get(self, node_id: object) -> Node | None:
        """Get a node by id regardless of owner.

        Only used to check tree structure; never returned to callers.

        Args:
            node_id: Node id.

        Returns:
            Node, or None if the id is invalid or unknown.
        """
        parsed_id = parse_node_id(node_id)
        if parsed_id is None:
            return None
        return Node.objects.filter(id=parsed_id).first()

    def find_by_id(self, node_id: object, owner_id: str) -> Node | None:
        """Get a node owned by the given user.

        Args:
            node_id: Node id.
            owner_id: Id of the expected owner.

        Returns:
            Node, or None if absent or owned by someone else.
        """
        parsed_id = parse_node_id(node_id)
        if parsed_id is None:
            return None
        return Node.objects.filter(id=parsed_id, owner_id=owner_id).first()

    def find_public_or_owned(
        self,
        node_id: object,
        caller_id: str | None,
    ) -> Node | None:
        """Get a node the caller may read.

        Private nodes of other users are reported as absent, exactly
        like nodes that do not exist.

        Args:
            node_id: Node id.
            caller_id: Id of the caller, or None for anonymous callers.

        Returns:
            Node if public or owned by the caller, None otherwise.
        """
        parsed_id = parse_node_id(node_id)
        if parsed_id is None:
            return None
        node = Node.objects.filter(id=parsed_id).first()
        if node is None:
            return None
        is_owner = caller_id is not None and str(node.owner_id) == str(caller_id)
        if node.is_public or is_owner:
            return node
        return None

    def list_by_parent(
        self,
        owner_id: str,
        parent: Node | None,
        page: int,
        page_size: int | None = None,
    ) -> list[Node]:
        """List one page of an owner's nodes under a parent.

        Args:
            owner_id: Owner of the listed nodes.
            parent: Parent folder, or None for top-level nodes.
            page: 0-indexed page number.
            page_size: Nodes per page, defaults to the repository's.

        Returns:
            Nodes in insertion order; empty for out-of-range pages.
        """
        size = self._page_size if page_size is None else page_size
        if page < 0 or size <= 0:
            return []
        offset = page * size
        # OFFSET and LIMIT must stay within BIGINT
        if offset > _MAX_NODE_ID - size:
            return []
        logger.debug(
            'Listing nodes: owner=%s parent=%s page=%d',
            owner_id,
            parent.id if parent else None,
            page,
        )
        return list(
            Node.objects.filter(
                owner_id=owner_id,
                parent=parent,
            ).order_by('id')[offset:offset + size],
        )

    def insert(
        self,
        owner_id: str,
        request: 'CreateNodeRequest',
        parent: Node | None,
    ) -> Node:
        """Persist a validated creation request.

        Payloads are written to storage first, then the metadata row
        is inserted. If the insert fails the blob stays in storage as
        an orphan and the failure is reported as a storage fault.

        Args:
            owner_id: Id of the creating user.
            request: Request that passed tree validation.
            parent: Resolved parent folder, or None for top level.

        Returns:
            Created Node instance.

        Raises:
            StorageError: If the blob write or the metadata insert fails.
        """
        payload_ref = ''
        if not request.is_folder:
            payload_ref = self._write_payload(str(request.payload))

        try:
            with transaction.atomic():
                node = Node.objects.create(
                    owner_id=owner_id,
                    name=request.name,
                    kind=request.kind,
                    parent=parent,
                    is_public=request.is_public,
                    payload=payload_ref,
                )
        except DatabaseError as error:
            if payload_ref:
                logger.exception(
                    'Database insert failed, payload orphaned: %s',
                    payload_ref,
                )
            else:
                logger.exception(
                    'Database insert failed for node: %s',
                    request.name,
                )
            raise StorageError(
                ErrorReason.METADATA_WRITE_FAILED,
                'Error saving the file',
            ) from error

        logger.info(
            'Node created: %s %s (ID: %d, owner: %s)',
            node.kind,
            node.name,
            node.id,
            owner_id,
        )
        return node

    def set_visibility(
        self,
        node_id: object,
        owner_id: str,
        is_public: bool,
    ) -> Node | None:
        """Publish or unpublish an owned node.

        Concurrent toggles are last-writer-wins.

        Args:
            node_id: Node id.
            owner_id: Id of the expected owner.
            is_public: New visibility.

        Returns:
            Updated Node, or None if no owned node matches.
        """
        parsed_id = parse_node_id(node_id)
        if parsed_id is None:
            return None
        updated = Node.objects.filter(
            id=parsed_id,
            owner_id=owner_id,
        ).update(is_public=is_public)
        if not updated:
            return None
        logger.info(
            'Node visibility changed: ID=%d, public=%s',
            parsed_id,
            is_public,
        )
        return Node.objects.get(id=parsed_id)

    def open_payload(
        self,
        node: Node,
        size: str | None = None,
    ) -> tuple['File', str]:
        """Open a node's payload, or one of its renditions.

        Args:
            node: File or image node.
            size: Optional rendition width from RENDITION_SIZES.

        Returns:
            Tuple of (readable file, MIME type inferred from the name).

        Raises:
            NotFoundError: If the blob is missing from storage.
            StorageError: If storage cannot be read.
        """
        blob_name = node.payload.name
        if size is not None:
            blob_name = f'{blob_name}_{size}'

        try:
            stream = self._storage.open_blob(blob_name)
        except FileNotFoundError as error:
            raise NotFoundError() from error
        except Exception as error:
            logger.exception('Failed to read payload: %s', blob_name)
            raise StorageError(
                ErrorReason.BLOB_READ_FAILED,
                'Error reading the file',
            ) from error

        return stream, detect_mime_type(node.name)

    def count(self) -> int:
        """Count all nodes in the store."""
        return Node.objects.count()

    def _write_payload(self, encoded: str) -> str:
        content_id = str(uuid.uuid4())
        try:
            return self._storage.save(
                content_id,
                ContentFile(decode_payload(encoded)),
            )
        except Exception as error:
            raise StorageError(
                ErrorReason.BLOB_WRITE_FAILED,
                'Error saving the file',
            ) from error
