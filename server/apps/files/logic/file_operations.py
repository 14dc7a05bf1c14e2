"""Business logic for file-tree operations.

Each operation takes its collaborators explicitly so views, tests and
scripts can run them against any repository and validator.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from server.apps.core.exceptions import (
    ErrorReason,
    NotFoundError,
    PayloadNotApplicableError,
    ValidationError,
)
from server.apps.files.logic.node_repository import (
    RENDITION_SIZES,
    NodeRepository,
)
from server.apps.files.logic.requests import CreateNodeRequest
from server.apps.files.logic.tree_validator import TreeValidator
from server.apps.files.models import ROOT_PARENT_ID, Node

if TYPE_CHECKING:
    from django.core.files import File

logger = logging.getLogger(__name__)


def create_node(
    validator: TreeValidator,
    repository: NodeRepository,
    owner_id: str,
    body: Mapping[str, object],
) -> Node:
    """Validate a creation request and persist the node.

    Args:
        validator: Tree validator.
        repository: Node store.
        owner_id: Id of the creating user.
        body: Decoded JSON request body.

    Returns:
        Created Node instance.

    Raises:
        ValidationError: If the request breaks a tree rule.
        StorageError: If the payload or metadata cannot be written.
    """
    request = CreateNodeRequest.from_body(body)
    parent = validator.validate(request)
    return repository.insert(owner_id, request, parent)


def list_nodes(
    validator: TreeValidator,
    repository: NodeRepository,
    owner_id: str,
    parent_id: object = ROOT_PARENT_ID,
    page: int = 0,
) -> list[Node]:
    """List one page of the owner's nodes under a folder.

    Args:
        validator: Tree validator, used to resolve the parent.
        repository: Node store.
        owner_id: Id of the listing user.
        parent_id: Parent id as sent by the caller.
        page: 0-indexed page number.

    Returns:
        Nodes in insertion order, possibly empty.

    Raises:
        NotFoundError: If a non-root parent id does not name a folder.
    """
    try:
        parent = validator.resolve_parent(parent_id)
    except ValidationError as error:
        logger.debug('Listing under invalid parent: %s', error.reason)
        raise NotFoundError() from error
    return repository.list_by_parent(owner_id, parent, page)


def get_owned_node(
    repository: NodeRepository,
    node_id: object,
    owner_id: str,
) -> Node:
    """Get a node that belongs to the caller.

    Raises:
        NotFoundError: If the node is absent or owned by someone else.
    """
    node = repository.find_by_id(node_id, owner_id)
    if node is None:
        raise NotFoundError()
    return node


def set_node_visibility(
    repository: NodeRepository,
    node_id: object,
    owner_id: str,
    is_public: bool,
) -> Node:
    """Publish or unpublish a node that belongs to the caller.

    Raises:
        NotFoundError: If the node is absent or owned by someone else.
    """
    node = repository.set_visibility(node_id, owner_id, is_public)
    if node is None:
        raise NotFoundError()
    return node


def read_payload(
    repository: NodeRepository,
    node_id: object,
    caller_id: str | None,
    size: str | None = None,
) -> tuple[Node, 'File', str]:
    """Open the payload of a node the caller may read.

    Args:
        repository: Node store.
        node_id: Node id.
        caller_id: Id of the caller, or None for anonymous callers.
        size: Optional rendition width ('500', '250' or '100').

    Returns:
        Tuple of (node, readable file, MIME type).

    Raises:
        NotFoundError: If the node is not readable by the caller or its
            blob is missing.
        PayloadNotApplicableError: If the node is a folder.
        ValidationError: If the rendition size is not supported.
    """
    node = repository.find_public_or_owned(node_id, caller_id)
    if node is None:
        raise NotFoundError()
    if node.is_folder:
        raise PayloadNotApplicableError()
    if size is not None and size not in RENDITION_SIZES:
        raise ValidationError(
            ErrorReason.INVALID_RENDITION_SIZE,
            'Size must be one of {0}'.format(
                ', '.join(sorted(RENDITION_SIZES, key=int, reverse=True)),
            ),
        )

    stream, content_type = repository.open_payload(node, size)
    return node, stream, content_type
