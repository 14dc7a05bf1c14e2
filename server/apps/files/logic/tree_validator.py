"""Validation of node creation requests against tree rules.

A request passes through an ordered pipeline of checks and the first
failing check decides the reported reason. The order is part of the
contract: the same bad request always yields the same reason.

Checks, in order:
1. No fields outside the recognized set
2. ``name`` and ``kind`` present and strings, ``isPublic`` boolean
3. ``kind`` is a known node kind
4. Files and images carry a payload
5. ``name`` is non-empty, has no reserved characters, fits 255 chars
6. Folder names contain no dot
7. Payloads are base64 and decode to at most 2 GiB
8. The parent is the root sentinel or an existing folder
"""

import logging
import re
from collections.abc import Callable
from typing import Final, final

from server.apps.core.exceptions import ErrorReason, ValidationError
from server.apps.files.infrastructure.metadata import (
    decoded_length,
    format_bytes,
    is_base64,
)
from server.apps.files.logic.node_repository import (
    NodeRepository,
    parse_node_id,
)
from server.apps.files.logic.requests import CreateNodeRequest
from server.apps.files.models import (
    NAME_MAX_LENGTH,
    ROOT_PARENT_ID,
    Node,
    NodeKind,
)

logger = logging.getLogger(__name__)

# 2 GiB
MAX_PAYLOAD_BYTES: Final = 2 * 1024 * 1024 * 1024

# Reserved path characters and ASCII control characters
_INVALID_NAME_CHARACTERS: Final = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')

_Check = Callable[[CreateNodeRequest], None]


def is_root_parent(parent_id: object) -> bool:
    """Check whether a parent id denotes top-level placement.

    Args:
        parent_id: Parent id as sent by the caller.

    Returns:
        True for the root sentinel, as a string or an integer.
    """
    if isinstance(parent_id, bool):
        return False
    if isinstance(parent_id, int):
        return parent_id == 0
    return parent_id == ROOT_PARENT_ID


@final
class TreeValidator:
    """Decides whether a node creation request may be persisted."""

    def __init__(
        self,
        repository: NodeRepository,
        max_payload_bytes: int = MAX_PAYLOAD_BYTES,
    ) -> None:
        """Initialize the validator.

        Args:
            repository: Node store used to resolve parents.
            max_payload_bytes: Largest accepted decoded payload size.
        """
        self._repository = repository
        self._max_payload_bytes = max_payload_bytes
        self._checks: tuple[_Check, ...] = (
            _check_unexpected_fields,
            _check_required_fields,
            _check_kind,
            _check_payload_present,
            _check_name,
            _check_folder_name,
            self._check_payload_encoding,
        )

    def validate(self, request: CreateNodeRequest) -> Node | None:
        """Run every check in order, stopping at the first failure.

        Args:
            request: Creation request as received.

        Returns:
            Resolved parent folder, or None for top-level placement.

        Raises:
            ValidationError: With the reason of the first failed check.
        """
        try:
            for check in self._checks:
                check(request)
            return self.resolve_parent(request.parent_id)
        except ValidationError as error:
            logger.info('Rejected node creation: %s', error.reason)
            raise

    def resolve_parent(self, parent_id: object) -> Node | None:
        """Resolve a parent id to the folder it names.

        Args:
            parent_id: Parent id as sent by the caller.

        Returns:
            Parent folder, or None for the root sentinel.

        Raises:
            ValidationError: If the id is malformed, unknown, or names
                a node that is not a folder.
        """
        if is_root_parent(parent_id):
            return None

        if parse_node_id(parent_id) is None:
            raise ValidationError(
                ErrorReason.INVALID_PARENT_ID,
                'Invalid parent id',
            )

        parent = self._repository.get(parent_id)
        if parent is None:
            raise ValidationError(
                ErrorReason.PARENT_NOT_FOUND,
                'Parent not found',
            )
        if not parent.is_folder:
            raise ValidationError(
                ErrorReason.PARENT_NOT_FOLDER,
                'Parent is not a folder',
            )
        return parent

    def _check_payload_encoding(self, request: CreateNodeRequest) -> None:
        if request.is_folder:
            return
        payload = request.payload
        if not isinstance(payload, str) or not is_base64(payload):
            raise ValidationError(
                ErrorReason.INVALID_PAYLOAD_ENCODING,
                'Invalid Base64 string',
            )
        if decoded_length(payload) > self._max_payload_bytes:
            raise ValidationError(
                ErrorReason.PAYLOAD_TOO_LARGE,
                'Data exceeds maximum file size of {0}'.format(
                    format_bytes(self._max_payload_bytes),
                ),
            )


def _check_unexpected_fields(request: CreateNodeRequest) -> None:
    if request.unexpected:
        raise ValidationError(
            ErrorReason.UNEXPECTED_FIELD,
            'Unexpected attribute(s): {0}'.format(
                ', '.join(request.unexpected),
            ),
        )


def _check_required_fields(request: CreateNodeRequest) -> None:
    if request.name is None:
        raise ValidationError(ErrorReason.MISSING_NAME, 'Missing name')
    if request.kind is None:
        raise ValidationError(ErrorReason.MISSING_KIND, 'Missing kind')
    if not isinstance(request.name, str):
        raise ValidationError(
            ErrorReason.NAME_NOT_STRING,
            'name attr must be a string value',
        )
    if not isinstance(request.kind, str):
        raise ValidationError(
            ErrorReason.KIND_NOT_STRING,
            'kind attr must be a string value',
        )
    if not isinstance(request.is_public, bool):
        raise ValidationError(
            ErrorReason.IS_PUBLIC_NOT_BOOLEAN,
            'isPublic attr must be a boolean value',
        )


def _check_kind(request: CreateNodeRequest) -> None:
    if request.kind not in NodeKind.values:
        raise ValidationError(ErrorReason.INVALID_KIND, 'Invalid kind')


def _check_payload_present(request: CreateNodeRequest) -> None:
    if not request.is_folder and not request.payload:
        raise ValidationError(ErrorReason.MISSING_PAYLOAD, 'Missing payload')


def _check_name(request: CreateNodeRequest) -> None:
    name = str(request.name)
    if not name:
        raise ValidationError(ErrorReason.EMPTY_NAME, 'Name cannot be empty')
    if _INVALID_NAME_CHARACTERS.search(name):
        raise ValidationError(
            ErrorReason.INVALID_NAME_CHARACTERS,
            'Name contains invalid characters',
        )
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            ErrorReason.NAME_TOO_LONG,
            'Name exceeds maximum length of {0} characters'.format(
                NAME_MAX_LENGTH,
            ),
        )


def _check_folder_name(request: CreateNodeRequest) -> None:
    if request.is_folder and '.' in str(request.name):
        raise ValidationError(
            ErrorReason.FOLDER_NAME_HAS_DOT,
            'Folder name should not contain a dot',
        )
