"""Boundary schema for node creation requests."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final, final

from server.apps.files.models import ROOT_PARENT_ID, NodeKind

# Wire field name -> attribute name
FIELD_NAMES: Final = {
    'name': 'name',
    'kind': 'kind',
    'payload': 'payload',
    'parentId': 'parent_id',
    'isPublic': 'is_public',
}


@final
@dataclass(frozen=True)
class CreateNodeRequest:
    """Create-node request as received, before validation.

    Values keep whatever JSON type the caller sent. ``fields_set``
    records which recognized fields were present in the body and
    ``unexpected`` lists unrecognized ones in body order, so the
    validator can tell an absent field from an explicit ``null``.
    """

    name: object = None
    kind: object = None
    payload: object = None
    parent_id: object = ROOT_PARENT_ID
    is_public: object = False
    fields_set: frozenset[str] = field(default_factory=frozenset)
    unexpected: tuple[str, ...] = ()

    @classmethod
    def from_body(cls, body: Mapping[str, object]) -> 'CreateNodeRequest':
        """Build a request from a decoded JSON body.

        Args:
            body: Decoded JSON object.

        Returns:
            Request with presence information.
        """
        values = {
            FIELD_NAMES[key]: field_value
            for key, field_value in body.items()
            if key in FIELD_NAMES
        }
        return cls(
            **values,
            fields_set=frozenset(values),
            unexpected=tuple(key for key in body if key not in FIELD_NAMES),
        )

    def has(self, attribute: str) -> bool:
        """Check whether a recognized field was present in the body."""
        return attribute in self.fields_set

    @property
    def is_folder(self) -> bool:
        """Whether the request creates a folder."""
        return self.kind == NodeKind.FOLDER
