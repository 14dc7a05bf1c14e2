"""Construction of the registry's long-lived services.

Services are built once at process start and handed to views
explicitly; nothing reads them from module globals.
"""

from dataclasses import dataclass
from typing import final

from django.conf import settings
from django.core.cache import caches
from django.core.files.storage import default_storage
from django.utils.connection import ConnectionProxy

from server.apps.accounts.logic.access_control import AccessController
from server.apps.accounts.logic.session_store import SessionStore
from server.apps.files.logic.node_repository import NodeRepository
from server.apps.files.logic.tree_validator import TreeValidator


@final
@dataclass(frozen=True)
class Services:
    """Collaborators shared by all request handlers."""

    repository: NodeRepository
    validator: TreeValidator
    sessions: SessionStore
    access: AccessController


def build_services() -> Services:
    """Wire services from Django settings.

    Returns:
        Services backed by the configured session cache and storage.
    """
    sessions = SessionStore(
        ConnectionProxy(caches, settings.SESSION_CACHE_ALIAS),
        ttl=settings.SESSION_TTL_SECONDS,
    )
    repository = NodeRepository(
        storage=default_storage,  # type: ignore[arg-type]
        page_size=settings.NODE_PAGE_SIZE,
    )
    return Services(
        repository=repository,
        validator=TreeValidator(repository),
        sessions=sessions,
        access=AccessController(sessions),
    )
