"""HTTP views for file-tree nodes."""

from typing import Final

from django.http import FileResponse, HttpRequest, JsonResponse

from server.apps.core.views import (
    AuthenticatedView,
    ServiceView,
    parse_json_body,
    request_token,
)
from server.apps.files.logic.file_operations import (
    create_node,
    get_owned_node,
    list_nodes,
    read_payload,
    set_node_visibility,
)
from server.apps.files.models import ROOT_PARENT_ID

_FIRST_PAGE: Final = 0


class NodeCollectionView(AuthenticatedView):
    """``/files``: create nodes and list a folder's children."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Create a folder, file or image from a JSON body."""
        node = create_node(
            self.registry.validator,
            self.registry.repository,
            self.user_id,
            parse_json_body(request),
        )
        return JsonResponse(node.as_projection(), status=201)

    def get(self, request: HttpRequest) -> JsonResponse:
        """List nodes under ``?parentId=`` (root by default), by ``?page=``."""
        nodes = list_nodes(
            self.registry.validator,
            self.registry.repository,
            self.user_id,
            parent_id=request.GET.get('parentId', ROOT_PARENT_ID),
            page=_parse_page(request.GET.get('page')),
        )
        return JsonResponse(
            [node.as_projection() for node in nodes],
            safe=False,
        )


class NodeDetailView(AuthenticatedView):
    """``/files/<id>``: one node owned by the caller."""

    def get(self, request: HttpRequest, node_id: str) -> JsonResponse:
        """Return the node's projection."""
        node = get_owned_node(self.registry.repository, node_id, self.user_id)
        return JsonResponse(node.as_projection())


class NodeVisibilityView(AuthenticatedView):
    """``/files/<id>/publish`` and ``/files/<id>/unpublish``."""

    is_public = True

    def put(self, request: HttpRequest, node_id: str) -> JsonResponse:
        """Set the node's visibility and return its projection."""
        node = set_node_visibility(
            self.registry.repository,
            node_id,
            self.user_id,
            self.is_public,
        )
        return JsonResponse(node.as_projection())


class NodeDataView(ServiceView):
    """``/files/<id>/data``: payload bytes, public nodes without a session."""

    def get(self, request: HttpRequest, node_id: str) -> FileResponse:
        """Stream the payload, or the rendition chosen by ``?size=``."""
        caller_id = self.registry.access.optional_identity(
            request_token(request),
        )
        node, stream, content_type = read_payload(
            self.registry.repository,
            node_id,
            caller_id,
            size=request.GET.get('size'),
        )
        return FileResponse(
            stream,
            content_type=content_type,
            filename=node.name,
        )


def _parse_page(raw_page: str | None) -> int:
    try:
        return int(raw_page) if raw_page else _FIRST_PAGE
    except ValueError:
        return _FIRST_PAGE
