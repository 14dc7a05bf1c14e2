"""Root URL configuration.

Services are built once here and injected into every view.
"""

from django.urls import path

from server.apps.accounts import urls as accounts_urls
from server.apps.core.container import build_services
from server.apps.core.views import StatsView, StatusView
from server.apps.files import urls as files_urls

services = build_services()

urlpatterns = [
    path('status', StatusView.as_view(services=services), name='status'),
    path('stats', StatsView.as_view(services=services), name='stats'),
    *accounts_urls.build_urlpatterns(services),
    *files_urls.build_urlpatterns(services),
]
