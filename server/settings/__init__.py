"""Django settings for the file registry project.

Settings are split into components and merged with
``django-split-settings``. Values are read from the environment
or ``config/.env`` via ``python-decouple``.
"""

from split_settings.tools import include

_base_settings = (
    'components/common.py',
    'components/caches.py',
    'components/logging.py',
    'components/storages.py',
    'components/registry.py',
)

include(*_base_settings)
