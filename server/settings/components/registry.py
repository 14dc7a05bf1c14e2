"""File registry settings."""

from server.settings.components import config

# Session tokens live for 24 hours from creation
SESSION_TTL_SECONDS = config('SESSION_TTL_SECONDS', cast=int, default=86400)

# Fixed page size for node listings
NODE_PAGE_SIZE = config('NODE_PAGE_SIZE', cast=int, default=20)
