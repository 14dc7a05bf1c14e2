"""Custom storage backend for S3-compatible payload storage."""

import logging
from typing import Any, final, override

from django.core.files import File
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """Custom S3 storage backend for node payloads.

    Extends django-storages S3Storage with:
    - Enhanced error logging on writes
    - Existence-checked reads that report missing blobs uniformly

    A blob written here is not removed if the metadata insert that
    follows it fails; such orphans are left for external cleanup.
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save payload to S3 with error handling and logging.

        Args:
            name: Storage key for the payload.
            content: Payload content (file-like object).
            max_length: Optional maximum length for the key.

        Returns:
            Actual storage key used (may differ from name if conflicts).

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading payload to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully uploaded payload: %s', saved_name)
        except Exception:
            logger.exception('Failed to upload payload to storage: %s', name)
            raise
        else:
            return saved_name

    def open_blob(self, name: str) -> File:
        """Open a stored payload for streaming.

        Args:
            name: Storage key of the payload.

        Returns:
            Readable file object positioned at the start.

        Raises:
            FileNotFoundError: If no blob exists under the key.
        """
        if not self.exists(name):
            logger.warning('Payload not found in storage: %s', name)
            raise FileNotFoundError(name)
        return self.open(name, 'rb')
