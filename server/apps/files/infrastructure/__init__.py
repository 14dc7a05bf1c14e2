"""Infrastructure layer for files app.

This package contains integrations with external systems:
- S3-compatible payload storage (MinIO and friends)
- Payload encoding and MIME type detection

Keep infrastructure concerns separate from business logic.
"""
