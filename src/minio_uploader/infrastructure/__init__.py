"""Concrete implementations of infrastructure interfaces."""

from .minio_storage import MinioStorageClient, new_client

__all__ = ["MinioStorageClient", "new_client"]
