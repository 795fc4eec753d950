from minio_uploader.infrastructure.interfaces.storage import (
    DEFAULT_CONTENT_TYPE,
    StorageClient,
)

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "StorageClient",
]
