from minio_uploader.config import MinioConfig, load_config
from minio_uploader.context import UploadContext
from minio_uploader.exceptions import (
    BucketSetupError,
    ConfigError,
    PolicyError,
    SizeMismatchError,
    SmokeTestError,
    StorageConnectionError,
    StorageError,
    TransferCancelledError,
    TransferError,
)
from minio_uploader.infrastructure import MinioStorageClient, new_client
from minio_uploader.infrastructure.interfaces import StorageClient
from minio_uploader.logging import setup_logging
from minio_uploader.policy import PolicyDocument

__all__ = [
    "setup_logging",
    "load_config",
    "new_client",
    "MinioConfig",
    "MinioStorageClient",
    "StorageClient",
    "UploadContext",
    "PolicyDocument",
    "StorageError",
    "ConfigError",
    "StorageConnectionError",
    "BucketSetupError",
    "PolicyError",
    "SmokeTestError",
    "TransferError",
    "TransferCancelledError",
    "SizeMismatchError",
]
