"""Abstract interface for object upload operations."""

import warnings
from abc import ABC, abstractmethod

from minio_uploader.context import UploadContext

DEFAULT_CONTENT_TYPE = "text/plain;charset=UTF-8"
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 5.0


class StorageClient(ABC):
    """Abstract base class for storage backends bound to a single bucket."""

    @property
    @abstractmethod
    def bucket_name(self) -> str:
        """The bucket every upload is written to."""

    @abstractmethod
    def upload(
        self,
        ctx: UploadContext,
        content_type: str | None,
        object_name: str,
        data: bytes,
    ) -> str:
        """
        Uploads a payload to the client's bucket, overwriting any existing object.

        Args:
            ctx: Cancellation and deadline for this call.
            content_type: MIME type of the payload; empty means
                `text/plain;charset=UTF-8`.
            object_name: The destination path/name in the bucket.
            data: The payload, possibly empty.

        Returns:
            The path `/{bucket}/{object_name}` the object is readable at.

        Raises:
            ConfigError: If the object name is empty.
            TransferError: If the upload fails, is cancelled or times out.
        """

    def upload_with_timeout(self, object_name: str, data: bytes) -> str:
        """
        Uploads with the default content type and a short deadline.

        Deprecated: use `upload` with an explicit `UploadContext`.
        """
        warnings.warn(
            "upload_with_timeout is deprecated, use upload with an UploadContext",
            DeprecationWarning,
            stacklevel=2,
        )
        ctx = UploadContext.with_timeout(DEFAULT_UPLOAD_TIMEOUT_SECONDS)
        return self.upload(ctx, "", object_name, data)

    def get_path(self, object_name: str) -> str:
        """Returns the path an uploaded object is readable at, relative to the endpoint."""
        return f"/{self.bucket_name}/{object_name}"
