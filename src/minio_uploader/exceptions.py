"""Custom exceptions for the MinIO uploader."""


class StorageError(Exception):
    """Base class for every error raised by the uploader."""

    operation = "storage"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class ConfigError(StorageError):
    """Raised when the client is given invalid input, such as an empty bucket name."""

    operation = "config"


class StorageConnectionError(StorageError, ConnectionError):
    """Raised when a MinIO client handle cannot be created for the endpoint."""

    operation = "connect"

    def __init__(self, endpoint: str, cause: Exception | None = None):
        self.endpoint = endpoint
        super().__init__(f"Failed to create MinIO client for '{endpoint}'", cause)


class BucketSetupError(StorageError):
    """Raised when the target bucket can neither be created nor found."""

    def __init__(
        self, bucket_name: str, operation: str, cause: Exception | None = None
    ):
        self.bucket_name = bucket_name
        self.operation = operation
        super().__init__(f"Failed to {operation} '{bucket_name}'", cause)


class PolicyError(StorageError):
    """Raised when assigning the public-read policy to a new bucket fails."""

    operation = "set bucket policy"

    def __init__(self, bucket_name: str, cause: Exception | None = None):
        self.bucket_name = bucket_name
        super().__init__(f"Failed to set policy on bucket '{bucket_name}'", cause)


class SmokeTestError(StorageError):
    """Raised when the test upload performed at construction fails."""

    operation = "test upload"

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Test upload of '{object_name}' failed", cause)


class TransferError(StorageError):
    """Raised when uploading an object fails."""

    operation = "upload"

    def __init__(
        self,
        object_name: str,
        cause: Exception | None = None,
        message: str | None = None,
    ):
        self.object_name = object_name
        super().__init__(
            message or f"Failed to upload '{object_name}' to storage", cause
        )


class TransferCancelledError(TransferError):
    """Raised when an upload is cancelled or its deadline passes before it completes."""

    def __init__(self, object_name: str, reason: str):
        self.reason = reason
        super().__init__(
            object_name, message=f"Upload of '{object_name}' aborted: {reason}"
        )


class SizeMismatchError(TransferError):
    """Raised when the bytes written differ from the payload length."""

    def __init__(self, object_name: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            object_name,
            message=f"Size of '{object_name}': expected {expected}, real {actual}",
        )
