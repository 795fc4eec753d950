"""MinIO implementation of the StorageClient interface."""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime

from minio import Minio

from minio_uploader.config import MinioConfig
from minio_uploader.context import UploadContext
from minio_uploader.exceptions import (
    BucketSetupError,
    ConfigError,
    PolicyError,
    SizeMismatchError,
    SmokeTestError,
    StorageError,
    TransferCancelledError,
    TransferError,
)
from minio_uploader.infrastructure.interfaces import DEFAULT_CONTENT_TYPE, StorageClient
from minio_uploader.minio import get_minio_client
from minio_uploader.policy import PolicyDocument

logger = logging.getLogger(__name__)

SETUP_TIMEOUT_SECONDS = 10.0
SMOKE_TEST_OBJECT_NAME = "PING"
READ_CHUNK_SIZE = 1024 * 1024
POLL_INTERVAL_SECONDS = 0.05
MAX_WORKERS = 32

_BUCKET_EXISTS_CODES = frozenset({"BucketAlreadyOwnedByYou", "BucketAlreadyExists"})

_executor = ThreadPoolExecutor(
    max_workers=MAX_WORKERS, thread_name_prefix="minio-uploader"
)


def _call_with_context(ctx: UploadContext, name: str, fn, /, *args, **kwargs):
    """
    Runs a blocking SDK call on a worker thread until it returns or `ctx` is done.

    The call keeps running in the background after the context wins; the
    http client timeouts set in `get_minio_client` bound how long it lingers.

    Raises:
        TransferCancelledError: If the context is cancelled or expires first.
    """
    ctx.check(name)
    future = _executor.submit(fn, *args, **kwargs)
    while True:
        remaining = ctx.remaining()
        timeout = (
            POLL_INTERVAL_SECONDS
            if remaining is None
            else min(POLL_INTERVAL_SECONDS, remaining)
        )
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            # the SDK call itself may raise the builtin TimeoutError
            if future.done():
                raise
            reason = ctx.err()
            if reason is not None:
                future.cancel()
                raise TransferCancelledError(name, reason) from None


class _ContextReader:
    """Read-only stream over a payload that stops as soon as its context is done."""

    def __init__(self, data: bytes, ctx: UploadContext, object_name: str):
        self._view = memoryview(data)
        self._ctx = ctx
        self._object_name = object_name
        self.bytes_read = 0

    def read(self, size: int = -1) -> bytes:
        self._ctx.check(self._object_name)
        left = len(self._view) - self.bytes_read
        if size is None or size < 0 or size > left:
            size = left
        size = min(size, READ_CHUNK_SIZE)
        chunk = self._view[self.bytes_read : self.bytes_read + size].tobytes()
        self.bytes_read += len(chunk)
        return chunk


class MinioStorageClient(StorageClient):
    """Uploads objects to a single MinIO bucket."""

    def __init__(self, client: Minio, bucket_name: str, endpoint_url: str = ""):
        self._client = client
        self._bucket_name = bucket_name
        self._endpoint_url = endpoint_url

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def get_url(self, object_name: str) -> str:
        """Returns the full public URL, e.g. http://127.0.0.1:9000/bucket0/DDCat.jpg"""
        return f"{self._endpoint_url}{self.get_path(object_name)}"

    def ensure_bucket_exists(self, ctx: UploadContext) -> bool:
        """
        Creates the bucket if needed, giving up once `ctx` is done.

        Returns:
            True if the bucket was created by this call, False if it already existed.

        Raises:
            BucketSetupError: If the bucket could not be created and is not there.
        """
        try:
            _call_with_context(
                ctx, self._bucket_name, self._client.make_bucket, self._bucket_name
            )
        except TransferCancelledError as e:
            logger.error(
                "MinIO bucket creation aborted",
                extra={"bucket_name": self._bucket_name, "reason": e.reason},
            )
            raise BucketSetupError(self._bucket_name, "create bucket", e) from e
        except Exception as create_error:
            try:
                exists = _call_with_context(
                    ctx,
                    self._bucket_name,
                    self._client.bucket_exists,
                    self._bucket_name,
                )
            except Exception as e:
                logger.exception(
                    "MinIO bucket existence check failed",
                    extra={"bucket_name": self._bucket_name},
                )
                raise BucketSetupError(
                    self._bucket_name, "check bucket existed", e
                ) from e
            if not exists:
                logger.error(
                    "MinIO bucket creation failed",
                    extra={"bucket_name": self._bucket_name, "error": str(create_error)},
                )
                raise BucketSetupError(
                    self._bucket_name, "create bucket", create_error
                ) from create_error

            code = getattr(create_error, "code", None)
            if code in _BUCKET_EXISTS_CODES:
                logger.info(
                    "Bucket already exists", extra={"bucket_name": self._bucket_name}
                )
            else:
                logger.warning(
                    "Bucket creation failed but the bucket exists, using it",
                    extra={
                        "bucket_name": self._bucket_name,
                        "error_code": code,
                        "error": str(create_error),
                    },
                )
            return False

        logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        return True

    def set_public_read_policy(self, ctx: UploadContext) -> None:
        """
        Lets anonymous users read every object in the bucket.

        Raises:
            PolicyError: If MinIO rejects the policy.
        """
        policy = PolicyDocument.public_read(self._bucket_name)
        try:
            _call_with_context(
                ctx,
                self._bucket_name,
                self._client.set_bucket_policy,
                self._bucket_name,
                policy.to_json(),
            )
        except Exception as e:
            logger.exception(
                "MinIO set bucket policy failed",
                extra={"bucket_name": self._bucket_name},
            )
            raise PolicyError(self._bucket_name, e) from e
        logger.info("Bucket policy set", extra={"bucket_name": self._bucket_name})

    def upload(
        self,
        ctx: UploadContext,
        content_type: str | None,
        object_name: str,
        data: bytes,
    ) -> str:
        if not object_name:
            raise ConfigError("object name must not be empty")
        content_type = content_type or DEFAULT_CONTENT_TYPE
        size = len(data)
        ctx.check(object_name)

        reader = _ContextReader(data, ctx, object_name)
        try:
            result = _call_with_context(
                ctx,
                object_name,
                self._client.put_object,
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=reader,
                length=size,
                content_type=content_type,
            )
        except TransferCancelledError as e:
            logger.warning(
                "MinIO upload aborted",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": object_name,
                    "reason": e.reason,
                },
            )
            raise
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise TransferError(object_name, e) from e

        if reader.bytes_read != size:
            logger.error(
                "MinIO upload size mismatch",
                extra={
                    "object_name": object_name,
                    "expected": size,
                    "actual": reader.bytes_read,
                },
            )
            raise SizeMismatchError(object_name, size, reader.bytes_read)

        logger.info(
            "File uploaded to MinIO",
            extra={
                "bucket_name": self._bucket_name,
                "object_name": object_name,
                "size": size,
                "etag": getattr(result, "etag", None),
            },
        )
        return self.get_path(object_name)


def new_client(config: MinioConfig) -> MinioStorageClient:
    """
    Connects to MinIO and prepares the configured bucket for uploads.

    Creates the bucket if needed, makes a newly created bucket public-read,
    then uploads a small test object to check that writes go through.

    Args:
        config: Endpoint, credentials and the target bucket.

    Returns:
        A client ready to upload to `config.bucket_name`.

    Raises:
        ConfigError: If no bucket name is configured.
        StorageConnectionError: If the MinIO client cannot be created.
        BucketSetupError: If the bucket cannot be created or found.
        PolicyError: If the public-read policy cannot be assigned.
        SmokeTestError: If the test upload fails.
    """
    if not config.bucket_name:
        raise ConfigError("have to define a default bucket")

    client = get_minio_client(config)
    storage = MinioStorageClient(
        client,
        config.bucket_name,
        endpoint_url=f"{config.scheme}://{config.endpoint}",
    )

    ctx = UploadContext.with_timeout(SETUP_TIMEOUT_SECONDS)
    if storage.ensure_bucket_exists(ctx):
        storage.set_public_read_policy(ctx)

    try:
        storage.upload(
            ctx,
            "",
            SMOKE_TEST_OBJECT_NAME,
            f"PING at {datetime.now().isoformat()}".encode(),
        )
    except StorageError as e:
        raise SmokeTestError(SMOKE_TEST_OBJECT_NAME, e) from e

    logger.info(
        "Successfully initialized MinIO client",
        extra={"endpoint": config.endpoint, "bucket_name": config.bucket_name},
    )
    return storage
