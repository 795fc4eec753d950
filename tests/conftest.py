import threading
from types import SimpleNamespace

import pytest

from minio_uploader import MinioConfig, new_client


class FakeS3Error(Exception):
    """Mimics minio.error.S3Error: carries an S3 error code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)


class FakeMinio:
    """In-memory stand-in for minio.Minio."""

    def __init__(self, existing_buckets=()):
        self.buckets: dict[str, dict[str, dict]] = {name: {} for name in existing_buckets}
        self.policies: dict[str, str] = {}
        self.put_calls = 0
        self.before_read = None
        self._lock = threading.Lock()

    def make_bucket(self, bucket_name, location=None, object_lock=False):
        if bucket_name in self.buckets:
            raise FakeS3Error("BucketAlreadyOwnedByYou")
        self.buckets[bucket_name] = {}

    def bucket_exists(self, bucket_name):
        return bucket_name in self.buckets

    def set_bucket_policy(self, bucket_name, policy):
        self.policies[bucket_name] = policy

    def put_object(
        self,
        bucket_name,
        object_name,
        data,
        length,
        content_type="application/octet-stream",
        **kwargs,
    ):
        with self._lock:
            self.put_calls += 1
        # reads the stream the way the SDK does: until `length` bytes or EOF
        part = b""
        while len(part) < length:
            if self.before_read is not None:
                self.before_read()
            chunk = data.read(length - len(part))
            if not chunk:
                break
            part += chunk
        with self._lock:
            self.buckets[bucket_name][object_name] = {
                "data": part,
                "content_type": content_type,
            }
        return SimpleNamespace(
            bucket_name=bucket_name, object_name=object_name, etag="fake-etag"
        )

    def read(self, path: str) -> bytes:
        """Reads an object back by its `/{bucket}/{key}` path."""
        bucket_name, object_name = path.lstrip("/").split("/", 1)
        return self.buckets[bucket_name][object_name]["data"]


@pytest.fixture
def config() -> MinioConfig:
    return MinioConfig(
        endpoint_host="127.0.0.1",
        endpoint_port="9000",
        access_id="minioadmin",
        access_secret="minioadmin",
        bucket_name="bucket0",
    )


@pytest.fixture
def fake_minio() -> FakeMinio:
    return FakeMinio()


@pytest.fixture
def minio_cls(mocker, fake_minio: FakeMinio):
    """Patches the Minio SDK class so every handle is the in-memory fake."""
    return mocker.patch("minio_uploader.minio.Minio", return_value=fake_minio)


@pytest.fixture
def storage(config: MinioConfig, minio_cls):
    return new_client(config)
