"""Configuration models for the MinIO uploader, loaded from environment variables."""

import os

from pydantic import BaseModel

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})


class MinioConfig(BaseModel, frozen=True):
    """
    MinIO connection configuration.

    Every field defaults to an empty value so that loading never fails;
    the bucket name is validated when the client is constructed.
    """

    endpoint_host: str = ""
    endpoint_port: str = ""
    is_endpoint_tls: bool = False
    access_id: str = ""
    access_secret: str = ""
    bucket_name: str = ""

    @property
    def endpoint(self) -> str:
        """The `host:port` address handed to the MinIO SDK."""
        if not self.endpoint_port:
            return self.endpoint_host
        return f"{self.endpoint_host}:{self.endpoint_port}"

    @property
    def scheme(self) -> str:
        return "https" if self.is_endpoint_tls else "http"


def _parse_bool(value: str | None) -> bool:
    return value in _TRUE_VALUES


def load_config() -> MinioConfig:
    """
    Loads configuration from environment variables.

    Env Vars:
        MINIO_HOST, MINIO_PORT: endpoint address
        MINIO_IS_TLS: "true"/"1" to connect over https
        MINIO_ACCESS_KEY, MINIO_SECRET_KEY: credentials
        MINIO_BUCKET_NAME: the bucket every upload goes to
    """
    return MinioConfig(
        endpoint_host=os.getenv("MINIO_HOST", ""),
        endpoint_port=os.getenv("MINIO_PORT", ""),
        is_endpoint_tls=_parse_bool(os.getenv("MINIO_IS_TLS")),
        access_id=os.getenv("MINIO_ACCESS_KEY", ""),
        access_secret=os.getenv("MINIO_SECRET_KEY", ""),
        bucket_name=os.getenv("MINIO_BUCKET_NAME", ""),
    )
