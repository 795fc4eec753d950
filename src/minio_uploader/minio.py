import logging
import os

import certifi
import urllib3
from minio import Minio

from minio_uploader.config import MinioConfig
from minio_uploader.exceptions import StorageConnectionError

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT_SECONDS = 10.0
READ_TIMEOUT_SECONDS = 60.0
MAX_RETRIES = 2


def _http_client() -> urllib3.PoolManager:
    """
    Pool manager like the SDK's default, with shorter timeouts and fewer retries.

    Requests abandoned by a finished UploadContext keep a worker thread busy
    until these limits run out.
    """
    return urllib3.PoolManager(
        timeout=urllib3.Timeout(
            connect=CONNECT_TIMEOUT_SECONDS, read=READ_TIMEOUT_SECONDS
        ),
        maxsize=10,
        cert_reqs="CERT_REQUIRED",
        ca_certs=os.environ.get("SSL_CERT_FILE") or certifi.where(),
        retries=urllib3.Retry(
            total=MAX_RETRIES,
            backoff_factor=0.2,
            status_forcelist=[500, 502, 503, 504],
        ),
    )


def get_minio_client(config: MinioConfig) -> Minio:
    """
    Initialize and return a MinIO client for the configured endpoint.

    Creating the handle performs no network request; the endpoint is only
    contacted by the first bucket or object operation.

    Returns:
        Minio: Configured MinIO client

    Raises:
        StorageConnectionError: If the SDK rejects the endpoint or credentials.
    """
    try:
        client = Minio(
            endpoint=config.endpoint,
            access_key=config.access_id,
            secret_key=config.access_secret,
            secure=config.is_endpoint_tls,
            http_client=_http_client(),
        )
        return client
    except Exception as e:
        logger.exception(
            "MinIO Client Initialization Failed",
            extra={
                "endpoint": config.endpoint,
                "user": config.access_id,
            },
        )
        raise StorageConnectionError(config.endpoint, e) from e
