"""
MinIO uploader command.

Connects to the MinIO server described by the MINIO_* environment variables,
creates the bucket if needed and uploads the given files to it:
- Bucket setup and a test upload on every run.
- Content type guessed from the file name.
- Distributed tracing with Datadog.
- Structured JSON logging.
"""

import argparse
import mimetypes
import os
import sys

from ddtrace import patch_all

from minio_uploader.config import load_config
from minio_uploader.context import UploadContext
from minio_uploader.exceptions import StorageError
from minio_uploader.infrastructure import new_client
from minio_uploader.logging import setup_logging


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="minio-uploader",
        description="Upload files to the bucket configured by MINIO_* env vars.",
    )
    parser.add_argument("files", nargs="*", help="files to upload")
    parser.add_argument(
        "--prefix", default="", help="prepended to each file name to form its key"
    )
    parser.add_argument(
        "--timeout", type=float, default=30.0, help="seconds allowed per upload"
    )
    parser.add_argument("--log-level", default="INFO", help="root log level")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    patch_all()
    logger = setup_logging(args.log_level.upper())
    config = load_config()

    try:
        storage = new_client(config)
        for file_path in args.files:
            with open(file_path, "rb") as f:
                data = f.read()
            content_type, _ = mimetypes.guess_type(file_path)
            object_name = args.prefix + os.path.basename(file_path)
            storage.upload(
                UploadContext.with_timeout(args.timeout),
                content_type,
                object_name,
                data,
            )
            print(storage.get_url(object_name))
    except (StorageError, OSError):
        logger.exception("Upload failed", extra={"bucket_name": config.bucket_name})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
