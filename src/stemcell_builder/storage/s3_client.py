"""S3-compatible object store client (AWS S3, MinIO, SeaweedFS)."""

import logging
import os
from typing import Iterator

import boto3
from boto3.exceptions import Boto3Error
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import RemoteIOError
from .base import ObjectAddress, ObjectStoreClient

log = logging.getLogger(__name__)

_REMOTE_ERRORS = (ClientError, BotoCoreError, Boto3Error)


class S3ObjectStoreClient(ObjectStoreClient):
    """ObjectStoreClient backed by boto3.

    Credentials come from the standard boto3 chain (environment, shared
    config, instance profile). Only the endpoint and region are configured
    here. Retries are disabled so that every failure surfaces to the caller.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        region: str = "us-east-1",
    ):
        kwargs: dict = {
            "config": Config(
                region_name=region,
                signature_version="s3v4",
                retries={"max_attempts": 1, "mode": "standard"},
            ),
        }
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._client = boto3.client("s3", **kwargs)

    def list(self, bucket_spec: str) -> Iterator[str]:
        address = ObjectAddress.parse(bucket_spec)
        log.info("Listing bucket %s with prefix %s", address.bucket, address.key_prefix)
        return self._iter_keys(address)

    def _iter_keys(self, address: ObjectAddress) -> Iterator[str]:
        paginator = self._client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=address.bucket, Prefix=address.key_prefix):
                for obj in page.get("Contents", []):
                    yield obj["Key"]
        except _REMOTE_ERRORS as e:
            raise RemoteIOError(
                f"Failed to list bucket {address.bucket} with prefix {address.key_prefix}: {e}",
                bucket=address.bucket,
            ) from e

    def get(self, bucket_spec: str, key: str, local_path: str) -> str:
        address = ObjectAddress.parse(bucket_spec)
        object_key = address.key(key)
        log.info("Downloading the %s from %s to %s", object_key, address.bucket, local_path)

        parent = os.path.dirname(os.path.abspath(local_path))
        os.makedirs(parent, exist_ok=True)

        try:
            self._client.download_file(address.bucket, object_key, local_path)
        except _REMOTE_ERRORS as e:
            raise RemoteIOError(
                f"Failed to download {object_key} from {address.bucket}: {e}",
                bucket=address.bucket,
                key=object_key,
            ) from e
        return local_path

    def put(self, bucket_spec: str, key: str, local_path: str) -> None:
        address = ObjectAddress.parse(bucket_spec)
        object_key = address.key(key)
        log.info("Uploading the %s to %s:%s", local_path, address.bucket, object_key)

        try:
            self._client.upload_file(local_path, address.bucket, object_key)
        except _REMOTE_ERRORS as e:
            raise RemoteIOError(
                f"Failed to upload {local_path} to {address.bucket}:{object_key}: {e}",
                bucket=address.bucket,
                key=object_key,
            ) from e
