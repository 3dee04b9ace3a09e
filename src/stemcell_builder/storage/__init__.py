"""Object storage clients used to move stemcell build artifacts."""

from .base import SEPARATOR, ObjectAddress, ObjectStoreClient
from .permissions import test_upload_permissions
from .s3_client import S3ObjectStoreClient

__all__ = [
    "SEPARATOR",
    "ObjectAddress",
    "ObjectStoreClient",
    "S3ObjectStoreClient",
    "test_upload_permissions",
]
