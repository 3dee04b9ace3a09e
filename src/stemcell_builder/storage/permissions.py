"""Upload-permission smoke test for output buckets."""

import logging
import os
import tempfile

from .s3_client import S3ObjectStoreClient

log = logging.getLogger(__name__)

PERMISSIONS_TEST_KEY = "test-upload-permissions"


def test_upload_permissions(bucket: str, endpoint: str | None, region: str = "us-east-1") -> None:
    """Put a throwaway marker object into *bucket* to prove write access.

    Raises RemoteIOError if the upload is rejected.
    """
    client = S3ObjectStoreClient(endpoint_url=endpoint, region=region)

    fd, tmp_path = tempfile.mkstemp(prefix="stemcell-permissions-tempfile")
    try:
        with os.fdopen(fd, "w") as f:
            f.write("stemcell upload permissions check\n")
        client.put(bucket, PERMISSIONS_TEST_KEY, tmp_path)
    finally:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass

    log.info("Upload permissions verified for bucket %s", bucket)


# Keep pytest from collecting this as a test when imported into test modules.
test_upload_permissions.__test__ = False
