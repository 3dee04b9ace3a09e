import os
import sys

import click

from ..storage.s3_client import S3ObjectStoreClient


def error_exit(message: str):
    """Print *message* in red on stderr and exit with status 1."""
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def build_client(endpoint: str | None = None) -> S3ObjectStoreClient:
    """S3 client for *endpoint*, falling back to S3_ENDPOINT_URL and S3_REGION."""
    return S3ObjectStoreClient(
        endpoint_url=endpoint or os.getenv("S3_ENDPOINT_URL") or None,
        region=os.getenv("S3_REGION") or "us-east-1",
    )
