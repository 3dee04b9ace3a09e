"""CLI commands wrapping the object store client."""

import os

import click

from ...exceptions import RemoteIOError
from ...storage.permissions import test_upload_permissions
from ..utils import build_client, error_exit

_endpoint_option = click.option(
    "-e",
    "--endpoint",
    default=None,
    help="S3 endpoint URL. Defaults to S3_ENDPOINT_URL.",
)


@click.command(name="list")
@click.argument("bucket")
@_endpoint_option
def list_keys(bucket: str, endpoint: str | None):
    """List object keys under BUCKET (which may include a key prefix)."""
    client = build_client(endpoint)
    try:
        for key in client.list(bucket):
            click.echo(key)
    except RemoteIOError as e:
        error_exit(f"Error: {e}")


@click.command(name="get")
@click.argument("bucket")
@click.argument("key")
@click.argument("dest", type=click.Path(dir_okay=False, resolve_path=True))
@_endpoint_option
def get(bucket: str, key: str, dest: str, endpoint: str | None):
    """Download KEY from BUCKET to DEST."""
    client = build_client(endpoint)
    try:
        client.get(bucket, key, dest)
    except RemoteIOError as e:
        error_exit(f"Error: {e}")
    click.echo(dest)


@click.command(name="put")
@click.argument("bucket")
@click.argument("key")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@_endpoint_option
def put(bucket: str, key: str, source: str, endpoint: str | None):
    """Upload SOURCE to KEY in BUCKET."""
    client = build_client(endpoint)
    try:
        client.put(bucket, key, source)
    except RemoteIOError as e:
        error_exit(f"Error: {e}")


@click.command(name="test-upload-permissions")
@click.argument("bucket")
@_endpoint_option
def upload_permissions(bucket: str, endpoint: str | None):
    """Check that BUCKET accepts uploads by writing a marker object."""
    try:
        test_upload_permissions(
            bucket,
            endpoint or os.getenv("S3_ENDPOINT_URL") or None,
            region=os.getenv("S3_REGION") or "us-east-1",
        )
    except RemoteIOError as e:
        error_exit(f"Error: {e}")
    click.secho(f"Upload permissions OK for {bucket}", fg="green")
