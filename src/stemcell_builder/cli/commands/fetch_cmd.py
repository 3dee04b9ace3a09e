"""
CLI command that resolves a VMX template from the local cache.

Usage:
    stemcell-builder fetch-vmx VERSION

Reads VMX_CACHE_DIR, INPUT_BUCKET and OUTPUT_BUCKET (plus the optional
S3_ENDPOINT_URL and S3_REGION) from the environment and prints the path of
the unpacked image.vmx.
"""

import click

from ...artifact_cache import VersionedArtifactCache
from ...config import StemcellBuilderConfig
from ...exceptions import StemcellBuilderError
from ...storage.s3_client import S3ObjectStoreClient
from ..utils import error_exit


@click.command(name="fetch-vmx")
@click.argument("version")
def fetch_vmx(version: str):
    """
    Fetch the VMX template for VERSION, evicting older cached versions.

    Only the major component of VERSION selects the cache entry.
    """
    try:
        config = StemcellBuilderConfig.from_env()
    except ValueError as e:
        error_exit(f"Error: {e}")

    client = S3ObjectStoreClient(endpoint_url=config.endpoint_url, region=config.region)
    cache = VersionedArtifactCache(
        client=client,
        input_bucket=config.input_bucket,
        output_bucket=config.output_bucket,
        cache_dir=config.cache_dir,
        artifact_prefix=config.artifact_prefix,
        archive_ext=config.archive_ext,
        payload_name=config.payload_name,
    )

    try:
        path = cache.fetch(version)
    except StemcellBuilderError as e:
        error_exit(f"Error: {e}")

    click.echo(path)
