"""
Runtime configuration for the stemcell builder.

Values are passed explicitly to the cache and client; only the CLI reads
them from the environment via StemcellBuilderConfig.from_env().
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class StemcellBuilderConfig(BaseModel):
    """Where the VMX cache lives and which buckets it talks to."""
    cache_dir: str = Field(..., min_length=1, description="Cache root owned by the VMX cache")
    input_bucket: str = Field(..., min_length=1, description="Bucket spec archives are fetched from")
    output_bucket: str = Field(..., min_length=1, description="Bucket spec built artifacts are published to")
    endpoint_url: Optional[str] = Field(None, description="Custom S3 endpoint, e.g. MinIO")
    region: str = Field(default="us-east-1")

    artifact_prefix: str = Field(default="vmx", min_length=1)
    archive_ext: str = Field(default="tgz", min_length=1)
    payload_name: str = Field(default="image.vmx", min_length=1)

    @field_validator("cache_dir")
    @classmethod
    def normalize_cache_dir(cls, v: str) -> str:
        return os.path.abspath(os.path.expanduser(v))

    @field_validator("endpoint_url")
    @classmethod
    def empty_endpoint_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StemcellBuilderConfig":
        """Build a config from environment variables.

        Required: VMX_CACHE_DIR, INPUT_BUCKET, OUTPUT_BUCKET.
        Optional: S3_ENDPOINT_URL, S3_REGION.

        Raises:
            ValueError: If a required variable is missing or empty.
        """
        env = os.environ if environ is None else environ

        required = {
            "cache_dir": "VMX_CACHE_DIR",
            "input_bucket": "INPUT_BUCKET",
            "output_bucket": "OUTPUT_BUCKET",
        }
        values = {}
        for field, var in required.items():
            value = env.get(var)
            if not value:
                raise ValueError(f"Missing required environment variable {var}")
            values[field] = value

        return cls(
            **values,
            endpoint_url=env.get("S3_ENDPOINT_URL"),
            region=env.get("S3_REGION") or "us-east-1",
        )
