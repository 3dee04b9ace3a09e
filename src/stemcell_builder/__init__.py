"""Stemcell builder: VMX artifact cache and object-store helpers."""

__version__ = "0.1.0"
