"""Command-line interface for the stemcell builder."""
