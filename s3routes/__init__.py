"""Response dispatch layer for S3-compatible object storage APIs."""

__version__ = "0.1.0"
