"""Feed service: short text posts with likes, soft deletion and keyset pagination."""

__version__ = "1.0.0"
