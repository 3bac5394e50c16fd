"""Command-line interface for feed-service."""
