"""Feature slices: posts, health and metrics endpoints."""
