"""Infrastructure adapters: database handle, logging and metrics."""
