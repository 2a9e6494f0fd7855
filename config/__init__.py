"""Settings file loading and logging setup for the liveness client."""
