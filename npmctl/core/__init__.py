"""Core components - configuration, logging, and error types."""
