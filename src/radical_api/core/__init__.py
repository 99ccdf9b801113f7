"""Core configuration, header policy and error types."""
