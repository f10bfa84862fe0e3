"""Core configuration, dependencies and error handling."""
