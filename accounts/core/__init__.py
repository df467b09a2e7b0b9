"""Core configuration, logging, security, validation and error handling."""
