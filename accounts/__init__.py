"""User accounts API: request contracts, validation and error taxonomy."""

__version__ = "0.1.0"
