"""Teacher Registry API - teacher registration data collection service."""

__version__ = "0.1.0"
