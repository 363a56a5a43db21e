"""Report the caller's public IP address and its timezone/location."""

__version__ = "1.0.0"
