"""nginx-route-check - Offline nginx virtual host and location matching."""

__version__ = "0.1.0"
