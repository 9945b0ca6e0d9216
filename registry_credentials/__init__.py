"""registry-credentials: credential store resolution for registry clients."""

__version__ = "0.1.0"
