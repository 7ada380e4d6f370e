"""Multi-tenant task board."""

__version__ = "0.1.0"
