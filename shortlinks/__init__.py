"""Short link service: code assignment, resolution and click counting."""

__version__ = "1.0.0"
