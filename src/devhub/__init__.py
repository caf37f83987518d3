"""devhub: content hub served from a single seed document."""

__version__ = "0.1.0"
