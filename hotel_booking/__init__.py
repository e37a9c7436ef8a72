"""Hotel booking orchestration core: search, booking sessions and booking management."""

__version__ = "0.1.0"
