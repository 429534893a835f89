"""Resource Tracker dashboard client: API wrapper, local mirror, and CLI."""

__version__ = "0.1.0"
