"""Currency conversion service with durable conversion logs and a dashboard."""

__version__ = "0.1.0"
