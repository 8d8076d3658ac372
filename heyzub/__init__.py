"""HeyZub — a command-line host for Model Context Protocol servers."""

__version__ = "0.3.0"
