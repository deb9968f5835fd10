"""Web UI and command-line front ends for the instant search engine."""
from .web import create_app

__all__ = ["create_app"]
