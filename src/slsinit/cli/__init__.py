"""Command-line interface for slsinit."""

from slsinit.cli.app import app

__all__ = ["app"]
