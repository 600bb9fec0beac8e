"""Terminal host for the Flip 7 engine."""

from .main import app, main

__all__ = ["app", "main"]
