"""RemoteCode command-line interface."""

from .main import run

__all__ = ["run"]
