"""RemoteCode Shared Module.

This package contains shared constants, logging helpers and error handling
used across RemoteCode.
"""

__all__ = ["constants", "errors", "logging"]
