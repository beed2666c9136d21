"""
RemoteCode - layered launch configuration for a remote editor server.

Resolves command line arguments, a YAML config file and environment
variables into one validated configuration.
"""

from remotecode.shared.constants import APPLICATION_VERSION

__version__ = APPLICATION_VERSION
