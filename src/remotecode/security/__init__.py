"""
RemoteCode security capabilities.

Password generation for the default config file and self-signed
certificate generation for TLS.
"""

from .certificates import Certificate, certificate_paths, generate_certificate
from .passwords import generate_password

__all__ = ["Certificate", "certificate_paths", "generate_certificate", "generate_password"]
