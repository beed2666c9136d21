"""
Self-signed certificate generation.

Certificates are stored in the user data directory as
``<hostname>.crt`` / ``<hostname>.key`` (dots in the hostname replaced by
underscores) and reused on later launches while both files exist.
"""

from __future__ import annotations

import datetime
import ipaddress
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from remotecode.shared.constants import FileSystem, Security
from remotecode.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from remotecode.utils.paths import app_paths, human_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Certificate:
    """Paths of a certificate and its private key."""

    cert: str
    cert_key: str


def certificate_paths(hostname: str, directory: Path) -> Certificate:
    """Return where the certificate for ``hostname`` lives in ``directory``."""
    stem = hostname.replace(".", "_")
    return Certificate(
        cert=str(directory / f"{stem}{FileSystem.CERTIFICATE_EXTENSION}"),
        cert_key=str(directory / f"{stem}{FileSystem.CERTIFICATE_KEY_EXTENSION}"),
    )


def _subject_alt_name(hostname: str) -> x509.GeneralName:
    try:
        return x509.IPAddress(ipaddress.ip_address(hostname))
    except ValueError:
        return x509.DNSName(hostname)


def _build_certificate(hostname: str) -> tuple[bytes, bytes]:
    """Create a PEM certificate and PEM private key for ``hostname``."""
    key = rsa.generate_private_key(
        public_exponent=Security.CERTIFICATE_PUBLIC_EXPONENT,
        key_size=Security.CERTIFICATE_KEY_SIZE,
    )
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, hostname)])
    now = datetime.datetime.now(datetime.timezone.utc)

    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=Security.CERTIFICATE_VALIDITY_DAYS))
        .add_extension(x509.SubjectAlternativeName([_subject_alt_name(hostname)]), critical=False)
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )

    cert_pem = certificate.public_bytes(serialization.Encoding.PEM)
    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return cert_pem, key_pem


def _write_private(path: Path, content: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FileSystem.PRIVATE_FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(content)


def generate_certificate(hostname: str, directory: Path | str | None = None) -> Certificate:
    """Return a self-signed certificate for ``hostname``, creating it if needed.

    Args:
        hostname: Host name or IP address the certificate is issued for
        directory: Storage directory (defaults to the user data directory)

    Returns:
        Certificate with the certificate and key file paths

    Raises:
        InfrastructureError: If the certificate cannot be created or written
    """
    directory = Path(directory) if directory is not None else app_paths().data
    paths = certificate_paths(hostname, directory)
    cert_path, key_path = Path(paths.cert), Path(paths.cert_key)

    if cert_path.is_file() and key_path.is_file():
        logger.debug("Reusing certificate %s", human_path(cert_path))
        return paths

    try:
        directory.mkdir(parents=True, exist_ok=True)
        cert_pem, key_pem = _build_certificate(hostname)
        _write_private(key_path, key_pem)
        cert_path.write_bytes(cert_pem)
    except (OSError, ValueError) as e:
        raise InfrastructureError(
            ErrorCode.CERTIFICATE_GENERATION_FAILED,
            f"Failed to generate certificate for {hostname}: {e}",
            ErrorContext(
                file_path=str(cert_path),
                operation="generate_certificate",
                additional_data={"hostname": hostname},
            ),
            original_error=e,
        ) from e

    logger.info("Generated self-signed certificate %s", human_path(cert_path))
    return paths
