"""Random password generation."""

from __future__ import annotations

import secrets

from remotecode.shared.constants import Security


def generate_password(length: int = Security.PASSWORD_LENGTH) -> str:
    """Generate a random hexadecimal password.

    Args:
        length: Number of characters; must be a positive even number

    Returns:
        Password of ``length`` hex characters from a CSPRNG

    Raises:
        ValueError: If length is not a positive even number
    """
    if length <= 0 or length % 2:
        msg = f"Password length must be a positive even number, got {length}"
        raise ValueError(msg)
    return secrets.token_hex(length // 2)
