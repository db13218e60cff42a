from __future__ import annotations

import logging
from typing import Final

from cryptography.hazmat.primitives import hashes

from ..const import MD5_DIGEST_SIZE
from .errors import ResponseError

_LOGGER = logging.getLogger(__name__)

# Largest salt a single length-prefix byte can describe
MAX_SALT_SIZE: Final = 0xFF


def parse_challenge_salt(data: bytes) -> bytes:
    """Extract the salt from a length-prefixed challenge buffer.

    Args:
        data: The challenge value: one length byte followed by the salt.

    Returns:
        The salt bytes. Anything after the declared length is ignored.
    """
    if not data:
        raise ResponseError("Empty challenge buffer")

    salt_length = data[0]
    if len(data) < 1 + salt_length:
        raise ResponseError(
            f"Challenge declares {salt_length} salt bytes but carries {len(data) - 1}"
        )
    return bytes(data[1 : 1 + salt_length])


def build_md5_transcript(identifier: int, password: bytes, salt: bytes) -> bytes:
    """Build the MD5-Challenge input: identifier, then password, then salt.

    Args:
        identifier: The EAP request identifier (0-255).
        password: The raw password bytes.
        salt: The salt sent by the authenticator.

    Returns:
        The concatenated transcript, without delimiters.
    """
    if not 0 <= identifier <= 0xFF:
        raise ValueError(f"Invalid EAP identifier: {identifier}")
    if len(salt) > MAX_SALT_SIZE:
        raise ValueError(f"Invalid salt size: {len(salt)}")

    return bytes((identifier,)) + password + salt


def compute_md5(data: bytes) -> bytes:
    """Compute an MD5 digest.

    Args:
        data: The bytes to hash.

    Returns:
        The 16-byte digest.
    """
    digest = hashes.Hash(hashes.MD5())
    digest.update(data)
    return digest.finalize()


def compute_challenge_digest(identifier: int, password: bytes, salt: bytes) -> bytes:
    """Compute MD5(identifier + password + salt).

    Args:
        identifier: The EAP request identifier.
        password: The raw password bytes.
        salt: The salt sent by the authenticator.

    Returns:
        The 16-byte challenge response value.
    """
    _LOGGER.debug(
        "Computing challenge digest for id %d with %d salt bytes", identifier, len(salt)
    )
    result = compute_md5(build_md5_transcript(identifier, password, salt))
    assert len(result) == MD5_DIGEST_SIZE
    return result
