"""
Controller key generation.

Keys are ECDSA on NIST P-256 (secp256r1); the verification method type
names the same curve.
"""

from __future__ import annotations

import logging

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from did_sim.errors import KeyGenerationError

logger = logging.getLogger(__name__)

KEY_TYPE = "EcdsaSecp256r1VerificationKey2019"
CURVE = ec.SECP256R1


def generate_key_pair() -> ec.EllipticCurvePrivateKey:
    """Generate a new P-256 key pair for a DID controller.

    Returns:
        The private key; its public half is available via ``public_key()``.

    Raises:
        KeyGenerationError: If the backend fails to generate the key.
    """
    try:
        private_key = ec.generate_private_key(CURVE())
    except Exception as e:
        raise KeyGenerationError(f"Failed to generate {CURVE.name} key: {e}") from e
    logger.debug("Generated %s key pair", CURVE.name)
    return private_key


def public_key_bytes(private_key: ec.EllipticCurvePrivateKey) -> bytes:
    """Encode the public half of a key as an uncompressed X9.62 point.

    For P-256 this is 65 bytes: ``0x04 || x || y``.
    """
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
