"""Test helper functions shared by claim tests."""

from __future__ import annotations

from seraphid.sdk.hashing import claim_hash
from seraphid.sdk.models import Claim
from seraphid.sdk.signing import SignatureScheme, sign


def sign_claim(claim: Claim, private_key: str, scheme: SignatureScheme = SignatureScheme.ED25519) -> Claim:
    """Return signed copy of claim without touching the chain."""
    return claim.model_copy(update={"signature": sign(claim_hash(claim), private_key, scheme)})


def flip_byte(hex_value: str, index: int) -> str:
    """Flip all bits of one byte in a hex string."""
    data = bytearray(bytes.fromhex(hex_value))
    data[index] ^= 0xFF
    return data.hex()
