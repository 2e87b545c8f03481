"""Test claim signature engine.

Sign/verify round trips for ed25519 and secp256r1, tamper detection and
graceful handling of malformed input.
"""

from __future__ import annotations

import hashlib

import multibase
import pytest

from seraphid.sdk.signing import (
    SignatureScheme,
    decode_public_key,
    generate_keypair,
    public_key_from_private,
    sign,
    verify,
)
from tests.helpers import flip_byte

DIGEST = hashlib.sha256(b"claim").hexdigest()


@pytest.mark.parametrize("scheme", list(SignatureScheme))
def test_sign_verify_round_trip(scheme: SignatureScheme) -> None:
    """Test signatures verify with the matching public key."""
    private_key, public_key = generate_keypair(scheme)

    signature = sign(DIGEST, private_key, scheme)

    assert len(signature) == 128
    assert verify(DIGEST, signature, public_key) is True


@pytest.mark.parametrize("scheme", list(SignatureScheme))
def test_flipped_signature_byte_fails(scheme: SignatureScheme) -> None:
    """Test flipping any signature byte invalidates it."""
    private_key, public_key = generate_keypair(scheme)
    signature = sign(DIGEST, private_key, scheme)

    for index in range(64):
        assert verify(DIGEST, flip_byte(signature, index), public_key) is False


@pytest.mark.parametrize("scheme", list(SignatureScheme))
def test_wrong_digest_or_key_fails(scheme: SignatureScheme) -> None:
    private_key, public_key = generate_keypair(scheme)
    _, other_public_key = generate_keypair(scheme)
    signature = sign(DIGEST, private_key, scheme)

    assert verify(hashlib.sha256(b"other").hexdigest(), signature, public_key) is False
    assert verify(DIGEST, signature, other_public_key) is False


def test_public_key_formats() -> None:
    """Test ed25519 keys are 32 bytes and secp256r1 keys compressed 33 bytes."""
    ed_private, ed_public = generate_keypair(SignatureScheme.ED25519)
    ec_private, ec_public = generate_keypair(SignatureScheme.SECP256R1)

    assert len(ed_public) == 64
    assert len(ec_public) == 66
    assert ec_public[:2] in ("02", "03")
    assert public_key_from_private(ed_private) == ed_public
    assert public_key_from_private(ec_private, SignatureScheme.SECP256R1) == ec_public


def test_ed25519_deterministic() -> None:
    """Test ed25519 signatures are deterministic for a fixed key."""
    private_key = ("78" * 32)

    assert sign(DIGEST, private_key) == sign(DIGEST, private_key)


def test_verify_multibase_public_key() -> None:
    """Test public keys may be given in multibase form."""
    private_key, public_key = generate_keypair()
    multibase_key = multibase.encode("base58btc", bytes.fromhex(public_key)).decode("utf-8")
    signature = sign(DIGEST, private_key)

    assert decode_public_key(multibase_key) == bytes.fromhex(public_key)
    assert verify(DIGEST, signature, multibase_key) is True


def test_verify_malformed_input_returns_false() -> None:
    """Test malformed signatures and keys never raise."""
    private_key, public_key = generate_keypair()
    signature = sign(DIGEST, private_key)

    cases = [
        (DIGEST, "too_short", public_key),
        (DIGEST, "g" * 128, public_key),
        (DIGEST, signature[:-2], public_key),
        (DIGEST, signature + "00", public_key),
        (DIGEST, signature, "not-a-key"),
        (DIGEST, signature, "ab" * 10),
        ("xyz", signature, public_key),
        ("", signature, public_key),
        (DIGEST, "", public_key),
        (DIGEST, signature, ""),
    ]
    for digest, sig, key in cases:
        assert verify(digest, sig, key) is False


def test_sign_invalid_input_raises() -> None:
    """Test signing rejects missing or malformed keys."""
    with pytest.raises(ValueError):
        sign("", "11" * 32)
    with pytest.raises(ValueError):
        sign(DIGEST, "")
    with pytest.raises(ValueError):
        sign(DIGEST, "11" * 31)
    with pytest.raises(ValueError):
        sign(DIGEST, "11" * 31, SignatureScheme.SECP256R1)
