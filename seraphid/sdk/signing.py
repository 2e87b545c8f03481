"""Claim signature engine.

Signs claim digests with ed25519 (Algorand's native scheme) or secp256r1
ECDSA (NEO wallet keys). Keys, digests and signatures are hex strings;
public keys may also be given in multibase form.
"""

from __future__ import annotations

from enum import Enum

import multibase
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature
from nacl.exceptions import CryptoError
from nacl.signing import SigningKey, VerifyKey

ED25519_PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class SignatureScheme(str, Enum):
    """Supported signature schemes."""
    ED25519 = "ed25519"
    SECP256R1 = "secp256r1"


def sign(digest: str, private_key: str, scheme: SignatureScheme = SignatureScheme.ED25519) -> str:
    """Sign hex digest and return hex signature."""
    if not digest or not private_key:
        raise ValueError("Digest and private key are required")

    message = bytes.fromhex(digest)
    key_bytes = bytes.fromhex(private_key)
    if SignatureScheme(scheme) is SignatureScheme.SECP256R1:
        return _sign_secp256r1(message, key_bytes).hex()
    return _sign_ed25519(message, key_bytes).hex()


def verify(digest: str, signature: str, public_key: str) -> bool:
    """Verify hex signature of digest; malformed input yields False."""
    if not digest or not signature or not public_key:
        return False

    try:
        message = bytes.fromhex(digest)
        signature_bytes = bytes.fromhex(signature)
        key_bytes = decode_public_key(public_key)
    except Exception:
        return False

    if len(signature_bytes) != SIGNATURE_LENGTH:
        return False
    if len(key_bytes) == ED25519_PUBLIC_KEY_LENGTH:
        return _verify_ed25519(message, signature_bytes, key_bytes)
    return _verify_secp256r1(message, signature_bytes, key_bytes)


def decode_public_key(public_key: str) -> bytes:
    """Decode hex or multibase public key to raw bytes."""
    if public_key.startswith("z"):
        return bytes(multibase.decode(public_key))
    return bytes.fromhex(public_key)


def generate_keypair(scheme: SignatureScheme = SignatureScheme.ED25519) -> tuple[str, str]:
    """Generate keypair and return (private_key_hex, public_key_hex)."""
    if SignatureScheme(scheme) is SignatureScheme.SECP256R1:
        private_value = ec.generate_private_key(ec.SECP256R1()).private_numbers().private_value
        private_key = private_value.to_bytes(32, "big").hex()
    else:
        private_key = bytes(SigningKey.generate()).hex()
    return private_key, public_key_from_private(private_key, scheme)


def public_key_from_private(private_key: str, scheme: SignatureScheme = SignatureScheme.ED25519) -> str:
    """Derive hex public key; secp256r1 keys use compressed SEC1 form."""
    key_bytes = bytes.fromhex(private_key)
    if SignatureScheme(scheme) is SignatureScheme.SECP256R1:
        public = _secp256r1_private_key(key_bytes).public_key()
        return public.public_bytes(serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint).hex()
    return bytes(SigningKey(key_bytes).verify_key).hex()


def _sign_ed25519(message: bytes, key_bytes: bytes) -> bytes:
    try:
        return bytes(SigningKey(key_bytes).sign(message).signature)
    except CryptoError as e:
        raise ValueError(f"Invalid ed25519 private key: {e}")


def _verify_ed25519(message: bytes, signature: bytes, key_bytes: bytes) -> bool:
    try:
        VerifyKey(key_bytes).verify(message, signature)
        return True
    except (CryptoError, ValueError, TypeError):
        return False


def _sign_secp256r1(message: bytes, key_bytes: bytes) -> bytes:
    # ECDSA hashes the digest again with SHA256, as NEO's CheckSig expects.
    der = _secp256r1_private_key(key_bytes).sign(message, ec.ECDSA(hashes.SHA256()))
    r, s = decode_dss_signature(der)
    return r.to_bytes(32, "big") + s.to_bytes(32, "big")


def _verify_secp256r1(message: bytes, signature: bytes, key_bytes: bytes) -> bool:
    try:
        public = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), key_bytes)
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:], "big")
        public.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
        return True
    except (InvalidSignature, ValueError):
        return False


def _secp256r1_private_key(key_bytes: bytes) -> ec.EllipticCurvePrivateKey:
    if len(key_bytes) != 32:
        raise ValueError("secp256r1 private key must be 32 bytes")
    return ec.derive_private_key(int.from_bytes(key_bytes, "big"), ec.SECP256R1())
