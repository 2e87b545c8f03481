"""SeraphID DID codec.

DIDs have the form did:seraph:<network>:<identity-address>, where the
address identifies the on-chain contract of an Issuer or Root of Trust.
"""

from __future__ import annotations

import re
from typing import Any, NamedTuple

import multibase
from algosdk import encoding

from seraphid.sdk.errors import InvalidAddress, MalformedDID
from seraphid.sdk.models import DIDNetwork

DID_METHOD = "seraph"
DID_PREFIX = f"did:{DID_METHOD}:"

# Every network tag is four characters long, so the prefix length is fixed.
TRIMMED_PREFIX_LENGTH = len(DID_PREFIX) + 5

_SCRIPT_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class ParsedDID(NamedTuple):
    network: DIDNetwork
    address: str


def is_valid_address(address: str) -> bool:
    """Check for an Algorand address or a 0x-prefixed 20-byte script hash."""
    if not isinstance(address, str) or not address:
        return False
    if _SCRIPT_HASH_RE.match(address):
        return True
    return bool(encoding.is_valid_address(address))


def make_did(network: DIDNetwork | str, address: str) -> str:
    """Build DID from network tag and identity address."""
    if not is_valid_address(address):
        raise InvalidAddress(f"Invalid identity address: {address}")

    network_tag = _to_network(network, address).value
    return f"{DID_PREFIX}{network_tag}:{address}"


def parse_did(did: str) -> ParsedDID:
    """Split DID into network and identity address."""
    if not isinstance(did, str) or not did.startswith(DID_PREFIX):
        raise MalformedDID(f"DID must start with '{DID_PREFIX}': {did}")

    segments = did.split(":")
    if len(segments) != 4 or not segments[3]:
        raise MalformedDID(f"DID must have exactly four segments: {did}")

    network = _to_network(segments[2], did)
    return ParsedDID(network, segments[3])


def trim_did(did: str) -> str:
    """Strip the fixed-length did:seraph:<network>: prefix.

    Root of Trust contracts index issuers by raw identity address.
    """
    return did[TRIMMED_PREFIX_LENGTH:]


def build_did_document(did: str, public_keys: list[str]) -> dict[str, Any]:
    """Build W3C DID document listing the identity's public keys."""
    parse_did(did)
    methods = [_build_verification_method(did, index, key) for index, key in enumerate(public_keys, start=1)]
    key_ids = [method["id"] for method in methods]

    return {
        "@context": ["https://www.w3.org/ns/did/v1"],
        "id": did,
        "verificationMethod": methods,
        "authentication": key_ids,
        "assertionMethod": key_ids,
    }


def _build_verification_method(did: str, index: int, public_key: str) -> dict[str, Any]:
    key_bytes = bytes.fromhex(public_key)
    key_type = "Ed25519VerificationKey2020" if len(key_bytes) == 32 else "EcdsaSecp256r1VerificationKey2019"
    return {
        "id": f"{did}#keys-{index}",
        "type": key_type,
        "controller": did,
        "publicKeyMultibase": multibase.encode("base58btc", key_bytes).decode("utf-8"),
    }


def _to_network(network: DIDNetwork | str, context: str) -> DIDNetwork:
    try:
        return DIDNetwork(network)
    except ValueError:
        raise MalformedDID(f"Unknown network tag '{network}' in {context}")
