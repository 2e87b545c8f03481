"""Canonical JSON hashing for claims.

Claims are canonicalized as compact JSON with keys sorted at every level,
so claims with the same content hash identically regardless of key order.
Only id, ownerDID, schema and attributes are signed.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from seraphid.sdk.models import Claim


def canonical_json(data: dict[str, Any]) -> bytes:
    """Serialize data as canonical JSON bytes."""
    if not data:
        raise ValueError("Data cannot be empty")
    return json.dumps(data, sort_keys=True, separators=(',', ':')).encode('utf-8')


def canonical_json_hash(data: dict[str, Any]) -> str:
    """Hex SHA-256 of canonical JSON; claim_hash applies it to signable fields."""
    return hashlib.sha256(canonical_json(data)).hexdigest()


def canonicalize_claim(claim: Claim) -> bytes:
    """Build the canonical byte sequence of a claim's signable fields."""
    return canonical_json(_signable_fields(claim))


def claim_hash(claim: Claim) -> str:
    """Hex digest the issuer signs: id, ownerDID, schema and attributes only."""
    return canonical_json_hash(_signable_fields(claim))


def _signable_fields(claim: Claim) -> dict[str, Any]:
    return {
        "id": claim.id,
        "ownerDID": claim.owner_did,
        "schema": claim.schema_name,
        "attributes": dict(claim.attributes),
    }
