"""Compute canonical claim hash (sha256 of the claim's signable fields).

Usage: python scripts/compute_claim_hash.py path/to/claim.json
Prints the 64-hex claim hash to stdout.
"""

from __future__ import annotations

import sys
from pathlib import Path

from seraphid.sdk.hashing import claim_hash
from seraphid.sdk.models import Claim


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: compute_claim_hash.py <claim_json_path>", file=sys.stderr)
        return 2
    path = Path(sys.argv[1])
    try:
        claim = Claim.from_json(path.read_text())
        print(claim_hash(claim))
        return 0
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
