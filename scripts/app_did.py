"""Print the DID of an Algorand application.

Usage: python scripts/app_did.py <app_id> [network]
Network defaults to env SERAPH_NETWORK or "priv".
"""

from __future__ import annotations

import os
import sys

from seraphid.sdk.algorand import application_did


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: app_did.py <app_id> [network]", file=sys.stderr)
        return 2
    network = sys.argv[2] if len(sys.argv) > 2 else os.environ.get("SERAPH_NETWORK", "priv")
    print(application_did(network, int(sys.argv[1])))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
