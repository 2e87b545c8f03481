"""SeraphID - self-sovereign identity claims on a blockchain ledger.

Provides DIDs, canonical claim hashing, signing and lifecycle validation
for Owners, Issuers, Verifiers and Roots of Trust.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
