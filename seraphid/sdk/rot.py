"""Root of Trust contract client.

The Root of Trust keeps a registry of (issuer, schema) pairs it trusts.
The contract indexes issuers by raw identity address, so every call strips
the DID prefix first.
"""

from __future__ import annotations

import logging
from typing import Any

from seraphid.sdk.chain import ChainInvoke, ChainQuery, RootOfTrustOperation
from seraphid.sdk.did import make_did, trim_did
from seraphid.sdk.models import DIDNetwork

log = logging.getLogger(__name__)


class SeraphIDRootOfTrust:
    """Direct communication interface with a Root of Trust contract."""

    def __init__(
        self,
        script_hash: str,
        network: DIDNetwork | str,
        query: ChainQuery,
        invoke: ChainInvoke | None = None,
    ):
        self.script_hash = script_hash
        self.network = DIDNetwork(network)
        self.did = make_did(self.network, script_hash)
        self._query = query
        self._invoke = invoke

    def get_name(self) -> str:
        """Return official name of the Root of Trust."""
        return str(self._read(RootOfTrustOperation.NAME))

    def get_did(self) -> str:
        return self.did

    def is_trusted(self, issuer_did: str, schema_name: str) -> bool:
        """Check the issuer and schema are trusted by this Root of Trust.

        A pair that was never registered is untrusted, not an error.
        """
        _require_pair(issuer_did, schema_name)
        return bool(self._read(RootOfTrustOperation.IS_TRUSTED, trim_did(issuer_did), schema_name))

    def register_issuer(self, issuer_did: str, schema_name: str) -> str:
        """Register issuer and schema as trusted; return transaction reference."""
        _require_pair(issuer_did, schema_name)
        return self._write(RootOfTrustOperation.REGISTER_ISSUER, trim_did(issuer_did), schema_name)

    def deactivate_issuer(self, issuer_did: str, schema_name: str) -> str:
        """Withdraw trust in issuer and schema; return transaction reference."""
        _require_pair(issuer_did, schema_name)
        return self._write(RootOfTrustOperation.DEACTIVATE_ISSUER, trim_did(issuer_did), schema_name)

    def register_issuer_test(self, issuer_did: str, schema_name: str) -> None:
        """Run issuer registration without sending a transaction."""
        _require_pair(issuer_did, schema_name)
        self._read(RootOfTrustOperation.REGISTER_ISSUER, trim_did(issuer_did), schema_name)

    def deactivate_issuer_test(self, issuer_did: str, schema_name: str) -> None:
        """Run issuer deactivation without sending a transaction."""
        _require_pair(issuer_did, schema_name)
        self._read(RootOfTrustOperation.DEACTIVATE_ISSUER, trim_did(issuer_did), schema_name)

    def _read(self, operation: RootOfTrustOperation, *args: str) -> Any:
        log.debug("Querying %s on root of trust %s", operation.value, self.script_hash)
        return self._query.query(self.script_hash, operation.value, list(args))

    def _write(self, operation: RootOfTrustOperation, *args: str) -> str:
        if self._invoke is None:
            raise ValueError("Invoke capability not set for root of trust contract")
        tx = self._invoke.invoke(self.script_hash, operation.value, list(args))
        log.info("Root of trust %s sent %s in tx %s", self.script_hash, operation.value, tx)
        return tx


def _require_pair(issuer_did: str, schema_name: str) -> None:
    if not issuer_did or not schema_name:
        raise ValueError("Issuer DID and schema name required")
