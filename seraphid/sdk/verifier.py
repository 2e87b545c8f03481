"""Verifier role.

Verifies claims presented by owners: offline signature checks, full
lifecycle validation against the issuing contract, and trust lookups in a
Root of Trust chosen by the verifier. Trust is not folded into claim
validation; callers combine both verdicts.
"""

from __future__ import annotations

import logging
from datetime import datetime

from seraphid.sdk.chain import ChainQuery
from seraphid.sdk.did import parse_did
from seraphid.sdk.issuer import IssuerContract, check_issued_claim
from seraphid.sdk.models import Claim, DIDNetwork, FailureKind, Schema, VerificationResult
from seraphid.sdk.rot import SeraphIDRootOfTrust
from seraphid.sdk.validation import ClaimPredicate, check_signature, validate_attributes

log = logging.getLogger(__name__)


class SeraphIDVerifier:
    """Verifier role over a read-only chain capability."""

    def __init__(self, network: DIDNetwork | str, query: ChainQuery):
        if not query:
            raise ValueError("Chain query capability is required")
        self.network = DIDNetwork(network)
        self._query = query

    def issuer_contract(self, issuer_did: str) -> IssuerContract:
        """Resolve the Issuer contract behind a DID."""
        parsed = parse_did(issuer_did)
        return IssuerContract(parsed.address, parsed.network, self._query)

    def get_issuer_public_keys(self, issuer_did: str) -> list[str]:
        return self.issuer_contract(issuer_did).get_issuer_public_keys()

    def verify_offline(self, claim: Claim, issuer_public_key: str, schema: Schema | None = None) -> bool:
        """Check signature, and schema when given, without network access.

        Does not check revocation or trust.
        """
        result = check_signature(claim, [issuer_public_key])
        if result.success and schema is not None:
            result = validate_attributes(claim, schema)
        return result.success

    def is_issuer_trusted(self, rot_script_hash: str, issuer_did: str, schema_name: str) -> bool:
        """Ask the given Root of Trust whether it trusts issuer and schema."""
        rot = SeraphIDRootOfTrust(rot_script_hash, self.network, self._query)
        trusted = rot.is_trusted(issuer_did, schema_name)
        log.debug("Issuer %s trusted for %s by %s: %s", issuer_did, schema_name, rot_script_hash, trusted)
        return trusted

    def check_claim(
        self,
        claim: Claim,
        custom: ClaimPredicate | None = None,
        now: datetime | None = None,
    ) -> VerificationResult:
        """Run lifecycle validation against the contract of the claim's issuer."""
        if not claim.issuer_did:
            return VerificationResult.fail(FailureKind.MISSING_ISSUER, f"Claim {claim.id} has no issuer DID")
        return check_issued_claim(self.issuer_contract(claim.issuer_did), claim, custom, now)

    def validate_claim(
        self,
        claim: Claim,
        custom: ClaimPredicate | None = None,
        now: datetime | None = None,
    ) -> bool:
        """True iff signature, schema, revocation, dates and custom check pass."""
        return self.check_claim(claim, custom, now).success
