"""Issuer contract client and Issuer role.

IssuerContract wraps the Issuer's on-chain operations behind an injected
transport. SeraphIDIssuer builds, signs, injects, revokes and validates
claims on top of it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from seraphid.sdk.chain import ChainInvoke, ChainQuery, IssuerOperation
from seraphid.sdk.did import build_did_document, make_did
from seraphid.sdk.errors import TransportError
from seraphid.sdk.hashing import claim_hash
from seraphid.sdk.models import AttributeValue, Claim, DIDNetwork, Schema, VerificationResult
from seraphid.sdk.signing import SignatureScheme, sign
from seraphid.sdk.validation import ClaimPredicate, check_signature, validate_attributes, validate_lifecycle

log = logging.getLogger(__name__)


class IssuerContract:
    """Direct communication interface with the Issuer's contract."""

    def __init__(
        self,
        script_hash: str,
        network: DIDNetwork | str,
        query: ChainQuery,
        invoke: ChainInvoke | None = None,
    ):
        """Initialize Issuer contract client.

        Args:
            script_hash: Identity address of the Issuer's contract
            network: Network tag used for the DID
            query: Read-only chain capability
            invoke: State-changing chain capability, required for writes
        """
        self.script_hash = script_hash
        self.network = DIDNetwork(network)
        self.did = make_did(self.network, script_hash)
        self._query = query
        self._invoke = invoke

    def get_issuer_name(self) -> str:
        """Return official name of the Issuer."""
        return str(self._read(IssuerOperation.NAME))

    def get_issuer_did(self) -> str:
        return self.did

    def get_issuer_public_keys(self) -> list[str]:
        """Return the admin keys that may sign the Issuer's claims."""
        keys = self._read(IssuerOperation.GET_ADMIN_LIST)
        return [str(key) for key in keys or []]

    def get_did_document(self) -> dict[str, Any]:
        return build_did_document(self.did, self.get_issuer_public_keys())

    def get_schema_details(self, schema_name: str) -> Schema:
        """Return the registered schema with the given name."""
        if not schema_name:
            raise ValueError("Schema name required")

        definition = self._read(IssuerOperation.GET_SCHEMA_DETAILS, schema_name)
        try:
            return Schema.from_json(definition)
        except ValueError as e:
            raise TransportError(f"Invalid schema definition for {schema_name}: {e}", definition)

    def is_valid_claim(self, claim_id: str) -> bool:
        """Check the claim was issued by this Issuer and not yet revoked.

        Claim validity dates are not part of this check.
        """
        if not claim_id:
            raise ValueError("Claim ID required")
        return bool(self._read(IssuerOperation.IS_VALID_CLAIM, claim_id))

    def register_schema(self, schema: Schema) -> str:
        """Register schema and return the transaction reference."""
        return self._write(IssuerOperation.REGISTER_SCHEMA, schema.name, schema.definition())

    def inject_claim(self, claim_id: str) -> str:
        """Record an issued claim ID on-chain."""
        if not claim_id:
            raise ValueError("Claim ID required")
        return self._write(IssuerOperation.INJECT_CLAIM, claim_id)

    def revoke_claim(self, claim_id: str) -> str:
        """Revoke previously issued claim."""
        if not claim_id:
            raise ValueError("Claim ID required")
        return self._write(IssuerOperation.REVOKE_CLAIM, claim_id)

    def add_admin(self, public_key: str) -> str:
        return self._write(IssuerOperation.ADD_ADMIN, public_key)

    def remove_admin(self, public_key: str) -> str:
        return self._write(IssuerOperation.REMOVE_ADMIN, public_key)

    def register_schema_test(self, schema: Schema) -> None:
        """Run schema registration without sending a transaction."""
        self._read(IssuerOperation.REGISTER_SCHEMA, schema.name, schema.definition())

    def inject_claim_test(self, claim_id: str) -> None:
        """Run claim injection without sending a transaction."""
        self._read(IssuerOperation.INJECT_CLAIM, claim_id)

    def revoke_claim_test(self, claim_id: str) -> None:
        """Run claim revocation without sending a transaction."""
        self._read(IssuerOperation.REVOKE_CLAIM, claim_id)

    def _read(self, operation: IssuerOperation, *args: str) -> Any:
        log.debug("Querying %s on issuer %s", operation.value, self.script_hash)
        return self._query.query(self.script_hash, operation.value, list(args))

    def _write(self, operation: IssuerOperation, *args: str) -> str:
        if self._invoke is None:
            raise ValueError("Invoke capability not set for issuer contract")
        tx = self._invoke.invoke(self.script_hash, operation.value, list(args))
        log.info("Issuer %s sent %s in tx %s", self.script_hash, operation.value, tx)
        return tx


class SeraphIDIssuer:
    """Issuer role: creates, signs, injects and validates claims."""

    def __init__(self, contract: IssuerContract, scheme: SignatureScheme = SignatureScheme.ED25519):
        if not contract:
            raise ValueError("Issuer contract is required")
        self.contract = contract
        self.scheme = SignatureScheme(scheme)

    def create_claim(
        self,
        claim_id: str,
        schema_name: str,
        attributes: dict[str, AttributeValue],
        owner_did: str,
        valid_from: datetime | None = None,
        valid_to: datetime | None = None,
    ) -> Claim:
        """Create unsigned claim of this Issuer."""
        return Claim(
            id=claim_id,
            schema=schema_name,
            attributes=attributes,
            ownerDID=owner_did,
            issuerDID=self.contract.did,
            validFrom=valid_from,
            validTo=valid_to,
        )

    def get_claim_hash(self, claim: Claim) -> str:
        return claim_hash(claim)

    def sign_claim(
        self,
        claim: Claim,
        private_key: str,
        scheme: SignatureScheme | None = None,
    ) -> Claim:
        """Return a copy of the claim signed with the Issuer's key."""
        signature = sign(claim_hash(claim), private_key, scheme or self.scheme)
        return claim.model_copy(update={"issuer_did": self.contract.did, "signature": signature})

    def validate_claim_structure(self, claim: Claim) -> VerificationResult:
        """Check claim attributes against the schema registered on-chain."""
        schema = self.contract.get_schema_details(claim.schema_name)
        return validate_attributes(claim, schema)

    def issue_claim(
        self,
        claim: Claim,
        private_key: str,
        scheme: SignatureScheme | None = None,
    ) -> Claim:
        """Validate, sign and inject claim; return the issued copy.

        Raises:
            ValueError: if the claim does not match its schema
            TransportError: if the schema lookup or injection fails
        """
        structure = self.validate_claim_structure(claim)
        if not structure.success:
            raise ValueError(f"Cannot issue claim {claim.id}: {structure.error}")

        signed = self.sign_claim(claim, private_key, scheme)
        tx = self.contract.inject_claim(signed.id)
        log.info("Issued claim %s under schema %s", signed.id, signed.schema_name)
        return signed.model_copy(update={"tx": tx})

    def revoke_claim(self, claim_id: str) -> str:
        return self.contract.revoke_claim(claim_id)

    def verify_offline(self, claim: Claim, public_key: str, schema: Schema | None = None) -> bool:
        """Check signature (and schema, when given) without chain calls."""
        result = check_signature(claim, [public_key])
        if result.success and schema is not None:
            result = validate_attributes(claim, schema)
        return result.success

    def check_claim(
        self,
        claim: Claim,
        custom: ClaimPredicate | None = None,
        now: datetime | None = None,
    ) -> VerificationResult:
        """Run full lifecycle validation against this Issuer's contract."""
        return check_issued_claim(self.contract, claim, custom, now)

    def validate_claim(
        self,
        claim: Claim,
        custom: ClaimPredicate | None = None,
        now: datetime | None = None,
    ) -> bool:
        """True iff signature, schema, revocation, dates and custom check pass."""
        return self.check_claim(claim, custom, now).success


def check_issued_claim(
    contract: IssuerContract,
    claim: Claim,
    custom: ClaimPredicate | None = None,
    now: datetime | None = None,
) -> VerificationResult:
    """Gather on-chain facts for a claim and validate its lifecycle.

    Transport errors propagate: they mean validity could not be determined.
    """
    schema = contract.get_schema_details(claim.schema_name)
    public_keys = contract.get_issuer_public_keys()
    on_chain_valid = contract.is_valid_claim(claim.id)

    result = validate_lifecycle(claim, schema, public_keys, on_chain_valid, custom, now)
    if not result.success:
        log.info("Claim %s is invalid: %s", claim.id, result.error)
    return result
