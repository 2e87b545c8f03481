"""Shared fixtures for SeraphID tests.

Provides an in-memory ledger with a deployed Issuer and Root of Trust,
and the KYC schema and claim used across the suite.
"""

from __future__ import annotations

import pytest

from seraphid.sdk.issuer import IssuerContract, SeraphIDIssuer
from seraphid.sdk.memory import InMemoryLedger
from seraphid.sdk.models import Claim, DIDNetwork, Schema
from seraphid.sdk.rot import SeraphIDRootOfTrust
from seraphid.sdk.signing import SignatureScheme, generate_keypair
from seraphid.sdk.verifier import SeraphIDVerifier


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Fresh in-memory ledger."""
    return InMemoryLedger()


@pytest.fixture
def issuer_keys() -> tuple[str, str]:
    """Issuer ed25519 keypair as (private_hex, public_hex)."""
    return generate_keypair(SignatureScheme.ED25519)


@pytest.fixture
def kyc_schema() -> Schema:
    return Schema(name="KYC", attributes=["firstName", "lastName", "age"], revokable=True)


@pytest.fixture
def kyc_claim() -> Claim:
    """Unsigned KYC claim for John Doe."""
    return Claim(
        id="C1",
        ownerDID="did:x:priv:abc",
        schema="KYC",
        attributes={"firstName": "John", "lastName": "Doe", "age": 26},
    )


@pytest.fixture
def issuer_contract(ledger: InMemoryLedger, issuer_keys: tuple[str, str]) -> IssuerContract:
    """Issuer contract deployed with the issuer public key as admin."""
    address = ledger.deploy_issuer("Seraph Test Issuer", [issuer_keys[1]])
    return IssuerContract(address, DIDNetwork.PRIVATE, ledger, ledger)


@pytest.fixture
def issuer(issuer_contract: IssuerContract, kyc_schema: Schema) -> SeraphIDIssuer:
    """Issuer with the KYC schema registered."""
    issuer_contract.register_schema(kyc_schema)
    return SeraphIDIssuer(issuer_contract)


@pytest.fixture
def rot(ledger: InMemoryLedger) -> SeraphIDRootOfTrust:
    address = ledger.deploy_root_of_trust("Seraph Test RoT")
    return SeraphIDRootOfTrust(address, DIDNetwork.PRIVATE, ledger, ledger)


@pytest.fixture
def verifier(ledger: InMemoryLedger) -> SeraphIDVerifier:
    return SeraphIDVerifier(DIDNetwork.PRIVATE, ledger)
