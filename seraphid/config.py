"""SeraphID configuration using pydantic-settings.

Handles Algod client setup, transaction signer and the contract application
IDs of the Issuer and Root of Trust.
"""

from __future__ import annotations

from algosdk import account, mnemonic
from algosdk.atomic_transaction_composer import AccountTransactionSigner
from algosdk.v2client.algod import AlgodClient
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seraphid.sdk.algorand import AlgorandTransport
from seraphid.sdk.issuer import IssuerContract, SeraphIDIssuer
from seraphid.sdk.models import DIDNetwork
from seraphid.sdk.rot import SeraphIDRootOfTrust
from seraphid.sdk.signing import SignatureScheme
from seraphid.sdk.verifier import SeraphIDVerifier


class SeraphConfig(BaseSettings):
    """SeraphID configuration using pydantic-settings BaseSettings."""

    model_config = SettingsConfigDict(
        env_prefix='SERAPH_',
        env_file='.env',
        env_file_encoding='utf-8',
        secrets_dir='/run/secrets'
    )

    algod_url: str = Field(
        default="http://localhost:4001",
        description="Algorand node URL"
    )
    algod_token: str = Field(
        default="aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
        description="Algorand node API token"
    )
    network: DIDNetwork = Field(
        default=DIDNetwork.PRIVATE,
        description="Network tag used in DIDs"
    )
    issuer_app_id: int | None = Field(
        default=None,
        description="Application ID of the Issuer contract"
    )
    rot_app_id: int | None = Field(
        default=None,
        description="Application ID of the Root of Trust contract"
    )
    mnemonic: str | None = Field(
        default=None,
        description="Account mnemonic for transaction signing"
    )
    signature_scheme: SignatureScheme = Field(
        default=SignatureScheme.ED25519,
        description="Scheme used to sign claims"
    )
    wait_rounds: int = Field(
        default=4,
        ge=1,
        description="Rounds to wait for transaction confirmation"
    )

    @field_validator('issuer_app_id', 'rot_app_id')
    @classmethod
    def validate_app_id(cls, v: int | None) -> int | None:
        """Validate app ID is positive if provided."""
        if v is not None and v <= 0:
            raise ValueError("App ID must be positive")
        return v

    def app_ids(self) -> list[int]:
        return [app_id for app_id in (self.issuer_app_id, self.rot_app_id) if app_id]


def create_algod_client(config: SeraphConfig) -> AlgodClient:
    """Create Algod client from configuration."""
    return AlgodClient(config.algod_token, config.algod_url)


def create_signer(config: SeraphConfig) -> tuple[AccountTransactionSigner, str]:
    """Create transaction signer from mnemonic."""
    if not config.mnemonic:
        raise ValueError("Mnemonic required. Set SERAPH_MNEMONIC environment variable.")

    try:
        private_key = mnemonic.to_private_key(config.mnemonic)
        address = account.address_from_private_key(private_key)
        return AccountTransactionSigner(private_key), address
    except Exception as e:
        raise ValueError(f"Invalid mnemonic: {e}")


def create_transport(config: SeraphConfig) -> AlgorandTransport:
    """Create Algorand transport; a signer is attached when a mnemonic is set."""
    if not config.app_ids():
        raise ValueError("App ID required. Set SERAPH_ISSUER_APP_ID or SERAPH_ROT_APP_ID environment variable.")

    transport = AlgorandTransport(create_algod_client(config), config.app_ids(), config.wait_rounds)
    if config.mnemonic:
        signer, sender = create_signer(config)
        transport.set_signer(signer, sender)
    return transport


def create_issuer(config: SeraphConfig, transport: AlgorandTransport) -> SeraphIDIssuer:
    """Create Issuer role bound to the configured Issuer application."""
    if not config.issuer_app_id:
        raise ValueError("Issuer app ID required. Set SERAPH_ISSUER_APP_ID environment variable.")

    address = transport.register_app(config.issuer_app_id)
    contract = IssuerContract(address, config.network, transport, transport)
    return SeraphIDIssuer(contract, config.signature_scheme)


def create_root_of_trust(config: SeraphConfig, transport: AlgorandTransport) -> SeraphIDRootOfTrust:
    """Create Root of Trust client bound to the configured application."""
    if not config.rot_app_id:
        raise ValueError("Root of Trust app ID required. Set SERAPH_ROT_APP_ID environment variable.")

    address = transport.register_app(config.rot_app_id)
    return SeraphIDRootOfTrust(address, config.network, transport, transport)


def create_verifier(config: SeraphConfig, transport: AlgorandTransport) -> SeraphIDVerifier:
    """Create Verifier role reading through the transport."""
    return SeraphIDVerifier(config.network, transport)
