"""Algorand transport for SeraphID contracts.

Calls ABI methods named after the Issuer and Root of Trust operations on
Algorand applications. Reads are simulated, writes are submitted and
confirmed. Contracts are addressed by their application address, which is
also the identity address in their DID.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from algosdk import abi
from algosdk.atomic_transaction_composer import (
    AtomicTransactionComposer,
    EmptySigner,
    TransactionSigner,
)
from algosdk.error import AlgodHTTPError, ConfirmationTimeoutError
from algosdk.logic import get_application_address
from algosdk.v2client.algod import AlgodClient
from algosdk.v2client.models import SimulateRequest

from seraphid.sdk.chain import IssuerOperation, RootOfTrustOperation
from seraphid.sdk.did import make_did
from seraphid.sdk.errors import TransportError
from seraphid.sdk.models import DIDNetwork

log = logging.getLogger(__name__)

OPERATION_SIGNATURES: dict[str, str] = {
    IssuerOperation.NAME.value: "name()string",
    IssuerOperation.GET_SCHEMA_DETAILS.value: "getSchemaDetails(string)string",
    IssuerOperation.REGISTER_SCHEMA.value: "registerSchema(string,string)void",
    IssuerOperation.INJECT_CLAIM.value: "injectClaim(string)void",
    IssuerOperation.REVOKE_CLAIM.value: "revokeClaim(string)void",
    IssuerOperation.IS_VALID_CLAIM.value: "isValidClaim(string)bool",
    IssuerOperation.GET_ADMIN_LIST.value: "getAdminList()string[]",
    IssuerOperation.ADD_ADMIN.value: "addAdmin(string)void",
    IssuerOperation.REMOVE_ADMIN.value: "removeAdmin(string)void",
    RootOfTrustOperation.IS_TRUSTED.value: "isTrusted(string,string)bool",
    RootOfTrustOperation.REGISTER_ISSUER.value: "registerIssuer(string,string)void",
    RootOfTrustOperation.DEACTIVATE_ISSUER.value: "deactivateIssuer(string,string)void",
}


def application_did(network: DIDNetwork | str, app_id: int) -> str:
    """Build the DID of a contract deployed as an Algorand application."""
    return make_did(network, get_application_address(app_id))


class AlgorandTransport:
    """ChainQuery and ChainInvoke over Algorand ABI applications."""

    def __init__(
        self,
        algod_client: AlgodClient,
        app_ids: Sequence[int] = (),
        wait_rounds: int = 4,
    ):
        """Initialize transport.

        Args:
            algod_client: Algorand client
            app_ids: IDs of the Issuer and Root of Trust applications
            wait_rounds: Rounds to wait for transaction confirmation
        """
        if not algod_client:
            raise ValueError("Algod client is required")

        self.algod_client = algod_client
        self.wait_rounds = wait_rounds
        self.signer: TransactionSigner | None = None
        self.sender: str | None = None
        self._apps: dict[str, int] = {}
        for app_id in app_ids:
            self.register_app(app_id)

    def register_app(self, app_id: int) -> str:
        """Make an application addressable and return its address."""
        if app_id <= 0:
            raise ValueError("App ID must be positive")
        address = get_application_address(app_id)
        self._apps[address] = app_id
        return address

    def set_signer(self, signer: TransactionSigner, sender: str) -> None:
        """Set transaction signer and sender address."""
        self.signer = signer
        self.sender = sender

    def app_id_for(self, contract: str) -> int:
        """Resolve a contract address to its application ID."""
        if contract not in self._apps:
            raise TransportError(f"Unknown contract: {contract}", {"contract": contract})
        return self._apps[contract]

    def query(self, contract: str, operation: str, args: Sequence[str] = ()) -> Any:
        """Simulate ABI call and return the decoded return value."""
        sender = self.sender or contract
        atc = self._compose(contract, operation, args, self.signer or EmptySigner(), sender)
        request = SimulateRequest(txn_groups=[], allow_empty_signatures=True)

        try:
            response = atc.simulate(self.algod_client, request)
        except AlgodHTTPError as e:
            log.warning("Simulation of %s on %s failed: %s", operation, contract, e)
            raise TransportError(f"Simulation of {operation} failed: {e}", str(e))

        if response.failure_message:
            raise TransportError(response.failure_message, {"failed_at": response.failed_at})
        return self._decode_result(operation, response.abi_results[0])

    def invoke(self, contract: str, operation: str, args: Sequence[str] = ()) -> str:
        """Submit ABI call, wait for confirmation and return the transaction ID."""
        if not self.signer or not self.sender:
            raise ValueError("Signer not set. Call set_signer() first.")

        atc = self._compose(contract, operation, args, self.signer, self.sender)
        try:
            result = atc.execute(self.algod_client, self.wait_rounds)
        except (AlgodHTTPError, ConfirmationTimeoutError) as e:
            log.warning("Invocation of %s on %s failed: %s", operation, contract, e)
            raise TransportError(f"Invocation of {operation} failed: {e}", str(e))

        log.info("Confirmed %s on %s in tx %s", operation, contract, result.tx_ids[0])
        return result.tx_ids[0]

    def _compose(
        self,
        contract: str,
        operation: str,
        args: Sequence[str],
        signer: TransactionSigner,
        sender: str,
    ) -> AtomicTransactionComposer:
        """Build a single-call transaction group."""
        method = abi.Method.from_signature(_signature(operation))
        app_id = self.app_id_for(contract)

        try:
            sp = self.algod_client.suggested_params()
        except AlgodHTTPError as e:
            raise TransportError(f"Could not fetch suggested params: {e}", str(e))

        atc = AtomicTransactionComposer()
        atc.add_method_call(
            app_id=app_id,
            method=method,
            sender=sender,
            sp=sp,
            signer=signer,
            method_args=list(args),
        )
        return atc

    def _decode_result(self, operation: str, abi_result: Any) -> Any:
        if abi_result.decode_error:
            raise TransportError(f"Could not decode {operation} result: {abi_result.decode_error}", abi_result.raw_value)
        return abi_result.return_value


def _signature(operation: str) -> str:
    if operation not in OPERATION_SIGNATURES:
        raise ValueError(f"Unsupported operation: {operation}")
    return OPERATION_SIGNATURES[operation]
