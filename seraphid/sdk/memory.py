"""In-memory stand-in for the Issuer and Root of Trust contracts.

Implements ChainQuery and ChainInvoke over process memory so that claims
can be issued, revoked and trusted without a node. Contract faults raise
TransportError, as a failed on-chain execution would.

Public test utility: nothing in the SDK depends on it. Applications use it
to exercise Issuer, Root of Trust and Verifier flows in their own tests.
"""

from __future__ import annotations

import hashlib
import itertools
import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Sequence

from algosdk import encoding

from seraphid.sdk.chain import IssuerOperation, RootOfTrustOperation
from seraphid.sdk.errors import TransportError

log = logging.getLogger(__name__)


@dataclass
class IssuerState:
    """Storage of a simulated Issuer contract."""

    name: str
    admins: list[str]
    schemas: dict[str, str] = field(default_factory=dict)
    claims: dict[str, bool] = field(default_factory=dict)


@dataclass
class RootOfTrustState:
    """Storage of a simulated Root of Trust contract."""

    name: str
    trusted: dict[tuple[str, str], bool] = field(default_factory=dict)


class InMemoryLedger:
    """Ledger holding Issuer and Root of Trust contracts in memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._issuers: dict[str, IssuerState] = {}
        self._roots: dict[str, RootOfTrustState] = {}

    def deploy_issuer(self, name: str, admins: list[str]) -> str:
        """Create Issuer contract and return its address."""
        if not name or not admins:
            raise ValueError("Issuer name and at least one admin key required")

        with self._lock:
            address = self._new_address(name)
            self._issuers[address] = IssuerState(name=name, admins=list(admins))
        log.info("Deployed issuer contract %s at %s", name, address)
        return address

    def deploy_root_of_trust(self, name: str) -> str:
        """Create Root of Trust contract and return its address."""
        if not name:
            raise ValueError("Root of Trust name required")

        with self._lock:
            address = self._new_address(name)
            self._roots[address] = RootOfTrustState(name=name)
        log.info("Deployed root of trust contract %s at %s", name, address)
        return address

    def query(self, contract: str, operation: str, args: Sequence[str] = ()) -> Any:
        """Run operation against a snapshot; state changes are discarded."""
        with self._lock:
            issuers, roots = self._snapshot()
            try:
                return self._dispatch(contract, operation, list(args))
            finally:
                self._issuers, self._roots = issuers, roots

    def invoke(self, contract: str, operation: str, args: Sequence[str] = ()) -> str:
        """Run operation, commit its changes and return a transaction ID."""
        with self._lock:
            self._dispatch(contract, operation, list(args))
            tx_id = self._new_tx_id(contract, operation, args)
        log.debug("Committed %s on %s in tx %s", operation, contract, tx_id)
        return tx_id

    def _dispatch(self, contract: str, operation: str, args: list[str]) -> Any:
        if contract in self._issuers:
            return self._run_issuer(self._issuers[contract], operation, args)
        if contract in self._roots:
            return self._run_root_of_trust(self._roots[contract], operation, args)
        raise TransportError(f"Unknown contract: {contract}", {"contract": contract})

    def _run_issuer(self, state: IssuerState, operation: str, args: list[str]) -> Any:
        if operation == IssuerOperation.NAME.value:
            return state.name
        if operation == IssuerOperation.GET_ADMIN_LIST.value:
            return list(state.admins)
        if operation == IssuerOperation.GET_SCHEMA_DETAILS.value:
            return self._require(state.schemas, _arg(args, 0), "Schema not found")
        if operation == IssuerOperation.REGISTER_SCHEMA.value:
            return self._register_schema(state, _arg(args, 0), _arg(args, 1))
        if operation == IssuerOperation.INJECT_CLAIM.value:
            return self._inject_claim(state, _arg(args, 0))
        if operation == IssuerOperation.REVOKE_CLAIM.value:
            return self._revoke_claim(state, _arg(args, 0))
        if operation == IssuerOperation.IS_VALID_CLAIM.value:
            return state.claims.get(_arg(args, 0), False)
        if operation == IssuerOperation.ADD_ADMIN.value:
            return self._add_admin(state, _arg(args, 0))
        if operation == IssuerOperation.REMOVE_ADMIN.value:
            return self._remove_admin(state, _arg(args, 0))
        raise TransportError(f"Unknown issuer operation: {operation}", {"operation": operation})

    def _run_root_of_trust(self, state: RootOfTrustState, operation: str, args: list[str]) -> Any:
        if operation == RootOfTrustOperation.NAME.value:
            return state.name
        if operation == RootOfTrustOperation.IS_TRUSTED.value:
            return state.trusted.get((_arg(args, 0), _arg(args, 1)), False)
        if operation == RootOfTrustOperation.REGISTER_ISSUER.value:
            state.trusted[(_arg(args, 0), _arg(args, 1))] = True
            return True
        if operation == RootOfTrustOperation.DEACTIVATE_ISSUER.value:
            key = (_arg(args, 0), _arg(args, 1))
            if key not in state.trusted:
                raise TransportError("Issuer is not registered", {"issuer": key[0], "schema": key[1]})
            state.trusted[key] = False
            return True
        raise TransportError(f"Unknown root of trust operation: {operation}", {"operation": operation})

    def _register_schema(self, state: IssuerState, name: str, definition: str) -> bool:
        if name in state.schemas:
            raise TransportError(f"Schema already registered: {name}", {"schema": name})
        try:
            json.loads(definition)
        except json.JSONDecodeError as e:
            raise TransportError(f"Invalid schema definition: {e}", {"schema": name})
        state.schemas[name] = definition
        return True

    def _inject_claim(self, state: IssuerState, claim_id: str) -> bool:
        # Revoked IDs stay recorded, so revocation is terminal per claim ID.
        if claim_id in state.claims:
            raise TransportError(f"Claim already injected: {claim_id}", {"claim": claim_id})
        state.claims[claim_id] = True
        return True

    def _revoke_claim(self, state: IssuerState, claim_id: str) -> bool:
        if not state.claims.get(claim_id):
            raise TransportError(f"Claim not active: {claim_id}", {"claim": claim_id})
        state.claims[claim_id] = False
        return True

    def _add_admin(self, state: IssuerState, public_key: str) -> bool:
        if public_key not in state.admins:
            state.admins.append(public_key)
        return True

    def _remove_admin(self, state: IssuerState, public_key: str) -> bool:
        if public_key not in state.admins:
            raise TransportError(f"Unknown admin key: {public_key}", {"admin": public_key})
        if len(state.admins) == 1:
            raise TransportError("Cannot remove the last admin key", {"admin": public_key})
        state.admins.remove(public_key)
        return True

    def _require(self, table: dict[str, str], key: str, message: str) -> str:
        if key not in table:
            raise TransportError(f"{message}: {key}", {"key": key})
        return table[key]

    def _snapshot(self) -> tuple[dict[str, IssuerState], dict[str, RootOfTrustState]]:
        issuers = {
            address: IssuerState(s.name, list(s.admins), dict(s.schemas), dict(s.claims))
            for address, s in self._issuers.items()
        }
        roots = {address: RootOfTrustState(s.name, dict(s.trusted)) for address, s in self._roots.items()}
        return issuers, roots

    def _new_address(self, name: str) -> str:
        seed = f"{name}:{next(self._counter)}".encode("utf-8")
        return encoding.encode_address(hashlib.sha256(seed).digest())

    def _new_tx_id(self, contract: str, operation: str, args: Sequence[str]) -> str:
        message = f"{contract}|{operation}|{'|'.join(args)}|{next(self._counter)}"
        return hashlib.sha256(message.encode("utf-8")).hexdigest()


def _arg(args: list[str], index: int) -> str:
    if index >= len(args):
        raise TransportError(f"Missing argument {index}", {"args": args})
    return args[index]
