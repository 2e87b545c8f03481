"""Chain capabilities required by the SeraphID core.

Role objects receive a transport implementing these protocols instead of
inheriting transport helpers. Operation names are a contract with the
on-chain programs and must not change.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, Sequence


class IssuerOperation(str, Enum):
    """Operation names in the Issuer's contract."""
    NAME = "name"
    GET_SCHEMA_DETAILS = "getSchemaDetails"
    REGISTER_SCHEMA = "registerSchema"
    INJECT_CLAIM = "injectClaim"
    REVOKE_CLAIM = "revokeClaim"
    IS_VALID_CLAIM = "isValidClaim"
    GET_ADMIN_LIST = "getAdminList"
    ADD_ADMIN = "addAdmin"
    REMOVE_ADMIN = "removeAdmin"


class RootOfTrustOperation(str, Enum):
    """Operation names in the Root of Trust's contract."""
    NAME = "name"
    IS_TRUSTED = "isTrusted"
    REGISTER_ISSUER = "registerIssuer"
    DEACTIVATE_ISSUER = "deactivateIssuer"


class ChainQuery(Protocol):
    """Read-only contract invocation."""

    def query(self, contract: str, operation: str, args: Sequence[str] = ()) -> Any:
        """Invoke operation without committing state and return its result.

        Raises:
            TransportError: if the call or the contract execution fails
        """
        ...


class ChainInvoke(Protocol):
    """State-changing contract invocation."""

    def invoke(self, contract: str, operation: str, args: Sequence[str] = ()) -> str:
        """Submit operation and return the transaction reference.

        Raises:
            TransportError: if the call or the contract execution fails
        """
        ...


class ChainTransport(ChainQuery, ChainInvoke, Protocol):
    """Transport offering both capabilities."""
