"""SeraphID SDK: claim protocol and trust verification engine."""

from seraphid.sdk.errors import InvalidAddress, MalformedDID, SeraphIDError, TransportError
from seraphid.sdk.issuer import IssuerContract, SeraphIDIssuer
from seraphid.sdk.models import Claim, ClaimState, DIDNetwork, FailureKind, Schema, VerificationResult
from seraphid.sdk.rot import SeraphIDRootOfTrust
from seraphid.sdk.verifier import SeraphIDVerifier

__all__ = [
    "Claim",
    "ClaimState",
    "DIDNetwork",
    "FailureKind",
    "InvalidAddress",
    "IssuerContract",
    "MalformedDID",
    "Schema",
    "SeraphIDError",
    "SeraphIDIssuer",
    "SeraphIDRootOfTrust",
    "SeraphIDVerifier",
    "TransportError",
    "VerificationResult",
]
