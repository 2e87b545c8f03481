"""Typed exceptions for the SeraphID SDK.

Local input errors and transport faults are raised. Negative validation
outcomes are never raised; they are reported through VerificationResult.
"""

from __future__ import annotations

from typing import Any


class SeraphIDError(Exception):
    """Base exception for SeraphID SDK.

    Attributes:
        rpc_result: Raw diagnostic returned by the transport, if any
    """

    def __init__(self, message: str, rpc_result: Any = None):
        super().__init__(message)
        self.rpc_result = rpc_result


class MalformedDID(SeraphIDError, ValueError):
    """DID prefix, network tag or segment count is wrong."""


class InvalidAddress(SeraphIDError, ValueError):
    """Identity address is neither an Algorand address nor a script hash."""


class TransportError(SeraphIDError):
    """Remote call or contract execution failed.

    Distinct from a negative-but-successful query: the caller could not
    determine the answer.
    """
