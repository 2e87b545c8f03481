"""Pydantic models for SeraphID data structures.

Provides schemas, claims and verification results with camelCase wire
aliases and ISO-8601 dates, so exported documents round-trip exactly.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

AttributeValue = Union[str, bool, int, float, None]


class DIDNetwork(str, Enum):
    """Network tags allowed in a DID."""
    TEST = "test"
    MAIN = "main"
    PRIVATE = "priv"


class ClaimState(str, Enum):
    """Claim lifecycle states."""
    CREATED = "created"
    SIGNED = "signed"
    INJECTED = "injected"
    VALID = "valid"
    INVALID = "invalid"


class FailureKind(str, Enum):
    """Which lifecycle check rejected a claim."""
    SIGNATURE = "signature"
    SCHEMA_MISMATCH = "schema_mismatch"
    REVOKED = "revoked"
    OUT_OF_DATE_RANGE = "out_of_date_range"
    CUSTOM_VALIDATION_ERROR = "custom_validation_error"
    CUSTOM_VALIDATION_FAILED = "custom_validation_failed"
    MISSING_ISSUER = "missing_issuer"


class Schema(BaseModel):
    """Claim schema registered by an Issuer."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique schema name")
    attributes: list[str] = Field(..., description="Attribute names a claim must populate")
    revokable: bool = Field(..., description="Whether claims under this schema can be revoked")
    tx: str | None = Field(default=None, description="Registration transaction reference")

    @field_validator("attributes")
    @classmethod
    def validate_unique_attributes(cls, v: list[str]) -> list[str]:
        """Reject duplicate attribute names."""
        if len(set(v)) != len(v):
            raise ValueError("Schema attributes must be unique")
        return v

    def definition(self) -> str:
        """JSON definition stored on-chain by registerSchema."""
        return self.model_dump_json(exclude={"tx"})

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> Schema:
        return cls.model_validate_json(data)


class Claim(BaseModel):
    """Attribute claim about an owner DID, issued under a named schema."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Claim ID, unique within issuer")
    owner_did: str = Field(..., alias="ownerDID", description="DID of the claim owner")
    issuer_did: str | None = Field(default=None, alias="issuerDID", description="DID of the issuer")
    schema_name: str = Field(..., alias="schema", description="Referenced schema name")
    attributes: dict[str, AttributeValue] = Field(default_factory=dict, description="Attribute values")
    signature: str | None = Field(default=None, description="Hex signature over the claim hash")
    valid_from: datetime | None = Field(default=None, alias="validFrom")
    valid_to: datetime | None = Field(default=None, alias="validTo")
    tx: str | None = Field(default=None, description="Injection transaction reference")

    @field_validator("valid_from", "valid_to")
    @classmethod
    def validate_timezone(cls, v: datetime | None) -> datetime | None:
        """Interpret naive datetimes as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> Claim:
        """Ensure validFrom does not come after validTo."""
        if self.valid_from and self.valid_to and self.valid_from > self.valid_to:
            raise ValueError("validFrom must not be later than validTo")
        return self

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> Claim:
        return cls.model_validate_json(data)


class VerificationResult(BaseModel):
    """Outcome of a validating operation."""

    success: bool
    error: str | None = None
    kind: FailureKind | None = None

    @classmethod
    def ok(cls) -> VerificationResult:
        return cls(success=True)

    @classmethod
    def fail(cls, kind: FailureKind, error: str) -> VerificationResult:
        return cls(success=False, error=error, kind=kind)

    def __bool__(self) -> bool:
        return self.success


def claim_state(claim: Claim) -> ClaimState:
    """Derive the non-terminal lifecycle state of a claim."""
    if not claim.signature:
        return ClaimState.CREATED
    if not claim.tx:
        return ClaimState.SIGNED
    return ClaimState.INJECTED
