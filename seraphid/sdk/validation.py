"""Claim schema and lifecycle validation.

Each check returns a VerificationResult naming the failing check, so callers
can tell a bad signature from a revoked claim. Checks never raise for
invalid claims.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from seraphid.sdk.hashing import claim_hash
from seraphid.sdk.models import Claim, FailureKind, Schema, VerificationResult
from seraphid.sdk.signing import verify

ClaimPredicate = Callable[[Claim], bool]


def validate_attributes(claim: Claim, schema: Schema) -> VerificationResult:
    """Check the claim populates exactly the schema's attributes."""
    if claim.schema_name != schema.name:
        return VerificationResult.fail(
            FailureKind.SCHEMA_MISMATCH,
            f"Claim references schema '{claim.schema_name}', expected '{schema.name}'",
        )

    expected, actual = set(schema.attributes), set(claim.attributes)
    if expected == actual:
        return VerificationResult.ok()

    return VerificationResult.fail(FailureKind.SCHEMA_MISMATCH, _describe_mismatch(expected, actual))


def check_signature(claim: Claim, public_keys: Sequence[str]) -> VerificationResult:
    """Check the claim signature against any of the issuer's public keys."""
    if not claim.signature:
        return VerificationResult.fail(FailureKind.SIGNATURE, f"Claim {claim.id} is not signed")

    digest = claim_hash(claim)
    if any(verify(digest, claim.signature, key) for key in public_keys):
        return VerificationResult.ok()
    return VerificationResult.fail(FailureKind.SIGNATURE, f"Invalid signature for claim {claim.id}")


def check_not_revoked(claim: Claim, on_chain_valid: bool) -> VerificationResult:
    """Interpret the issuer's isValidClaim answer.

    A false answer means revoked or never issued; the registry does not
    distinguish the two.
    """
    if on_chain_valid:
        return VerificationResult.ok()
    return VerificationResult.fail(FailureKind.REVOKED, f"Claim {claim.id} is revoked or was never issued")


def check_validity_window(claim: Claim, now: datetime | None = None) -> VerificationResult:
    """Check now falls within [validFrom, validTo]; a missing bound is open."""
    current = _as_utc(now or datetime.now(timezone.utc))
    if claim.valid_from and current < _as_utc(claim.valid_from):
        return VerificationResult.fail(
            FailureKind.OUT_OF_DATE_RANGE, f"Claim {claim.id} is not valid before {claim.valid_from.isoformat()}"
        )
    if claim.valid_to and current > _as_utc(claim.valid_to):
        return VerificationResult.fail(
            FailureKind.OUT_OF_DATE_RANGE, f"Claim {claim.id} expired at {claim.valid_to.isoformat()}"
        )
    return VerificationResult.ok()


def check_custom(claim: Claim, predicate: ClaimPredicate) -> VerificationResult:
    """Run caller predicate; an exception becomes a failed result."""
    try:
        passed = predicate(claim)
    except Exception as e:
        return VerificationResult.fail(FailureKind.CUSTOM_VALIDATION_ERROR, f"Custom validator raised: {e!r}")

    if passed:
        return VerificationResult.ok()
    return VerificationResult.fail(FailureKind.CUSTOM_VALIDATION_FAILED, f"Custom validator rejected claim {claim.id}")


def validate_lifecycle(
    claim: Claim,
    schema: Schema,
    public_keys: Sequence[str],
    on_chain_valid: bool,
    custom: ClaimPredicate | None = None,
    now: datetime | None = None,
) -> VerificationResult:
    """Run signature, schema, revocation, date and custom checks in order.

    Returns the first failing result, or success when all checks pass.
    """
    checks: list[Callable[[], VerificationResult]] = [
        lambda: check_signature(claim, public_keys),
        lambda: validate_attributes(claim, schema),
        lambda: check_not_revoked(claim, on_chain_valid),
        lambda: check_validity_window(claim, now),
    ]
    if custom is not None:
        checks.append(lambda: check_custom(claim, custom))

    for check in checks:
        result = check()
        if not result.success:
            return result
    return VerificationResult.ok()


def _describe_mismatch(expected: set[str], actual: set[str]) -> str:
    parts = []
    missing = sorted(expected - actual)
    extra = sorted(actual - expected)
    if missing:
        parts.append(f"missing attributes: {', '.join(missing)}")
    if extra:
        parts.append(f"unexpected attributes: {', '.join(extra)}")
    return "Claim does not match schema (" + "; ".join(parts) + ")"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
