"""One-time email codes that gate ticket claims.

A claimant requests a code for an email address, proves receipt by submitting it, and may then
claim exactly one ticket within the claim session window. Why a verification failed is logged but
never revealed to the caller.
"""

import hashlib
import hmac
import secrets
import string
from datetime import timedelta
from enum import StrEnum

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import F, QuerySet
from django.utils import timezone

from events.exceptions import ChallengeRateLimitedError, VerificationFailedError
from events.models import ClaimChallenge
from notifications.enums import LifecycleEvent
from notifications.service import dispatcher

logger = structlog.get_logger(__name__)


class ChallengeFailure(StrEnum):
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    INVALID_CODE = "invalid_code"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def generate_code() -> str:
    return "".join(secrets.choice(string.digits) for _ in range(settings.CLAIM_CHALLENGE_CODE_LENGTH))


def hash_code(email: str, code: str) -> str:
    return hmac.new(settings.SECRET_KEY.encode(), f"{email}:{code}".encode(), hashlib.sha256).hexdigest()


def request_challenge(email: str) -> ClaimChallenge:
    """Issue a new code for the email, retiring any code still active for it.

    Raises:
        ChallengeRateLimitedError: too many codes were requested for this email in the last hour.
    """
    email = normalize_email(email)
    now = timezone.now()
    issued_last_hour = ClaimChallenge.objects.for_email(email).filter(created_at__gt=now - timedelta(hours=1)).count()
    if issued_last_hour >= settings.CLAIM_CHALLENGE_MAX_PER_HOUR:
        logger.warning("claim_challenge_rate_limited", issued_last_hour=issued_last_hour)
        raise ChallengeRateLimitedError()

    code = generate_code()
    with transaction.atomic():
        retired = ClaimChallenge.objects.for_email(email).active(now).update(expires_at=now)
        challenge = ClaimChallenge.objects.create(
            email=email,
            code_hash=hash_code(email, code),
            expires_at=now + timedelta(minutes=settings.CLAIM_CHALLENGE_TTL_MINUTES),
        )
        dispatcher.emit(
            LifecycleEvent.CHALLENGE_REQUESTED,
            recipient=email,
            context={"code": code, "expires_at": challenge.expires_at.isoformat()},
        )

    logger.info("claim_challenge_issued", challenge_id=str(challenge.id), retired=retired)
    return challenge


def verify_challenge(email: str, code: str) -> bool:
    """Check a submitted code against the newest unverified challenge for the email.

    A correct code consumes the challenge, so replaying it fails.
    """
    email = normalize_email(email)
    challenge = (
        ClaimChallenge.objects.for_email(email).filter(verified=False).order_by("-created_at", "-expires_at").first()
    )
    if challenge is None:
        logger.info("claim_challenge_failed", reason=ChallengeFailure.NOT_FOUND)
        return False

    failure = _consume(challenge, email, code)
    if failure is not None:
        logger.info("claim_challenge_failed", reason=failure, challenge_id=str(challenge.id))
        return False

    logger.info("claim_challenge_verified", challenge_id=str(challenge.id))
    return True


def _consume(challenge: ClaimChallenge, email: str, code: str) -> ChallengeFailure | None:
    now = timezone.now()
    if challenge.has_expired(now):
        return ChallengeFailure.EXPIRED
    if challenge.attempts >= settings.CLAIM_CHALLENGE_MAX_ATTEMPTS:
        return ChallengeFailure.TOO_MANY_ATTEMPTS
    # the attempt cap is re-checked in each UPDATE, concurrent guesses may have used it up since the read
    open_challenge = ClaimChallenge.objects.filter(
        pk=challenge.pk, verified=False, expires_at__gt=now, attempts__lt=settings.CLAIM_CHALLENGE_MAX_ATTEMPTS
    )
    if not hmac.compare_digest(challenge.code_hash, hash_code(email, code)):
        open_challenge.update(attempts=F("attempts") + 1)
        return ChallengeFailure.INVALID_CODE
    if not open_challenge.update(verified=True, verified_at=now):
        challenge.refresh_from_db(fields=["verified", "attempts"])
        if not challenge.verified and challenge.attempts >= settings.CLAIM_CHALLENGE_MAX_ATTEMPTS:
            return ChallengeFailure.TOO_MANY_ATTEMPTS
        return ChallengeFailure.NOT_FOUND
    return None


def has_verified_claim(email: str) -> bool:
    """Whether the email holds an unspent verification from the current claim session."""
    return _verified_claims(normalize_email(email)).exists()


def consume_verified_claim(email: str) -> None:
    """Spend the email's verification on one ticket.

    Call inside the transaction that creates the ticket so a failed creation keeps the claim.

    Raises:
        VerificationFailedError: there is no unspent verification for the email.
    """
    email = normalize_email(email)
    challenge = _verified_claims(email).order_by("-verified_at").first()
    if challenge is None or not ClaimChallenge.objects.filter(pk=challenge.pk, used_at__isnull=True).update(
        used_at=timezone.now()
    ):
        logger.info("claim_session_missing")
        raise VerificationFailedError()
    logger.debug("claim_session_consumed", challenge_id=str(challenge.id))


def _verified_claims(email: str) -> QuerySet[ClaimChallenge]:
    cutoff = timezone.now() - timedelta(minutes=settings.CLAIM_SESSION_TTL_MINUTES)
    return ClaimChallenge.objects.for_email(email).filter(verified=True, used_at__isnull=True, verified_at__gte=cutoff)
