import typing as t
from datetime import datetime

from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel


class ClaimChallengeQuerySet(models.QuerySet["ClaimChallenge"]):
    def for_email(self, email: str) -> t.Self:
        return self.filter(email=email)

    def active(self, now: datetime | None = None) -> t.Self:
        return self.filter(verified=False, expires_at__gt=now or timezone.now())


class ClaimChallenge(TimeStampedModel):
    """A one-time code proving that a claimant controls an email address.

    Only a keyed hash of the code is stored.
    """

    email = models.EmailField(db_index=True)
    code_hash = models.CharField(max_length=64)
    expires_at = models.DateTimeField(db_index=True)
    verified = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)
    used_at = models.DateTimeField(null=True, blank=True)
    attempts = models.PositiveSmallIntegerField(default=0)

    objects = ClaimChallengeQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["email", "created_at"], name="claim_email_created_idx")]

    def __str__(self) -> str:  # pragma: no cover
        return f"Challenge for {self.email}"

    def has_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or timezone.now())
