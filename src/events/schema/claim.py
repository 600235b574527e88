"""Email verification schemas."""

import typing as t

from ninja import Schema
from pydantic import AwareDatetime, EmailStr, StringConstraints


class ClaimChallengeRequestSchema(Schema):
    email: EmailStr


class ClaimChallengeVerifySchema(Schema):
    email: EmailStr
    code: t.Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\d{6}$")]


class ClaimChallengeIssuedSchema(Schema):
    expires_at: AwareDatetime


class ClaimVerifiedSchema(Schema):
    verified: bool = True
