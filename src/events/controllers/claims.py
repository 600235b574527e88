from ninja_extra import ControllerBase, api_controller, route

from common.throttling import ClaimChallengeThrottle, ClaimThrottle
from events import schema
from events.exceptions import VerificationFailedError
from events.service import claim_verifier


@api_controller("/claims", tags=["Claims"])
class ClaimController(ControllerBase):
    """Email verification that precedes every ticket claim."""

    @route.post(
        "/challenge",
        url_name="request_claim_challenge",
        response={202: schema.ClaimChallengeIssuedSchema},
        throttle=ClaimChallengeThrottle(),
    )
    def request_challenge(
        self, payload: schema.ClaimChallengeRequestSchema
    ) -> tuple[int, schema.ClaimChallengeIssuedSchema]:
        """Email a 6-digit code to the address. Requesting a new code invalidates the previous one."""
        challenge = claim_verifier.request_challenge(payload.email)
        return 202, schema.ClaimChallengeIssuedSchema(expires_at=challenge.expires_at)

    @route.post(
        "/verify",
        url_name="verify_claim_challenge",
        response=schema.ClaimVerifiedSchema,
        throttle=ClaimThrottle(),
    )
    def verify_challenge(self, payload: schema.ClaimChallengeVerifySchema) -> schema.ClaimVerifiedSchema:
        """Submit the code. On success the email may claim one ticket within the claim session."""
        if not claim_verifier.verify_challenge(payload.email, payload.code):
            raise VerificationFailedError()
        return schema.ClaimVerifiedSchema()
