from decouple import config

DEFAULT_CURRENCY = config("DEFAULT_CURRENCY", default="INR")

# Unpaid (pending / pay-at-venue) tickets expire once older than this.
TICKET_GRACE_WINDOW_HOURS = config("TICKET_GRACE_WINDOW_HOURS", default=24, cast=int)
# How long a ticket stays downloadable after its payment was verified.
TICKET_DOWNLOAD_WINDOW_HOURS = config("TICKET_DOWNLOAD_WINDOW_HOURS", default=6, cast=int)
# Must divide 60, it is used as a crontab minute step.
TICKET_SWEEP_INTERVAL_MINUTES = config("TICKET_SWEEP_INTERVAL_MINUTES", default=5, cast=int)
TICKET_CODE_MAX_SCAN_LENGTH = 50

CLAIM_CHALLENGE_CODE_LENGTH = 6
CLAIM_CHALLENGE_TTL_MINUTES = config("CLAIM_CHALLENGE_TTL_MINUTES", default=10, cast=int)
CLAIM_CHALLENGE_MAX_PER_HOUR = config("CLAIM_CHALLENGE_MAX_PER_HOUR", default=5, cast=int)
CLAIM_CHALLENGE_MAX_ATTEMPTS = config("CLAIM_CHALLENGE_MAX_ATTEMPTS", default=5, cast=int)
# A verified email may claim a ticket for this long after verification.
CLAIM_SESSION_TTL_MINUTES = config("CLAIM_SESSION_TTL_MINUTES", default=30, cast=int)
