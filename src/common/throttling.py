from ninja_extra.throttling import AnonRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "60/min"


class UserDefaultThrottle(UserRateThrottle):
    rate = "100/min"


class ClaimChallengeThrottle(AnonRateThrottle):
    """Bounds one-time code requests per client, on top of the per-email limit."""

    rate = "10/hour"


class ClaimThrottle(AnonRateThrottle):
    rate = "30/min"


class ScannerThrottle(UserRateThrottle):
    # Door scanners burst hard at opening time.
    rate = "600/min"


class WriteThrottle(UserRateThrottle):
    rate = "100/min"
