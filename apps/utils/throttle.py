from rest_framework.throttling import UserRateThrottle, AnonRateThrottle


class BurstRateThrottle(UserRateThrottle):
    """
    Per-user burst limit for login and registration attempts.
    Scope: 'burst' (Configured in settings)
    """
    scope = 'burst'


class SustainedRateThrottle(UserRateThrottle):
    """
    General API usage.
    """
    scope = 'sustained'


class AnonBurstRateThrottle(AnonRateThrottle):
    scope = 'anon'
