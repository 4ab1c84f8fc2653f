"""
Request throttling for the tycoon API.
"""
import re

from django.conf import settings
from django.core.cache import caches
from rest_framework.throttling import ScopedRateThrottle

RATE_PERIOD = re.compile(r"^(?P<count>\d*)(?P<unit>[smhd])")
PERIOD_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class SlidingWindowThrottle(ScopedRateThrottle):
    """
    Scoped throttle whose rates may name a multiple of the period unit.

    DRF only understands rates such as "10/min"; this class also accepts
    "5/15m" (five requests per fifteen minutes). The request history is
    kept in the cache named by the `TYCOON_THROTTLE_CACHE` setting, keyed
    by the user id or, for anonymous callers, the client address.

    Views opt in by setting `throttle_scope`; views without a scope are not
    throttled.
    """

    @property
    def cache(self):
        return caches[getattr(settings, "TYCOON_THROTTLE_CACHE", "default")]

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        num, period = rate.split("/")
        match = RATE_PERIOD.match(period)
        if match is None:
            raise ValueError(f"Invalid throttle period '{period}'")
        multiple = int(match.group("count") or 1)
        return (int(num), multiple * PERIOD_SECONDS[match.group("unit")])
