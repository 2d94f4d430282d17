from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    target: str                         # Original long URL, stored verbatim
    shortcode: str                      # Unique short identifier of shortened URL


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool                       # Whether the request was admitted
    remaining: int                      # Requests left in the current window
    reset_in: int                       # Seconds until the current window closes
# fmt: on
