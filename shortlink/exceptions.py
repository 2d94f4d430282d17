from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shortlink.models import RateLimitDecision


class ShortLinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlink_error'


class ValidationError(ShortLinkError):
    """Raised when the client sent a missing, malformed or non-http(s) long URL."""

    error_code = 'request:validation_error'
    status_code = 400


class PayloadTooLargeError(ValidationError):
    """Raised when the encoded or decoded long URL exceeds its size cap."""

    error_code = 'request:payload_too_large_error'
    status_code = 413


class RateLimitedError(ShortLinkError):
    """Raised when a client exhausted its requests for the current window."""

    error_code = 'request:rate_limited_error'

    def __init__(self, decision: RateLimitDecision, message: str | None = None):
        super().__init__(message or f'Rate limited, retry in {decision.reset_in} seconds.')
        self.decision = decision


class AllocationExhaustedError(ShortLinkError):
    """Raised when every generated shortcode candidate collided with an existing link."""

    error_code = 'app:allocation_exhausted_error'


class ConfigurationError(ShortLinkError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError, ValueError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
