# Log event codes
CORS_PREFLIGHT = 'CORS_PREFLIGHT'
ROUTE_NOT_FOUND = 'ROUTE_NOT_FOUND'
RATE_LIMITED = 'RATE_LIMITED'
INVALID_LONG_URL = 'INVALID_LONG_URL'
ALLOCATION_EXHAUSTED = 'ALLOCATION_EXHAUSTED'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
SHORT_LINK_CREATED = 'SHORT_LINK_CREATED'

# Rate limit response headers
RATE_LIMIT_REMAINING_HEADER = 'x-rl-remaining'
RATE_LIMIT_RESET_IN_HEADER = 'x-rl-reset-in'
