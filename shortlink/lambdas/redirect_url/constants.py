# Log event codes
MALFORMED_SHORTCODE = 'MALFORMED_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
