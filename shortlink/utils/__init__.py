from shortlink.utils.config import app_env, app_name, app_prefix, load_settings, load_redis_config, Settings
from shortlink.utils.helpers import base_url, get_short_url, get_header, client_address, require_environment, guarantee_500_response
from shortlink.utils.shortener import generate_shortcode, is_valid_shortcode
from shortlink.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'is_valid_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_settings',
    'load_redis_config',
    'Settings',
    'base_url',
    'get_short_url',
    'get_header',
    'client_address',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
