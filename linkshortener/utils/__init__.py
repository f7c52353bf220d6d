from linkshortener.utils.config import app_env, project_root, default_config, load_config
from linkshortener.utils.helpers import is_valid_url, get_short_url, shortcode_from_path, source_from_referrer
from linkshortener.utils.shortener import generate_shortcode, generate_record_id, is_valid_shortcode
from linkshortener.utils.logging import initialize_logging, LogBufferHandler, LogEntry


__all__ = [
    'generate_shortcode',
    'generate_record_id',
    'is_valid_shortcode',
    'app_env',
    'project_root',
    'default_config',
    'load_config',
    'is_valid_url',
    'get_short_url',
    'shortcode_from_path',
    'source_from_referrer',
    'initialize_logging',
    'LogBufferHandler',
    'LogEntry',
]
