# Batch creation limit (number of submissions per create_batch() call)
MAX_BATCH_SIZE = 5

# Default validity window for new short URLs (in minutes)
DEFAULT_VALIDITY_MINUTES = 30

# Generated shortcode length and custom shortcode bounds
DEFAULT_SHORTCODE_LENGTH = 6
MIN_SHORTCODE_LENGTH = 3
MAX_SHORTCODE_LENGTH = 10

# Click tracking defaults
DIRECT_SOURCE = 'direct'
UNKNOWN_LOCATION = 'Unknown Location'
UNKNOWN_USER_AGENT = 'Unknown'

# Geolocation lookup
DEFAULT_GEOLOCATION_URL = 'https://ipapi.co/json/'
DEFAULT_GEOLOCATION_TIMEOUT = 3.0  # seconds

# Log ring buffer capacity (number of most recent entries kept)
LOG_BUFFER_CAPACITY = 1_000

# Storage: single local file holding the serialized registry
DEFAULT_STORAGE_FILE = 'shortened_urls.json'

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
PROJECT_ROOT_ENV = 'PROJECT_ROOT'
LOG_LEVEL_ENV = 'LOG_LEVEL'
CONFIG_PATH_ENV = 'LINKSHORTENER_CONFIG'
