"""Application-specific exceptions.

Every registry error carries a human-readable message which the view layer
surfaces verbatim to the end user, plus a stable `error_code` for programmatic
handling.

Classes:
    LinkShortenerError:
        Base exception for all application-specific errors.

    ConfigurationError / BadConfigurationError:
        Raised when the application is configured with invalid parameters.

    RegistryError:
        Base exception for errors raised by Registry operations.

    InvalidUrlError, InvalidShortcodeError, ShortcodeTakenError,
    InvalidValidityError, TooManyRequestsError, NotFoundError:
        Recoverable errors local to a single Registry operation.

    InfrastructureError / GeolocationError:
        Raised when an external service (IP-geolocation) fails.

Example:
    >>> from linkshortener.exceptions import NotFoundError
    >>> raise NotFoundError()
    Traceback (most recent call last):
        ...
    linkshortener.exceptions.NotFoundError: URL not found or expired
"""


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'
    default_message = 'Unexpected application error'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'
    default_message = 'Invalid configuration'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class RegistryError(LinkShortenerError):
    """Base exception for errors raised by Registry operations."""

    error_code = 'registry:registry_error'


class InvalidUrlError(RegistryError):
    """Raised when a submitted URL does not parse as an absolute URL."""

    error_code = 'registry:invalid_url'
    default_message = 'Invalid URL format'


class InvalidShortcodeError(RegistryError):
    """Raised when a custom shortcode does not match the shortcode pattern."""

    error_code = 'registry:invalid_shortcode'
    default_message = 'Invalid shortcode format. Use 3-10 alphanumeric characters.'


class ShortcodeTakenError(RegistryError):
    """Raised when a custom shortcode is already owned by another record."""

    error_code = 'registry:shortcode_taken'
    default_message = 'Shortcode already exists. Please choose a different one.'


class InvalidValidityError(RegistryError):
    """Raised when the validity window is not a positive, finite number of minutes."""

    error_code = 'registry:invalid_validity'
    default_message = 'Validity must be a positive number of minutes.'


class TooManyRequestsError(RegistryError):
    """Raised when a batch holds more submissions than allowed."""

    error_code = 'registry:too_many_requests'
    default_message = 'Too many URLs submitted at once'
    message_template = 'Cannot create more than {max_batch_size} URLs at once'

    def __init__(self, message: str | None = None, max_batch_size: int | None = None):
        self.max_batch_size = max_batch_size
        if message is None and max_batch_size is not None:
            message = self.message_template.format(max_batch_size=max_batch_size)
        super().__init__(message)


class NotFoundError(RegistryError):
    """Raised when resolving a shortcode which is missing or expired."""

    error_code = 'registry:not_found'
    default_message = 'URL not found or expired'


class InfrastructureError(LinkShortenerError):
    """Base exception for all errors coming from external services."""

    error_code = 'infra:infrastructure_error'
    default_message = 'External service error'


class GeolocationError(InfrastructureError):
    """Raised when the IP-geolocation lookup fails (network, timeout, malformed response)."""

    error_code = 'infra:geolocation_error'
    default_message = 'Geolocation lookup failed'
