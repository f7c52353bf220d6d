"""Helper utilities shared by the registry and its callers.

Functions:
    is_valid_url(url: str) -> bool
        Check that a string parses as an absolute URL
    get_short_url(origin: str, shortcode: str) -> str
        Get string representation of short URL for a given shortcode
    shortcode_from_path(path: str) -> str | None
        Extract the shortcode from a short URL or its path
    source_from_referrer(referrer: str | None) -> str
        Derive the click source label from an HTTP referrer

Example:
    Typical usage inside a view handling a redirect:

        >>> from linkshortener.utils.helpers import get_short_url, shortcode_from_path
        >>> get_short_url('https://sho.rt/', 'abc123')
        'https://sho.rt/abc123'
        >>> shortcode_from_path('https://sho.rt/abc123')
        'abc123'
        >>> source_from_referrer('https://news.ycombinator.com/item?id=1')
        'news.ycombinator.com'
        >>> source_from_referrer(None)
        'direct'
"""

from urllib.parse import urlsplit, unquote

from linkshortener.utils.constants import DIRECT_SOURCE


def is_valid_url(url: str) -> bool:
    """Check that a string parses as an absolute URL

    An absolute URL has a scheme and a network location, e.g.
    'https://example.com/path'. Whitespace anywhere in the string is rejected.

    Args:
        url (str): candidate URL

    Returns:
        bool: True if the URL is absolute and well-formed, False otherwise.

    Example:
        >>> is_valid_url('https://example.com')
        True
        >>> is_valid_url('example.com')
        False
    """
    if not isinstance(url, str) or not url or any(c.isspace() for c in url):
        return False

    try:
        components = urlsplit(url)
        # Accessing .port validates the port range and raises ValueError otherwise
        components.port
    except ValueError:
        return False

    return bool(components.scheme) and bool(components.hostname)


def get_short_url(origin: str, shortcode: str) -> str:
    """Get string representation of shortened URL

    Args:
        origin (str): public origin the registry is served from, e.g. 'https://sho.rt'
        shortcode (str): shortcode

    Returns:
        str: short url string representation, '<origin>/<shortcode>'
    """
    return f'{origin.rstrip("/")}/{shortcode}'


def shortcode_from_path(path: str) -> str | None:
    """Extract the shortcode from a short URL or request path

    The origin (if any), query string and fragment are stripped and the first
    path segment is returned.

    Args:
        path (str): full short URL ('https://sho.rt/abc123') or path ('/abc123')

    Returns:
        str | None: the shortcode, or None if the path is empty.

    Example:
        >>> shortcode_from_path('/abc123?utm_source=x')
        'abc123'
        >>> shortcode_from_path('/') is None
        True
    """
    segments = [segment for segment in urlsplit(path).path.split('/') if segment]
    if not segments:
        return None
    return unquote(segments[0])


def source_from_referrer(referrer: str | None) -> str:
    """Derive the click source label from an HTTP referrer

    Args:
        referrer (str | None): value of the Referer header (or document.referrer)

    Returns:
        str: the referrer's hostname, or 'direct' if there is no usable referrer.
    """
    if not referrer:
        return DIRECT_SOURCE

    try:
        hostname = urlsplit(referrer).hostname
    except ValueError:
        return DIRECT_SOURCE
    return hostname or DIRECT_SOURCE
