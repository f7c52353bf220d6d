"""Shortcode generation and validation utilities

This module provides helpers for producing random Base62 shortcodes and for
validating user-chosen (custom) shortcodes.

Functions:
    generate_shortcode(rng=None, length=6) -> str:
        Generate a random shortcode suitable for use as a URL slug.

    generate_record_id(rng=None) -> str:
        Generate a random UUID4 string for a new record.

    is_valid_shortcode(shortcode) -> bool:
        Check that a shortcode is 3-10 Base62 characters.

Example:
    >>> import random
    >>> from linkshortener.utils import generate_shortcode
    >>> code = generate_shortcode(random.Random(42))
    >>> len(code)
    6
"""

import re
import uuid
import random
import string


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

SHORTCODE_PATTERN = re.compile(r'^[a-zA-Z0-9]{3,10}$')

# Shared fallback random source when none is injected
_system_random = random.SystemRandom()


def generate_shortcode(rng: random.Random | None = None, length: int = 6) -> str:
    """Generate a random Base62 shortcode.

    Uniqueness is NOT guaranteed here; the caller is responsible for
    retrying on collision.

    Args:
        rng (random.Random | None):
            Random source. Pass a seeded random.Random for deterministic output.
            Defaults to a cryptographically secure system source.

        length (int, optional):
            Length of the resulting shortcode. Defaults to 6.

    Returns:
        str: A random alphanumeric string of exactly `length` characters.

    Raises:
        ValueError: If length is not a positive integer.

    Example:
        >>> generate_shortcode(random.Random(7), length=6) == generate_shortcode(random.Random(7), length=6)
        True
    """
    if not isinstance(length, int) or isinstance(length, bool) or length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length!r}).')

    rng = rng or _system_random
    return ''.join(rng.choice(ALPHABET) for _ in range(length))


def generate_record_id(rng: random.Random | None = None) -> str:
    """Generate a random UUID4 string.

    Args:
        rng (random.Random | None):
            Random source. Pass a seeded random.Random for deterministic output.

    Returns:
        str: canonical UUID4 string, e.g. '0f1e2d3c-4b5a-4697-8877-665544332211'.
    """
    if rng is None:
        return str(uuid.uuid4())
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def is_valid_shortcode(shortcode: str) -> bool:
    """Check that a shortcode matches ^[a-zA-Z0-9]{3,10}$

    Args:
        shortcode (str): candidate shortcode.

    Returns:
        bool: True if valid, False otherwise (including non-string input).
    """
    # fullmatch: '$' alone would accept a trailing newline
    return isinstance(shortcode, str) and SHORTCODE_PATTERN.fullmatch(shortcode) is not None
