"""Unit tests for shortcode utilities in shortener.py.

Test coverage includes:

1. Basic functionality
   - Ensures generate_shortcode() returns a string of the expected length.

2. Determinism
   - Same seed must always produce identical output.

3. Output format
   - All characters must belong to the Base62 alphabet.

4. Error handling
   - Invalid lengths raise ValueError.

5. Record ids
   - generate_record_id() returns canonical UUID4 strings, deterministic when seeded.

6. Shortcode validation
   - is_valid_shortcode() accepts 3-10 alphanumeric characters only.

7. Performance sanity
   - The function executes efficiently for a large number of iterations.
"""

import re
import time
import uuid
import random
import string

import pytest

from linkshortener.utils import generate_shortcode, generate_record_id, is_valid_shortcode


# -------------------------------
# 1. Basic functionality and type
# -------------------------------


@pytest.mark.parametrize('length', [3, 6, 10])
def test_generate_shortcode_returns_string(length):
    """Ensure generate_shortcode() returns a string of the expected length."""
    result = generate_shortcode(random.Random(1), length=length)
    assert isinstance(result, str)
    assert len(result) == length


def test_generate_shortcode_default_length():
    assert len(generate_shortcode()) == 6


# -------------------------------
# 2. Determinism
# -------------------------------


def test_generate_shortcode_is_deterministic():
    """Same seed should always produce the same sequence of shortcodes."""
    rng1, rng2 = random.Random(42), random.Random(42)
    assert [generate_shortcode(rng1) for _ in range(5)] == [generate_shortcode(rng2) for _ in range(5)]


def test_generate_shortcode_varies():
    """Consecutive draws from one source differ."""
    rng = random.Random(42)
    codes = {generate_shortcode(rng) for _ in range(100)}
    assert len(codes) == 100


# -------------------------------
# 3. Output format validation
# -------------------------------


def test_generate_shortcode_is_base62_safe():
    """Ensure output contains only Base62-safe characters."""
    alphabet = set(string.ascii_letters + string.digits)
    rng = random.Random(7)
    for _ in range(200):
        assert set(generate_shortcode(rng)) <= alphabet


# -------------------------------
# 4. Error handling
# -------------------------------


@pytest.mark.parametrize('length', [0, -1, 2.5, True, '6', None])
def test_invalid_length_raises_error(length):
    with pytest.raises(ValueError):
        generate_shortcode(random.Random(1), length=length)


# -------------------------------
# 5. Record ids
# -------------------------------


def test_generate_record_id_is_uuid4():
    for rng in (None, random.Random(3)):
        record_id = generate_record_id(rng)
        parsed = uuid.UUID(record_id)
        assert parsed.version == 4
        assert str(parsed) == record_id


def test_generate_record_id_is_deterministic_when_seeded():
    assert generate_record_id(random.Random(3)) == generate_record_id(random.Random(3))
    assert generate_record_id() != generate_record_id()


# -------------------------------
# 6. Shortcode validation
# -------------------------------


@pytest.mark.parametrize('shortcode', ['abc', 'abc123', 'ABCdef7890', '000'])
def test_valid_shortcodes(shortcode):
    assert is_valid_shortcode(shortcode)


@pytest.mark.parametrize('shortcode', ['', 'ab', 'abcdefghijk', 'abc-12', 'abc 12', 'abc123\n', 'ábc', None, 123])
def test_invalid_shortcodes(shortcode):
    assert not is_valid_shortcode(shortcode)


def test_generated_shortcodes_are_valid():
    rng = random.Random(11)
    assert all(is_valid_shortcode(generate_shortcode(rng)) for _ in range(100))
    assert re.fullmatch(r'[a-zA-Z0-9]{6}', generate_shortcode(rng))


# -------------------------------
# 7. Performance sanity check
# -------------------------------


@pytest.mark.parametrize('iterations', [40, 400, 4000])
def test_generate_shortcode_performance(iterations):
    """Ensure the function runs efficiently for multiple iterations."""
    rng = random.Random(0)
    start = time.perf_counter()
    for _ in range(iterations):
        generate_shortcode(rng)
    duration = time.perf_counter() - start
    assert duration < 1.0
