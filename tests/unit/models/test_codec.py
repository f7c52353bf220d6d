"""Unit tests for the registry JSON codec in codec.py.

Test coverage includes:

1. Encoding
   - camelCase keys and UTC 'Z' timestamps.

2. Decoding
   - Restores records with their click history.
   - Missing click history decodes as empty.
   - Offset and naive timestamps are normalized to UTC.

3. Corrupt data
   - Malformed JSON, wrong top-level shape and missing fields raise CorruptDataError.
   - Records the registry could not hold raise CorruptDataError: malformed or
     duplicate shortcodes, duplicate ids, non-string fields, invalid URLs and
     records expiring before they were created.
"""

import json
from dataclasses import replace
from datetime import datetime, timedelta, UTC

import pytest

from linkshortener.models import UrlRecordModel, ClickEventModel, encode_records, decode_records
from linkshortener.dao.exceptions import CorruptDataError


NOW = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def record() -> UrlRecordModel:
    return UrlRecordModel(
        id='0f1e2d3c-4b5a-4697-8877-665544332211',
        original_url='https://example.com/article/123?ref=a&b=c',
        shortcode='abc123',
        created_at=NOW,
        expires_at=NOW + timedelta(minutes=30),
        clicks=(
            ClickEventModel(
                timestamp=NOW + timedelta(minutes=5),
                source='direct',
                location='Sofia, Bulgaria',
                user_agent='Mozilla/5.0',
            ),
        ),
    )


# -------------------------------
# 1. Encoding
# -------------------------------


def test_encode_records(record):
    payload = json.loads(encode_records([record]))

    assert payload == [
        {
            'id': '0f1e2d3c-4b5a-4697-8877-665544332211',
            'originalUrl': 'https://example.com/article/123?ref=a&b=c',
            'shortCode': 'abc123',
            'createdAt': '2025-10-15T12:00:00.000000Z',
            'expiresAt': '2025-10-15T12:30:00.000000Z',
            'clicks': [
                {
                    'timestamp': '2025-10-15T12:05:00.000000Z',
                    'source': 'direct',
                    'location': 'Sofia, Bulgaria',
                    'userAgent': 'Mozilla/5.0',
                }
            ],
        }
    ]


def test_encode_empty_collection():
    assert encode_records([]) == b'[]'


# -------------------------------
# 2. Decoding
# -------------------------------


def test_decode_restores_records(record):
    other = replace(record, id='a1b2c3d4-0000-4000-8000-000000000000', shortcode='Promo2025', clicks=())
    assert decode_records(encode_records([record, other])) == [record, other]


def test_decode_accepts_str():
    assert decode_records('[]') == []


def test_decode_missing_clicks():
    data = json.dumps(
        [
            {
                'id': 'x',
                'originalUrl': 'https://example.com',
                'shortCode': 'abc',
                'createdAt': '2025-10-15T12:00:00Z',
                'expiresAt': '2025-10-15T12:30:00Z',
            }
        ]
    )
    [decoded] = decode_records(data)
    assert decoded.clicks == ()


def test_decode_normalizes_timestamps_to_utc():
    data = json.dumps(
        [
            {
                'id': 'x',
                'originalUrl': 'https://example.com',
                'shortCode': 'abc',
                'createdAt': '2025-10-15T15:00:00+03:00',
                'expiresAt': '2025-10-15T12:30:00',
                'clicks': [],
            }
        ]
    )
    [decoded] = decode_records(data)

    assert decoded.created_at == NOW
    assert decoded.created_at.utcoffset() == timedelta(0)
    assert decoded.expires_at == NOW + timedelta(minutes=30)


# -------------------------------
# 3. Corrupt data
# -------------------------------


@pytest.mark.parametrize(
    'data',
    [
        b'not json',
        b'{"id": "x"}',
        b'[{"id": "x"}]',
        b'[42]',
        b'[{"id": "x", "originalUrl": "u", "shortCode": "abc", "createdAt": "yesterday", "expiresAt": "today"}]',
        b'\xff\xfe\x00',
    ],
)
def test_decode_corrupt_data(data):
    with pytest.raises(CorruptDataError):
        decode_records(data)


def stored(**overrides) -> dict:
    item = {
        'id': 'x',
        'originalUrl': 'https://example.com',
        'shortCode': 'abc',
        'createdAt': '2025-10-15T12:00:00Z',
        'expiresAt': '2025-10-15T12:30:00Z',
        'clicks': [],
    }
    item.update(overrides)
    return item


@pytest.mark.parametrize(
    'item',
    [
        stored(shortCode='no-pe!'),
        stored(shortCode='ab'),
        stored(shortCode='abcdefghijk'),
        stored(shortCode=123456),
        stored(id=7),
        stored(originalUrl=None),
        stored(originalUrl='example.com'),
        stored(expiresAt='2025-10-15T11:59:59Z'),
        stored(expiresAt='2025-10-15T12:00:00Z'),
        stored(clicks={'timestamp': '2025-10-15T12:05:00Z'}),
        stored(clicks=[{'timestamp': '2025-10-15T12:05:00Z', 'source': 'direct', 'location': None, 'userAgent': 'Mozilla/5.0'}]),
    ],
)
def test_decode_rejects_invalid_record(item):
    with pytest.raises(CorruptDataError):
        decode_records(json.dumps([item]))


def test_decode_rejects_duplicate_shortcodes():
    data = json.dumps([stored(id='first'), stored(id='second')])

    with pytest.raises(CorruptDataError, match='Duplicate shortcode'):
        decode_records(data)


def test_decode_rejects_duplicate_ids():
    data = json.dumps([stored(shortCode='abc'), stored(shortCode='xyz')])

    with pytest.raises(CorruptDataError, match='Duplicate record id'):
        decode_records(data)
