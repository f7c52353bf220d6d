"""JSON codec for the registry's durable key-value blob

The whole collection of UrlRecordModel instances is stored as a single JSON
array. Keys are camelCase and timestamps are ISO-8601 strings in UTC, e.g.:

    [
        {
            "id": "0f1e2d3c-4b5a-4697-8877-665544332211",
            "originalUrl": "https://example.com",
            "shortCode": "abc123",
            "createdAt": "2025-10-15T12:00:00.000000Z",
            "expiresAt": "2025-10-15T12:30:00.000000Z",
            "clicks": [
                {
                    "timestamp": "2025-10-15T12:05:00.000000Z",
                    "source": "direct",
                    "location": "Sofia, Bulgaria",
                    "userAgent": "Mozilla/5.0"
                }
            ]
        }
    ]

Functions:
    encode_records(records) -> bytes
        Serialize records into the stored JSON representation.
    decode_records(data) -> list[UrlRecordModel]
        Parse the stored JSON representation back into records.
        Raises CorruptDataError on malformed input or on records the
        registry could not hold.
"""

import json
from datetime import datetime, UTC
from collections.abc import Iterable
from typing import Any

from linkshortener.models.url_record_model import ClickEventModel, UrlRecordModel
from linkshortener.dao.exceptions import CorruptDataError
from linkshortener.utils.helpers import is_valid_url
from linkshortener.utils.shortener import is_valid_shortcode


def _format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).isoformat(timespec='microseconds').replace('+00:00', 'Z')


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    # Naive timestamps are assumed to be UTC
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _click_to_dict(click: ClickEventModel) -> dict[str, Any]:
    return {
        'timestamp': _format_timestamp(click.timestamp),
        'source': click.source,
        'location': click.location,
        'userAgent': click.user_agent,
    }


def _record_to_dict(record: UrlRecordModel) -> dict[str, Any]:
    return {
        'id': record.id,
        'originalUrl': record.original_url,
        'shortCode': record.shortcode,
        'createdAt': _format_timestamp(record.created_at),
        'expiresAt': _format_timestamp(record.expires_at),
        'clicks': [_click_to_dict(click) for click in record.clicks],
    }


def _string_field(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string (given type: {type(value).__name__}).")
    return value


def _click_from_dict(data: dict[str, Any]) -> ClickEventModel:
    return ClickEventModel(
        timestamp=_parse_timestamp(data['timestamp']),
        source=_string_field(data, 'source'),
        location=_string_field(data, 'location'),
        user_agent=_string_field(data, 'userAgent'),
    )


def _record_from_dict(data: dict[str, Any]) -> UrlRecordModel:
    shortcode = _string_field(data, 'shortCode')
    if not is_valid_shortcode(shortcode):
        raise ValueError(f'Invalid shortcode {shortcode!r}.')

    original_url = _string_field(data, 'originalUrl')
    if not is_valid_url(original_url):
        raise ValueError(f'Invalid URL {original_url!r} for shortcode {shortcode!r}.')

    created_at = _parse_timestamp(data['createdAt'])
    expires_at = _parse_timestamp(data['expiresAt'])
    if expires_at <= created_at:
        raise ValueError(f'Shortcode {shortcode!r} expires before it was created.')

    clicks = data.get('clicks', [])
    if not isinstance(clicks, list):
        raise TypeError(f'Clicks of shortcode {shortcode!r} must be a list (given type: {type(clicks).__name__}).')

    return UrlRecordModel(
        id=_string_field(data, 'id'),
        original_url=original_url,
        shortcode=shortcode,
        created_at=created_at,
        expires_at=expires_at,
        clicks=tuple(_click_from_dict(click) for click in clicks),
    )


def _check_unique(records: list[UrlRecordModel]) -> None:
    shortcodes: set[str] = set()
    ids: set[str] = set()
    for record in records:
        if record.shortcode in shortcodes:
            raise ValueError(f'Duplicate shortcode {record.shortcode!r}.')
        if record.id in ids:
            raise ValueError(f'Duplicate record id {record.id!r}.')
        shortcodes.add(record.shortcode)
        ids.add(record.id)


def encode_records(records: Iterable[UrlRecordModel]) -> bytes:
    """Serialize records into the JSON blob kept in durable storage

    Args:
        records (Iterable[UrlRecordModel]):
            Records to serialize, in the order they are held.

    Returns:
        bytes: UTF-8 encoded JSON array.
    """
    return json.dumps([_record_to_dict(record) for record in records]).encode('utf-8')


def decode_records(data: bytes | str) -> list[UrlRecordModel]:
    """Parse the JSON blob kept in durable storage

    Args:
        data (bytes | str):
            JSON array as produced by encode_records().

    Returns:
        list[UrlRecordModel]: decoded records, in stored order.

    Raises:
        CorruptDataError:
            If the blob is not valid JSON, a record misses required fields or
            holds values of the wrong type, a shortcode is malformed, a record
            doesn't expire after its creation, or two records share a
            shortcode or an id.
    """
    try:
        payload = json.loads(data)
        if not isinstance(payload, list):
            raise TypeError(f'Expected a JSON array (given type: {type(payload).__name__}).')
        records = [_record_from_dict(item) for item in payload]
        _check_unique(records)
        return records
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise CorruptDataError(f'Stored registry data is corrupt: {e}') from e
