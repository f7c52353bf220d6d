"""Short-code registry

The Registry maps long URLs to short, unique codes, resolves codes back to
their URL, and records a click event for every successful resolution.

Responsibilities:
    - Validate submissions (URL, custom shortcode, validity window);
    - Generate random shortcodes and enforce their uniqueness;
    - Track expiry (expired records stop resolving but keep their code);
    - Append click events (time, source, coarse location, user agent);
    - Persist the whole collection to a Storage DAO after every mutation.

The collection is read from storage once, when the Registry is constructed,
and fully rewritten on every mutating call. The Registry is not thread-safe:
construct one per process/session and hand it to callers. Two registries
sharing one storage slot race last-writer-wins.

Classes:
    Registry:
        In-process short-code registry backed by a StorageBaseDAO.

Example:
    >>> from linkshortener.dao.memory import MemoryStorageDAO
    >>> from linkshortener.models import UrlSubmission
    >>> registry = Registry(storage=MemoryStorageDAO())
    >>> [record] = registry.create_batch([
    ...     UrlSubmission(original_url='https://example.com', validity_minutes=1, custom_shortcode='abc123'),
    ... ])
    >>> record.shortcode
    'abc123'
    >>> registry.resolve('abc123', source='direct')
    'https://example.com'
    >>> len(registry.list()[0].clicks)
    1
"""

import math
import random
import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, UTC
from typing import Optional

from beartype import beartype

from linkshortener.models import UrlRecordModel, ClickEventModel, UrlSubmission, encode_records, decode_records
from linkshortener.dao.base import StorageBaseDAO
from linkshortener.dao.exceptions import DataStoreError, CorruptDataError
from linkshortener.geolocation import BaseGeolocator
from linkshortener.types import RegistryStatistics
from linkshortener.exceptions import (
    InvalidUrlError,
    InvalidShortcodeError,
    ShortcodeTakenError,
    InvalidValidityError,
    TooManyRequestsError,
    NotFoundError,
)
from linkshortener.utils.helpers import is_valid_url
from linkshortener.utils.shortener import generate_shortcode, generate_record_id, is_valid_shortcode
from linkshortener.utils.constants import (
    MAX_BATCH_SIZE,
    DEFAULT_VALIDITY_MINUTES,
    DEFAULT_SHORTCODE_LENGTH,
    MIN_SHORTCODE_LENGTH,
    MAX_SHORTCODE_LENGTH,
    DIRECT_SOURCE,
    UNKNOWN_LOCATION,
    UNKNOWN_USER_AGENT,
)


logger = logging.getLogger(__name__)

# Registry.list shadows the builtin inside the class body
UrlRecordList = list[UrlRecordModel]


class Registry:
    """In-process short-code registry

    Attributes:
        storage (StorageBaseDAO):
            Durable key-value slot holding the serialized collection.
        geolocator (BaseGeolocator | None):
            Best-effort location lookup for clicks. If None, every click is
            recorded with 'Unknown Location' and no lookup is made.
        rng (random.Random | None):
            Random source for shortcodes and record ids. Pass a seeded
            random.Random for deterministic output.
        max_batch_size (int):
            Maximum number of submissions accepted by create_batch().
        default_validity_minutes (int | float):
            Validity window applied when a submission doesn't specify one.
        shortcode_length (int):
            Length of generated shortcodes.
        user_agent (str):
            User agent recorded when resolve() isn't given one.

    Methods:
        create_batch(submissions) -> list[UrlRecordModel]
        resolve(shortcode, source='direct', user_agent=None) -> str
        list() -> list[UrlRecordModel]
        delete(record_id) -> None
        find(shortcode) -> UrlRecordModel | None
        list_active() -> list[UrlRecordModel]
        statistics() -> dict[str, int]
    """

    @beartype
    def __init__(
        self,
        storage: StorageBaseDAO,
        geolocator: Optional[BaseGeolocator] = None,
        rng: Optional[random.Random] = None,
        max_batch_size: int = MAX_BATCH_SIZE,
        default_validity_minutes: int | float = DEFAULT_VALIDITY_MINUTES,
        shortcode_length: int = DEFAULT_SHORTCODE_LENGTH,
        user_agent: str = UNKNOWN_USER_AGENT,
    ):
        if max_batch_size <= 0:
            raise ValueError(f'Max batch size must be a positive integer (given value: {max_batch_size}).')
        if not math.isfinite(default_validity_minutes) or default_validity_minutes <= 0:
            raise ValueError(f'Default validity must be a positive number of minutes (given value: {default_validity_minutes}).')
        if not MIN_SHORTCODE_LENGTH <= shortcode_length <= MAX_SHORTCODE_LENGTH:
            raise ValueError(
                f'Shortcode length must be between {MIN_SHORTCODE_LENGTH} and {MAX_SHORTCODE_LENGTH} (given value: {shortcode_length}).'
            )

        self.storage = storage
        self.geolocator = geolocator
        self.rng = rng
        self.max_batch_size = max_batch_size
        self.default_validity_minutes = default_validity_minutes
        self.shortcode_length = shortcode_length
        self.user_agent = user_agent

        self._records: UrlRecordList = self._load()

    # -------------------------------
    # Operations
    # -------------------------------

    @beartype
    def create_batch(self, submissions: Sequence[UrlSubmission]) -> UrlRecordList:
        """Create short URLs for a batch of submissions

        The batch is atomic: every submission is validated (in input order)
        before any record is committed. The first invalid submission aborts
        the whole call and leaves the registry untouched.

        Args:
            submissions (Sequence[UrlSubmission]):
                At most `max_batch_size` submissions.

        Returns:
            list[UrlRecordModel]: newly created records, in input order.

        Raises:
            TooManyRequestsError:
                If more than `max_batch_size` submissions are given.
            InvalidUrlError:
                If a URL does not parse as an absolute URL.
            InvalidShortcodeError:
                If a custom shortcode is not 3-10 alphanumeric characters.
            ShortcodeTakenError:
                If a custom shortcode is owned by a held record (expired or not)
                or by an earlier submission of the same batch.
            InvalidValidityError:
                If a validity window is not a positive, finite number of minutes.
        """
        logger.info('Creating short URLs.', extra={'count': len(submissions)})

        if len(submissions) > self.max_batch_size:
            logger.error(
                'Batch exceeds the maximum batch size.',
                extra={'count': len(submissions), 'maxBatchSize': self.max_batch_size},
            )
            raise TooManyRequestsError(max_batch_size=self.max_batch_size)

        taken_codes = {record.shortcode for record in self._records}
        taken_ids = {record.id for record in self._records}
        staged: UrlRecordList = []

        for submission in submissions:
            try:
                record = self._build_record(submission, taken_codes, taken_ids)
            except (InvalidUrlError, InvalidShortcodeError, ShortcodeTakenError, InvalidValidityError) as e:
                logger.error(
                    'Failed to create short URL. Batch rejected.',
                    extra={'originalUrl': submission.original_url, 'errorCode': e.error_code, 'error': e.message},
                )
                raise
            taken_codes.add(record.shortcode)
            taken_ids.add(record.id)
            staged.append(record)

        if not staged:
            return []

        self._records.extend(staged)
        for record in staged:
            logger.info(
                'Created short URL.',
                extra={
                    'shortcode': record.shortcode,
                    'originalUrl': record.original_url,
                    'expiresAt': record.expires_at.isoformat(),
                },
            )
        self._save()
        return staged

    @beartype
    def resolve(self, shortcode: str, source: str = DIRECT_SOURCE, user_agent: Optional[str] = None) -> str:
        """Resolve a shortcode to its original URL and record a click

        Args:
            shortcode (str):
                Exact shortcode to resolve (case-sensitive).
            source (str):
                Referring hostname, 'direct' by default.
            user_agent (Optional[str]):
                Resolving client's user agent. Defaults to the registry's `user_agent`.

        Returns:
            str: the original URL, unchanged.

        Raises:
            NotFoundError:
                If no record owns the shortcode, or the record has expired.
                Expired records are indistinguishable from absent ones.
        """
        logger.info('Redirect attempt.', extra={'shortcode': shortcode, 'source': source})

        index = self._index_of(shortcode)
        if index is None:
            logger.warning('Short code not found.', extra={'shortcode': shortcode})
            raise NotFoundError()

        now = datetime.now(UTC)
        record = self._records[index]
        if record.is_expired(now):
            logger.warning('Short URL expired.', extra={'shortcode': shortcode, 'expiresAt': record.expires_at.isoformat()})
            raise NotFoundError()

        location = self._locate()
        click = ClickEventModel(
            timestamp=now,
            source=source,
            location=location,
            user_agent=user_agent if user_agent is not None else self.user_agent,
        )
        record = record.with_click(click)
        self._records[index] = record
        self._save()

        logger.info(
            'Successful redirect.',
            extra={'shortcode': shortcode, 'originalUrl': record.original_url, 'totalClicks': len(record.clicks)},
        )
        return record.original_url

    def list(self) -> UrlRecordList:
        """Return every held record (expired included), newest first

        Returns:
            list[UrlRecordModel]: a new list; records themselves are immutable.
        """
        return sorted(self._records, key=lambda record: record.created_at, reverse=True)

    @beartype
    def delete(self, record_id: str) -> None:
        """Delete the record with the given id

        Deleting an unknown id is a logged no-op. Storage is only rewritten
        when a record was actually removed. Deletion frees the record's
        shortcode for reuse.

        Args:
            record_id (str): identifier of the record to delete.
        """
        remaining = [record for record in self._records if record.id != record_id]
        if len(remaining) == len(self._records):
            logger.warning('URL not found for deletion.', extra={'recordId': record_id})
            return

        self._records = remaining
        logger.info('Deleted URL.', extra={'recordId': record_id})
        self._save()

    @beartype
    def find(self, shortcode: str) -> UrlRecordModel | None:
        """Return the live record owning `shortcode` without recording a click

        Returns:
            UrlRecordModel | None: the record, or None if missing or expired.
        """
        index = self._index_of(shortcode)
        if index is None:
            return None
        record = self._records[index]
        return None if record.is_expired(datetime.now(UTC)) else record

    def list_active(self) -> UrlRecordList:
        """Return records which have not expired yet, in insertion order"""
        now = datetime.now(UTC)
        return [record for record in self._records if not record.is_expired(now)]

    def statistics(self) -> RegistryStatistics:
        """Summarize the registry

        Returns:
            dict[str, int]: total_links, active_links, expired_links and total_clicks.
        """
        now = datetime.now(UTC)
        active = sum(1 for record in self._records if not record.is_expired(now))
        return {
            'total_links': len(self._records),
            'active_links': active,
            'expired_links': len(self._records) - active,
            'total_clicks': sum(len(record.clicks) for record in self._records),
        }

    # -------------------------------
    # Internals
    # -------------------------------

    def _build_record(self, submission: UrlSubmission, taken_codes: set[str], taken_ids: set[str]) -> UrlRecordModel:
        """Validate a single submission and build (but don't commit) its record"""
        if not is_valid_url(submission.original_url):
            raise InvalidUrlError()

        shortcode = submission.custom_shortcode
        if shortcode:
            if not is_valid_shortcode(shortcode):
                raise InvalidShortcodeError()
            if shortcode in taken_codes:
                raise ShortcodeTakenError()
        else:
            # NOTE: unbounded retry, the 62^6 space makes a long unlucky streak vanishingly rare
            shortcode = generate_shortcode(self.rng, length=self.shortcode_length)
            while shortcode in taken_codes:
                logger.debug('Generated shortcode collides. Retrying.', extra={'shortcode': shortcode})
                shortcode = generate_shortcode(self.rng, length=self.shortcode_length)

        created_at = datetime.now(UTC)
        expires_at = self._expiry(created_at, submission.validity_minutes)

        record_id = generate_record_id(self.rng)
        while record_id in taken_ids:
            record_id = generate_record_id(self.rng)

        return UrlRecordModel(
            id=record_id,
            original_url=submission.original_url,
            shortcode=shortcode,
            created_at=created_at,
            expires_at=expires_at,
        )

    def _expiry(self, created_at: datetime, validity_minutes: int | float | None) -> datetime:
        if validity_minutes is None:
            validity_minutes = self.default_validity_minutes

        if (
            isinstance(validity_minutes, bool)
            or not isinstance(validity_minutes, (int, float))
            or not math.isfinite(validity_minutes)
            or validity_minutes <= 0
        ):
            raise InvalidValidityError()

        try:
            expires_at = created_at + timedelta(minutes=validity_minutes)
        except OverflowError as e:
            raise InvalidValidityError() from e

        # Sub-microsecond windows would round to a zero-length validity
        if expires_at <= created_at:
            raise InvalidValidityError()
        return expires_at

    def _index_of(self, shortcode: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.shortcode == shortcode:
                return index
        return None

    def _locate(self) -> str:
        """Best-effort location label for a click; never raises"""
        if self.geolocator is None:
            return UNKNOWN_LOCATION

        try:
            return self.geolocator.locate().label()
        except Exception:
            # Any lookup failure only degrades the recorded location
            logger.warning('Failed to get location info.', exc_info=True)
            return UNKNOWN_LOCATION

    def _load(self) -> UrlRecordList:
        """Read the collection from storage; failures yield an empty collection"""
        try:
            data = self.storage.load()
        except DataStoreError:
            logger.exception('Failed to load URLs from storage. Starting with an empty registry.')
            return []

        if data is None:
            logger.debug('Storage is empty. Starting with an empty registry.')
            return []

        try:
            records = decode_records(data)
        except CorruptDataError:
            logger.exception('Stored URLs are corrupt. Starting with an empty registry.')
            return []

        logger.info('Loaded URLs from storage.', extra={'count': len(records)})
        return records

    def _save(self) -> bool:
        """Write the collection to storage; failures are logged, not raised"""
        try:
            self.storage.save(encode_records(self._records))
        except DataStoreError:
            logger.exception('Failed to save URLs to storage.', extra={'count': len(self._records)})
            return False

        logger.info('Saved URLs to storage.', extra={'count': len(self._records)})
        return True
