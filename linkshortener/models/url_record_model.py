from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ClickEventModel:
    """Represent a single successful resolution of a short URL.

    Attributes:
        timestamp (datetime):
            Moment the short URL was resolved (timezone-aware, UTC).
        source (str):
            Referring hostname, or 'direct' when there was no referrer.
        location (str):
            Coarse geolocation, e.g. 'Sofia, Bulgaria'.
            'Unknown Location' when the lookup failed.
        user_agent (str):
            User-agent string of the resolving client.

    Example:
        >>> from datetime import datetime, UTC
        >>> click = ClickEventModel(
        ...     timestamp=datetime(2025, 10, 15, tzinfo=UTC),
        ...     source='news.ycombinator.com',
        ...     location='Sofia, Bulgaria',
        ...     user_agent='Mozilla/5.0',
        ... )
        >>> click.source
        'news.ycombinator.com'
    """

    timestamp: datetime
    source: str
    location: str
    user_agent: str


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a shortened URL mapping together with its click history.

    Records are immutable. Recording a click produces a new record (see
    `with_click()`) so every reader holds a stable snapshot.

    Attributes:
        id (str):
            Opaque, globally unique identifier of the record.
        original_url (str):
            The original long URL that the shortcode resolves to.
        shortcode (str):
            The unique short identifier, 3-10 alphanumeric characters.
        created_at (datetime):
            Creation time (timezone-aware, UTC).
        expires_at (datetime):
            Moment after which the shortcode no longer resolves.
        clicks (tuple[ClickEventModel, ...]):
            Append-only click history in chronological order.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime(2025, 10, 15, tzinfo=UTC)
        >>> record = UrlRecordModel(
        ...     id='0f1e2d3c-4b5a-4697-8877-665544332211',
        ...     original_url='https://example.com/article/123',
        ...     shortcode='abc123',
        ...     created_at=now,
        ...     expires_at=now + timedelta(minutes=30),
        ... )
        >>> record.clicks
        ()
        >>> record.is_expired(now)
        False
    """

    id: str
    original_url: str
    shortcode: str
    created_at: datetime
    expires_at: datetime
    clicks: tuple[ClickEventModel, ...] = field(default_factory=tuple)

    def is_expired(self, now: datetime) -> bool:
        """True if the record no longer resolves at the given moment."""
        return self.expires_at <= now

    def with_click(self, click: ClickEventModel) -> 'UrlRecordModel':
        """Return a copy of this record with `click` appended to its history."""
        return replace(self, clicks=(*self.clicks, click))


@dataclass(frozen=True)
class UrlSubmission:
    """Represent a single request to shorten a URL.

    Attributes:
        original_url (str):
            The URL to shorten. Must parse as an absolute URL.
        validity_minutes (Optional[int | float]):
            Validity window in minutes. Defaults to 30 when omitted.
        custom_shortcode (Optional[str]):
            Preferred shortcode. A random 6-character code is generated when omitted.
    """

    original_url: str
    validity_minutes: Optional[int | float] = None
    custom_shortcode: Optional[str] = None
