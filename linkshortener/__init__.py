"""In-process URL shortener: short-code registry with click analytics."""

from linkshortener.registry import Registry
from linkshortener.models import UrlRecordModel, ClickEventModel, UrlSubmission


__version__ = '0.1.0'

__all__ = [
    'Registry',
    'UrlRecordModel',
    'ClickEventModel',
    'UrlSubmission',
]
