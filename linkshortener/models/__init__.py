from linkshortener.models.url_record_model import ClickEventModel, UrlRecordModel, UrlSubmission
from linkshortener.models.codec import encode_records, decode_records


__all__ = [
    'ClickEventModel',
    'UrlRecordModel',
    'UrlSubmission',
    'encode_records',
    'decode_records',
]
