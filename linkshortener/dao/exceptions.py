"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g. unreadable files or missing permissions).

    CorruptDataError:
        Raised when the stored registry blob cannot be decoded.

Example:
    >>> from linkshortener.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't write registry file at /var/lib/linkshortener/shortened_urls.json.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.DataStoreError: Can't write registry file at /var/lib/linkshortener/shortened_urls.json.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, missing permissions, full disk, etc.
    """

    pass


class CorruptDataError(DAOError):
    """Exception raised when stored data cannot be decoded into registry records."""

    pass
