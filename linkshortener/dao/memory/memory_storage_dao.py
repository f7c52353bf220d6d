"""In-process storage DAO

Keeps the serialized registry blob in memory. Useful for tests and for
ephemeral sessions where nothing should outlive the process.

Example:
    >>> dao = MemoryStorageDAO()
    >>> dao.load() is None
    True
    >>> dao.save(b'[]').load()
    b'[]'
"""

from beartype import beartype

from linkshortener.dao.base import StorageBaseDAO


class MemoryStorageDAO(StorageBaseDAO):
    """Storage DAO holding the registry blob in a Python attribute.

    Attributes:
        data (bytes | None):
            The last saved blob, or the initial blob given at construction.
        saves (int):
            Number of successful save() calls.
    """

    @beartype
    def __init__(self, data: bytes | None = None):
        self.data = data
        self.saves = 0

    def load(self, **kwargs) -> bytes | None:
        return self.data

    @beartype
    def save(self, data: bytes, **kwargs) -> 'MemoryStorageDAO':
        self.data = data
        self.saves += 1
        return self
