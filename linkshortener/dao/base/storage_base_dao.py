"""Abstract base class for registry storage data access objects (DAOs).

The registry keeps its whole collection of URL records in a single durable
key-value slot. This class establishes a consistent contract for all storage
implementations, regardless of the underlying mechanism (in-process memory or
a local file).

Responsibilities:
    - Provide an interface for reading and writing the serialized registry blob.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.file import FileStorageDAO
        >>> from linkshortener.models import encode_records, decode_records

        >>> dao = FileStorageDAO(path='/tmp/shortened_urls.json')
        >>> dao.save(encode_records([]))
        <FileStorageDAO>
        >>> decode_records(dao.load())
        []

NOTE:
    - The slot is fully rewritten on every save. Two writers sharing the same
      slot race last-writer-wins; DAOs do not attempt to merge.
"""

from abc import ABC, abstractmethod


class StorageBaseDAO(ABC):
    """Interface for registry storage data access objects (DAOs).

    Methods:
        load(**kwargs) -> bytes | None:
            Read the serialized registry blob.
            Returns None if nothing has been saved yet.
            Raises DataStoreError on read failure.

        save(data: bytes, **kwargs) -> StorageBaseDAO:
            Replace the serialized registry blob.
            Raises DataStoreError on write failure.

    Subclassing:
        Datastore-specific implementations (e.g., FileStorageDAO or
        MemoryStorageDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def load(self, **kwargs) -> bytes | None:
        """Read the serialized registry blob from the data store.

        Args:
            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bytes | None: The stored blob, or None if the slot is empty.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def save(self, data: bytes, **kwargs) -> 'StorageBaseDAO':
        """Replace the serialized registry blob in the data store.

        Args:
            data (bytes):
                The complete serialized registry.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            StorageBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
