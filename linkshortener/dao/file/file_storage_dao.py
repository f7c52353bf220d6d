"""File-backed storage DAO

Stores the serialized registry blob in a single file on local disk.

Responsibilities:
    - Read the blob from disk (None when the file doesn't exist yet);
    - Replace the blob atomically (write to a sibling temp file, then rename);
    - Translate OS-level failures into DataStoreError.

Example:
    >>> dao = FileStorageDAO(path='/var/lib/linkshortener/shortened_urls.json')
    >>> dao.save(b'[]')
    <FileStorageDAO>
    >>> dao.load()
    b'[]'
"""

import os
import logging
import tempfile
from pathlib import Path

from beartype import beartype

from linkshortener.dao.base import StorageBaseDAO
from linkshortener.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class FileStorageDAO(StorageBaseDAO):
    """Storage DAO keeping the registry blob in a local file.

    Attributes:
        path (Path):
            Location of the blob on disk. Parent directories are created on save.
    """

    @beartype
    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def load(self, **kwargs) -> bytes | None:
        """Read the registry blob from disk

        Returns:
            bytes | None: file contents, or None if the file doesn't exist.

        Raises:
            DataStoreError:
                If the file exists but can't be read.
        """
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            logger.debug('Storage file does not exist yet.', extra={'path': str(self.path)})
            return None
        except OSError as e:
            raise DataStoreError(f"Can't read registry file at {self.path}.") from e

    @beartype
    def save(self, data: bytes, **kwargs) -> 'FileStorageDAO':
        """Replace the registry blob on disk

        The blob is written to a temporary file in the same directory and then
        renamed over the target, so readers never observe a partial write.

        Args:
            data (bytes):
                The complete serialized registry.

        Returns:
            FileStorageDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If the file can't be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
            try:
                with os.fdopen(fd, 'wb') as f:
                    f.write(data)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise DataStoreError(f"Can't write registry file at {self.path}.") from e
        return self
