from linkshortener.dao.file.file_storage_dao import FileStorageDAO


__all__ = ['FileStorageDAO']
