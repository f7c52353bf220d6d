from linkshortener.dao.memory.memory_storage_dao import MemoryStorageDAO


__all__ = ['MemoryStorageDAO']
