from linkshortener.dao.base.storage_base_dao import StorageBaseDAO


__all__ = ['StorageBaseDAO']
