from typing import Any, TypeAlias


# Type aliases for Python dictionaries
AppConfiguration: TypeAlias = dict[str, Any]
StorageConfiguration: TypeAlias = dict[str, Any]
RegistryStatistics: TypeAlias = dict[str, int]
